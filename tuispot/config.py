"""User configuration, persisted user state and the paths they live in."""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field, fields
from datetime import timedelta
from pathlib import Path
from typing import Any, Callable, Mapping, Optional

import platformdirs

from tuispot.command import RepeatSetting, SortDirection, SortKey
from tuispot.model.playable import Playable, playable_from_dict, playable_to_dict
from tuispot.serialization import CBOR, TOML, SerializationError

logger = logging.getLogger(__name__)

_APP_NAME = "tuispot"
_USER_STATE_FILE = "userstate.cbor"
_MAX_VOLUME = 2**16 - 1


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r}") from None


def _mapping(data: Any, what: str) -> Mapping[str, Any]:
    if not isinstance(data, Mapping):
        raise ValueError(f"{what} must be a table, got {type(data).__name__}")
    return data


def _typed(name: str, value: Any, types: tuple) -> Any:
    if value is None:
        return None
    if isinstance(value, bool) and bool not in types:
        raise ValueError(f"invalid value for {name!r}: {value!r}")
    if not isinstance(value, types):
        raise ValueError(f"invalid value for {name!r}: {value!r}")
    return value


def _repeat_from(value: Any) -> RepeatSetting:
    try:
        return RepeatSetting(value)
    except ValueError:
        raise ValueError(f"invalid repeat setting: {value!r}") from None


@dataclass
class ConfigTheme:
    """Colour names for each part of the interface; unset parts use defaults."""

    background: Optional[str] = None
    primary: Optional[str] = None
    secondary: Optional[str] = None
    title: Optional[str] = None
    playing: Optional[str] = None
    playing_selected: Optional[str] = None
    playing_bg: Optional[str] = None
    highlight: Optional[str] = None
    highlight_bg: Optional[str] = None
    error: Optional[str] = None
    error_bg: Optional[str] = None
    statusbar_progress: Optional[str] = None
    statusbar_progress_bg: Optional[str] = None
    statusbar: Optional[str] = None
    statusbar_bg: Optional[str] = None
    cmdline: Optional[str] = None
    cmdline_bg: Optional[str] = None
    search_match: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Any) -> ConfigTheme:
        data = _mapping(data, "theme")
        return cls(
            **{f.name: _typed(f.name, data.get(f.name), (str,)) for f in fields(cls)}
        )

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


_BOOL = (bool,)
_INT = (int,)
_STR = (str,)
_FLOAT = (int, float)

_SIMPLE_FIELDS: dict[str, tuple] = {
    "initial_screen": _STR,
    "default_keybindings": _BOOL,
    "use_nerdfont": _BOOL,
    "flip_status_indicators": _BOOL,
    "audio_cache": _BOOL,
    "audio_cache_size": _INT,
    "backend": _STR,
    "backend_device": _STR,
    "volnorm": _BOOL,
    "volnorm_pregain": _FLOAT,
    "notify": _BOOL,
    "bitrate": _INT,
    "album_column": _BOOL,
    "gapless": _BOOL,
    "shuffle": _BOOL,
    "cover_max_scale": _FLOAT,
}


@dataclass
class ConfigValues:
    """Settings from the configuration file; ``None`` means not set."""

    command_key: Optional[str] = None
    initial_screen: Optional[str] = None
    default_keybindings: Optional[bool] = None
    keybindings: Optional[dict[str, str]] = None
    theme: Optional[ConfigTheme] = None
    use_nerdfont: Optional[bool] = None
    flip_status_indicators: Optional[bool] = None
    audio_cache: Optional[bool] = None
    audio_cache_size: Optional[int] = None
    backend: Optional[str] = None
    backend_device: Optional[str] = None
    volnorm: Optional[bool] = None
    volnorm_pregain: Optional[float] = None
    notify: Optional[bool] = None
    bitrate: Optional[int] = None
    album_column: Optional[bool] = None
    gapless: Optional[bool] = None
    shuffle: Optional[bool] = None
    repeat: Optional[RepeatSetting] = None
    cover_max_scale: Optional[float] = None

    @classmethod
    def from_dict(cls, data: Any) -> ConfigValues:
        """Build settings from a parsed file; raises ``ValueError`` on bad values."""
        data = _mapping(data, "configuration")
        values = {name: _typed(name, data.get(name), types) for name, types in _SIMPLE_FIELDS.items()}
        for name in ("volnorm_pregain", "cover_max_scale"):
            if values[name] is not None:
                values[name] = float(values[name])

        command_key = _typed("command_key", data.get("command_key"), _STR)
        if command_key is not None and len(command_key) != 1:
            raise ValueError(f"command_key must be a single character: {command_key!r}")

        keybindings = data.get("keybindings")
        if keybindings is not None:
            keybindings = dict(_mapping(keybindings, "keybindings"))
            for key, commands in keybindings.items():
                if not isinstance(key, str) or not isinstance(commands, str):
                    raise ValueError(f"invalid keybinding: {key!r} = {commands!r}")

        theme = data.get("theme")
        repeat = data.get("repeat")
        return cls(
            command_key=command_key,
            keybindings=keybindings,
            theme=None if theme is None else ConfigTheme.from_dict(theme),
            repeat=None if repeat is None else _repeat_from(repeat),
            **values,
        )

    def to_dict(self) -> dict[str, Any]:
        """The settings as plain data; unset settings are ``None``."""
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        data["keybindings"] = None if self.keybindings is None else dict(self.keybindings)
        data["theme"] = None if self.theme is None else self.theme.to_dict()
        data["repeat"] = None if self.repeat is None else self.repeat.value
        return data


_SORT_KEY_NAMES = {key.value.capitalize(): key for key in SortKey}
_SORT_DIRECTION_NAMES = {d.value.capitalize(): d for d in SortDirection}


@dataclass
class SortingOrder:
    """How a playlist's tracks are ordered."""

    key: SortKey
    direction: SortDirection

    @classmethod
    def from_dict(cls, data: Any) -> SortingOrder:
        data = _mapping(data, "sorting order")
        key, direction = _require(data, "key"), _require(data, "direction")
        if key not in _SORT_KEY_NAMES:
            raise ValueError(f"invalid sort key: {key!r}")
        if direction not in _SORT_DIRECTION_NAMES:
            raise ValueError(f"invalid sort direction: {direction!r}")
        return cls(_SORT_KEY_NAMES[key], _SORT_DIRECTION_NAMES[direction])

    def to_dict(self) -> dict[str, Any]:
        return {
            "key": self.key.value.capitalize(),
            "direction": self.direction.value.capitalize(),
        }


def _int_list(value: Any, what: str) -> list[int]:
    if not isinstance(value, list) or any(
        isinstance(i, bool) or not isinstance(i, int) for i in value
    ):
        raise ValueError(f"{what} must be a list of integers")
    return list(value)


@dataclass
class QueueState:
    """The queue as it was when the program last quit."""

    current_track: Optional[int] = None
    random_order: Optional[list[int]] = None
    track_progress: timedelta = field(default_factory=timedelta)
    queue: list[Playable] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Any) -> QueueState:
        data = _mapping(data, "queue state")
        current = _typed("current_track", data.get("current_track"), _INT)
        order = data.get("random_order")
        progress = _mapping(_require(data, "track_progress"), "track_progress")
        secs = _typed("secs", _require(progress, "secs"), _INT)
        nanos = _typed("nanos", _require(progress, "nanos"), _INT)
        queue = _require(data, "queue")
        if not isinstance(queue, list):
            raise ValueError("queue must be a list")
        return cls(
            current_track=current,
            random_order=None if order is None else _int_list(order, "random_order"),
            track_progress=timedelta(seconds=secs, microseconds=nanos // 1000),
            queue=[playable_from_dict(_mapping(item, "queue item")) for item in queue],
        )

    def to_dict(self) -> dict[str, Any]:
        whole = timedelta(days=self.track_progress.days, seconds=self.track_progress.seconds)
        return {
            "current_track": self.current_track,
            "random_order": None if self.random_order is None else list(self.random_order),
            "track_progress": {
                "secs": int(whole.total_seconds()),
                "nanos": self.track_progress.microseconds * 1000,
            },
            "queue": [playable_to_dict(item) for item in self.queue],
        }


@dataclass
class UserState:
    """State kept between runs: volume, playback modes, queue and sort orders."""

    volume: int = _MAX_VOLUME
    shuffle: bool = False
    repeat: RepeatSetting = RepeatSetting.NONE
    queuestate: QueueState = field(default_factory=QueueState)
    playlist_orders: dict[str, SortingOrder] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Any) -> UserState:
        """Build the state from plain data; raises ``ValueError`` on bad values."""
        data = _mapping(data, "user state")
        volume = _typed("volume", _require(data, "volume"), _INT)
        if not 0 <= volume <= _MAX_VOLUME:
            raise ValueError(f"volume out of range: {volume}")
        shuffle = _typed("shuffle", _require(data, "shuffle"), _BOOL)
        orders = _mapping(_require(data, "playlist_orders"), "playlist_orders")
        return cls(
            volume=volume,
            shuffle=shuffle,
            repeat=_repeat_from(_require(data, "repeat")),
            queuestate=QueueState.from_dict(_require(data, "queuestate")),
            playlist_orders={
                str(name): SortingOrder.from_dict(order) for name, order in orders.items()
            },
        )

    def to_dict(self) -> dict[str, Any]:
        """The state as plain data."""
        return {
            "volume": self.volume,
            "shuffle": self.shuffle,
            "repeat": self.repeat.value,
            "queuestate": self.queuestate.to_dict(),
            "playlist_orders": {
                name: order.to_dict() for name, order in self.playlist_orders.items()
            },
        }


def _dirs(base_path: Optional[str | Path]) -> tuple[Path, Path]:
    if base_path is not None:
        base = Path(base_path)
        return base / ".config", base / ".cache"
    return (
        Path(platformdirs.user_config_dir(_APP_NAME)),
        Path(platformdirs.user_cache_dir(_APP_NAME)),
    )


def config_path(file: str, base_path: Optional[str | Path] = None) -> Path:
    """The path of ``file`` in the configuration directory, which is created if needed.

    A plain file standing where the directory belongs is removed.
    """
    cfg_dir, _ = _dirs(base_path)
    if cfg_dir.exists() and not cfg_dir.is_dir():
        cfg_dir.unlink()
    cfg_dir.mkdir(parents=True, exist_ok=True)
    return cfg_dir / file


def cache_path(file: str, base_path: Optional[str | Path] = None) -> Path:
    """The path of ``file`` in the cache directory, which is created if needed."""
    _, cache_dir = _dirs(base_path)
    cache_dir.mkdir(parents=True, exist_ok=True)
    return cache_dir / file


class Config:
    """The loaded configuration file together with the persisted user state."""

    def __init__(self, filename: str = "config.toml", base_path: Optional[str | Path] = None):
        self.filename = filename
        self.base_path = base_path
        self._lock = threading.RLock()
        self._values = self._load_values()
        state = self._load_state()
        if self._values.shuffle is not None:
            state.shuffle = self._values.shuffle
        if self._values.repeat is not None:
            state.repeat = self._values.repeat
        self._state = state

    @property
    def values(self) -> ConfigValues:
        """The current settings."""
        with self._lock:
            return self._values

    @property
    def state(self) -> UserState:
        """The current user state."""
        with self._lock:
            return self._state

    def _load_values(self) -> ConfigValues:
        path = config_path(self.filename, self.base_path)
        data = TOML.load_or_generate_default(path, lambda: ConfigValues().to_dict(), False)
        try:
            return ConfigValues.from_dict(data)
        except ValueError as exc:
            raise SerializationError(f"Unable to parse {path}: {exc}") from exc

    def _load_state(self) -> UserState:
        path = config_path(_USER_STATE_FILE, self.base_path)
        data = CBOR.load_or_generate_default(path, lambda: UserState().to_dict(), True)
        try:
            return UserState.from_dict(data)
        except ValueError:
            state = UserState()
            CBOR.write(path, state.to_dict())
            return state

    def update_state(self, func: Callable[[UserState], Any]) -> None:
        """Call ``func`` with the user state while holding the state lock."""
        with self._lock:
            func(self._state)

    def save_state(self) -> None:
        """Write the user state to disk; failures are logged, not raised."""
        path = config_path(_USER_STATE_FILE, self.base_path)
        logger.debug("saving user state to %s", path)
        with self._lock:
            data = self._state.to_dict()
        try:
            CBOR.write(path, data)
        except SerializationError as exc:
            logger.error("Could not save user state: %s", exc)

    def reload(self) -> None:
        """Read the configuration file again; raises if it cannot be loaded."""
        values = self._load_values()
        with self._lock:
            self._values = values