"""Commands understood by the command line and key bindings, and their parser."""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional

_I32_MIN, _I32_MAX = -(2**31), 2**31 - 1
_U32_MAX = 2**32 - 1
_U16_MAX = 2**16 - 1

_SIGNED = re.compile(r"[+-]?[0-9]+")
_UNSIGNED = re.compile(r"\+?[0-9]+")


class RepeatSetting(Enum):
    """Repeat behaviour of the queue; values are the stored names."""

    NONE = "off"
    REPEAT_PLAYLIST = "playlist"
    REPEAT_TRACK = "track"

    def __str__(self) -> str:
        return _REPEAT_DISPLAY[self]


_REPEAT_DISPLAY = {
    RepeatSetting.NONE: "None",
    RepeatSetting.REPEAT_PLAYLIST: "RepeatPlaylist",
    RepeatSetting.REPEAT_TRACK: "RepeatTrack",
}


class _LowerEnum(str, Enum):
    def __str__(self) -> str:
        return self.value


class TargetMode(_LowerEnum):
    CURRENT = "current"
    SELECTED = "selected"


class MoveMode(_LowerEnum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    PLAYING = "playing"


class SortKey(_LowerEnum):
    TITLE = "title"
    DURATION = "duration"
    ARTIST = "artist"
    ALBUM = "album"
    ADDED = "added"


class SortDirection(_LowerEnum):
    ASCENDING = "ascending"
    DESCENDING = "descending"


class ShiftMode(_LowerEnum):
    UP = "up"
    DOWN = "down"


class GotoMode(_LowerEnum):
    ALBUM = "album"
    ARTIST = "artist"


@dataclass(frozen=True)
class MoveAmount:
    """A number of steps, or all the way to the end when ``extreme`` is set."""

    amount: int = 1
    extreme: bool = False

    def __str__(self) -> str:
        return "extreme" if self.extreme else "integer"


@dataclass(frozen=True)
class JumpMode:
    """Jump to the previous or next match, or search for ``query``."""

    kind: str
    query: str = ""

    def __post_init__(self) -> None:
        if self.kind not in ("previous", "next", "query"):
            raise ValueError(f"invalid jump mode: {self.kind!r}")

    def __str__(self) -> str:
        return self.kind


@dataclass(frozen=True)
class SeekDirection:
    """A seek in milliseconds, relative to the current position or absolute."""

    amount: int
    relative: bool

    def __str__(self) -> str:
        if not self.relative:
            return str(self.amount)
        sign = "+" if self.amount > 0 else ""
        return f"{sign}{self.amount}"


class CommandKind(Enum):
    QUIT = "quit"
    TOGGLE_PLAY = "toggle_play"
    STOP = "stop"
    PREVIOUS = "previous"
    NEXT = "next"
    CLEAR = "clear"
    QUEUE = "queue"
    PLAY_NEXT = "play_next"
    PLAY = "play"
    UPDATE_LIBRARY = "update_library"
    SAVE = "save"
    SAVE_QUEUE = "save_queue"
    DELETE = "delete"
    FOCUS = "focus"
    SEEK = "seek"
    VOLUME_UP = "volume_up"
    VOLUME_DOWN = "volume_down"
    REPEAT = "repeat"
    SHUFFLE = "shuffle"
    SHARE = "share"
    BACK = "back"
    OPEN = "open"
    GOTO = "goto"
    MOVE = "move"
    SHIFT = "shift"
    SEARCH = "search"
    JUMP = "jump"
    HELP = "help"
    RELOAD_CONFIG = "reload_config"
    NOOP = "noop"
    INSERT = "insert"
    NEW_PLAYLIST = "new_playlist"
    SORT = "sort"
    LOGOUT = "logout"
    SHOW_RECOMMENDATIONS = "show_recommendations"
    REDRAW = "redraw"


_SIMPLE_NAMES = {
    CommandKind.NOOP: "noop",
    CommandKind.QUIT: "quit",
    CommandKind.TOGGLE_PLAY: "playpause",
    CommandKind.STOP: "stop",
    CommandKind.PREVIOUS: "previous",
    CommandKind.NEXT: "next",
    CommandKind.CLEAR: "clear",
    CommandKind.QUEUE: "queue",
    CommandKind.PLAY_NEXT: "playnext",
    CommandKind.PLAY: "play",
    CommandKind.UPDATE_LIBRARY: "update",
    CommandKind.SAVE: "save",
    CommandKind.SAVE_QUEUE: "save queue",
    CommandKind.DELETE: "delete",
    CommandKind.BACK: "back",
    CommandKind.HELP: "help",
    CommandKind.RELOAD_CONFIG: "reload",
    CommandKind.INSERT: "insert",
    CommandKind.LOGOUT: "logout",
    CommandKind.REDRAW: "redraw",
}

_EXTREME_NAMES = {
    MoveMode.UP: "top",
    MoveMode.DOWN: "bottom",
    MoveMode.LEFT: "leftmost",
    MoveMode.RIGHT: "rightmost",
}


@dataclass(frozen=True)
class Command:
    """A command and its arguments, in the order the command takes them."""

    kind: CommandKind
    args: tuple = ()

    def __str__(self) -> str:
        return self._render().replace(";", ";;")

    def _render(self) -> str:
        kind, args = self.kind, self.args
        if kind in _SIMPLE_NAMES:
            return _SIMPLE_NAMES[kind]
        match kind:
            case CommandKind.FOCUS:
                return f"focus {args[0]}"
            case CommandKind.SEEK:
                return f"seek {args[0]}"
            case CommandKind.VOLUME_UP:
                return f"volup {args[0]}"
            case CommandKind.VOLUME_DOWN:
                return f"voldown {args[0]}"
            case CommandKind.REPEAT:
                mode = args[0]
                return f"repeat {'' if mode is None else mode}"
            case CommandKind.SHUFFLE:
                on = args[0]
                param = "" if on is None else ("on" if on else "off")
                return f"shuffle {param}"
            case CommandKind.SHARE:
                return f"share {args[0]}"
            case CommandKind.OPEN:
                return f"open {args[0]}"
            case CommandKind.GOTO:
                return f"goto {args[0]}"
            case CommandKind.MOVE:
                mode, amount = args
                if amount.extreme:
                    return f"move {_EXTREME_NAMES.get(mode, '')}"
                if mode is MoveMode.PLAYING:
                    return "move playing"
                return f"move {mode} {amount.amount}"
            case CommandKind.SHIFT:
                mode, amount = args
                return f"shift {mode} {1 if amount is None else amount}"
            case CommandKind.SEARCH:
                return f"search {args[0]}"
            case CommandKind.JUMP:
                return f"jump {args[0]}"
            case CommandKind.NEW_PLAYLIST:
                return f"new playlist {args[0]}"
            case CommandKind.SORT:
                return f"sort {args[0]} {args[1]}"
            case CommandKind.SHOW_RECOMMENDATIONS:
                return f"similar {args[0]}"
        raise ValueError(f"unknown command kind: {kind}")


_ALIASES = {
    "q": "quit",
    "x": "quit",
    "pause": "playpause",
    "toggleplay": "playpause",
    "toggleplayback": "playpause",
    "loop": "repeat",
    "1": "foo",
    "2": "bar",
    "3": "baz",
}

_TARGETS = {"selected": TargetMode.SELECTED, "current": TargetMode.CURRENT}

_REPEAT_ARGS = {
    "list": RepeatSetting.REPEAT_PLAYLIST,
    "playlist": RepeatSetting.REPEAT_PLAYLIST,
    "queue": RepeatSetting.REPEAT_PLAYLIST,
    "track": RepeatSetting.REPEAT_TRACK,
    "once": RepeatSetting.REPEAT_TRACK,
    "none": RepeatSetting.NONE,
    "off": RepeatSetting.NONE,
}

_SORT_KEYS = {
    "title": SortKey.TITLE,
    "duration": SortKey.DURATION,
    "album": SortKey.ALBUM,
    "added": SortKey.ADDED,
    "artist": SortKey.ARTIST,
}

_SORT_DIRECTIONS = {
    "a": SortDirection.ASCENDING,
    "asc": SortDirection.ASCENDING,
    "ascending": SortDirection.ASCENDING,
    "d": SortDirection.DESCENDING,
    "desc": SortDirection.DESCENDING,
    "descending": SortDirection.DESCENDING,
}

_MOVE_EXTREMES = {
    "top": (MoveMode.UP, MoveAmount(extreme=True)),
    "bottom": (MoveMode.DOWN, MoveAmount(extreme=True)),
    "leftmost": (MoveMode.LEFT, MoveAmount(extreme=True)),
    "rightmost": (MoveMode.RIGHT, MoveAmount(extreme=True)),
    "playing": (MoveMode.PLAYING, MoveAmount()),
}

_MOVE_DIRECTIONS = {
    "up": MoveMode.UP,
    "down": MoveMode.DOWN,
    "left": MoveMode.LEFT,
    "right": MoveMode.RIGHT,
}

_NO_ARGS = {
    "quit": CommandKind.QUIT,
    "playpause": CommandKind.TOGGLE_PLAY,
    "stop": CommandKind.STOP,
    "previous": CommandKind.PREVIOUS,
    "next": CommandKind.NEXT,
    "clear": CommandKind.CLEAR,
    "playnext": CommandKind.PLAY_NEXT,
    "queue": CommandKind.QUEUE,
    "play": CommandKind.PLAY,
    "update": CommandKind.UPDATE_LIBRARY,
    "delete": CommandKind.DELETE,
    "back": CommandKind.BACK,
    "help": CommandKind.HELP,
    "reload": CommandKind.RELOAD_CONFIG,
    "logout": CommandKind.LOGOUT,
    "noop": CommandKind.NOOP,
    "redraw": CommandKind.REDRAW,
}


def _parse_int(text: str, low: int, high: int, signed: bool) -> Optional[int]:
    pattern = _SIGNED if signed else _UNSIGNED
    if not pattern.fullmatch(text):
        return None
    value = int(text)
    return value if low <= value <= high else None


def _resolve_alias(name: str) -> str:
    while name in _ALIASES:
        name = _ALIASES[name]
    return name


def _split_commands(text: str) -> list[str]:
    parts = [""]
    separator_seen = False
    for ch in text:
        if separator_seen:
            separator_seen = False
            if ch == ";":
                parts[-1] += ch
            else:
                parts.append(ch)
        elif ch == ";":
            separator_seen = True
        else:
            parts[-1] += ch
    return parts


def _parse_seek(arg: str) -> Optional[Command]:
    if arg[:1] in ("-", "+"):
        amount = _parse_int(arg[1:], _I32_MIN, _I32_MAX, signed=True)
        if amount is None:
            return None
        if arg[0] == "-":
            amount = -amount
        return Command(CommandKind.SEEK, (SeekDirection(amount, relative=True),))
    position = _parse_int(arg, 0, _U32_MAX, signed=False)
    if position is None:
        return None
    return Command(CommandKind.SEEK, (SeekDirection(position, relative=False),))


def _parse_one(line: str) -> Optional[Command]:
    components = line.strip().split(" ")
    name = _resolve_alias(components[0])
    args = components[1:]
    first = args[0] if args else None

    if name in _NO_ARGS:
        return Command(_NO_ARGS[name])

    match name:
        case "open" | "share" | "similar":
            target = _TARGETS.get(first) if first is not None else None
            if target is None:
                return None
            kind = {
                "open": CommandKind.OPEN,
                "share": CommandKind.SHARE,
                "similar": CommandKind.SHOW_RECOMMENDATIONS,
            }[name]
            return Command(kind, (target,))
        case "jump":
            return Command(CommandKind.JUMP, (JumpMode("query", " ".join(args)),))
        case "search":
            return Command(CommandKind.SEARCH, (" ".join(args),))
        case "shift":
            amount = (
                _parse_int(args[1], _I32_MIN, _I32_MAX, signed=True)
                if len(args) > 1
                else None
            )
            mode = {"up": ShiftMode.UP, "down": ShiftMode.DOWN}.get(first or "")
            if first is None or mode is None:
                return None
            return Command(CommandKind.SHIFT, (mode, amount))
        case "move":
            if first is not None and first in _MOVE_EXTREMES:
                return Command(CommandKind.MOVE, _MOVE_EXTREMES[first])
            amount = MoveAmount()
            if len(args) > 1:
                steps = _parse_int(args[1], _I32_MIN, _I32_MAX, signed=True)
                if steps is not None:
                    amount = MoveAmount(steps)
            if first is None or first not in _MOVE_DIRECTIONS:
                return None
            return Command(CommandKind.MOVE, (_MOVE_DIRECTIONS[first], amount))
        case "goto":
            mode = {"album": GotoMode.ALBUM, "artist": GotoMode.ARTIST}.get(first or "")
            if first is None or mode is None:
                return None
            return Command(CommandKind.GOTO, (mode,))
        case "shuffle":
            state = {"on": True, "off": False}.get(first) if first is not None else None
            return Command(CommandKind.SHUFFLE, (state,))
        case "repeat":
            mode = _REPEAT_ARGS.get(first) if first is not None else None
            return Command(CommandKind.REPEAT, (mode,))
        case "seek":
            return None if first is None else _parse_seek(first)
        case "focus":
            return None if first is None else Command(CommandKind.FOCUS, (first,))
        case "save":
            return Command(CommandKind.SAVE_QUEUE if first == "queue" else CommandKind.SAVE)
        case "volup" | "voldown":
            amount = None if first is None else _parse_int(first, 0, _U16_MAX, signed=False)
            kind = CommandKind.VOLUME_UP if name == "volup" else CommandKind.VOLUME_DOWN
            return Command(kind, (1 if amount is None else amount,))
        case "insert":
            return Command(CommandKind.INSERT, (first,))
        case "newplaylist":
            if not args:
                return None
            return Command(CommandKind.NEW_PLAYLIST, (" ".join(args),))
        case "sort":
            if first is None or first not in _SORT_KEYS:
                return None
            direction = SortDirection.ASCENDING
            if len(args) > 1:
                direction = _SORT_DIRECTIONS.get(args[1], SortDirection.ASCENDING)
            return Command(CommandKind.SORT, (_SORT_KEYS[first], direction))
    return None


def parse(text: str) -> list[Command]:
    """Parse ``;``-separated commands; ``;;`` stands for a literal ``;``.

    Raises ``ValueError`` if any of the commands is unknown or malformed.
    """
    commands = []
    for part in _split_commands(text):
        command = _parse_one(part)
        if command is None:
            raise ValueError(f"Failed to parse command(s): {text!r}")
        commands.append(command)
    return commands