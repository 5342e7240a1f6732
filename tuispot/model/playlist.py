"""A playlist and the ordering of its tracks."""

from __future__ import annotations

from dataclasses import dataclass
from functools import cmp_to_key
from itertools import dropwhile
from typing import Any, Callable, Mapping, Optional

from tuispot.command import SortDirection, SortKey
from tuispot.model.playable import Playable, playable_from_dict, playable_to_dict
from tuispot.model.track import Track

_SHARE_TEMPLATE = "https://open.spotify.com/user/{owner}/playlist/{id}"


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r}") from None


def _compare(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def _optional(value: Any) -> tuple:
    # Missing values order before present ones.
    return (value is not None, value)


def _sanitize_artist(name: str) -> str:
    return "".join(dropwhile(lambda word: word == "the", name.lower().split(" ")))


_SORT_KEYS: dict[SortKey, Callable[[Track], Any]] = {
    SortKey.TITLE: lambda t: t.title.lower(),
    SortKey.DURATION: lambda t: t.duration,
    SortKey.ALBUM: lambda t: _optional(None if t.album is None else t.album.lower()),
    SortKey.ADDED: lambda t: _optional(t.added_at),
    SortKey.ARTIST: lambda t: [_sanitize_artist(name) for name in t.artists],
}


@dataclass
class Playlist:
    """A playlist; ``tracks`` is ``None`` until they have been loaded."""

    id: str
    name: str
    owner_id: str
    snapshot_id: str
    num_tracks: int
    tracks: Optional[list[Playable]] = None
    collaborative: bool = False

    def has_track(self, track_id: str) -> bool:
        """Whether a loaded track or episode has the given id."""
        if self.tracks is None:
            return False
        return any(item.id == track_id for item in self.tracks)

    def sort(self, key: SortKey, direction: SortDirection) -> None:
        """Sort the loaded tracks in place; episodes compare as equal to anything."""
        if self.tracks is None:
            return
        extract = _SORT_KEYS[key]
        descending = direction is SortDirection.DESCENDING

        def compare(a: Playable, b: Playable) -> int:
            if not (isinstance(a, Track) and isinstance(b, Track)):
                return 0
            result = _compare(extract(a), extract(b))
            return -result if descending else result

        self.tracks.sort(key=cmp_to_key(compare))

    def share_url(self) -> str:
        """A public link to the playlist."""
        return _SHARE_TEMPLATE.format(owner=self.owner_id, id=self.id)

    def track_count_label(self) -> str:
        """The number of tracks, loaded or as reported, right-aligned."""
        count = self.num_tracks if self.tracks is None else len(self.tracks)
        return f"{count:>4} tracks"

    def to_dict(self) -> dict[str, Any]:
        """The playlist as plain data."""
        return {
            "id": self.id,
            "name": self.name,
            "owner_id": self.owner_id,
            "snapshot_id": self.snapshot_id,
            "num_tracks": self.num_tracks,
            "tracks": None
            if self.tracks is None
            else [playable_to_dict(item) for item in self.tracks],
            "collaborative": self.collaborative,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Playlist:
        """Build a playlist from plain data; raises ``ValueError`` if a field is missing."""
        tracks = data.get("tracks")
        return cls(
            id=_require(data, "id"),
            name=_require(data, "name"),
            owner_id=_require(data, "owner_id"),
            snapshot_id=_require(data, "snapshot_id"),
            num_tracks=int(_require(data, "num_tracks")),
            tracks=None if tracks is None else [playable_from_dict(t) for t in tracks],
            collaborative=bool(_require(data, "collaborative")),
        )