"""An artist, with the saved tracks that belong to them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from tuispot.model.track import Track

_SHARE_PREFIX = "https://open.spotify.com/artist/"


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r}") from None


@dataclass
class Artist:
    """An artist; ``tracks`` is ``None`` until they have been loaded."""

    id: Optional[str]
    name: str
    url: Optional[str] = None
    tracks: Optional[list[Track]] = None
    is_followed: bool = False

    def __str__(self) -> str:
        return self.name

    def share_url(self) -> Optional[str]:
        """A public link to the artist, if it has an id."""
        return None if self.id is None else f"{_SHARE_PREFIX}{self.id}"

    def saved_tracks_label(self) -> str:
        """The number of loaded tracks, or an empty string if none are loaded."""
        if self.tracks is None:
            return ""
        return f"{len(self.tracks):>3} saved tracks"

    def to_dict(self) -> dict[str, Any]:
        """The artist as plain data."""
        return {
            "id": self.id,
            "name": self.name,
            "url": self.url,
            "tracks": None
            if self.tracks is None
            else [track.to_dict() for track in self.tracks],
            "is_followed": self.is_followed,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Artist:
        """Build an artist from plain data; raises ``ValueError`` if a field is missing."""
        tracks = data.get("tracks")
        return cls(
            id=data.get("id"),
            name=_require(data, "name"),
            url=data.get("url"),
            tracks=None if tracks is None else [Track.from_dict(t) for t in tracks],
            is_followed=bool(_require(data, "is_followed")),
        )