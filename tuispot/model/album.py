"""An album, with its tracks once they have been loaded."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from tuispot.model.artist import Artist
from tuispot.model.track import Track

_SHARE_PREFIX = "https://open.spotify.com/album/"


def _format_timestamp(value: Optional[datetime]) -> Optional[str]:
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat().replace("+00:00", "Z")


def _parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    if value is None:
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(f"invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r}") from None


@dataclass
class Album:
    """An album; ``tracks`` is ``None`` until they have been loaded."""

    id: Optional[str]
    title: str
    artists: list[str] = field(default_factory=list)
    artist_ids: list[str] = field(default_factory=list)
    year: str = ""
    cover_url: Optional[str] = None
    url: Optional[str] = None
    tracks: Optional[list[Track]] = None
    added_at: Optional[datetime] = None

    def __str__(self) -> str:
        return f"{', '.join(self.artists)} - {self.title}"

    def share_url(self) -> Optional[str]:
        """A public link to the album, if it has an id."""
        return None if self.id is None else f"{_SHARE_PREFIX}{self.id}"

    def sort_key(self) -> str:
        """The key saved albums are ordered by: first artist, year, title.

        Raises ``IndexError`` if the album has no artists.
        """
        return f"{self.artists[0]}{self.year}{self.title}"

    def artist_refs(self) -> list[Artist]:
        """The album's artists, paired by position with their ids."""
        return [
            Artist(id=artist_id, name=name)
            for artist_id, name in zip(self.artist_ids, self.artists)
        ]

    def to_dict(self) -> dict[str, Any]:
        """The album as plain data."""
        return {
            "id": self.id,
            "title": self.title,
            "artists": list(self.artists),
            "artist_ids": list(self.artist_ids),
            "year": self.year,
            "cover_url": self.cover_url,
            "url": self.url,
            "tracks": None
            if self.tracks is None
            else [track.to_dict() for track in self.tracks],
            "added_at": _format_timestamp(self.added_at),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Album:
        """Build an album from plain data; raises ``ValueError`` if a field is missing."""
        tracks = data.get("tracks")
        return cls(
            id=data.get("id"),
            title=_require(data, "title"),
            artists=list(_require(data, "artists")),
            artist_ids=list(_require(data, "artist_ids")),
            year=_require(data, "year"),
            cover_url=data.get("cover_url"),
            url=data.get("url"),
            tracks=None if tracks is None else [Track.from_dict(t) for t in tracks],
            added_at=_parse_timestamp(data.get("added_at")),
        )