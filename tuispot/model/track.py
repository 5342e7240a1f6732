"""A music track as shown in lists and kept in the queue."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

_SHARE_PREFIX = "https://open.spotify.com/track/"


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
class Track:
    """A track with its artists, album and position in a list."""

    id: Optional[str]
    uri: str
    title: str
    track_number: int
    disc_number: int
    duration: int
    artists: list[str] = field(default_factory=list)
    artist_ids: list[str] = field(default_factory=list)
    album: Optional[str] = None
    album_id: Optional[str] = None
    album_artists: list[str] = field(default_factory=list)
    cover_url: Optional[str] = None
    url: str = ""
    added_at: Optional[datetime] = None
    list_index: int = 0

    def duration_str(self) -> str:
        """The duration as ``MM:SS``."""
        minutes = self.duration // 60_000
        seconds = (self.duration // 1000) % 60
        return f"{minutes:02}:{seconds:02}"

    def __str__(self) -> str:
        return f"{', '.join(self.artists)} - {self.title}"

    def share_url(self) -> Optional[str]:
        """A public link to the track, if it has an id."""
        return None if self.id is None else f"{_SHARE_PREFIX}{self.id}"

    def to_dict(self) -> dict[str, Any]:
        """The track as plain data, suitable for JSON, TOML or CBOR."""
        return {
            "id": self.id,
            "uri": self.uri,
            "title": self.title,
            "track_number": self.track_number,
            "disc_number": self.disc_number,
            "duration": self.duration,
            "artists": list(self.artists),
            "artist_ids": list(self.artist_ids),
            "album": self.album,
            "album_id": self.album_id,
            "album_artists": list(self.album_artists),
            "cover_url": self.cover_url,
            "url": self.url,
            "added_at": _format_timestamp(self.added_at),
            "list_index": self.list_index,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Track:
        """Build a track from plain data; raises ``ValueError`` if a field is missing."""
        return cls(
            id=data.get("id"),
            uri=_require(data, "uri"),
            title=_require(data, "title"),
            track_number=int(_require(data, "track_number")),
            disc_number=int(_require(data, "disc_number")),
            duration=int(_require(data, "duration")),
            artists=list(_require(data, "artists")),
            artist_ids=list(_require(data, "artist_ids")),
            album=data.get("album"),
            album_id=data.get("album_id"),
            album_artists=list(_require(data, "album_artists")),
            cover_url=data.get("cover_url"),
            url=_require(data, "url"),
            added_at=_parse_timestamp(data.get("added_at")),
            list_index=int(_require(data, "list_index")),
        )