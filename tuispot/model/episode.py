"""A podcast episode."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

_SHARE_PREFIX = "https://open.spotify.com/episode/"


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
class Episode:
    """An episode of a show."""

    id: str
    uri: str
    duration: int
    name: str
    description: str
    release_date: str
    cover_url: Optional[str] = None
    added_at: Optional[datetime] = None
    list_index: int = 0

    def duration_str(self) -> str:
        """The duration as ``MM:SS``."""
        minutes = self.duration // 60_000
        seconds = (self.duration // 1000) % 60
        return f"{minutes:02}:{seconds:02}"

    def __str__(self) -> str:
        return self.name

    def share_url(self) -> str:
        """A public link to the episode."""
        return f"{_SHARE_PREFIX}{self.id}"

    def display_right(self) -> str:
        """The right-hand column of a list row: duration and release date."""
        return f"{self.duration_str()} [{self.release_date}]"

    def to_dict(self) -> dict[str, Any]:
        """The episode as plain data."""
        return {
            "id": self.id,
            "uri": self.uri,
            "duration": self.duration,
            "name": self.name,
            "description": self.description,
            "release_date": self.release_date,
            "cover_url": self.cover_url,
            "added_at": _format_timestamp(self.added_at),
            "list_index": self.list_index,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Episode:
        """Build an episode from plain data; raises ``ValueError`` if a field is missing."""
        return cls(
            id=_require(data, "id"),
            uri=_require(data, "uri"),
            duration=int(_require(data, "duration")),
            name=_require(data, "name"),
            description=_require(data, "description"),
            release_date=_require(data, "release_date"),
            cover_url=data.get("cover_url"),
            added_at=_parse_timestamp(data.get("added_at")),
            list_index=int(_require(data, "list_index")),
        )