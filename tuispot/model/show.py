"""A podcast show and its episodes."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from tuispot.model.episode import Episode

_SHARE_PREFIX = "https://open.spotify.com/show/"


def _require(data: Mapping[str, Any], key: str) -> Any:
    try:
        return data[key]
    except KeyError:
        raise ValueError(f"missing field {key!r}") from None


@dataclass
class Show:
    """A show; ``episodes`` is ``None`` until they have been loaded."""

    id: str
    uri: str
    name: str
    publisher: str
    description: str
    cover_url: Optional[str] = None
    episodes: Optional[list[Episode]] = None

    def __str__(self) -> str:
        return f"{self.publisher} - {self.name}"

    def share_url(self) -> str:
        """A public link to the show."""
        return f"{_SHARE_PREFIX}{self.id}"

    def to_dict(self) -> dict[str, Any]:
        """The show as plain data."""
        return {
            "id": self.id,
            "uri": self.uri,
            "name": self.name,
            "publisher": self.publisher,
            "description": self.description,
            "cover_url": self.cover_url,
            "episodes": None
            if self.episodes is None
            else [episode.to_dict() for episode in self.episodes],
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Show:
        """Build a show from plain data; raises ``ValueError`` if a field is missing."""
        episodes = data.get("episodes")
        return cls(
            id=_require(data, "id"),
            uri=_require(data, "uri"),
            name=_require(data, "name"),
            publisher=_require(data, "publisher"),
            description=_require(data, "description"),
            cover_url=data.get("cover_url"),
            episodes=None
            if episodes is None
            else [Episode.from_dict(e) for e in episodes],
        )