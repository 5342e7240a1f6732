"""Items the queue can play: tracks and episodes, and their tagged plain form."""

from __future__ import annotations

from typing import Any, Mapping, Union

from tuispot.model.episode import Episode
from tuispot.model.track import Track

Playable = Union[Track, Episode]

_TYPES = {"Track": Track, "Episode": Episode}


def playable_to_dict(item: Playable) -> dict[str, Any]:
    """The item as plain data, tagged with its kind under ``"type"``."""
    if isinstance(item, Track):
        tag = "Track"
    elif isinstance(item, Episode):
        tag = "Episode"
    else:
        raise TypeError(f"not a playable item: {item!r}")
    return {"type": tag, **item.to_dict()}


def playable_from_dict(data: Mapping[str, Any]) -> Playable:
    """Build a track or episode from tagged plain data.

    Raises ``ValueError`` if the tag is missing or unknown.
    """
    tag = data.get("type")
    cls = _TYPES.get(tag) if isinstance(tag, str) else None
    if cls is None:
        raise ValueError(f"unknown playable type: {tag!r}")
    fields = {key: value for key, value in data.items() if key != "type"}
    return cls.from_dict(fields)


def duration_str(item: Playable) -> str:
    """The item's duration as ``MM:SS``."""
    minutes = item.duration // 60_000
    seconds = (item.duration // 1000) % 60
    return f"{minutes:02}:{seconds:02}"