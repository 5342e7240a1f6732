from datetime import datetime, timezone

import pytest

from tuispot.model.track import Track


def make_track(**overrides):
    values = dict(
        id="trk1",
        uri="spotify:track:trk1",
        title="Song",
        track_number=3,
        disc_number=1,
        duration=185_000,
        artists=["Alice", "Bob"],
        artist_ids=["a1", "b2"],
        album="Record",
        album_id="alb1",
        album_artists=["Alice"],
        cover_url="https://img.example.com/c.jpg",
        url="https://open.example.com/track/trk1",
        added_at=datetime(2021, 3, 4, 5, 6, 7, tzinfo=timezone.utc),
        list_index=2,
    )
    values.update(overrides)
    return Track(**values)


def test_str_joins_artists_and_title():
    assert str(make_track()) == "Alice, Bob - Song"


@pytest.mark.parametrize("duration", [0, 1000, 59_000, 61_000, 600_000, 3_599_000])
def test_duration_str_encodes_whole_seconds(duration):
    text = make_track(duration=duration).duration_str()
    minutes, seconds = text.split(":")
    assert len(minutes) >= 2 and len(seconds) == 2
    assert int(minutes) * 60_000 + int(seconds) * 1000 == duration
    assert int(seconds) < 60


def test_duration_str_drops_milliseconds():
    assert make_track(duration=61_999).duration_str() == make_track(duration=61_000).duration_str()


def test_share_url_uses_id():
    assert make_track().share_url() == "https://open.spotify.com/track/trk1"


def test_share_url_none_without_id():
    assert make_track(id=None).share_url() is None


def test_round_trip():
    track = make_track()
    assert Track.from_dict(track.to_dict()) == track


def test_round_trip_without_optional_values():
    track = make_track(id=None, album=None, album_id=None, cover_url=None, added_at=None)
    assert Track.from_dict(track.to_dict()) == track


def test_added_at_serialized_as_utc_timestamp():
    assert make_track().to_dict()["added_at"] == "2021-03-04T05:06:07Z"


def test_missing_optional_fields_become_none():
    data = make_track().to_dict()
    for key in ("id", "album", "album_id", "cover_url", "added_at"):
        del data[key]
    track = Track.from_dict(data)
    assert track.id is None
    assert track.album is None
    assert track.added_at is None


def test_missing_required_field_raises():
    data = make_track().to_dict()
    del data["title"]
    with pytest.raises(ValueError):
        Track.from_dict(data)


def test_invalid_timestamp_raises():
    data = make_track().to_dict()
    data["added_at"] = "yesterday"
    with pytest.raises(ValueError):
        Track.from_dict(data)