import pytest

from tuispot.model.episode import Episode
from tuispot.model.playable import duration_str, playable_from_dict, playable_to_dict
from tuispot.model.track import Track


def _track(duration: int = 185_000) -> Track:
    return Track(
        id="t1",
        uri="spotify:track:t1",
        title="Song",
        track_number=3,
        disc_number=1,
        duration=duration,
        artists=["Artist"],
        artist_ids=["a1"],
        album="Album",
        album_id="alb1",
        album_artists=["Artist"],
    )


def _episode(duration: int = 3_600_000) -> Episode:
    return Episode(
        id="e1",
        uri="spotify:episode:e1",
        duration=duration,
        name="Episode",
        description="About things",
        release_date="2021-01-01",
    )


def test_track_is_tagged():
    data = playable_to_dict(_track())
    assert data["type"] == "Track"
    assert data["title"] == "Song"


def test_episode_is_tagged():
    data = playable_to_dict(_episode())
    assert data["type"] == "Episode"
    assert data["name"] == "Episode"


def test_track_round_trip():
    track = _track()
    assert playable_from_dict(playable_to_dict(track)) == track


def test_episode_round_trip():
    episode = _episode()
    restored = playable_from_dict(playable_to_dict(episode))
    assert isinstance(restored, Episode)
    assert restored == episode


def test_unknown_type_rejected():
    data = playable_to_dict(_track())
    data["type"] = "Podcast"
    with pytest.raises(ValueError):
        playable_from_dict(data)


def test_missing_type_rejected():
    data = _track().to_dict()
    with pytest.raises(ValueError):
        playable_from_dict(data)


def test_to_dict_rejects_other_objects():
    with pytest.raises(TypeError):
        playable_to_dict("not a track")


def test_duration_str_matches_item_methods():
    track = _track()
    episode = _episode()
    assert duration_str(track) == track.duration_str()
    assert duration_str(episode) == episode.duration_str()


def test_duration_str_zero():
    assert duration_str(_track(duration=0)) == "00:00"


def test_duration_str_over_an_hour_counts_minutes():
    assert duration_str(_episode(duration=3_600_000)) == "60:00"