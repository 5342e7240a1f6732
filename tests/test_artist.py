import pytest

from tuispot.model.artist import Artist
from tuispot.model.track import Track


def make_track(track_id):
    return Track(
        id=track_id,
        uri=f"spotify:track:{track_id}",
        title=f"Title {track_id}",
        track_number=1,
        disc_number=1,
        duration=200_000,
        artists=["Alice"],
        artist_ids=["a1"],
        url=f"https://open.example.com/track/{track_id}",
    )


def test_new_artist_defaults():
    artist = Artist("a1", "Alice")
    assert artist.url is None
    assert artist.tracks is None
    assert artist.is_followed is False


def test_str_is_name():
    assert str(Artist("a1", "Alice")) == "Alice"


def test_share_url():
    assert Artist("a1", "Alice").share_url() == "https://open.spotify.com/artist/a1"


def test_share_url_none_without_id():
    assert Artist(None, "Alice").share_url() is None


def test_label_empty_when_tracks_not_loaded():
    assert Artist("a1", "Alice").saved_tracks_label() == ""


def test_label_counts_tracks():
    artist = Artist("a1", "Alice", tracks=[make_track("t1"), make_track("t2")])
    assert artist.saved_tracks_label() == "  2 saved tracks"


def test_label_width_grows_for_large_counts():
    artist = Artist("a1", "Alice", tracks=[make_track(f"t{i}") for i in range(1200)])
    label = artist.saved_tracks_label()
    assert label.startswith("1200 ")
    assert label.endswith("saved tracks")


def test_round_trip_with_tracks():
    artist = Artist(
        "a1",
        "Alice",
        url="https://open.example.com/artist/a1",
        tracks=[make_track("t1"), make_track("t2")],
        is_followed=True,
    )
    assert Artist.from_dict(artist.to_dict()) == artist


def test_round_trip_without_tracks():
    artist = Artist("a1", "Alice")
    assert Artist.from_dict(artist.to_dict()) == artist


def test_missing_followed_flag_raises():
    data = Artist("a1", "Alice").to_dict()
    del data["is_followed"]
    with pytest.raises(ValueError):
        Artist.from_dict(data)


def test_missing_name_raises():
    data = Artist("a1", "Alice").to_dict()
    del data["name"]
    with pytest.raises(ValueError):
        Artist.from_dict(data)