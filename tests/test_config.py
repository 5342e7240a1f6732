from datetime import timedelta

import pytest

from tuispot.command import RepeatSetting, SortDirection, SortKey
from tuispot.config import (
    Config,
    ConfigTheme,
    ConfigValues,
    QueueState,
    SortingOrder,
    UserState,
    cache_path,
    config_path,
)
from tuispot.model.episode import Episode
from tuispot.model.track import Track
from tuispot.serialization import CBOR, SerializationError


def sample_state():
    track = Track(
        id="t1",
        uri="spotify:track:t1",
        title="Song",
        track_number=2,
        disc_number=1,
        duration=1234,
        artists=["Someone"],
        artist_ids=["a1"],
    )
    episode = Episode(
        id="e1",
        uri="spotify:episode:e1",
        duration=999,
        name="Ep",
        description="desc",
        release_date="2021-02-03",
    )
    return UserState(
        volume=100,
        shuffle=True,
        repeat=RepeatSetting.REPEAT_TRACK,
        queuestate=QueueState(
            current_track=1,
            random_order=[1, 0],
            track_progress=timedelta(seconds=3, microseconds=500),
            queue=[track, episode],
        ),
        playlist_orders={"pl": SortingOrder(SortKey.TITLE, SortDirection.DESCENDING)},
    )


def test_new_config_creates_files_with_defaults(tmp_path):
    cfg = Config("config.toml", tmp_path)
    assert (tmp_path / ".config" / "config.toml").exists()
    assert (tmp_path / ".config" / "userstate.cbor").exists()
    assert cfg.values == ConfigValues()
    assert cfg.state == UserState()
    assert cfg.state.volume == 65535
    assert cfg.state.repeat is RepeatSetting.NONE


def test_config_overrides_shuffle_and_repeat(tmp_path):
    path = config_path("config.toml", tmp_path)
    path.write_text('shuffle = true\nrepeat = "track"\n', encoding="utf-8")
    cfg = Config("config.toml", tmp_path)
    assert cfg.state.shuffle is True
    assert cfg.state.repeat is RepeatSetting.REPEAT_TRACK


def test_state_persists(tmp_path):
    cfg = Config("config.toml", tmp_path)

    def change(state):
        state.volume = 100
        state.shuffle = True

    cfg.update_state(change)
    cfg.save_state()
    again = Config("config.toml", tmp_path)
    assert again.state.volume == 100
    assert again.state.shuffle is True


def test_invalid_state_falls_back_to_default(tmp_path):
    path = config_path("userstate.cbor", tmp_path)
    CBOR.write(path, {"volume": "loud"})
    cfg = Config("config.toml", tmp_path)
    assert cfg.state == UserState()
    assert UserState.from_dict(CBOR.load(path)) == UserState()


def test_broken_toml_raises(tmp_path):
    config_path("config.toml", tmp_path).write_text("not = [valid", encoding="utf-8")
    with pytest.raises(SerializationError):
        Config("config.toml", tmp_path)


def test_wrong_type_in_toml_raises(tmp_path):
    config_path("config.toml", tmp_path).write_text('bitrate = "high"\n', encoding="utf-8")
    with pytest.raises(SerializationError):
        Config("config.toml", tmp_path)


def test_reload_reads_new_values(tmp_path):
    cfg = Config("config.toml", tmp_path)
    assert cfg.values.initial_screen is None
    config_path("config.toml", tmp_path).write_text('initial_screen = "queue"\n', encoding="utf-8")
    cfg.reload()
    assert cfg.values.initial_screen == "queue"


def test_reload_failure_keeps_old_values(tmp_path):
    config_path("config.toml", tmp_path).write_text('backend = "pulse"\n', encoding="utf-8")
    cfg = Config("config.toml", tmp_path)
    config_path("config.toml", tmp_path).write_text("broken = [", encoding="utf-8")
    with pytest.raises(SerializationError):
        cfg.reload()
    assert cfg.values.backend == "pulse"


def test_config_path_replaces_stray_file(tmp_path):
    (tmp_path / ".config").write_text("old", encoding="utf-8")
    path = config_path("x.toml", tmp_path)
    assert path == tmp_path / ".config" / "x.toml"
    assert path.parent.is_dir()


def test_cache_path_creates_directory(tmp_path):
    path = cache_path("tracks.db", tmp_path)
    assert path == tmp_path / ".cache" / "tracks.db"
    assert path.parent.is_dir()


def test_config_values_round_trip():
    values = ConfigValues(
        command_key=":",
        keybindings={"q": "quit"},
        theme=ConfigTheme(primary="red"),
        volnorm_pregain=1.5,
        bitrate=320,
        repeat=RepeatSetting.REPEAT_PLAYLIST,
    )
    data = values.to_dict()
    assert data["repeat"] == "playlist"
    assert ConfigValues.from_dict(data) == values


def test_config_values_rejects_bad_input():
    with pytest.raises(ValueError):
        ConfigValues.from_dict({"command_key": "ab"})
    with pytest.raises(ValueError):
        ConfigValues.from_dict({"repeat": "sometimes"})
    with pytest.raises(ValueError):
        ConfigValues.from_dict({"audio_cache": "yes"})


def test_user_state_round_trip():
    state = sample_state()
    assert UserState.from_dict(state.to_dict()) == state


def test_user_state_round_trip_through_cbor(tmp_path):
    state = sample_state()
    path = tmp_path / "state.cbor"
    CBOR.write(path, state.to_dict())
    assert UserState.from_dict(CBOR.load(path)) == state


def test_sorting_order_uses_variant_names():
    order = SortingOrder(SortKey.TITLE, SortDirection.DESCENDING)
    assert order.to_dict() == {"key": "Title", "direction": "Descending"}
    with pytest.raises(ValueError):
        SortingOrder.from_dict({"key": "title", "direction": "Descending"})


def test_user_state_missing_field():
    data = UserState().to_dict()
    del data["queuestate"]
    with pytest.raises(ValueError):
        UserState.from_dict(data)