import pytest
import tomli

from tuispot.serialization import (
    CBOR,
    TOML,
    CborSerializer,
    SerializationError,
    TomlSerializer,
)


def test_toml_round_trip(tmp_path):
    path = tmp_path / "config.toml"
    value = {"command_key": ":", "keybindings": {"q": "quit"}, "bitrate": 320}
    assert TomlSerializer().write(path, value) == value
    assert TomlSerializer().load(path) == value


def test_toml_write_drops_none(tmp_path):
    path = tmp_path / "config.toml"
    TOML.write(path, {"theme": None, "notify": True, "nested": {"a": None, "b": 1}})
    assert tomli.loads(path.read_text()) == {"notify": True, "nested": {"b": 1}}


def test_toml_unserializable_value(tmp_path):
    with pytest.raises(SerializationError, match="Failed serializing value"):
        TOML.write(tmp_path / "x.toml", {"bad": object()})


def test_toml_parse_error(tmp_path):
    path = tmp_path / "broken.toml"
    path.write_text("this is = = not toml")
    with pytest.raises(SerializationError, match="Unable to parse toml"):
        TOML.load(path)


def test_toml_missing_file(tmp_path):
    with pytest.raises(SerializationError, match="Unable to read"):
        TOML.load(tmp_path / "missing.toml")


def test_cbor_round_trip(tmp_path):
    path = tmp_path / "state.cbor"
    value = {"volume": 65535, "shuffle": False, "queue": [1, 2, 3], "track": None}
    assert CborSerializer().write(path, value) == value
    assert CborSerializer().load(path) == value


def test_cbor_wire_bytes(tmp_path):
    path = tmp_path / "state.cbor"
    CBOR.write(path, {"a": 1})
    assert path.read_bytes() == b"\xa1\x61\x61\x01"


def test_cbor_parse_error(tmp_path):
    path = tmp_path / "state.cbor"
    path.write_bytes(b"")
    with pytest.raises(SerializationError, match="Unable to parse CBOR"):
        CBOR.load(path)


def test_cbor_create_failure(tmp_path):
    with pytest.raises(SerializationError, match="Failed creating file"):
        CBOR.write(tmp_path / "no" / "such" / "dir.cbor", {"a": 1})


def test_default_written_when_missing(tmp_path):
    path = tmp_path / "config.toml"
    result = TOML.load_or_generate_default(path, lambda: {"gapless": True}, False)
    assert result == {"gapless": True}
    assert TOML.load(path) == {"gapless": True}


def test_existing_file_is_loaded(tmp_path):
    path = tmp_path / "state.cbor"
    CBOR.write(path, {"volume": 10})
    result = CBOR.load_or_generate_default(path, lambda: {"volume": 0}, True)
    assert result == {"volume": 10}


def test_parse_failure_regenerates_when_allowed(tmp_path):
    path = tmp_path / "state.cbor"
    path.write_bytes(b"")
    result = CBOR.load_or_generate_default(path, lambda: {"volume": 0}, True)
    assert result == {"volume": 0}
    assert CBOR.load(path) == {"volume": 0}


def test_parse_failure_raises_when_not_allowed(tmp_path):
    path = tmp_path / "config.toml"
    path.write_text("= broken")
    with pytest.raises(SerializationError, match="Unable to parse") as info:
        TOML.load_or_generate_default(path, lambda: {}, False)
    assert str(path) in str(info.value)
    assert path.read_text() == "= broken"


def test_default_callable_errors_propagate(tmp_path):
    def failing_default():
        raise SerializationError("no default")

    with pytest.raises(SerializationError, match="no default"):
        TOML.load_or_generate_default(tmp_path / "x.toml", failing_default, True)