"""Loading and writing of TOML and CBOR files, with defaults for missing files."""

from __future__ import annotations

import os
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Callable

import cbor2
import tomli
import tomli_w


class SerializationError(Exception):
    """A file could not be read, parsed or written."""


class Serializer(ABC):
    """Reads and writes values of one file format."""

    @abstractmethod
    def load(self, path: str | os.PathLike) -> Any:
        """Read and parse the file at ``path``."""

    @abstractmethod
    def write(self, path: str | os.PathLike, value: Any) -> Any:
        """Write ``value`` to ``path`` and return it."""

    def load_or_generate_default(
        self,
        path: str | os.PathLike,
        default: Callable[[], Any],
        default_on_parse_failure: bool,
    ) -> Any:
        """Load ``path``; write and return ``default()`` if it is missing.

        If the file cannot be parsed and ``default_on_parse_failure`` is set,
        it is overwritten with the default value.
        """
        path = Path(path)
        if not path.exists():
            return self.write(path, default())
        try:
            return self.load(path)
        except SerializationError as exc:
            if default_on_parse_failure:
                return self.write(path, default())
            raise SerializationError(f"Unable to parse {path}: {exc}") from exc


def _drop_none(value: Any) -> Any:
    if isinstance(value, dict):
        return {k: _drop_none(v) for k, v in value.items() if v is not None}
    if isinstance(value, (list, tuple)):
        return [_drop_none(v) for v in value]
    return value


class TomlSerializer(Serializer):
    """TOML files; keys whose value is ``None`` are left out when writing."""

    def load(self, path: str | os.PathLike) -> Any:
        path = Path(path)
        try:
            contents = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise SerializationError(f"Unable to read {path}: {exc}") from exc
        try:
            return tomli.loads(contents)
        except tomli.TOMLDecodeError as exc:
            raise SerializationError(f"Unable to parse toml {path}: {exc}") from exc

    def write(self, path: str | os.PathLike, value: Any) -> Any:
        path = Path(path)
        try:
            content = tomli_w.dumps(_drop_none(value))
        except (TypeError, ValueError) as exc:
            raise SerializationError(f"Failed serializing value: {exc}") from exc
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as exc:
            raise SerializationError(f"Failed writing content to {path}: {exc}") from exc
        return value


class CborSerializer(Serializer):
    """CBOR files."""

    def load(self, path: str | os.PathLike) -> Any:
        path = Path(path)
        try:
            contents = path.read_bytes()
        except OSError as exc:
            raise SerializationError(f"Unable to read {path}: {exc}") from exc
        try:
            return cbor2.loads(contents)
        except (cbor2.CBORDecodeError, ValueError) as exc:
            raise SerializationError(f"Unable to parse CBOR {path}: {exc}") from exc

    def write(self, path: str | os.PathLike, value: Any) -> Any:
        path = Path(path)
        try:
            handle = path.open("wb")
        except OSError as exc:
            raise SerializationError(f"Failed creating file {path}: {exc}") from exc
        with handle:
            try:
                cbor2.dump(value, handle)
            except (cbor2.CBOREncodeError, OSError, TypeError, ValueError) as exc:
                raise SerializationError(
                    f"Failed writing content to {path}: {exc}"
                ) from exc
        return value


TOML = TomlSerializer()
CBOR = CborSerializer()