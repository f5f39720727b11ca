"""Flat structured payload loaders.

Purpose
-------
Read JSON or TOML documents whose root is a flat table of variables and
coerce every value into the ``str | None`` shape shared by all sources.

Contents
--------
* :class:`BaseFileLoader` – file reading and value coercion shared by loaders.
* :class:`JSONFileLoader` – JSON objects; arrays and scalars at the root are
  rejected naming the JSON type found.
* :class:`TOMLFileLoader` – TOML documents (roots are always tables).

Coercion rules
--------------
``null`` becomes ``None`` (absent). Strings pass through. Booleans render as
``true``/``false`` and numbers via :func:`str`. Nested arrays and tables are
rendered as compact JSON so they stay parseable downstream.

System Role
-----------
Used by the ``from_json`` and ``from_toml`` source adapters. A missing file
raises :class:`NotFound`, which those adapters translate into an empty
mapping; malformed content raises :class:`InvalidFormat`.
"""

from __future__ import annotations

import datetime as _dt
import json
from collections.abc import Mapping
from pathlib import Path

try:  # Python >= 3.11
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for <3.11
    import tomli as tomllib  # type: ignore[no-redef]

from ...domain.errors import InvalidFormat, NotFound, UnexpectedRootType
from ...observability import log_debug, log_error


class BaseFileLoader:
    """Common utilities shared by the structured loaders."""

    format_name = "file"

    def _read(self, path: str) -> bytes:
        """Read *path* as bytes, raising :class:`NotFound` when the file is missing."""

        file_path = Path(path)
        if not file_path.is_file():
            raise NotFound(f"Configuration file not found: {path}")
        payload = file_path.read_bytes()
        log_debug("config_file_read", source=self.format_name, path=path, size=len(payload))
        return payload

    def _flatten(self, data: Mapping[str, object]) -> dict[str, str | None]:
        return {str(key): stringify(value) for key, value in data.items()}


class JSONFileLoader(BaseFileLoader):
    """Load a flat JSON object.

    Examples
    --------
    >>> from tempfile import NamedTemporaryFile
    >>> tmp = NamedTemporaryFile('w', suffix='.json', delete=False, encoding='utf-8')
    >>> _ = tmp.write('{"PORT": 3000, "DEBUG": true, "TOKEN": null}')
    >>> tmp.close()
    >>> JSONFileLoader().load(tmp.name)
    {'PORT': '3000', 'DEBUG': 'true', 'TOKEN': None}
    >>> Path(tmp.name).unlink()
    """

    format_name = "json"

    def load(self, path: str) -> dict[str, str | None]:
        try:
            data = json.loads(self._read(path))
        except (json.JSONDecodeError, UnicodeDecodeError) as exc:
            log_error("payload_invalid", source="json", path=path, error=str(exc))
            raise InvalidFormat(f"Invalid JSON in {path}: {exc}") from exc
        if not isinstance(data, dict):
            found = json_type_name(data)
            log_error("payload_invalid", source="json", path=path, found=found)
            raise UnexpectedRootType(f'from_json: expected a flat object in "{path}", got {found}')
        result = self._flatten(data)
        log_debug("config_file_loaded", source="json", path=path, keys=len(result))
        return result


class TOMLFileLoader(BaseFileLoader):
    """Load the top-level table of a TOML document."""

    format_name = "toml"

    def load(self, path: str) -> dict[str, str | None]:
        try:
            data = tomllib.loads(self._read(path).decode("utf-8"))
        except (tomllib.TOMLDecodeError, UnicodeDecodeError) as exc:
            log_error("payload_invalid", source="toml", path=path, error=str(exc))
            raise InvalidFormat(f"Invalid TOML in {path}: {exc}") from exc
        result = self._flatten(data)
        log_debug("config_file_loaded", source="toml", path=path, keys=len(result))
        return result


def stringify(value: object) -> str | None:
    """Coerce a decoded JSON/TOML value into an environment string.

    Examples
    --------
    >>> [stringify(v) for v in ("x", 1, 2.5, True, None, [1, "a"], {"k": False})]
    ['x', '1', '2.5', 'true', None, '[1,"a"]', '{"k":false}']
    """

    if value is None:
        return None
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, dict)):
        return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_json_default)
    if isinstance(value, (_dt.date, _dt.time)):
        return value.isoformat()
    return str(value)


def json_type_name(value: object) -> str:
    """Return the JSON type name of a decoded value.

    Examples
    --------
    >>> json_type_name([1, 2, 3]), json_type_name("x"), json_type_name(None), json_type_name(1.5)
    ('array', 'string', 'null', 'number')
    """

    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, (int, float)):
        return "number"
    if isinstance(value, str):
        return "string"
    if isinstance(value, list):
        return "array"
    return "object"


def _json_default(value: object) -> str:
    if isinstance(value, (_dt.date, _dt.time)):
        return value.isoformat()
    return str(value)
