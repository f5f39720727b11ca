"""`.env` text parser.

Purpose
-------
Turn the raw text of one ``.env`` file into an ordered ``dict[str, str]``.

Supported syntax
----------------
* ``KEY=VALUE`` lines; whitespace around keys and unquoted values is trimmed.
* Blank lines and lines starting with ``#`` are ignored, as are lines
  without ``=`` or without a key.
* Inline comments after `` #`` on unquoted values.
* Single and double quoted values, optionally spanning several lines.
* ``$NAME`` and ``${NAME}`` interpolation in unquoted and double-quoted
  values. Single quotes keep the text literal.

Interpolation looks names up in the keys parsed so far, then in the
interpolation source (an explicit mapping or the process environment) unless
``ignore_process_env`` is set. Unknown names become the empty string. There
is exactly one substitution pass per syntax. The braced pass runs first and
its output feeds the bare pass; the bare pass output is final.
"""

from __future__ import annotations

import re
from collections.abc import Mapping

from ...observability import log_debug
from ..env.default import process_env

_LINE_SPLIT = re.compile(r"\r?\n")
_BRACED_REFERENCE = re.compile(r"\$\{([^}]+)\}")
_BARE_REFERENCE = re.compile(r"(?<!\$)\$([A-Z_]\w*)", re.IGNORECASE)
_QUOTES = frozenset({'"', "'"})


class EnvParser:
    """Parse ``.env`` contents into a key/value mapping.

    Examples
    --------
    >>> EnvParser('PORT=3000\\nHOST=localhost').parse()
    {'PORT': '3000', 'HOST': 'localhost'}
    >>> EnvParser('MESSAGE="Hello World" # greeting').parse()
    {'MESSAGE': 'Hello World'}
    """

    def __init__(
        self,
        contents: str,
        *,
        ignore_process_env: bool = False,
        env_source: Mapping[str, str | None] | None = None,
    ) -> None:
        self._contents = contents
        self._ignore_process_env = ignore_process_env
        self._env_source = env_source

    def parse(self) -> dict[str, str]:
        """Return the parsed mapping; later occurrences of a key win."""

        result: dict[str, str] = {}
        open_quote: str | None = None
        pending = ""
        pending_key = ""

        for line in _LINE_SPLIT.split(self._contents):
            if open_quote is not None:
                pending += f"\n{line}"
                if open_quote in line:
                    result[pending_key] = self._finish_quoted(pending, open_quote, result)
                    open_quote, pending, pending_key = None, "", ""
                continue

            trimmed = line.strip()
            if not trimmed or trimmed.startswith("#"):
                continue
            key, sep, value = trimmed.partition("=")
            key = key.strip()
            if not sep or not key:
                continue

            first = value[:1]
            if first in _QUOTES:
                if value.rfind(first) > 0:
                    result[key] = self._finish_quoted(value, first, result)
                else:
                    open_quote, pending, pending_key = first, value, key
                continue

            comment = value.find(" #")
            if comment != -1:
                value = value[:comment]
            result[key] = self._interpolate(value.strip(), result)

        if open_quote is not None:
            log_debug("dotenv_unterminated_value", source="dotenv", path=None, key=pending_key)
        return result

    def _finish_quoted(self, raw: str, quote: str, parsed: Mapping[str, str]) -> str:
        value = _unquote(raw, quote)
        if quote == "'":
            return value
        return self._interpolate(value, parsed)

    def _interpolate(self, value: str, parsed: Mapping[str, str]) -> str:
        """Substitute ``${NAME}`` first, then bare ``$NAME`` references."""

        def _lookup(match: re.Match[str]) -> str:
            return self._resolve(match.group(1), parsed)

        value = _BRACED_REFERENCE.sub(_lookup, value)
        return _BARE_REFERENCE.sub(_lookup, value)

    def _resolve(self, name: str, parsed: Mapping[str, str]) -> str:
        if name in parsed:
            return parsed[name]
        if self._ignore_process_env:
            return ""
        source = self._env_source if self._env_source is not None else process_env()
        found = source.get(name)
        return found if found is not None else ""


def _unquote(raw: str, quote: str) -> str:
    """Drop the opening quote and everything from the last *quote* onwards.

    Examples
    --------
    >>> _unquote('"a "quoted" word" tail', '"')
    'a "quoted" word'
    >>> _unquote("'", "'")
    ''
    """

    body = raw[1:]
    closing = body.rfind(quote)
    return body[:closing] if closing != -1 else body


def parse_env(
    contents: str,
    *,
    ignore_process_env: bool = False,
    env_source: Mapping[str, str | None] | None = None,
) -> dict[str, str]:
    """Parse *contents*; functional shortcut for :class:`EnvParser`.

    Examples
    --------
    >>> parse_env('B=base\\nP=${B}/x', env_source={})
    {'B': 'base', 'P': 'base/x'}
    >>> parse_env("K='$X'")
    {'K': '$X'}
    """

    return EnvParser(contents, ignore_process_env=ignore_process_env, env_source=env_source).parse()
