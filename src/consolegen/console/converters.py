"""Convert the query string and JSON body of a console command into Go source.

These helpers are shared by every rule in :mod:`consolegen.console.rules`.
They are pure functions of their input and raise the
:class:`~consolegen.exceptions.TranslationError` family on malformed input;
nothing is logged or swallowed here.

**Query parameters** become functional options of the Go API, one per line::

    GET /twitter/_doc/0?stored_fields=tags,counter&routing=user1

    ->  es.Get.WithRouting("user1"),
        es.Get.WithStoredFields("tags,counter"),

Keys are always rendered in ascending lexicographic order so that two query
strings carrying the same parameters produce byte-identical output.

**Request bodies** are re-indented to sit inside the generated call and
wrapped in a ``strings.NewReader`` raw-string literal.
"""

from __future__ import annotations

import json
import re
from fractions import Fraction
from typing import Any, Mapping, Sequence
from urllib.parse import unquote_plus

from consolegen.console.naming import name_to_go
from consolegen.exceptions import BodyFormatError, DurationParseError, QueryParseError


ARG_INDENT = "\t\t"
"""Indentation of one argument line inside a multi-line Go call."""

BODY_INDENT = "  "
"""Indentation unit of the re-formatted JSON body."""


# ---------------------------------------------------------------------------
# Query strings
# ---------------------------------------------------------------------------

# A percent sign not followed by two hex digits.
_BAD_ESCAPE_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def query_to_params(query: str) -> dict[str, list[str]]:
    """Parse a raw query string into a mapping of key to values.

    A leading ``/`` and then a leading ``?`` are stripped, so the raw
    ``params`` capture of a rule can be passed in as-is.  Pairs are
    separated by ``&``; ``+`` decodes to a space and ``%XX`` escapes are
    decoded.  A key without ``=`` gets an empty value, and repeated keys
    accumulate their values in encounter order.

    Args:
        query: The query string (e.g., ``"?routing=user1&refresh"``).

    Returns:
        A dict mapping each key to the list of its values.

    Raises:
        QueryParseError: If a pair contains an invalid percent-escape or the
            query uses ``;`` as a separator.

    Example::

        >>> query_to_params("?stored_fields=tags,counter&refresh")
        {'stored_fields': ['tags,counter'], 'refresh': ['']}
    """
    query = query.removeprefix("/").removeprefix("?")

    params: dict[str, list[str]] = {}
    for pair in query.split("&"):
        if not pair:
            continue
        if ";" in pair:
            raise QueryParseError(f"invalid semicolon separator in query: {pair!r}")
        key, _, value = pair.partition("=")
        params.setdefault(_unescape(key), []).append(_unescape(value))
    return params


def _unescape(text: str) -> str:
    """Decode ``+`` and ``%XX`` escapes, rejecting malformed escapes."""
    if _BAD_ESCAPE_RE.search(text):
        raise QueryParseError(f"invalid URL escape in {text!r}")
    return unquote_plus(text)


# ---------------------------------------------------------------------------
# Durations
# ---------------------------------------------------------------------------

_UNIT_NANOSECONDS: dict[str, int] = {
    "ns": 1,
    "us": 1_000,
    "µs": 1_000,  # micro sign
    "μs": 1_000,  # Greek mu
    "ms": 1_000_000,
    "s": 1_000_000_000,
    "m": 60 * 1_000_000_000,
    "h": 60 * 60 * 1_000_000_000,
}

# Longer units first so that "ms" is never read as "m" followed by "s".
_DURATION_PART_RE = re.compile(
    r"(\d+\.?\d*|\.\d+)(ns|us|µs|μs|ms|s|m|h)"
)

_MAX_DURATION = 2**63 - 1
_MIN_DURATION = -(2**63)


def parse_duration(value: str) -> int:
    """Parse a Go-style duration expression and return nanoseconds.

    A duration is an optional sign followed by a sequence of decimal numbers,
    each with an optional fraction and a mandatory unit suffix (``ns``,
    ``us``, ``ms``, ``s``, ``m``, ``h``), e.g. ``"300ms"``, ``"1.5h"`` or
    ``"2h45m"``.  The bare string ``"0"`` is also accepted.

    Args:
        value: The duration expression.

    Returns:
        The duration in nanoseconds (negative for a leading ``-``).

    Raises:
        DurationParseError: If *value* is empty, lacks a unit, contains
            trailing garbage, or overflows a 64-bit duration.

    Example::

        >>> parse_duration("5s")
        5000000000
        >>> parse_duration("1m30s")
        90000000000
    """
    text = value
    sign = 1
    if text[:1] in ("-", "+"):
        sign = -1 if text[0] == "-" else 1
        text = text[1:]

    if text == "0":
        return 0
    if not text:
        raise DurationParseError(f"invalid duration {value!r}")

    total = Fraction(0)
    pos = 0
    while pos < len(text):
        match = _DURATION_PART_RE.match(text, pos)
        if match is None:
            raise DurationParseError(f"invalid duration {value!r}")
        number, unit = match.groups()
        total += Fraction(number) * _UNIT_NANOSECONDS[unit]
        pos = match.end()

    nanoseconds = sign * int(total)
    if not _MIN_DURATION <= nanoseconds <= _MAX_DURATION:
        raise DurationParseError(f"invalid duration {value!r}: out of range")
    return nanoseconds


# ---------------------------------------------------------------------------
# Go literals
# ---------------------------------------------------------------------------

_GO_ESCAPES: dict[str, str] = {
    "\a": r"\a",
    "\b": r"\b",
    "\f": r"\f",
    "\n": r"\n",
    "\r": r"\r",
    "\t": r"\t",
    "\v": r"\v",
    "\\": r"\\",
    '"': r"\"",
}


def go_quote(value: str) -> str:
    """Return *value* as a double-quoted Go string literal.

    Mirrors ``strconv.Quote``: backslashes, quotes and the usual control
    characters get their short escapes, other non-printable characters are
    written as ``\\xNN``, ``\\uNNNN`` or ``\\UNNNNNNNN``, and printable
    Unicode is kept as-is.
    """
    out: list[str] = ['"']
    for char in value:
        if char in _GO_ESCAPES:
            out.append(_GO_ESCAPES[char])
        elif char.isprintable():
            out.append(char)
        else:
            code = ord(char)
            if code < 0x80:
                out.append(f"\\x{code:02x}")
            elif code <= 0xFFFF:
                out.append(f"\\u{code:04x}")
            else:
                out.append(f"\\U{code:08x}")
    out.append('"')
    return "".join(out)


# ---------------------------------------------------------------------------
# Parameters to arguments
# ---------------------------------------------------------------------------

# API parameters typed as integers by the client.
_NUMERIC_KEYS = frozenset({"from", "size", "terminate_after", "version"})

# Common parameters the client exposes as argument-less switches.
_FLAG_KEYS = frozenset({"error_trace", "human", "pretty"})

_CANONICAL_NAMES: dict[str, str] = {
    "q": "Query",
}


def params_to_arguments(api: str, params: Mapping[str, Sequence[str]]) -> str:
    """Render query parameters as functional-option arguments of a Go call.

    Every key becomes one ``es.<api>.With<Name>(<value>),`` line, in
    ascending key order.  Multiple values of one key are joined with ``,``.
    The value is rendered according to the key:

    * ``timeout`` -- parsed with :func:`parse_duration` and rendered as a
      ``time.Duration(<nanoseconds>)`` literal.
    * ``from``, ``size``, ``terminate_after``, ``version`` -- unquoted.
    * ``pretty``, ``human``, ``error_trace`` -- no argument at all.
    * everything else -- a Go string literal.

    The ``q`` key is rendered as ``WithQuery``; other names go through
    :func:`~consolegen.console.naming.name_to_go`.

    Args:
        api: The API path on the client (e.g., ``"Search"``,
            ``"Indices.Create"``).
        params: Mapping of key to values, as returned by
            :func:`query_to_params`.

    Returns:
        The argument lines, each indented and terminated by ``",\\n"``.
        Empty when *params* is empty.

    Raises:
        DurationParseError: If a ``timeout`` value is not a valid duration.

    Example::

        >>> print(params_to_arguments("Delete", {"timeout": ["5s"]}), end="")
                es.Delete.WithTimeout(time.Duration(5000000000)),
    """
    lines: list[str] = []
    for key in sorted(params):
        name = _CANONICAL_NAMES.get(key) or name_to_go(key)
        value = _render_value(key, params[key])
        lines.append(f"{ARG_INDENT}es.{api}.With{name}({value}),\n")
    return "".join(lines)


def _render_value(key: str, values: Sequence[str]) -> str:
    """Render the Go expression passed to the ``With<Name>`` option of *key*."""
    if key in _FLAG_KEYS:
        return ""
    if key == "timeout":
        first = values[0] if values else ""
        return f"time.Duration({parse_duration(first)})"
    joined = ",".join(values)
    if key in _NUMERIC_KEYS:
        return joined
    return go_quote(joined)


# ---------------------------------------------------------------------------
# Request body
# ---------------------------------------------------------------------------


def _reject_constant(name: str) -> Any:  # noqa: ANN401
    raise ValueError(f"{name} is not valid JSON")


_JSON_WHITESPACE = frozenset(" \t\n\r")


def _indent_json(raw: str, prefix: str, indent: str) -> str:
    """Re-indent the already validated JSON text *raw*, token by token.

    Only whitespace between tokens is rewritten: strings and numbers are
    copied exactly as written, so escapes, exponents, trailing zeros and
    duplicate keys survive.  Empty objects and arrays stay on one line.
    Every line after the first starts with *prefix*.
    """
    out: list[str] = []
    depth = 0
    need_indent = False
    in_string = escaped = False

    def newline() -> None:
        out.append("\n" + prefix + indent * depth)

    for char in raw:
        if in_string:
            out.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue

        if char in _JSON_WHITESPACE:
            continue

        if need_indent and char not in "]}":
            need_indent = False
            depth += 1
            newline()

        if char in "{[":
            out.append(char)
            need_indent = True
        elif char in "]}":
            if need_indent:
                need_indent = False
            else:
                depth -= 1
                newline()
            out.append(char)
        elif char == ",":
            out.append(char)
            newline()
        elif char == ":":
            out.append(": ")
        else:
            if char == '"':
                in_string = True
            out.append(char)

    return "".join(out)


def body_to_reader(raw: str) -> str:
    """Re-indent a JSON body and wrap it in a ``strings.NewReader`` literal.

    The body is first parsed to make sure it is a single valid JSON
    document, then re-indented from its original text with a two-space
    unit; every line after the first is prefixed with the argument
    indentation so the literal lines up with the surrounding call.  Literal
    text (numbers, escapes, key order, repeated keys) is kept as written,
    and no trailing newline is kept before the closing backtick.  A
    backtick inside the body is spliced in as a separate interpreted
    string, since Go raw literals cannot contain one.

    Args:
        raw: The JSON text following the request line.

    Returns:
        A Go expression such as ``strings.NewReader(`{...}`)``.

    Raises:
        BodyFormatError: If *raw* is not a single valid JSON document, is
            nested too deeply to parse, or cannot be encoded as UTF-8.
    """
    try:
        raw.encode("utf-8")
        json.loads(raw, parse_constant=_reject_constant)
    except UnicodeEncodeError as exc:
        raise BodyFormatError(f"error parsing request body: {exc.reason} in body") from exc
    except RecursionError as exc:
        raise BodyFormatError("error parsing request body: nested too deeply") from exc
    except ValueError as exc:
        raise BodyFormatError(f"error parsing request body: {exc}") from exc

    formatted = _indent_json(raw, ARG_INDENT, BODY_INDENT)
    formatted = formatted.replace("`", '` + "`" + `')
    return f"strings.NewReader(`{formatted}`)"
