"""Split a documentation code block into individual console commands.

A single documentation example frequently chains several requests::

    PUT /twitter/_doc/1
    {"user": "kimchy"}

    GET /twitter/_doc/1 <1>

Each line starting with an HTTP verb begins a new command; the lines that
follow it (typically a JSON body) belong to that command until the next verb
line.  Asciidoc callout markers such as ``<1>`` are stripped from every line
so they never leak into the generated source or break rule matching.
"""

from __future__ import annotations

import re

from consolegen.exceptions import ExtractionMismatch
from consolegen.models import Command


VERB_RE = re.compile(r"^(?:HEAD|GET|PUT|DELETE|POST)(?=\s|$)")
"""Matches a line that starts a new request."""

# One or more trailing callouts ("<1>", "<1> <2>") and the whitespace around them.
_CALLOUT_RE = re.compile(r"(?:\s*<\d+>)+\s*$")


def strip_callouts(line: str) -> str:
    """Remove trailing asciidoc callout markers from *line*.

    Idempotent: stripping an already stripped line returns it unchanged.

    Example::

        >>> strip_callouts('GET /_search?q=user:kimchy <1>')
        'GET /_search?q=user:kimchy'
    """
    return _CALLOUT_RE.sub("", line)


def is_request_line(line: str) -> bool:
    """Return ``True`` if *line* starts with one of the recognised HTTP verbs."""
    return VERB_RE.match(line) is not None


def first_line(text: str) -> str:
    """Return the first line of *text*, used to name a command in messages."""
    return text.split("\n", 1)[0]


def split_commands(raw: str) -> list[str]:
    """Split the raw text of an example into the text of its commands.

    Lines are scanned in order.  A verb line closes the command being
    accumulated and starts a new one.  Lines before the first verb line are
    dropped when blank; non-blank ones are kept together and emitted as a
    leading segment once a verb line is found.  When the text contains no
    verb line at all, nothing is emitted.

    Every returned command ends with a newline, and callout markers are
    removed from every line.

    Args:
        raw: The raw text of a documentation code block.

    Returns:
        The commands in encounter order.  Empty for empty input or input
        without a request line.

    Example::

        >>> split_commands("GET /\\nGET /_cat/health?v <1>\\n")
        ['GET /\\n', 'GET /_cat/health?v\\n']
    """
    lines = raw.split("\n")
    if lines and lines[-1] == "":
        lines.pop()

    commands: list[str] = []
    buf: list[str] = []
    seen_request = False

    for line in lines:
        line = strip_callouts(line.removesuffix("\r"))

        if is_request_line(line):
            if buf:
                commands.append("".join(buf))
            buf = []
            seen_request = True
        elif not seen_request and not line.strip():
            continue

        buf.append(line + "\n")

    if seen_request and buf:
        commands.append("".join(buf))

    return commands


def parse_command(text: str) -> Command:
    """Break the text of one command into its structural parts.

    Args:
        text: A single command as returned by :func:`split_commands`.

    Returns:
        A :class:`~consolegen.models.Command` with the verb, the non-empty
        path segments, the query string (``None`` when the request line has
        no ``?``) and the body (``None`` when only whitespace follows the
        request line).

    Raises:
        ExtractionMismatch: If the first line is not a request line.

    Example::

        >>> parse_command("GET /twitter/_doc/0?routing=user1\\n")
        Command(verb='GET', path=['twitter', '_doc', '0'], query='routing=user1', body=None)
    """
    first, _, rest = text.partition("\n")
    first = first.strip()
    if not is_request_line(first):
        raise ExtractionMismatch(f"not a request line: {first!r}")

    verb, _, target = first.partition(" ")
    path, sep, query = target.strip().partition("?")

    return Command(
        verb=verb,
        path=[segment for segment in path.split("/") if segment],
        query=query if sep else None,
        body=rest.strip() or None,
    )
