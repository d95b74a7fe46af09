"""Translate command -- convert one console snippet to Go.

``consolegen translate`` is the quick way to check how a snippet will come
out before it lands in the documentation: it takes console syntax from the
argument or stdin and prints the tagged Go fragment on stdout.
"""

from __future__ import annotations

import sys
from typing import Optional

import typer

from consolegen.exceptions import ConsolegenError, InvalidUsageError
from consolegen.models import AssemblyMode, Example, SourceLocation
from consolegen.output import debug, error, print_data


def translate_command(
    text: Optional[str] = typer.Argument(
        None, help="Console snippet. Read from stdin when omitted or '-'."
    ),
    digest: str = typer.Option(
        "", "--digest", help="Digest for the tag markers (default: MD5 of the snippet)."
    ),
    mode: AssemblyMode = typer.Option(
        AssemblyMode.RUN, "--mode", "-m", help="Post-call handling."
    ),
) -> None:
    """Translate a console snippet to Go source.

    Example::

        consolegen translate 'GET /twitter/_doc/0'
        echo 'DELETE /twitter/_doc/1?timeout=5s' | consolegen translate --mode test
    """
    try:
        source = _read_source(text)
        example = Example(
            source_location=SourceLocation(file="-"),
            digest=digest,
            source=source,
        )
        debug(f"Translating snippet @ {example.digest}")
        print_data(example.translated(mode))
    except ConsolegenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None


def _read_source(text: Optional[str]) -> str:
    if text is not None and text != "-":
        return text
    if sys.stdin.isatty():
        raise InvalidUsageError("No snippet given. Pass it as an argument or pipe it to stdin.")
    source = sys.stdin.read()
    if not source.strip():
        raise InvalidUsageError("No snippet received from stdin")
    return source
