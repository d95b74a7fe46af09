"""Load documentation examples from a URL, local file, or stdin.

This module handles all I/O for fetching the examples report (the JSON list of
code examples extracted from the Elasticsearch reference documentation) and
validating it into :class:`~consolegen.models.Example` objects.

The single public function is :func:`load_examples`.  The report is expected
to be a JSON array of objects shaped like::

    {
      "source_location": {"file": "docs/get.asciidoc", "line": 10},
      "digest": "fbcf5078a6a9e09790553804054c36b3",
      "source": "GET twitter/_doc/0"
    }

Extra keys are ignored; a missing ``digest`` is derived from ``source``.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any

import httpx
from pydantic import TypeAdapter, ValidationError

from consolegen.exceptions import InputError
from consolegen.models import Example


_EXAMPLES_ADAPTER = TypeAdapter(list[Example])


def load_examples(source: str) -> list[Example]:
    """Load the examples report from URL, file path, or stdin ('-').

    Args:
        source: A URL (http/https), file path, or '-' for stdin.

    Returns:
        The validated examples, in document order.

    Raises:
        InputError: If the source cannot be loaded, is not a JSON array, or
            an entry fails validation.
    """
    if source == "-":
        content = _load_from_stdin()
    elif source.startswith(("http://", "https://")):
        content = _load_from_url(source)
    else:
        content = _load_from_file(source)

    return parse_examples(content, hint=source)


def _load_from_stdin() -> str:
    """Read the report from stdin.

    Raises:
        InputError: If stdin cannot be read or is empty.
    """
    try:
        content = sys.stdin.read()
    except Exception as exc:
        raise InputError(f"Failed to read from stdin: {exc}") from exc

    if not content.strip():
        raise InputError("No input received from stdin")
    return content


def _load_from_url(url: str) -> str:
    """Fetch the report from a URL.

    Raises:
        InputError: If the URL cannot be fetched.
    """
    try:
        response = httpx.get(url, timeout=30.0, follow_redirects=True)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise InputError(
            f"HTTP {exc.response.status_code} fetching examples from {url}"
        ) from exc
    except httpx.RequestError as exc:
        raise InputError(f"Failed to fetch examples from {url}: {exc}") from exc

    return response.text


def _load_from_file(path: str) -> str:
    """Read the report from a local file.

    Raises:
        InputError: If the file is missing, unreadable, or empty.
    """
    file_path = Path(path)
    if not file_path.is_file():
        raise InputError(f"Examples file not found: {path}")

    try:
        content = file_path.read_text(encoding="utf-8")
    except OSError as exc:
        raise InputError(f"Failed to read examples file {path}: {exc}") from exc

    if not content.strip():
        raise InputError(f"Examples file is empty: {path}")
    return content


def parse_examples(content: str, hint: str = "input") -> list[Example]:
    """Parse and validate the JSON text of an examples report.

    Args:
        content: The raw JSON text.
        hint: Where the text came from, used in error messages.

    Returns:
        The validated examples.

    Raises:
        InputError: If the text is not JSON, not an array, or an entry is
            invalid.
    """
    try:
        data: Any = json.loads(content)
    except json.JSONDecodeError as exc:
        raise InputError(f"Invalid JSON in {hint}: {exc}") from exc

    if not isinstance(data, list):
        raise InputError(
            f"Examples must be a JSON array (got {type(data).__name__}) in {hint}"
        )

    try:
        return _EXAMPLES_ADAPTER.validate_python(data)
    except ValidationError as exc:
        raise InputError(f"Invalid example in {hint}: {exc}") from exc
