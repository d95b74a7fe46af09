"""Translation rules from console syntax to Go client calls.

Every rule pairs a *pattern* -- a regular expression tested against the start
of one command's text -- with a *render* function producing the Go call for
that command.  Rules are registered in declaration order with the
:func:`rule` decorator and frozen into :data:`RULES` at import time.

Matching is first-match-wins:

1. The translator tries every pattern in :data:`RULES` order.
2. The first rule whose pattern matches is selected; no other rule is ever
   tried for that command, even if its renderer fails.
3. The renderer re-matches the command with a stricter extraction pattern
   using named groups.  If that pattern does not match, the renderer raises
   :class:`~consolegen.exceptions.ExtractionMismatch` rather than producing a
   partial call.

Patterns overlap (the generic ``Indices.Create`` pattern matches every
``PUT`` request), so order encodes priority.  New shapes are added by
appending rules *before* the generic rule they would otherwise fall into,
never by changing an existing pattern.

Renderers return the call without a trailing newline.  Single-line calls are
indented by one tab; multi-line calls put every argument on its own line,
indented by two tabs, and close the call on a line of its own.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Callable, Optional

from consolegen.console.converters import (
    ARG_INDENT,
    body_to_reader,
    go_quote,
    params_to_arguments,
    query_to_params,
)
from consolegen.console.splitter import first_line
from consolegen.exceptions import ExtractionMismatch


@dataclass(frozen=True)
class TranslateRule:
    """A rule for translating one console command to Go source.

    Attributes:
        name: The Go API the rule renders (e.g. ``"Search"``), used in
            diagnostics and by ``consolegen inspect``.
        pattern: Compiled recogniser, matched from the start of the command.
        render: Converts the full command text to the Go call.
    """

    name: str
    pattern: re.Pattern[str]
    render: Callable[[str], str]

    def matches(self, text: str) -> bool:
        """Return ``True`` when the rule's pattern matches the start of *text*."""
        return self.pattern.match(text) is not None


_registry: list[TranslateRule] = []


def rule(name: str, pattern: str) -> Callable[[Callable[[str], str]], Callable[[str], str]]:
    """Register the decorated function as the renderer of a new rule.

    The rule is appended after every rule registered so far.
    """

    def decorator(func: Callable[[str], str]) -> Callable[[str], str]:
        _registry.append(TranslateRule(name=name, pattern=re.compile(pattern), render=func))
        return func

    return decorator


# ---------------------------------------------------------------------------
# Shared helpers
# ---------------------------------------------------------------------------

# Index names and document IDs as they appear in documentation examples.
_INDEX = r"[\w.-]+"
_ID = r"[\w-]+"


def _extract(pattern: re.Pattern[str], text: str) -> re.Match[str]:
    """Match *pattern* against *text*, raising when the shape does not fit."""
    match = pattern.match(text)
    if match is None:
        raise ExtractionMismatch(f"cannot match example source to pattern: {first_line(text)!r}")
    return match


def _arguments(api: str, raw_params: Optional[str], *, pretty: bool = True) -> str:
    """Convert the raw query capture of a command to argument lines.

    When the rule appends ``WithPretty()`` itself, a ``pretty`` key in the
    query is dropped so the option is not passed twice.
    """
    if raw_params is None:
        return ""
    params = query_to_params(raw_params)
    if pretty:
        params.pop("pretty", None)
    return params_to_arguments(api, params)


def _pretty(api: str) -> str:
    return f"{ARG_INDENT}es.{api}.WithPretty(),\n"


def _call(api: str, arguments: list[str]) -> str:
    """Lay out a multi-line call of ``es.<api>`` with pre-rendered argument lines."""
    return f"\tres, err := es.{api}(\n" + "".join(arguments) + "\t)"


def _arg(expression: str) -> str:
    return f"{ARG_INDENT}{expression},\n"


# ---------------------------------------------------------------------------
# Rules, in priority order
# ---------------------------------------------------------------------------


@rule("Info", r"^GET /\s*$")
def _info(text: str) -> str:
    return "\tres, err := es.Info()"


@rule("Cat.Health", r"^GET /_cat/health\?v\b")
def _cat_health(text: str) -> str:
    return "\tres, err := es.Cat.Health(es.Cat.Health.WithV(true))"


_CLUSTER_SETTINGS_RE = re.compile(
    r"(?s)^PUT /?_cluster/settings(?P<params>\?\S*)?\s+(?P<body>\S.*)"
)


@rule("Cluster.PutSettings", r"^PUT /?_cluster/settings\b")
def _cluster_put_settings(text: str) -> str:
    match = _extract(_CLUSTER_SETTINGS_RE, text)
    api = "Cluster.PutSettings"
    return _call(api, [
        _arg(body_to_reader(match["body"])),
        _arguments(api, match["params"], pretty=False),
    ])


_DOCUMENT_WRITE_RE = re.compile(
    rf"(?s)^(?:PUT|POST) /?(?P<index>{_INDEX})/(?P<api>_doc|_create)"
    rf"(?:/(?P<id>{_ID}))?/?(?P<params>\?\S*)?\s+(?P<body>\S.*)"
)


@rule("Index", rf"^(?:PUT|POST) /?{_INDEX}/(?:_doc|_create)\b")
def _index(text: str) -> str:
    """Render ``es.Create`` for ``_create`` and ``es.Index`` for ``_doc``.

    ``Create`` takes the document ID as a positional argument and requires
    it; ``Index`` takes it as an optional ``WithDocumentID`` option.
    """
    match = _extract(_DOCUMENT_WRITE_RE, text)
    index, doc_id = match["index"], match["id"]
    body = body_to_reader(match["body"])

    if match["api"] == "_create":
        if doc_id is None:
            raise ExtractionMismatch(f"document ID required for _create: {first_line(text)!r}")
        api = "Create"
        arguments = [_arg(go_quote(index)), _arg(go_quote(doc_id)), _arg(body)]
    else:
        api = "Index"
        arguments = [_arg(go_quote(index)), _arg(body)]
        if doc_id is not None:
            arguments.append(_arg(f"es.Index.WithDocumentID({go_quote(doc_id)})"))

    arguments.append(_arguments(api, match["params"]))
    arguments.append(_pretty(api))
    return _call(api, arguments)


_INDICES_CREATE_RE = re.compile(
    r"(?s)^PUT /?(?P<index>[^\s?]+)(?P<params>\?\S*)?\s*(?P<body>\S.*)?"
)


@rule("Indices.Create", r"^PUT /?\S+")
def _indices_create(text: str) -> str:
    match = _extract(_INDICES_CREATE_RE, text)
    api = "Indices.Create"
    index = go_quote(match["index"].rstrip("/"))

    if match["params"] is None and match["body"] is None:
        return f"\tres, err := es.{api}({index})"

    arguments = [_arg(index)]
    if match["body"] is not None:
        arguments.append(_arg(f"es.{api}.WithBody({body_to_reader(match['body'])})"))
    arguments.append(_arguments(api, match["params"], pretty=False))
    return _call(api, arguments)


def _document_call(api: str, match: re.Match[str]) -> str:
    """Render a call addressing one document by index and ID.

    Without query parameters the call fits on one line; otherwise every
    argument goes on its own line.
    """
    index, doc_id = go_quote(match["index"]), go_quote(match["id"])
    if match["params"] is None:
        return f"\tres, err := es.{api}({index}, {doc_id}, es.{api}.WithPretty())"
    return _call(api, [
        _arg(index),
        _arg(doc_id),
        _arguments(api, match["params"]),
        _pretty(api),
    ])


_DOCUMENT_READ_RE = re.compile(
    rf"(?s)^(?P<verb>GET|HEAD) /?(?P<index>{_INDEX})/(?P<api>_doc|_source)"
    rf"/(?P<id>{_ID})(?P<params>\?\S*)?\s*\Z"
)


@rule("Get", rf"^GET /?{_INDEX}/(?:_doc|_source)/{_ID}")
def _get(text: str) -> str:
    match = _extract(_DOCUMENT_READ_RE, text)
    api = "Get" if match["api"] == "_doc" else "GetSource"
    return _document_call(api, match)


@rule("Exists", rf"^HEAD /?{_INDEX}/(?:_doc|_source)/{_ID}")
def _exists(text: str) -> str:
    match = _extract(_DOCUMENT_READ_RE, text)
    api = "Exists" if match["api"] == "_doc" else "ExistsSource"
    return _document_call(api, match)


_DELETE_RE = re.compile(
    rf"(?s)^DELETE /?(?P<index>{_INDEX})/_doc/(?P<id>{_ID})(?P<params>\?\S*)?\s*\Z"
)


@rule("Delete", rf"^DELETE /?{_INDEX}/_doc/{_ID}")
def _delete(text: str) -> str:
    match = _extract(_DELETE_RE, text)
    return _document_call("Delete", match)


_SEARCH_RE = re.compile(
    r"(?s)^GET /?(?:(?P<index>[^\s/?]+)/)?_search(?P<params>\?\S*)?"
    r"(?:\s+(?P<body>\S.*?))?\s*\Z"
)


@rule("Search", r"^GET /?(?:[^\s/?]+/)?_search\b")
def _search(text: str) -> str:
    """Render ``es.Search``; the index and the body are both optional.

    A comma-separated index list (``twitter,kimchy``) becomes one string
    argument per index.
    """
    match = _extract(_SEARCH_RE, text)
    api = "Search"
    arguments: list[str] = []

    if match["index"] is not None:
        indices = ", ".join(go_quote(name) for name in match["index"].split(",") if name)
        arguments.append(_arg(f"es.Search.WithIndex({indices})"))
    if match["body"] is not None:
        arguments.append(_arg(f"es.Search.WithBody({body_to_reader(match['body'])})"))
    arguments.append(_arguments(api, match["params"]))
    arguments.append(_pretty(api))
    return _call(api, arguments)


RULES: tuple[TranslateRule, ...] = tuple(_registry)
"""Every registered rule, in priority order."""
