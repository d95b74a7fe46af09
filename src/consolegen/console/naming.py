"""Convert wire-format parameter names into Go identifiers.

The Go client exposes every query parameter of an API as a functional option
named ``With<Identifier>``, where ``<Identifier>`` is the parameter name
converted from its wire casing (``snake_case`` or ``kebab-case``) to Go's
exported ``CamelCase``, with well-known initialisms upper-cased the way
``golint`` expects (``id`` becomes ``ID``, ``url`` becomes ``URL``).
"""

from __future__ import annotations

import re


# Matches any run of characters that separates words in a wire name.
_SEPARATOR_RE = re.compile(r"[_\-.\s]+")

_INITIALISMS: dict[str, str] = {
    "api": "API",
    "cpu": "CPU",
    "http": "HTTP",
    "id": "ID",
    "ids": "IDs",
    "ip": "IP",
    "json": "JSON",
    "ttl": "TTL",
    "uri": "URI",
    "url": "URL",
    "uuid": "UUID",
}


def name_to_go(name: str) -> str:
    """Convert a parameter name to an exported Go identifier.

    Applies the following transformations in order:

    1. The name is split on underscores, hyphens, dots and whitespace.
    2. Empty parts (leading ``_`` as in ``_source``) are dropped.
    3. Known initialisms are replaced by their upper-case form.
    4. Every other part gets its first letter upper-cased; the rest of the
       part is kept as written, so ``camelCase`` input keeps its humps.

    Args:
        name: The raw parameter name (e.g., ``"terminate_after"``,
            ``"_source_includes"``, ``"wait-for-active-shards"``).

    Returns:
        The Go identifier (e.g., ``"TerminateAfter"``,
        ``"SourceIncludes"``, ``"WaitForActiveShards"``). An empty name
        yields an empty string.

    Example::

        >>> name_to_go("terminate_after")
        'TerminateAfter'
        >>> name_to_go("if_seq_no")
        'IfSeqNo'
        >>> name_to_go("routing_id")
        'RoutingID'
    """
    parts = [p for p in _SEPARATOR_RE.split(name) if p]
    words: list[str] = []
    for part in parts:
        initialism = _INITIALISMS.get(part.lower())
        if initialism is not None:
            words.append(initialism)
        else:
            words.append(part[0].upper() + part[1:])
    return "".join(words)
