"""Console-to-Go translation engine.

This sub-package turns the console-syntax requests of a documentation example
(``GET /twitter/_doc/0``, ``PUT /bank/_doc/1 {...}``) into calls against the
Go Elasticsearch client.

Typical usage::

    from consolegen.console import Translator
    from consolegen.models import Example

    example = Example.model_validate(entry)
    if Translator(example).is_translated():
        print(Translator(example).translate())

Sub-modules:

* :mod:`~consolegen.console.splitter` -- Split one example into commands
  and strip asciidoc callouts.
* :mod:`~consolegen.console.converters` -- Render query parameters as
  ``With<Name>()`` options and JSON bodies as ``strings.NewReader`` literals.
* :mod:`~consolegen.console.naming` -- Wire names to Go identifiers.
* :mod:`~consolegen.console.rules` -- The ordered, first-match-wins rule
  registry.
* :mod:`~consolegen.console.translator` -- Rule selection and assembly of
  the tagged Go fragment.
"""

from consolegen.console.rules import RULES, TranslateRule
from consolegen.console.splitter import split_commands
from consolegen.console.translator import Translator, find_rule, translate_command

__all__ = [
    "RULES",
    "TranslateRule",
    "Translator",
    "find_rule",
    "split_commands",
    "translate_command",
]
