"""Translate a documentation example from console syntax to Go source.

The :class:`Translator` drives the whole conversion of one
:class:`~consolegen.models.Example`:

1. The example text is split into commands
   (:func:`~consolegen.console.splitter.split_commands`).
2. Each command is matched against :data:`~consolegen.console.rules.RULES`;
   the first matching rule renders the Go call.
3. Every rendered call is wrapped between the ``// tag:<digest>[]`` and
   ``// end:<digest>[]`` markers, followed by the post-call tail of the
   active :class:`~consolegen.models.AssemblyMode`.
4. When the example holds several commands, each block is enclosed in its
   own ``{ ... }`` scope so that the ``res, err :=`` declarations do not
   collide, with one blank line between blocks.

Translation is all-or-nothing: if any command matches no rule, or a renderer
raises, no output is produced for the example.  The tag markers are a
persisted contract -- the documentation build extracts the text between them
by digest -- so their literal text must not change.
"""

from __future__ import annotations

import logging
import textwrap
from typing import Optional

from consolegen.console.rules import RULES, TranslateRule
from consolegen.console.splitter import first_line, split_commands
from consolegen.exceptions import NoRuleError
from consolegen.models import AssemblyMode, Command, Example

logger = logging.getLogger(__name__)


TAILS: dict[AssemblyMode, str] = {
    AssemblyMode.RUN: (
        "\tif err != nil {\n"
        '\t\tfmt.Println("Error getting the response:", err)\n'
        "\t\tos.Exit(1)\n"
        "\t}\n"
        "\tdefer res.Body.Close()\n"
        "\tfmt.Println(res)\n"
    ),
    AssemblyMode.TEST: (
        "\tif err != nil {\n"
        '\t\tt.Fatalf("Error getting the response: %s", err)\n'
        "\t}\n"
        "\tdefer res.Body.Close()\n"
        "\tfmt.Println(res)\n"
    ),
}
"""Code appended after every translated call, per assembly mode."""


def tag_marker(digest: str) -> str:
    """Return the comment opening the tagged region of an example."""
    return f"\t// tag:{digest}[]\n"


def end_marker(digest: str) -> str:
    """Return the comment closing the tagged region of an example."""
    return f"\t// end:{digest}[]\n"


def find_rule(text: str) -> Optional[TranslateRule]:
    """Return the first rule whose pattern matches *text*, or ``None``."""
    for candidate in RULES:
        if candidate.matches(text):
            return candidate
    return None


def translate_command(text: str) -> str:
    """Translate the text of a single command to a Go call.

    Args:
        text: One command, as returned by
            :func:`~consolegen.console.splitter.split_commands`.

    Returns:
        The rendered call, without a trailing newline.

    Raises:
        NoRuleError: If no rule matches *text*.
        TranslationError: Any error raised by the selected rule's renderer
            (e.g. :class:`~consolegen.exceptions.BodyFormatError`).
    """
    selected = find_rule(text)
    if selected is None:
        raise NoRuleError(f"no rule to translate the example: {first_line(text)!r}")
    command = Command.parse(text)
    logger.debug("Rule %s matched %s %s", selected.name, command.verb, command.target)
    return selected.render(text)


class Translator:
    """Converter from the console source of an example to Go source code.

    Args:
        example: The documentation example to translate.
        mode: Which post-call tail to append after every call.

    Example::

        translator = Translator(example, mode=AssemblyMode.TEST)
        if translator.is_translated():
            source = translator.translate()
    """

    def __init__(self, example: Example, mode: AssemblyMode = AssemblyMode.RUN) -> None:
        self.example = example
        self.mode = mode

    def commands(self) -> list[str]:
        """Return the text of every command in the example."""
        return split_commands(self.example.source)

    def rules(self) -> list[Optional[TranslateRule]]:
        """Return the rule selected for each command (``None`` where none matches)."""
        return [find_rule(command) for command in self.commands()]

    def is_translated(self) -> bool:
        """Return ``True`` when every command of the example matches a rule.

        An example without commands is never translated.
        """
        selected = self.rules()
        return bool(selected) and all(r is not None for r in selected)

    def translate(self) -> str:
        """Return the example translated to Go source.

        The result starts with a newline and contains one tagged block per
        command, each followed by the tail of the active mode.

        Raises:
            NoRuleError: If the example has no commands, or any command
                matches no rule.
            TranslationError: Any error raised while rendering a command.
        """
        commands = self.commands()
        if not commands:
            raise NoRuleError(f"no commands found in example {self.example.id}")

        for command in commands:
            if find_rule(command) is None:
                raise NoRuleError(
                    f"no rule to translate the example: {first_line(command)!r}"
                )

        blocks = [self._assemble(translate_command(command)) for command in commands]

        if len(blocks) == 1:
            return "\n" + blocks[0]

        scoped = ["\t{\n" + textwrap.indent(block, "\t") + "\t}\n" for block in blocks]
        return "\n" + "\n".join(scoped)

    def _assemble(self, source: str) -> str:
        """Wrap one rendered call in the tag markers and the post-call tail."""
        digest = self.example.digest
        return tag_marker(digest) + source + "\n" + end_marker(digest) + TAILS[self.mode]
