"""Generate the asciidoc snippet included by the reference documentation.

The documentation build includes ``<digest>.asciidoc`` next to each console
example.  The snippet is a ``[source, go]`` listing of the translated
requests only: the text between each pair of tag markers, dedented, without
the client setup or the response handling that the test file adds around it.

Untranslated examples produce a skeleton listing the console source as Go
comments, so a missing translation shows up in the rendered docs instead of
silently dropping the tab.
"""

from __future__ import annotations

import textwrap
from typing import Optional

from consolegen.console.translator import Translator, end_marker, tag_marker
from consolegen.generator.source import SourceGenerator, comment_lines, create_jinja_env
from consolegen.models import AssemblyMode, Example


def tagged_fragments(source: str, digest: str) -> list[str]:
    """Return the dedented text between every tag/end marker pair in *source*."""
    start, end = tag_marker(digest).strip(), end_marker(digest).strip()
    fragments: list[str] = []
    current: Optional[list[str]] = None

    for line in source.splitlines(keepends=True):
        stripped = line.strip()
        if stripped == start:
            current = []
        elif stripped == end and current is not None:
            fragments.append(textwrap.dedent("".join(current)))
            current = None
        elif current is not None:
            current.append(line)

    return fragments


class DocGenerator:
    """Renders the asciidoc snippet of an example.

    Args:
        example: The documentation example.
        mode: The assembly mode; it does not change the listing, but the
            header names the test file generated in the same mode.
    """

    def __init__(self, example: Example, mode: AssemblyMode = AssemblyMode.RUN) -> None:
        self.example = example
        self.mode = mode

    @property
    def filename(self) -> str:
        """File name of the snippet: ``<digest>.asciidoc``."""
        return f"{self.example.digest}.asciidoc"

    def output(self) -> str:
        """Render the asciidoc snippet.

        Raises:
            TranslationError: If a renderer fails for a translatable example.
        """
        translator = Translator(self.example, mode=self.mode)
        translated = translator.is_translated()

        if translated:
            listing = "\n".join(
                tagged_fragments(translator.translate(), self.example.digest)
            )
        else:
            listing = "\n".join(comment_lines(self.example.source)) + "\n"

        template = create_jinja_env().get_template("example.asciidoc.j2")
        return template.render(
            source_file=SourceGenerator(self.example, self.mode).filename,
            example_id=self.example.id,
            translated=translated,
            listing=listing,
        )
