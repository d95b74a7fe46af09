"""File generators -- render translated examples as Go tests and asciidoc snippets.

This sub-package is the output half of the consolegen pipeline: it takes an
:class:`~consolegen.models.Example`, asks the
:class:`~consolegen.console.translator.Translator` for its Go source, and
renders the files the Go client repository commits.

Typical usage::

    from consolegen.generator import DocGenerator, SourceGenerator

    src = SourceGenerator(example)
    Path("src", src.filename).write_text(src.output())

Sub-modules:

* :mod:`~consolegen.generator.source` -- The ``_test.go`` file run by
  ``go test``, and the shared Jinja2 environment.
* :mod:`~consolegen.generator.doc` -- The ``<digest>.asciidoc`` listing
  included by the reference documentation.
"""

from consolegen.generator.doc import DocGenerator
from consolegen.generator.source import SourceGenerator

__all__ = ["DocGenerator", "SourceGenerator"]
