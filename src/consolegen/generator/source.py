"""Generate the Go test file for one documentation example.

Every enabled example becomes a self-contained ``_test.go`` file in the
``elasticsearch_test`` package, so that ``go test`` both compiles and runs
it against a live cluster.  The file contains:

* The license header and the ``Code generated`` notice.
* Imports of ``fmt``, ``os`` and ``testing``, plus ``strings`` and ``time``
  only when the translated source refers to them.
* Blank-identifier guards keeping the unconditional imports in use.
* A comment block linking to the example on GitHub and quoting its console
  source between two rulers.
* ``func Test_<chapter>_<digest>(t *testing.T)`` creating a default client
  and running the translated requests.

Examples that cannot be translated still get a file: the client creation is
commented out and the test fails with the first line of the console source,
which keeps the gap visible in ``go test`` output.
"""

from __future__ import annotations

from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape

from consolegen.console.converters import go_quote
from consolegen.console.splitter import first_line
from consolegen.console.translator import Translator
from consolegen.models import DEFAULT_GITHUB_BASE_URL, AssemblyMode, Example


TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``generator/templates/``)."""

RULER = "-" * 80

# Packages imported only when the translated source refers to them.
_OPTIONAL_IMPORTS = ("strings", "time")


def create_jinja_env() -> Environment:
    """Create the Jinja2 environment shared by the source and doc generators.

    Go and asciidoc output must never be HTML-escaped, so autoescape is
    enabled for HTML and XML templates only. Block trimming and lstrip keep
    the control tags from leaving blank lines behind.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(enabled_extensions=("html", "xml")),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def comment_lines(text: str) -> list[str]:
    """Turn *text* into Go line comments, one per line.

    A trailing newline does not produce an empty comment, and empty lines
    become a bare ``//``.
    """
    return [f"// {line}" if line else "//" for line in text.rstrip("\n").split("\n")]


def imports_for(source: str) -> list[str]:
    """Return the standard-library imports needed by the translated *source*, sorted."""
    names = {"fmt", "os", "testing"}
    names.update(name for name in _OPTIONAL_IMPORTS if f"{name}." in source)
    return sorted(names)


def _raw_string(text: str) -> str:
    """Quote *text* as a Go raw string, or an interpreted one if it holds a backtick."""
    if "`" in text:
        return go_quote(text)
    return f"`{text}`"


class SourceGenerator:
    """Renders the Go test file of an example.

    Args:
        example: The documentation example.
        mode: The assembly mode passed to the translator.
        github_base_url: Base URL of the documentation sources, used for the
            link in the header comment.
    """

    def __init__(
        self,
        example: Example,
        mode: AssemblyMode = AssemblyMode.RUN,
        github_base_url: str = DEFAULT_GITHUB_BASE_URL,
    ) -> None:
        self.example = example
        self.mode = mode
        self.github_base_url = github_base_url

    @property
    def filename(self) -> str:
        """File name of the generated test.

        ``docs/get.asciidoc`` with digest ``fbcf...`` gives
        ``docs-get_fbcf..._test.go``.
        """
        stem = self.example.source_location.file.removesuffix(".asciidoc").replace("/", "-")
        return f"{stem}_{self.example.digest}_test.go"

    def output(self) -> str:
        """Render the complete Go file.

        Raises:
            TranslationError: If the example matches rules for all its
                commands but a renderer fails.
        """
        translator = Translator(self.example, mode=self.mode)
        translated = translator.is_translated()
        body = translator.translate() if translated else ""

        template = create_jinja_env().get_template("example_test.go.j2")
        return template.render(
            imports=imports_for(body),
            github_url=self.example.github_url(self.github_base_url),
            ruler=RULER,
            source_comments=comment_lines(self.example.source),
            chapter=self.example.chapter,
            digest=self.example.digest,
            translated=translated,
            body=body.rstrip("\n"),
            failure=_raw_string(first_line(self.example.source)),
        )
