"""Canonical Pydantic models shared across all consolegen modules.

This is the single source of truth for data shapes in the project. Every other
module imports from here rather than defining its own models. The models fall
into two groups:

**Configuration models** -- serialised as JSON in the user's config directory
or the project's ``consolegen.json``:
    :class:`AssemblyMode` and :class:`GeneratorConfig`.

**Example models** -- loaded from the examples report and consumed by the
translator and the source generators:
    :class:`SourceLocation`, :class:`Example`, and :class:`Command`.

All models use Pydantic v2. Unknown keys in the examples report (the report
carries far more than the translator needs) are ignored.
"""

from __future__ import annotations

import bisect
import enum
import hashlib
from typing import Optional, Sequence

from pydantic import BaseModel, Field, field_validator, model_validator


DEFAULT_ENABLED_FILES: list[str] = sorted([
    "docs/delete.asciidoc",
    "docs/get.asciidoc",
    "docs/index_.asciidoc",
    "getting-started.asciidoc",
    "query-dsl/query-string-query.asciidoc",
    "search/request-body.asciidoc",
    "setup/install/check-running.asciidoc",
])
"""Documentation files whose examples are generated by default."""

DEFAULT_GITHUB_BASE_URL = (
    "https://github.com/elastic/elasticsearch/blob/master/docs/reference"
)
"""Base URL used to link a generated example back to its documentation source."""


# --- Config ---


class AssemblyMode(str, enum.Enum):
    """Which post-call tail is appended after every translated request.

    ``RUN`` prints the response and exits the process on error, which is
    what a reader copying the snippet wants. ``TEST`` fails the surrounding
    Go test instead.
    """

    RUN = "run"
    TEST = "test"


class GeneratorConfig(BaseModel):
    """Settings for the ``consolegen examples`` batch driver.

    Loaded and merged by :func:`~consolegen.config.resolve_config`. The
    ``enabled_files`` list is always kept sorted, since
    :meth:`Example.is_enabled` binary-searches it.

    Example::

        GeneratorConfig(
            enabled_files=["docs/get.asciidoc"],
            mode=AssemblyMode.TEST,
        )
    """

    enabled_files: list[str] = Field(
        default_factory=lambda: list(DEFAULT_ENABLED_FILES),
        description="Documentation files whose examples are processed",
    )
    mode: AssemblyMode = Field(
        default=AssemblyMode.RUN, description="Post-call tail: run or test"
    )
    github_base_url: str = Field(
        default=DEFAULT_GITHUB_BASE_URL,
        description="Base URL for links back to the documentation source",
    )
    keep_going: bool = Field(
        default=False, description="Skip failing examples instead of aborting"
    )

    @field_validator("enabled_files")
    @classmethod
    def _sort_enabled_files(cls, value: list[str]) -> list[str]:
        return sorted(set(value))


# --- Examples ---


class SourceLocation(BaseModel):
    """Where an example lives in the documentation tree."""

    file: str
    line: int = 0


class Command(BaseModel):
    """One console request extracted from an example.

    Produced on demand by :func:`~consolegen.console.splitter.parse_command`
    and never persisted. The rules match the raw command text; the parsed
    form names the request in diagnostics (verb and target).
    """

    verb: str
    path: list[str] = Field(default_factory=list)
    query: Optional[str] = None
    body: Optional[str] = None

    @classmethod
    def parse(cls, text: str) -> "Command":
        """Parse the text of one command (see :func:`~consolegen.console.splitter.parse_command`)."""
        from consolegen.console.splitter import parse_command

        return parse_command(text)

    @property
    def target(self) -> str:
        """The request path with a leading slash (e.g. ``/twitter/_doc/1``)."""
        return "/" + "/".join(self.path)


class Example(BaseModel):
    """A code example from the Elasticsearch reference documentation.

    Maps to one entry of the ``alternatives_report.json`` document. The
    ``digest`` correlates every generated file and tag marker with this
    example, so it must be stable across regenerations: when the report
    does not carry one, it is derived from ``source`` with MD5.

    See Also:
        :class:`~consolegen.console.translator.Translator`: Converts the
        example to Go source.
    """

    source_location: SourceLocation
    digest: str = ""
    source: str

    @model_validator(mode="after")
    def _derive_digest(self) -> "Example":
        if not self.digest:
            self.digest = hashlib.md5(self.source.encode("utf-8")).hexdigest()
        return self

    @property
    def id(self) -> str:
        """Example identifier in the form ``<file>:<line>``."""
        return f"{self.source_location.file}:{self.source_location.line}"

    @property
    def chapter(self) -> str:
        """The source file turned into an identifier fragment.

        ``docs/index_.asciidoc`` becomes ``docs_index_``.
        """
        chapter = self.source_location.file.removesuffix(".asciidoc")
        return chapter.replace("/", "_").replace("-", "_")

    def github_url(self, base_url: str = DEFAULT_GITHUB_BASE_URL) -> str:
        """Return a link to the example in the documentation sources."""
        return f"{base_url.rstrip('/')}/{self.source_location.file}#L{self.source_location.line}"

    def is_enabled(self, enabled_files: Sequence[str] = DEFAULT_ENABLED_FILES) -> bool:
        """Return ``True`` when the example's file is in the sorted *enabled_files*."""
        index = bisect.bisect_left(enabled_files, self.source_location.file)
        return index < len(enabled_files) and enabled_files[index] == self.source_location.file

    def is_executable(self) -> bool:
        """Return ``True`` when the example contains at least one request line."""
        from consolegen.console.splitter import is_request_line

        return any(is_request_line(line) for line in self.source.splitlines())

    def commands(self) -> list[str]:
        """Return the text of every command in the example."""
        from consolegen.console.splitter import split_commands

        return split_commands(self.source)

    def is_translated(self) -> bool:
        """Return ``True`` when the example can be converted to Go source."""
        from consolegen.console.translator import Translator

        return Translator(self).is_translated()

    def translated(self, mode: AssemblyMode = AssemblyMode.RUN) -> str:
        """Return the example translated to Go source.

        Raises:
            TranslationError: If the example cannot be translated.
        """
        from consolegen.console.translator import Translator

        return Translator(self, mode=mode).translate()
