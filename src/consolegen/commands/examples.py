"""Examples command -- generate Go sources for the documentation examples.

Implements ``consolegen examples``, the batch driver run when the
documentation changes. It loads the examples report, and for every example
whose documentation file is enabled:

1. Prints a separator and ``Processing example "<id>" @ <digest>`` to stderr.
2. Renders the asciidoc snippet to ``<output>/doc/<digest>.asciidoc`` (or to
   stdout with ``--output -``).
3. Renders the Go test to ``<output>/src/<file>_<digest>_test.go``.

Examples from other files are skipped and counted. A translation failure
aborts the run unless ``--keep-going`` is given, in which case it is reported
and the command exits with the translation exit code at the end.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import typer

from consolegen.config import atomic_write, resolve_config
from consolegen.exceptions import ConsolegenError, OutputError, TranslationError
from consolegen.exit_codes import EXIT_TRANSLATION_ERROR
from consolegen.generator import DocGenerator, SourceGenerator
from consolegen.loader import load_examples
from consolegen.models import Example, GeneratorConfig
from consolegen.output import error, info, print_data, print_source, separator, warning

logger = logging.getLogger(__name__)


def format_elapsed(seconds: float) -> str:
    """Format a duration truncated to the millisecond (``842ms``, ``1.25s``)."""
    millis = int(seconds * 1000)
    if millis < 1000:
        return f"{millis}ms"
    whole, rest = divmod(millis, 1000)
    if not rest:
        return f"{whole}s"
    return f"{whole}.{rest:03d}".rstrip("0") + "s"


def _write(path: Path, content: str) -> None:
    try:
        atomic_write(path, content)
    except (OSError, UnicodeError) as exc:
        raise OutputError(f"error writing {path}: {exc}") from exc


def process_example(
    example: Example,
    config: GeneratorConfig,
    output: str,
    debug_source: bool = False,
) -> None:
    """Generate the files of one example.

    Args:
        example: The example to process.
        config: The effective generator configuration.
        output: The output directory, or ``-`` to print the asciidoc
            snippet to stdout and skip the Go test file.
        debug_source: Also print the Go test source to stderr.

    Raises:
        TranslationError: If the example cannot be rendered.
        OutputError: If a file cannot be written.
    """
    doc = DocGenerator(example, mode=config.mode)
    src = SourceGenerator(example, mode=config.mode, github_base_url=config.github_base_url)

    doc_output = doc.output()
    src_output = src.output()

    if debug_source:
        separator()
        print_source(src_output)

    if output == "-":
        print_data(doc_output)
        return

    root = Path(output)
    _write(root / "doc" / doc.filename, doc_output)
    _write(root / "src" / src.filename, src_output)
    logger.debug("Wrote %s and %s", doc.filename, src.filename)


def examples_command(
    input_path: str = typer.Option(
        ..., "--input", "-i", help="Examples report: file path, URL, or '-' for stdin."
    ),
    output: str = typer.Option(
        ..., "--output", "-o", help="Output directory, or '-' for stdout."
    ),
    debug_source: bool = typer.Option(
        False, "--debug", "-d", help="Print the generated source to the terminal."
    ),
    mode: Optional[str] = typer.Option(
        None, "--mode", "-m", help="Post-call handling: 'run' or 'test'."
    ),
    enabled: Optional[list[str]] = typer.Option(
        None, "--enable", "-e", help="Documentation file to process (repeatable)."
    ),
    keep_going: bool = typer.Option(
        False, "--keep-going", "-k", help="Continue past translation failures."
    ),
) -> None:
    """Generate the Go examples for the documentation.

    Example::

        consolegen examples -i alternatives_report.json -o .doc/examples
        consolegen examples -i report.json -o - --enable docs/get.asciidoc
    """
    started = time.monotonic()

    try:
        config = resolve_config(
            cli_mode=mode, cli_enabled_files=enabled, cli_keep_going=keep_going or None
        )
        examples = load_examples(input_path)
    except ConsolegenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    processed = skipped = failed = 0

    for example in examples:
        if not example.is_enabled(config.enabled_files):
            skipped += 1
            continue

        separator()
        info(f'Processing example "{example.id}" @ {example.digest}')
        try:
            process_example(example, config, output, debug_source)
        except TranslationError as exc:
            if not config.keep_going:
                error(f"error processing example {example.id}: {exc}")
                raise typer.Exit(code=exc.exit_code) from None
            warning(f"skipping example {example.id}: {exc}")
            failed += 1
            continue
        except ConsolegenError as exc:
            error(f"error processing example {example.id}: {exc}")
            raise typer.Exit(code=exc.exit_code) from None
        processed += 1

    separator()
    summary = (
        f"Processed {processed} examples, skipped {skipped} examples "
        f"in {format_elapsed(time.monotonic() - started)}"
    )
    if failed:
        summary += f" ({failed} failed)"
    info(summary)

    if failed:
        raise typer.Exit(code=EXIT_TRANSLATION_ERROR)
