"""Inspect command -- report which examples translate and through which rules.

Provides ``consolegen inspect``, a read-only view of an examples report.
Each row shows the example id, its digest, whether its documentation file is
enabled, whether it translates, and the rule selected for each of its
commands (``-`` where no rule matches). It is the first stop when deciding
which rule to add next.
"""

from __future__ import annotations

from typing import Optional

import typer

from consolegen.exceptions import ConsolegenError
from consolegen.output import error, info, print_table


def inspect_command(
    input_path: str = typer.Option(
        ..., "--input", "-i", help="Examples report: file path, URL, or '-' for stdin."
    ),
    show_all: bool = typer.Option(
        False, "--all", "-a", help="Include examples from disabled files."
    ),
    enabled: Optional[list[str]] = typer.Option(
        None, "--enable", "-e", help="Documentation file to treat as enabled (repeatable)."
    ),
) -> None:
    """List the examples of a report with their translation status.

    Example::

        consolegen inspect -i alternatives_report.json
        consolegen inspect -i alternatives_report.json --all --json
    """
    from consolegen.config import resolve_config
    from consolegen.console.translator import Translator
    from consolegen.loader import load_examples

    try:
        config = resolve_config(cli_enabled_files=enabled)
        examples = load_examples(input_path)
    except ConsolegenError as exc:
        error(str(exc))
        raise typer.Exit(code=exc.exit_code) from None

    headers = ["ID", "Digest", "Enabled", "Translated", "Rules"]
    rows: list[list[str]] = []
    translated_count = 0

    for example in examples:
        is_enabled = example.is_enabled(config.enabled_files)
        if not is_enabled and not show_all:
            continue

        translator = Translator(example, mode=config.mode)
        selected = translator.rules()
        is_translated = translator.is_translated()
        translated_count += is_translated

        rows.append([
            example.id,
            example.digest,
            "yes" if is_enabled else "no",
            "yes" if is_translated else "no",
            ", ".join(r.name if r is not None else "-" for r in selected),
        ])

    print_table(headers, rows, title="Examples")
    info(f"{translated_count} of {len(rows)} examples translate")
