"""consolegen -- Generate Go client examples from Elasticsearch console snippets.

The Elasticsearch reference documentation illustrates every API with
snippets in *console syntax* (``GET /twitter/_doc/0`` followed by an
optional JSON body). This package translates those snippets into calls
against the Go client, and writes them out as runnable ``_test.go`` files
plus the asciidoc listings the documentation includes next to each snippet.

Typical workflow::

    consolegen inspect -i alternatives_report.json       # what translates?
    consolegen examples -i alternatives_report.json -o .doc/examples

Modules:
    app: Typer application and CLI entry point.
    models: Pydantic models shared across the entire package.
    config: XDG-aware configuration with precedence resolution.
    loader: Loading the examples report from file, URL, or stdin.
    console: The console-to-Go translation engine.
    generator: Rendering of Go test files and asciidoc snippets.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
