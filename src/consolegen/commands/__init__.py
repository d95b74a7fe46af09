"""Built-in CLI sub-commands for consolegen.

This package groups the Typer sub-command modules registered on the root
app by :mod:`consolegen.app`:

* :mod:`~consolegen.commands.examples` -- generate the Go test files and
  asciidoc snippets for a whole examples report.
* :mod:`~consolegen.commands.translate` -- translate one console snippet.
* :mod:`~consolegen.commands.inspect` -- list examples with the rules they
  match.
* :mod:`~consolegen.commands.config` -- view and modify user settings.

Each module either exports a :class:`typer.Typer` sub-application (for
multi-command groups like ``config``) or a plain callback function
registered directly on the root app (for single commands like ``examples``).
"""
