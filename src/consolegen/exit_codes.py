"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~consolegen.exceptions.ConsolegenError` subclass.
Build scripts regenerating the documentation examples can inspect the exit
code to tell a broken input file from an example that failed to translate.

Example::

    $ consolegen examples -i alternatives_report.json -o .doc/examples
    $ echo $?
    8   # EXIT_TRANSLATION_ERROR -- an example could not be translated
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_INPUT_ERROR = 7
"""The examples input could not be loaded or validated."""

EXIT_TRANSLATION_ERROR = 8
"""At least one example could not be translated to Go source."""

EXIT_OUTPUT_ERROR = 9
"""A generated file could not be written."""
