"""Exception hierarchy for consolegen.

All exceptions inherit from :class:`ConsolegenError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`consolegen.exit_codes`.
The top-level error handler in :func:`consolegen.app.main` catches
``ConsolegenError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

The translation engine raises the :class:`TranslationError` family and never
catches its own errors: a failed example produces no output at all, and the
batch driver decides whether the failure aborts the run.

Subclass hierarchy::

    ConsolegenError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- InputError              (exit 7)
    +-- TranslationError        (exit 8)
    |   +-- NoRuleError
    |   +-- ExtractionMismatch
    |   +-- DurationParseError
    |   +-- BodyFormatError
    |   +-- QueryParseError
    +-- OutputError             (exit 9)
    +-- ConfigError             (exit 1)
"""

from consolegen.exit_codes import (
    EXIT_GENERIC_FAILURE,
    EXIT_INPUT_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_OUTPUT_ERROR,
    EXIT_TRANSLATION_ERROR,
)


class ConsolegenError(Exception):
    """Base exception for all consolegen errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`consolegen.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(ConsolegenError):
    """Raised for invalid CLI arguments or missing required parameters."""

    exit_code = EXIT_INVALID_USAGE


class InputError(ConsolegenError):
    """Raised when the examples document cannot be read, parsed, or validated."""

    exit_code = EXIT_INPUT_ERROR


class OutputError(ConsolegenError):
    """Raised when a generated file or directory cannot be written."""

    exit_code = EXIT_OUTPUT_ERROR


class ConfigError(ConsolegenError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE


# --- Translation errors ---


class TranslationError(ConsolegenError):
    """Base class for every failure of the console-to-Go translation engine."""

    exit_code = EXIT_TRANSLATION_ERROR


class NoRuleError(TranslationError):
    """Raised when an example has no commands, or a command matches no rule.

    Not fatal to a batch: the driver may emit a placeholder for the example
    instead.
    """


class ExtractionMismatch(TranslationError):
    """Raised when a rule's pattern matched but its strict extraction did not.

    Indicates a mismatch between a rule and the input shape; the command is
    never partially rendered.
    """


class DurationParseError(TranslationError):
    """Raised when a ``timeout`` query value is not a valid duration (e.g. ``30s``)."""


class BodyFormatError(TranslationError):
    """Raised when a request body is not valid JSON."""


class QueryParseError(TranslationError):
    """Raised when a query string contains malformed percent-encoding."""
