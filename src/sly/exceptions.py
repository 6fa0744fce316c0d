"""Exception hierarchy for sly.

All exceptions inherit from :class:`SlyError`, which carries an
``exit_code`` taken from :mod:`sly.exit_codes`. :func:`sly.app.main`
catches ``SlyError`` and exits with that code.

API errors reported by Sprint.ly (``{"code": 403, "message": ...}``) are
*not* exceptions: the read paths of :class:`~sly.interface.Interface`
turn them into empty lists or ``None``.

Subclass hierarchy::

    SlyError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- ConnectionError_    (exit 6)
    +-- ConfigError         (exit 1)
        +-- ConfigMissingError
"""

from sly.exit_codes import (
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
)


class SlyError(Exception):
    """Base exception for all sly errors.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(SlyError):
    """Raised for invalid CLI arguments or malformed cache keys."""

    exit_code = EXIT_INVALID_USAGE


class ConnectionError_(SlyError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class ConfigError(SlyError):
    """Raised for configuration problems (invalid JSON, missing product id)."""

    exit_code = EXIT_GENERIC_FAILURE


class ConfigMissingError(ConfigError):
    """Raised when no config file exists and the environment supplies no credentials."""

    def __init__(self, message: str = "Config File Missing", exit_code: int | None = None):
        super().__init__(message, exit_code)
