"""Exception hierarchy for easyswagger.

All exceptions inherit from :class:`EasySwaggerError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`easyswagger.exit_codes`.
The top-level error handler in :func:`easyswagger.app.main` catches
``EasySwaggerError`` and exits with the appropriate code, while unexpected
exceptions produce a crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    EasySwaggerError (exit 1)
    +-- InvalidUsageError       (exit 2)
    +-- AuthWallError           (exit 3)
    +-- EndpointNotFoundError   (exit 4)
    +-- ConnectionError_        (exit 6)
    +-- SpecParseError          (exit 7)
    |   +-- CyclicReferenceError (exit 7)
    +-- ConfigError             (exit 1)

The resolution core itself raises only :class:`CyclicReferenceError`; a
missing endpoint is reported through
:attr:`~easyswagger.models.EndpointInfo.error` instead.
"""

from __future__ import annotations

from easyswagger.exit_codes import (
    EXIT_AUTH_REQUIRED,
    EXIT_CONNECTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_SPEC_PARSE_ERROR,
)


class EasySwaggerError(Exception):
    """Base exception for all easyswagger errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`easyswagger.exit_codes`.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(EasySwaggerError):
    """Raised for invalid CLI arguments, e.g. no document source could be determined."""

    exit_code = EXIT_INVALID_USAGE


class AuthWallError(EasySwaggerError):
    """Raised when a document URL answers with a sign-in page instead of a document.

    Typical culprits are Cloudflare Access and other SSO gateways sitting in
    front of internal API docs. The user has to authenticate in their browser
    and retry with the resulting session cookie.

    Args:
        url: The URL that was fetched.
        html: The body of the sign-in page (may be empty for bare 401/403).
        message: Optional override for the default message.
    """

    exit_code = EXIT_AUTH_REQUIRED

    def __init__(self, url: str, html: str = "", message: str | None = None):
        super().__init__(message or f"Authentication required to fetch {url}")
        self.url = url
        self.html = html


class EndpointNotFoundError(EasySwaggerError):
    """Raised by the CLI when a requested path is not in the document."""

    exit_code = EXIT_NOT_FOUND


class ConnectionError_(EasySwaggerError):
    """Raised on network-level failures (timeout, DNS resolution, connection refused).

    Named with a trailing underscore to avoid shadowing the built-in
    ``ConnectionError``.
    """

    exit_code = EXIT_CONNECTION_ERROR


class SpecParseError(EasySwaggerError):
    """Raised when a document cannot be parsed, is not OpenAPI, or cannot be resolved."""

    exit_code = EXIT_SPEC_PARSE_ERROR


class CyclicReferenceError(SpecParseError):
    """Raised when schema references form a cycle.

    Args:
        chain: Schema names in resolution order, ending with the name that
            closed the cycle (e.g. ``["Node", "Child", "Node"]``).
    """

    def __init__(self, chain: list[str]):
        self.chain = list(chain)
        super().__init__(
            "Cyclic schema reference: " + " -> ".join(self.chain)
        )


class ConfigError(EasySwaggerError):
    """Raised for configuration problems (invalid JSON, failed validation)."""

    exit_code = EXIT_GENERIC_FAILURE
