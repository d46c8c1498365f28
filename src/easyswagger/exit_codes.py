"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~easyswagger.exceptions.EasySwaggerError` subclass.
Shell wrappers can inspect the exit code to tell a missing endpoint from an
authentication wall without parsing stderr.

Example::

    $ easyswagger copy /nope
    $ echo $?
    4   # EXIT_NOT_FOUND -- the path is not in the document
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or missing required parameters."""

EXIT_AUTH_REQUIRED = 3
"""The document URL is behind an authentication wall."""

EXIT_NOT_FOUND = 4
"""The requested endpoint path is not present in the document."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_SPEC_PARSE_ERROR = 7
"""The document could not be parsed, validated, or resolved."""
