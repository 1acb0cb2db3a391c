"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific error category and is referenced by the
corresponding :class:`~kongadmin.exceptions.KongAdminError` subclass.
Shell wrappers can inspect the exit code to tell a missing plugin from a
rejected token without parsing stderr.

Example::

    $ kongadmin plugins get does-not-exist
    $ echo $?
    4   # EXIT_NOT_FOUND
"""

EXIT_SUCCESS = 0
"""The command completed successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments or an empty identifier."""

EXIT_AUTH_FAILURE = 3
"""The Admin API rejected the admin token (HTTP 401/403)."""

EXIT_NOT_FOUND = 4
"""The requested entity was not found (HTTP 404)."""

EXIT_SERVER_ERROR = 5
"""The Admin API returned an error status the client does not classify further."""

EXIT_CONNECTION_ERROR = 6
"""A network-level error occurred (timeout, DNS failure, connection refused)."""

EXIT_DECODE_ERROR = 7
"""A response body could not be decoded into the expected shape."""
