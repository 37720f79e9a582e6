"""
Exceptions raised by the authorization core.

Denials are not exceptions: the engine returns a Decision. These cover the
two cases that happen before a decision can be made.
"""


class AuthorizationError(Exception):
    """Base class for authorization core errors."""


class InvalidInputError(AuthorizationError, ValueError):
    """Raised when an identifier is malformed, before any lookup."""


class StoreUnavailableError(AuthorizationError):
    """Raised by a tenancy store that could not answer (timeout, connection)."""
