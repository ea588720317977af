"""Token errors.

Callers treat every TokenError the same way (a generic 401); the
subclasses exist for logging and tests.
"""


class TokenError(Exception):
    """Raised when a bearer token cannot be trusted."""


class InvalidToken(TokenError):
    """Signature mismatch, malformed token, or missing claims."""


class ExpiredToken(TokenError):
    """Signature is valid but the token is past its expiry."""
