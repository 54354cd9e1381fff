"""
auth/errors.py -- Exception taxonomy for the authentication layer.

Client-visible errors carry an HTTP status, a machine-readable code and a
fixed message. api/main.py renders every AuthError into the standard
ErrorResponse envelope, so routes raise and never build error bodies.

Coarse merging is deliberate:
  InvalidCredentials covers both "unknown email" and "wrong password".
  Unauthorized covers missing, malformed, expired and forged tokens.
Splitting either into finer client-visible codes would let a caller probe
which accounts exist or why a token failed.

The TokenRejected family is internal. TokenService.verify() raises it so
logs and tests can tell the three failure kinds apart; the gate converts
all of them into Unauthorized before anything reaches the client.
"""

from __future__ import annotations

from http import HTTPStatus


class AuthError(Exception):
    """Base class for errors that map directly onto an HTTP response."""

    code: str = "auth_error"
    status: HTTPStatus = HTTPStatus.BAD_REQUEST
    message: str = "Authentication error."

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class DuplicateEmail(AuthError):
    code = "duplicate_email"
    status = HTTPStatus.BAD_REQUEST
    message = "Email already exists."


class InvalidCredentials(AuthError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid credentials."


class Unauthorized(AuthError):
    code = "unauthorized"
    status = HTTPStatus.UNAUTHORIZED
    message = "Authentication required."


# ---------------------------------------------------------------------------
# Token verification failures (internal only)
# ---------------------------------------------------------------------------


class TokenRejected(Exception):
    """Raised by TokenService.verify(). Never rendered to a client directly."""

    reason = "rejected"


class MalformedToken(TokenRejected):
    reason = "malformed"


class BadSignature(TokenRejected):
    reason = "bad_signature"


class TokenExpired(TokenRejected):
    reason = "expired"
