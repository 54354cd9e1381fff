"""
auth/models.py -- Domain dataclasses for authentication entities.

Pattern: Data class (pure data container, zero logic). Stores, services and
routes do the work; these classes only own the shape.

Layer rule: no imports from api/ or core/.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class User:
    """A registered principal.

    id is an opaque 32-char hex string assigned by the store at insert time.
    email is stored normalized (stripped, lowercased) and is unique.
    hashed_password is a bcrypt hash and must never leave the auth layer.
    """

    email: str
    hashed_password: str
    id: str | None = None
    created_at: str | None = None


@dataclass(frozen=True)
class TokenClaims:
    """Verified contents of a bearer token. Timestamps are epoch seconds."""

    subject_id: str
    issued_at: int
    expires_at: int


@dataclass(frozen=True)
class AuthResult:
    """Outcome of a successful registration or login."""

    token: str
    user: User
