"""
auth/passwords.py -- bcrypt password hashing and verification.

Security design decisions:
  bcrypt directly, no passlib wrapper. passlib's wrap-bug detection builds a
  password longer than 72 bytes, which bcrypt 4.x and later reject outright.

  Every hash() call draws a fresh salt via bcrypt.gensalt(), so hashing the
  same password twice yields two different strings. The cost factor (rounds)
  comes from Settings.bcrypt_rounds and is embedded in each hash, so raising
  it later does not invalidate stored hashes.

  bcrypt.checkpw() compares in constant time. verify() never raises: a
  mismatch, a corrupt stored hash, or an over-long input all return False.

  The dummy hash enables timing equalization in login_user(): an unknown
  email still pays for one full bcrypt verification, so response time does
  not reveal whether the account exists.

Passwords longer than 72 UTF-8 bytes are rejected at the API layer
(api/models.py) because bcrypt cannot hash them.
"""

from __future__ import annotations

import bcrypt

MAX_PASSWORD_BYTES = 72


class PasswordHasher:
    """Salted, deliberately slow one-way hashing with a tunable work factor."""

    def __init__(self, rounds: int = 12) -> None:
        self.rounds = rounds
        # Computed once so the first unknown-email login is not measurably
        # slower than later ones.
        self._dummy_hash = self.hash("transbook_timing_dummy")

    def hash(self, plain: str) -> str:
        """Return a bcrypt hash of the plaintext password."""
        return bcrypt.hashpw(plain.encode("utf-8"), bcrypt.gensalt(rounds=self.rounds)).decode("utf-8")

    def verify(self, plain: str, hashed: str) -> bool:
        """Return True if the plaintext password matches the bcrypt hash.

        Input longer than MAX_PASSWORD_BYTES never matches. bcrypt 4.1+ would
        otherwise compare only the first 72 bytes, so any suffix would pass.
        """
        password = plain.encode("utf-8")
        if len(password) > MAX_PASSWORD_BYTES:
            return False
        try:
            return bcrypt.checkpw(password, hashed.encode("utf-8"))
        except (ValueError, TypeError):
            return False

    def verify_dummy(self, plain: str) -> None:
        """Burn one verification's worth of time against the dummy hash."""
        self.verify(plain, self._dummy_hash)
