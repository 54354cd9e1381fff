"""
auth/service.py -- Registration and login flows.

Both flows are plain functions over their collaborators (store, hasher,
tokens) so they can be exercised without HTTP. Route handlers pull the
collaborators off app.state and call in here.

Security:
  Enumeration resistance: login_user() raises the same InvalidCredentials
  for an unknown email and for a wrong password, and runs bcrypt in both
  cases (against a dummy hash when the user does not exist) so timing does
  not differ either. Do NOT inline get_by_email() + verify() in a route.

  The plaintext password is only passed to the hasher; it is never stored,
  logged, or returned.

  Anything that is not a credential problem (database down, corrupt row)
  propagates unchanged. api/main.py logs it and returns a generic 500.
"""

from __future__ import annotations

import logging

from auth.errors import DuplicateEmail, InvalidCredentials
from auth.models import AuthResult
from auth.passwords import PasswordHasher
from auth.store import UserStore
from auth.tokens import TokenService

logger = logging.getLogger("transbook.auth")


def normalize_email(email: str) -> str:
    """Emails are case-insensitive: strip surrounding whitespace and lowercase."""
    return email.strip().lower()


def register_user(
    store: UserStore,
    hasher: PasswordHasher,
    tokens: TokenService,
    email: str,
    password: str,
) -> AuthResult:
    """Create an account and return a token for it.

    Raises DuplicateEmail if the email is already registered. The early
    lookup gives the common case a cheap answer; the store's unique
    constraint catches the concurrent case.
    """
    email = normalize_email(email)
    if store.get_by_email(email) is not None:
        raise DuplicateEmail()

    user = store.create_user(email, hasher.hash(password))
    logger.info("Registered user id=%s", user.id)
    return AuthResult(token=tokens.issue(user.id), user=user)


def login_user(
    store: UserStore,
    hasher: PasswordHasher,
    tokens: TokenService,
    email: str,
    password: str,
) -> AuthResult:
    """Verify credentials and return a fresh token.

    Raises InvalidCredentials for both unknown email and wrong password.
    """
    user = store.get_by_email(normalize_email(email))
    if user is None:
        # Equalize timing -- do NOT return early before running bcrypt.
        hasher.verify_dummy(password)
        logger.info("Failed login attempt")
        raise InvalidCredentials()
    if not hasher.verify(password, user.hashed_password):
        logger.info("Failed login attempt")
        raise InvalidCredentials()

    logger.info("User id=%s logged in", user.id)
    return AuthResult(token=tokens.issue(user.id), user=user)
