"""
auth/dependencies.py -- FastAPI Depends() helpers for authentication.

get_current_subject() is the authentication gate. Every protected router
declares it as a router-level dependency, so no handler on that router can
run without a verified token:

    router = APIRouter(dependencies=[Depends(get_current_subject)])

A request is either Unauthenticated or Authenticated; nothing carries over
between requests. The only input is the Authorization: Bearer header.

get_current_user() builds on the gate for the few routes that need the full
User record rather than just the subject id.

Layer rule: may import from fastapi (for Request) because this module is part
of the FastAPI dependency injection system. No imports from api/.
"""

from __future__ import annotations

import logging

from fastapi import Depends, Request

from auth.errors import TokenRejected, Unauthorized
from auth.models import User
from auth.store import UserStore
from auth.tokens import TokenService

logger = logging.getLogger("transbook.auth")


def _bearer_token(request: Request) -> str | None:
    """Return the token from 'Authorization: Bearer <token>', or None."""
    scheme, _, credentials = request.headers.get("Authorization", "").partition(" ")
    credentials = credentials.strip()
    if scheme.lower() != "bearer" or not credentials:
        return None
    return credentials


def get_current_subject(request: Request) -> str:
    """Require a valid bearer token. Returns the subject (user) id.

    The id is also attached to request.state.subject_id for middleware and
    handlers that do not take it as a parameter.

    Raises Unauthorized for a missing header, a non-Bearer scheme, and every
    kind of token rejection. The rejection kind is logged at debug level only.
    """
    token = _bearer_token(request)
    if token is None:
        raise Unauthorized()

    tokens: TokenService = request.app.state.token_service
    try:
        claims = tokens.verify(token)
    except TokenRejected as exc:
        logger.debug("Token rejected (%s) on %s %s", exc.reason, request.method, request.url.path)
        raise Unauthorized() from exc

    request.state.subject_id = claims.subject_id
    return claims.subject_id


def get_current_user(request: Request, subject_id: str = Depends(get_current_subject)) -> User:
    """Resolve the gate's subject id to a User.

    A validly signed token for an account that no longer exists is treated
    the same as any other unauthenticated request.
    """
    user_store: UserStore = request.app.state.user_store
    user = user_store.get_by_id(subject_id)
    if user is None:
        raise Unauthorized()
    return user
