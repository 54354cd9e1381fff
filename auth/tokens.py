"""
auth/tokens.py -- Signed, time-limited bearer tokens (JWT, HS256).

Security design decisions:
  JWT: python-jose with HS256. Tokens carry sub (user id), iat and exp as
       integer epoch seconds. Nothing is stored server-side; validity is fully
       reconstructable from the token plus the signing secret.

  TokenService is built once at startup (api/main.py lifespan) from
       Settings.secret_key and Settings.token_expire_seconds, then parked on
       app.state. It has no setters; the secret is never rewritten.

  Verification runs in three ordered steps so each failure kind is distinct:
       1. parse header and claims without trusting them  -> MalformedToken
       2. check the HS256 signature with our secret      -> BadSignature
       3. compare exp to the current time (now >= exp)   -> TokenExpired
       The exp check is done here rather than by jose so the boundary is
       exactly "expired at exp", with no leeway.

  Callers outside auth/ never see these distinctions: the gate in
  auth/dependencies.py turns every TokenRejected into Unauthorized.

Layer rule: no imports from api/.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

from jose import JWSError, JWTError, jws, jwt

from auth.errors import BadSignature, MalformedToken, TokenExpired
from auth.models import TokenClaims

_ALGORITHM = "HS256"


def _epoch(moment: datetime) -> int:
    return int(moment.timestamp())


class TokenService:
    """Issues and verifies bearer tokens for a single process-wide secret.

    Usage:
        tokens = TokenService(settings.secret_key, settings.token_expire_seconds)
        token = tokens.issue(user.id)
        claims = tokens.verify(token)   # raises TokenRejected subclasses
    """

    def __init__(self, secret_key: str, lifetime_seconds: int = 3600) -> None:
        if not secret_key:
            raise ValueError("TokenService requires a non-empty secret key.")
        self._secret_key = secret_key
        self.lifetime = timedelta(seconds=lifetime_seconds)

    def issue(self, subject_id: str, issued_at: datetime | None = None) -> str:
        """Encode a signed JWT for subject_id, valid for the configured lifetime.

        issued_at defaults to the current UTC time.
        """
        now = issued_at or datetime.now(timezone.utc)
        payload = {
            "sub": subject_id,
            "iat": _epoch(now),
            "exp": _epoch(now + self.lifetime),
        }
        return jwt.encode(payload, self._secret_key, algorithm=_ALGORITHM)

    def verify(self, token: str, now: datetime | None = None) -> TokenClaims:
        """Verify token and return its claims.

        Raises:
            MalformedToken: not a JWT, or sub/iat/exp missing or mistyped.
            BadSignature:   signature does not match our secret, or the
                            token names an algorithm other than HS256.
            TokenExpired:   current time is at or past exp.
        """
        try:
            header = jwt.get_unverified_header(token)
            raw_claims = jwt.get_unverified_claims(token)
        except JWTError as exc:
            raise MalformedToken(str(exc)) from exc
        claims = _parse_claims(raw_claims)

        if header.get("alg") != _ALGORITHM:
            raise BadSignature(f"unexpected algorithm {header.get('alg')!r}")
        try:
            jws.verify(token, self._secret_key, algorithms=[_ALGORITHM])
        except JWSError as exc:
            raise BadSignature(str(exc)) from exc

        current = _epoch(now or datetime.now(timezone.utc))
        if current >= claims.expires_at:
            raise TokenExpired(f"expired at {claims.expires_at}")
        return claims


def _parse_claims(raw: dict) -> TokenClaims:
    sub = raw.get("sub")
    iat = raw.get("iat")
    exp = raw.get("exp")
    if not isinstance(sub, str) or not sub:
        raise MalformedToken("missing or invalid 'sub' claim")
    # bool is an int subclass; reject it explicitly.
    for name, value in (("iat", iat), ("exp", exp)):
        if not isinstance(value, int) or isinstance(value, bool):
            raise MalformedToken(f"missing or invalid '{name}' claim")
    return TokenClaims(subject_id=sub, issued_at=iat, expires_at=exp)
