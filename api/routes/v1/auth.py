"""
api/routes/v1/auth.py -- Registration, login and identity REST endpoints.

Routes:
  POST /api/v1/auth/register   -- create account; 201 with token
  POST /api/v1/auth/login      -- password login; 200 with token
  GET  /api/v1/auth/me         -- current user info (requires auth)

Security:
  POST /login is rate-limited per client IP (Settings.login_rate_limit).
  login_user() provides timing equalization -- use it, never inline.
  Cache-Control: no-store on every response that carries a token.
  Errors are raised as AuthError subclasses; api/main.py renders them, so
  unknown-email and wrong-password responses are byte-identical.

Both token-issuing handlers are plain `def`: FastAPI runs them in its worker
thread pool, so bcrypt and database calls do not block the event loop.
"""

from fastapi import APIRouter, Depends, Request, Response

from api.limiter import limiter, login_rate_limit
from api.models import AuthResponse, LoginRequest, RegisterRequest, UserOut
from auth.dependencies import get_current_user
from auth.models import AuthResult, User
from auth.service import login_user, register_user

# Auth policy:
# - POST /api/v1/auth/register: public -- account creation
# - POST /api/v1/auth/login:    public -- login endpoint must be unauthenticated
# - GET  /api/v1/auth/me:       requires auth (get_current_user)
router = APIRouter()


def _auth_response(result: AuthResult, response: Response) -> AuthResponse:
    response.headers["Cache-Control"] = "no-store"
    return AuthResponse(
        token=result.token,
        user=UserOut(id=result.user.id, email=result.user.email),
    )


# ---------------------------------------------------------------------------
# Public endpoints
# ---------------------------------------------------------------------------


@router.post("/auth/register", response_model=AuthResponse, status_code=201)
def register(request: Request, response: Response, body: RegisterRequest) -> AuthResponse:
    """Create an account and return a token bound to it.

    400 duplicate_email if the email is taken (case-insensitively).
    """
    state = request.app.state
    result = register_user(state.user_store, state.password_hasher, state.token_service, body.email, body.password)
    return _auth_response(result, response)


@router.post("/auth/login", response_model=AuthResponse)
@limiter.limit(login_rate_limit)
def login(request: Request, response: Response, body: LoginRequest) -> AuthResponse:
    """Authenticate with email and password; return a fresh token.

    401 invalid_credentials for both unknown email and wrong password.
    """
    state = request.app.state
    result = login_user(state.user_store, state.password_hasher, state.token_service, body.email, body.password)
    return _auth_response(result, response)


# ---------------------------------------------------------------------------
# Authenticated endpoints
# ---------------------------------------------------------------------------


@router.get("/auth/me", response_model=UserOut)
def me(current_user: User = Depends(get_current_user)) -> UserOut:
    """Return identity information for the currently authenticated user."""
    return UserOut(id=current_user.id, email=current_user.email)
