"""
Authentication for Volunteer Hub.

Supports:
- Password hashing (bcrypt, fixed cost factor)
- Session tokens: a JWT embedding the account's current token seed. Rotating
  the seed (login, handle or password change) invalidates every earlier token.
- Basic auth dependencies for the login endpoints
- Bearer auth dependencies resolving a token back to its account
"""

from __future__ import annotations

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, TypeVar

import bcrypt
import jwt
import structlog
from fastapi import Depends
from fastapi.security import (
    HTTPAuthorizationCredentials,
    HTTPBasic,
    HTTPBasicCredentials,
    HTTPBearer,
)
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import or_, select

from volunteer_hub.core.config import get_settings
from volunteer_hub.core.database import get_session
from volunteer_hub.core.errors import UnauthorizedError
from volunteer_hub.models.company import Company
from volunteer_hub.models.volunteer import Volunteer
from volunteer_hub_shared.schemas.common import PASSWORD_MAX_BYTES

log = structlog.get_logger()
settings = get_settings()

bearer_scheme = HTTPBearer(auto_error=False)
basic_scheme = HTTPBasic(auto_error=False)

Account = TypeVar("Account", Volunteer, Company)

TOKEN_SEED_BYTES = 64

# ---------------------------------------------------------------------------
# Password hashing
# ---------------------------------------------------------------------------

def hash_password(password: str) -> str:
    """Hash a password using bcrypt with the configured cost factor."""
    rounds = settings.password_hash_rounds
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt(rounds=rounds)).decode()


def verify_password(password: str, hashed: str) -> bool:
    """Verify a password against a bcrypt hash.

    Candidates longer than bcrypt accepts can never match a stored hash.
    """
    candidate = password.encode()
    if len(candidate) > PASSWORD_MAX_BYTES:
        return False
    return bcrypt.checkpw(candidate, hashed.encode())


# ---------------------------------------------------------------------------
# Token seed + JWT
# ---------------------------------------------------------------------------

def generate_token_seed() -> str:
    """Random per-account seed (512 bits, hex encoded)."""
    return secrets.token_hex(TOKEN_SEED_BYTES)


def create_token(
    token_seed: str,
    actor_kind: str,
    *,
    expires_delta: timedelta | None = None,
) -> str:
    """Sign a session token embedding the account's current seed."""
    now = datetime.now(timezone.utc)
    exp = now + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    payload = {
        "token_seed": token_seed,
        "actor": actor_kind,
        "iat": now,
        "exp": exp,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict:
    """Decode and verify a session token. Raises jwt.PyJWTError on failure."""
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "token_seed", "actor"]},
    )


# ---------------------------------------------------------------------------
# Lookups
# ---------------------------------------------------------------------------

async def find_by_login(
    model: type[Account], login: str, session: AsyncSession
) -> Optional[Account]:
    """Find an account by its handle or its email."""
    handle_column = getattr(model, model.login_field)
    result = await session.execute(
        select(model).where(or_(handle_column == login, model.email == login))
    )
    return result.scalars().first()


async def find_by_token_seed(
    model: type[Account], token_seed: str, session: AsyncSession
) -> Optional[Account]:
    result = await session.execute(select(model).where(model.token_seed == token_seed))
    return result.scalar_one_or_none()


# ---------------------------------------------------------------------------
# Basic mode
# ---------------------------------------------------------------------------

async def _authenticate_basic(
    model: type[Account],
    credentials: Optional[HTTPBasicCredentials],
    session: AsyncSession,
) -> Account:
    if credentials is None:
        raise UnauthorizedError("basic credentials required", headers={"WWW-Authenticate": "Basic"})

    account = await find_by_login(model, credentials.username, session)
    if account is None or not verify_password(credentials.password, account.password_hash):
        log.warning("auth.login_failure", actor=model.actor_kind, login=credentials.username)
        raise UnauthorizedError("unauthorized", headers={"WWW-Authenticate": "Basic"})
    return account


async def login_volunteer(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_scheme),
    session: AsyncSession = Depends(get_session),
) -> Volunteer:
    return await _authenticate_basic(Volunteer, credentials, session)


async def login_company(
    credentials: Optional[HTTPBasicCredentials] = Depends(basic_scheme),
    session: AsyncSession = Depends(get_session),
) -> Company:
    return await _authenticate_basic(Company, credentials, session)


# ---------------------------------------------------------------------------
# Bearer mode
# ---------------------------------------------------------------------------

async def _authenticate_bearer(
    model: type[Account],
    credentials: Optional[HTTPAuthorizationCredentials],
    session: AsyncSession,
) -> Account:
    if credentials is None:
        raise UnauthorizedError("bearer token required", headers={"WWW-Authenticate": "Bearer"})

    try:
        payload = decode_token(credentials.credentials)
    except jwt.PyJWTError:
        raise UnauthorizedError("invalid or expired token", headers={"WWW-Authenticate": "Bearer"})

    if payload["actor"] != model.actor_kind:
        raise UnauthorizedError("token not valid for this account type")

    account = await find_by_token_seed(model, payload["token_seed"], session)
    if account is None:
        # Seed was rotated by a later login/update, or the account is gone.
        raise UnauthorizedError("token has been superseded")
    return account


async def get_current_volunteer(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> Volunteer:
    return await _authenticate_bearer(Volunteer, credentials, session)


async def get_current_company(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    session: AsyncSession = Depends(get_session),
) -> Company:
    return await _authenticate_bearer(Company, credentials, session)
