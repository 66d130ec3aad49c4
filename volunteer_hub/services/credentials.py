"""
Credential store: account creation, password checks and token issuance,
shared by volunteers and companies.
"""

from __future__ import annotations

from typing import Any

import structlog
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from volunteer_hub.core.auth import (
    Account,
    create_token,
    generate_token_seed,
    hash_password,
)
from volunteer_hub.core.errors import ConflictError

log = structlog.get_logger()


async def ensure_unique(
    model: type[Account],
    session: AsyncSession,
    *,
    handle: str | None = None,
    email: str | None = None,
    exclude: Account | None = None,
) -> None:
    """Raise ConflictError if another account already uses the handle or email."""
    checks = []
    if handle is not None:
        checks.append((model.login_field, getattr(model, model.login_field) == handle))
    if email is not None:
        checks.append(("email", model.email == email))

    for field, clause in checks:
        stmt = select(model).where(clause)
        if exclude is not None:
            stmt = stmt.where(model.id != exclude.id)
        result = await session.execute(stmt)
        if result.scalars().first() is not None:
            raise ConflictError(f"{model.actor_kind} with that {field} already exists")


async def save_account(account: Account, session: AsyncSession) -> None:
    """Flush a new or changed account.

    A unique-index violation (a concurrent request took the handle or email
    after ``ensure_unique`` ran) raises ConflictError.
    """
    session.add(account)
    try:
        await session.flush()
    except IntegrityError:
        log.info("auth.unique_conflict", actor=account.actor_kind)
        raise ConflictError(
            f"{account.actor_kind} with that {account.login_field} or email already exists"
        )


async def create_account(
    model: type[Account],
    fields: dict[str, Any],
    password: str,
    session: AsyncSession,
) -> Account:
    """Persist a new account with a hashed password and a fresh token seed."""
    await ensure_unique(
        model,
        session,
        handle=fields[model.login_field],
        email=fields["email"],
    )

    account = model(
        **fields,
        password_hash=hash_password(password),
        token_seed=generate_token_seed(),
    )
    await save_account(account, session)

    log.info(f"{model.actor_kind}.signed_up", account_id=str(account.id))
    return account


async def issue_token(account: Account, session: AsyncSession) -> str:
    """Rotate the account's token seed and sign a token for the new seed.

    Every token issued before this call stops resolving.
    """
    account.token_seed = generate_token_seed()
    session.add(account)
    await session.flush()

    log.info("auth.token_issued", actor=account.actor_kind, account_id=str(account.id))
    return create_token(account.token_seed, account.actor_kind)


async def change_password(account: Account, new_password: str, session: AsyncSession) -> Account:
    """Re-hash and store a new password. Does not rotate the token seed."""
    account.password_hash = hash_password(new_password)
    session.add(account)
    await session.flush()

    log.info("auth.password_changed", actor=account.actor_kind, account_id=str(account.id))
    return account
