"""
Auth HTTP routes — POST /api/auth/register,
                   POST /api/auth/login,
                   GET  /api/auth/user

Register and login both answer {"token": "<jwt>"}; the client sends it back
in the x-auth-token header.

PBKDF2 is CPU-bound (600k rounds by default), so hashing and verification
run in a worker thread via asyncio.to_thread() to keep the event loop free.
"""
from __future__ import annotations

import asyncio
import logging

from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from taxcalc.auth.schemas import LoginRequest, RegisterRequest, TokenResponse
from taxcalc.auth.security import (
    create_access_token,
    get_current_user_id,
    hash_password,
    verify_password,
)
from taxcalc.database import get_db
from taxcalc.store import create_user, get_user, get_user_credentials

router = APIRouter(prefix="/api/auth", tags=["auth"])
logger = logging.getLogger(__name__)

_USER_EXISTS = "User already exists"
# Same message for unknown email and wrong password
_INVALID_CREDENTIALS = "Invalid credentials"


@router.post("/register")
async def register(
    body: RegisterRequest,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Create an account and return an access token for it."""
    if await get_user_credentials(db, body.email) is not None:
        raise HTTPException(status_code=400, detail=_USER_EXISTS)

    password_hash = await asyncio.to_thread(hash_password, body.password)
    try:
        user = await create_user(db, body.name, body.email, password_hash)
    except IntegrityError as exc:
        # Concurrent registration won the unique index on email
        await db.rollback()
        logger.info("Duplicate registration rejected by unique index")
        raise HTTPException(status_code=400, detail=_USER_EXISTS) from exc

    token = create_access_token(user.id)
    return JSONResponse(status_code=200, content=TokenResponse(token=token).model_dump())


@router.post("/login")
async def login(
    body: LoginRequest,
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    credentials = await get_user_credentials(db, body.email)
    if credentials is None:
        raise HTTPException(status_code=400, detail=_INVALID_CREDENTIALS)

    user_id, password_hash = credentials
    if not await asyncio.to_thread(verify_password, body.password, password_hash):
        logger.info("Failed login user_id=%s", user_id)
        raise HTTPException(status_code=400, detail=_INVALID_CREDENTIALS)

    logger.info("Login user_id=%s", user_id)
    token = create_access_token(user_id)
    return JSONResponse(status_code=200, content=TokenResponse(token=token).model_dump())


@router.get("/user")
async def current_user(
    user_id: str = Depends(get_current_user_id),
    db: AsyncSession = Depends(get_db),
) -> JSONResponse:
    """Profile of the token's owner (id, name, email, createdAt)."""
    user = await get_user(db, user_id)
    if user is None:
        raise HTTPException(status_code=404, detail="User not found")
    return JSONResponse(status_code=200, content=user.model_dump(mode="json", by_alias=True))
