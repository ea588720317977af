"""
Auth router: registration and login.

POST /api/auth/register
  1. Validates name / email / password (Pydantic).
  2. Rejects a taken email with 409.
  3. Hashes the password (bcrypt, threadpool) and stores the user.

POST /api/auth/login
  1. Looks the user up by email.
  2. Verifies the password (bcrypt, threadpool).
  3. Issues a 7-day bearer token.

Unknown email and wrong password return the same 401.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from kijani.auth.hashing import hash_password, verify_password
from kijani.auth.tokens import issue_token
from kijani.core.config import Settings, get_settings
from kijani.core.database import get_db_session
from kijani.core.errors import Conflict, InternalError, Unauthenticated
from kijani.models.user import User
from kijani.schemas.auth import LoginRequest, RegisterRequest, TokenOut, UserOut
from kijani.services.users import create_user, get_user_by_email

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Auth"])

# Type aliases for cleaner signatures
DbSession = Annotated[AsyncSession, Depends(get_db_session)]
AppSettings = Annotated[Settings, Depends(get_settings)]

_EMAIL_TAKEN = "Email already in use"
_INVALID_CREDENTIALS = "Invalid credentials"


@router.post(
    "/register",
    response_model=UserOut,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
)
async def register(
    payload: RegisterRequest,
    session: DbSession,
    settings: AppSettings,
) -> User:
    try:
        if await get_user_by_email(session, payload.email) is not None:
            raise Conflict(_EMAIL_TAKEN)

        password_hash = await run_in_threadpool(
            hash_password, payload.password, settings.BCRYPT_SALT_ROUNDS
        )
        user = await create_user(
            session,
            name=payload.name,
            email=payload.email,
            password_hash=password_hash,
        )
    except IntegrityError as exc:
        # Lost a race with a concurrent registration for the same email.
        await session.rollback()
        raise Conflict(_EMAIL_TAKEN) from exc
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Failed to register user")
        raise InternalError() from exc

    logger.info("Registered user %s", user.id)
    return user


@router.post(
    "/login",
    response_model=TokenOut,
    summary="Exchange email + password for a bearer token",
)
async def login(
    payload: LoginRequest,
    session: DbSession,
    settings: AppSettings,
) -> TokenOut:
    try:
        user = await get_user_by_email(session, payload.email)
    except SQLAlchemyError as exc:
        logger.exception("Failed to look up user for login")
        raise InternalError() from exc

    if user is None:
        logger.info("Login failed for unknown email %s", payload.email)
        raise Unauthenticated(_INVALID_CREDENTIALS)

    if not await run_in_threadpool(verify_password, payload.password, user.password_hash):
        logger.info("Login failed for user %s: bad password", user.id)
        raise Unauthenticated(_INVALID_CREDENTIALS)

    token = issue_token(user.id, user.role.value, secret=settings.JWT_SECRET)
    return TokenOut(token=token)
