"""
FastAPI dependency for bearer-token authentication.

Flow:
  1. Extract Bearer token from Authorization header
  2. Verify signature + expiry (kijani.auth.tokens)
  3. Load the User named by the `sub` claim
  4. Attach it to request.state.user and return it

Security:
  • 401 for every failure mode, with WWW-Authenticate: Bearer
  • The user is re-read on every request, so role changes apply
    immediately even though the token still carries the old role claim
  • Tokens are NEVER logged
"""

from __future__ import annotations

import logging
import uuid
from typing import Annotated

from fastapi import Depends, Header, Request
from sqlalchemy.ext.asyncio import AsyncSession

from kijani.auth.errors import TokenError
from kijani.auth.tokens import verify_token
from kijani.core.config import Settings, get_settings
from kijani.core.database import get_db_session
from kijani.core.errors import Unauthenticated
from kijani.models.user import User
from kijani.services.users import get_user_by_id

logger = logging.getLogger(__name__)


async def get_current_user(
    request: Request,
    settings: Annotated[Settings, Depends(get_settings)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
    authorization: str | None = Header(default=None, alias="Authorization"),
) -> User:
    """
    FastAPI dependency: resolves the Bearer token to a User.

    Usage in routers:
        CurrentUser = Annotated[User, Depends(get_current_user)]
    """

    # ── 1. Extract token ────────────────────────────────────
    if not authorization:
        raise Unauthenticated("Missing Authorization header")

    parts = authorization.split(" ")
    if len(parts) != 2 or parts[0] != "Bearer":
        raise Unauthenticated("Invalid Authorization format")

    # ── 2. Verify ───────────────────────────────────────────
    try:
        claims = verify_token(parts[1], secret=settings.JWT_SECRET)
        user_id = uuid.UUID(claims.subject)
    except (TokenError, ValueError) as exc:
        logger.debug("Rejected bearer token: %s", type(exc).__name__)
        raise Unauthenticated("Invalid or expired token") from exc

    # ── 3. Resolve user ─────────────────────────────────────
    user = await get_user_by_id(session, user_id)
    if user is None:
        logger.debug("Token subject %s no longer exists", user_id)
        raise Unauthenticated("User not found")

    request.state.user = user
    return user
