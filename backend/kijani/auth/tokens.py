"""
Bearer token issuance and verification (HS256 JWT via PyJWT).

Claims: sub (user id), role, iat, exp. Tokens are stateless. Validity is
purely signature + expiry, there is no revocation list.
"""

from __future__ import annotations

import datetime
import uuid
from dataclasses import dataclass

import jwt
from jwt.utils import base64url_decode, base64url_encode

from kijani.auth.errors import ExpiredToken, InvalidToken

TOKEN_ALGORITHM = "HS256"
TOKEN_LIFETIME = datetime.timedelta(days=7)


@dataclass(frozen=True, slots=True)
class TokenClaims:
    """Verified contents of a bearer token."""

    subject: str
    role: str


def issue_token(
    subject_id: uuid.UUID | str,
    role: str,
    *,
    secret: str,
    now: datetime.datetime | None = None,
) -> str:
    """Sign a token for a user, valid for TOKEN_LIFETIME."""
    issued_at = now or datetime.datetime.now(datetime.timezone.utc)
    payload = {
        "sub": str(subject_id),
        "role": role,
        "iat": issued_at,
        "exp": issued_at + TOKEN_LIFETIME,
    }
    return jwt.encode(payload, secret, algorithm=TOKEN_ALGORITHM)


def _has_canonical_signature(token: str) -> bool:
    """
    Reject signatures with non-zero base64 padding bits.

    Without this, flipping the last signature character can decode to the
    same bytes and still verify.
    """
    signature = token.rsplit(".", 1)[-1].encode("ascii")
    try:
        return base64url_encode(base64url_decode(signature)) == signature
    except ValueError:
        return False


def verify_token(token: str, *, secret: str) -> TokenClaims:
    """
    Verify signature and expiry and return the claims.

    Raises:
        ExpiredToken: past exp.
        InvalidToken: anything else wrong with the token.
    """
    try:
        if not token.isascii() or not _has_canonical_signature(token):
            raise InvalidToken("non-canonical signature encoding")

        payload = jwt.decode(
            token,
            secret,
            algorithms=[TOKEN_ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise ExpiredToken(str(exc)) from exc
    except jwt.InvalidTokenError as exc:
        raise InvalidToken(str(exc)) from exc

    role = payload.get("role")
    if not isinstance(role, str):
        raise InvalidToken("missing role claim")

    return TokenClaims(subject=payload["sub"], role=role)
