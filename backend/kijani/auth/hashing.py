"""
Password hashing utilities.

Security notes:
  • bcrypt with a configurable cost factor (BCRYPT_SALT_ROUNDS).
  • bcrypt only reads the first 72 bytes of a password; longer input is
    truncated here explicitly because current bcrypt releases reject it.
  • Both functions are CPU bound. Call them via run_in_threadpool from
    async code so only the current request waits.
"""

import bcrypt

_BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int) -> str:
    """Hash a password with a fresh salt. Returns the modular-crypt string."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_encode(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a password against a stored hash.

    A malformed hash counts as a mismatch, not an error.
    """
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        return False
