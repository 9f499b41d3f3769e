"""
Security utilities for password hashing and session token hashing.
"""
from functools import lru_cache
from typing import Optional
import hashlib
import hmac
import secrets
import bcrypt
from ledger.core.config import settings

SESSION_TOKEN_BYTES = 32  # 256 bits of entropy


def _pre_hash_password(password: str) -> bytes:
    """
    Pre-hash password with SHA256 to support passwords longer than 72 bytes.
    Returns bytes (32 bytes) which is well under bcrypt's 72-byte limit.
    """
    return hashlib.sha256(password.encode('utf-8')).digest()


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    pre_hashed = _pre_hash_password(plain_password)
    # hashed_password is a string starting with $2b$, convert to bytes for bcrypt
    return bcrypt.checkpw(pre_hashed, hashed_password.encode('utf-8'))


def get_password_hash(password: str, rounds: Optional[int] = None) -> str:
    """
    Hash a password.
    Pre-hashes with SHA256 first to support passwords longer than 72 bytes.
    Uses bcrypt directly to avoid passlib's backend detection issues.
    """
    pre_hashed = _pre_hash_password(password)
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    hashed = bcrypt.hashpw(pre_hashed, salt)
    # Return as string for database storage
    return hashed.decode('utf-8')


@lru_cache(maxsize=1)
def dummy_password_hash() -> str:
    """
    Hash compared against when the email is unknown, so that a failed sign-in
    costs one bcrypt comparison whether or not the account exists.
    """
    return get_password_hash(secrets.token_hex(16))


def generate_session_token() -> str:
    """Create a random opaque session token (hex encoded)."""
    return secrets.token_hex(SESSION_TOKEN_BYTES)


def hash_session_token(token: str, secret: Optional[str] = None) -> str:
    """Keyed HMAC-SHA256 of a raw session token, hex encoded."""
    key = (secret or settings.AUTH_SECRET).encode('utf-8')
    return hmac.new(key, token.encode('utf-8'), hashlib.sha256).hexdigest()
