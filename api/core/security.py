"""Security helpers (password hashing and bearer tokens)."""

from __future__ import annotations

import secrets
import string
from datetime import datetime, timedelta, timezone

from argon2 import PasswordHasher, exceptions as argon_exc
from jose import JWTError, jwt

from .config import get_settings

_ph = PasswordHasher()
_PREFIX = "argon2$"
_PASSWORD_ALPHABET = string.ascii_letters + string.digits


class TokenError(Exception):
    """Raised when a bearer token cannot be decoded or has expired."""


def hash_password(password: str) -> str:
    """Create an Argon2 hash with a prefix for detection."""
    hashed = _ph.hash(password)
    return f"{_PREFIX}{hashed}"


def verify_password(password: str, stored_hash: str | None) -> bool:
    stored = stored_hash or ""
    if not stored.startswith(_PREFIX):
        return False
    try:
        return _ph.verify(stored[len(_PREFIX) :], password or "")
    except (argon_exc.VerifyMismatchError, argon_exc.VerificationError, argon_exc.InvalidHashError):
        return False


def generate_password(length: int = 10) -> str:
    """Senha temporaria usada na recuperacao de acesso."""
    return "".join(secrets.choice(_PASSWORD_ALPHABET) for _ in range(length))


def create_access_token(subject: str | int, *, ttl_seconds: int | None = None) -> str:
    settings = get_settings()
    ttl = ttl_seconds if ttl_seconds is not None else settings.jwt_ttl_seconds
    now = datetime.now(timezone.utc)
    claims = {"sub": str(subject), "iat": now, "exp": now + timedelta(seconds=ttl)}
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict:
    """Return the token claims; raises TokenError for invalid/expired tokens."""
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise TokenError(str(exc)) from exc
    if not payload.get("sub"):
        raise TokenError("token without subject")
    return payload
