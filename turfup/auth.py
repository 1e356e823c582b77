"""
Password hashing and signed session tokens.
Passwords never stored in plain text. Tokens are stateless JWTs carrying the
user id (sub) and a unique token id (jti) so logout can revoke them.
"""
from __future__ import annotations

import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt
from passlib.context import CryptContext

from turfup.config import config

# pbkdf2_sha256: salted, pure-python backend, no 72-byte password limit
pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


@dataclass
class TokenClaims:
    user_id: str
    jti: str
    expires_at: datetime


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    return pwd_context.verify(plain, hashed)


def create_access_token(subject: str, expires_minutes: int | None = None) -> str:
    minutes = config.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    expire = datetime.now(timezone.utc) + timedelta(minutes=minutes)
    to_encode = {"sub": subject, "exp": expire, "jti": uuid.uuid4().hex}
    return jwt.encode(to_encode, config.JWT_SECRET_KEY, algorithm=config.JWT_ALGORITHM)


def decode_token(token: str) -> TokenClaims | None:
    """Verify signature and expiry. None for any invalid token."""
    try:
        payload = jwt.decode(token, config.JWT_SECRET_KEY, algorithms=[config.JWT_ALGORITHM])
    except JWTError:
        return None
    sub, jti, exp = payload.get("sub"), payload.get("jti"), payload.get("exp")
    if not sub or not jti or exp is None:
        return None
    return TokenClaims(user_id=sub, jti=jti, expires_at=datetime.fromtimestamp(exp, tz=timezone.utc))
