# streamshelf/security.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from functools import lru_cache
from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from passlib.context import CryptContext

from streamshelf.core.settings import Settings
from streamshelf.errors import AuthError, Err, Ok, Result

# auto_error=False so a missing header becomes our 401, not the framework's 403
bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Identity:
    id: str
    email: str
    name: Optional[str] = None


# -------- Passwords --------
# Verification reads the cost from the stored hash itself
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


@lru_cache
def _pwd_context(rounds: int) -> CryptContext:
    return CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)


def hash_password(plain: str, *, rounds: int = 10) -> str:
    return _pwd_context(rounds).hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    if not hashed:
        return False
    try:
        return pwd_context.verify(plain, hashed)
    except (ValueError, TypeError):
        # malformed stored hash
        return False


# -------- Tokens --------
def create_access_token(
    *, user_id: str, email: str, name: Optional[str], settings: Settings, now: Optional[datetime] = None
) -> str:
    issued = now or datetime.now(timezone.utc)
    exp = issued + timedelta(days=settings.token_expire_days)
    payload = {
        "sub": user_id,
        "email": email,
        "name": name,
        "iat": int(issued.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: Settings) -> Result[Identity]:
    """Decode a bearer token without raising: Ok(identity) or Err(AuthError)."""
    if not token:
        return Err(AuthError("Missing bearer token"))
    try:
        data = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return Err(AuthError("Invalid or expired token"))
    sub = data.get("sub")
    email = data.get("email")
    if not sub or not email:
        return Err(AuthError("Invalid token"))
    return Ok(Identity(id=str(sub), email=str(email), name=data.get("name")))


# -------- FastAPI dependencies --------
def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def _bearer_token(creds: Optional[HTTPAuthorizationCredentials]) -> Optional[str]:
    if not creds or not creds.scheme or creds.scheme.lower() != "bearer":
        return None
    return creds.credentials


def get_current_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> Identity:
    token = _bearer_token(creds)
    if not token:
        raise AuthError("Missing bearer token")
    result = verify_token(token, settings)
    if isinstance(result, Err):
        raise result.error
    return result.value


def get_optional_user(
    creds: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_app_settings),
) -> Optional[Identity]:
    """Identity when a valid bearer token is present, else None (never raises)."""
    token = _bearer_token(creds)
    if not token:
        return None
    result = verify_token(token, settings)
    return result.value if isinstance(result, Ok) else None


# Alias used by routers
require_user = get_current_user
