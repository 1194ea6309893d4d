# parking_api/security.py
"""
Authentication helpers: password hashing, JWT issue/verify, and the
FastAPI dependencies that turn a bearer token into a Principal.

Routers receive the Principal as an explicit dependency and pass it on to
services; nothing is attached to the request object.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

import jwt
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from werkzeug.security import generate_password_hash, check_password_hash

from parking_api.config import settings
from parking_api.database import get_db
from parking_api.errors import Unauthorized, Forbidden
from parking_api.models.user import User, Role

bearer_scheme = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    id: str
    email: str
    role: Role

    @property
    def is_admin(self) -> bool:
        return self.role == Role.ADMIN


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    return check_password_hash(password_hash, password)


def create_access_token(user: User, now: datetime = None) -> str:
    issued = now or datetime.now(timezone.utc)
    payload = {
        "sub": user.id,
        "email": user.email,
        "role": user.role,
        "iat": issued,
        "exp": issued + timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    }
    return jwt.encode(payload, settings.JWT_SECRET, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Token expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Invalid token")


def get_current_principal(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
    db: Session = Depends(get_db),
) -> Principal:
    """FastAPI dependency — resolves the bearer token to a Principal or raises 401."""
    if credentials is None or credentials.scheme.lower() != "bearer" or not credentials.credentials:
        raise Unauthorized("Access token not found")

    claims = decode_access_token(credentials.credentials)
    user = db.query(User).filter(User.id == claims.get("sub")).first()
    if not user:
        raise Unauthorized("User not found")
    return Principal(id=user.id, email=user.email, role=Role(user.role))


def require_admin(principal: Principal = Depends(get_current_principal)) -> Principal:
    """FastAPI dependency — like get_current_principal, plus 403 for non-admins."""
    if not principal.is_admin:
        raise Forbidden("Not authorized. Admin access required")
    return principal
