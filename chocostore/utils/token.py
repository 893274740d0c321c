# chocostore/utils/token.py
"""
Bearer tokens for the back-office.

Tokens carry the admin id in `sub` and the role it was issued for. The role
in the token is informational; `get_current_user` always re-reads the
account so a disabled or deleted admin loses access immediately.
"""
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
from sqlmodel import Session

from chocostore.config import settings
from chocostore.database import get_session
from chocostore.models.admin_user import AdminUser

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login")

CREDENTIALS_ERROR = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)


def create_access_token(admin: AdminUser, expires_delta: Optional[timedelta] = None) -> str:
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    claims = {
        "sub": str(admin.id),
        "role": admin.role,
        "exp": datetime.now(timezone.utc) + lifetime,
    }
    return jwt.encode(claims, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError as e:
        logger.info(f"Rejected bearer token: {e}")
        return None


def get_current_user(
    token: str = Depends(oauth2_scheme),
    session: Session = Depends(get_session),
) -> AdminUser:
    claims = decode_access_token(token)
    subject = claims.get("sub") if claims else None

    if not subject or not subject.isdigit():
        raise CREDENTIALS_ERROR

    admin = session.get(AdminUser, int(subject))
    if admin is None:
        raise CREDENTIALS_ERROR

    if not admin.can_login:
        raise HTTPException(status.HTTP_403_FORBIDDEN, "User account is disabled")

    return admin
