"""Auth service — admin PIN check and JWT token management."""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from kiosk.config import get_settings

settings = get_settings()

ADMIN_SUBJECT = "admin"


def verify_admin_pin(pin: str) -> bool:
    return secrets.compare_digest(pin.encode("utf-8"), settings.ADMIN_PIN.encode("utf-8"))


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.JWT_EXPIRATION_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict]:
    try:
        payload = jwt.decode(
            token, settings.SECRET_KEY, algorithms=[settings.JWT_ALGORITHM]
        )
        return payload
    except JWTError:
        return None


def create_admin_token() -> str:
    return create_access_token(data={"sub": ADMIN_SUBJECT, "role": "admin"})
