"""FastAPI dependency — admin bearer token guard."""

from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from kiosk.application.services.auth_service import ADMIN_SUBJECT, decode_access_token
from kiosk.core.exceptions import UnauthorizedException

security = HTTPBearer(auto_error=False)


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> dict:
    """Validate the admin JWT and return its payload."""
    if credentials is None:
        raise UnauthorizedException("Token de administrador ausente")

    payload = decode_access_token(credentials.credentials)
    if payload is None:
        raise UnauthorizedException("Token inválido ou expirado")

    if payload.get("sub") != ADMIN_SUBJECT:
        raise UnauthorizedException("Token inválido")

    return payload
