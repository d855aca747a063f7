"""Admin auth route — exchange the staff PIN for a bearer token."""

import structlog
from fastapi import APIRouter

from kiosk.application.services.auth_service import create_admin_token, verify_admin_pin
from kiosk.config import get_settings
from kiosk.core.exceptions import UnauthorizedException
from kiosk.domain.schemas.auth import AdminLoginRequest, TokenResponse

logger = structlog.get_logger(__name__)
settings = get_settings()
router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.post("/login", response_model=TokenResponse)
def login(body: AdminLoginRequest):
    if not verify_admin_pin(body.pin):
        logger.warning("Admin login rejected")
        raise UnauthorizedException("PIN incorreto")

    logger.info("Admin login")
    return TokenResponse(
        access_token=create_admin_token(),
        expires_in=settings.JWT_EXPIRATION_MINUTES * 60,
    )
