"""Check-in API routes — create, list, clear and export."""

from typing import List

from fastapi import APIRouter, Depends, Response

from kiosk.interfaces.api.deps import require_admin
from kiosk.interfaces.deps import get_checkin_repository
from kiosk.domain.repositories.checkin_repository import CheckInRepository
from kiosk.domain.schemas.checkin import CheckInCreate, CheckInCreated, CheckInRead, ClearResult
from kiosk.application.services.checkin_service import clear_checkins, create_checkin, list_checkins
from kiosk.application.services.export_service import (
    EXPORT_FILENAME,
    XLSX_MEDIA_TYPE,
    checkins_xlsx_bytes,
)

router = APIRouter(prefix="/api", tags=["Check-ins"])


@router.post("/checkin", response_model=CheckInCreated)
def post_checkin(
    body: CheckInCreate,
    repo: CheckInRepository = Depends(get_checkin_repository),
):
    """Register a visitor. Public: this is the kiosk form's endpoint."""
    return create_checkin(repo, body)


@router.get("/checkins", response_model=List[CheckInRead])
def get_checkins(
    repo: CheckInRepository = Depends(get_checkin_repository),
    admin: dict = Depends(require_admin),
):
    return list_checkins(repo)


@router.post("/checkins/clear", response_model=ClearResult)
def post_clear_checkins(
    repo: CheckInRepository = Depends(get_checkin_repository),
    admin: dict = Depends(require_admin),
):
    """Delete every check-in. No server-side confirmation."""
    return clear_checkins(repo)


@router.get("/checkins/export")
def export_checkins(
    repo: CheckInRepository = Depends(get_checkin_repository),
    admin: dict = Depends(require_admin),
):
    content = checkins_xlsx_bytes(list_checkins(repo))
    return Response(
        content=content,
        media_type=XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": f'attachment; filename="{EXPORT_FILENAME}"'},
    )
