"""Check-in service — business logic for creating, listing and clearing check-ins."""

from datetime import datetime, timezone
from typing import Callable, List, Optional

import structlog

from kiosk.core.exceptions import ValidationError
from kiosk.core.formatting import iso_timestamp
from kiosk.domain.repositories.checkin_repository import CheckInRepository
from kiosk.domain.schemas.checkin import CheckInCreate, CheckInCreated, CheckInRead, ClearResult

logger = structlog.get_logger(__name__)

REQUIRED_FIELDS = ("name", "whatsapp", "profile")

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def missing_fields(body: CheckInCreate) -> List[str]:
    """Required fields that are absent or blank."""
    return [field for field in REQUIRED_FIELDS if not (getattr(body, field) or "").strip()]


def create_checkin(
    repo: CheckInRepository,
    body: CheckInCreate,
    clock: Optional[Clock] = None,
) -> CheckInCreated:
    """Validate presence of every field and store the check-in stamped with the server clock."""
    missing = missing_fields(body)
    if missing:
        logger.info("Check-in rejected", missing=missing)
        raise ValidationError("Missing required fields", {"fields": missing})

    created_at = iso_timestamp((clock or utc_now)())
    checkin_id = repo.insert(
        name=body.name.strip(),
        whatsapp=body.whatsapp.strip(),
        profile=body.profile.strip(),
        timestamp=created_at,
    )
    logger.info("Check-in created", checkin_id=checkin_id, profile=body.profile.strip(), created_at=created_at)
    return CheckInCreated(id=checkin_id, created_at=created_at)


def list_checkins(repo: CheckInRepository) -> List[CheckInRead]:
    """All check-ins, most recent first."""
    checkins = [CheckInRead.model_validate(c) for c in repo.list_all()]
    logger.info("Check-ins listed", count=len(checkins))
    return checkins


def clear_checkins(repo: CheckInRepository) -> ClearResult:
    """Delete every check-in. The caller confirms intent beforehand."""
    count = repo.clear_all()
    logger.warning("Check-ins cleared", count=count)
    return ClearResult(count=count)
