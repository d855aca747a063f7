"""Kiosk check-in form state."""

import time
from typing import Any, Callable, Optional

import structlog

from kiosk.client.api import KioskApiClient, KioskClientError
from kiosk.core.formatting import format_whatsapp
from kiosk.domain.schemas.checkin import Profile

logger = structlog.get_logger(__name__)

SUCCESS_DURATION = 3.0  # seconds


class CheckInForm:
    """Editable state of the visitor form plus its submit lifecycle.

    After a successful submit the form stays in the success state for
    ``SUCCESS_DURATION`` seconds and then resets itself to defaults. The reset
    is applied on the next read of the state, against the injected clock.
    """

    def __init__(self, api: KioskApiClient, clock: Callable[[], float] = time.monotonic):
        self.api = api
        self._clock = clock
        self.is_submitting = False
        self.last_checkin: Optional[dict[str, Any]] = None
        self.reset()

    def reset(self) -> None:
        self.name = ""
        self.whatsapp = ""
        self.profile = Profile.CASAL
        self.consent = False
        self.error: Optional[str] = None
        self._success_at: Optional[float] = None

    def refresh(self) -> None:
        if self._success_at is not None and self._clock() - self._success_at >= SUCCESS_DURATION:
            self.reset()

    @property
    def is_success(self) -> bool:
        self.refresh()
        return self._success_at is not None

    def set_name(self, value: str) -> None:
        self.name = value

    def set_whatsapp(self, value: str) -> None:
        self.whatsapp = format_whatsapp(value)

    def select_profile(self, profile: Profile) -> None:
        self.profile = Profile(profile)

    def toggle_consent(self) -> None:
        self.consent = not self.consent

    def set_consent(self, value: bool) -> None:
        self.consent = bool(value)

    @property
    def can_submit(self) -> bool:
        return bool(
            self.name
            and self.whatsapp
            and self.consent
            and not self.is_submitting
            and not self.is_success
        )

    def submit(self) -> bool:
        """Send the check-in. Returns True on success, False when blocked or failed."""
        if not self.can_submit:
            return False

        self.is_submitting = True
        self.error = None
        try:
            self.last_checkin = self.api.create_checkin(self.name, self.whatsapp, self.profile.value)
        except KioskClientError as e:
            logger.error("Erro ao enviar check-in", error=e.message, status_code=e.status_code)
            self.error = f"Não foi possível registrar a entrada: {e.message}. Tente novamente."
            return False
        finally:
            self.is_submitting = False

        self._success_at = self._clock()
        return True

    def seconds_until_reset(self) -> float:
        if self._success_at is None:
            return 0.0
        return max(0.0, SUCCESS_DURATION - (self._clock() - self._success_at))
