"""HTTP client for the check-in API, used by the kiosk form and the admin view.

Every call is bounded by ``CLIENT_TIMEOUT``; transport errors, timeouts and
non-OK responses all surface as ``KioskClientError``. There are no retries.
"""

from typing import Any, List, Optional

import httpx
import structlog

from kiosk.config import get_settings
from kiosk.domain.schemas.checkin import CheckInRead

settings = get_settings()
logger = structlog.get_logger(__name__)


class KioskClientError(Exception):
    """A failed API call. ``status_code`` is None when no response arrived."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


def _error_message(response: httpx.Response) -> Optional[str]:
    try:
        payload = response.json()
    except ValueError:
        return None
    error = payload.get("error") if isinstance(payload, dict) else None
    if isinstance(error, dict):
        return error.get("message")
    return error


class KioskApiClient:
    """Thin wrapper over the check-in endpoints."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        http: Optional[httpx.Client] = None,
    ):
        self.http = http or httpx.Client(
            base_url=(base_url or settings.API_URL).rstrip("/"),
            timeout=timeout if timeout is not None else settings.CLIENT_TIMEOUT,
        )
        self.token: Optional[str] = None

    def _request(self, method: str, path: str, **kwargs) -> httpx.Response:
        headers = kwargs.pop("headers", {})
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"

        try:
            response = self.http.request(method, path, headers=headers, **kwargs)
        except httpx.TimeoutException as e:
            logger.error("API request timed out", method=method, path=path, error=str(e))
            raise KioskClientError("Tempo de resposta esgotado") from e
        except httpx.HTTPError as e:
            logger.error("API request failed", method=method, path=path, error=str(e))
            raise KioskClientError("Erro de conexão") from e

        if response.status_code == 401:
            # Expired or revoked; the admin has to log in again
            self.token = None

        if not response.is_success:
            message = _error_message(response) or f"HTTP {response.status_code}"
            logger.error("API returned an error", method=method, path=path, status_code=response.status_code, message=message)
            raise KioskClientError(message, response.status_code)
        return response

    def create_checkin(self, name: str, whatsapp: str, profile: str) -> dict[str, Any]:
        response = self._request("POST", "/api/checkin", json={"name": name, "whatsapp": whatsapp, "profile": profile})
        return response.json()

    def login(self, pin: str) -> None:
        response = self._request("POST", "/api/admin/login", json={"pin": pin})
        self.token = response.json()["access_token"]

    def list_checkins(self) -> List[CheckInRead]:
        response = self._request("GET", "/api/checkins")
        return [CheckInRead.model_validate(item) for item in response.json()]

    def clear_checkins(self) -> int:
        response = self._request("POST", "/api/checkins/clear")
        return response.json()["count"]

    def export_checkins(self) -> bytes:
        """The server-rendered .xlsx of every stored check-in."""
        response = self._request("GET", "/api/checkins/export")
        return response.content

    def close(self) -> None:
        self.http.close()
