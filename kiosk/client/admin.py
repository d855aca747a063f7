"""Admin view — staff dashboard over the check-in list."""

import os
from typing import List, NamedTuple, Optional, Protocol

import structlog

from kiosk.application.services.export_service import EXPORT_FILENAME, write_checkins_xlsx
from kiosk.client.api import KioskApiClient, KioskClientError
from kiosk.config import get_settings
from kiosk.core.formatting import format_short_datetime
from kiosk.domain.schemas.checkin import CheckInRead

settings = get_settings()
logger = structlog.get_logger(__name__)

CLEAR_CONFIRMATION = (
    "ATENÇÃO: Isso apagará TODOS os dados coletados permanentemente. Deseja continuar?"
)
SESSION_EXPIRED = "Sessão expirada. Informe o PIN do administrador novamente."


class Alerts(Protocol):
    """Blocking user notifications."""

    def alert(self, message: str) -> None:
        ...

    def confirm(self, message: str) -> bool:
        ...


class AdminRow(NamedTuple):
    id: int
    name: str
    whatsapp: str
    when: str
    profile: str


class AdminView:
    def __init__(self, api: KioskApiClient, alerts: Alerts, tz_name: Optional[str] = None):
        self.api = api
        self.alerts = alerts
        self.tz_name = tz_name or settings.TIMEZONE
        self.checkins: List[CheckInRead] = []
        self.is_loading = False
        self.is_fullscreen = False

    @property
    def needs_login(self) -> bool:
        return not self.api.token

    @property
    def title(self) -> str:
        return f"LISTA ({len(self.checkins)})"

    def login(self, pin: str) -> bool:
        try:
            self.api.login(pin)
        except KioskClientError as e:
            self.alerts.alert(f"Acesso negado: {e.message}")
            return False
        return True

    def open(self) -> bool:
        return self.refresh()

    def refresh(self) -> bool:
        self.is_loading = True
        try:
            logger.info("Admin: buscando lista de check-ins")
            self.checkins = self.api.list_checkins()
        except KioskClientError as e:
            logger.error("Erro ao buscar check-ins", error=e.message, status_code=e.status_code)
            if e.status_code == 401:
                self.alerts.alert(SESSION_EXPIRED)
            else:
                self.alerts.alert("Erro ao carregar a lista. Verifique a conexão.")
            return False
        finally:
            self.is_loading = False
        return True

    def rows(self) -> List[AdminRow]:
        return [
            AdminRow(c.id, c.name, c.whatsapp, format_short_datetime(c.created_at, self.tz_name), c.profile)
            for c in self.checkins
        ]

    def export(self, path: Optional[str] = None) -> Optional[str]:
        """Write the current list to an .xlsx file and return its path."""
        if not self.checkins:
            self.alerts.alert("A lista está vazia.")
            return None

        path = path or os.path.join(settings.EXPORT_DIR, EXPORT_FILENAME)
        write_checkins_xlsx(self.checkins, path, self.tz_name)
        logger.info("Admin: lista exportada", path=path, count=len(self.checkins))
        return path

    def download(self, path: Optional[str] = None) -> Optional[str]:
        """Save the server's export of the whole table, independent of the loaded list."""
        path = path or os.path.join(settings.EXPORT_DIR, EXPORT_FILENAME)
        try:
            content = self.api.export_checkins()
        except KioskClientError as e:
            self.alerts.alert(SESSION_EXPIRED if e.status_code == 401 else f"Erro ao baixar a lista: {e.message}")
            return None

        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        with open(path, "wb") as f:
            f.write(content)
        logger.info("Admin: exportação do servidor salva", path=path)
        return path

    def clear(self) -> bool:
        if not self.alerts.confirm(CLEAR_CONFIRMATION):
            return False

        try:
            count = self.api.clear_checkins()
        except KioskClientError as e:
            if e.status_code is None:
                self.alerts.alert("Erro de conexão ao tentar limpar o histórico.")
            elif e.status_code == 401:
                self.alerts.alert(SESSION_EXPIRED)
            else:
                self.alerts.alert(f"Erro ao limpar histórico: {e.message or 'Erro desconhecido'}")
            return False

        logger.info("Admin: histórico limpo", count=count)
        self.refresh()
        self.alerts.alert("Histórico limpo com sucesso!")
        return True

    def toggle_fullscreen(self) -> bool:
        self.is_fullscreen = not self.is_fullscreen
        return self.is_fullscreen
