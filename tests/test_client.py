from datetime import timedelta

import httpx
import pandas as pd
import pytest

from kiosk.application.services.auth_service import create_access_token
from kiosk.client.admin import CLEAR_CONFIRMATION, SESSION_EXPIRED, AdminView
from kiosk.client.api import KioskApiClient, KioskClientError
from kiosk.client.form import SUCCESS_DURATION, CheckInForm
from kiosk.domain.schemas.checkin import Profile

from conftest import ADMIN_PIN, FakeAlerts


def filled_form(api, clock):
    form = CheckInForm(api, clock=clock)
    form.set_name("Ana")
    form.set_whatsapp("11987654321")
    form.select_profile(Profile.CASAL)
    form.toggle_consent()
    return form


def mock_api(handler):
    return KioskApiClient(http=httpx.Client(base_url="http://kiosk.test", transport=httpx.MockTransport(handler)))

def expired_token():
    return create_access_token({"sub": "admin"}, expires_delta=timedelta(minutes=-1))


# --- form ---------------------------------------------------------------

def test_form_defaults(api, clock):
    form = CheckInForm(api, clock=clock)
    assert (form.name, form.whatsapp, form.profile, form.consent) == ("", "", Profile.CASAL, False)
    assert form.can_submit is False


def test_form_formats_phone_as_typed(api, clock):
    form = CheckInForm(api, clock=clock)
    for typed, shown in [("1", "1"), ("119", "(11) 9"), ("11987654321", "(11) 98765-4321")]:
        form.set_whatsapp(typed)
        assert form.whatsapp == shown


@pytest.mark.parametrize("missing", ["name", "whatsapp", "consent"])
def test_submit_is_blocked_without_required_input(api, clock, repo, missing):
    form = filled_form(api, clock)
    if missing == "consent":
        form.toggle_consent()
    else:
        setattr(form, missing, "")

    assert form.submit() is False
    assert form.error is None
    assert repo.count() == 0


def test_submit_success_then_resets_after_duration(api, clock, repo):
    form = filled_form(api, clock)

    assert form.submit() is True
    assert form.is_success
    assert form.can_submit is False
    assert form.last_checkin["success"] is True
    stored = repo.list_all()[0]
    assert (stored.name, stored.whatsapp, stored.profile) == ("Ana", "(11) 98765-4321", "CASAL")

    clock.advance(SUCCESS_DURATION - 0.1)
    assert form.is_success
    assert form.name == "Ana"

    clock.advance(0.2)
    assert form.is_success is False
    assert (form.name, form.whatsapp, form.profile, form.consent) == ("", "", Profile.CASAL, False)


def test_submit_failure_keeps_fields_and_shows_error(clock):
    def handler(request):
        return httpx.Response(500, json={"error": {"message": "Failed to save check-in"}})

    form = filled_form(mock_api(handler), clock)

    assert form.submit() is False
    assert form.is_submitting is False
    assert form.is_success is False
    assert "Failed to save check-in" in form.error
    assert form.name == "Ana"
    assert form.whatsapp == "(11) 98765-4321"
    assert form.consent is True


def test_submit_timeout_is_reported(clock):
    def handler(request):
        raise httpx.ReadTimeout("slow", request=request)

    form = filled_form(mock_api(handler), clock)

    assert form.submit() is False
    assert "Tempo de resposta esgotado" in form.error


# --- api client ---------------------------------------------------------

def test_client_sends_bearer_token_after_login(api):
    api.login(ADMIN_PIN)
    assert api.token
    assert api.list_checkins() == []


def test_client_login_with_wrong_pin(api):
    with pytest.raises(KioskClientError) as exc:
        api.login("0000")
    assert exc.value.status_code == 401
    assert api.token is None


def test_client_drops_token_rejected_by_server(api):
    api.token = expired_token()

    with pytest.raises(KioskClientError) as exc:
        api.list_checkins()
    assert exc.value.status_code == 401
    assert api.token is None


def test_client_export_returns_xlsx_bytes(api, repo):
    repo.insert("Ana", "(11) 98765-4321", "CASAL", "2026-10-16T22:15:03.120Z")
    api.login(ADMIN_PIN)

    content = api.export_checkins()

    assert content[:2] == b"PK"


def test_client_connection_error_has_no_status():
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(KioskClientError) as exc:
        mock_api(handler).clear_checkins()
    assert exc.value.status_code is None


# --- admin view ---------------------------------------------------------

@pytest.fixture
def admin(api, alerts):
    view = AdminView(api, alerts, tz_name="America/Sao_Paulo")
    assert view.login(ADMIN_PIN)
    return view


def test_admin_open_lists_rows(admin, repo):
    repo.insert("Ana", "(11) 98765-4321", "CASAL", "2026-10-16T22:15:03.120Z")
    repo.insert("Bia", "(11) 91234-5678", "SOLTEIRO", "2026-10-16T23:40:00.000Z")

    assert admin.open() is True
    assert admin.is_loading is False
    assert admin.title == "LISTA (2)"
    first = admin.rows()[0]
    assert first.name == "Bia"
    assert first.when == "16/10 • 20:40"
    assert first.profile == "SOLTEIRO"


def test_admin_refresh_failure_alerts(alerts):
    def handler(request):
        return httpx.Response(500, json={"error": {"message": "Failed to fetch check-ins"}})

    view = AdminView(mock_api(handler), alerts)

    assert view.refresh() is False
    assert view.is_loading is False
    assert alerts.messages == ["Erro ao carregar a lista. Verifique a conexão."]


def test_admin_refresh_with_expired_session(api, alerts):
    api.token = expired_token()
    view = AdminView(api, alerts)

    assert view.refresh() is False
    assert alerts.messages == [SESSION_EXPIRED]
    assert view.needs_login

    assert view.login(ADMIN_PIN)
    assert view.refresh() is True


def test_admin_clear_with_expired_session(api, alerts, repo):
    repo.insert("Ana", "1", "CASAL", "2026-10-16T22:15:03.120Z")
    api.token = expired_token()
    view = AdminView(api, alerts)

    assert view.clear() is False
    assert alerts.messages == [SESSION_EXPIRED]
    assert repo.count() == 1


def test_admin_login_rejected(api, alerts):
    view = AdminView(api, alerts)
    assert view.login("0000") is False
    assert alerts.messages[0].startswith("Acesso negado")


def test_admin_export_empty_list_alerts(admin, alerts, tmp_path):
    admin.open()
    assert admin.export(str(tmp_path / "out.xlsx")) is None
    assert alerts.messages == ["A lista está vazia."]
    assert not (tmp_path / "out.xlsx").exists()


def test_admin_export_writes_table(admin, repo, tmp_path):
    repo.insert("Ana", "(11) 98765-4321", "CASAL", "2026-10-16T22:15:03.120Z")
    admin.open()

    path = admin.export(str(tmp_path / "exports" / "lista.xlsx"))

    df = pd.read_excel(path, header=1)
    assert df.to_dict("records") == [
        {"Nome": "Ana", "WhatsApp": "(11) 98765-4321", "Perfil": "CASAL", "Data/Hora": "16/10/2026 19:15:03"}
    ]


def test_admin_download_saves_server_export(admin, alerts, repo, tmp_path):
    repo.insert("Ana", "(11) 98765-4321", "CASAL", "2026-10-16T22:15:03.120Z")
    repo.insert("Bia", "(11) 91234-5678", "SOLTEIRO", "2026-10-16T23:40:00.000Z")

    # nothing loaded locally; the file comes from the server
    path = admin.download(str(tmp_path / "exports" / "servidor.xlsx"))

    df = pd.read_excel(path, header=1)
    assert list(df["Nome"]) == ["Bia", "Ana"]
    assert alerts.messages == []


def test_admin_download_failure_alerts(alerts, tmp_path):
    def handler(request):
        return httpx.Response(500, json={"error": {"message": "Failed to fetch check-ins"}})

    view = AdminView(mock_api(handler), alerts)

    assert view.download(str(tmp_path / "out.xlsx")) is None
    assert alerts.messages == ["Erro ao baixar a lista: Failed to fetch check-ins"]
    assert not (tmp_path / "out.xlsx").exists()


def test_admin_clear_requires_confirmation(api, repo):
    repo.insert("Ana", "1", "CASAL", "2026-10-16T22:15:03.120Z")
    alerts = FakeAlerts(confirm_answer=False)
    view = AdminView(api, alerts)
    view.login(ADMIN_PIN)

    assert view.clear() is False
    assert alerts.confirmations == [CLEAR_CONFIRMATION]
    assert repo.count() == 1


def test_admin_clear_success(admin, alerts, repo):
    repo.insert("Ana", "1", "CASAL", "2026-10-16T22:15:03.120Z")
    admin.open()

    assert admin.clear() is True
    assert admin.checkins == []
    assert alerts.messages == ["Histórico limpo com sucesso!"]
    assert repo.count() == 0


def test_admin_clear_server_error_shows_message(alerts):
    def handler(request):
        return httpx.Response(500, json={"error": {"message": "Failed to clear list"}})

    view = AdminView(mock_api(handler), alerts)

    assert view.clear() is False
    assert alerts.messages == ["Erro ao limpar histórico: Failed to clear list"]


def test_admin_clear_network_error(alerts):
    def handler(request):
        raise httpx.ConnectError("refused", request=request)

    view = AdminView(mock_api(handler), alerts)

    assert view.clear() is False
    assert alerts.messages == ["Erro de conexão ao tentar limpar o histórico."]


def test_admin_fullscreen_toggle(admin):
    assert admin.toggle_fullscreen() is True
    assert admin.toggle_fullscreen() is False


# --- end to end ---------------------------------------------------------

def test_checkin_lifecycle(api, clock, alerts, repo):
    before = repo.count()
    form = filled_form(api, clock)

    assert form.submit() is True
    assert repo.count() == before + 1

    view = AdminView(api, alerts)
    view.login(ADMIN_PIN)
    view.open()
    first = view.checkins[0]
    assert (first.name, first.whatsapp, first.profile) == ("Ana", "(11) 98765-4321", "CASAL")

    prior = len(view.checkins)
    assert api.clear_checkins() == prior
    view.refresh()
    assert view.checkins == []
