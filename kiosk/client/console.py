"""Terminal front end for the kiosk: visitor form plus the hidden admin view.

Typing the admin command in the name field opens the staff dashboard.
"""

import logging
import os
import time
from getpass import getpass
from typing import Callable

from kiosk.client.admin import AdminView
from kiosk.client.api import KioskApiClient
from kiosk.client.form import CheckInForm
from kiosk.core.logging import configure_logging
from kiosk.domain.schemas.checkin import Profile

ADMIN_COMMAND = "#admin"

CONSENT_TEXT = (
    "Consinto com a coleta dos meus dados para controle de público da casa e envio de promoções. "
    "Seguimos a risca a LGPD e os dados são absolutamente sigilosos e protegidos."
)

Prompt = Callable[[str], str]


class ConsoleAlerts:
    def __init__(self, prompt: Prompt = input):
        self.prompt = prompt

    def alert(self, message: str) -> None:
        print(f"\n⚠  {message}")
        self.prompt("Pressione Enter para continuar...")

    def confirm(self, message: str) -> bool:
        answer = self.prompt(f"\n{message} [s/N] ").strip().lower()
        return answer in ("s", "sim")


def clear_screen() -> None:
    os.system("cls" if os.name == "nt" else "clear")


def ask_profile(prompt: Prompt, current: Profile) -> Profile:
    default = "1" if current == Profile.CASAL else "2"
    answer = prompt(f"Perfil — [1] CASAL  [2] SOLTEIRO (padrão {default}): ").strip()
    if answer == "2" or answer.upper() == Profile.SOLTEIRO.value:
        return Profile.SOLTEIRO
    if answer == "1" or answer.upper() == Profile.CASAL.value:
        return Profile.CASAL
    return current


def render_admin(view: AdminView) -> None:
    if view.is_fullscreen:
        clear_screen()
    print(f"\n=== {view.title} ===")
    rows = view.rows()
    if not rows:
        print("Nenhum check-in realizado")
    for row in rows:
        print(f"#{row.id:<5} {row.name.upper():<30} {row.whatsapp:<17} {row.when}  [{row.profile}]")


def run_admin(api: KioskApiClient, prompt: Prompt = input, secret: Prompt = getpass) -> None:
    alerts = ConsoleAlerts(prompt)
    view = AdminView(api, alerts)
    if view.needs_login and not view.login(secret("PIN do administrador: ")):
        return

    view.open()
    while True:
        if view.needs_login:
            # token rejected by the server
            if not view.login(secret("PIN do administrador: ")):
                return
            view.refresh()
        render_admin(view)
        choice = prompt("\n[r] atualizar  [e] exportar  [d] baixar do servidor  [l] limpar histórico  [f] tela cheia  [x] fechar: ").strip().lower()
        if choice == "r":
            view.refresh()
        elif choice == "e":
            path = view.export()
            if path:
                print(f"Arquivo salvo em {path}")
        elif choice == "d":
            path = view.download()
            if path:
                print(f"Arquivo salvo em {path}")
        elif choice == "l":
            view.clear()
        elif choice == "f":
            view.toggle_fullscreen()
        elif choice == "x":
            return


def ask_text(prompt: Prompt, label: str, current: str) -> str:
    """Blank keeps the current value."""
    suffix = f" [{current}]" if current else ""
    return prompt(f"{label}{suffix}: ").strip() or current


def ask_consent(prompt: Prompt, current: bool) -> bool:
    answer = prompt("Aceito? [S/n] " if current else "Aceito? [s/N] ").strip().lower()
    if answer in ("s", "sim"):
        return True
    if answer in ("n", "nao", "não"):
        return False
    return current


def run_form(api: KioskApiClient, prompt: Prompt = input, secret: Prompt = getpass) -> None:
    form = CheckInForm(api)
    while True:
        print("\nBAR LIBERAL — CHECK-IN PORTARIA")
        form.select_profile(ask_profile(prompt, form.profile))

        name = ask_text(prompt, "Nome completo", form.name)
        if name == ADMIN_COMMAND:
            run_admin(api, prompt, secret)
            continue
        form.set_name(name)
        form.set_whatsapp(ask_text(prompt, "WhatsApp", form.whatsapp))
        print(f"  → {form.whatsapp}")

        print(f"\n{CONSENT_TEXT}")
        form.set_consent(ask_consent(prompt, form.consent))

        while not form.submit():
            if not form.error:
                print("Preencha nome, WhatsApp e aceite os termos para confirmar a entrada.")
                break
            print(f"\n{form.error}")
            if prompt("Tentar novamente? [S/n] ").strip().lower() in ("n", "nao", "não"):
                break

        if form.is_success:
            print("\nBEM-VINDO! Sua entrada foi registrada com sucesso.")
            time.sleep(form.seconds_until_reset())
            form.reset()


def main() -> None:
    configure_logging()
    logging.getLogger("httpx").setLevel(logging.WARNING)
    api = KioskApiClient()
    try:
        run_form(api)
    except (KeyboardInterrupt, EOFError):
        print()
    finally:
        api.close()


if __name__ == "__main__":
    main()
