"""Display formatting shared by the API export and the kiosk client."""

import re
from datetime import datetime, timezone
from typing import Optional

import pytz

from kiosk.config import get_settings

settings = get_settings()

MAX_PHONE_DIGITS = 11


def format_whatsapp(value: str) -> str:
    """Progressively mask a Brazilian mobile number as it is typed.

    '1' -> '1', '119' -> '(11) 9', '11987654321' -> '(11) 98765-4321'.
    Digits beyond the eleventh are dropped.
    """
    numbers = re.sub(r"\D", "", value or "")
    if len(numbers) <= 2:
        return numbers
    if len(numbers) <= 7:
        return f"({numbers[:2]}) {numbers[2:]}"
    return f"({numbers[:2]}) {numbers[2:7]}-{numbers[7:MAX_PHONE_DIGITS]}"


def iso_timestamp(moment: datetime) -> str:
    """UTC ISO 8601 with milliseconds and a Z suffix."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    utc = moment.astimezone(timezone.utc)
    return utc.strftime("%Y-%m-%dT%H:%M:%S.") + f"{utc.microsecond // 1000:03d}Z"


def parse_timestamp(value: str) -> datetime:
    """Parse a stored created_at value. Naive values are taken as UTC."""
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _local(value: str, tz_name: Optional[str]) -> datetime:
    tz = pytz.timezone(tz_name or settings.TIMEZONE)
    return parse_timestamp(value).astimezone(tz)


def format_short_datetime(value: str, tz_name: Optional[str] = None) -> str:
    """Day/month and hour:minute in the venue timezone, e.g. '16/10 • 19:15'."""
    local = _local(value, tz_name)
    return f"{local:%d/%m} • {local:%H:%M}"


def format_full_datetime(value: str, tz_name: Optional[str] = None) -> str:
    """Full pt-BR date and time in the venue timezone, e.g. '16/10/2026 19:15:03'."""
    return _local(value, tz_name).strftime("%d/%m/%Y %H:%M:%S")
