"""Check-in export — renders a list of check-ins to an .xlsx table.

Used by the admin API (download) and by the kiosk admin view (saved to disk).
"""

import io
import os
from typing import BinaryIO, Optional, Sequence, Union

import pandas as pd

from kiosk.core.formatting import format_full_datetime
from kiosk.domain.schemas.checkin import CheckInRead

EXPORT_TITLE = "Lista de Check-ins - Bar Liberal"
EXPORT_FILENAME = "checkins-bar-liberal.xlsx"
EXPORT_COLUMNS = ["Nome", "WhatsApp", "Perfil", "Data/Hora"]
XLSX_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def build_checkins_frame(checkins: Sequence[CheckInRead], tz_name: Optional[str] = None) -> pd.DataFrame:
    rows = [
        [c.name, c.whatsapp, c.profile, format_full_datetime(c.created_at, tz_name)]
        for c in checkins
    ]
    return pd.DataFrame(rows, columns=EXPORT_COLUMNS)


def write_checkins_xlsx(
    checkins: Sequence[CheckInRead],
    target: Union[str, BinaryIO],
    tz_name: Optional[str] = None,
) -> None:
    """Write the title row and the check-in table to ``target`` (path or binary buffer)."""
    df = build_checkins_frame(checkins, tz_name)
    if isinstance(target, str):
        os.makedirs(os.path.dirname(os.path.abspath(target)), exist_ok=True)

    with pd.ExcelWriter(target, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name="Check-ins", startrow=1)
        sheet = writer.sheets["Check-ins"]
        sheet["A1"] = EXPORT_TITLE
        for column, width in zip("ABCD", (32, 18, 12, 22)):
            sheet.column_dimensions[column].width = width


def checkins_xlsx_bytes(checkins: Sequence[CheckInRead], tz_name: Optional[str] = None) -> bytes:
    out = io.BytesIO()
    write_checkins_xlsx(checkins, out, tz_name)
    return out.getvalue()
