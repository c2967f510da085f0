from __future__ import annotations

import io
from typing import Iterable, Mapping

import pandas as pd

XLSX_MIMETYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def rows_to_excel(rows: Iterable[Mapping], *, sheet_name: str, columns: list[str]) -> io.BytesIO:
    """Write rows into an in-memory .xlsx (nothing touches the disk)."""
    df = pd.DataFrame(list(rows), columns=columns)

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        df.to_excel(writer, index=False, sheet_name=sheet_name)

    output.seek(0)
    return output
