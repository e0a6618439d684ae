"""Render the pick list pivot into an ``.xlsx`` workbook."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from io import BytesIO
from typing import Iterable, Sequence

from openpyxl import Workbook
from openpyxl.cell.cell import ILLEGAL_CHARACTERS_RE
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter
from openpyxl.worksheet.worksheet import Worksheet

from .config import PickListSettings
from .errors import ExportError
from .pivot import PivotMatrix, matrix_rows

logger = logging.getLogger(__name__)

XLSX_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

_THIN = Side(style="thin")
_MEDIUM = Side(style="medium")
THIN_BORDER = Border(left=_THIN, right=_THIN, top=_THIN, bottom=_THIN)
TOTAL_BORDER = Border(left=_THIN, right=_THIN, top=_MEDIUM, bottom=_MEDIUM)
BOLD = Font(bold=True)
CENTER = Alignment(horizontal="center")
LEFT = Alignment(horizontal="left")


@dataclass(frozen=True, slots=True)
class ExportedWorkbook:
    content: bytes
    content_type: str
    filename: str


def export_filename(now: datetime | None = None) -> str:
    """Return ``picklist_<unix epoch millis>.xlsx`` for ``now``."""

    moment = now or datetime.now(timezone.utc)
    return f"picklist_{int(moment.timestamp() * 1000)}.xlsx"


def _solid(color: str) -> PatternFill:
    return PatternFill(start_color=color, end_color=color, fill_type="solid")


def _clean_name(value: object) -> object:
    """Strip characters that cannot be stored in a worksheet cell."""

    if isinstance(value, str):
        return ILLEGAL_CHARACTERS_RE.sub("", value)
    return value


def _append_row(ws: Worksheet, values: Sequence[object], text_columns: Iterable[int]) -> int:
    """Append ``values`` and force ``text_columns`` to be stored as strings.

    openpyxl turns any string starting with ``=`` into a formula, so product
    and courier names are pinned to the string type after writing.
    """

    ws.append([_clean_name(value) for value in values])
    row_idx = ws.max_row
    for col_idx in text_columns:
        cell = ws.cell(row=row_idx, column=col_idx)
        if isinstance(cell.value, str):
            cell.data_type = "s"
    return row_idx


def _style_row(
    ws: Worksheet,
    row_idx: int,
    width: int,
    *,
    border: Border,
    fill: PatternFill | None = None,
    bold: bool = False,
) -> None:
    for col_idx in range(1, width + 1):
        cell = ws.cell(row=row_idx, column=col_idx)
        cell.border = border
        if fill is not None:
            cell.fill = fill
        if bold:
            cell.font = BOLD
        cell.alignment = CENTER if col_idx > 1 else LEFT


def render_pivot_sheet(ws: Worksheet, matrix: PivotMatrix, cfg: PickListSettings) -> None:
    """Write ``matrix`` onto ``ws`` with the pick list layout.

    Column A holds the product names, one column per courier follows, and
    the last column is the grand total. The first row is the header and
    the last row is the Total row.
    """

    width = matrix.width

    header_idx = _append_row(ws, matrix.header, range(1, width + 1))
    _style_row(ws, header_idx, width, border=THIN_BORDER, fill=_solid(cfg.header_fill), bold=True)

    lines = matrix_rows(matrix)
    for line in lines[:-1]:
        row_idx = _append_row(ws, line, (1,))
        _style_row(ws, row_idx, width, border=THIN_BORDER)

    total_idx = _append_row(ws, lines[-1], (1,))
    _style_row(ws, total_idx, width, border=TOTAL_BORDER, fill=_solid(cfg.total_fill), bold=True)

    ws.column_dimensions[get_column_letter(1)].width = cfg.product_column_width
    for col_idx in range(2, width + 1):
        ws.column_dimensions[get_column_letter(col_idx)].width = cfg.quantity_column_width
    ws.freeze_panes = "B2"


def render_workbook(matrix: PivotMatrix, cfg: PickListSettings | None = None) -> bytes:
    """Return the serialised workbook for ``matrix``.

    Raises:
        ExportError: openpyxl failed to build or save the workbook.
    """

    cfg = cfg or PickListSettings()
    try:
        workbook = Workbook()
        ws = workbook.active
        ws.title = cfg.sheet_title
        render_pivot_sheet(ws, matrix, cfg)

        buffer = BytesIO()
        workbook.save(buffer)
    except Exception as exc:
        logger.exception(
            "Pick list workbook export failed: couriers=%d products=%d",
            len(matrix.carriers),
            len(matrix.rows),
        )
        raise ExportError() from exc
    return buffer.getvalue()


def export_pivot(
    matrix: PivotMatrix,
    cfg: PickListSettings | None = None,
    *,
    now: datetime | None = None,
) -> ExportedWorkbook:
    return ExportedWorkbook(
        content=render_workbook(matrix, cfg),
        content_type=XLSX_CONTENT_TYPE,
        filename=export_filename(now),
    )
