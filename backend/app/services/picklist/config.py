"""Configuration models for pick list report generation."""

from __future__ import annotations

import re
from dataclasses import dataclass

_ARGB_PATTERN = re.compile(r"^[0-9A-Fa-f]{6}([0-9A-Fa-f]{2})?$")


def _normalise_color(value: str, name: str) -> str:
    stripped = value.strip().lstrip("#")
    if not _ARGB_PATTERN.match(stripped):
        raise ValueError(f"{name} must be an RGB or ARGB hex color")
    if len(stripped) == 6:
        stripped = "FF" + stripped
    return stripped.upper()


@dataclass(slots=True)
class PickListSettings:
    """Runtime tunables for the pick list pivot workbook."""

    sheet_title: str = "Pick List"
    product_column_width: float = 45
    quantity_column_width: float = 15
    header_fill: str = "FFE0E0E0"
    total_fill: str = "FFFFEB9C"
    drop_non_positive: bool = False

    def __post_init__(self) -> None:
        title = self.sheet_title.strip()
        if not title:
            raise ValueError("sheet_title must not be blank")
        # Excel caps sheet titles at 31 characters.
        self.sheet_title = title[:31]
        if self.product_column_width <= 0:
            raise ValueError("product_column_width must be > 0")
        if self.quantity_column_width <= 0:
            raise ValueError("quantity_column_width must be > 0")
        self.header_fill = _normalise_color(self.header_fill, "header_fill")
        self.total_fill = _normalise_color(self.total_fill, "total_fill")
