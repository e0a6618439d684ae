"""Product × courier pivot matrix with row, column and grand totals."""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Iterable, Sequence, Union

from .aggregate import AggregatedRow

PRODUCT_HEADER = "Product Name"
GRAND_TOTAL_HEADER = "Grand Total"
TOTAL_LABEL = "Total"


class CellMarker(Enum):
    """Display-only marker for a cell without a positive quantity."""

    BLANK = "blank"

    def __repr__(self) -> str:
        return "BLANK"


BLANK = CellMarker.BLANK

Cell = Union[Decimal, CellMarker]


def cell_value(cell: Cell) -> Decimal:
    """Return the arithmetic value of ``cell`` (``BLANK`` counts as zero)."""

    if cell is BLANK:
        return Decimal(0)
    return cell


@dataclass(frozen=True, slots=True)
class PivotRow:
    """One product line of the pivot."""

    product: str
    cells: tuple[Cell, ...]
    total: Decimal


@dataclass(frozen=True, slots=True)
class PivotMatrix:
    """Dense product × courier matrix closed by a Total row.

    ``carriers`` and the product order of ``rows`` are sorted
    lexicographically. ``column_totals`` lines up with ``carriers``.
    """

    carriers: tuple[str, ...]
    rows: tuple[PivotRow, ...]
    column_totals: tuple[Decimal, ...]
    grand_total: Decimal

    @property
    def products(self) -> tuple[str, ...]:
        return tuple(row.product for row in self.rows)

    @property
    def header(self) -> list[str]:
        return [PRODUCT_HEADER, *self.carriers, GRAND_TOTAL_HEADER]

    @property
    def width(self) -> int:
        return len(self.carriers) + 2

    def total_row(self) -> list[str | Decimal]:
        return [TOTAL_LABEL, *self.column_totals, self.grand_total]


def _present_rows(
    rows: Iterable[AggregatedRow], *, drop_non_positive: bool
) -> list[AggregatedRow]:
    if not drop_non_positive:
        return list(rows)
    return [row for row in rows if row.quantity > 0]


def build_pivot(
    rows: Iterable[AggregatedRow], *, drop_non_positive: bool = False
) -> PivotMatrix:
    """Pivot aggregated rows into a product × courier matrix.

    Every product and courier seen in ``rows`` gets a row or column, even
    when its summed quantity is zero or negative; such cells render as
    ``BLANK`` and add nothing to the totals. With ``drop_non_positive`` the
    non-positive pairs are discarded before the key sets are derived.
    """

    present = _present_rows(rows, drop_non_positive=drop_non_positive)

    carriers = sorted({row.carrier for row in present})
    products = sorted({row.product for row in present})

    lookup: dict[str, dict[str, Decimal]] = defaultdict(dict)
    for row in present:
        lookup[row.product][row.carrier] = row.quantity

    column_totals: dict[str, Decimal] = {carrier: Decimal(0) for carrier in carriers}
    grand_total = Decimal(0)
    pivot_rows: list[PivotRow] = []

    for product in products:
        quantities = lookup[product]
        cells: list[Cell] = []
        row_total = Decimal(0)
        for carrier in carriers:
            qty = quantities.get(carrier, Decimal(0))
            if qty > 0:
                cells.append(qty)
                column_totals[carrier] += qty
                row_total += qty
            else:
                cells.append(BLANK)
        pivot_rows.append(PivotRow(product=product, cells=tuple(cells), total=row_total))
        grand_total += row_total

    return PivotMatrix(
        carriers=tuple(carriers),
        rows=tuple(pivot_rows),
        column_totals=tuple(column_totals[carrier] for carrier in carriers),
        grand_total=grand_total,
    )


def check_totals(matrix: PivotMatrix) -> list[str]:
    """Return a description of every broken total in ``matrix``.

    An empty list means each row, column and the grand total reconcile
    with their cells.
    """

    problems: list[str] = []
    width = len(matrix.carriers)

    if len(matrix.column_totals) != width:
        problems.append("column totals do not line up with couriers")
    if len(set(matrix.carriers)) != width:
        problems.append("duplicate courier column")
    if len(set(matrix.products)) != len(matrix.rows):
        problems.append("duplicate product row")

    columns: list[Decimal] = [Decimal(0)] * width
    for row in matrix.rows:
        if len(row.cells) != width:
            problems.append(f"row {row.product!r} has {len(row.cells)} cells, expected {width}")
            continue
        values = [cell_value(cell) for cell in row.cells]
        if sum(values, Decimal(0)) != row.total:
            problems.append(f"row {row.product!r} total {row.total} does not match its cells")
        columns = [current + value for current, value in zip(columns, values)]

    for carrier, expected, actual in zip(matrix.carriers, columns, matrix.column_totals):
        if expected != actual:
            problems.append(f"column {carrier!r} total {actual} does not match its cells ({expected})")

    row_sum = sum((row.total for row in matrix.rows), Decimal(0))
    column_sum = sum(matrix.column_totals, Decimal(0))
    if matrix.grand_total != row_sum or matrix.grand_total != column_sum:
        problems.append(
            f"grand total {matrix.grand_total} does not match rows ({row_sum}) or columns ({column_sum})"
        )

    return problems


def matrix_rows(matrix: PivotMatrix) -> Sequence[list[str | Decimal | None]]:
    """Return every data row plus the Total row as plain display values."""

    lines: list[list[str | Decimal | None]] = []
    for row in matrix.rows:
        lines.append(
            [row.product, *(None if cell is BLANK else cell for cell in row.cells), row.total]
        )
    lines.append(list(matrix.total_row()))
    return lines
