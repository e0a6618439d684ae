import sys
from decimal import Decimal
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

from backend.app.services.picklist import (
    BLANK,
    AggregatedRow,
    PivotMatrix,
    PivotRow,
    build_pivot,
    check_totals,
)


def _row(carrier: str, product: str, quantity) -> AggregatedRow:
    return AggregatedRow(carrier=carrier, product=product, quantity=Decimal(quantity))


@pytest.fixture
def sample_rows() -> list[AggregatedRow]:
    return [
        _row("Ekart", "Widget", 5),
        _row("Delhivery", "Widget", 3),
        _row("Ekart", "Gadget", 2),
    ]


def test_pivot_sorts_products_and_couriers(sample_rows) -> None:
    matrix = build_pivot(sample_rows)

    assert matrix.carriers == ("Delhivery", "Ekart")
    assert matrix.products == ("Gadget", "Widget")
    assert matrix.header == ["Product Name", "Delhivery", "Ekart", "Grand Total"]


def test_pivot_cells_and_totals(sample_rows) -> None:
    matrix = build_pivot(sample_rows)

    gadget, widget = matrix.rows
    assert gadget.cells == (BLANK, Decimal(2))
    assert gadget.total == Decimal(2)
    assert widget.cells == (Decimal(3), Decimal(5))
    assert widget.total == Decimal(8)
    assert matrix.column_totals == (Decimal(3), Decimal(7))
    assert matrix.grand_total == Decimal(10)
    assert matrix.total_row() == ["Total", Decimal(3), Decimal(7), Decimal(10)]
    assert check_totals(matrix) == []


def test_empty_rows_produce_total_row_only() -> None:
    matrix = build_pivot([])

    assert matrix.carriers == ()
    assert matrix.rows == ()
    assert matrix.header == ["Product Name", "Grand Total"]
    assert matrix.total_row() == ["Total", Decimal(0)]
    assert check_totals(matrix) == []


def test_non_positive_sums_stay_in_key_sets_as_blank() -> None:
    rows = [
        _row("Ekart", "Returned", 0),
        _row("Shadowfax", "Returned", -4),
        _row("Ekart", "Widget", 6),
    ]

    matrix = build_pivot(rows)

    assert matrix.carriers == ("Ekart", "Shadowfax")
    assert matrix.products == ("Returned", "Widget")
    returned, widget = matrix.rows
    assert returned.cells == (BLANK, BLANK)
    assert returned.total == Decimal(0)
    assert widget.cells == (Decimal(6), BLANK)
    # Total row is always numeric, even for an all-blank column.
    assert matrix.column_totals == (Decimal(6), Decimal(0))
    assert check_totals(matrix) == []


def test_drop_non_positive_removes_pairs_before_deriving_keys() -> None:
    rows = [
        _row("Ekart", "Returned", 0),
        _row("Shadowfax", "Returned", -4),
        _row("Ekart", "Widget", 6),
    ]

    matrix = build_pivot(rows, drop_non_positive=True)

    assert matrix.carriers == ("Ekart",)
    assert matrix.products == ("Widget",)
    assert matrix.grand_total == Decimal(6)


def test_fractional_and_large_quantities_are_exact() -> None:
    rows = [
        _row("Ekart", "Rope (m)", "0.1"),
        _row("Ekart", "Wire (m)", "0.2"),
        _row("Delhivery", "Rope (m)", "12345678901234567890.5"),
    ]

    matrix = build_pivot(rows)

    assert matrix.column_totals == (Decimal("12345678901234567890.5"), Decimal("0.3"))
    assert matrix.grand_total == Decimal("12345678901234567890.8")
    assert check_totals(matrix) == []


def test_totals_reconcile_for_many_couriers() -> None:
    rows = [
        _row(f"Courier-{c:02d}", f"SKU-{p:03d}", (c * 7 + p * 3) % 11 - 2)
        for c in range(12)
        for p in range(40)
        if (c + p) % 3
    ]

    matrix = build_pivot(rows)

    assert list(matrix.carriers) == sorted(matrix.carriers)
    assert list(matrix.products) == sorted(matrix.products)
    assert all(len(row.cells) == len(matrix.carriers) for row in matrix.rows)
    assert check_totals(matrix) == []


def test_check_totals_reports_broken_row() -> None:
    matrix = PivotMatrix(
        carriers=("Ekart",),
        rows=(PivotRow(product="Widget", cells=(Decimal(2),), total=Decimal(3)),),
        column_totals=(Decimal(2),),
        grand_total=Decimal(3),
    )

    problems = check_totals(matrix)

    assert any("row 'Widget'" in problem for problem in problems)
    assert any("grand total" in problem for problem in problems)
