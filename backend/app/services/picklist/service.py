"""Pick list report operations used by the API layer."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import datetime
from typing import Any

from sqlalchemy.orm import Session as DBSession

from .aggregate import FilterOptions, fetch_aggregated_rows, fetch_filter_options
from .config import PickListSettings
from .errors import ReportGenerationError
from .export import ExportedWorkbook, export_pivot
from .filters import LabelFilters, build_filter_set, parse_filters
from .grouping import CourierGroup, build_courier_groups, total_quantity
from .pivot import PivotMatrix, build_pivot, check_totals

logger = logging.getLogger(__name__)

FilterInput = Mapping[str, Any] | LabelFilters | None


def generate(db: DBSession, filters: FilterInput = None) -> list[CourierGroup]:
    """Return matching label quantities grouped by courier.

    Raises:
        FilterValidationError: A filter value is malformed.
        QueryError: The label store failed.
    """

    parsed = parse_filters(filters)
    rows = fetch_aggregated_rows(db, build_filter_set(parsed), order_by="courier")
    groups = build_courier_groups(rows)
    logger.info(
        "Generated pick list: couriers=%d lines=%d units=%s",
        len(groups),
        len(rows),
        total_quantity(groups),
    )
    return groups


def build_matrix(
    db: DBSession,
    filters: FilterInput = None,
    cfg: PickListSettings | None = None,
) -> PivotMatrix:
    """Return the reconciled product × courier pivot for ``filters``."""

    cfg = cfg or PickListSettings()
    parsed = parse_filters(filters)
    rows = fetch_aggregated_rows(db, build_filter_set(parsed), order_by="product")
    matrix = build_pivot(rows, drop_non_positive=cfg.drop_non_positive)

    problems = check_totals(matrix)
    if problems:
        logger.error("Pick list pivot does not reconcile: %s", "; ".join(problems))
        raise ReportGenerationError()

    return matrix


def download(
    db: DBSession,
    filters: FilterInput = None,
    *,
    cfg: PickListSettings | None = None,
    now: datetime | None = None,
) -> ExportedWorkbook:
    """Return the pick list pivot as an ``.xlsx`` download.

    Raises:
        FilterValidationError: A filter value is malformed.
        ReportGenerationError: The query or the workbook export failed.
    """

    cfg = cfg or PickListSettings()
    matrix = build_matrix(db, filters, cfg)
    exported = export_pivot(matrix, cfg, now=now)
    logger.info(
        "Exported pick list %s: couriers=%d products=%d grand_total=%s",
        exported.filename,
        len(matrix.carriers),
        len(matrix.rows),
        matrix.grand_total,
    )
    return exported


def filter_options(db: DBSession) -> FilterOptions:
    """Return the stores and couriers available for filtering."""

    return fetch_filter_options(db)
