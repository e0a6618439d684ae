"""Grouped quantity sums over the labels table."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Literal

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session as DBSession

from ... import models
from .errors import QueryError
from .filters import FilterSet

logger = logging.getLogger(__name__)

AggregateOrder = Literal["courier", "product"]


@dataclass(frozen=True, slots=True)
class AggregatedRow:
    """Summed quantity for one (carrier, product) pair."""

    carrier: str
    product: str
    quantity: Decimal


@dataclass(frozen=True, slots=True)
class FilterOptions:
    stores: list[str]
    couriers: list[str]


def _coerce_decimal(value: Decimal | int | float | None) -> Decimal:
    if value is None:
        return Decimal(0)
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        # str() keeps the shortest round-tripping representation.
        return Decimal(str(value))
    return Decimal(value)


def fetch_aggregated_rows(
    db: DBSession,
    filter_set: FilterSet,
    *,
    order_by: AggregateOrder = "courier",
) -> list[AggregatedRow]:
    """Return ``SUM(quantity)`` per (carrier, product) for matching labels.

    ``order_by="courier"`` sorts by carrier then product (pick list view);
    ``order_by="product"`` sorts by product then carrier (pivot view).

    Raises:
        QueryError: The store failed to execute the query.
    """

    label = models.Label
    query = select(
        label.courier_name,
        label.product_name,
        func.sum(label.quantity).label("quantity"),
    )
    query = query.where(filter_set.predicate).group_by(label.courier_name, label.product_name)

    if order_by == "courier":
        query = query.order_by(label.courier_name.asc(), label.product_name.asc())
    elif order_by == "product":
        query = query.order_by(label.product_name.asc(), label.courier_name.asc())
    else:
        raise ValueError(f"unsupported order_by: {order_by!r}")

    try:
        result = db.execute(query).all()
    except SQLAlchemyError as exc:
        logger.exception(
            "Pick list aggregation failed: order_by=%s params=%r",
            order_by,
            filter_set.params,
        )
        raise QueryError() from exc

    return [
        AggregatedRow(
            carrier=row.courier_name,
            product=row.product_name,
            quantity=_coerce_decimal(row.quantity),
        )
        for row in result
    ]


def fetch_filter_options(db: DBSession) -> FilterOptions:
    """Return the distinct store and courier names present in the labels."""

    label = models.Label
    try:
        stores = db.scalars(
            select(label.store_name).distinct().order_by(label.store_name.asc())
        ).all()
        couriers = db.scalars(
            select(label.courier_name).distinct().order_by(label.courier_name.asc())
        ).all()
    except SQLAlchemyError as exc:
        logger.exception("Loading pick list filter options failed")
        raise QueryError() from exc

    return FilterOptions(stores=list(stores), couriers=list(couriers))
