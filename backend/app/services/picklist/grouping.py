"""Courier grouped pick list view."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Iterable

from .aggregate import AggregatedRow


@dataclass(frozen=True, slots=True)
class ProductQuantity:
    product_name: str
    quantity: Decimal


@dataclass(slots=True)
class CourierGroup:
    """All products a single courier has to collect."""

    courier_name: str
    products: list[ProductQuantity] = field(default_factory=list)

    @property
    def total_quantity(self) -> Decimal:
        return sum((item.quantity for item in self.products), Decimal(0))


def build_courier_groups(rows: Iterable[AggregatedRow]) -> list[CourierGroup]:
    """Group aggregated rows by courier in a single pass.

    Couriers keep the order in which they first appear and each courier's
    products keep the input order, so rows sorted by courier then product
    come out in the same order.
    """

    groups: dict[str, CourierGroup] = {}
    for row in rows:
        group = groups.get(row.carrier)
        if group is None:
            group = groups[row.carrier] = CourierGroup(courier_name=row.carrier)
        group.products.append(
            ProductQuantity(product_name=row.product, quantity=row.quantity)
        )
    return list(groups.values())


def total_quantity(groups: Iterable[CourierGroup]) -> Decimal:
    """Return the number of units across every courier group."""

    return sum((group.total_quantity for group in groups), Decimal(0))
