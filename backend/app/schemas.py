"""Pydantic schemas for API payloads."""
from __future__ import annotations

from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer


def _quantity_to_json(value: Decimal) -> int | float:
    """Emit whole quantities as integers and fractional ones as floats."""

    if value == value.to_integral_value():
        return int(value)
    return float(value)


Quantity = Annotated[
    Decimal, PlainSerializer(_quantity_to_json, return_type=int | float, when_used="json")
]


class PickListFilters(BaseModel):
    """Optional filters sent by the pick list screen.

    Dates stay as raw strings here so malformed values are reported through
    the pick list filter validation with the offending field name.
    """

    model_config = ConfigDict(populate_by_name=True)

    store_name: str | None = Field(default=None, alias="storeName")
    courier_name: str | None = Field(default=None, alias="courierName")
    date_from: str | None = Field(default=None, alias="dateFrom")
    date_to: str | None = Field(default=None, alias="dateTo")


class PickListProduct(BaseModel):
    """Quantity of one product to pick for a courier."""

    product_name: str
    quantity: Quantity

    model_config = {"from_attributes": True}


class PickListCourier(BaseModel):
    """Products grouped under a single courier."""

    courier_name: str
    products: list[PickListProduct]

    model_config = {"from_attributes": True}


class PickListFilterOptions(BaseModel):
    """Distinct values available for the pick list filters."""

    stores: list[str]
    couriers: list[str]

    model_config = {"from_attributes": True}
