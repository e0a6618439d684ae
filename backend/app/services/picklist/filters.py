"""Translate optional pick list filters into bound SQL predicates."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime, time
from typing import Any

from sqlalchemy import and_, true
from sqlalchemy.sql.elements import ColumnElement

from ... import models
from .errors import FilterValidationError

START_OF_DAY = time(0, 0, 0)
END_OF_DAY = time(23, 59, 59, 999000)

# Wire names used by the pick list screen mapped to attribute names.
FIELD_ALIASES: dict[str, str] = {
    "storeName": "store_name",
    "courierName": "courier_name",
    "dateFrom": "date_from",
    "dateTo": "date_to",
}
_WIRE_NAMES = {value: key for key, value in FIELD_ALIASES.items()}


@dataclass(frozen=True, slots=True)
class LabelFilters:
    """Validated, optional pick list filters."""

    store_name: str | None = None
    courier_name: str | None = None
    date_from: date | None = None
    date_to: date | None = None


@dataclass(frozen=True, slots=True)
class FilterSet:
    """Conjunctive predicate over ``labels`` plus its bound values in order."""

    conditions: tuple[ColumnElement[bool], ...]
    params: tuple[Any, ...]

    @property
    def predicate(self) -> ColumnElement[bool]:
        if not self.conditions:
            return true()
        return and_(*self.conditions)


def start_of_day(value: date) -> datetime:
    return datetime.combine(value, START_OF_DAY)


def end_of_day(value: date) -> datetime:
    """Return the last millisecond of ``value`` so date ranges are inclusive."""

    return datetime.combine(value, END_OF_DAY)


def _clean_text(value: Any, field: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise FilterValidationError(_WIRE_NAMES.get(field, field), "must be a string")
    stripped = value.strip()
    return stripped or None


def parse_date(value: Any, field: str) -> date | None:
    """Parse an ISO date (or ISO timestamp) filter value.

    Blank values mean "no constraint". Timestamps are reduced to their
    calendar date because the filters operate on whole days.
    """

    wire_name = _WIRE_NAMES.get(field, field)
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str):
        raise FilterValidationError(wire_name, "must be an ISO date string")

    text = value.strip()
    if not text:
        return None

    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    try:
        return datetime.fromisoformat(text.replace("Z", "+00:00")).date()
    except ValueError as exc:
        raise FilterValidationError(
            wire_name, f"expected an ISO date (YYYY-MM-DD), got {text!r}"
        ) from exc


def parse_filters(raw: Mapping[str, Any] | LabelFilters | None) -> LabelFilters:
    """Validate raw filter input into :class:`LabelFilters`.

    Both the camelCase wire names and the snake_case attribute names are
    accepted. Unknown keys are ignored.
    """

    if raw is None:
        return LabelFilters()
    if isinstance(raw, LabelFilters):
        filters = raw
    else:
        values: dict[str, Any] = {}
        for key, value in raw.items():
            name = FIELD_ALIASES.get(key, key)
            if name in _WIRE_NAMES:
                values[name] = value

        filters = LabelFilters(
            store_name=_clean_text(values.get("store_name"), "store_name"),
            courier_name=_clean_text(values.get("courier_name"), "courier_name"),
            date_from=parse_date(values.get("date_from"), "date_from"),
            date_to=parse_date(values.get("date_to"), "date_to"),
        )

    if (
        filters.date_from is not None
        and filters.date_to is not None
        and filters.date_from > filters.date_to
    ):
        raise FilterValidationError("dateFrom", "must not be after dateTo")

    return filters


def build_filter_set(filters: LabelFilters) -> FilterSet:
    """Build the label predicate for ``filters``.

    Every value is attached as a bound parameter; absent filters add no
    clause, so empty filters select every label.
    """

    label = models.Label
    conditions: list[ColumnElement[bool]] = []
    params: list[Any] = []

    if filters.store_name is not None:
        conditions.append(label.store_name == filters.store_name)
        params.append(filters.store_name)
    if filters.courier_name is not None:
        conditions.append(label.courier_name == filters.courier_name)
        params.append(filters.courier_name)
    if filters.date_from is not None:
        lower = start_of_day(filters.date_from)
        conditions.append(label.label_date >= lower)
        params.append(lower)
    if filters.date_to is not None:
        upper = end_of_day(filters.date_to)
        conditions.append(label.label_date <= upper)
        params.append(upper)

    return FilterSet(conditions=tuple(conditions), params=tuple(params))
