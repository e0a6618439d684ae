"""Pick list aggregation, pivoting and spreadsheet export."""

from .aggregate import AggregatedRow, FilterOptions, fetch_aggregated_rows
from .config import PickListSettings
from .errors import (
    ExportError,
    FilterValidationError,
    PickListError,
    QueryError,
    ReportGenerationError,
)
from .export import XLSX_CONTENT_TYPE, ExportedWorkbook, export_pivot, render_workbook
from .filters import FilterSet, LabelFilters, build_filter_set, end_of_day, parse_filters
from .grouping import CourierGroup, ProductQuantity, build_courier_groups
from .pivot import BLANK, PivotMatrix, PivotRow, build_pivot, check_totals
from .service import build_matrix, download, filter_options, generate

__all__ = [
    "AggregatedRow",
    "FilterOptions",
    "fetch_aggregated_rows",
    "PickListSettings",
    "ExportError",
    "FilterValidationError",
    "PickListError",
    "QueryError",
    "ReportGenerationError",
    "XLSX_CONTENT_TYPE",
    "ExportedWorkbook",
    "export_pivot",
    "render_workbook",
    "FilterSet",
    "LabelFilters",
    "build_filter_set",
    "end_of_day",
    "parse_filters",
    "CourierGroup",
    "ProductQuantity",
    "build_courier_groups",
    "BLANK",
    "PivotMatrix",
    "PivotRow",
    "build_pivot",
    "check_totals",
    "build_matrix",
    "download",
    "filter_options",
    "generate",
]
