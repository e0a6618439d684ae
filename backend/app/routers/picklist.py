"""Pick list API endpoints."""
from __future__ import annotations

import logging

from fastapi import APIRouter, Body, Depends, HTTPException, Response, status
from sqlalchemy.orm import Session as DBSession

from .. import schemas
from ..config import settings
from ..deps import get_db
from ..services import picklist
from ..services.picklist import (
    FilterValidationError,
    PickListSettings,
    ReportGenerationError,
)

router = APIRouter()
logger = logging.getLogger(__name__)


def get_report_settings() -> PickListSettings:
    """Return the pick list report tunables derived from app settings."""

    return PickListSettings(drop_non_positive=settings.picklist_drop_non_positive)


def _filters_payload(payload: schemas.PickListFilters | None) -> dict[str, str | None]:
    if payload is None:
        return {}
    return payload.model_dump(exclude_none=True)


def _invalid_filter(exc: FilterValidationError) -> HTTPException:
    logger.warning("Rejected pick list filter %s: %s", exc.field, exc.reason)
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=f"Invalid {exc.field}: {exc.reason}",
    )


@router.post("/generate", response_model=list[schemas.PickListCourier])
def generate_pick_list(
    payload: schemas.PickListFilters | None = Body(default=None),
    db: DBSession = Depends(get_db),
) -> list[schemas.PickListCourier]:
    """Return matching label quantities grouped by courier."""

    try:
        groups = picklist.generate(db, _filters_payload(payload))
    except FilterValidationError as exc:
        raise _invalid_filter(exc) from exc
    except ReportGenerationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to generate pick list",
        ) from exc

    return [schemas.PickListCourier.model_validate(group) for group in groups]


@router.post(
    "/download",
    response_class=Response,
    responses={200: {"content": {picklist.XLSX_CONTENT_TYPE: {}}}},
)
def download_pick_list(
    payload: schemas.PickListFilters | None = Body(default=None),
    db: DBSession = Depends(get_db),
    cfg: PickListSettings = Depends(get_report_settings),
) -> Response:
    """Return the product × courier pivot as an Excel download."""

    try:
        exported = picklist.download(db, _filters_payload(payload), cfg=cfg)
    except FilterValidationError as exc:
        raise _invalid_filter(exc) from exc
    except ReportGenerationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to download pick list",
        ) from exc

    headers = {"Content-Disposition": f"attachment; filename={exported.filename}"}
    return Response(
        content=exported.content,
        media_type=exported.content_type,
        headers=headers,
    )


@router.get("/filter-options", response_model=schemas.PickListFilterOptions)
def get_filter_options(db: DBSession = Depends(get_db)) -> schemas.PickListFilterOptions:
    """Return the stores and couriers that can be used as filters."""

    try:
        options = picklist.filter_options(db)
    except ReportGenerationError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load filter options",
        ) from exc

    return schemas.PickListFilterOptions.model_validate(options)
