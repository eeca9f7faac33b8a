from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Path, Query, status
from loguru import logger

from scanlink.api import schemas
from scanlink.api.dependencies import get_analytics_service, get_registration_service
from scanlink.core.config import settings
from scanlink.services.analytics import AnalyticsService
from scanlink.services.exceptions import ExhaustedRetriesError, ValidationError
from scanlink.services.presentation import build_report
from scanlink.services.registration import RegistrationService
from scanlink.storage.exceptions import StorageError

router = APIRouter(tags=["links"])


def parse_limit(raw: Optional[str]) -> int:
    """Parse ``?limit=``; anything unusable falls back to the default."""
    try:
        limit = int(raw) if raw is not None else 0
    except ValueError:
        limit = 0
    if limit <= 0:
        return settings.LIST_DEFAULT_LIMIT
    return min(limit, settings.LIST_MAX_LIMIT)


@router.post(
    "/create",
    response_model=schemas.CreateLinkResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Missing or malformed URL"},
        500: {"model": schemas.ErrorResponse, "description": "Identifier could not be allocated"},
    },
)
async def create_link(
    payload: schemas.CreateLinkRequest,
    registration_service: RegistrationService = Depends(get_registration_service),
):
    try:
        link = await registration_service.create(payload.url, payload.style_options)
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (ExhaustedRetriesError, StorageError) as e:
        logger.error(f"Error creating QR code: {e}")
        raise HTTPException(status_code=500, detail="Failed to create QR code")
    
    return schemas.CreateLinkResponse(
        short_id=link.id,
        tracking_url=link.tracking_url,
        original_url=link.original_url,
    )


@router.get(
    "/stats/{id}",
    response_model=schemas.StatsResponse,
    responses={404: {"model": schemas.ErrorResponse, "description": "Unknown identifier"}},
)
async def get_stats(
    id: str = Path(..., description="Short identifier"),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
):
    try:
        summary = await analytics_service.get_analytics(id)
    except StorageError as e:
        logger.error(f"Error fetching analytics for {id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")
    
    if summary is None:
        raise HTTPException(status_code=404, detail="QR code not found")
    
    return schemas.StatsResponse.model_validate(summary.model_dump())


@router.get(
    "/stats/{id}/report",
    response_model=schemas.ReportResponse,
    responses={404: {"model": schemas.ErrorResponse, "description": "Unknown identifier"}},
)
async def get_report(
    id: str = Path(..., description="Short identifier"),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
):
    """Analytics shaped for dashboards: daily counts, masked IPs, device labels."""
    try:
        summary = await analytics_service.get_analytics(id)
    except StorageError as e:
        logger.error(f"Error fetching analytics for {id}: {e}")
        raise HTTPException(status_code=500, detail="Failed to fetch analytics")
    
    if summary is None:
        raise HTTPException(status_code=404, detail="QR code not found")
    
    return schemas.ReportResponse.model_validate(build_report(summary).model_dump())


@router.get("/list", response_model=schemas.ListResponse)
async def list_links(
    limit: Optional[str] = Query(None, description="Maximum number of links to return"),
    analytics_service: AnalyticsService = Depends(get_analytics_service),
):
    try:
        links = await analytics_service.list_all(parse_limit(limit))
    except StorageError as e:
        logger.error(f"Error listing QR codes: {e}")
        raise HTTPException(status_code=500, detail="Failed to list QR codes")
    
    return schemas.ListResponse(
        count=len(links),
        qr_codes=[schemas.LinkSummary.model_validate(link) for link in links],
    )
