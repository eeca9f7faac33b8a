"""Scan redirect endpoint with scan tracking."""

from fastapi import APIRouter, Depends, Request, status
from loguru import logger
from starlette.responses import PlainTextResponse, RedirectResponse

from scanlink.api.dependencies import get_redirect_service
from scanlink.middleware.logging import client_ip_from_request
from scanlink.services.exceptions import InvalidIdFormatError, ShortLinkNotFoundError
from scanlink.services.redirect import RedirectService
from scanlink.storage.exceptions import StorageError

router = APIRouter(tags=["redirect"])


@router.get(
    "/{id}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
)
async def redirect_to_original_url(
    request: Request,
    id: str,
    redirect_service: RedirectService = Depends(get_redirect_service),
):
    """Redirect to the original URL; the scan is recorded in the background."""
    try:
        original_url = await redirect_service.resolve(
            id,
            ip=client_ip_from_request(request),
            user_agent=request.headers.get("user-agent"),
        )
    except InvalidIdFormatError:
        return PlainTextResponse("Invalid QR code ID", status_code=400)
    except ShortLinkNotFoundError:
        return PlainTextResponse("QR code not found", status_code=404)
    except StorageError as e:
        logger.error(f"Error in redirect for {id}: {e}")
        return PlainTextResponse("Internal server error", status_code=500)
    
    return RedirectResponse(url=original_url, status_code=status.HTTP_302_FOUND)
