"""Published game file endpoints."""
from typing import Optional

from fastapi import APIRouter, Depends, Request, Response, status
from fastapi.responses import PlainTextResponse

from gameserve.api.dependencies import get_delivery_service
from gameserve.services.delivery import DeliveryService
from gameserve.services.response_composer import DELIVERY_HEADERS
from gameserve.utils.logger import logger
from gameserve.utils.url import host_from_header, parse_game_path

# Mounted under Settings.mount_path by the application
router = APIRouter(tags=["games"])


async def _deliver(
    request: Request,
    identifier: str,
    file_path: Optional[str],
    service: DeliveryService,
) -> Response:
    # InvalidPathError propagates to the application handler (400)
    identifier, file_path = parse_game_path(identifier, file_path)
    host = host_from_header(request.headers.get("host"))

    try:
        result = await service.serve(host, identifier, file_path)
    except Exception as e:
        logger.error(f"[DELIVERY] Failed to serve {identifier}/{file_path or ''}: {e}", exc_info=True)
        return PlainTextResponse("Internal server error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if request.method == "HEAD":
        headers = {**result.headers, "Content-Length": str(len(result.body))}
        return Response(status_code=result.status_code, headers=headers)
    return Response(content=result.body, status_code=result.status_code, headers=result.headers)


@router.api_route("/", methods=["GET", "HEAD"])
async def missing_identifier() -> Response:
    return PlainTextResponse("Invalid path", status_code=status.HTTP_400_BAD_REQUEST)


@router.api_route("/{identifier}", methods=["GET", "HEAD"])
async def serve_entrypoint(
    identifier: str,
    request: Request,
    service: DeliveryService = Depends(get_delivery_service),
) -> Response:
    """Serve the entrypoint of a published game."""
    return await _deliver(request, identifier, None, service)


@router.api_route("/{identifier}/{file_path:path}", methods=["GET", "HEAD"])
async def serve_file(
    identifier: str,
    file_path: str,
    request: Request,
    service: DeliveryService = Depends(get_delivery_service),
) -> Response:
    """Serve a file from a published game, falling back to its entrypoint."""
    return await _deliver(request, identifier, file_path, service)


@router.options("/{identifier}")
@router.options("/{identifier}/{file_path:path}")
async def preflight(identifier: str, file_path: Optional[str] = None) -> Response:
    """
    Answer plain OPTIONS requests for game assets.

    Browser preflights (with `Origin` and `Access-Control-Request-Method`) are
    answered by the CORS middleware before they reach this route.
    """
    return Response(status_code=status.HTTP_204_NO_CONTENT, headers={**DELIVERY_HEADERS, "Access-Control-Max-Age": "86400"})
