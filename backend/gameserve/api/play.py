"""Shareable play links."""
from fastapi import APIRouter, Depends, status
from fastapi.responses import PlainTextResponse, RedirectResponse, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gameserve.config import Settings, get_settings
from gameserve.database import get_db
from gameserve.services.project_resolver import ProjectResolver
from gameserve.utils.logger import logger

router = APIRouter(prefix="/play", tags=["play"])


@router.get("/")
async def play_missing_id() -> Response:
    return PlainTextResponse("Missing project id", status_code=status.HTTP_400_BAD_REQUEST)


@router.get("/{project_id}")
async def play_redirect(
    project_id: str,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> Response:
    """
    Redirect a project id to the public address of its game.

    Uses the stored subdomain URL when the publish recorded one, otherwise
    the slug subdomain under the play domain.
    """
    try:
        project = ProjectResolver(db).by_id(project_id)
    except SQLAlchemyError as e:
        logger.error(f"[PLAY] Lookup failed for {project_id}: {e}")
        project = None

    if project is None:
        return PlainTextResponse("Not found", status_code=status.HTTP_404_NOT_FOUND)

    target = project.subdomain_url
    if not target and project.slug:
        target = f"https://{project.slug}.{settings.play_base_domain}"
    if not target:
        return PlainTextResponse("Not found", status_code=status.HTTP_404_NOT_FOUND)

    return RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
