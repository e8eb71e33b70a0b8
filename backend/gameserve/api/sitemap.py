"""Dynamic sitemap listing static pages and published games."""
from datetime import date, datetime, timezone
from typing import List, Optional
from xml.sax.saxutils import escape

from fastapi import APIRouter, Depends
from fastapi.responses import Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from gameserve.config import Settings, get_settings
from gameserve.constants import CACHE_SITEMAP, ProjectStatus
from gameserve.database import get_optional_db
from gameserve.models import Project
from gameserve.utils.logger import logger

router = APIRouter(tags=["sitemap"])

# (path, priority, changefreq)
STATIC_PAGES = [
    ("/", "1.0", "weekly"),
    ("/playground", "0.9", "daily"),
    ("/faq", "0.8", "monthly"),
    ("/how-it-works", "0.8", "monthly"),
]

_XML_ENTITIES = {'"': "&quot;", "'": "&apos;"}


def _format_date(value: Optional[datetime], today: date) -> str:
    if value is None:
        return today.isoformat()
    return value.date().isoformat()


def _url_entry(loc: str, lastmod: str, changefreq: str, priority: str) -> str:
    return (
        "  <url>\n"
        f"    <loc>{escape(loc, _XML_ENTITIES)}</loc>\n"
        f"    <lastmod>{lastmod}</lastmod>\n"
        f"    <changefreq>{changefreq}</changefreq>\n"
        f"    <priority>{priority}</priority>\n"
        "  </url>\n"
    )


def build_sitemap(site_url: str, games: List[Project], today: Optional[date] = None) -> str:
    """Render the sitemap XML for the static pages plus one entry per game."""
    today = today or datetime.now(timezone.utc).date()
    base_url = site_url.rstrip("/")

    xml = (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">\n'
    )
    for path, priority, changefreq in STATIC_PAGES:
        xml += _url_entry(base_url + path, today.isoformat(), changefreq, priority)
    for game in games:
        lastmod = _format_date(game.published_at or game.updated_at, today)
        xml += _url_entry(f"{base_url}/play/{game.id}", lastmod, "monthly", "0.7")
    xml += "</urlset>"
    return xml


def list_published_games(db: Session, limit: int) -> List[Project]:
    return (
        db.query(Project)
        .filter(Project.status == ProjectStatus.PUBLISHED, Project.is_public.is_(True))
        .order_by(Project.published_at.desc())
        .limit(limit)
        .all()
    )


@router.get("/sitemap.xml")
async def sitemap(
    db: Optional[Session] = Depends(get_optional_db),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Always 200: without a reachable database only the static pages are listed."""
    games: List[Project] = []
    if db is None:
        logger.warning("[SITEMAP] Database not configured, serving static pages only")
    else:
        try:
            games = list_published_games(db, settings.sitemap_limit)
        except SQLAlchemyError as e:
            logger.error(f"[SITEMAP] Failed to fetch published games: {e}")

    return Response(
        content=build_sitemap(settings.site_url, games),
        media_type="application/xml; charset=utf-8",
        headers={"Cache-Control": CACHE_SITEMAP},
    )
