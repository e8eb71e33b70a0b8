"""Build the HTTP response for a delivered file."""
import html
import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from gameserve.constants import CACHE_HTML, CACHE_IMMUTABLE, CACHE_NO_STORE, HTML_CONTENT_TYPE
from gameserve.services.content_types import is_html, resolve_content_type
from gameserve.services.fetcher import FetchedFile
from gameserve.services.manifest_loader import Manifest

# X-Frame-Options is never set: published games are embedded in the builder's iframe.
DELIVERY_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
    "Cross-Origin-Resource-Policy": "cross-origin",
    "X-Content-Type-Options": "nosniff",
}

ROUTE_RESET_ATTRIBUTE = b"data-route-reset"

# Games are built with routers that expect to own "/" of their origin.
ROUTE_RESET_SCRIPT = (
    b"<script " + ROUTE_RESET_ATTRIBUTE + b">(function(){try{"
    b"if(window.location.pathname!=='/'&&!window.location.hash){"
    b"window.history.replaceState(window.history.state,'','/');"
    b"window.dispatchEvent(new PopStateEvent('popstate',{state:window.history.state}));"
    b"}}catch(e){}})();</script>"
)

_HEAD_TAG = re.compile(rb"<head>", re.IGNORECASE)

NOT_FOUND_PAGE = """<!DOCTYPE html>
<html>
<head><title>Game Not Found</title></head>
<body style="font-family: system-ui; display: flex; align-items: center; justify-content: center; height: 100vh; margin: 0; background: #0a0a0f; color: #fff;">
  <div style="text-align: center;">
    <h1>Game Not Found</h1>
    <p>The game "{identifier}" doesn't exist or isn't published.</p>
    <a href="{site_url}" style="color: #8b5cf6;">Back to PlayCraft</a>
  </div>
</body>
</html>"""


@dataclass(frozen=True)
class DeliveryResult:
    status_code: int
    body: bytes
    headers: Dict[str, str] = field(default_factory=dict)


def cache_control_for(content_type: str) -> str:
    """HTML entrypoints change on every publish; everything else lives under an immutable prefix."""
    return CACHE_HTML if is_html(content_type) else CACHE_IMMUTABLE


def inject_route_reset(body: bytes) -> bytes:
    """Insert the route reset script right after the first `<head>`; a no-op if already present."""
    if ROUTE_RESET_ATTRIBUTE in body:
        return body
    return _HEAD_TAG.sub(lambda match: match.group(0) + ROUTE_RESET_SCRIPT, body, count=1)


class ResponseComposer:
    def __init__(self, patch_html: bool = True, site_url: str = "/"):
        self.patch_html = patch_html
        self.site_url = site_url

    def compose(self, fetched: FetchedFile, manifest: Optional[Manifest] = None) -> DeliveryResult:
        declared = manifest.content_types if manifest else None
        content_type = resolve_content_type(fetched.path, declared)

        body = fetched.body
        if self.patch_html and is_html(content_type):
            body = inject_route_reset(body)

        headers = {
            "Content-Type": content_type,
            "Cache-Control": cache_control_for(content_type),
            **DELIVERY_HEADERS,
        }
        return DeliveryResult(status_code=200, body=body, headers=headers)

    def project_not_found(self, identifier: str) -> DeliveryResult:
        page = NOT_FOUND_PAGE.format(
            identifier=html.escape(identifier),
            site_url=html.escape(self.site_url, quote=True),
        )
        headers = {"Content-Type": HTML_CONTENT_TYPE, "Cache-Control": CACHE_NO_STORE, **DELIVERY_HEADERS}
        return DeliveryResult(status_code=404, body=page.encode("utf-8"), headers=headers)

    def file_not_found(self) -> DeliveryResult:
        headers = {"Content-Type": "text/plain; charset=utf-8", "Cache-Control": CACHE_NO_STORE, **DELIVERY_HEADERS}
        return DeliveryResult(status_code=404, body=b"File not found", headers=headers)
