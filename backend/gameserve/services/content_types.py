"""Extension based content type classification for published files."""
from typing import Mapping, Optional
from gameserve.constants import DEFAULT_CONTENT_TYPE, HTML_CONTENT_TYPE

CONTENT_TYPES = {
    "html": HTML_CONTENT_TYPE,
    "htm": HTML_CONTENT_TYPE,
    "js": "application/javascript",
    "mjs": "application/javascript",
    "css": "text/css",
    "json": "application/json",
    "map": "application/json",
    "txt": "text/plain; charset=utf-8",
    "xml": "application/xml",
    "wasm": "application/wasm",
    "png": "image/png",
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "gif": "image/gif",
    "svg": "image/svg+xml",
    "webp": "image/webp",
    "ico": "image/x-icon",
    "woff": "font/woff",
    "woff2": "font/woff2",
    "ttf": "font/ttf",
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "ogg": "audio/ogg",
    "mp4": "video/mp4",
    "webm": "video/webm",
}


def guess_content_type(path: str) -> str:
    """Get content type from file extension, falling back to an opaque binary type."""
    name = path.rsplit("/", 1)[-1]
    if "." not in name:
        return DEFAULT_CONTENT_TYPE
    ext = name.rsplit(".", 1)[-1].lower()
    return CONTENT_TYPES.get(ext, DEFAULT_CONTENT_TYPE)


def resolve_content_type(path: str, declared: Optional[Mapping[str, str]] = None) -> str:
    """Manifest-declared type first, then the extension table."""
    if declared:
        content_type = declared.get(path)
        if content_type:
            return content_type
    return guess_content_type(path)


def is_html(content_type: str) -> bool:
    return content_type.split(";", 1)[0].strip().lower() == "text/html"
