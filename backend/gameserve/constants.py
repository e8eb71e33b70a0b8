"""Application-wide constants."""

# Project status values
class ProjectStatus:
    """Project status constants."""
    DRAFT = "draft"
    BUILDING = "building"
    PUBLISHED = "published"


class DomainType:
    """Domain mapping kinds."""
    SLUG = "slug"
    CUSTOM = "custom"


# Version layout
DEFAULT_ENTRYPOINT = "index.html"
MANIFEST_FILENAME = "manifest.json"
LEGACY_MARKER_FILENAME = "latest.json"

# Content types
HTML_CONTENT_TYPE = "text/html; charset=utf-8"
DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Cache directives
CACHE_HTML = "no-cache, must-revalidate"
CACHE_IMMUTABLE = "public, max-age=31536000, immutable"
CACHE_NO_STORE = "no-store"
CACHE_SITEMAP = "public, s-maxage=3600, stale-while-revalidate=86400"
