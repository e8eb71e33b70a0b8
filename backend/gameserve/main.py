"""Main FastAPI application."""
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse, RedirectResponse

from gameserve.api import games, play, sitemap
from gameserve.config import get_settings
from gameserve.utils.exceptions import ConfigurationError, InvalidPathError
from gameserve.utils.logger import logger
from gameserve.utils.url import host_from_header, slug_from_subdomain

settings = get_settings()

app = FastAPI(
    title="PlayCraft Game Delivery",
    description="Serves published PlayCraft games from their immutable builds",
    version="0.1.0",
)

# Games are embedded and fetched cross-origin from anywhere
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=False,
    allow_methods=["GET", "HEAD", "OPTIONS"],
    allow_headers=["*"],
    max_age=86400,
)


@app.middleware("http")
async def subdomain_redirect(request: Request, call_next):
    """Send `{slug}.{play_base_domain}/...` to the game endpoint for that slug."""
    path = request.url.path
    if not (path.startswith("/api/") or path.startswith(settings.normalized_mount_path + "/")):
        host = host_from_header(request.headers.get("host"))
        slug = slug_from_subdomain(host, settings.play_base_domain, settings.reserved_subdomain_set)
        if slug:
            target = f"{settings.normalized_mount_path}/{slug}{'' if path == '/' else path}"
            if request.url.query:
                target += f"?{request.url.query}"
            return RedirectResponse(target, status_code=status.HTTP_307_TEMPORARY_REDIRECT)
    return await call_next(request)


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError):
    logger.error(f"Missing deployment configuration: {exc}")
    return PlainTextResponse("Server configuration error", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


@app.exception_handler(InvalidPathError)
async def invalid_path_handler(request: Request, exc: InvalidPathError):
    logger.info(f"Rejected path {request.url.path}: {exc}")
    return PlainTextResponse("Invalid path", status_code=status.HTTP_400_BAD_REQUEST)


# Include routers
app.include_router(games.router, prefix=settings.normalized_mount_path)
app.include_router(play.router)
app.include_router(sitemap.router)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "PlayCraft Game Delivery",
        "version": "0.1.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy"}
