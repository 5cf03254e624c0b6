"""
FastAPI REST API for the trial license provider.

Serves the valid trial licenses read from the license directory page.
"""

import argparse
import logging
import sys
from contextlib import asynccontextmanager
from typing import List, Optional

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import AppConfig, CatalogConfig, get_config
from errors import ErrorCode, error_body
from routers.licenses_api import licenses_router
from routers.system_api import system_app_router
from services import ProviderNotConfiguredError, build_resolver, get_resolver, set_resolver
from version import __version__

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(config: AppConfig) -> None:
    """Configure root logging from the debug/verbose flags and the API log level."""
    if config.debug:
        level = logging.DEBUG
    elif config.verbose:
        level = logging.INFO
    else:
        level = getattr(logging, config.api.log_level.upper())

    handlers: List[logging.Handler] = [logging.StreamHandler()]
    if config.log_file:
        handlers.append(logging.FileHandler(config.log_file, encoding="utf-8"))

    logging.basicConfig(level=level, format=LOG_FORMAT, handlers=handlers, force=True)


# Lifespan context manager for startup/shutdown
@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifespan."""
    logger.info("Starting Trial License Provider API...")
    try:
        get_resolver()
    except ProviderNotConfiguredError as e:
        # Lookups answer 503 until a page URL is configured
        logger.warning(f"License provider not configured: {e}")

    yield

    logger.info("Shutting down Trial License Provider API...")


# Create FastAPI app
config = get_config()
app = FastAPI(
    title="Trial License Provider API",
    description="REST API serving valid trial licenses from the license directory page",
    version=__version__,
    lifespan=lifespan
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(system_app_router)
app.include_router(licenses_router)


# Error handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request, exc: StarletteHTTPException):
    """Return registry errors flattened; wrap plain HTTP errors in the same shape."""
    if isinstance(exc.detail, dict) and "error_code" in exc.detail:
        content = exc.detail
    else:
        content = {"error_code": f"HTTP_{exc.status_code}", "message": str(exc.detail), "details": None}
    return JSONResponse(status_code=exc.status_code, content=content, headers=exc.headers)


@app.exception_handler(Exception)
async def global_exception_handler(request, exc):
    """Global exception handler."""
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_body(ErrorCode.INTERNAL_SERVER_ERROR, details={"error": str(exc)})
    )


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Serve valid trial licenses over HTTP")
    parser.add_argument("--url", help="URL of the license page (default: LICENSE_PAGE_URL)")
    parser.add_argument("--host", help="Bind address (default: API_HOST)")
    parser.add_argument("--port", type=int, help="Port to listen on (default: API_PORT)")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Command-line entry point."""
    import uvicorn

    args = parse_args(argv)
    app_config = get_config()
    if args.url:
        app_config.catalog = CatalogConfig(page_url=args.url)
    if args.debug:
        app_config.debug = True
    if args.verbose:
        app_config.verbose = True

    configure_logging(app_config)

    try:
        set_resolver(build_resolver(app_config))
    except ProviderNotConfiguredError as e:
        logger.error(f"{e}: pass --url or set LICENSE_PAGE_URL")
        return 1
    logger.debug(f"License page URL: {app_config.catalog.page_url}")

    host = args.host or app_config.api.host
    port = args.port or app_config.api.port
    logger.info(f"Server listening on {host}:{port}")
    uvicorn.run(
        app,
        host=host,
        port=port,
        log_level="debug" if app_config.debug else app_config.api.log_level
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
