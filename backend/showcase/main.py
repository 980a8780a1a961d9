"""
Showcase Backend — FastAPI Application Factory
===============================================

What:  Creates and configures the FastAPI application instance.
How:   create_app(settings) builds the process-scoped collaborators (database
       handle, image storage, upload pipeline), stores them on app.state,
       registers middleware, exception handlers, routers and static mounts.
Who:   uvicorn (`uvicorn showcase.main:app`), `python -m showcase`, tests.

Application Architecture:
    ┌──────────────────────────────────────────────────────────┐
    │                       FastAPI App                        │
    │                                                          │
    │  Middleware: Request ID → Logging → Size limit → GZip →  │
    │              CORS                                        │
    │                                                          │
    │  /api routes: projects · clients · contact(s) ·          │
    │               newsletter(s) · health                     │
    │                                                          │
    │  Static: /uploads (processed images)                     │
    │          / and /admin (optional front-ends)              │
    │                                                          │
    │  Exception handlers: Validation→400 · NotFound→404 ·     │
    │                      Storage/DB→500 · anything else→500  │
    └──────────────────────────────────────────────────────────┘

Lifecycle:
    Startup:  configure logging, create the upload root, optionally create
              tables, log the listening address
    Shutdown: dispose the database engine
"""

import logging
import sys
from contextlib import asynccontextmanager
from pathlib import Path
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from showcase import __version__
from showcase.config import Settings, settings as default_settings
from showcase.database import Database
from showcase.exceptions import (
    DatabaseError,
    FileStorageError,
    NotFoundError,
    ShowcaseError,
    ValidationError,
)
from showcase.middleware.body_limit import UploadSizeLimitMiddleware
from showcase.middleware.logging import RequestLoggingMiddleware
from showcase.middleware.request_id import RequestIDMiddleware, request_id_var
from showcase.routes import clients, contacts, health, newsletter, projects
from showcase.services.file_service import LocalImageStorage
from showcase.services.portfolio_service import PortfolioService
from showcase.services.upload_service import UploadService

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging(level: str) -> None:
    """
    Configure logging for the entire application.

    Format: 2024-01-15T12:00:00 [INFO] showcase.access: GET /api/projects 200 3.2ms [1f2e3d4c] from 127.0.0.1
    """
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
        force=True,
    )

    # Our access log replaces uvicorn's
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("PIL").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    config: Settings = app.state.settings
    database: Database = app.state.database

    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging(config.log_level)
    logger.info("=" * 60)
    logger.info("Showcase Backend starting up...")

    config.upload_path.mkdir(parents=True, exist_ok=True)
    logger.info("Upload directory: %s", config.upload_path)

    if config.create_tables_on_startup:
        await database.create_tables()
        logger.info("Database tables ensured")

    if await database.ping():
        logger.info("Database connected")
    else:
        # Keep serving: health checks and static files still work, and
        # store calls report 500 until the database is back
        logger.error("Database connection failed: %s", config.database_url.split("@")[-1])

    logger.info("Server running on port %d", config.backend_port)
    logger.info("API: http://%s:%d/api", config.backend_host, config.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("Showcase Backend shutting down...")
    await database.dispose()
    logger.info("Shutdown complete.")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def _request_id(request: Request) -> str:
    # The catch-all handler runs in ServerErrorMiddleware, outside
    # RequestIDMiddleware, where the ContextVar is no longer set; the id
    # stored on request.state survives there
    return getattr(request.state, "request_id", None) or request_id_var.get("")


def _error_body(request: Request, error: str, message: str, details: Optional[dict] = None) -> dict:
    body = {"error": error, "message": message, "request_id": _request_id(request)}
    if details:
        body["details"] = details
    return body


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map exception types to HTTP status codes and the shared error body.

    Handler hierarchy:
        ValidationError         → 400 (includes ImageDecodeError, DuplicateRecordError)
        RequestValidationError  → 400 (malformed multipart/form fields)
        NotFoundError           → 404
        FileStorageError        → 500
        DatabaseError           → 500
        ShowcaseError (base)    → 500
        Exception (fallback)    → 500

    Server-side details (paths, driver errors, stack traces) are logged,
    never returned.
    """

    @app.exception_handler(ValidationError)
    async def handle_validation_error(request: Request, exc: ValidationError):
        logger.warning("[%s] Validation error: %s", _request_id(request), exc.message)
        return JSONResponse(
            status_code=400,
            content=_error_body(request, "validation_error", exc.message, exc.context),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        fields = [".".join(str(part) for part in err["loc"][1:]) or "body" for err in exc.errors()]
        logger.warning("[%s] Malformed request fields: %s", _request_id(request), fields)
        return JSONResponse(
            status_code=400,
            content=_error_body(
                request,
                "validation_error",
                f"Missing or invalid fields: {', '.join(fields)}",
                {"fields": fields},
            ),
        )

    @app.exception_handler(NotFoundError)
    async def handle_not_found(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=404,
            content=_error_body(request, "not_found", exc.message, exc.context),
        )

    @app.exception_handler(DatabaseError)
    async def handle_database_error(request: Request, exc: DatabaseError):
        logger.error("[%s] Database error: %s | Context: %s", _request_id(request), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body(request, "database_error", exc.message),
        )

    @app.exception_handler(FileStorageError)
    async def handle_file_storage_error(request: Request, exc: FileStorageError):
        logger.error("[%s] File storage error: %s | Context: %s", _request_id(request), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body(request, "file_storage_error", exc.message),
        )

    @app.exception_handler(ShowcaseError)
    async def handle_showcase_error(request: Request, exc: ShowcaseError):
        logger.error("[%s] Application error: %s | Context: %s", _request_id(request), exc.message, exc.context)
        return JSONResponse(
            status_code=500,
            content=_error_body(request, "server_error", exc.message),
        )

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.error("[%s] Unexpected error: %s", _request_id(request), str(exc), exc_info=True)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request,
                "internal_server_error",
                "An unexpected error occurred. Please try again later.",
            ),
        )


# ══════════════════════════════════════════════════════════════════════════
# Static front-ends
# ══════════════════════════════════════════════════════════════════════════

def mount_static(app: FastAPI, config: Settings, storage: LocalImageStorage) -> None:
    """
    Serve processed images, and the landing page / admin panel when their
    directories are configured and present. Mounted after the API routers so
    /api always wins.
    """
    app.mount(storage.url_prefix, StaticFiles(directory=storage.root), name="uploads")

    if config.admin_dir and Path(config.admin_dir).is_dir():
        admin_root = Path(config.admin_dir).resolve()

        @app.get("/admin", include_in_schema=False)
        async def admin_panel() -> FileResponse:
            return FileResponse(admin_root / "admin.html")

        app.mount("/admin", StaticFiles(directory=admin_root, html=True), name="admin")
    elif config.admin_dir:
        logger.warning("ADMIN_DIR %s does not exist; admin panel not served", config.admin_dir)

    if config.frontend_dir and Path(config.frontend_dir).is_dir():
        app.mount("/", StaticFiles(directory=config.frontend_dir, html=True), name="frontend")
    elif config.frontend_dir:
        logger.warning("FRONTEND_DIR %s does not exist; landing page not served", config.frontend_dir)


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(config: Optional[Settings] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        config: Settings to build the app from; defaults to the environment

    Returns:
        Fully configured FastAPI instance. Its collaborators live on
        app.state: settings, database, image_storage, portfolio_service.
    """
    config = config or default_settings

    app = FastAPI(
        title="Showcase API",
        description=(
            "Backend for the marketing site: projects, client testimonials, "
            "contact form submissions and newsletter signups."
        ),
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )

    # ── Process-scoped collaborators ──────────────────────────────────────
    database = Database(config)
    image_storage = LocalImageStorage(config.upload_root, url_prefix=config.upload_url_prefix)
    uploads = UploadService(image_storage, max_size=config.max_upload_size)

    app.state.settings = config
    app.state.database = database
    app.state.image_storage = image_storage
    app.state.portfolio_service = PortfolioService(uploads, image_storage)

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → Logging → Size limit → GZip → CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins_list,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["X-Request-ID"],
    )
    app.add_middleware(GZipMiddleware, minimum_size=500)
    app.add_middleware(UploadSizeLimitMiddleware, max_upload_size=config.max_upload_size)
    app.add_middleware(
        RequestLoggingMiddleware,
        skip_prefixes=("/api/health", image_storage.url_prefix),
    )
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    app.include_router(projects.router)
    app.include_router(clients.router)
    app.include_router(contacts.router)
    app.include_router(newsletter.router)
    app.include_router(health.router)

    mount_static(app, config, image_storage)

    return app


# uvicorn expects `showcase.main:app` to be importable
app = create_app()
