"""
fontseca.dev Backend — FastAPI Application Factory
=====================================================

What:  Creates and configures the FastAPI application instance.
How:   Factory pattern: create_app() wires the service bundle, the struct
       validator, middleware, exception handlers and routers together.
Who:   Called by uvicorn to start the server (uvicorn fontseca.main:app), and by
       the tests with mocked services.
When:  Once at server startup; the returned app handles all subsequent requests.

Application Architecture:
    ┌─────────────────────────────────────────────────────┐
    │                   FastAPI App                       │
    │                                                     │
    │  Middleware Chain:                                  │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  Request ID  │→│  Access Log  │→│    CORS     │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Routes:                                            │
    │  ┌──────────────┐ ┌──────────────┐ ┌─────────────┐  │
    │  │  archive.*   │ │ me.* / tech. │ │ web pages   │  │
    │  └──────────────┘ └──────────────┘ └─────────────┘  │
    │                                                     │
    │  Exception Handlers:                                │
    │  ┌───────────────────────────────────────────────┐  │
    │  │ Problem→own status │ 404/405 │ Exception→500  │  │
    │  └───────────────────────────────────────────────┘  │
    └─────────────────────────────────────────────────────┘

Errors are always `application/problem+json` (RFC 9457), except on the web
page routes, which render plain-text error pages themselves.
"""

import logging
import sys
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from fontseca import __version__, exceptions
from fontseca.binding import StructValidator
from fontseca.config import settings
from fontseca.exceptions import Problem, new_internal, set_global_url
from fontseca.middleware.logging import AccessLogMiddleware
from fontseca.middleware.request_id import RequestIDMiddleware, request_id_var
from fontseca.routes import (
    articles,
    drafts,
    experience,
    health,
    me,
    patches,
    projects,
    tags,
    technologies,
    topics,
    web,
)
from fontseca.services import Services, load_services

logger = logging.getLogger(__name__)


# ══════════════════════════════════════════════════════════════════════════
# Logging Configuration
# ══════════════════════════════════════════════════════════════════════════

def setup_logging() -> None:
    """
    Configure logging for the entire application.

    Application log → stdout, plus `settings.error_log_file` for ERROR and above.
    Access log      → `fontseca.access`: stdout, plus `settings.access_log_file`.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    datefmt = "%Y-%m-%dT%H:%M:%S"

    handlers = [logging.StreamHandler(sys.stdout)]
    if settings.error_log_file:
        error_handler = logging.FileHandler(settings.error_log_file, encoding="utf-8")
        error_handler.setLevel(logging.ERROR)
        handlers.append(error_handler)

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format=log_format,
        datefmt=datefmt,
        handlers=handlers,
        force=True,
    )

    # Access lines are already complete Common Log Format records
    access = logging.getLogger("fontseca.access")
    access.propagate = False
    access.handlers.clear()
    access.setLevel(logging.INFO)
    plain = logging.Formatter("%(message)s")
    for stream in [logging.StreamHandler(sys.stdout)] + (
        [logging.FileHandler(settings.access_log_file, encoding="utf-8")]
        if settings.access_log_file
        else []
    ):
        stream.setFormatter(plain)
        access.addHandler(stream)

    # uvicorn's own access log duplicates ours
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)


# ══════════════════════════════════════════════════════════════════════════
# Application Lifespan (Startup & Shutdown)
# ══════════════════════════════════════════════════════════════════════════

@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    # ── Startup ───────────────────────────────────────────────────────────
    setup_logging()
    logger.info("=" * 60)
    logger.info("fontseca.dev backend starting up in %s mode...", settings.server_mode)

    missing = [name for name, ok in app.state.services.configured().items() if not ok]
    if missing:
        logger.warning("Unconfigured services: %s", ", ".join(missing))

    logger.info("Server ready at http://%s:%d", settings.backend_host, settings.backend_port)
    logger.info("=" * 60)

    yield

    # ── Shutdown ──────────────────────────────────────────────────────────
    logger.info("fontseca.dev backend shutting down...")


# ══════════════════════════════════════════════════════════════════════════
# Exception Handlers
# ══════════════════════════════════════════════════════════════════════════

def register_exception_handlers(app: FastAPI) -> None:
    """
    Register global exception handlers so every error is a problem document.

    Handler hierarchy:
        Problem                  → its own status (raised by routes and services)
        StarletteHTTPException   → 404 "Target not found." / 405 with Allow
        RequestValidationError   → 400 (malformed query or path parameter)
        Exception (fallback)     → 500 generic internal problem

    Security: the fallback NEVER exposes exception text in the response; the
    traceback is logged server-side only.
    """

    @app.exception_handler(Problem)
    async def handle_problem(request: Request, exc: Problem):
        rid = request_id_var.get("")
        if exc.status >= 500:
            logger.error("[%s] %s %s: %s", rid, request.method, request.url.path, exc)
        else:
            logger.debug("[%s] %s %s: %s", rid, request.method, request.url.path, exc)
        return exc.emit()

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        if exc.status_code == 404:
            p = Problem(
                status=404,
                title="Target not found.",
                detail=(
                    "Could not find the requested target resource. Possible causes: "
                    "invalid URL, this resource no longer exists, or a temporary server issue."
                ),
                instance=str(request.url),
            )
            return p.emit()

        if exc.status_code == 405:
            p = Problem(
                status=405,
                title="Unsupported HTTP method.",
                detail=(
                    f"The target resource doesn't support this method ({request.method}). "
                    "Check the 'Allow' header in the response for a list of supported methods."
                ),
                instance=str(request.url),
            )
            return p.emit(headers=exc.headers)

        return Problem(status=exc.status_code, detail=str(exc.detail or "")).emit(
            headers=exc.headers
        )

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        p = Problem(
            status=400,
            title="Malformed request parameters.",
            detail="One or more query or path parameters could not be parsed.",
        )
        for error in exc.errors():
            loc = error.get("loc") or ()
            p.add_extension("parameter", str(loc[-1]) if loc else "")
        return p.emit()

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        rid = request_id_var.get("")
        logger.error(
            "[%s] Unexpected error on %s %s: %s",
            rid,
            request.method,
            request.url.path,
            exc,
            exc_info=exc,
        )
        return new_internal().emit()


# ══════════════════════════════════════════════════════════════════════════
# Application Factory
# ══════════════════════════════════════════════════════════════════════════

def create_app(services: Optional[Services] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        services: Concrete service bundle. When omitted, it is built by the
                  factory named in `settings.services_factory`.

    Returns: Fully configured FastAPI instance ready to receive requests.
    """
    exceptions.contact = settings.problem_contact
    set_global_url(settings.problem_base_url, fragment=settings.problem_fragment)

    docs_enabled = settings.server_mode != "release"
    app = FastAPI(
        title="fontseca.dev API",
        description="Archive, portfolio and profile management for fontseca.dev.",
        version=__version__,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
        lifespan=lifespan,
    )

    app.state.services = services if services is not None else load_services(settings.services_factory)
    app.state.validator = StructValidator()

    # ── Register Middleware ───────────────────────────────────────────────
    # Last added runs first: RequestID → AccessLog → CORS → route
    if settings.cors_origins_list:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.cors_origins_list,
            allow_credentials=True,
            allow_methods=["GET", "POST"],
            allow_headers=["*"],
            expose_headers=["X-Request-ID", "Allow"],
        )
    app.add_middleware(AccessLogMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # ── Register Exception Handlers ───────────────────────────────────────
    register_exception_handlers(app)

    # ── Register Routes ───────────────────────────────────────────────────
    for module in (me, experience, technologies, projects, drafts, articles, patches, tags, topics):
        app.include_router(module.router)
    app.include_router(health.router)
    app.include_router(web.router)

    return app


def serve() -> None:
    """Console entry point: run the app with uvicorn on the configured address."""
    uvicorn.run(
        "fontseca.main:app",
        host=settings.backend_host,
        port=settings.backend_port,
        log_level=settings.log_level.lower(),
    )


# ── Application Instance ─────────────────────────────────────────────────
# uvicorn expects `fontseca.main:app` to be importable
app = create_app()
