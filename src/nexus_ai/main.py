"""FastAPI application entry point for Nexus AI."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from nexus_ai import __version__
from nexus_ai.api.routes import router
from nexus_ai.config import Settings, get_settings
from nexus_ai.db.client import DatabaseClient
from nexus_ai.exceptions import InternalError, NexusError
from nexus_ai.tools.claude import ClaudeClient

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": message, **extra},
    )


def _describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_error_handlers(app: FastAPI) -> None:
    """Convert every failure into a `{success: false, error}` response."""

    @app.exception_handler(NexusError)
    async def handle_nexus_error(request: Request, exc: NexusError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
        return _error_response(exc.status_code, exc.message, **exc.extra())

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return _error_response(400, _describe_validation_error(exc))

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return _error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Server error on {request.method} {request.url.path}: {exc}")
        error = InternalError()
        return _error_response(error.status_code, error.message)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan events."""
    logger.info(f"Starting Nexus AI Backend v{__version__}")
    logger.info(f"Allowed origins: {app.state.settings.origins}")
    yield
    logger.info("Shutting down Nexus AI Backend")


def create_app(
    db: DatabaseClient | None = None,
    llm: ClaudeClient | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        db: Identity and data store adapter (built from settings if omitted)
        llm: Completion client (built from settings if omitted)
        settings: Settings override
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Nexus AI",
        description="Project management assistant backend",
        version=__version__,
        lifespan=lifespan,
        debug=settings.debug,
    )

    app.state.settings = settings
    app.state.db = db or DatabaseClient()
    app.state.llm = llm or ClaudeClient(settings=settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_error_handlers(app)
    app.include_router(router)

    return app


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "nexus_ai.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )
