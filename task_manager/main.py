# =====================================================
# FILE: task_manager/main.py
# FastAPI Application Factory
# =====================================================

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from task_manager import __version__
from task_manager.core.config import settings
from task_manager.core.database import init_db
from task_manager.core.responses import error_response
from task_manager.api.api_v1.auth import login, registration
from task_manager.api.api_v1.tasks import tasks
from task_manager.api.api_v1.users import user_management
from task_manager.api.api_v1.reports import audit_trail

logger = logging.getLogger(__name__)


def configure_logging():
    logging.basicConfig(
        level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def format_validation_error(errors) -> str:
    """
    First field error as a readable message, e.g. "The email field is required."
    """
    if not errors:
        return "The given data was invalid."

    error = errors[0]
    names = [str(part) for part in error.get("loc", ()) if not isinstance(part, int)]
    field = names[-1] if names else "input"

    if error.get("type") == "missing":
        return f"The {field} field is required."
    return f"The {field} field is invalid: {error.get('msg', 'invalid value')}."


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f" Starting {settings.APP_NAME} v{__version__}")
    init_db()
    yield
    logger.info(f" Shutting down {settings.APP_NAME}")


def register_exception_handlers(app: FastAPI):

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return error_response(str(exc.detail), exc.status_code, headers=getattr(exc, "headers", None))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        message = format_validation_error(exc.errors())
        logger.info(f" Validation failed on {request.method} {request.url.path}: {message}")
        return error_response(message, status.HTTP_422_UNPROCESSABLE_ENTITY)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.error(f" Unhandled error on {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
        message = str(exc) if settings.EXPOSE_ERROR_DETAILS else "Internal server error"
        return error_response(message, status.HTTP_500_INTERNAL_SERVER_ERROR)


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(
        title=settings.APP_NAME,
        version=__version__,
        description="Task management API with user authentication and an audit trail",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    for module in (login, registration, tasks, user_management, audit_trail):
        app.include_router(module.router, prefix=settings.API_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint - no authentication required
        """
        return {"success": True, "message": "API is running", "data": {"version": __version__}}

    return app


app = create_app()


def run():
    import uvicorn

    uvicorn.run("task_manager.main:app", host="0.0.0.0", port=8000, reload=settings.DEBUG)


if __name__ == "__main__":
    run()
