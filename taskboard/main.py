"""
FastAPI Application Entry Point - Application initialization and configuration
"""

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import sys
import time

from taskboard.core.config import settings, validate_config, is_production
from taskboard.core.exceptions import TaskboardError, ValidationError, field_errors
from taskboard.database import check_db_connection, close_db_connections, get_pool_stats, init_db

logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, errors=None) -> JSONResponse:
    """Failure envelope: {success: false, message, errors?}"""
    content = {"success": False, "message": message}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content)


def create_application() -> FastAPI:
    """
    Factory function to create and configure FastAPI application.
    Using factory pattern allows easier testing with different configurations.
    """
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        debug=settings.DEBUG,
        docs_url="/api/docs" if not is_production() else None,  # Hide Swagger docs in production
        redoc_url="/api/redoc" if not is_production() else None,
        description="Task management API with filtering, pagination and dashboard stats"
    )

    setup_middleware(app)
    setup_exception_handlers(app)
    setup_event_handlers(app)
    setup_routers(app)

    return app


def setup_middleware(app: FastAPI) -> None:
    """Configure application middleware - runs on every request/response"""

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Log every request with method, path, status, and processing time"""
        start_time = time.time()
        logger.info(f"➡️  {request.method} {request.url.path}")

        response = await call_next(request)

        process_time = time.time() - start_time
        logger.info(
            f"⬅️  {request.method} {request.url.path} "
            f"- Status: {response.status_code} - Time: {process_time:.2f}s"
        )
        response.headers["X-Process-Time"] = str(process_time)
        return response


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure global exception handlers - every failure uses the same envelope"""

    @app.exception_handler(TaskboardError)
    async def taskboard_exception_handler(request: Request, exc: TaskboardError):
        """Domain errors carry their own HTTP status"""
        errors = exc.errors if isinstance(exc, ValidationError) else None
        if exc.status_code >= 500:
            logger.error(f"❌ {exc.message} on {request.method} {request.url.path}", exc_info=exc)
            return error_response(exc.status_code, "Internal server error")
        return error_response(exc.status_code, exc.message, errors)

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """
        Handle malformed request bodies and parameters.
        Reported as 400 with the same field list as service-level validation.
        """
        errors = field_errors(exc.errors())
        logger.warning(f"❌ Validation error on {request.url.path}: {errors}")
        return error_response(status.HTTP_400_BAD_REQUEST, "Validation error", errors)

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Framework-raised HTTP errors (unknown route, wrong method)"""
        return error_response(exc.status_code, str(exc.detail))

    @app.exception_handler(SQLAlchemyError)
    async def database_exception_handler(request: Request, exc: SQLAlchemyError):
        """
        Handle database errors - logs full details but returns generic message.
        Never expose schema or driver errors to the client.
        """
        logger.error(
            f"❌ Database error on {request.method} {request.url.path}: {str(exc)}",
            exc_info=True
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Catch-all for unexpected exceptions"""
        logger.error(
            f"❌ Unhandled exception on {request.method} {request.url.path}: {str(exc)}",
            exc_info=True
        )
        return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def setup_event_handlers(app: FastAPI) -> None:
    """Configure startup and shutdown event handlers"""

    @app.on_event("startup")
    async def startup_event():
        """
        Validate config and check the database.
        Fail fast: If checks fail, application won't start.
        """
        logger.info("🚀 Starting Taskboard API...")

        try:
            validate_config()
        except ValueError as e:
            logger.error(f"❌ Configuration validation failed: {e}")
            sys.exit(1)

        if settings.AUTO_CREATE_TABLES:
            init_db()

        if not check_db_connection():
            logger.error("❌ Cannot connect to database. Exiting.")
            sys.exit(1)

        logger.info(f"📊 Database pool: {get_pool_stats()}")
        logger.info("✅ Application started successfully")
        logger.info(f"🌍 Environment: {settings.ENVIRONMENT}")
        logger.info(f"🔧 Debug mode: {settings.DEBUG}")

    @app.on_event("shutdown")
    async def shutdown_event():
        logger.info("🛑 Shutting down Taskboard API...")
        close_db_connections()
        logger.info("✅ Shutdown complete")


def setup_routers(app: FastAPI) -> None:
    """Mount health check and API routers"""

    @app.get("/health", tags=["Health"])
    async def health_check():
        """
        Health check endpoint for monitoring and load balancers.
        Returns application status, database connectivity, and version info.
        """
        db_healthy = check_db_connection()
        return {
            "status": "healthy" if db_healthy else "unhealthy",
            "database": "connected" if db_healthy else "disconnected",
            "pool_stats": get_pool_stats(),
            "timestamp": time.time(),
            "version": settings.APP_VERSION
        }

    from taskboard.api import auth, tasks
    app.include_router(auth.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["Tasks"])


app = create_application()


def run() -> None:
    """
    Development entry point (`taskboard` console script).
    Production: `uvicorn taskboard.main:app --host 0.0.0.0 --port 8000`
    """
    import uvicorn
    uvicorn.run(
        "taskboard.main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.DEBUG,
        log_level="debug" if settings.DEBUG else "info"
    )


if __name__ == "__main__":
    run()
