"""
Customer Service - FastAPI Application
Customer records management and customer token authentication
"""

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from contextlib import asynccontextmanager
from typing import Optional
import logging

from customer_crud.config import Settings, get_settings
from customer_crud.context import ServiceContext, build_context
from customer_crud.db.database import CustomerDatabase
from customer_crud.routes import customers, health, tokens
from customer_crud.utils.logger import setup_logging

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, context: Optional[ServiceContext] = None) -> FastAPI:
    """
    Build the application

    Args:
        settings: Configuration; read from the environment when omitted
        context: Pre-built services; when omitted the lifespan opens a
            database pool and builds them

    Returns:
        FastAPI application
    """
    settings = settings or get_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler"""
        logger.info(f"{settings.app_name} starting up...")
        database = None

        if app.state.context is None:
            settings.log_config()
            database = CustomerDatabase(settings)
            await database.initialize()
            app.state.db = database
            app.state.context = build_context(database.get_pool(), settings)

        logger.info(f"{settings.app_name} startup complete")

        yield

        logger.info(f"{settings.app_name} shutting down...")
        if database is not None:
            await database.close()
            app.state.context = None

    app = FastAPI(
        title=settings.app_name,
        description="Customer records management and customer token authentication",
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.context = context
    app.state.db = None

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException):
        """Custom HTTP exception handler"""
        return JSONResponse(
            status_code=exc.status_code,
            content={
                "error": True,
                "message": exc.detail,
                "status_code": exc.status_code
            },
            headers=exc.headers,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Malformed bodies and identifiers are a 400"""
        fields = [".".join(str(part) for part in error.get("loc", ())) for error in exc.errors()]
        logger.warning(f"Invalid request to {request.url.path}: {fields}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": True,
                "message": "Bad Request",
                "status_code": status.HTTP_400_BAD_REQUEST
            }
        )

    app.include_router(health.router, prefix="/health", tags=["Health"])
    app.include_router(customers.router, prefix="/customers", tags=["Customers"])
    app.include_router(tokens.router, prefix="/api/customers", tags=["Customer Tokens"])

    @app.get("/")
    async def root():
        """Root endpoint"""
        return {
            "service": "customer-service",
            "status": "running",
            "version": settings.app_version,
            "docs": "/docs"
        }

    return app


def main():
    import uvicorn

    settings = get_settings()
    setup_logging(
        config_path=settings.log_config_path,
        log_level=settings.log_level,
        log_format=settings.log_format,
    )
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
