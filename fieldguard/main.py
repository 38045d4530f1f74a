"""
fieldguard demo application

A small FastAPI application whose parameterised route is validated through
a router-scoped route class, while /health stays unvalidated. Useful as a
usage example and as the target of the integration tests.
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import sentry_sdk
from fastapi import APIRouter, FastAPI, Request, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from sentry_sdk.integrations.fastapi import FastApiIntegration
from sentry_sdk.integrations.logging import LoggingIntegration

from fieldguard.config import Settings, configure_logging, get_settings
from fieldguard.core.validation import FieldKey, ValidatorRegistry, is_bool, is_number, min_length
from fieldguard.middleware.validation import validated_route_class
from fieldguard.schemas.common import ErrorResponse, HealthResponse

logger = logging.getLogger(__name__)


class Cat(BaseModel):
    name: str


def build_default_registry() -> ValidatorRegistry:
    """Registry used by the demo application."""
    registry = ValidatorRegistry()
    registry.register(FieldKey.path_param("n"), is_number)
    registry.register(FieldKey.header("X-Custom-Header"), is_number)
    registry.register(FieldKey.query_param("test"), is_bool)
    registry.register(FieldKey.query_param("test"), min_length(10))
    registry.register(FieldKey.cookie("test"), min_length(20))
    return registry


def configure_sentry(settings: Settings) -> bool:
    """
    Initialize Sentry error tracking when enabled in settings.

    Returns:
        True if Sentry was initialized
    """
    sentry_config = settings.get_sentry_config()
    if not (sentry_config["enabled"] and sentry_config["dsn"]):
        logger.info("Sentry error tracking disabled - no DSN configured or disabled in settings")
        return False

    sentry_sdk.init(
        dsn=sentry_config["dsn"],
        environment=sentry_config["environment"],
        traces_sample_rate=sentry_config["traces_sample_rate"],
        release=sentry_config["release"],
        integrations=[
            FastApiIntegration(),
            LoggingIntegration(level=logging.INFO, event_level=logging.ERROR),
        ],
        send_default_pii=False,
    )
    sentry_sdk.set_tag("service", settings.app_name)
    sentry_sdk.set_tag("version", settings.app_version)
    logger.info("Sentry error tracking initialized")
    return True


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.settings
    logger.info(f"Starting {settings.app_name} v{settings.app_version} (debug={settings.debug})")
    configure_sentry(settings)
    yield
    logger.info(f"Shutting down {settings.app_name}")


def create_app(
    settings: Optional[Settings] = None,
    registry: Optional[ValidatorRegistry] = None
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; defaults to the global settings
        registry: Validators to install; defaults to build_default_registry()

    Returns:
        FastAPI: Configured FastAPI application instance
    """
    settings = settings or get_settings()
    registry = registry if registry is not None else build_default_registry()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        debug=settings.debug,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.get("/health", response_model=HealthResponse)
    async def health() -> HealthResponse:
        return HealthResponse(version=settings.app_version)

    router = APIRouter(
        route_class=validated_route_class(registry, strict_query_parsing=settings.strict_query_parsing)
    )

    @router.get("/test/{n}", response_model=Cat)
    async def get_cat(n: str) -> Cat:
        return Cat(name="chashu")

    app.include_router(router)

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle general exceptions with structured error responses."""
        logger.error(f"Unhandled exception: {str(exc)}", exc_info=True)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                message="Internal server error" + (f": {str(exc)}" if settings.debug else ""),
                error_code="INTERNAL_SERVER_ERROR",
            ).model_dump(mode="json")
        )

    return app


def main():
    """Main entry point for running the demo application with uvicorn."""
    import uvicorn

    configure_logging()
    settings = get_settings()

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
        access_log=True
    )


if __name__ == "__main__":
    main()
