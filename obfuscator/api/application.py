"""FastAPI application factory for the obfuscation service."""

from fastapi import FastAPI

from obfuscator.config import AppSettings
from obfuscator.jobs import TransformationJobPort

from .routers import api_create_health_router, api_create_obfuscation_router


def create_api_application(
    settings: AppSettings,
    transformation_orchestrator: TransformationJobPort,
) -> FastAPI:
    """Create the FastAPI application instance for the service.

    Args:
        settings: Validated application settings used for runtime metadata.
        transformation_orchestrator: Job orchestrator for obfuscation submissions.

    Returns:
        FastAPI: Framework application instance.

    Raises:
        ValueError: Raised when router dependencies are invalid.
    """
    application = FastAPI(title="Lua Obfuscator")

    @application.get("/", tags=["foundation"])
    def foundation_index() -> dict[str, str]:
        """Return minimal service metadata.

        Returns:
            dict[str, str]: Service name, status and environment.

        Raises:
            RuntimeError: Raised if route handler cannot produce a response.
        """

        return {
            "service": "lua-obfuscator",
            "status": "ready",
            "environment": settings.environment_name,
        }

    application.include_router(api_create_health_router(transformation_orchestrator=transformation_orchestrator))
    application.include_router(
        api_create_obfuscation_router(transformation_orchestrator=transformation_orchestrator)
    )

    return application
