"""Health endpoint router composition for app and interpreter checks."""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from obfuscator.adapters import InterpreterNotFoundError
from obfuscator.jobs import TransformationJobPort


def api_create_health_router(transformation_orchestrator: TransformationJobPort) -> APIRouter:
    """Create health-check router with app and interpreter availability status.

    Args:
        transformation_orchestrator: Job orchestrator owning interpreter resolution.

    Returns:
        APIRouter: Router exposing `/health` endpoint.

    Raises:
        ValueError: Raised when transformation_orchestrator is invalid.
    """

    if transformation_orchestrator is None:
        raise ValueError("transformation_orchestrator must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return application and interpreter health state.

        A missing interpreter is retried here, so the endpoint recovers once
        Lua becomes available without a restart.

        Returns:
            JSONResponse: Deterministic health payload for operational checks.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        try:
            interpreter_health = transformation_orchestrator.job_interpreter_status()
            payload = {
                "status": "ok",
                "app": "up",
                "interpreter": interpreter_health.status,
                "detail": interpreter_health.detail,
            }
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)
        except InterpreterNotFoundError as error:
            payload = {
                "status": "degraded",
                "app": "up",
                "interpreter": "down",
                "detail": str(error),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_503_SERVICE_UNAVAILABLE)

    return router
