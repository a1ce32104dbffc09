"""Obfuscation API router composition for the job submission endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from obfuscator.adapters import INVALID_INPUT_CODE
from obfuscator.domain import DEFAULT_PROTECTION_TIER
from obfuscator.jobs import TransformationJobPort


class ObfuscationRequest(BaseModel):
    """Request body for `/api/obfuscate`.

    Both fields are loosely typed so that a non-string `code` reaches the
    orchestrator's input check and an unknown `preset` falls back to the
    default tier instead of failing request validation.

    Attributes:
        code: Lua source text.
        preset: Caller-facing protection tier.
    """

    code: Any = None
    preset: Any = DEFAULT_PROTECTION_TIER.value


def api_create_obfuscation_router(transformation_orchestrator: TransformationJobPort) -> APIRouter:
    """Create obfuscation router with the job submission endpoint.

    Args:
        transformation_orchestrator: Job orchestrator executing submissions.

    Returns:
        APIRouter: Router exposing `/api/obfuscate`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if transformation_orchestrator is None:
        raise ValueError("transformation_orchestrator must not be None")

    router = APIRouter(prefix="/api", tags=["obfuscation"])

    @router.post("/obfuscate")
    def api_obfuscate(request: ObfuscationRequest) -> JSONResponse:
        """Run one obfuscation job.

        Runs on the framework threadpool, so concurrent requests execute
        concurrent jobs.

        Args:
            request: Parsed request body.

        Returns:
            JSONResponse: Obfuscated code with the tier used, or an error message.

        Raises:
            RuntimeError: This handler does not raise runtime errors.
        """

        job_result = transformation_orchestrator.job_submit(source_text=request.code, tier=request.preset)
        if job_result.ok:
            payload = {
                "success": True,
                "obfuscatedCode": job_result.text,
                "preset": job_result.tier_used,
            }
            return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

        failure_status = (
            status.HTTP_400_BAD_REQUEST
            if job_result.error_code == INVALID_INPUT_CODE
            else status.HTTP_500_INTERNAL_SERVER_ERROR
        )
        payload = {
            "success": False,
            "error": job_result.message,
        }
        return JSONResponse(content=payload, status_code=failure_status)

    return router
