"""Typed domain models shared across runtime layers.

This module provides simple data contracts for cross-layer communication
between the job orchestrator, the API layer and the CLI entry point.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class JobState(str, Enum):
    """Lifecycle states of one obfuscation job."""

    RECEIVED = "received"
    TIER_NORMALIZED = "tier_normalized"
    WORKSPACE_ALLOCATED = "workspace_allocated"
    INTERPRETER_READY = "interpreter_ready"
    INVOKED = "invoked"
    OUTPUT_READ = "output_read"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class JobResult:
    """Terminal outcome of one obfuscation job.

    Attributes:
        ok: Whether the job produced obfuscated text.
        job_id: Job identifier, also embedded in scratch artifact names.
        text: Obfuscated source text on success.
        tier_used: Effective protection tier on success.
        message: Human-readable failure message.
        error_code: Stable failure code.
        diagnostics: Stage timeline recorded while the job ran.
    """

    ok: bool
    job_id: str
    text: str | None = None
    tier_used: str | None = None
    message: str | None = None
    error_code: str | None = None
    diagnostics: list[dict[str, object]] = field(default_factory=list)

    @classmethod
    def success(cls, job_id: str, text: str, tier_used: str, diagnostics: list[dict[str, object]]) -> JobResult:
        """Build a successful job result."""

        return cls(ok=True, job_id=job_id, text=text, tier_used=tier_used, diagnostics=diagnostics)

    @classmethod
    def failure(cls, job_id: str, message: str, error_code: str, diagnostics: list[dict[str, object]]) -> JobResult:
        """Build a failed job result."""

        return cls(ok=False, job_id=job_id, message=message, error_code=error_code, diagnostics=diagnostics)


@dataclass(frozen=True)
class HealthStatus:
    """Interpreter availability reported to the health endpoint.

    Attributes:
        status: Interpreter status text, `ok` once a path resolves.
        detail: Resolved interpreter path.
    """

    status: str
    detail: str
