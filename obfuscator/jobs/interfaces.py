"""Typed interfaces for job-layer orchestration responsibilities."""

from typing import Protocol

from obfuscator.domain import HealthStatus, JobResult


class TransformationJobPort(Protocol):
    """Port definition for submitting one obfuscation job."""

    def job_submit(self, source_text: object, tier: object) -> JobResult:
        """Run one obfuscation job end to end.

        Args:
            source_text: Lua source submitted by the caller.
            tier: Caller-facing protection tier; unknown values use the default.

        Returns:
            JobResult: Success with obfuscated text, or failure with a message.

        Raises:
            RuntimeError: Implementations convert every failure into a result.
        """

    def job_interpreter_status(self) -> HealthStatus:
        """Return interpreter availability, resolving it when not yet cached.

        Returns:
            HealthStatus: `ok` status with the interpreter path as detail.

        Raises:
            InterpreterNotFoundError: Raised when no interpreter can be resolved.
        """
