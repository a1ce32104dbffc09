"""Job-layer obfuscation orchestrator with an explicit state timeline."""

from __future__ import annotations

import logging
import time
from typing import Callable
from uuid import uuid4

from obfuscator.adapters import (
    UNEXPECTED_ERROR_CODE,
    InternalInconsistencyError,
    InterpreterCache,
    InterpreterNotFoundError,
    InterpreterResolverPort,
    InvalidInputError,
    InvocationFailure,
    TransformationError,
    TransformationInvokerPort,
    WorkspaceArtifacts,
    WorkspaceError,
    WorkspacePort,
)
from obfuscator.domain import (
    HealthStatus,
    JobResult,
    JobState,
    JobTimeline,
    NormalizedPreset,
    domain_normalize_preset,
)

from .interfaces import TransformationJobPort

logger = logging.getLogger(__name__)

NO_CODE_MESSAGE = "No code provided. Please enter Lua code to obfuscate."


class TransformationJobOrchestrator(TransformationJobPort):
    """Drive one job through normalize, allocate, resolve, invoke and read.

    Workspace artifacts are owned by a scoped session, so release runs once
    on every exit path after allocation. Every failure becomes a failed
    `JobResult`; nothing escapes `job_submit`.
    """

    def __init__(
        self,
        interpreter_resolver: InterpreterResolverPort,
        interpreter_cache: InterpreterCache,
        workspace: WorkspacePort,
        invoker: TransformationInvokerPort,
        job_id_factory: Callable[[], str] | None = None,
    ):
        """Initialize orchestrator dependencies.

        Args:
            interpreter_resolver: Resolver used when the cache slot is empty.
            interpreter_cache: Process-wide interpreter slot.
            workspace: Per-job scratch artifact manager.
            invoker: Bounded obfuscator subprocess runner.
            job_id_factory: Optional job id provider, defaults to random UUIDs.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when dependencies are invalid.
        """

        if interpreter_resolver is None:
            raise ValueError("interpreter_resolver must not be None")
        if interpreter_cache is None:
            raise ValueError("interpreter_cache must not be None")
        if workspace is None:
            raise ValueError("workspace must not be None")
        if invoker is None:
            raise ValueError("invoker must not be None")

        self._interpreter_resolver = interpreter_resolver
        self._interpreter_cache = interpreter_cache
        self._workspace = workspace
        self._invoker = invoker
        self._job_id_factory = job_id_factory or (lambda: str(uuid4()))

    def job_interpreter_status(self) -> HealthStatus:
        interpreter_path = self._interpreter_cache.cache_get_or_resolve(self._interpreter_resolver)
        return HealthStatus(status="ok", detail=interpreter_path)

    def job_submit(self, source_text: object, tier: object) -> JobResult:
        """Run one obfuscation job end to end.

        Args:
            source_text: Lua source submitted by the caller.
            tier: Caller-facing protection tier; unknown values use the default.

        Returns:
            JobResult: Success with obfuscated text, or failure with a message.

        Raises:
            RuntimeError: This method converts every failure into a result.
        """

        job_id = self._job_id_factory()
        timeline = JobTimeline(job_id)
        started_at = time.monotonic()

        if not isinstance(source_text, str) or not source_text:
            return self._job_fail(timeline, InvalidInputError(NO_CODE_MESSAGE), started_at)

        normalized_preset = domain_normalize_preset(tier)
        timeline.timeline_record(
            JobState.TIER_NORMALIZED,
            details={
                "tier": normalized_preset.tier.value,
                "tool_preset": normalized_preset.tool_preset.value,
            },
        )

        try:
            with self._workspace.workspace_session(job_id) as artifacts:
                obfuscated_text = self._job_run_in_workspace(
                    artifacts=artifacts,
                    source_text=source_text,
                    normalized_preset=normalized_preset,
                    timeline=timeline,
                )
        except (TransformationError, OSError, RuntimeError, ValueError) as error:
            return self._job_fail(timeline, error, started_at)
        except Exception as error:  # pylint: disable=broad-exception-caught
            logger.exception("event=job_unexpected_error job_id=%s", job_id)
            return self._job_fail(timeline, error, started_at)

        timeline.timeline_record(JobState.DONE)
        logger.info(
            "event=job_completed job_id=%s tier=%s duration_ms=%s",
            job_id,
            normalized_preset.tier.value,
            self._job_elapsed_ms(started_at),
        )
        return JobResult.success(
            job_id=job_id,
            text=obfuscated_text,
            tier_used=normalized_preset.tier.value,
            diagnostics=timeline.timeline_events(),
        )

    def _job_run_in_workspace(
        self,
        artifacts: WorkspaceArtifacts,
        source_text: str,
        normalized_preset: NormalizedPreset,
        timeline: JobTimeline,
    ) -> str:
        """Execute the workspace-scoped stages of one job.

        Args:
            artifacts: Scratch artifacts owned by the job.
            source_text: Validated Lua source.
            normalized_preset: Effective tier and native preset.
            timeline: Mutable job timeline.

        Returns:
            str: Obfuscated source text.

        Raises:
            WorkspaceError: Raised when the input artifact cannot be written.
            InterpreterNotFoundError: Raised when no interpreter can be resolved.
            InvocationFailure: Raised when the obfuscator run fails.
            InternalInconsistencyError: Raised when a successful run left no usable output.
        """

        self._workspace.workspace_ensure()
        self._workspace.workspace_write_input(artifacts, source_text)
        timeline.timeline_record(
            JobState.WORKSPACE_ALLOCATED,
            details={"input_artifact": artifacts.input_path.name},
        )

        interpreter_path = self._interpreter_cache.cache_get_or_resolve(self._interpreter_resolver)
        timeline.timeline_record(JobState.INTERPRETER_READY, details={"interpreter": interpreter_path})

        invocation_result = self._invoker.invoker_run(
            interpreter_path=interpreter_path,
            tool_preset=normalized_preset.tool_preset.value,
            artifacts=artifacts,
        )
        timeline.timeline_record(
            JobState.INVOKED,
            details={"invocation_duration_ms": invocation_result.duration_ms},
        )

        try:
            obfuscated_text = self._workspace.workspace_read_output(artifacts)
        except WorkspaceError as error:
            raise InternalInconsistencyError(
                f"obfuscator reported success but output is unavailable: {error}"
            ) from error
        if not obfuscated_text:
            raise InternalInconsistencyError("obfuscator reported success but output is empty")
        timeline.timeline_record(JobState.OUTPUT_READ, details={"output_length": len(obfuscated_text)})
        return obfuscated_text

    def _job_fail(self, timeline: JobTimeline, error: BaseException, started_at: float) -> JobResult:
        """Record the failed transition and build the failure result.

        Args:
            timeline: Mutable job timeline.
            error: Failure that ended the job.
            started_at: Monotonic job start time.

        Returns:
            JobResult: Failed job result.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        job_id = timeline.job_id
        error_code = self._job_error_code_for_exception(error)
        failed_in_state = timeline.state.value
        details: dict[str, object] = {
            "error_code": error_code,
            "error_type": type(error).__name__,
            "error_message": str(error),
            "failed_after": failed_in_state,
        }
        if isinstance(error, InvocationFailure):
            details["invocation_reason"] = error.reason
        timeline.timeline_record(JobState.FAILED, details=details)

        logger.warning(
            "event=job_failed job_id=%s error_code=%s failed_after=%s duration_ms=%s error=%s",
            job_id,
            error_code,
            failed_in_state,
            self._job_elapsed_ms(started_at),
            error,
        )
        return JobResult.failure(
            job_id=job_id,
            message=self._job_message_for_exception(error),
            error_code=error_code,
            diagnostics=timeline.timeline_events(),
        )

    def _job_error_code_for_exception(self, error: BaseException) -> str:
        """Map a failure to its deterministic job error code.

        Args:
            error: Failure that ended the job.

        Returns:
            str: Deterministic error code.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if isinstance(error, TransformationError):
            return error.error_code
        if isinstance(error, OSError):
            return WorkspaceError.default_error_code
        return UNEXPECTED_ERROR_CODE

    def _job_message_for_exception(self, error: BaseException) -> str:
        """Build the single user-facing failure message.

        Args:
            error: Failure that ended the job.

        Returns:
            str: Human-readable failure message.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        if isinstance(error, (InvalidInputError, InterpreterNotFoundError)):
            return str(error)
        return f"Obfuscation failed: {str(error) or 'Unknown error during obfuscation'}"

    @staticmethod
    def _job_elapsed_ms(started_at: float) -> int:
        return max(0, int((time.monotonic() - started_at) * 1000))
