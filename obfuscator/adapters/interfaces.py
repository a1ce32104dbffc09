"""Typed interfaces for adapter-layer responsibilities."""

from __future__ import annotations

from contextlib import AbstractContextManager
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol


@dataclass(frozen=True)
class WorkspaceArtifacts:
    """Scratch artifact pair owned by one job.

    Attributes:
        job_id: Owning job identifier.
        input_path: Path the source text is written to.
        output_path: Path the obfuscator writes its result to.
    """

    job_id: str
    input_path: Path
    output_path: Path


@dataclass(frozen=True)
class InvocationResult:
    """Captured output of a successful obfuscator run.

    Attributes:
        exit_code: Process exit status.
        stdout_text: Decoded standard output.
        stderr_text: Decoded standard error.
        duration_ms: Wall-clock run duration.
    """

    exit_code: int
    stdout_text: str
    stderr_text: str
    duration_ms: int


class InterpreterResolutionStrategy(Protocol):
    """One way of locating a Lua interpreter."""

    def strategy_name(self) -> str:
        """Return strategy label used in logs and diagnostics."""

    def strategy_find(self) -> str | None:
        """Return an executable interpreter path, or `None` when this strategy finds nothing.

        Returns:
            str | None: Interpreter path or command name.

        Raises:
            RuntimeError: Implementations do not raise for a failed lookup.
        """


class InterpreterResolverPort(Protocol):
    """Port definition for resolving the interpreter that runs the obfuscator."""

    def resolver_resolve(self) -> str:
        """Resolve an interpreter path by trying each strategy in order.

        Returns:
            str: Executable interpreter path or command name.

        Raises:
            InterpreterNotFoundError: Raised when every strategy fails.
        """


class WorkspacePort(Protocol):
    """Port definition for per-job scratch artifact management."""

    def workspace_ensure(self) -> None:
        """Create the shared scratch directory if absent."""

    def workspace_session(self, job_id: str) -> AbstractContextManager[WorkspaceArtifacts]:
        """Allocate artifacts for one job and release them on exit."""

    def workspace_write_input(self, artifacts: WorkspaceArtifacts, source_text: str) -> None:
        """Write job source text to the input artifact."""

    def workspace_read_output(self, artifacts: WorkspaceArtifacts) -> str:
        """Read the obfuscator result from the output artifact."""


class TransformationInvokerPort(Protocol):
    """Port definition for running the obfuscator against one input artifact."""

    def invoker_run(self, interpreter_path: str, tool_preset: str, artifacts: WorkspaceArtifacts) -> InvocationResult:
        """Run one bounded obfuscator subprocess.

        Args:
            interpreter_path: Resolved interpreter executable.
            tool_preset: Native obfuscator preset name.
            artifacts: Scratch artifacts for the job.

        Returns:
            InvocationResult: Captured output of a zero-exit run.

        Raises:
            InvocationFailure: Raised on timeout, output overflow or nonzero exit.
        """
