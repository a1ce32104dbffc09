"""Project-native typed exceptions for obfuscation pipeline failures."""

from __future__ import annotations

from typing import Final

INVALID_INPUT_CODE: Final[str] = "INVALID_INPUT"
INTERPRETER_NOT_FOUND_CODE: Final[str] = "INTERPRETER_NOT_FOUND"
WORKSPACE_ERROR_CODE: Final[str] = "WORKSPACE_ERROR"
INVOCATION_TIMEOUT_CODE: Final[str] = "INVOCATION_TIMEOUT"
INVOCATION_OVERFLOW_CODE: Final[str] = "INVOCATION_OVERFLOW"
INVOCATION_EXIT_CODE: Final[str] = "INVOCATION_EXIT"
INTERNAL_INCONSISTENCY_CODE: Final[str] = "INTERNAL_INCONSISTENCY"
UNEXPECTED_ERROR_CODE: Final[str] = "UNEXPECTED_ERROR"


class TransformationError(Exception):
    """Base exception for obfuscation pipeline failures.

    Attributes:
        error_code: Stable error code reported on failed job results.
    """

    default_error_code = UNEXPECTED_ERROR_CODE

    def __init__(self, message: str, error_code: str | None = None):
        super().__init__(message)
        self.error_code = error_code or self.default_error_code


class InvalidInputError(TransformationError, ValueError):
    """Submitted source is empty or not text."""

    default_error_code = INVALID_INPUT_CODE


class InterpreterNotFoundError(TransformationError, RuntimeError):
    """No usable Lua interpreter after exhausting every resolution strategy."""

    default_error_code = INTERPRETER_NOT_FOUND_CODE


class WorkspaceError(TransformationError, OSError):
    """Scratch directory or artifact could not be created, written or read."""

    default_error_code = WORKSPACE_ERROR_CODE


class InvocationFailure(TransformationError, RuntimeError):
    """Obfuscator subprocess did not complete successfully.

    Attributes:
        reason: Failure kind (`timeout`, `overflow`, `exit`).
        diagnostic: Captured diagnostic text, usually stderr.
    """

    reason = "exit"

    def __init__(self, message: str, diagnostic: str = "", error_code: str | None = None):
        super().__init__(message, error_code=error_code)
        self.diagnostic = diagnostic


class InvocationTimeoutError(InvocationFailure):
    """Subprocess exceeded its wall-clock timeout and was killed."""

    reason = "timeout"
    default_error_code = INVOCATION_TIMEOUT_CODE


class InvocationOverflowError(InvocationFailure):
    """Subprocess exceeded the combined output buffer cap and was killed."""

    reason = "overflow"
    default_error_code = INVOCATION_OVERFLOW_CODE


class InvocationExitError(InvocationFailure):
    """Subprocess exited nonzero or could not be started.

    Attributes:
        exit_code: Process exit status, `None` when the process never started.
    """

    reason = "exit"
    default_error_code = INVOCATION_EXIT_CODE

    def __init__(self, message: str, diagnostic: str = "", exit_code: int | None = None):
        super().__init__(message, diagnostic=diagnostic)
        self.exit_code = exit_code


class InternalInconsistencyError(TransformationError, RuntimeError):
    """Obfuscator reported success but its output artifact is missing or unreadable."""

    default_error_code = INTERNAL_INCONSISTENCY_CODE
