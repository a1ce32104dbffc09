"""Adapter layer package for interpreter, workspace and obfuscator boundaries."""

from .errors import (
	INTERNAL_INCONSISTENCY_CODE,
	INTERPRETER_NOT_FOUND_CODE,
	INVALID_INPUT_CODE,
	INVOCATION_EXIT_CODE,
	INVOCATION_OVERFLOW_CODE,
	INVOCATION_TIMEOUT_CODE,
	UNEXPECTED_ERROR_CODE,
	WORKSPACE_ERROR_CODE,
	InternalInconsistencyError,
	InterpreterNotFoundError,
	InvalidInputError,
	InvocationExitError,
	InvocationFailure,
	InvocationOverflowError,
	InvocationTimeoutError,
	TransformationError,
	WorkspaceError,
)
from .interfaces import (
	InterpreterResolutionStrategy,
	InterpreterResolverPort,
	InvocationResult,
	TransformationInvokerPort,
	WorkspaceArtifacts,
	WorkspacePort,
)
from .interpreter import (
	INTERPRETER_NOT_FOUND_MESSAGE,
	CommandProbeStrategy,
	FilesystemSearchStrategy,
	InterpreterCache,
	InterpreterResolver,
	process_interpreter_cache,
)
from .invoker import SubprocessTransformationInvoker
from .workspace import TempWorkspaceManager

__all__ = [
	"CommandProbeStrategy",
	"FilesystemSearchStrategy",
	"INTERNAL_INCONSISTENCY_CODE",
	"INTERPRETER_NOT_FOUND_CODE",
	"INTERPRETER_NOT_FOUND_MESSAGE",
	"INVALID_INPUT_CODE",
	"INVOCATION_EXIT_CODE",
	"INVOCATION_OVERFLOW_CODE",
	"INVOCATION_TIMEOUT_CODE",
	"InternalInconsistencyError",
	"InterpreterCache",
	"InterpreterNotFoundError",
	"InterpreterResolutionStrategy",
	"InterpreterResolver",
	"InterpreterResolverPort",
	"InvalidInputError",
	"InvocationExitError",
	"InvocationFailure",
	"InvocationOverflowError",
	"InvocationResult",
	"InvocationTimeoutError",
	"SubprocessTransformationInvoker",
	"TempWorkspaceManager",
	"TransformationError",
	"TransformationInvokerPort",
	"UNEXPECTED_ERROR_CODE",
	"WORKSPACE_ERROR_CODE",
	"WorkspaceArtifacts",
	"WorkspaceError",
	"WorkspacePort",
	"process_interpreter_cache",
]
