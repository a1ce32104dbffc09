"""Application bootstrap wiring for startup validation and dependency assembly."""

import logging

from fastapi import FastAPI

from obfuscator.adapters import (
    CommandProbeStrategy,
    FilesystemSearchStrategy,
    InterpreterCache,
    InterpreterNotFoundError,
    InterpreterResolver,
    SubprocessTransformationInvoker,
    TempWorkspaceManager,
    process_interpreter_cache,
)
from obfuscator.api import create_api_application
from obfuscator.config import AppSettings, config_load_settings
from obfuscator.jobs import TransformationJobOrchestrator

logger = logging.getLogger(__name__)


def bootstrap_create_interpreter_resolver(settings: AppSettings) -> InterpreterResolver:
    """Build the ordered interpreter resolution strategies from settings.

    Args:
        settings: Validated runtime settings.

    Returns:
        InterpreterResolver: Resolver probing commands first, then searching the package store.

    Raises:
        ValueError: Raised when strategy config values are invalid.
    """

    return InterpreterResolver(
        strategies=[
            CommandProbeStrategy(
                candidates=settings.interpreter_candidates,
                probe_arguments=settings.interpreter_probe_arguments,
                probe_timeout_seconds=settings.interpreter_probe_timeout_seconds,
            ),
            FilesystemSearchStrategy(
                search_root=settings.interpreter_search_root,
                binary_name=settings.interpreter_search_binary_name,
                version_tag=settings.interpreter_search_version_tag,
                search_timeout_seconds=settings.interpreter_search_timeout_seconds,
            ),
        ]
    )


def bootstrap_create_transformation_orchestrator(
    settings: AppSettings,
    interpreter_cache: InterpreterCache | None = None,
) -> TransformationJobOrchestrator:
    """Build the obfuscation orchestrator and prepare its shared state.

    The workspace directory is created and one interpreter resolution is
    attempted. A failed resolution is logged and left for the next job to retry.

    Args:
        settings: Validated runtime settings.
        interpreter_cache: Optional cache override, defaults to the process-wide slot.

    Returns:
        TransformationJobOrchestrator: Fully wired orchestrator instance.

    Raises:
        WorkspaceError: Raised when the workspace directory cannot be created.
    """

    cache = interpreter_cache if interpreter_cache is not None else process_interpreter_cache
    resolver = bootstrap_create_interpreter_resolver(settings)
    workspace = TempWorkspaceManager(workspace_dir=settings.workspace_dir)
    workspace.workspace_ensure()
    invoker = SubprocessTransformationInvoker(
        tool_root=settings.tool_root,
        entry_point=settings.tool_entry_point,
        timeout_seconds=settings.invocation_timeout_seconds,
        max_output_bytes=settings.invocation_max_output_bytes,
    )

    try:
        interpreter_path = cache.cache_get_or_resolve(resolver)
        logger.info("event=startup_interpreter_ready path=%s", interpreter_path)
    except InterpreterNotFoundError as error:
        logger.warning("event=startup_interpreter_missing detail=%s", error)

    return TransformationJobOrchestrator(
        interpreter_resolver=resolver,
        interpreter_cache=cache,
        workspace=workspace,
        invoker=invoker,
    )


def bootstrap_create_application() -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    settings = config_load_settings()
    transformation_orchestrator = bootstrap_create_transformation_orchestrator(settings)
    return create_api_application(
        settings=settings,
        transformation_orchestrator=transformation_orchestrator,
    )
