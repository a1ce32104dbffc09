"""Shared fixtures for obfuscation pipeline tests."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

from fake_tooling import FAKE_TOOL_ENTRY_POINT, StaticResolver, write_fake_tool
from obfuscator.adapters import InterpreterCache, SubprocessTransformationInvoker, TempWorkspaceManager
from obfuscator.jobs import TransformationJobOrchestrator


@pytest.fixture
def fake_tool_root(tmp_path: Path) -> Path:
    """Create an installation root containing the fake obfuscator CLI."""

    tool_root = tmp_path / "prometheus-obfuscator"
    write_fake_tool(tool_root)
    return tool_root


@pytest.fixture
def workspace(tmp_path: Path) -> TempWorkspaceManager:
    manager = TempWorkspaceManager(workspace_dir=tmp_path / "temp")
    manager.workspace_ensure()
    return manager


@pytest.fixture
def invoker(fake_tool_root: Path) -> SubprocessTransformationInvoker:
    return SubprocessTransformationInvoker(
        tool_root=fake_tool_root,
        entry_point=FAKE_TOOL_ENTRY_POINT,
        timeout_seconds=2.0,
        max_output_bytes=64 * 1024,
    )


@pytest.fixture
def python_resolver() -> StaticResolver:
    return StaticResolver(interpreter_path=sys.executable)


@pytest.fixture
def orchestrator(
    python_resolver: StaticResolver,
    workspace: TempWorkspaceManager,
    invoker: SubprocessTransformationInvoker,
) -> TransformationJobOrchestrator:
    return TransformationJobOrchestrator(
        interpreter_resolver=python_resolver,
        interpreter_cache=InterpreterCache(),
        workspace=workspace,
        invoker=invoker,
    )
