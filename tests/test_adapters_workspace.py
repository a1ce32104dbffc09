"""Regression tests for scratch workspace allocation and release."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from obfuscator.adapters import TempWorkspaceManager, WorkspaceError


def test_adapters_workspace_ensure_is_idempotent(tmp_path: Path) -> None:
    """Create the directory once and accept an existing directory afterwards.

    Args:
        tmp_path: Pytest temporary directory fixture.

    Returns:
        None: Assertions validate idempotent creation.

    Raises:
        AssertionError: Raised when repeated creation fails.
    """

    manager = TempWorkspaceManager(workspace_dir=tmp_path / "nested" / "temp")

    manager.workspace_ensure()
    manager.workspace_ensure()

    assert (tmp_path / "nested" / "temp").is_dir()


def test_adapters_workspace_ensure_raises_for_unrelated_filesystem_error(tmp_path: Path) -> None:
    blocking_file = tmp_path / "temp"
    blocking_file.write_text("not a directory", encoding="utf-8")
    manager = TempWorkspaceManager(workspace_dir=blocking_file)

    with pytest.raises(WorkspaceError, match="cannot create workspace directory"):
        manager.workspace_ensure()


def test_adapters_workspace_allocate_embeds_job_id_and_output_suffix(workspace: TempWorkspaceManager) -> None:
    """Derive both artifact names from the job id with the obfuscator suffix.

    Args:
        workspace: Workspace fixture.

    Returns:
        None: Assertions validate naming convention.

    Raises:
        AssertionError: Raised when names deviate from the convention.
    """

    artifacts = workspace.workspace_allocate("0b4f5c3e")

    assert artifacts.job_id == "0b4f5c3e"
    assert artifacts.input_path == workspace.workspace_dir / "input_0b4f5c3e.lua"
    assert artifacts.output_path == workspace.workspace_dir / "input_0b4f5c3e.obfuscated.lua"
    assert not artifacts.input_path.exists()


@pytest.mark.parametrize("job_id", ["", "   ", "../escape", "a\\b"])
def test_adapters_workspace_allocate_rejects_unsafe_job_ids(workspace: TempWorkspaceManager, job_id: str) -> None:
    with pytest.raises(ValueError):
        workspace.workspace_allocate(job_id)


def test_adapters_workspace_write_and_read_round_trip_text(workspace: TempWorkspaceManager) -> None:
    artifacts = workspace.workspace_allocate("job-1")

    workspace.workspace_write_input(artifacts, "print('héllo')")
    artifacts.output_path.write_text("local a = 1", encoding="utf-8")

    assert artifacts.input_path.read_text(encoding="utf-8") == "print('héllo')"
    assert workspace.workspace_read_output(artifacts) == "local a = 1"


def test_adapters_workspace_read_missing_output_raises(workspace: TempWorkspaceManager) -> None:
    artifacts = workspace.workspace_allocate("job-2")

    with pytest.raises(WorkspaceError, match="cannot read output artifact"):
        workspace.workspace_read_output(artifacts)


def test_adapters_workspace_release_tolerates_missing_files(workspace: TempWorkspaceManager) -> None:
    """Release artifacts that were never produced without raising.

    Args:
        workspace: Workspace fixture.

    Returns:
        None: Assertions validate best-effort release.

    Raises:
        AssertionError: Raised when release fails or leaves files behind.
    """

    artifacts = workspace.workspace_allocate("job-3")
    workspace.workspace_write_input(artifacts, "print(1)")

    workspace.workspace_release(artifacts)
    workspace.workspace_release(artifacts)

    assert workspace.workspace_list() == []


def test_adapters_workspace_release_logs_and_swallows_other_errors(
    workspace: TempWorkspaceManager,
    monkeypatch: pytest.MonkeyPatch,
    caplog: pytest.LogCaptureFixture,
) -> None:
    """Log deletion errors other than missing files instead of raising.

    Args:
        workspace: Workspace fixture.
        monkeypatch: Pytest monkeypatch fixture.
        caplog: Pytest log capture fixture.

    Returns:
        None: Assertions validate non-fatal cleanup.

    Raises:
        AssertionError: Raised when a cleanup error escapes.
    """

    artifacts = workspace.workspace_allocate("job-4")
    workspace.workspace_write_input(artifacts, "print(1)")

    def _deny_unlink(self: Path, missing_ok: bool = False) -> None:
        _ = missing_ok
        raise PermissionError(f"permission denied: {self.name}")

    monkeypatch.setattr(Path, "unlink", _deny_unlink)

    with caplog.at_level(logging.WARNING, logger="obfuscator.adapters.workspace"):
        workspace.workspace_release(artifacts)

    assert "event=workspace_release_failed" in caplog.text
    assert "job_id=job-4" in caplog.text


def test_adapters_workspace_session_releases_on_exception(workspace: TempWorkspaceManager) -> None:
    """Remove both artifacts when the scoped block raises.

    Args:
        workspace: Workspace fixture.

    Returns:
        None: Assertions validate scoped release.

    Raises:
        AssertionError: Raised when artifacts outlive the session.
    """

    with pytest.raises(RuntimeError, match="boom"):
        with workspace.workspace_session("job-5") as artifacts:
            workspace.workspace_write_input(artifacts, "print(1)")
            artifacts.output_path.write_text("out", encoding="utf-8")
            raise RuntimeError("boom")

    assert not artifacts.input_path.exists()
    assert not artifacts.output_path.exists()
    assert workspace.workspace_list() == []
