"""Shared scratch directory and per-job artifact lifecycle."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Final, Iterator

from .errors import WorkspaceError
from .interfaces import WorkspaceArtifacts, WorkspacePort

logger = logging.getLogger(__name__)


class TempWorkspaceManager(WorkspacePort):
    """Allocate, read and release per-job scratch files in one shared directory.

    Artifact names embed the job id, so concurrent jobs never share a path
    and no locking is needed.
    """

    _INPUT_PREFIX: Final[str] = "input_"
    _SOURCE_SUFFIX: Final[str] = ".lua"
    _OUTPUT_SUFFIX: Final[str] = ".obfuscated.lua"

    def __init__(self, workspace_dir: str | Path):
        """Initialize workspace manager.

        Args:
            workspace_dir: Shared scratch directory path.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when workspace_dir is blank.
        """

        if not str(workspace_dir).strip():
            raise ValueError("workspace_dir must not be blank")
        self._workspace_dir = Path(workspace_dir).resolve()

    @property
    def workspace_dir(self) -> Path:
        return self._workspace_dir

    def workspace_ensure(self) -> None:
        """Create the scratch directory; an existing directory is success.

        Returns:
            None: Directory is created as side effect.

        Raises:
            WorkspaceError: Raised for filesystem errors other than "already exists".
        """

        try:
            self._workspace_dir.mkdir(parents=True, exist_ok=True)
        except OSError as error:
            raise WorkspaceError(f"cannot create workspace directory {self._workspace_dir}: {error}") from error

    def workspace_allocate(self, job_id: str) -> WorkspaceArtifacts:
        """Derive the input/output artifact pair for one job.

        The output name follows the obfuscator's convention of replacing the
        `.lua` suffix with `.obfuscated.lua`.

        Args:
            job_id: Collision-resistant job identifier.

        Returns:
            WorkspaceArtifacts: Artifact paths, not yet created on disk.

        Raises:
            ValueError: Raised when job_id is blank or contains a path separator.
        """

        normalized_job_id = job_id.strip()
        if not normalized_job_id:
            raise ValueError("job_id must not be blank")
        if "/" in normalized_job_id or "\\" in normalized_job_id:
            raise ValueError("job_id must not contain path separators")

        stem = f"{self._INPUT_PREFIX}{normalized_job_id}"
        return WorkspaceArtifacts(
            job_id=normalized_job_id,
            input_path=self._workspace_dir / f"{stem}{self._SOURCE_SUFFIX}",
            output_path=self._workspace_dir / f"{stem}{self._OUTPUT_SUFFIX}",
        )

    def workspace_write_input(self, artifacts: WorkspaceArtifacts, source_text: str) -> None:
        try:
            artifacts.input_path.write_text(source_text, encoding="utf-8")
        except OSError as error:
            raise WorkspaceError(f"cannot write input artifact {artifacts.input_path.name}: {error}") from error

    def workspace_read_output(self, artifacts: WorkspaceArtifacts) -> str:
        """Read the obfuscator output artifact as UTF-8 text.

        Args:
            artifacts: Job artifact pair.

        Returns:
            str: Output artifact contents.

        Raises:
            WorkspaceError: Raised when the artifact is missing or cannot be decoded.
        """

        try:
            return artifacts.output_path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as error:
            raise WorkspaceError(f"cannot read output artifact {artifacts.output_path.name}: {error}") from error

    def workspace_release(self, artifacts: WorkspaceArtifacts) -> None:
        """Delete both artifacts without ever failing the job.

        Missing files are expected (never produced, or already removed).
        Any other deletion error is logged and swallowed so it cannot mask
        the job's real outcome.

        Args:
            artifacts: Job artifact pair.

        Returns:
            None: Files are removed as side effect.

        Raises:
            RuntimeError: This method does not raise runtime errors.
        """

        for artifact_path in (artifacts.input_path, artifacts.output_path):
            try:
                artifact_path.unlink()
            except FileNotFoundError:
                continue
            except OSError as error:
                logger.warning(
                    "event=workspace_release_failed job_id=%s path=%s error=%s",
                    artifacts.job_id,
                    artifact_path,
                    error,
                )

    @contextmanager
    def workspace_session(self, job_id: str) -> Iterator[WorkspaceArtifacts]:
        """Allocate artifacts for one job and release them exactly once on exit.

        Args:
            job_id: Collision-resistant job identifier.

        Yields:
            WorkspaceArtifacts: Artifact pair owned by the job.

        Raises:
            ValueError: Raised when job_id is invalid.
        """

        artifacts = self.workspace_allocate(job_id)
        try:
            yield artifacts
        finally:
            self.workspace_release(artifacts)

    def workspace_list(self) -> list[Path]:
        """Return artifacts currently present in the scratch directory."""

        if not self._workspace_dir.is_dir():
            return []
        return sorted(path for path in self._workspace_dir.iterdir() if path.is_file())
