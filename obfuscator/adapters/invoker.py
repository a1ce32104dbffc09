"""Bounded subprocess invocation of the Prometheus obfuscator CLI."""

from __future__ import annotations

import logging
import os
import signal
import subprocess
import threading
import time
from pathlib import Path
from typing import IO, Final

from .errors import InvocationExitError, InvocationOverflowError, InvocationTimeoutError
from .interfaces import InvocationResult, TransformationInvokerPort, WorkspaceArtifacts

logger = logging.getLogger(__name__)


def _kill_process_group(process: subprocess.Popen) -> None:
    """Kill the tool and every process it spawned into its session."""

    try:
        os.killpg(process.pid, signal.SIGKILL)
    except ProcessLookupError:
        return


class _BoundedOutputCapture:
    """Collect stdout and stderr chunks under one combined byte cap.

    Attributes:
        overflowed: Whether the combined output exceeded the cap.
    """

    _CHUNK_SIZE: Final[int] = 64 * 1024

    def __init__(self, max_output_bytes: int, process: subprocess.Popen):
        self._max_output_bytes = max_output_bytes
        self._process = process
        self._lock = threading.Lock()
        self._captured_bytes = 0
        self._chunks: dict[str, list[bytes]] = {"stdout": [], "stderr": []}
        self.overflowed = False

    def capture_drain(self, stream: IO[bytes], stream_name: str) -> None:
        """Read one pipe to EOF, killing the process once the cap is exceeded."""

        try:
            while True:
                chunk = stream.read1(self._CHUNK_SIZE)
                if not chunk:
                    break
                with self._lock:
                    if self.overflowed:
                        continue
                    self._captured_bytes += len(chunk)
                    if self._captured_bytes > self._max_output_bytes:
                        self.overflowed = True
                        _kill_process_group(self._process)
                        continue
                    self._chunks[stream_name].append(chunk)
        finally:
            stream.close()

    def capture_text(self, stream_name: str) -> str:
        with self._lock:
            return b"".join(self._chunks[stream_name]).decode("utf-8", errors="replace")


class SubprocessTransformationInvoker(TransformationInvokerPort):
    """Run `<interpreter> <entry_point> --preset <preset> <input>` inside the tool root."""

    _READER_JOIN_TIMEOUT_SECONDS: Final[float] = 5.0

    def __init__(
        self,
        tool_root: str | Path,
        entry_point: str = "cli.lua",
        timeout_seconds: float = 120.0,
        max_output_bytes: int = 50 * 1024 * 1024,
    ):
        """Initialize subprocess invoker.

        Args:
            tool_root: Obfuscator installation root, used as the working directory.
            entry_point: CLI script, relative to tool_root unless absolute.
            timeout_seconds: Wall-clock bound for one run.
            max_output_bytes: Combined stdout/stderr cap for one run.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when config values are invalid.
        """

        if not str(tool_root).strip():
            raise ValueError("tool_root must not be blank")
        if not entry_point.strip():
            raise ValueError("entry_point must not be blank")
        if timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")
        if max_output_bytes < 1:
            raise ValueError("max_output_bytes must be >= 1")

        self._tool_root = Path(tool_root).resolve()
        self._entry_point = self._tool_root / entry_point.strip()
        self._timeout_seconds = timeout_seconds
        self._max_output_bytes = max_output_bytes

    def invoker_build_command(self, interpreter_path: str, tool_preset: str, artifacts: WorkspaceArtifacts) -> list[str]:
        """Build the argument vector for one run.

        Args:
            interpreter_path: Resolved interpreter executable.
            tool_preset: Native obfuscator preset name.
            artifacts: Scratch artifacts for the job.

        Returns:
            list[str]: Argument vector, executed without a shell.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        return [
            interpreter_path,
            str(self._entry_point),
            "--preset",
            tool_preset,
            str(artifacts.input_path),
        ]

    def invoker_run(self, interpreter_path: str, tool_preset: str, artifacts: WorkspaceArtifacts) -> InvocationResult:
        """Run one bounded obfuscator subprocess.

        Args:
            interpreter_path: Resolved interpreter executable.
            tool_preset: Native obfuscator preset name.
            artifacts: Scratch artifacts for the job.

        Returns:
            InvocationResult: Captured output of a zero-exit run.

        Raises:
            InvocationTimeoutError: Raised when the run exceeds the timeout.
            InvocationOverflowError: Raised when combined output exceeds the cap.
            InvocationExitError: Raised on nonzero exit or when the process cannot start.
        """

        command = self.invoker_build_command(interpreter_path, tool_preset, artifacts)
        started_at = time.monotonic()
        try:
            process = subprocess.Popen(
                command,
                cwd=self._tool_root,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                start_new_session=True,
            )
        except OSError as error:
            raise InvocationExitError(
                f"cannot start obfuscator: {error}",
                diagnostic=str(error),
            ) from error

        capture = _BoundedOutputCapture(max_output_bytes=self._max_output_bytes, process=process)
        readers = [
            threading.Thread(target=capture.capture_drain, args=(process.stdout, "stdout"), daemon=True),
            threading.Thread(target=capture.capture_drain, args=(process.stderr, "stderr"), daemon=True),
        ]
        for reader in readers:
            reader.start()

        try:
            exit_code = process.wait(timeout=self._timeout_seconds)
        except subprocess.TimeoutExpired as error:
            _kill_process_group(process)
            process.wait()
            self._invoker_join_readers(readers)
            logger.warning(
                "event=invocation_timeout job_id=%s timeout_seconds=%s",
                artifacts.job_id,
                self._timeout_seconds,
            )
            raise InvocationTimeoutError(
                f"obfuscator timed out after {self._timeout_seconds:g} seconds",
                diagnostic=capture.capture_text("stderr"),
            ) from error

        self._invoker_join_readers(readers)
        duration_ms = max(0, int((time.monotonic() - started_at) * 1000))

        if capture.overflowed:
            logger.warning(
                "event=invocation_overflow job_id=%s max_output_bytes=%s",
                artifacts.job_id,
                self._max_output_bytes,
            )
            raise InvocationOverflowError(
                f"obfuscator output exceeded {self._max_output_bytes} bytes",
                diagnostic=capture.capture_text("stderr"),
            )

        stderr_text = capture.capture_text("stderr")
        if exit_code != 0:
            raise InvocationExitError(
                stderr_text.strip() or f"obfuscator exited with status {exit_code}",
                diagnostic=stderr_text,
                exit_code=exit_code,
            )

        return InvocationResult(
            exit_code=exit_code,
            stdout_text=capture.capture_text("stdout"),
            stderr_text=stderr_text,
            duration_ms=duration_ms,
        )

    def _invoker_join_readers(self, readers: list[threading.Thread]) -> None:
        for reader in readers:
            reader.join(timeout=self._READER_JOIN_TIMEOUT_SECONDS)
