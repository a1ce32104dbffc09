"""Lua interpreter discovery with ordered strategies and a process-wide cache."""

from __future__ import annotations

import logging
import os
import subprocess
import time
from pathlib import Path
from typing import Callable, Final, Sequence

from .errors import InterpreterNotFoundError
from .interfaces import InterpreterResolutionStrategy, InterpreterResolverPort

logger = logging.getLogger(__name__)

INTERPRETER_NOT_FOUND_MESSAGE: Final[str] = "Lua interpreter not found. Please ensure Lua 5.1 is installed."


class CommandProbeStrategy(InterpreterResolutionStrategy):
    """Accept the first candidate command that runs a version probe cleanly."""

    def __init__(
        self,
        candidates: Sequence[str],
        probe_arguments: Sequence[str] = ("-v",),
        probe_timeout_seconds: float = 5.0,
    ):
        """Initialize command probe strategy.

        Args:
            candidates: Ordered command names or absolute paths.
            probe_arguments: Arguments for the trivial version probe.
            probe_timeout_seconds: Timeout for one candidate probe.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when timeout is not positive.
        """

        if probe_timeout_seconds <= 0:
            raise ValueError("probe_timeout_seconds must be > 0")

        self._candidates = tuple(candidates)
        self._probe_arguments = tuple(probe_arguments)
        self._probe_timeout_seconds = probe_timeout_seconds

    def strategy_name(self) -> str:
        return "command_probe"

    def strategy_find(self) -> str | None:
        for candidate in self._candidates:
            if self._strategy_probe(candidate):
                return candidate
        return None

    def _strategy_probe(self, candidate: str) -> bool:
        """Run the version probe for one candidate.

        Args:
            candidate: Command name or path.

        Returns:
            bool: Whether the probe exited zero within the timeout.

        Raises:
            RuntimeError: This helper does not raise runtime errors.
        """

        try:
            completed = subprocess.run(
                [candidate, *self._probe_arguments],
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
                timeout=self._probe_timeout_seconds,
                check=False,
            )
        except subprocess.TimeoutExpired:
            logger.debug("event=interpreter_probe_timeout candidate=%s", candidate)
            return False
        except OSError as error:
            logger.debug("event=interpreter_probe_unavailable candidate=%s error=%s", candidate, error)
            return False
        return completed.returncode == 0


class FilesystemSearchStrategy(InterpreterResolutionStrategy):
    """Search a package store for an interpreter binary carrying a version tag."""

    def __init__(
        self,
        search_root: str | Path,
        binary_name: str = "lua",
        version_tag: str = "lua-5.1",
        search_timeout_seconds: float = 10.0,
        monotonic_clock: Callable[[], float] | None = None,
    ):
        """Initialize filesystem search strategy.

        Args:
            search_root: Directory the search is rooted at.
            binary_name: Exact file name to match.
            version_tag: Fragment the full match path must contain.
            search_timeout_seconds: Overall search bound.
            monotonic_clock: Optional clock override for deterministic tests.

        Returns:
            None: Initializer does not return a value.

        Raises:
            ValueError: Raised when config values are invalid.
        """

        if not binary_name.strip():
            raise ValueError("binary_name must not be blank")
        if search_timeout_seconds < 0:
            raise ValueError("search_timeout_seconds must be >= 0")

        self._search_root = Path(search_root)
        self._binary_name = binary_name.strip()
        self._version_tag = version_tag
        self._search_timeout_seconds = search_timeout_seconds
        self._monotonic_clock = monotonic_clock or time.monotonic

    def strategy_name(self) -> str:
        return "filesystem_search"

    def strategy_find(self) -> str | None:
        """Walk the search root in sorted order and return the first match.

        Returns:
            str | None: Matching file path, or `None` when nothing matches in time.

        Raises:
            RuntimeError: This implementation does not raise runtime errors.
        """

        if not self._search_root.is_dir():
            return None

        deadline = self._monotonic_clock() + self._search_timeout_seconds
        for directory_path, directory_names, file_names in os.walk(self._search_root):
            if self._monotonic_clock() >= deadline:
                logger.warning(
                    "event=interpreter_search_timeout root=%s timeout_seconds=%s",
                    self._search_root,
                    self._search_timeout_seconds,
                )
                return None
            directory_names.sort()
            if self._binary_name not in file_names:
                continue
            candidate_path = os.path.join(directory_path, self._binary_name)
            if self._version_tag in candidate_path and os.path.isfile(candidate_path):
                return candidate_path
        return None


class InterpreterResolver(InterpreterResolverPort):
    """Try each resolution strategy in order until one yields an interpreter."""

    def __init__(self, strategies: Sequence[InterpreterResolutionStrategy]):
        if not strategies:
            raise ValueError("strategies must not be empty")
        self._strategies = tuple(strategies)

    def resolver_resolve(self) -> str:
        """Resolve an interpreter path by trying each strategy in order.

        Returns:
            str: Executable interpreter path or command name.

        Raises:
            InterpreterNotFoundError: Raised when every strategy fails.
        """

        for strategy in self._strategies:
            interpreter_path = strategy.strategy_find()
            if interpreter_path:
                logger.info(
                    "event=interpreter_resolved strategy=%s path=%s",
                    strategy.strategy_name(),
                    interpreter_path,
                )
                return interpreter_path
            logger.debug("event=interpreter_strategy_exhausted strategy=%s", strategy.strategy_name())
        raise InterpreterNotFoundError(INTERPRETER_NOT_FOUND_MESSAGE)


class InterpreterCache:
    """Process-wide slot holding the resolved interpreter path.

    The slot is empty until a resolve succeeds and is never invalidated
    afterwards. Concurrent jobs may race to populate it; every writer stores
    an equivalent path, so reads and writes are not synchronized.
    """

    def __init__(self) -> None:
        self._interpreter_path: str | None = None

    def cache_peek(self) -> str | None:
        """Return the cached path without resolving."""

        return self._interpreter_path

    def cache_is_populated(self) -> bool:
        return self._interpreter_path is not None

    def cache_get_or_resolve(self, resolver: InterpreterResolverPort) -> str:
        """Return the cached interpreter path, resolving it when the slot is empty.

        Args:
            resolver: Resolver used only when the slot is empty.

        Returns:
            str: Interpreter path.

        Raises:
            InterpreterNotFoundError: Raised when the slot is empty and resolution fails.
        """

        cached_path = self._interpreter_path
        if cached_path is not None:
            return cached_path

        resolved_path = resolver.resolver_resolve()
        self._interpreter_path = resolved_path
        return resolved_path

    def cache_clear(self) -> None:
        """Empty the slot. Used by tests and explicit operator resets."""

        self._interpreter_path = None


process_interpreter_cache = InterpreterCache()
