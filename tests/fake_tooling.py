"""Fake obfuscator CLI and resolver doubles shared by pipeline tests.

The fake obfuscator is a Python script honoring the same command-line
contract as the Prometheus CLI. It is executed with `sys.executable`, so
tests do not require Lua. Markers in the submitted source select failure
modes.
"""

from __future__ import annotations

import textwrap
from pathlib import Path

from obfuscator.adapters import INTERPRETER_NOT_FOUND_MESSAGE, InterpreterNotFoundError

FAKE_TOOL_ENTRY_POINT = "cli.py"

_FAKE_TOOL_SOURCE = textwrap.dedent(
    """
    import os
    import subprocess
    import sys
    import time
    from pathlib import Path

    arguments = sys.argv[1:]
    preset = arguments[arguments.index("--preset") + 1]
    input_path = Path(arguments[-1])
    source = input_path.read_text(encoding="utf-8")
    output_path = input_path.with_name(input_path.name[: -len(".lua")] + ".obfuscated.lua")

    if "FAIL_EXIT" in source:
        sys.stderr.write("cli.lua:1: syntax error near FAIL_EXIT")
        sys.exit(3)
    if "SLEEP_FOREVER" in source:
        time.sleep(30)
    if "FLOOD_OUTPUT" in source:
        sys.stdout.write("x" * 200000)
        sys.stdout.flush()
        time.sleep(30)
    if "NO_OUTPUT" in source:
        sys.exit(0)
    if "EMPTY_OUTPUT" in source:
        output_path.write_text("", encoding="utf-8")
        sys.exit(0)
    if "SPAWN_LINGERING_CHILD" in source:
        subprocess.Popen([sys.executable, "-c", "import time; time.sleep(30)"])
        time.sleep(30)
    if "PRINT_CWD" in source:
        output_path.write_text(os.getcwd(), encoding="utf-8")
        sys.exit(0)

    output_path.write_text("--[[" + preset + "]] " + source[::-1], encoding="utf-8")
    """
)


class StaticResolver:
    """Resolver test double returning a fixed interpreter and counting calls."""

    def __init__(self, interpreter_path: str | None):
        self.interpreter_path = interpreter_path
        self.resolve_calls = 0

    def resolver_resolve(self) -> str:
        self.resolve_calls += 1
        if self.interpreter_path is None:
            raise InterpreterNotFoundError(INTERPRETER_NOT_FOUND_MESSAGE)
        return self.interpreter_path


def fake_obfuscated_text(source_text: str, tool_preset: str) -> str:
    """Return the text the fake obfuscator produces for one input."""

    return f"--[[{tool_preset}]] {source_text[::-1]}"


def write_fake_tool(tool_root: Path) -> Path:
    """Install the fake obfuscator CLI under tool_root."""

    tool_root.mkdir(parents=True, exist_ok=True)
    entry_point = tool_root / FAKE_TOOL_ENTRY_POINT
    entry_point.write_text(_FAKE_TOOL_SOURCE, encoding="utf-8")
    return entry_point
