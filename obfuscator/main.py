"""Main module entrypoint for local runtime execution.

This module validates startup configuration and either launches the FastAPI
service or runs a single obfuscation job against a file.
"""

import argparse
import sys
from pathlib import Path

import uvicorn

from obfuscator.bootstrap import bootstrap_create_application, bootstrap_create_transformation_orchestrator
from obfuscator.config import AppSettings, config_load_settings
from obfuscator.domain import DEFAULT_PROTECTION_TIER, ProtectionTier
from obfuscator.logging_config import setup_logging


def main() -> None:
    """Run selected runtime command with validated startup configuration.

    Returns:
        None: This function does not return a runtime value.

    Raises:
        SettingsLoadError: Raised when configuration validation fails.
        SystemExit: Raised with status 1 when a file obfuscation job fails.
    """

    argument_parser = argparse.ArgumentParser(description="Lua obfuscator runtime entrypoint")
    argument_parser.add_argument(
        "command",
        nargs="?",
        default="api",
        choices=("api", "obfuscate-file"),
        help="Runtime command: `api` starts server, `obfuscate-file` obfuscates one file and prints the result",
        type=str,
    )
    argument_parser.add_argument(
        "--input",
        dest="input_path",
        type=Path,
        help="Lua source file for `obfuscate-file`",
    )
    argument_parser.add_argument(
        "--preset",
        dest="preset",
        type=str,
        default=DEFAULT_PROTECTION_TIER.value,
        help=f"Protection tier for `obfuscate-file`: {', '.join(tier.value for tier in ProtectionTier)}",
    )
    parsed_arguments = argument_parser.parse_args()

    settings = config_load_settings()
    setup_logging(settings.log_level)

    if parsed_arguments.command == "obfuscate-file":
        if parsed_arguments.input_path is None:
            argument_parser.error("--input is required for `obfuscate-file`")
        main_obfuscate_file(
            settings=settings,
            input_path=parsed_arguments.input_path,
            preset=parsed_arguments.preset,
        )
        return

    application = bootstrap_create_application()
    uvicorn.run(
        application,
        host=settings.application_host,
        port=settings.application_port,
    )


def main_obfuscate_file(settings: AppSettings, input_path: Path, preset: str) -> None:
    """Obfuscate one file and print the result to stdout.

    Args:
        settings: Validated runtime settings.
        input_path: Lua source file.
        preset: Caller-facing protection tier.

    Returns:
        None: Prints obfuscated code to stdout as side effect.

    Raises:
        SystemExit: Raised with status 1 when the file cannot be read or the job fails.
    """

    try:
        source_text = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as error:
        print(f"cannot read {input_path}: {error}", file=sys.stderr)
        raise SystemExit(1) from error

    orchestrator = bootstrap_create_transformation_orchestrator(settings)
    job_result = orchestrator.job_submit(source_text=source_text, tier=preset)
    if not job_result.ok:
        print(job_result.message, file=sys.stderr)
        raise SystemExit(1)
    print(job_result.text)


if __name__ == "__main__":
    main()
