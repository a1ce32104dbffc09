"""Typed runtime settings with dotenv support and startup validation."""

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


class AppSettings(BaseSettings):
    """Application settings for API runtime and obfuscation job configuration.

    Environment variable names map directly to field names in uppercase.
    Example: `workspace_dir` reads from `WORKSPACE_DIR`.

    Attributes:
        environment_name: Runtime environment label.
        application_host: Host interface for web server binding.
        application_port: Web server port.
        log_level: Root logger level name.
        workspace_dir: Shared scratch directory for per-job artifacts.
        tool_root: Installation root of the Prometheus obfuscator.
        tool_entry_point: Obfuscator CLI script, relative to `tool_root` unless absolute.
        interpreter_candidates: Ordered Lua command names or paths to probe.
        interpreter_probe_arguments: Arguments passed to each candidate during probing.
        interpreter_probe_timeout_seconds: Timeout for one candidate probe.
        interpreter_search_root: Package-store root for the fallback filesystem search.
        interpreter_search_binary_name: File name matched by the fallback search.
        interpreter_search_version_tag: Path fragment a search match must contain.
        interpreter_search_timeout_seconds: Overall bound for the fallback search.
        invocation_timeout_seconds: Wall-clock bound for one obfuscator run.
        invocation_max_output_bytes: Combined stdout/stderr cap for one obfuscator run.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    environment_name: str = Field(default="development")
    application_host: str = Field(default="0.0.0.0")
    application_port: int = Field(default=5000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    workspace_dir: str = Field(default="temp", min_length=1)
    tool_root: str = Field(default="prometheus-obfuscator", min_length=1)
    tool_entry_point: str = Field(default="cli.lua", min_length=1)
    interpreter_candidates: tuple[str, ...] = Field(default=("lua", "lua5.1"))
    interpreter_probe_arguments: tuple[str, ...] = Field(default=("-v",))
    interpreter_probe_timeout_seconds: float = Field(default=5.0, gt=0)
    interpreter_search_root: str = Field(default="/nix/store")
    interpreter_search_binary_name: str = Field(default="lua", min_length=1)
    interpreter_search_version_tag: str = Field(default="lua-5.1")
    interpreter_search_timeout_seconds: float = Field(default=10.0, gt=0)
    invocation_timeout_seconds: float = Field(default=120.0, gt=0)
    invocation_max_output_bytes: int = Field(default=50 * 1024 * 1024, ge=1)

    @field_validator("workspace_dir", "tool_root", "tool_entry_point", "interpreter_search_binary_name")
    @classmethod
    def _validate_non_empty_string(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("interpreter_candidates")
    @classmethod
    def _validate_candidates(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        stripped_candidates = tuple(candidate.strip() for candidate in value if candidate.strip())
        if len(stripped_candidates) != len(value):
            raise ValueError("interpreter_candidates must not contain blank entries")
        return stripped_candidates

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_level = value.strip().upper()
        if normalized_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError("log_level must be one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
        return normalized_level


def config_load_settings() -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when required settings are missing or invalid.
    """

    try:
        return AppSettings()
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
