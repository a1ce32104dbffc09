"""Domain models used across application layer boundaries."""

from .models import HealthStatus, JobResult, JobState
from .presets import (
    DEFAULT_PROTECTION_TIER,
    TIER_TO_TOOL_PRESET,
    NormalizedPreset,
    ProtectionTier,
    ToolPreset,
    domain_normalize_preset,
)
from .timeline import JobTimeline

__all__ = [
    "DEFAULT_PROTECTION_TIER",
    "HealthStatus",
    "JobResult",
    "JobState",
    "JobTimeline",
    "NormalizedPreset",
    "ProtectionTier",
    "TIER_TO_TOOL_PRESET",
    "ToolPreset",
    "domain_normalize_preset",
]
