"""Protection tier vocabulary and the fixed mapping onto obfuscator presets."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Final


class ProtectionTier(str, Enum):
    """Caller-facing protection tiers ordered weakest to strongest."""

    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"
    MAXIMUM = "Maximum"


class ToolPreset(str, Enum):
    """Preset names understood by the Prometheus obfuscator CLI."""

    WEAK = "Weak"
    MEDIUM = "Medium"
    STRONG = "Strong"


DEFAULT_PROTECTION_TIER: Final[ProtectionTier] = ProtectionTier.STRONG

# Maximum has no stronger native preset and shares Strong.
TIER_TO_TOOL_PRESET: Final[dict[ProtectionTier, ToolPreset]] = {
    ProtectionTier.WEAK: ToolPreset.WEAK,
    ProtectionTier.MEDIUM: ToolPreset.MEDIUM,
    ProtectionTier.STRONG: ToolPreset.STRONG,
    ProtectionTier.MAXIMUM: ToolPreset.STRONG,
}


@dataclass(frozen=True)
class NormalizedPreset:
    """Accepted protection tier and the obfuscator preset it maps to.

    Attributes:
        tier: Effective caller-facing tier.
        tool_preset: Native obfuscator preset passed on the command line.
    """

    tier: ProtectionTier
    tool_preset: ToolPreset


def domain_normalize_preset(candidate: object) -> NormalizedPreset:
    """Accept a known tier or fall back to the default, then map it.

    Matching is exact and case-sensitive. Unknown strings, `None` and
    non-string values all resolve to `DEFAULT_PROTECTION_TIER`.

    Args:
        candidate: Raw tier value supplied by the caller.

    Returns:
        NormalizedPreset: Effective tier and native preset.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    tier = DEFAULT_PROTECTION_TIER
    if isinstance(candidate, str):
        for known_tier in ProtectionTier:
            if known_tier.value == candidate:
                tier = known_tier
                break
    return NormalizedPreset(tier=tier, tool_preset=TIER_TO_TOOL_PRESET[tier])
