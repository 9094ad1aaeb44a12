"""Visibility resolver — decides which settings are active at a form tier.

Pure functions over the static tables in :mod:`registry`. Tiers form a fixed
chain essential < enhanced < advanced; a field is visible when the current
tier is at or above the field's required tier.
"""

from __future__ import annotations

from typing import Union

from curriculum_settings.domain.models.enums import FormComplexity
from curriculum_settings.domain.models.settings import ContentDefaults
from curriculum_settings.domain.rules.registry import (
    GATED_FEATURES,
    OPTION_GROUP_FLAGS,
    required_tier,
)

TierLike = Union[FormComplexity, str]

_TIER_SUMMARIES: dict[FormComplexity, str] = {
    FormComplexity.ESSENTIAL: (
        "Showing only core settings for quick setup. "
        "Switch to Enhanced or Advanced for more options."
    ),
    FormComplexity.ENHANCED: (
        "Showing additional configuration options. "
        "Switch to Advanced for power user features."
    ),
    FormComplexity.ADVANCED: "Showing all available options and power user features.",
}


def _tier(value: TierLike) -> FormComplexity:
    # ValueError for anything outside the chain
    return value if isinstance(value, FormComplexity) else FormComplexity(value)


def is_visible(required: TierLike, current: TierLike) -> bool:
    """Return ``True`` when *current* is at or above *required*."""
    return _tier(current).ordinal >= _tier(required).ordinal


def is_field_visible(field: str, current: TierLike) -> bool:
    """Return whether the dotted *field* key is shown at *current*."""
    return is_visible(required_tier(field), current)


def is_field_active(field: str, current: TierLike, defaults: ContentDefaults) -> bool:
    """Return whether *field* is visible at *current* and meaningful for *defaults*.

    Sub-fields of an option group are only meaningful while the group's
    owning ``include_*`` flag is on, regardless of tier.
    """
    if not is_field_visible(field, current):
        return False
    parts = field.split(".")
    if len(parts) == 3 and parts[0] == "defaults" and parts[1] in OPTION_GROUP_FLAGS:
        return bool(getattr(defaults, OPTION_GROUP_FLAGS[parts[1]]))
    return True


def hidden_feature_names(current: TierLike) -> list[str]:
    """Return labels of the features suppressed at *current*.

    Enhanced-gated features come first, then advanced-gated ones, each in
    declaration order. Empty at ``advanced``.
    """
    tier = _tier(current)
    ordered = sorted(GATED_FEATURES, key=lambda f: f.tier.ordinal)
    return [f.label for f in ordered if not is_visible(f.tier, tier)]


def tier_summary(current: TierLike) -> str:
    """Return the one-line description shown for *current*."""
    return _TIER_SUMMARIES[_tier(current)]
