"""Option registry — static tables of valid values and required tiers.

Every user-settable field is addressed by a dotted key
``<domain>.<field>[.<subfield>]`` where ``<domain>`` is one of ``profile``,
``defaults``, ``preferences`` or ``tools`` (entry points to collaborators).
Fields not listed in ``FIELD_TIERS`` are visible at every tier.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel

from curriculum_settings.domain.models.enums import (
    AIIntegrationPreference,
    ContentComplexity,
    ContentType,
    EducationLevel,
    FormComplexity,
    TeachingStyle,
)
from curriculum_settings.domain.models.settings import (
    AnswerKeyOptions,
    ContentDefaults,
    InstructorGuideOptions,
    Profile,
    UIPreferences,
)

# ---------------------------------------------------------------------------
# Value Objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class GatedFeature:
    """A user-facing feature hidden below ``tier``."""

    label: str
    tier: FormComplexity


# ---------------------------------------------------------------------------
# Valid values
# ---------------------------------------------------------------------------

DURATION_OPTIONS: tuple[str, ...] = (
    "30 minutes",
    "50 minutes",
    "75 minutes",
    "90 minutes",
    "2 hours",
    "3 hours",
)

BUILTIN_CONTENT_TYPES: tuple[str, ...] = tuple(ct.value for ct in ContentType)

DOMAIN_MODELS: dict[str, type[BaseModel]] = {
    "profile": Profile,
    "defaults": ContentDefaults,
    "preferences": UIPreferences,
}

# Fields whose value must come from a fixed set
FIELD_CHOICES: dict[str, tuple[str, ...]] = {
    "profile.level": tuple(e.value for e in EducationLevel),
    "profile.teaching_style": tuple(e.value for e in TeachingStyle),
    "profile.ai_preference": tuple(e.value for e in AIIntegrationPreference),
    "defaults.duration": DURATION_OPTIONS,
    "defaults.complexity": tuple(e.value for e in ContentComplexity),
    "preferences.form_complexity": tuple(e.value for e in FormComplexity),
}

# ---------------------------------------------------------------------------
# Required tiers
# ---------------------------------------------------------------------------

FIELD_TIERS: dict[str, FormComplexity] = {
    "profile.email": FormComplexity.ENHANCED,
    "profile.institution": FormComplexity.ENHANCED,
    "profile.ai_preference": FormComplexity.ENHANCED,
    "defaults.answer_key_options.include_explanations": FormComplexity.ENHANCED,
    "defaults.answer_key_options.include_difficulty": FormComplexity.ENHANCED,
    "defaults.answer_key_options.include_points": FormComplexity.ADVANCED,
    "defaults.instructor_guide_options.include_timing": FormComplexity.ENHANCED,
    "defaults.instructor_guide_options.include_grading_tips": FormComplexity.ENHANCED,
    "defaults.instructor_guide_options.include_discussion_prompts": FormComplexity.ADVANCED,
    "defaults.instructor_guide_options.include_extensions": FormComplexity.ADVANCED,
    "tools.ai_configuration_wizard": FormComplexity.ENHANCED,
    "tools.template_editor": FormComplexity.ADVANCED,
    "tools.learning_insights": FormComplexity.ADVANCED,
}

# Declaration order is display order within each tier
GATED_FEATURES: tuple[GatedFeature, ...] = (
    GatedFeature("Email & Institution settings", FormComplexity.ENHANCED),
    GatedFeature("AI Integration preferences", FormComplexity.ENHANCED),
    GatedFeature("Detailed answer key options", FormComplexity.ENHANCED),
    GatedFeature("Instructor guide options", FormComplexity.ENHANCED),
    GatedFeature("AI Configuration wizard", FormComplexity.ENHANCED),
    GatedFeature("Point value suggestions", FormComplexity.ADVANCED),
    GatedFeature("Discussion prompts & extensions", FormComplexity.ADVANCED),
    GatedFeature("Advanced Template Editor", FormComplexity.ADVANCED),
    GatedFeature("Learning Insights dashboard", FormComplexity.ADVANCED),
)

# ---------------------------------------------------------------------------
# Option groups (deep-merged, see merge.py)
# ---------------------------------------------------------------------------

OPTION_GROUPS: dict[str, type[BaseModel]] = {
    "answer_key_options": AnswerKeyOptions,
    "instructor_guide_options": InstructorGuideOptions,
}

OPTION_GROUP_FLAGS: dict[str, str] = {
    "answer_key_options": "include_answer_keys",
    "instructor_guide_options": "include_instructor_guides",
}


def option_group_defaults(group: str) -> dict[str, Any]:
    """Return the declared defaults of an option group as a plain dict."""
    return OPTION_GROUPS[group]().model_dump()


def required_tier(field: str) -> FormComplexity:
    """Return the minimum tier at which *field* is shown (default: essential)."""
    return FIELD_TIERS.get(field, FormComplexity.ESSENTIAL)


def resolve_field_name(model: type[BaseModel], key: str) -> str | None:
    """Map a field name or its camelCase alias to the model's field name."""
    fields = model.model_fields
    if key in fields:
        return key
    for name, info in fields.items():
        if info.alias == key:
            return name
    return None


def unrecognized_values(
    domain: str,
    partial: Mapping[str, Any],
    custom_content_types: Iterable[str] = (),
) -> list[tuple[str, Any]]:
    """List ``(field, value)`` pairs of *partial* outside the registry's choices.

    Merging never validates; callers that want to warn about schema drift run
    this first. ``defaults.content_types`` entries are accepted when they are
    built-in or listed in *custom_content_types*.
    """
    known_types = set(BUILTIN_CONTENT_TYPES) | set(custom_content_types)
    model = DOMAIN_MODELS[domain]
    issues: list[tuple[str, Any]] = []
    for key, value in partial.items():
        name = resolve_field_name(model, key)
        if name is None:
            continue
        choices = FIELD_CHOICES.get(f"{domain}.{name}")
        if choices is not None:
            raw = value.value if isinstance(value, Enum) else value
            if raw not in choices:
                issues.append((name, value))
        elif domain == "defaults" and name == "content_types":
            for item in value or ():
                if item not in known_types:
                    issues.append((name, item))
    return issues
