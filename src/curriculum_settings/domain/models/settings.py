"""Settings aggregate for the curriculum content generator.

This module defines the ``Settings`` Pydantic model and its domains: the
teaching ``Profile``, the ``ContentDefaults`` used when generating material,
the ``UIPreferences`` of the settings form, and the ``AdvancedSettings``
extension block filled in by the AI wizard and the template editor.

Python attributes are snake_case; the transport encoding uses the camelCase
names of the original tool so that exported files stay interchangeable.
Enum-typed fields are permissive: an unrecognised string is stored verbatim
rather than rejected.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from curriculum_settings.domain.models.enums import (
    AIIntegrationPreference,
    ContentComplexity,
    ContentType,
    EducationLevel,
    FormComplexity,
    TeachingStyle,
)


class _CamelModel(BaseModel):
    """Base for every settings model: camelCase aliases, names accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Profile
# ---------------------------------------------------------------------------


class Profile(_CamelModel):
    """Who the user is and how they teach."""

    name: str = Field(default="", description="Display name.")
    email: Optional[str] = Field(default=None, description="Contact email.")
    institution: Optional[str] = Field(default=None, description="School or organisation.")
    subject: str = Field(default="", description="Primary subject taught.")
    level: Union[EducationLevel, str] = Field(
        default=EducationLevel.COLLEGE,
        union_mode="left_to_right",
        description="Education level taught.",
    )
    teaching_style: Union[TeachingStyle, str] = Field(
        default=TeachingStyle.MIXED_APPROACH,
        union_mode="left_to_right",
        description="Preferred pedagogical approach.",
    )
    ai_preference: Union[AIIntegrationPreference, str] = Field(
        default=AIIntegrationPreference.CONTEXT_DEPENDENT,
        union_mode="left_to_right",
        description="How AI is integrated into generated content.",
    )


# ---------------------------------------------------------------------------
# Content defaults and their option groups
# ---------------------------------------------------------------------------


class AnswerKeyOptions(_CamelModel):
    """Detail options for generated answer keys."""

    include_explanations: bool = True
    include_difficulty: bool = True
    include_points: bool = False


class InstructorGuideOptions(_CamelModel):
    """Detail options for generated instructor guides."""

    include_timing: bool = True
    include_grading_tips: bool = True
    include_discussion_prompts: bool = False
    include_extensions: bool = False


class ContentDefaults(_CamelModel):
    """Defaults applied to every content-generation request.

    ``answer_key_options`` and ``instructor_guide_options`` stay ``None`` until
    first written, and keep their values when the owning ``include_*`` flag is
    switched off.
    """

    duration: str = Field(default="50 minutes", description="Session length.")
    complexity: Union[ContentComplexity, str] = Field(
        default=ContentComplexity.INTERMEDIATE,
        union_mode="left_to_right",
    )
    content_types: list[str] = Field(
        default_factory=lambda: [ContentType.SLIDES.value, ContentType.INSTRUCTOR_NOTES.value],
        description="Content types generated by default (built-in or custom).",
    )
    include_answer_keys: bool = True
    include_instructor_guides: bool = True
    include_rubrics: bool = False
    include_accessibility_features: bool = False
    answer_key_options: Optional[AnswerKeyOptions] = None
    instructor_guide_options: Optional[InstructorGuideOptions] = None


# ---------------------------------------------------------------------------
# UI preferences
# ---------------------------------------------------------------------------


class UIPreferences(_CamelModel):
    """Presentation preferences of the settings form."""

    form_complexity: Union[FormComplexity, str] = Field(
        default=FormComplexity.ESSENTIAL,
        union_mode="left_to_right",
        description="Tier gating which fields are shown.",
    )
    show_advanced_options: bool = False
    auto_save_settings: bool = True
    use_settings_by_default: bool = True


# ---------------------------------------------------------------------------
# Advanced extension block
# ---------------------------------------------------------------------------


class AICustomizationSettings(_CamelModel):
    """Result of the AI-integration wizard.

    The wizard owns this structure; unknown keys are kept as-is.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    preference: Union[AIIntegrationPreference, str] = Field(
        default=AIIntegrationPreference.CONTEXT_DEPENDENT,
        union_mode="left_to_right",
    )
    content_type_settings: dict[str, Any] = Field(default_factory=dict)
    custom_prompts: dict[str, str] = Field(default_factory=dict)


class CustomTemplate(_CamelModel):
    """A user-defined template produced by the template editor."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="allow")

    id: str
    name: str
    content_type: str
    content: str = ""
    description: str = ""
    variables: list[str] = Field(default_factory=list)


class AdvancedSettings(_CamelModel):
    """Extension data written by the advanced collaborators."""

    ai_customization: Optional[AICustomizationSettings] = None
    custom_templates: list[CustomTemplate] = Field(default_factory=list)
    custom_content_types: list[str] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Collaborator payloads
# ---------------------------------------------------------------------------


class TeachingStyleDetectionResult(_CamelModel):
    """Outcome of the teaching-style questionnaire."""

    primary_style: Union[TeachingStyle, str] = Field(union_mode="left_to_right")
    secondary_style: Optional[Union[TeachingStyle, str]] = Field(
        default=None, union_mode="left_to_right"
    )
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    scores: dict[str, float] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Root settings model
# ---------------------------------------------------------------------------


class Settings(_CamelModel):
    """Root settings aggregate — the unit of persistence and export/import."""

    profile: Profile = Field(default_factory=Profile)
    defaults: ContentDefaults = Field(default_factory=ContentDefaults)
    preferences: UIPreferences = Field(default_factory=UIPreferences)
    advanced: AdvancedSettings = Field(default_factory=AdvancedSettings)
