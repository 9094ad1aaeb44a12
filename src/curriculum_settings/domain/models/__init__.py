"""Domain models — public API.

Provides convenient imports for the settings aggregate and its enumerations.
"""

from curriculum_settings.domain.models.enums import (
    AIIntegrationPreference,
    ContentComplexity,
    ContentType,
    EducationLevel,
    FormComplexity,
    TeachingStyle,
)
from curriculum_settings.domain.models.settings import (
    AdvancedSettings,
    AICustomizationSettings,
    AnswerKeyOptions,
    ContentDefaults,
    CustomTemplate,
    InstructorGuideOptions,
    Profile,
    Settings,
    TeachingStyleDetectionResult,
    UIPreferences,
)

__all__ = [
    # Enums
    "AIIntegrationPreference",
    "ContentComplexity",
    "ContentType",
    "EducationLevel",
    "FormComplexity",
    "TeachingStyle",
    # Settings
    "AdvancedSettings",
    "AICustomizationSettings",
    "AnswerKeyOptions",
    "ContentDefaults",
    "CustomTemplate",
    "InstructorGuideOptions",
    "Profile",
    "Settings",
    "TeachingStyleDetectionResult",
    "UIPreferences",
]
