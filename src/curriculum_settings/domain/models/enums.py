"""Enumerations for teaching profiles, content defaults and UI preferences."""

from enum import Enum


class EducationLevel(str, Enum):
    """Education level the user teaches at."""

    ELEMENTARY = "elementary"
    MIDDLE_SCHOOL = "middle-school"
    HIGH_SCHOOL = "high-school"
    COLLEGE = "college"
    GRADUATE = "graduate"
    PROFESSIONAL = "professional"
    ADULT_LEARNING = "adult-learning"


class TeachingStyle(str, Enum):
    """Pedagogical approach used to tailor generated content."""

    TRADITIONAL_LECTURE = "traditional-lecture"
    CONSTRUCTIVIST = "constructivist"
    DIRECT_INSTRUCTION = "direct-instruction"
    INQUIRY_BASED = "inquiry-based"
    FLIPPED_CLASSROOM = "flipped-classroom"
    PROJECT_BASED = "project-based"
    COMPETENCY_BASED = "competency-based"
    CULTURALLY_RESPONSIVE = "culturally-responsive"
    MIXED_APPROACH = "mixed-approach"


class AIIntegrationPreference(str, Enum):
    """How AI should be woven into generated content."""

    AI_ENHANCED = "ai-enhanced"
    AI_RESISTANT = "ai-resistant"
    AI_LITERATE = "ai-literate"
    MIXED_APPROACH = "mixed-approach"
    CONTEXT_DEPENDENT = "context-dependent"


class ContentComplexity(str, Enum):
    """Default complexity of generated material."""

    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class ContentType(str, Enum):
    """Built-in content types (custom types are plain strings)."""

    SLIDES = "Slides"
    INSTRUCTOR_NOTES = "InstructorNotes"
    WORKSHEET = "Worksheet"
    QUIZ = "Quiz"
    ACTIVITY_GUIDE = "ActivityGuide"


class FormComplexity(str, Enum):
    """Settings form tier, ordered essential < enhanced < advanced."""

    ESSENTIAL = "essential"
    ENHANCED = "enhanced"
    ADVANCED = "advanced"

    @property
    def ordinal(self) -> int:
        return _TIER_ORDER[self]


_TIER_ORDER = {
    FormComplexity.ESSENTIAL: 0,
    FormComplexity.ENHANCED: 1,
    FormComplexity.ADVANCED: 2,
}
