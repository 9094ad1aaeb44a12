"""Domain errors — custom exceptions for the settings core.

These exceptions are raised by domain services and infrastructure adapters and
caught by the application layer, which reports them upward as boolean
outcomes. They carry no infrastructure dependencies.
"""


class CurriculumSettingsError(Exception):
    """Base exception for all settings errors."""


class DeserializationError(CurriculumSettingsError):
    """Raised when an import payload is not a well-formed settings document."""


class PersistenceError(CurriculumSettingsError):
    """Raised when the persistence gateway cannot save or load settings."""
