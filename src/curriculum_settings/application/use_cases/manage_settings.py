"""Use Case: Manage Settings.

Holds the in-memory settings aggregate, applies domain-scoped partial updates
through the merge engine, and persists via ``SettingsPort``. Failures are
logged and reported as boolean outcomes; the in-memory aggregate stays the
source of truth whatever the persistence result.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Optional

from curriculum_settings.domain.errors import DeserializationError, PersistenceError
from curriculum_settings.domain.models.enums import FormComplexity
from curriculum_settings.domain.models.settings import (
    AdvancedSettings,
    AICustomizationSettings,
    ContentDefaults,
    CustomTemplate,
    Profile,
    Settings,
    TeachingStyleDetectionResult,
    UIPreferences,
)
from curriculum_settings.domain.ports.settings_port import SettingsPort
from curriculum_settings.domain.rules import visibility
from curriculum_settings.domain.rules.merge import Partial, apply_update
from curriculum_settings.infrastructure.serialization import json_serializer

logger = logging.getLogger(__name__)


class SettingsStore:
    """Settings aggregate + persistence, driven by discrete user actions."""

    def __init__(self, port: SettingsPort, settings: Optional[Settings] = None) -> None:
        self._port = port
        self._settings = settings if settings is not None else Settings()
        self._unsaved = False

    # -- Read access ---------------------------------------------------------

    @property
    def settings(self) -> Settings:
        """The current settings aggregate."""
        return self._settings

    @property
    def profile(self) -> Profile:
        return self._settings.profile

    @property
    def defaults(self) -> ContentDefaults:
        return self._settings.defaults

    @property
    def preferences(self) -> UIPreferences:
        return self._settings.preferences

    @property
    def advanced(self) -> AdvancedSettings:
        return self._settings.advanced

    @property
    def current_tier(self) -> FormComplexity:
        """The form tier, falling back to essential for unknown stored values."""
        value = self._settings.preferences.form_complexity
        try:
            return FormComplexity(value)
        except ValueError:
            logger.warning("Unknown form complexity %r; treating as essential", value)
            return FormComplexity.ESSENTIAL

    @property
    def has_unsaved_changes(self) -> bool:
        """Whether the aggregate differs from what was last persisted."""
        return self._unsaved

    # -- Persistence ---------------------------------------------------------

    def load(self) -> Settings:
        """Load settings from the gateway, or start from defaults."""
        loaded = self._port.load()
        self._settings = loaded if loaded is not None else Settings()
        self._unsaved = False
        return self._settings

    def save(self, settings: Optional[Settings] = None) -> bool:
        """Persist *settings* (or the current aggregate) and adopt it.

        Returns ``False`` when the gateway fails; nothing is rolled back.
        """
        if settings is not None:
            self._settings = settings
        try:
            self._port.save(self._settings)
        except PersistenceError as exc:
            logger.error("Failed to save settings: %s", exc)
            self._unsaved = True
            return False
        self._unsaved = False
        return True

    def reset_to_defaults(self) -> Settings:
        """Discard persisted and in-memory settings in favour of defaults."""
        self._settings = self._port.reset_to_defaults()
        self._unsaved = False
        return self._settings

    # -- Partial updates -----------------------------------------------------

    def update_profile(self, partial: Partial) -> Profile:
        """Merge *partial* into the profile."""
        return self._update("profile", partial)

    def update_defaults(self, partial: Partial) -> ContentDefaults:
        """Merge *partial* into the content defaults (option groups deep-merged)."""
        return self._update("defaults", partial)

    def update_preferences(self, partial: Partial) -> UIPreferences:
        """Merge *partial* into the UI preferences."""
        return self._update("preferences", partial)

    def _update(self, domain: str, partial: Partial) -> Any:
        self._settings = apply_update(self._settings, domain, partial)
        self._unsaved = True
        if self._settings.preferences.auto_save_settings:
            self.save()
        return getattr(self._settings, domain)

    # -- Export / import -----------------------------------------------------

    def export_settings(self) -> str:
        """Serialize the current aggregate for download."""
        return json_serializer.export_settings(self._settings)

    def import_settings(self, text: str) -> bool:
        """Replace the aggregate with the contents of *text*.

        On a malformed payload the current settings are kept untouched and
        ``False`` is returned. A successful import is persisted right away.
        """
        try:
            imported = json_serializer.import_settings(text)
        except DeserializationError as exc:
            logger.warning("Settings import rejected: %s", exc)
            return False
        self._settings = imported
        if not self.save():
            logger.warning("Imported settings are active but were not persisted")
        return True

    # -- Collaborator results ------------------------------------------------

    def accept_detected_style(self, result: TeachingStyleDetectionResult) -> Profile:
        """Adopt the primary style found by the teaching-style questionnaire."""
        return self.update_profile({"teaching_style": result.primary_style})

    def apply_ai_customization(self, customization: AICustomizationSettings) -> bool:
        """Store the AI wizard's result in the advanced block and persist it."""
        advanced = self._settings.advanced.model_copy(update={"ai_customization": customization})
        return self.save(self._settings.model_copy(update={"advanced": advanced}))

    def templates_updated(self, templates: Sequence[CustomTemplate]) -> None:
        """Refresh the in-memory template list; the editor already saved it."""
        advanced = self._settings.advanced.model_copy(
            update={"custom_templates": list(templates)}
        )
        self._settings = self._settings.model_copy(update={"advanced": advanced})
        logger.info("Templates updated: %d", len(templates))

    # -- Visibility ----------------------------------------------------------

    def is_field_visible(self, field: str) -> bool:
        """Whether the dotted *field* key is shown at the current tier."""
        return visibility.is_field_visible(field, self.current_tier)

    def is_field_active(self, field: str) -> bool:
        """Whether *field* is shown and its owning flag (if any) is on."""
        return visibility.is_field_active(field, self.current_tier, self.defaults)

    def hidden_features(self) -> list[str]:
        """Labels of features suppressed at the current tier."""
        return visibility.hidden_feature_names(self.current_tier)
