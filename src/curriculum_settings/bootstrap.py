"""Composition Root — Dependency Injection Container.

This module is the ONLY place where concrete infrastructure classes are
imported and wired together. All other layers refer to ports (interfaces).
"""

from __future__ import annotations

from pathlib import Path

from curriculum_settings.application.use_cases.manage_settings import SettingsStore
from curriculum_settings.domain.ports.settings_port import SettingsPort
from curriculum_settings.infrastructure.config.settings_manager import SettingsManager


class Container:
    """Simple dependency injection container.

    Usage::

        container = Container()
        store = container.settings_store()
        store.update_preferences({"form_complexity": "advanced"})
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        self._settings_manager = SettingsManager(config_dir=config_dir)

    # -- Port accessors ------------------------------------------------------

    @property
    def settings_port(self) -> SettingsPort:
        return self._settings_manager

    @property
    def settings_manager(self) -> SettingsManager:
        return self._settings_manager

    # -- Use Case factories --------------------------------------------------

    def settings_store(self) -> SettingsStore:
        """Create a settings store loaded from persisted settings."""
        store = SettingsStore(port=self._settings_manager)
        store.load()
        return store
