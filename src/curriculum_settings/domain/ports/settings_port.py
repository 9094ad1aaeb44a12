"""Port (ABC) for settings persistence.

Domain layer interface — infrastructure provides the concrete implementation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from curriculum_settings.domain.models.settings import Settings


class SettingsPort(ABC):
    """Abstract interface for loading / saving the settings aggregate."""

    @abstractmethod
    def load(self) -> Optional[Settings]:
        """Load persisted settings, or ``None`` if nothing has been saved."""

    @abstractmethod
    def save(self, settings: Settings) -> None:
        """Persist *settings*.

        Raises ``PersistenceError`` when the write fails.
        """

    @abstractmethod
    def reset_to_defaults(self) -> Settings:
        """Delete persisted settings and return factory defaults."""
