"""Settings manager — loads/saves Settings to the OS-appropriate config dir.

Implements ``SettingsPort`` and persists the settings aggregate as JSON to
``~/.config/curriculum_curator/settings.json`` (Linux) or the equivalent
platform directory via ``platformdirs``.
"""

from __future__ import annotations

import json
import logging
import tempfile
from pathlib import Path

import platformdirs

from curriculum_settings.domain.errors import DeserializationError, PersistenceError
from curriculum_settings.domain.models.settings import Settings
from curriculum_settings.domain.ports.settings_port import SettingsPort
from curriculum_settings.infrastructure.serialization.json_serializer import (
    import_settings,
    settings_to_dict,
)

logger = logging.getLogger(__name__)

_APP_NAME = "curriculum_curator"
_SETTINGS_FILENAME = "settings.json"


class SettingsManager(SettingsPort):
    """Concrete implementation of :class:`SettingsPort`.

    Parameters
    ----------
    config_dir : Path | None
        Override the default config directory (useful for testing).
    """

    def __init__(self, config_dir: Path | None = None) -> None:
        self._config_dir = config_dir or Path(platformdirs.user_config_dir(_APP_NAME))
        self._settings_path = self._config_dir / _SETTINGS_FILENAME

    # -- Public API ----------------------------------------------------------

    def load(self) -> Settings | None:
        """Load settings from disk, or ``None`` if absent or unreadable."""
        if not self._settings_path.exists():
            return None

        try:
            return import_settings(self._settings_path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, DeserializationError) as exc:
            # Corrupted or non-UTF-8 file → caller falls back to defaults
            logger.warning("Ignoring unreadable settings file %s: %s", self._settings_path, exc)
            return None

    def save(self, settings: Settings) -> None:
        """Persist settings atomically (write to temp, then rename)."""
        try:
            self._config_dir.mkdir(parents=True, exist_ok=True)
            tmp_fd, tmp_path = tempfile.mkstemp(dir=self._config_dir, suffix=".tmp")
        except OSError as exc:
            raise PersistenceError(f"Cannot write settings to {self._config_dir}: {exc}") from exc

        try:
            with open(tmp_fd, "w", encoding="utf-8") as fh:
                json.dump(settings_to_dict(settings), fh, indent=2, ensure_ascii=False)
            Path(tmp_path).replace(self._settings_path)
        except OSError as exc:
            Path(tmp_path).unlink(missing_ok=True)
            raise PersistenceError(f"Cannot write settings to {self._settings_path}: {exc}") from exc
        logger.debug("Settings saved to %s", self._settings_path)

    def reset_to_defaults(self) -> Settings:
        """Delete the persisted file and return factory defaults."""
        self._settings_path.unlink(missing_ok=True)
        return Settings()

    @property
    def settings_path(self) -> Path:
        """Absolute path to the settings JSON file."""
        return self._settings_path
