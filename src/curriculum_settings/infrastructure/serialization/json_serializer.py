"""JSON serializer — converts the settings aggregate to/from export files.

Exports are wrapped in a small self-describing envelope::

    {
      "format": "curriculum-curator-settings",
      "version": 1,
      "exportedAt": "2026-01-01T00:00:00+00:00",
      "settings": {"profile": {...}, "defaults": {...}, ...}
    }

Imports accept the envelope or a bare settings object (as written by older
versions of the tool). Unknown enum strings and absent optional fields are
kept or defaulted; only payloads that cannot be resolved into the settings
shape are rejected.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any

from pydantic import ValidationError

from curriculum_settings.domain.errors import DeserializationError
from curriculum_settings.domain.models.settings import Settings

logger = logging.getLogger(__name__)

EXPORT_FORMAT = "curriculum-curator-settings"
EXPORT_VERSION = 1
EXPORT_FILENAME = f"{EXPORT_FORMAT}.json"

_REQUIRED_DOMAINS = ("profile", "defaults", "preferences")


def settings_to_dict(settings: Settings) -> dict[str, Any]:
    """Return a JSON-safe, camelCase dictionary of *settings*."""
    return settings.model_dump(mode="json", by_alias=True)


def export_settings(settings: Settings) -> str:
    """Serialize *settings* to an indented JSON export document."""
    envelope = {
        "format": EXPORT_FORMAT,
        "version": EXPORT_VERSION,
        "exportedAt": datetime.now(timezone.utc).isoformat(),
        "settings": settings_to_dict(settings),
    }
    return json.dumps(envelope, indent=2, ensure_ascii=False)


def _unwrap(raw: dict[str, Any]) -> Any:
    if "profile" not in raw and "settings" in raw:
        version = raw.get("version")
        if isinstance(version, int) and version > EXPORT_VERSION:
            logger.warning(
                "Importing settings export version %s (newer than %s); unknown keys are ignored",
                version,
                EXPORT_VERSION,
            )
        return raw["settings"]
    return raw


def import_settings(text: str) -> Settings:
    """Parse an export document back into a :class:`Settings`.

    Raises
    ------
    DeserializationError
        If *text* is not JSON, is not an object, lacks one of the
        ``profile`` / ``defaults`` / ``preferences`` domains, or a domain
        cannot be resolved into its model.
    """
    try:
        raw = json.loads(text)
    except (json.JSONDecodeError, RecursionError) as exc:
        raise DeserializationError(f"Settings file is not valid JSON: {exc}") from exc

    if not isinstance(raw, dict):
        raise DeserializationError(
            f"Expected a JSON object at the top level, got {type(raw).__name__}"
        )

    payload = _unwrap(raw)
    if not isinstance(payload, dict):
        raise DeserializationError("The 'settings' entry must be a JSON object")

    missing = [name for name in _REQUIRED_DOMAINS if name not in payload]
    if missing:
        raise DeserializationError(f"Missing settings section(s): {', '.join(missing)}")

    try:
        return Settings.model_validate(payload)
    except ValidationError as exc:
        raise DeserializationError(f"Settings do not match the expected shape: {exc}") from exc
