"""Tests for settings persistence and the settings store.

Covers:
- SettingsManager load / save / reset with a temp directory
- SettingsStore partial updates, auto-save and save failures
- Export / import through the store (atomic replace-or-keep)
- Collaborator entry points (style detection, AI wizard, template editor)
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

import pytest

from curriculum_settings.application.use_cases.manage_settings import SettingsStore
from curriculum_settings.bootstrap import Container
from curriculum_settings.domain.errors import PersistenceError
from curriculum_settings.domain.models import (
    AICustomizationSettings,
    AnswerKeyOptions,
    CustomTemplate,
    FormComplexity,
    Settings,
    TeachingStyle,
    TeachingStyleDetectionResult,
)
from curriculum_settings.domain.ports.settings_port import SettingsPort
from curriculum_settings.infrastructure.config.settings_manager import SettingsManager


class InMemorySettingsPort(SettingsPort):
    """Test double recording every save."""

    def __init__(self, stored: Optional[Settings] = None, fail: bool = False) -> None:
        self.stored = stored
        self.fail = fail
        self.saves: list[Settings] = []

    def load(self) -> Optional[Settings]:
        return self.stored

    def save(self, settings: Settings) -> None:
        if self.fail:
            raise PersistenceError("disk full")
        self.saves.append(settings)
        self.stored = settings

    def reset_to_defaults(self) -> Settings:
        self.stored = None
        return Settings()


# ── Fixtures ──────────────────────────────────────────────────────────────


@pytest.fixture()
def tmp_config_dir(tmp_path: Path) -> Path:
    """Return a temporary directory for settings files."""
    return tmp_path / "curriculum_config"


@pytest.fixture()
def manager(tmp_config_dir: Path) -> SettingsManager:
    """SettingsManager pointing at a temp directory."""
    return SettingsManager(config_dir=tmp_config_dir)


@pytest.fixture()
def port() -> InMemorySettingsPort:
    return InMemorySettingsPort()


@pytest.fixture()
def store(port: InMemorySettingsPort) -> SettingsStore:
    return SettingsStore(port=port)


# ── SettingsManager Tests ─────────────────────────────────────────────────


class TestSettingsManager:
    """Tests for SettingsManager load/save/reset."""

    def test_load_none_when_no_file(self, manager: SettingsManager) -> None:
        assert manager.load() is None

    def test_save_and_load(self, manager: SettingsManager) -> None:
        custom = Settings.model_validate(
            {
                "profile": {"name": "Ada", "level": "graduate"},
                "defaults": {"answerKeyOptions": {"includePoints": True}},
                "preferences": {"formComplexity": "enhanced"},
            }
        )
        manager.save(custom)
        assert manager.load() == custom

    def test_reset_to_defaults(self, manager: SettingsManager) -> None:
        manager.save(Settings())
        assert manager.settings_path.exists()

        reset = manager.reset_to_defaults()
        assert reset == Settings()
        assert not manager.settings_path.exists()

    def test_corrupted_file_returns_none(
        self, manager: SettingsManager, tmp_config_dir: Path
    ) -> None:
        tmp_config_dir.mkdir(parents=True, exist_ok=True)
        manager.settings_path.write_text("{{invalid json", encoding="utf-8")
        assert manager.load() is None

    def test_non_utf8_file_returns_none(
        self, manager: SettingsManager, tmp_config_dir: Path
    ) -> None:
        tmp_config_dir.mkdir(parents=True, exist_ok=True)
        manager.settings_path.write_bytes(b'{"profile": "\xff\xfe"}')
        assert manager.load() is None

    def test_container_starts_from_defaults_on_non_utf8_file(self, tmp_config_dir: Path) -> None:
        tmp_config_dir.mkdir(parents=True, exist_ok=True)
        (tmp_config_dir / "settings.json").write_bytes(b"\xff\xfe\x00garbage")
        assert Container(config_dir=tmp_config_dir).settings_store().settings == Settings()

    def test_settings_path_property(self, manager: SettingsManager) -> None:
        assert manager.settings_path.name == "settings.json"

    def test_save_creates_directory(self, tmp_path: Path) -> None:
        nested = tmp_path / "deep" / "nested"
        mgr = SettingsManager(config_dir=nested)
        mgr.save(Settings())
        assert mgr.settings_path.exists()

    def test_save_file_content_is_camel_case_json(self, manager: SettingsManager) -> None:
        manager.save(Settings())
        data = json.loads(manager.settings_path.read_text(encoding="utf-8"))
        assert set(data) == {"profile", "defaults", "preferences", "advanced"}
        assert "formComplexity" in data["preferences"]

    def test_unwritable_directory_raises_persistence_error(self, tmp_path: Path) -> None:
        blocker = tmp_path / "file"
        blocker.write_text("not a directory", encoding="utf-8")
        mgr = SettingsManager(config_dir=blocker / "config")
        with pytest.raises(PersistenceError):
            mgr.save(Settings())


# ── SettingsStore Tests ───────────────────────────────────────────────────


class TestSettingsStoreUpdates:
    """Domain-scoped partial updates."""

    def test_load_defaults_when_nothing_saved(self, store: SettingsStore) -> None:
        assert store.load() == Settings()

    def test_load_persisted(self) -> None:
        saved = Settings.model_validate(
            {"profile": {"name": "Ada"}, "defaults": {}, "preferences": {}}
        )
        store = SettingsStore(port=InMemorySettingsPort(stored=saved))
        assert store.load().profile.name == "Ada"

    def test_update_profile_keeps_other_fields(self, store: SettingsStore) -> None:
        store.update_profile({"name": "Ada", "subject": "Maths"})
        profile = store.update_profile({"subject": "Physics"})
        assert profile.name == "Ada"
        assert profile.subject == "Physics"

    def test_update_defaults_deep_merges_option_group(self, store: SettingsStore) -> None:
        store.update_defaults({"answer_key_options": {"include_explanations": False}})
        defaults = store.update_defaults({"answer_key_options": {"include_points": True}})
        assert defaults.answer_key_options == AnswerKeyOptions(
            include_explanations=False, include_difficulty=True, include_points=True
        )

    def test_auto_save_on(self, store: SettingsStore, port: InMemorySettingsPort) -> None:
        store.update_profile({"name": "Ada"})
        assert len(port.saves) == 1
        assert port.stored.profile.name == "Ada"

    def test_auto_save_off(self, store: SettingsStore, port: InMemorySettingsPort) -> None:
        store.update_preferences({"auto_save_settings": False})
        saves_before = len(port.saves)
        store.update_profile({"name": "Ada"})
        assert len(port.saves) == saves_before
        assert store.profile.name == "Ada"

    def test_save_failure_keeps_in_memory_state(self) -> None:
        port = InMemorySettingsPort(fail=True)
        store = SettingsStore(port=port)
        store.update_profile({"name": "Ada"})
        assert store.save() is False
        assert store.profile.name == "Ada"

    def test_save_success(self, store: SettingsStore, port: InMemorySettingsPort) -> None:
        assert store.save() is True
        assert port.stored == store.settings

    def test_unsaved_changes_cleared_by_auto_save(self, store: SettingsStore) -> None:
        assert store.has_unsaved_changes is False
        store.update_profile({"name": "Ada"})
        assert store.has_unsaved_changes is False

    def test_unsaved_changes_without_auto_save(self, store: SettingsStore) -> None:
        store.update_preferences({"auto_save_settings": False})
        store.update_profile({"name": "Ada"})
        assert store.has_unsaved_changes is True
        assert store.save() is True
        assert store.has_unsaved_changes is False

    def test_unsaved_changes_after_failed_auto_save(self) -> None:
        store = SettingsStore(port=InMemorySettingsPort(fail=True))
        store.update_profile({"name": "Ada"})
        assert store.has_unsaved_changes is True

    def test_reset(self, store: SettingsStore, port: InMemorySettingsPort) -> None:
        store.update_profile({"name": "Ada"})
        assert store.reset_to_defaults() == Settings()
        assert store.settings == Settings()
        assert port.stored is None


class TestSettingsStoreImportExport:
    """Atomic replace-or-keep import."""

    def test_export_then_import(self, store: SettingsStore) -> None:
        store.update_profile({"name": "Ada", "teaching_style": "inquiry-based"})
        text = store.export_settings()

        other = SettingsStore(port=InMemorySettingsPort())
        assert other.import_settings(text) is True
        assert other.settings == store.settings

    def test_import_persists(self, store: SettingsStore, port: InMemorySettingsPort) -> None:
        text = SettingsStore(port=InMemorySettingsPort()).export_settings()
        store.import_settings(text)
        assert port.stored == store.settings

    @pytest.mark.parametrize(
        "payload",
        [
            "{{invalid",
            "[]",
            '{"profile": {}}',
            pytest.param("[" * 200_000, id="deeply-nested"),
        ],
    )
    def test_failed_import_is_non_destructive(
        self, store: SettingsStore, port: InMemorySettingsPort, payload: str
    ) -> None:
        store.update_profile({"name": "Ada"})
        before = store.settings.model_copy(deep=True)
        saves_before = len(port.saves)

        assert store.import_settings(payload) is False
        assert store.settings == before
        assert len(port.saves) == saves_before

    def test_import_succeeds_even_if_save_fails(self) -> None:
        text = SettingsStore(port=InMemorySettingsPort()).export_settings()
        store = SettingsStore(port=InMemorySettingsPort(fail=True))
        store.update_profile({"name": "Ada"})
        assert store.import_settings(text) is True
        assert store.profile.name == ""


class TestCollaborators:
    """Results handed back by the opaque collaborators."""

    def test_accept_detected_style(self, store: SettingsStore) -> None:
        result = TeachingStyleDetectionResult(
            primary_style=TeachingStyle.PROJECT_BASED, confidence=0.9
        )
        profile = store.accept_detected_style(result)
        assert profile.teaching_style == TeachingStyle.PROJECT_BASED

    def test_apply_ai_customization_persists(
        self, store: SettingsStore, port: InMemorySettingsPort
    ) -> None:
        store.update_profile({"name": "Ada"})
        custom = AICustomizationSettings(preference="ai-resistant")
        assert store.apply_ai_customization(custom) is True
        assert store.advanced.ai_customization == custom
        assert port.stored.advanced.ai_customization == custom
        assert port.stored.profile.name == "Ada"

    def test_apply_ai_customization_failure(self) -> None:
        store = SettingsStore(port=InMemorySettingsPort(fail=True))
        custom = AICustomizationSettings(preference="ai-resistant")
        assert store.apply_ai_customization(custom) is False
        assert store.advanced.ai_customization == custom

    def test_templates_updated_not_saved(
        self, store: SettingsStore, port: InMemorySettingsPort
    ) -> None:
        templates = [CustomTemplate(id="t1", name="Exit ticket", content_type="Quiz")]
        store.templates_updated(templates)
        assert store.advanced.custom_templates == templates
        assert port.saves == []


class TestStoreVisibility:
    """Visibility helpers at the store's current tier."""

    def test_hidden_features_follow_tier(self, store: SettingsStore) -> None:
        assert len(store.hidden_features()) == 9
        store.update_preferences({"form_complexity": "advanced"})
        assert store.hidden_features() == []

    def test_unknown_tier_treated_as_essential(self, store: SettingsStore) -> None:
        store.update_preferences({"form_complexity": "expert"})
        assert store.preferences.form_complexity == "expert"
        assert store.current_tier == FormComplexity.ESSENTIAL
        assert not store.is_field_visible("profile.email")

    def test_field_active_needs_flag(self, store: SettingsStore) -> None:
        store.update_preferences({"form_complexity": "advanced"})
        assert store.is_field_active("defaults.answer_key_options.include_points")
        store.update_defaults({"include_answer_keys": False})
        assert store.is_field_visible("defaults.answer_key_options.include_points")
        assert not store.is_field_active("defaults.answer_key_options.include_points")


# ── Container ─────────────────────────────────────────────────────────────


class TestContainer:
    """Composition root wiring."""

    def test_store_uses_file_manager(self, tmp_config_dir: Path) -> None:
        container = Container(config_dir=tmp_config_dir)
        store = container.settings_store()
        store.update_profile({"name": "Ada"})

        reloaded = Container(config_dir=tmp_config_dir).settings_store()
        assert reloaded.profile.name == "Ada"
        assert container.settings_manager.settings_path.parent == tmp_config_dir
