"""Thin CLI wrapper — Typer commands that delegate to the settings store.

All persistence is accessed through the Container (bootstrap.py).
Option values are passed through unvalidated; values the option registry
does not recognise are reported as warnings and stored as-is.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated, Any, Optional

import typer
from rich.markup import escape

from curriculum_settings.application.use_cases.manage_settings import SettingsStore
from curriculum_settings.domain.rules import visibility
from curriculum_settings.domain.rules.registry import FIELD_TIERS, unrecognized_values
from curriculum_settings.infrastructure.serialization.json_serializer import (
    EXPORT_FILENAME,
    settings_to_dict,
)
from curriculum_settings.presentation.cli.formatters import (
    error_message,
    fields_table,
    hidden_features_panel,
    json_panel,
    success_panel,
    tier_panel,
    warning_message,
)

app = typer.Typer(
    name="curriculum-settings",
    help="⚙️  Manage Curriculum Curator profile, defaults and preferences",
    rich_markup_mode="rich",
    no_args_is_help=True,
)

_DOMAINS = ("profile", "defaults", "preferences", "advanced")


@app.callback()
def main(
    ctx: typer.Context,
    config_dir: Annotated[
        Optional[Path],
        typer.Option("--config-dir", help="Directory holding settings.json"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Curriculum Curator settings."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    from curriculum_settings.bootstrap import Container

    ctx.obj = Container(config_dir=config_dir)


def _store(ctx: typer.Context) -> SettingsStore:
    return ctx.obj.settings_store()


def _apply(store: SettingsStore, domain: str, partial: dict[str, Any]) -> None:
    if not partial:
        error_message("Nothing to update: pass at least one option.")
        raise typer.Exit(code=1)

    for field, value in unrecognized_values(
        domain, partial, store.advanced.custom_content_types
    ):
        warning_message(f"Unrecognised {domain}.{field} value {value!r}; stored as-is")

    getattr(store, f"update_{domain}")(partial)
    # Auto-save has already persisted the update unless it failed
    if store.has_unsaved_changes and not store.save():
        error_message("Failed to save settings.")
        raise typer.Exit(code=1)

    data = getattr(store.settings, domain).model_dump(mode="json", by_alias=True)
    json_panel(json.dumps(data, indent=2, ensure_ascii=False), title=f"✅ {domain} updated")


def _present(**options: Any) -> dict[str, Any]:
    return {key: value for key, value in options.items() if value is not None}


# ---------------------------------------------------------------------------
# curriculum-settings show
# ---------------------------------------------------------------------------


@app.command()
def show(
    ctx: typer.Context,
    domain: Annotated[
        Optional[str],
        typer.Option("--domain", "-d", help="profile, defaults, preferences or advanced"),
    ] = None,
) -> None:
    """Show the active settings."""
    store = _store(ctx)
    data = settings_to_dict(store.settings)
    if domain is not None:
        if domain not in _DOMAINS:
            error_message(f"Unknown domain: {domain}")
            raise typer.Exit(code=1)
        data = data[domain]
    json_panel(json.dumps(data, indent=2, ensure_ascii=False))
    tier_panel(store.current_tier, visibility.tier_summary(store.current_tier))


# ---------------------------------------------------------------------------
# curriculum-settings profile / defaults / preferences
# ---------------------------------------------------------------------------


@app.command()
def profile(
    ctx: typer.Context,
    name: Annotated[Optional[str], typer.Option("--name", help="Display name")] = None,
    email: Annotated[Optional[str], typer.Option("--email", help="Contact email")] = None,
    institution: Annotated[
        Optional[str], typer.Option("--institution", help="School or organisation")
    ] = None,
    subject: Annotated[Optional[str], typer.Option("--subject", help="Subject taught")] = None,
    level: Annotated[
        Optional[str], typer.Option("--level", help="Education level (e.g. high-school)")
    ] = None,
    teaching_style: Annotated[
        Optional[str], typer.Option("--teaching-style", help="Teaching style (e.g. inquiry-based)")
    ] = None,
    ai_preference: Annotated[
        Optional[str], typer.Option("--ai-preference", help="AI integration preference")
    ] = None,
) -> None:
    """Update the teaching profile."""
    partial = _present(
        name=name,
        email=email,
        institution=institution,
        subject=subject,
        level=level,
        teaching_style=teaching_style,
        ai_preference=ai_preference,
    )
    _apply(_store(ctx), "profile", partial)


@app.command()
def defaults(
    ctx: typer.Context,
    duration: Annotated[
        Optional[str], typer.Option("--duration", help="Session length (e.g. '50 minutes')")
    ] = None,
    complexity: Annotated[
        Optional[str], typer.Option("--complexity", help="basic, intermediate or advanced")
    ] = None,
    content_types: Annotated[
        Optional[list[str]],
        typer.Option("--content-type", "-t", help="Default content type (repeatable)"),
    ] = None,
    answer_keys: Annotated[Optional[bool], typer.Option("--answer-keys/--no-answer-keys")] = None,
    instructor_guides: Annotated[
        Optional[bool], typer.Option("--instructor-guides/--no-instructor-guides")
    ] = None,
    rubrics: Annotated[Optional[bool], typer.Option("--rubrics/--no-rubrics")] = None,
    accessibility: Annotated[
        Optional[bool], typer.Option("--accessibility/--no-accessibility")
    ] = None,
    explanations: Annotated[
        Optional[bool], typer.Option("--explanations/--no-explanations", help="Answer keys")
    ] = None,
    difficulty: Annotated[
        Optional[bool], typer.Option("--difficulty/--no-difficulty", help="Answer keys")
    ] = None,
    points: Annotated[Optional[bool], typer.Option("--points/--no-points", help="Answer keys")] = None,
    timing: Annotated[
        Optional[bool], typer.Option("--timing/--no-timing", help="Instructor guides")
    ] = None,
    grading_tips: Annotated[
        Optional[bool], typer.Option("--grading-tips/--no-grading-tips", help="Instructor guides")
    ] = None,
    discussion_prompts: Annotated[
        Optional[bool],
        typer.Option("--discussion-prompts/--no-discussion-prompts", help="Instructor guides"),
    ] = None,
    extensions: Annotated[
        Optional[bool], typer.Option("--extensions/--no-extensions", help="Instructor guides")
    ] = None,
) -> None:
    """Update the content-generation defaults."""
    partial = _present(
        duration=duration,
        complexity=complexity,
        content_types=content_types or None,
        include_answer_keys=answer_keys,
        include_instructor_guides=instructor_guides,
        include_rubrics=rubrics,
        include_accessibility_features=accessibility,
    )
    answer_key_options = _present(
        include_explanations=explanations,
        include_difficulty=difficulty,
        include_points=points,
    )
    if answer_key_options:
        partial["answer_key_options"] = answer_key_options
    instructor_guide_options = _present(
        include_timing=timing,
        include_grading_tips=grading_tips,
        include_discussion_prompts=discussion_prompts,
        include_extensions=extensions,
    )
    if instructor_guide_options:
        partial["instructor_guide_options"] = instructor_guide_options
    _apply(_store(ctx), "defaults", partial)


@app.command()
def preferences(
    ctx: typer.Context,
    tier: Annotated[
        Optional[str], typer.Option("--tier", help="essential, enhanced or advanced")
    ] = None,
    show_advanced_options: Annotated[
        Optional[bool], typer.Option("--show-advanced-options/--hide-advanced-options")
    ] = None,
    auto_save: Annotated[Optional[bool], typer.Option("--auto-save/--no-auto-save")] = None,
    use_by_default: Annotated[
        Optional[bool], typer.Option("--use-by-default/--no-use-by-default")
    ] = None,
) -> None:
    """Update the settings form preferences."""
    partial = _present(
        form_complexity=tier,
        show_advanced_options=show_advanced_options,
        auto_save_settings=auto_save,
        use_settings_by_default=use_by_default,
    )
    _apply(_store(ctx), "preferences", partial)


# ---------------------------------------------------------------------------
# curriculum-settings hidden / fields
# ---------------------------------------------------------------------------


@app.command()
def hidden(ctx: typer.Context) -> None:
    """List the features hidden at the current form tier."""
    store = _store(ctx)
    tier_panel(store.current_tier, visibility.tier_summary(store.current_tier))
    hidden_features_panel(store.hidden_features())


@app.command()
def fields(ctx: typer.Context) -> None:
    """Show which tier-gated fields are visible and active."""
    store = _store(ctx)
    fields_table(
        store.current_tier,
        visible={field: store.is_field_visible(field) for field in FIELD_TIERS},
        active={field: store.is_field_active(field) for field in FIELD_TIERS},
    )


# ---------------------------------------------------------------------------
# curriculum-settings export / import / reset
# ---------------------------------------------------------------------------


@app.command("export")
def export_cmd(
    ctx: typer.Context,
    output: Annotated[
        Path, typer.Option("--output", "-o", help="Destination file")
    ] = Path(EXPORT_FILENAME),
) -> None:
    """Export all settings to a JSON file."""
    store = _store(ctx)
    try:
        output.write_text(store.export_settings(), encoding="utf-8")
    except OSError as exc:
        error_message(f"Cannot write {output}: {escape(str(exc))}")
        raise typer.Exit(code=1) from exc
    success_panel(f"📤 Settings exported to: [bold green]{output}[/]", title="Export")


@app.command("import")
def import_cmd(
    ctx: typer.Context,
    settings_file: Annotated[Path, typer.Argument(help="JSON file produced by 'export'")],
) -> None:
    """Replace all settings with the contents of an exported file."""
    if not settings_file.exists():
        error_message(f"File not found: {settings_file}")
        raise typer.Exit(code=1)

    try:
        text = settings_file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        error_message(
            f"Failed to import settings. Cannot read {settings_file}: {escape(str(exc))}"
        )
        raise typer.Exit(code=1) from exc

    store = _store(ctx)
    if not store.import_settings(text):
        error_message("Failed to import settings. Please check the file format.")
        raise typer.Exit(code=1)
    success_panel("📥 Settings imported successfully!", title="Import")


@app.command()
def reset(
    ctx: typer.Context,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Do not ask for confirmation")] = False,
) -> None:
    """Delete saved settings and restore factory defaults."""
    if not yes and not typer.confirm("Reset all settings to defaults?"):
        raise typer.Abort()
    ctx.obj.settings_port.reset_to_defaults()
    success_panel("Settings restored to defaults.", title="Reset")


if __name__ == "__main__":
    app()
