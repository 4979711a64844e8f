from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List, TypedDict

import typer
import yaml

from .config import HighlighterConfig, load_config
from .constants import NO_CARET
from .editing_state import EditingStateScheduler
from .host import HeadlessEditor
from .models import DecorationSet
from .preferences import (
    HighlightPreferences,
    preferences_from_yaml,
    save_preferences,
    setting_keys,
)
from .scheduling import VirtualScheduler
from .taggers import Tagger, build_tagger_from_config

app = typer.Typer(help="Parts-of-speech highlighter CLI.", no_args_is_help=True)


class HighlightPayload(TypedDict):
    start: int
    end: int
    text: str
    class_name: str


@app.command()
def analyze(
    input_path: Path = typer.Option(
        ..., exists=True, readable=True, dir_okay=False, file_okay=True
    ),
    config: Path | None = typer.Option(None, "--config", "-c"),
    tagger_name: str | None = typer.Option(
        None, "--tagger", "-t", help="Tagger to use ('spacy' or 'lexicon')."
    ),
    caret: int = typer.Option(
        NO_CARET, "--caret", help="Caret position to keep clear (-1 for none)."
    ),
    preferences_path: Path | None = typer.Option(
        None, "--preferences", "-p", help="YAML file with stored highlight switches."
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
) -> None:
    """Run one analysis pass over a file and print the highlights as JSON."""
    _configure_logging(verbose)
    cfg = _load_config_or_fail(config)
    if tagger_name:
        cfg.tagger_name = tagger_name
    tagger = _build_tagger_or_fail(cfg)
    preferences = _load_preferences(cfg, preferences_path)

    text = input_path.read_text(encoding="utf-8")
    if caret != NO_CARET and not 0 <= caret <= len(text):
        raise typer.BadParameter(f"Caret {caret} is outside the document.")

    # A one-off run goes through the same path as an external refresh.
    editor = HeadlessEditor(text, caret=caret)
    view = EditingStateScheduler(editor, tagger, preferences, VirtualScheduler(), cfg)
    published = view.refresh_now()
    view.destroy()
    if not published:
        error = view.last_error
        reason = str(error.__cause__ or error) if error is not None else "unknown error"
        typer.echo(f"Analysis failed: {reason}", err=True)
        raise typer.Exit(code=1)

    typer.echo(
        json.dumps({"highlights": _highlights_payload(text, editor.decorations)}, indent=2)
    )


@app.command("print-config")
def print_config() -> None:
    """Print the default configuration as YAML."""
    cfg = HighlighterConfig()
    typer.echo(yaml.safe_dump(cfg.to_dict(), sort_keys=False))


@app.command()
def toggle(
    setting_key: str = typer.Argument(..., help="Category key, e.g. 'nouns'."),
    preferences_path: Path = typer.Option(..., "--preferences", "-p"),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Flip one category's highlight switch and save it."""
    cfg = _load_config_or_fail(config)
    known = setting_keys(cfg.pos_configs)
    if setting_key not in known:
        raise typer.BadParameter(
            f"Unknown category '{setting_key}'. Expected one of: {', '.join(known)}."
        )
    preferences = _load_preferences(cfg, preferences_path)
    preferences.toggle(setting_key)
    save_preferences(preferences, preferences_path)
    typer.echo(yaml.safe_dump(preferences.to_dict(), sort_keys=True))


@app.command("toggle-all")
def toggle_all(
    preferences_path: Path = typer.Option(..., "--preferences", "-p"),
    config: Path | None = typer.Option(None, "--config", "-c"),
) -> None:
    """Turn every category off if any is on, otherwise turn them all on."""
    cfg = _load_config_or_fail(config)
    preferences = _load_preferences(cfg, preferences_path)
    preferences.toggle_all(cfg.pos_configs)
    save_preferences(preferences, preferences_path)
    typer.echo(yaml.safe_dump(preferences.to_dict(), sort_keys=True))


def main() -> None:
    app()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _load_config_or_fail(path: Path | None) -> HighlighterConfig:
    try:
        return load_config(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise typer.BadParameter(f"Could not load config: {exc}") from exc


def _build_tagger_or_fail(config: HighlighterConfig) -> Tagger:
    try:
        return build_tagger_from_config(config)
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc


def _load_preferences(
    config: HighlighterConfig, path: Path | None
) -> HighlightPreferences:
    """Stored switches win over the config's `highlights` block."""
    values = dict(config.highlights)
    if path is not None:
        try:
            values.update(preferences_from_yaml(path).to_dict())
        except (ValueError, yaml.YAMLError) as exc:
            raise typer.BadParameter(f"Could not load preferences: {exc}") from exc
    return HighlightPreferences(values)


def _highlights_payload(text: str, decorations: DecorationSet) -> List[HighlightPayload]:
    return [
        {
            "start": deco.start,
            "end": deco.end,
            "text": text[deco.start : deco.end],
            "class_name": deco.class_name,
        }
        for deco in decorations
    ]


if __name__ == "__main__":
    main()
