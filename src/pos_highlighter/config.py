from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Mapping, MutableMapping

import yaml

from .constants import CARET_BUFFER, default_pos_configs
from .models import PosConfig


@dataclass(slots=True)
class SpacySettings:
    """Configuration block for the spaCy-backed tagger."""

    model: str = "en_core_web_sm"


@dataclass(slots=True)
class HighlighterConfig:
    """Configuration options for live part-of-speech highlighting."""

    activity_timeout_ms: int = 3000
    debounce_ms: int = 300
    caret_buffer: int = CARET_BUFFER
    dev_mode: bool = False
    tagger_name: str = "spacy"
    spacy: SpacySettings = field(default_factory=SpacySettings)
    lexicon: Dict[str, List[str]] = field(default_factory=dict)
    highlights: Dict[str, bool] = field(default_factory=dict)
    pos_configs: List[PosConfig] = field(default_factory=default_pos_configs)

    def to_dict(self) -> dict[str, Any]:
        """Return a mutable dictionary representation of the configuration."""
        return dict(asdict(self))


def _build_kwargs(data: Mapping[str, Any]) -> dict[str, Any]:
    allowed = {field.name for field in fields(HighlighterConfig)}
    kwargs = {key: data[key] for key in data if key in allowed}
    if "spacy" in data:
        spacy_value = data["spacy"]
        if isinstance(spacy_value, SpacySettings):
            kwargs["spacy"] = spacy_value
        elif isinstance(spacy_value, Mapping):
            kwargs["spacy"] = _build_spacy_settings(spacy_value)
    if "pos_configs" in data:
        kwargs["pos_configs"] = [
            _build_pos_config(entry) for entry in data["pos_configs"] or []
        ]
    return kwargs


def _build_spacy_settings(data: Mapping[str, Any]) -> SpacySettings:
    spacy_allowed = {field.name for field in fields(SpacySettings)}
    filtered = {key: data[key] for key in data if key in spacy_allowed}
    return SpacySettings(**filtered)


def _build_pos_config(entry: Any) -> PosConfig:
    if isinstance(entry, PosConfig):
        return entry
    if not isinstance(entry, Mapping):
        raise ValueError("Each pos_configs entry must be a mapping.")
    missing = [key for key in ("tag", "class_name", "setting_key") if key not in entry]
    if missing:
        raise ValueError(f"pos_configs entry is missing {', '.join(missing)}.")
    return PosConfig(
        tag=str(entry["tag"]),
        class_name=str(entry["class_name"]),
        setting_key=str(entry["setting_key"]),
        exclusion_tags=[str(tag) for tag in entry.get("exclusion_tags") or []],
    )


def config_from_dict(data: Mapping[str, Any] | None) -> HighlighterConfig:
    """Build a HighlighterConfig from a dictionary-like input."""
    if data is None:
        return HighlighterConfig()
    return HighlighterConfig(**_build_kwargs(data))


def config_from_yaml(path: str | Path) -> HighlighterConfig:
    """Load configuration from a YAML file."""
    contents = Path(path).read_text(encoding="utf-8")
    parsed = yaml.safe_load(contents) or {}
    if not isinstance(parsed, MutableMapping):
        raise ValueError("Configuration YAML must define a mapping.")
    return config_from_dict(parsed)


def load_config(path: str | Path | None = None) -> HighlighterConfig:
    """Load configuration from YAML when provided, otherwise return defaults."""
    if path is None:
        return HighlighterConfig()
    return config_from_yaml(path)
