from __future__ import annotations

from typing import TYPE_CHECKING, Any

from .base import StaticTaggedDocument, TaggedDocument, Tagger
from .lexicon_tagger import LexiconTagger
from .spacy_tagger import SpacyTagger

if TYPE_CHECKING:  # pragma: no cover - import for typing only
    from ..config import HighlighterConfig

__all__ = [
    "Tagger",
    "TaggedDocument",
    "StaticTaggedDocument",
    "LexiconTagger",
    "SpacyTagger",
    "create_tagger",
    "build_tagger_from_config",
]


def create_tagger(name: str, **kwargs: Any) -> Tagger:
    """Factory for building taggers by name."""
    normalized = name.lower().strip()
    if normalized == "spacy":
        return SpacyTagger(**kwargs)
    if normalized == "lexicon":
        return LexiconTagger(kwargs.get("lexicon", {}))
    raise ValueError(f"Unknown tagger '{name}'.")


def build_tagger_from_config(config: "HighlighterConfig") -> Tagger:
    """Convenience helper to build a tagger from HighlighterConfig."""
    normalized = config.tagger_name.lower().strip()
    if normalized == "spacy":
        return create_tagger(config.tagger_name, model=config.spacy.model)
    if normalized == "lexicon":
        return create_tagger(config.tagger_name, lexicon=config.lexicon)
    return create_tagger(config.tagger_name)
