from __future__ import annotations

import importlib
import logging
from typing import Any, Callable, Dict, List, cast

from ..constants import (
    ADJECTIVE,
    ADVERB,
    AUXILIARY,
    CONJUNCTION,
    MODAL,
    NOUN,
    PRONOUN,
    VERB,
)
from ..models import KnownOffset, TaggedMatch
from .base import StaticTaggedDocument, TaggedDocument, Tagger

logger = logging.getLogger(__name__)

spacy: Any | None = None

# Universal POS -> category ids understood by the style table.
UPOS_TO_TAGS: Dict[str, tuple[str, ...]] = {
    "NOUN": (NOUN,),
    "PROPN": (NOUN,),
    "VERB": (VERB,),
    "AUX": (AUXILIARY,),
    "ADJ": (ADJECTIVE,),
    "ADV": (ADVERB,),
    "CCONJ": (CONJUNCTION,),
    "SCONJ": (CONJUNCTION,),
    "PRON": (PRONOUN,),
}

# Penn Treebank fine-grained tag for modals ("can", "should").
MODAL_FINE_TAG = "MD"


class SpacyTagger(Tagger):
    """
    Tagger backed by a spaCy pipeline.

    Every token is reported with its character offset, so the range resolver
    never needs to fall back to searching the text.
    """

    def __init__(
        self,
        model: str = "en_core_web_sm",
        nlp: Callable[[str], Any] | None = None,
    ) -> None:
        self._model = model
        self._nlp = nlp

    @property
    def model(self) -> str:
        return self._model

    def tag(self, text: str) -> TaggedDocument:
        nlp = self._ensure_nlp()
        doc = nlp(text)
        matches: Dict[str, List[TaggedMatch]] = {}
        for token in doc:
            for tag in tags_for_token(token.pos_, token.tag_):
                matches.setdefault(tag, []).append(
                    TaggedMatch(
                        text=token.text,
                        offset=KnownOffset(start=token.idx, length=len(token.text)),
                    )
                )
        return StaticTaggedDocument(matches)

    def _ensure_nlp(self) -> Callable[[str], Any]:
        if self._nlp is None:
            module = _load_spacy()
            try:
                self._nlp = cast(Callable[[str], Any], module.load(self._model))
            except OSError as exc:
                raise RuntimeError(
                    f"spaCy model '{self._model}' not found. "
                    f"Run: python -m spacy download {self._model}"
                ) from exc
            logger.debug("Loaded spaCy model %s", self._model)
        return self._nlp


def tags_for_token(upos: str, fine_tag: str) -> tuple[str, ...]:
    """Translate spaCy's coarse and fine tags into category ids."""
    tags = UPOS_TO_TAGS.get(upos, ())
    if fine_tag == MODAL_FINE_TAG and MODAL not in tags:
        tags = tags + (MODAL,)
    return tags


def _load_spacy() -> Any:
    """Import spaCy on first use so the package works without it installed."""
    global spacy
    if spacy is not None:
        return spacy
    try:  # pragma: no cover - import guard
        spacy = importlib.import_module("spacy")
    except Exception as exc:  # pragma: no cover - handled at runtime
        raise RuntimeError(
            "spacy package is not installed. Install extras via 'pip install .[spacy]'."
        ) from exc
    return spacy
