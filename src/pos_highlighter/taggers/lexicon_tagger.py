from __future__ import annotations

from typing import Dict, Iterable, List, Mapping

from ..models import TaggedMatch, UnknownOffset
from ..tokenization import iter_words
from .base import StaticTaggedDocument, TaggedDocument, Tagger


class LexiconTagger(Tagger):
    """
    Word-list tagger that keeps the highlighter runnable without an NLP model.

    Matches are reported without offsets, once per distinct spelling, which
    leaves locating them in the text to the range resolver.
    """

    def __init__(self, lexicon: Mapping[str, Iterable[str]]) -> None:
        self._tags_by_word: Dict[str, List[str]] = {}
        for tag, words in lexicon.items():
            for word in words:
                normalized = word.strip().lower()
                if normalized:
                    self._tags_by_word.setdefault(normalized, []).append(tag)

    def tag(self, text: str) -> TaggedDocument:
        matches: Dict[str, List[TaggedMatch]] = {}
        seen: set[tuple[str, str]] = set()
        for word, _, _ in iter_words(text):
            for tag in self._tags_by_word.get(word.lower(), []):
                if (tag, word) in seen:
                    continue
                seen.add((tag, word))
                matches.setdefault(tag, []).append(
                    TaggedMatch(text=word, offset=UnknownOffset())
                )
        return StaticTaggedDocument(matches)
