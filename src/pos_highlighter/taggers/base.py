from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, List, Mapping, Sequence

from ..models import TaggedMatch


class TaggedDocument(ABC):
    """Result of tagging a text: matches can be queried per category."""

    @abstractmethod
    def match(self, tag: str) -> List[TaggedMatch]:
        """Return every match for the category, in tagger order."""
        raise NotImplementedError


class Tagger(ABC):
    """Black-box part-of-speech tagger."""

    @abstractmethod
    def tag(self, text: str) -> TaggedDocument:
        """Analyse the text and return a queryable tagged document."""
        raise NotImplementedError


class StaticTaggedDocument(TaggedDocument):
    """Tagged document backed by a precomputed tag -> matches table."""

    def __init__(self, matches_by_tag: Mapping[str, Sequence[TaggedMatch]]) -> None:
        self._matches: Dict[str, List[TaggedMatch]] = {
            tag: list(matches) for tag, matches in matches_by_tag.items()
        }

    def match(self, tag: str) -> List[TaggedMatch]:
        return list(self._matches.get(tag, []))
