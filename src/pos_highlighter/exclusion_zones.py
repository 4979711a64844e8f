from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List

FENCED_CODE_RE = re.compile(r"```[\s\S]*?```")
INLINE_CODE_RE = re.compile(r"`[^`\n]+`")
FRONTMATTER_RE = re.compile(r"\A---[\s\S]*?---")
LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")


@dataclass(slots=True, frozen=True)
class ExclusionZone:
    """A region of markup that never receives highlights."""

    kind: str
    start: int
    end: int

    def contains(self, start: int, end: int) -> bool:
        return start >= self.start and end <= self.end


class ExclusionZoneDetector(ABC):
    """Finds text regions (code, frontmatter, link syntax) that are off limits."""

    @abstractmethod
    def find_zones(self, text: str) -> List[ExclusionZone]:
        """Return every exclusion zone in the text."""
        raise NotImplementedError

    def is_excluded(self, text: str, start: int, end: int) -> bool:
        """
        Return True when [start, end) lies fully inside one zone.

        A range that only partly overlaps a zone is not excluded.
        """
        return any(zone.contains(start, end) for zone in self.find_zones(text))


class RegexExclusionZoneDetector(ExclusionZoneDetector):
    """Pattern-based detector for markdown structure."""

    def find_zones(self, text: str) -> List[ExclusionZone]:
        zones: List[ExclusionZone] = []
        for match in FENCED_CODE_RE.finditer(text):
            zones.append(ExclusionZone("fenced_code", match.start(), match.end()))
        for match in INLINE_CODE_RE.finditer(text):
            zones.append(ExclusionZone("inline_code", match.start(), match.end()))
        # Frontmatter only counts when the document opens with it.
        frontmatter = FRONTMATTER_RE.match(text)
        if frontmatter:
            zones.append(ExclusionZone("frontmatter", 0, frontmatter.end()))
        for match in LINK_RE.finditer(text):
            zones.append(ExclusionZone("link", match.start(), match.end()))
        return zones


DEFAULT_DETECTOR: ExclusionZoneDetector = RegexExclusionZoneDetector()


def is_excluded_content(
    text: str,
    start: int,
    end: int,
    detector: ExclusionZoneDetector | None = None,
) -> bool:
    """Check whether [start, end) sits inside code, frontmatter, or a link."""
    return (detector or DEFAULT_DETECTOR).is_excluded(text, start, end)
