"""
Pure functions that turn tagger output into validated highlight ranges.

Nothing here touches the editor; every function works on plain text plus a
tagged document, which keeps the range logic testable on its own.
"""

from __future__ import annotations

import logging
import re
from typing import List, Sequence, Set

from .constants import CARET_BUFFER, NO_CARET
from .exclusion_zones import (
    DEFAULT_DETECTOR,
    ExclusionZone,
    ExclusionZoneDetector,
)
from .models import KnownOffset, MatchRange, PosConfig
from .taggers.base import TaggedDocument

logger = logging.getLogger(__name__)


def build_exclusion_set(doc: TaggedDocument, exclusion_tags: Sequence[str]) -> Set[str]:
    """Collect the lower-cased literals of every match under the given tags."""
    exclusions: Set[str] = set()
    for tag in exclusion_tags:
        for match in doc.match(tag):
            if match.text and match.text.strip():
                exclusions.add(match.text.lower())
    return exclusions


def get_match_ranges(
    doc: TaggedDocument,
    tag: str,
    text: str,
    exclusions: Set[str],
) -> List[MatchRange]:
    """
    Resolve every match for `tag` into character ranges.

    Matches with a usable offset yield one range. Matches without one are
    located by a word-bounded search over the whole text, yielding a range per
    occurrence. Output follows tagger order, not document order.
    """
    ranges: List[MatchRange] = []
    for match in doc.match(tag):
        match_text = match.text
        if not match_text or not match_text.strip() or match_text.lower() in exclusions:
            continue

        offset = match.offset
        if isinstance(offset, KnownOffset) and offset.start >= 0 and offset.length > 0:
            ranges.append(
                MatchRange(
                    start=offset.start,
                    end=offset.start + offset.length,
                    text=match_text,
                )
            )
            continue

        pattern = re.compile(rf"\b{re.escape(match_text)}\b")
        for found in pattern.finditer(text):
            ranges.append(
                MatchRange(start=found.start(), end=found.end(), text=match_text)
            )
    return ranges


def is_range_being_edited(
    start: int, end: int, caret: int, buffer: int = CARET_BUFFER
) -> bool:
    """Return True when the caret sits inside or just beside [start, end]."""
    if caret == NO_CARET:
        return False
    return (start - buffer <= caret <= end + buffer) or (start <= caret <= end)


def has_valid_bounds(candidate: MatchRange, text: str) -> bool:
    return 0 <= candidate.start < candidate.end <= len(text)


def is_valid_range(
    candidate: MatchRange,
    text: str,
    caret: int,
    processed_keys: Set[str],
    *,
    caret_buffer: int = CARET_BUFFER,
    detector: ExclusionZoneDetector | None = None,
    zones: Sequence[ExclusionZone] | None = None,
) -> bool:
    """Check bounds, duplicates, exclusion zones, and caret proximity."""
    if not has_valid_bounds(candidate, text):
        return False
    if candidate.key in processed_keys:
        return False
    if zones is None:
        zones = (detector or DEFAULT_DETECTOR).find_zones(text)
    if any(zone.contains(candidate.start, candidate.end) for zone in zones):
        return False
    if is_range_being_edited(candidate.start, candidate.end, caret, caret_buffer):
        return False
    return True


def process_category(
    doc: TaggedDocument,
    text: str,
    config: PosConfig,
    caret: int,
    processed_keys: Set[str],
    *,
    caret_buffer: int = CARET_BUFFER,
    detector: ExclusionZoneDetector | None = None,
    dev_mode: bool = False,
) -> List[MatchRange]:
    """
    Return the accepted ranges for one category and record them as claimed.

    `processed_keys` is shared by every category in an analysis pass, so the
    first category to claim a range keeps it.
    """
    exclusions = (
        build_exclusion_set(doc, config.exclusion_tags)
        if config.exclusion_tags
        else set()
    )
    candidates = get_match_ranges(doc, config.tag, text, exclusions)
    zones = (detector or DEFAULT_DETECTOR).find_zones(text) if candidates else []

    accepted: List[MatchRange] = []
    for candidate in candidates:
        if is_valid_range(
            candidate,
            text,
            caret,
            processed_keys,
            caret_buffer=caret_buffer,
            zones=zones,
        ):
            accepted.append(candidate)
            processed_keys.add(candidate.key)
        elif dev_mode and not has_valid_bounds(candidate, text):
            logger.warning(
                "Invalid range detected for %s: start=%s end=%s text=%r",
                config.tag,
                candidate.start,
                candidate.end,
                candidate.text,
            )
    return accepted
