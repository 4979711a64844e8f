from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Collection, List, Sequence, Set

from .constants import CARET_BUFFER, NO_CARET
from .exclusion_zones import ExclusionZoneDetector
from .matching import process_category
from .models import MatchRange, PosConfig
from .taggers.base import Tagger

logger = logging.getLogger(__name__)


class AnalysisError(RuntimeError):
    """Raised when a pass cannot complete (tagger failure or malformed output)."""


@dataclass(slots=True, frozen=True)
class CategoryHighlight:
    """An accepted range together with the style of the category that claimed it."""

    match: MatchRange
    class_name: str


def analyze_text(
    text: str,
    tagger: Tagger,
    pos_configs: Sequence[PosConfig],
    enabled_keys: Collection[str],
    caret: int = NO_CARET,
    *,
    caret_buffer: int = CARET_BUFFER,
    detector: ExclusionZoneDetector | None = None,
    dev_mode: bool = False,
) -> List[CategoryHighlight]:
    """
    Run one full analysis pass over `text`.

    The text is tagged once, then each enabled category is resolved in table
    order against a shared set of claimed ranges. The result is in category
    order; the publisher sorts it by position.
    """
    if not any(config.setting_key in enabled_keys for config in pos_configs):
        return []

    try:
        doc = tagger.tag(text)
    except Exception as exc:
        raise AnalysisError(f"Tagger failed: {exc}") from exc

    processed_keys: Set[str] = set()
    highlights: List[CategoryHighlight] = []
    categories_run = 0
    for config in pos_configs:
        if config.setting_key not in enabled_keys:
            continue
        categories_run += 1
        try:
            accepted = process_category(
                doc,
                text,
                config,
                caret,
                processed_keys,
                caret_buffer=caret_buffer,
                detector=detector,
                dev_mode=dev_mode,
            )
        except Exception as exc:
            raise AnalysisError(
                f"Could not resolve matches for {config.tag}: {exc}"
            ) from exc
        highlights.extend(
            CategoryHighlight(match=match, class_name=config.class_name)
            for match in accepted
        )

    logger.debug(
        "Analysis pass produced %s highlights across %s categories",
        len(highlights),
        categories_run,
    )
    return highlights
