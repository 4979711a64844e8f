from __future__ import annotations

import logging
from bisect import bisect_left
from typing import Callable, Iterable, List, Tuple

from .analysis import AnalysisError, CategoryHighlight
from .host import EditorHost
from .models import Decoration, DecorationSet

logger = logging.getLogger(__name__)


def build_decorations(highlights: Iterable[CategoryHighlight]) -> DecorationSet:
    """
    Turn accepted highlights into a start-ordered decoration set.

    Highlights are taken in priority order; one that overlaps an already kept
    highlight is dropped, so the set never contains overlapping marks.
    """
    kept: List[Decoration] = []
    spans: List[Tuple[int, int]] = []
    for highlight in highlights:
        start, end = highlight.match.start, highlight.match.end
        idx = bisect_left(spans, (start, end))
        if idx > 0 and spans[idx - 1][1] > start:
            continue
        if idx < len(spans) and spans[idx][0] < end:
            continue
        spans.insert(idx, (start, end))
        kept.append(Decoration(start=start, end=end, class_name=highlight.class_name))
    return DecorationSet(kept)


class DecorationPublisher:
    """Replaces the host's highlight set, never merging into it."""

    def __init__(self, host: EditorHost, *, dev_mode: bool = False) -> None:
        self._host = host
        self._dev_mode = dev_mode
        self.last_error: AnalysisError | None = None

    @property
    def host(self) -> EditorHost:
        return self._host

    def publish(self, highlights: Iterable[CategoryHighlight]) -> DecorationSet:
        decorations = build_decorations(highlights)
        self._replace(decorations)
        return decorations

    def publish_analysis(self, run: Callable[[], List[CategoryHighlight]]) -> bool:
        """
        Run an analysis pass and publish its result.

        When the pass fails the current decorations stay on screen, the error
        is kept on `last_error` and False is returned.
        """
        try:
            highlights = run()
        except AnalysisError as exc:
            self.last_error = exc
            if self._dev_mode:
                logger.error("Error in NLP processing: %s", exc, exc_info=exc)
            else:
                logger.debug("Analysis pass failed; keeping previous highlights: %s", exc)
            return False
        self.last_error = None
        self.publish(highlights)
        return True

    def clear(self) -> None:
        self._replace(DecorationSet.empty())

    def _replace(self, decorations: DecorationSet) -> None:
        self._host.replace_decorations(
            decorations,
            selection=self._host.selection,
            scroll_into_view=False,
        )
