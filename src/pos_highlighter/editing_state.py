from __future__ import annotations

import logging
from enum import Enum
from typing import List

from .analysis import AnalysisError, CategoryHighlight, analyze_text
from .config import HighlighterConfig
from .exclusion_zones import ExclusionZoneDetector
from .host import EditorHost
from .preferences import HighlightPreferences
from .publisher import DecorationPublisher
from .scheduling import Scheduler, TimerHandle
from .taggers.base import Tagger

logger = logging.getLogger(__name__)


class EditingState(Enum):
    IDLE = "idle"
    ACTIVELY_EDITING = "actively_editing"


class EditingStateScheduler:
    """
    Decides when analysis runs for one editor.

    Any text change marks the editor as actively edited and (re)starts the
    activity timer; while editing, analysis requests clear the highlights
    instead of running. When the activity timer expires the state returns to
    idle and a debounced analysis is scheduled. Both timers are cancelled
    before being rescheduled, so at most one of each kind is live.
    """

    def __init__(
        self,
        host: EditorHost,
        tagger: Tagger,
        preferences: HighlightPreferences,
        scheduler: Scheduler,
        config: HighlighterConfig | None = None,
        *,
        detector: ExclusionZoneDetector | None = None,
    ) -> None:
        self._host = host
        self._tagger = tagger
        self._preferences = preferences
        self._scheduler = scheduler
        self._config = config or HighlighterConfig()
        self._detector = detector
        self._publisher = DecorationPublisher(host, dev_mode=self._config.dev_mode)
        self._state = EditingState.IDLE
        self._analysis_timer: TimerHandle | None = None
        self._activity_timer: TimerHandle | None = None
        self._has_initial_analysis = False
        self._destroyed = False

    @property
    def state(self) -> EditingState:
        return self._state

    @property
    def host(self) -> EditorHost:
        return self._host

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def last_error(self) -> AnalysisError | None:
        """Why the most recent pass failed, or None after a successful one."""
        return self._publisher.last_error

    @property
    def has_pending_analysis(self) -> bool:
        return self._analysis_timer is not None and not self._analysis_timer.cancelled

    @property
    def has_pending_activity_timer(self) -> bool:
        return self._activity_timer is not None and not self._activity_timer.cancelled

    def on_update(self, doc_changed: bool) -> None:
        """Handle an editor update notification."""
        if self._destroyed:
            return
        if not self._preferences.has_any_enabled(self._config.pos_configs):
            self.cancel_timers()
            self._state = EditingState.IDLE
            return

        if doc_changed:
            self._state = EditingState.ACTIVELY_EDITING
            self._cancel_analysis_timer()
            if self._activity_timer is not None:
                self._activity_timer.cancel()
            self._activity_timer = self._scheduler.call_later(
                self._config.activity_timeout_ms, self._on_activity_timeout
            )
        elif not self._has_initial_analysis:
            self._has_initial_analysis = True
            self.schedule_analysis()

    def schedule_analysis(self) -> None:
        """Request a debounced pass, or clear highlights while editing."""
        if self._destroyed:
            return
        self._cancel_analysis_timer()
        if self._state is EditingState.ACTIVELY_EDITING:
            self._publisher.clear()
            return
        self._analysis_timer = self._scheduler.call_later(
            self._config.debounce_ms, self.analyze_document
        )

    def analyze_document(self) -> bool:
        """Run a pass now unless the user is typing; returns True on publish."""
        self._analysis_timer = None
        if self._destroyed or self._state is EditingState.ACTIVELY_EDITING:
            return False
        return self._publisher.publish_analysis(self._run_pass)

    def refresh_now(self) -> bool:
        """
        Re-analyse immediately, skipping the debounce and the editing check.

        Used when highlight preferences change outside the editor.
        """
        if self._destroyed:
            logger.debug("Ignoring refresh for a destroyed editor")
            return False
        if not self._preferences.has_any_enabled(self._config.pos_configs):
            self.cancel_timers()
            self._state = EditingState.IDLE
        published = self._publisher.publish_analysis(self._run_pass)
        self._host.request_measure()
        return published

    def cancel_timers(self) -> None:
        self._cancel_analysis_timer()
        if self._activity_timer is not None:
            self._activity_timer.cancel()
            self._activity_timer = None

    def destroy(self) -> None:
        self.cancel_timers()
        self._destroyed = True

    def _on_activity_timeout(self) -> None:
        self._activity_timer = None
        if self._destroyed:
            return
        self._state = EditingState.IDLE
        self.schedule_analysis()

    def _cancel_analysis_timer(self) -> None:
        if self._analysis_timer is not None:
            self._analysis_timer.cancel()
            self._analysis_timer = None

    def _run_pass(self) -> List[CategoryHighlight]:
        config = self._config
        return analyze_text(
            self._host.text,
            self._tagger,
            config.pos_configs,
            self._preferences.enabled_keys(config.pos_configs),
            self._host.caret,
            caret_buffer=config.caret_buffer,
            detector=self._detector,
            dev_mode=config.dev_mode,
        )
