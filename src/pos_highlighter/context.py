from __future__ import annotations

import logging
from typing import Iterable

from .config import HighlighterConfig
from .editing_state import EditingStateScheduler
from .host import HeadlessEditor
from .models import PosConfig
from .preferences import HighlightPreferences
from .scheduling import Scheduler
from .taggers.base import Tagger

logger = logging.getLogger(__name__)


class ActiveViewHandle:
    """
    Reference to the editor that external preference changes should refresh.

    An editor attaches when it is created and detaches on teardown; once
    detached, external refresh requests are no-ops.
    """

    def __init__(self) -> None:
        self._view: EditingStateScheduler | None = None

    @property
    def view(self) -> EditingStateScheduler | None:
        return self._view

    def attach(self, view: EditingStateScheduler) -> None:
        self._view = view

    def detach(self, view: EditingStateScheduler | None = None) -> None:
        """Clear the reference; with `view`, only if that view is the active one."""
        if view is None or self._view is view:
            self._view = None

    def update_parts_of_speech(self) -> bool:
        """Re-analyse the active editor now. Returns False when none is attached."""
        view = self._view
        if view is None or view.destroyed:
            logger.debug("No active editor to refresh")
            return False
        return view.refresh_now()


class HighlightSession:
    """Wires a headless editor, its scheduler, and the active-view handle together."""

    def __init__(
        self,
        editor: HeadlessEditor,
        tagger: Tagger,
        preferences: HighlightPreferences,
        scheduler: Scheduler,
        config: HighlighterConfig | None = None,
        handle: ActiveViewHandle | None = None,
    ) -> None:
        self.editor = editor
        self.handle = handle or ActiveViewHandle()
        self.view = EditingStateScheduler(editor, tagger, preferences, scheduler, config)
        editor.add_listener(self.view.on_update)
        self.handle.attach(self.view)

    def close(self) -> None:
        self.view.destroy()
        self.editor.remove_listener(self.view.on_update)
        self.handle.detach(self.view)


def toggle_highlight(
    preferences: HighlightPreferences, setting_key: str, handle: ActiveViewHandle
) -> bool:
    """Flip one category and refresh the active editor; returns the new state."""
    enabled = preferences.toggle(setting_key)
    handle.update_parts_of_speech()
    return enabled


def toggle_all_highlights(
    preferences: HighlightPreferences,
    pos_configs: Iterable[PosConfig],
    handle: ActiveViewHandle,
) -> bool:
    """Switch every category together and refresh the active editor."""
    enabled = preferences.toggle_all(pos_configs)
    handle.update_parts_of_speech()
    return enabled
