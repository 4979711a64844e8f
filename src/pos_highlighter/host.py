from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List

from .constants import NO_CARET
from .models import DecorationSet

UpdateListener = Callable[[bool], None]


@dataclass(slots=True, frozen=True)
class Selection:
    """Main selection; `head` is where the caret is drawn."""

    anchor: int
    head: int


class EditorHost(ABC):
    """The editing surface the highlighter reads from and publishes to."""

    @property
    @abstractmethod
    def text(self) -> str:
        raise NotImplementedError

    @property
    @abstractmethod
    def selection(self) -> Selection | None:
        raise NotImplementedError

    @property
    def caret(self) -> int:
        selection = self.selection
        return selection.head if selection is not None else NO_CARET

    @property
    @abstractmethod
    def decorations(self) -> DecorationSet:
        raise NotImplementedError

    @abstractmethod
    def replace_decorations(
        self,
        decorations: DecorationSet,
        *,
        selection: Selection | None,
        scroll_into_view: bool = False,
    ) -> None:
        """Swap the whole decoration set in one update, restoring `selection`."""
        raise NotImplementedError

    @abstractmethod
    def request_measure(self) -> None:
        """Ask the host to re-render."""
        raise NotImplementedError


class HeadlessEditor(EditorHost):
    """
    In-memory editor used by the CLI and tests.

    Edits remap existing decorations the way a rendering editor would, and
    every registered listener hears about each update.
    """

    def __init__(self, text: str = "", caret: int = NO_CARET) -> None:
        self._text = text
        self._selection: Selection | None = (
            Selection(caret, caret) if caret != NO_CARET else None
        )
        self._decorations = DecorationSet.empty()
        self._listeners: List[UpdateListener] = []
        self.publish_count = 0
        self.measure_requests = 0
        self.last_scroll_into_view: bool | None = None

    @property
    def text(self) -> str:
        return self._text

    @property
    def selection(self) -> Selection | None:
        return self._selection

    @property
    def decorations(self) -> DecorationSet:
        return self._decorations

    def add_listener(self, listener: UpdateListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: UpdateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def apply_edit(self, start: int, end: int, insert: str = "") -> None:
        """Replace [start, end) with `insert` and place the caret after it."""
        if not 0 <= start <= end <= len(self._text):
            raise ValueError(
                f"Edit range [{start}, {end}) is outside document of length {len(self._text)}."
            )
        self._text = self._text[:start] + insert + self._text[end:]
        self._decorations = self._decorations.map_edit(start, end, len(insert))
        caret = start + len(insert)
        self._selection = Selection(caret, caret)
        self._notify(doc_changed=True)

    def insert(self, insert: str) -> None:
        """Type at the caret (or at the end when there is no caret)."""
        position = self.caret if self.caret != NO_CARET else len(self._text)
        self.apply_edit(position, position, insert)

    def set_caret(self, position: int) -> None:
        if position == NO_CARET:
            self._selection = None
        elif 0 <= position <= len(self._text):
            self._selection = Selection(position, position)
        else:
            raise ValueError(f"Caret {position} is outside the document.")
        self._notify(doc_changed=False)

    def replace_decorations(
        self,
        decorations: DecorationSet,
        *,
        selection: Selection | None,
        scroll_into_view: bool = False,
    ) -> None:
        self._decorations = decorations
        self._selection = selection
        self.publish_count += 1
        self.last_scroll_into_view = scroll_into_view

    def request_measure(self) -> None:
        self.measure_requests += 1

    def _notify(self, doc_changed: bool) -> None:
        for listener in list(self._listeners):
            listener(doc_changed)
