from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Union


@dataclass(slots=True, frozen=True)
class MatchRange:
    """Half-open character interval [start, end) into the analysed text."""

    start: int
    end: int
    text: str

    @property
    def key(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass(slots=True)
class PosConfig:
    """One row of the style table: a grammatical category and how to show it."""

    tag: str
    class_name: str
    setting_key: str
    exclusion_tags: List[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class KnownOffset:
    """Tagger reported where the match sits in the document."""

    start: int
    length: int


@dataclass(slots=True, frozen=True)
class UnknownOffset:
    """Tagger reported the literal only; positions must be searched for."""


MatchOffset = Union[KnownOffset, UnknownOffset]


@dataclass(slots=True, frozen=True)
class TaggedMatch:
    """A single span the tagger classified under some category."""

    text: str
    offset: MatchOffset = UnknownOffset()


@dataclass(slots=True, frozen=True)
class Decoration:
    """Inline style mark over [start, end)."""

    start: int
    end: int
    class_name: str


class DecorationSet:
    """Immutable, start-ordered collection of decorations."""

    __slots__ = ("_items",)

    def __init__(self, decorations: List[Decoration] | None = None) -> None:
        # sorted() is stable, so equal starts keep insertion order.
        self._items: tuple[Decoration, ...] = tuple(
            sorted(decorations or [], key=lambda d: d.start)
        )

    @classmethod
    def empty(cls) -> "DecorationSet":
        return cls()

    def __iter__(self) -> Iterator[Decoration]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DecorationSet):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"DecorationSet({list(self._items)!r})"

    def map_edit(self, start: int, end: int, inserted: int) -> "DecorationSet":
        """
        Remap decorations across a replacement of [start, end) by `inserted` chars.

        Decorations entirely before the edit are kept, those entirely after are
        shifted, and any decoration the edit touches is dropped.
        """
        delta = inserted - (end - start)
        mapped: List[Decoration] = []
        for deco in self._items:
            if deco.end <= start:
                mapped.append(deco)
            elif deco.start >= end:
                mapped.append(
                    Decoration(deco.start + delta, deco.end + delta, deco.class_name)
                )
        return DecorationSet(mapped)
