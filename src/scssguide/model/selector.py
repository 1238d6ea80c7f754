"""Selector model: classified selectors and the per-file unit of analysis."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from scssguide.model.tree import Stylesheet

if TYPE_CHECKING:
    from scssguide.classify.errors import ClassificationError


class PrefixKind(Enum):
    """Naming prefix carried by a class or placeholder token."""

    NONE = ""
    MODIFIER = "mod-"
    STATE = "is-"
    JS_HOOK = "js-"
    MIXIN = "%m-"
    UTILITY = "%u-"


class SelectorKind(Enum):
    """What a selector styles, according to the naming grammar."""

    BASE = "base"
    COMPONENT = "component"
    MODIFIER = "modifier"
    STATE = "state"
    UTILITY = "utility"
    MIXIN = "mixin"
    JS_HOOK = "js-hook"


class Section(Enum):
    """File sections, in the order they must appear."""

    BASE = 0
    MODIFIERS = 1
    STATE = 2
    MEDIA = 3

    @property
    def label(self) -> str:
        return _SECTION_LABELS[self]


_SECTION_LABELS = {
    Section.BASE: "Base",
    Section.MODIFIERS: "Modifiers",
    Section.STATE: "State",
    Section.MEDIA: "Media queries",
}


@dataclass(frozen=True)
class SelectorToken:
    """A single class or placeholder name taken from a compound selector."""

    raw: str
    prefix: PrefixKind = PrefixKind.NONE
    parent: str | None = None

    @property
    def segments(self) -> tuple[str, ...]:
        return tuple(self.raw.split("-"))

    @property
    def name(self) -> str:
        """The token without its prefix."""
        prefix = self.prefix.value.lstrip("%")
        if prefix and self.raw.startswith(prefix):
            return self.raw[len(prefix):]
        return self.raw


@dataclass(frozen=True)
class Ancestor:
    """The part of an enclosing selector that nested selectors depend on."""

    base_name: str
    kind: SelectorKind | None


@dataclass(frozen=True)
class ClassifiedSelector:
    """One selector (one item of a selector list) with its classification."""

    selector: str
    written: str
    base_name: str
    kind: SelectorKind
    depth: int = 0
    properties: tuple[str, ...] = ()
    tokens: tuple[SelectorToken, ...] = ()
    ancestors: tuple[Ancestor, ...] = ()
    section: Section = Section.BASE
    in_media: bool = False
    line: int = 0
    column: int = 0
    end_line: int = 0

    @property
    def parent(self) -> Ancestor | None:
        """The nearest enclosing classified selector, if any."""
        return self.ancestors[-1] if self.ancestors else None


@dataclass(frozen=True)
class SectionEntry:
    """A source position that belongs to one file section."""

    section: Section
    line: int
    column: int
    text: str


@dataclass(frozen=True)
class SectionBoundary:
    """Where a section starts, from a comment marker or first occurrence."""

    section: Section
    line: int
    from_marker: bool = False


@dataclass(frozen=True)
class ComponentFile:
    """One file's classified selectors plus everything rules need to see."""

    path: str
    lines: tuple[str, ...] = ()
    stylesheet: Stylesheet = field(default_factory=Stylesheet)
    selectors: tuple[ClassifiedSelector, ...] = ()
    entries: tuple[SectionEntry, ...] = ()
    boundaries: tuple[SectionBoundary, ...] = ()
    errors: tuple[ClassificationError, ...] = ()
    is_base: bool = False

    @property
    def markers(self) -> tuple[SectionBoundary, ...]:
        return tuple(b for b in self.boundaries if b.from_marker)

    def components(self) -> list[ClassifiedSelector]:
        return [s for s in self.selectors if s.kind is SelectorKind.COMPONENT]
