"""Stylesheet tree model: the structural nodes produced by the SCSS parser."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Union


@dataclass(frozen=True)
class Comment:
    """A ``/* block */`` or ``// line`` comment."""

    text: str
    line: int
    column: int
    end_line: int

    @property
    def body(self) -> str:
        """The comment text without its delimiters."""
        raw = self.text.strip()
        if raw.startswith("//"):
            return raw[2:].strip()
        if raw.startswith("/*"):
            raw = raw[2:]
        if raw.endswith("*/"):
            raw = raw[:-2]
        return raw.strip(" *\n\t")


@dataclass(frozen=True)
class Declaration:
    """A ``property: value`` pair (including ``$variable: value``)."""

    property: str
    value: str
    raw: str
    line: int
    column: int
    end_line: int

    @property
    def is_variable(self) -> bool:
        return self.property.startswith("$")


@dataclass(frozen=True)
class AtStatement:
    """A body-less at-rule such as ``@include x;`` or ``@extend %u-y;``."""

    name: str
    params: str
    line: int
    column: int


@dataclass(frozen=True)
class RuleBlock:
    """A selector followed by a ``{ ... }`` body."""

    selector: str
    children: list[Node] = field(default_factory=list)
    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0

    @property
    def declarations(self) -> list[Declaration]:
        return [c for c in self.children if isinstance(c, Declaration)]

    @property
    def properties(self) -> list[Declaration]:
        """Declarations excluding ``$variables``."""
        return [d for d in self.declarations if not d.is_variable]

    @property
    def blocks(self) -> list[RuleBlock | AtBlock]:
        return [c for c in self.children if isinstance(c, (RuleBlock, AtBlock))]

    @property
    def nested_rules(self) -> list[RuleBlock]:
        return [c for c in self.children if isinstance(c, RuleBlock)]


@dataclass(frozen=True)
class AtBlock:
    """An at-rule with a body, such as ``@media`` or ``@mixin``."""

    name: str
    params: str
    children: list[Node] = field(default_factory=list)
    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0

    @property
    def declarations(self) -> list[Declaration]:
        return [c for c in self.children if isinstance(c, Declaration)]

    @property
    def properties(self) -> list[Declaration]:
        return [d for d in self.declarations if not d.is_variable]

    @property
    def blocks(self) -> list[RuleBlock | AtBlock]:
        return [c for c in self.children if isinstance(c, (RuleBlock, AtBlock))]


Node = Union[Comment, Declaration, AtStatement, RuleBlock, AtBlock]


@dataclass(frozen=True)
class Stylesheet:
    """The top-level nodes of one parsed SCSS source, in source order."""

    children: list[Node] = field(default_factory=list)

    def walk(self):
        """Yield ``(node, depth)`` for every node, depth-first in source order."""
        stack: list[tuple[Node, int]] = [(n, 0) for n in reversed(self.children)]
        while stack:
            node, depth = stack.pop()
            yield node, depth
            if isinstance(node, (RuleBlock, AtBlock)):
                stack.extend((c, depth + 1) for c in reversed(node.children))
