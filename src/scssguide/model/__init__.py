"""scssguide model layer -- public type re-exports."""

from scssguide.model.finding import Finding, Severity
from scssguide.model.selector import (
    Ancestor,
    ClassifiedSelector,
    ComponentFile,
    PrefixKind,
    Section,
    SectionBoundary,
    SectionEntry,
    SelectorKind,
    SelectorToken,
)
from scssguide.model.tree import AtBlock, AtStatement, Comment, Declaration, RuleBlock, Stylesheet

__all__ = [
    # finding
    "Severity",
    "Finding",
    # tree
    "Comment",
    "Declaration",
    "AtStatement",
    "RuleBlock",
    "AtBlock",
    "Stylesheet",
    # selector
    "PrefixKind",
    "SelectorKind",
    "Section",
    "SelectorToken",
    "Ancestor",
    "ClassifiedSelector",
    "SectionEntry",
    "SectionBoundary",
    "ComponentFile",
]
