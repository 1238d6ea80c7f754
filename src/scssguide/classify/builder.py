"""Build a ComponentFile by classifying every selector of a parsed stylesheet."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from scssguide.classify.classifier import classify_selector
from scssguide.classify.errors import ClassificationError
from scssguide.classify.selectors import (
    appends_to_parent,
    resolve_parent,
    split_selector_list,
)
from scssguide.config import RuleConfiguration
from scssguide.model.selector import (
    Ancestor,
    ClassifiedSelector,
    ComponentFile,
    Section,
    SectionBoundary,
    SectionEntry,
    SelectorKind,
)
from scssguide.model.tree import AtBlock, Comment, Node, RuleBlock, Stylesheet

logger = logging.getLogger(__name__)

# At-rules whose bodies are not component styles.
SKIPPED_AT_RULES = frozenset({"mixin", "function", "font-face", "page", "keyframes"})

_MARKER_RE = re.compile(
    r"^(?P<section>base|modifiers?|states?|media(?:[ -]?quer(?:y|ies))?)\s*:?$",
    re.IGNORECASE,
)

_MARKER_SECTIONS = {
    "base": Section.BASE,
    "modifier": Section.MODIFIERS,
    "state": Section.STATE,
    "media": Section.MEDIA,
}


@dataclass(frozen=True)
class _Scope:
    """One resolved alternative of an enclosing rule."""

    selector: str
    ancestors: tuple[Ancestor, ...]
    ancestor: Ancestor


def marker_section(comment: Comment) -> Section | None:
    """The section a ``// Modifiers``-style comment announces, if any."""
    match = _MARKER_RE.match(comment.body)
    if match is None:
        return None
    word = match.group("section").lower()
    for prefix, section in _MARKER_SECTIONS.items():
        if word.startswith(prefix):
            return section
    return None


def _skipped(block: AtBlock) -> bool:
    return block.name in SKIPPED_AT_RULES or block.name.endswith("keyframes")


class _Builder:
    def __init__(self, is_base: bool) -> None:
        self.is_base = is_base
        self.known_components: set[str] = set()
        self.selectors: list[ClassifiedSelector] = []
        self.entries: list[SectionEntry] = []
        self.markers: list[SectionBoundary] = []
        self.errors: list[ClassificationError] = []
        self._error_keys: set[tuple[int, int, str]] = set()

    def visit(self, nodes: list[Node], scopes: list[_Scope | None], in_media: bool) -> None:
        for node in nodes:
            if isinstance(node, Comment):
                section = marker_section(node)
                if section is not None:
                    self.markers.append(SectionBoundary(section, node.line, from_marker=True))
            elif isinstance(node, AtBlock):
                if _skipped(node):
                    continue
                media = in_media or node.name == "media"
                if node.name == "media":
                    self.entries.append(
                        SectionEntry(Section.MEDIA, node.line, node.column,
                                     f"@media {node.params}")
                    )
                self.visit(node.children, scopes, media)
            elif isinstance(node, RuleBlock):
                children = self.rule(node, scopes, in_media)
                self.visit(node.children, children, in_media)

    def rule(
        self, block: RuleBlock, scopes: list[_Scope | None], in_media: bool
    ) -> list[_Scope | None]:
        properties = tuple(d.property for d in block.properties)
        children: list[_Scope | None] = []
        for written in split_selector_list(block.selector):
            for scope in scopes:
                parent = scope.selector if scope else None
                resolved = resolve_parent(written, parent)
                if scope is None:
                    ancestors: tuple[Ancestor, ...] = ()
                elif "&" in written and not appends_to_parent(written):
                    # Same element as the parent.
                    ancestors = scope.ancestors
                else:
                    ancestors = scope.ancestors + (scope.ancestor,)
                ancestor = Ancestor(base_name="", kind=None)
                if "#{" in resolved:
                    logger.debug("Skipping interpolated selector %r", resolved)
                else:
                    classified = self.classify(block, written, resolved, ancestors,
                                               properties, in_media)
                    if classified is not None:
                        ancestor = Ancestor(classified.base_name, classified.kind)
                children.append(_Scope(resolved, ancestors, ancestor))
        return children

    def classify(
        self,
        block: RuleBlock,
        written: str,
        resolved: str,
        ancestors: tuple[Ancestor, ...],
        properties: tuple[str, ...],
        in_media: bool,
    ) -> ClassifiedSelector | None:
        try:
            classified = classify_selector(
                resolved,
                ancestors,
                written=written,
                known_components=self.known_components,
                properties=properties,
                base_context=self.is_base,
                nested_rules=bool(block.nested_rules),
                in_media=in_media,
                line=block.line,
                column=block.column,
                end_line=block.end_line,
            )
        except ClassificationError as exc:
            key = (exc.line, exc.column, exc.rule_id)
            if key not in self._error_keys:
                # A selector-list parent classifies each nested rule once per alternative.
                logger.debug("Line %d: %s: %s", block.line, exc.rule_id, exc)
                self._error_keys.add(key)
                self.errors.append(exc)
            return None
        if classified.kind is SelectorKind.COMPONENT:
            self.known_components.add(classified.base_name)
        self.selectors.append(classified)
        self.entries.append(
            SectionEntry(classified.section, classified.line, classified.column, written)
        )
        return classified

    def boundaries(self) -> tuple[SectionBoundary, ...]:
        if self.markers:
            return tuple(self.markers)
        seen: dict[Section, SectionBoundary] = {}
        for entry in self.entries:
            seen.setdefault(entry.section, SectionBoundary(entry.section, entry.line))
        return tuple(seen.values())


def build_component_file(
    path: str,
    source: str,
    stylesheet: Stylesheet,
    config: RuleConfiguration | None = None,
) -> ComponentFile:
    """Classify every selector of *stylesheet* in one pass over the tree.

    Classification errors are collected rather than raised, so one bad
    selector never hides the rest of the file.
    """
    config = config or RuleConfiguration()
    is_base = config.is_base_file(path)
    builder = _Builder(is_base)
    builder.visit(stylesheet.children, [None], in_media=False)
    logger.debug(
        "%s: %d selector(s) classified, %d classification error(s)",
        path, len(builder.selectors), len(builder.errors),
    )
    return ComponentFile(
        path=path,
        lines=tuple(source.splitlines()),
        stylesheet=stylesheet,
        selectors=tuple(builder.selectors),
        entries=tuple(builder.entries),
        boundaries=builder.boundaries(),
        errors=tuple(builder.errors),
        is_base=is_base,
    )
