"""Style rules: layout of the source text and a few authoring preferences."""

from __future__ import annotations

import re
from collections import defaultdict

from scssguide.classify.selectors import parse_compound, split_compounds
from scssguide.config import RuleConfiguration
from scssguide.model.finding import Finding
from scssguide.model.selector import ClassifiedSelector, ComponentFile, SelectorKind
from scssguide.model.tree import AtBlock, AtStatement, Comment, Declaration, Node, RuleBlock
from scssguide.validation.catalog import make_finding

BLANK_LINES_BETWEEN_BLOCKS = 2

# Properties taking one to four top/right/bottom/left values.
BOX_SHORTHANDS = frozenset({
    "margin",
    "padding",
    "border-width",
    "border-style",
    "border-color",
    "inset",
})

_LONGHAND_SIDES = ("top", "right", "bottom", "left")
_LONGHAND_GROUPS = ("margin", "padding")

_COLON_RE = re.compile(r"^(?P<before>\s*):(?P<after>.*)$", re.DOTALL)

_NODE_LABELS: dict[type, str] = {
    RuleBlock: "rule",
    AtBlock: "at-rule",
    AtStatement: "at-rule",
    Declaration: "declaration",
    Comment: "comment",
}


def _blocks(cf: ComponentFile) -> list[RuleBlock | AtBlock]:
    return [n for n, _ in cf.stylesheet.walk() if isinstance(n, (RuleBlock, AtBlock))]


def _first_on_line(cf: ComponentFile, line: int, column: int) -> str | None:
    """Leading whitespace before *column*, or None if other text precedes it."""
    if not 0 < line <= len(cf.lines):
        return None
    prefix = cf.lines[line - 1][: column - 1]
    return None if prefix.strip() else prefix


# ---------------------------------------------------------------------------
# Layout
# ---------------------------------------------------------------------------


def check_declaration_per_line(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """At most one declaration (or body-less at-rule) per line."""
    findings: list[Finding] = []
    containers: list[list[Node]] = [cf.stylesheet.children]
    containers.extend(b.children for b in _blocks(cf))
    for children in containers:
        by_line: dict[int, list[Declaration | AtStatement]] = defaultdict(list)
        for child in children:
            if isinstance(child, (Declaration, AtStatement)):
                by_line[child.line].append(child)
        for line, items in sorted(by_line.items()):
            if len(items) < 2:
                continue
            second = items[1]
            text = second.raw if isinstance(second, Declaration) else f"@{second.name}"
            findings.append(
                make_finding(
                    cf.path, "DeclarationPerLine", line, second.column,
                    f"{len(items)} declarations on one line; put each on its own line.",
                    text=text,
                )
            )
    return findings


def check_blank_lines(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """Exactly two blank lines after each top-level block."""
    findings: list[Finding] = []
    children = cf.stylesheet.children
    for previous, current in zip(children, children[1:]):
        if not isinstance(previous, (RuleBlock, AtBlock)):
            continue
        if not isinstance(current, (RuleBlock, AtBlock, Comment)):
            continue
        if current.line <= previous.end_line:
            continue
        between = cf.lines[previous.end_line : current.line - 1]
        blank = sum(1 for line in between if not line.strip())
        if blank != BLANK_LINES_BETWEEN_BLOCKS:
            findings.append(
                make_finding(
                    cf.path, "BlankLinesBetweenBlocks", current.line, current.column,
                    f"Expected {BLANK_LINES_BETWEEN_BLOCKS} blank lines between "
                    f"top-level blocks, found {blank}.",
                )
            )
    return findings


def check_colon_spacing(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """``property: value`` with no space before and one space after the colon."""
    findings: list[Finding] = []
    for node, _depth in cf.stylesheet.walk():
        if not isinstance(node, Declaration):
            continue
        rest = node.raw[len(node.property):]
        match = _COLON_RE.match(rest)
        if match is None:
            continue
        colon_column = node.column + len(node.property) + len(match.group("before"))
        if match.group("before"):
            message = f"Remove the space before ':' in '{node.property}'."
        elif not re.match(r" \S", match.group("after")):
            message = f"Use exactly one space after ':' in '{node.property}'."
        else:
            continue
        findings.append(
            make_finding(cf.path, "ColonSpacing", node.line, colon_column, message,
                         text=node.raw)
        )
    return findings


def check_indentation(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """Lines start at ``indent_width`` spaces per nesting level; no tabs."""
    findings: list[Finding] = []
    width = config.indent_width

    def check(line: int, column: int, depth: int, what: str) -> None:
        prefix = _first_on_line(cf, line, column)
        if prefix is None:
            return
        expected = depth * width
        if "\t" in prefix:
            message = f"Indent {what} with spaces, not tabs."
        elif len(prefix) != expected:
            message = f"Expected {what} indented by {expected} spaces, found {len(prefix)}."
        else:
            return
        findings.append(make_finding(cf.path, "Indentation", line, column, message))

    for node, depth in cf.stylesheet.walk():
        check(node.line, node.column, depth, _NODE_LABELS[type(node)])
        if isinstance(node, (RuleBlock, AtBlock)):
            check(node.end_line, node.end_column, depth, "closing brace")
    return findings


def check_line_length(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """Lines are at most ``max_line_length`` characters (URLs excepted)."""
    limit = config.max_line_length
    findings: list[Finding] = []
    for number, line in enumerate(cf.lines, start=1):
        if len(line) > limit and "://" not in line:
            findings.append(
                make_finding(
                    cf.path, "LineLength", number, limit + 1,
                    f"Line is {len(line)} characters long (limit {limit}).",
                )
            )
    return findings


def check_trailing_whitespace(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    findings: list[Finding] = []
    for number, line in enumerate(cf.lines, start=1):
        stripped = line.rstrip(" \t")
        if stripped != line:
            findings.append(
                make_finding(
                    cf.path, "TrailingWhitespace", number, len(stripped) + 1,
                    "Trailing whitespace.",
                )
            )
    return findings


# ---------------------------------------------------------------------------
# Shorthand heuristic
# ---------------------------------------------------------------------------


def collapse_box_values(values: list[str]) -> list[str]:
    """Shortest equivalent form of 1-4 top/right/bottom/left values."""
    if len(values) == 1:
        return values
    top, right = values[0], values[1]
    bottom = values[2] if len(values) > 2 else top
    left = values[3] if len(values) > 3 else right
    if left != right:
        return [top, right, bottom, left]
    if bottom != top:
        return [top, right, bottom]
    if right != top:
        return [top, right]
    return [top]


def check_shorthand(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """Box-model values that could be written shorter.

    Best effort: only plain space-separated values are compared textually,
    so ``0`` and ``0px`` count as different.
    """
    findings: list[Finding] = []
    for block in _blocks(cf):
        properties = block.properties
        for decl in properties:
            name = decl.property.lower()
            if name not in BOX_SHORTHANDS:
                continue
            value = decl.value.replace("!important", "").strip()
            if any(ch in value for ch in "(,/#$"):
                continue
            values = value.split()
            if not 2 <= len(values) <= 4:
                continue
            collapsed = collapse_box_values(values)
            if len(collapsed) < len(values):
                findings.append(
                    make_finding(
                        cf.path, "ShorthandPreferred", decl.line, decl.column,
                        f"'{decl.property}: {value}' can be written as "
                        f"'{decl.property}: {' '.join(collapsed)}'.",
                        text=decl.raw,
                    )
                )
        by_name = {d.property.lower(): d for d in properties}
        for group in _LONGHAND_GROUPS:
            longhands = [by_name.get(f"{group}-{side}") for side in _LONGHAND_SIDES]
            if all(longhands):
                first = min(longhands, key=lambda d: (d.line, d.column))  # type: ignore[union-attr]
                findings.append(
                    make_finding(
                        cf.path, "ShorthandPreferred", first.line, first.column,
                        f"All four {group}-* longhands are set; use the '{group}' shorthand.",
                        text=group,
                    )
                )
    return findings


# ---------------------------------------------------------------------------
# Size heuristics
# ---------------------------------------------------------------------------


def check_file_length(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """Soft limit on file length; long component files should be split."""
    limit = config.max_component_file_lines
    if len(cf.lines) <= limit:
        return []
    return [
        make_finding(
            cf.path, "FileLength", limit + 1, 1,
            f"File has {len(cf.lines)} lines (limit {limit}); consider splitting it "
            "into smaller components.",
        )
    ]


class _Roots:
    """Root component names, discovered in file order."""

    def __init__(self) -> None:
        self.names: list[str] = []

    def owner(self, name: str) -> str:
        for root in self.names:
            if name == root or name.startswith(root + "-"):
                return root
        self.names.append(name)
        return name


def _modifier_owner(selector: ClassifiedSelector) -> str | None:
    """Component of a modifier or state compound in front of the subject."""
    for text in split_compounds(selector.selector)[:-1]:
        classes = parse_compound(text).classes
        if not any(c.startswith(("mod-", "is-")) for c in classes):
            continue
        for name in classes:
            if not name.startswith(("mod-", "is-", "js-")):
                return name
    return None


def check_component_length(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """Soft limit on the lines owned by one root component.

    A top-level rule such as ``.nav-item.mod-sign-up .menu-text`` counts
    toward the modifier's component or toward ``menu`` depending on
    ``modifier_descendant_owner``.
    """
    limit = config.max_component_file_lines
    roots = _Roots()
    owned: dict[str, int] = defaultdict(int)
    first_line: dict[str, ClassifiedSelector] = {}
    by_position = {(s.line, s.column): s for s in reversed(cf.selectors)}
    for node in cf.stylesheet.children:
        if not isinstance(node, RuleBlock):
            continue
        selector = by_position.get((node.line, node.column))
        if selector is None or selector.kind in (SelectorKind.BASE, SelectorKind.UTILITY,
                                                 SelectorKind.MIXIN):
            continue
        name = selector.base_name
        if config.modifier_descendant_owner == "modifier":
            name = _modifier_owner(selector) or name
        owner = roots.owner(name)
        owned[owner] += node.end_line - node.line + 1
        first_line.setdefault(owner, selector)
    findings: list[Finding] = []
    for owner, count in owned.items():
        if count > limit:
            selector = first_line[owner]
            findings.append(
                make_finding(
                    cf.path, "ComponentLength", selector.line, selector.column,
                    f"Component '.{owner}' spans {count} lines (limit {limit}); "
                    "consider breaking it up.",
                    text=owner,
                )
            )
    return findings


def check_extend_placeholder(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """``@extend`` only targets ``%m-``/``%u-`` placeholders."""
    findings: list[Finding] = []
    for node, _depth in cf.stylesheet.walk():
        if not isinstance(node, AtStatement) or node.name != "extend":
            continue
        target = node.params.replace("!optional", "").strip()
        if not target.startswith(("%m-", "%u-")):
            findings.append(
                make_finding(
                    cf.path, "ExtendPlaceholderOnly", node.line, node.column,
                    f"@extend {target}: extend a %m- or %u- placeholder instead.",
                    text=target,
                )
            )
    return findings


STYLE_RULES = [
    check_declaration_per_line,
    check_blank_lines,
    check_colon_spacing,
    check_indentation,
    check_line_length,
    check_trailing_whitespace,
    check_shorthand,
    check_file_length,
    check_component_length,
    check_extend_placeholder,
]
