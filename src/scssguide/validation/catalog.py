"""Rule catalog: every rule id with its group and default severity."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from scssguide.model.finding import Finding, Severity


class RuleGroup(Enum):
    FILE = "file"
    CLASSIFICATION = "classification"
    NAMING = "naming"
    ORDERING = "ordering"
    STYLE = "style"


@dataclass(frozen=True)
class RuleInfo:
    rule_id: str
    group: RuleGroup
    severity: Severity
    summary: str


_CATALOG = (
    # File-level failures
    RuleInfo("IOError", RuleGroup.FILE, Severity.FATAL, "File could not be read."),
    RuleInfo("ParseError", RuleGroup.FILE, Severity.FATAL, "File could not be parsed."),
    RuleInfo("InternalError", RuleGroup.FILE, Severity.FATAL,
             "Unexpected failure while checking a file."),
    # Classification
    RuleInfo("MalformedSelectorError", RuleGroup.CLASSIFICATION, Severity.ERROR,
             "Selector uses ids, stray elements, bad characters or an empty class."),
    RuleInfo("OrphanModifierError", RuleGroup.CLASSIFICATION, Severity.ERROR,
             "Modifier class without a component defined earlier in the file."),
    RuleInfo("OrphanStateError", RuleGroup.CLASSIFICATION, Severity.ERROR,
             "State class without a component defined earlier in the file."),
    RuleInfo("NestedUtilityError", RuleGroup.CLASSIFICATION, Severity.ERROR,
             "Mixin or utility placeholder containing nested rules."),
    RuleInfo("StyledJsHookError", RuleGroup.CLASSIFICATION, Severity.ERROR,
             "JavaScript hook class carrying styles."),
    # Naming
    RuleInfo("ClassNameFormat", RuleGroup.NAMING, Severity.ERROR,
             "Class names are lowercase and hyphen-separated."),
    RuleInfo("IdSelector", RuleGroup.NAMING, Severity.ERROR,
             "No id selectors outside Base files."),
    RuleInfo("BareElementSelector", RuleGroup.NAMING, Severity.ERROR,
             "No bare element selectors outside Base files."),
    RuleInfo("DescendantChain", RuleGroup.NAMING, Severity.ERROR,
             "Nested component names extend their ancestor's name."),
    # Ordering
    RuleInfo("SectionOrderViolation", RuleGroup.ORDERING, Severity.ERROR,
             "Base, then Modifiers, then State, then media queries."),
    RuleInfo("PropertyOrderViolation", RuleGroup.ORDERING, Severity.ERROR,
             "Properties within a block are in alphabetical order."),
    # Style
    RuleInfo("DeclarationPerLine", RuleGroup.STYLE, Severity.WARNING,
             "One declaration per line."),
    RuleInfo("BlankLinesBetweenBlocks", RuleGroup.STYLE, Severity.WARNING,
             "Two blank lines between top-level blocks."),
    RuleInfo("ColonSpacing", RuleGroup.STYLE, Severity.WARNING,
             "No space before and one space after a declaration's colon."),
    RuleInfo("Indentation", RuleGroup.STYLE, Severity.WARNING,
             "Indent with spaces, one level per nesting depth."),
    RuleInfo("LineLength", RuleGroup.STYLE, Severity.WARNING,
             "Lines fit within the maximum line length."),
    RuleInfo("TrailingWhitespace", RuleGroup.STYLE, Severity.WARNING,
             "No whitespace at the end of a line."),
    RuleInfo("ShorthandPreferred", RuleGroup.STYLE, Severity.WARNING,
             "Box-model values use the shortest shorthand."),
    RuleInfo("FileLength", RuleGroup.STYLE, Severity.WARNING,
             "Component files stay under the line limit."),
    RuleInfo("ComponentLength", RuleGroup.STYLE, Severity.WARNING,
             "A single component's rules stay under the line limit."),
    RuleInfo("ExtendPlaceholderOnly", RuleGroup.STYLE, Severity.WARNING,
             "@extend targets %m- or %u- placeholders only."),
)

RULES: dict[str, RuleInfo] = {info.rule_id: info for info in _CATALOG}


def make_finding(
    path: str,
    rule_id: str,
    line: int,
    column: int,
    message: str,
    text: str = "",
    end_line: int | None = None,
    end_column: int | None = None,
) -> Finding:
    """Build a Finding carrying the rule's default severity."""
    return Finding(
        rule_id=rule_id,
        severity=RULES[rule_id].severity,
        path=path,
        line=line,
        column=column,
        message=message,
        text=text,
        end_line=end_line,
        end_column=end_column,
    )
