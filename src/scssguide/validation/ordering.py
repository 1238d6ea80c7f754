"""Ordering rules: file sections and property order within a block."""

from __future__ import annotations

from scssguide.config import RuleConfiguration
from scssguide.model.finding import Finding
from scssguide.model.selector import ComponentFile, SectionBoundary, SectionEntry
from scssguide.model.tree import AtBlock, RuleBlock
from scssguide.validation.catalog import make_finding


def _marker_for(markers: tuple[SectionBoundary, ...], line: int) -> SectionBoundary | None:
    current = None
    for marker in markers:
        if marker.line < line:
            current = marker
        else:
            break
    return current


def check_section_order(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """Base and descendants, then Modifiers, then State, then media queries.

    Checked twice: by the order in which sections actually occur, and, when
    the file carries ``// Modifiers``-style markers, by the marker order and
    by which marker each rule sits under. One finding per position.
    """
    findings: list[Finding] = []
    flagged: set[tuple[int, int]] = set()

    def flag(line: int, column: int, message: str, text: str) -> None:
        if (line, column) in flagged:
            return
        flagged.add((line, column))
        findings.append(
            make_finding(cf.path, "SectionOrderViolation", line, column, message, text=text)
        )

    highest: SectionEntry | None = None
    for entry in cf.entries:
        if highest is not None and entry.section.value < highest.section.value:
            flag(
                entry.line, entry.column,
                f"{entry.section.label} rule '{entry.text}' appears after the "
                f"{highest.section.label} section (line {highest.line}).",
                entry.text,
            )
        elif highest is None or entry.section.value > highest.section.value:
            highest = entry

    markers = cf.markers
    for previous, marker in zip(markers, markers[1:]):
        if marker.section.value < previous.section.value:
            flag(
                marker.line, 1,
                f"'{marker.section.label}' section marker follows the "
                f"'{previous.section.label}' section (line {previous.line}).",
                marker.section.label,
            )
    for entry in cf.entries:
        marker = _marker_for(markers, entry.line)
        if marker is not None and marker.section is not entry.section:
            flag(
                entry.line, entry.column,
                f"{entry.section.label} rule '{entry.text}' is under the "
                f"'{marker.section.label}' section marker (line {marker.line}).",
                entry.text,
            )

    findings.sort(key=lambda f: (f.line, f.column))
    return findings


def check_property_order(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """Properties in a block are in alphabetical order.

    Only the first out-of-order adjacent pair of a block is reported.
    """
    findings: list[Finding] = []
    for node, _depth in cf.stylesheet.walk():
        if not isinstance(node, (RuleBlock, AtBlock)):
            continue
        properties = node.properties
        for before, after in zip(properties, properties[1:]):
            if after.property.lower() < before.property.lower():
                findings.append(
                    make_finding(
                        cf.path, "PropertyOrderViolation", after.line, after.column,
                        f"Property '{after.property}' should come before "
                        f"'{before.property}' (alphabetical order).",
                        text=after.property,
                    )
                )
                break
    return findings


ORDERING_RULES = [
    check_section_order,
    check_property_order,
]
