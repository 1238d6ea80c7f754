"""Finding aggregator: dedupe, order and render the findings of a run."""

from __future__ import annotations

import json
from collections import Counter
from dataclasses import dataclass
from typing import Iterable

from scssguide.model.finding import Finding, Severity


@dataclass(frozen=True)
class Report:
    """The ordered, deduplicated findings of one run."""

    findings: tuple[Finding, ...] = ()
    files: tuple[str, ...] = ()
    cancelled: bool = False

    def count(self, severity: Severity) -> int:
        return sum(1 for f in self.findings if f.severity is severity)

    @property
    def fatal_count(self) -> int:
        return self.count(Severity.FATAL)

    @property
    def error_count(self) -> int:
        return self.count(Severity.ERROR)

    @property
    def warning_count(self) -> int:
        return self.count(Severity.WARNING)

    @property
    def failed(self) -> bool:
        return any(f.severity.fails_run for f in self.findings)

    @property
    def exit_code(self) -> int:
        """0 when only warnings (or nothing) were found, 1 otherwise."""
        return 1 if self.failed else 0

    def by_rule(self) -> dict[str, int]:
        return dict(sorted(Counter(f.rule_id for f in self.findings).items()))

    def for_file(self, path: str) -> list[Finding]:
        return [f for f in self.findings if f.path == path]


def aggregate(
    findings: Iterable[Finding],
    files: Iterable[str] = (),
    cancelled: bool = False,
) -> Report:
    """Merge findings into a Report.

    Sorted by (path, line, column, rule id) and, within those, by message so
    the order does not depend on input order. Repeats of the same
    (path, line, column, rule id) keep only the first finding in that order.
    """
    ordered = sorted(findings, key=lambda f: f.sort_key)
    unique: list[Finding] = []
    seen: set[tuple[str, int, int, str]] = set()
    for finding in ordered:
        if finding.identity in seen:
            continue
        seen.add(finding.identity)
        unique.append(finding)
    return Report(findings=tuple(unique), files=tuple(sorted(set(files))), cancelled=cancelled)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------


def render_text(report: Report) -> str:
    """One line per finding followed by a summary line."""
    lines = [str(f) for f in report.findings]
    if lines:
        lines.append("")
    summary = (
        f"Summary: {len(report.files)} file(s), {report.fatal_count} fatal, "
        f"{report.error_count} error(s), {report.warning_count} warning(s)"
    )
    if report.cancelled:
        summary += " (cancelled)"
    lines.append(summary)
    return "\n".join(lines)


def render_json(report: Report) -> str:
    """The findings as a JSON array of ``{file, line, column, ruleId, severity, message}``."""
    return json.dumps([f.to_dict() for f in report.findings], indent=2)
