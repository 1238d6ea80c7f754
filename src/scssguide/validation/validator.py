"""Rule engine: runs every rule against a component file and reports findings."""

from __future__ import annotations

from typing import Callable

from scssguide.config import RuleConfiguration
from scssguide.model.finding import Finding
from scssguide.model.selector import ComponentFile
from scssguide.validation.naming import NAMING_RULES, check_classification
from scssguide.validation.ordering import ORDERING_RULES
from scssguide.validation.style import STYLE_RULES

RuleFunc = Callable[[ComponentFile, RuleConfiguration], list[Finding]]

ALL_RULES: list[RuleFunc] = [
    check_classification,
    *NAMING_RULES,
    *ORDERING_RULES,
    *STYLE_RULES,
]


def evaluate(
    cf: ComponentFile,
    config: RuleConfiguration | None = None,
    extra_rules: list[RuleFunc] | None = None,
) -> list[Finding]:
    """Run all rules against *cf*.

    Findings of disabled rules are dropped and configured severities applied.
    The result is ordered by (line, column, rule id); rules never suppress
    each other, so one span may carry several findings.
    """
    config = config or RuleConfiguration()
    rules: list[RuleFunc] = list(ALL_RULES)
    if extra_rules:
        rules.extend(extra_rules)
    findings: list[Finding] = []
    for rule in rules:
        findings.extend(rule(cf, config))
    findings = config.apply(findings)
    return sorted(findings, key=lambda f: (f.line, f.column, f.rule_id))
