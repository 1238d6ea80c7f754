"""Naming rules: class name format, ids, bare elements and descendant chains.

The classifier already judges each selector's subject compound; these rules
look at the context compounds a rule writes in front of it
(``.global-header UL .global-header-item``) and at how nested component
names line up with their ancestors.
"""

from __future__ import annotations

from scssguide.classify.selectors import (
    Compound,
    class_name_problem,
    parse_compound,
    split_compounds,
)
from scssguide.config import RuleConfiguration
from scssguide.model.finding import Finding
from scssguide.model.selector import ClassifiedSelector, ComponentFile, SelectorKind
from scssguide.validation.catalog import make_finding

# Ancestor kinds whose base name a nested component must extend.
_CHAIN_PARENTS = frozenset({SelectorKind.COMPONENT, SelectorKind.MODIFIER, SelectorKind.STATE})


def _written_context(selector: ClassifiedSelector) -> list[Compound]:
    """Context compounds written by the rule itself (``&`` parts excluded)."""
    compounds = split_compounds(selector.written)[:-1]
    return [parse_compound(c) for c in compounds if "&" not in c]


# ---------------------------------------------------------------------------
# Classification errors
# ---------------------------------------------------------------------------


def check_classification(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """Each classification error becomes exactly one finding."""
    return [
        make_finding(cf.path, err.rule_id, err.line, err.column, err.message, text=err.selector)
        for err in cf.errors
    ]


# ---------------------------------------------------------------------------
# Naming rules
# ---------------------------------------------------------------------------


def check_class_name_format(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """Class names are lowercase and hyphen-separated (no underscores or camelCase)."""
    findings: list[Finding] = []
    seen: set[tuple[int, int, str]] = set()
    for sel in cf.selectors:
        for compound in _written_context(sel):
            for name in compound.classes:
                problem = class_name_problem(name)
                key = (sel.line, sel.column, name)
                if problem and key not in seen:
                    seen.add(key)
                    findings.append(
                        make_finding(
                            cf.path, "ClassNameFormat", sel.line, sel.column,
                            f"Class name '.{name}' {problem}.", text=name,
                        )
                    )
    return findings


def check_id_selector(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """No id selectors outside Base files."""
    if cf.is_base:
        return []
    findings: list[Finding] = []
    seen: set[tuple[int, int, str]] = set()
    for sel in cf.selectors:
        for compound in _written_context(sel):
            for id_name in compound.ids:
                key = (sel.line, sel.column, id_name)
                if key not in seen:
                    seen.add(key)
                    findings.append(
                        make_finding(
                            cf.path, "IdSelector", sel.line, sel.column,
                            f"Id selector '#{id_name}' in '{sel.written}'; "
                            "use a component class instead.",
                            text=f"#{id_name}",
                        )
                    )
    return findings


def check_bare_element(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """No bare element selectors outside Base files."""
    if cf.is_base:
        return []
    findings: list[Finding] = []
    seen: set[tuple[int, int, str]] = set()
    for sel in cf.selectors:
        for compound in _written_context(sel):
            if not compound.element or not compound.is_element_only:
                continue
            key = (sel.line, sel.column, compound.text)
            if key not in seen:
                seen.add(key)
                findings.append(
                    make_finding(
                        cf.path, "BareElementSelector", sel.line, sel.column,
                        f"Element selector '{compound.text}' in '{sel.written}' "
                        "belongs in a Base file; style a descendant class instead.",
                        text=compound.text,
                    )
                )
    return findings


def check_descendant_chain(cf: ComponentFile, config: RuleConfiguration) -> list[Finding]:
    """A component nested N levels deep extends its ancestor's name with N+ segments.

    ``.global-header { .global-header-logo { .global-header-logo-image {} } }``
    """
    findings: list[Finding] = []
    for sel in cf.selectors:
        parent = sel.parent
        if sel.kind is not SelectorKind.COMPONENT or parent is None:
            continue
        if parent.kind not in _CHAIN_PARENTS:
            continue
        name = sel.base_name
        segments = len(name.split("-"))
        if not name.startswith(parent.base_name + "-"):
            message = (
                f"Nested component '.{name}' should extend its ancestor's name "
                f"('.{parent.base_name}-...')."
            )
        elif segments < sel.depth + 1:
            message = (
                f"Component '.{name}' is nested {sel.depth} level(s) deep but has only "
                f"{segments} name segment(s); expected at least {sel.depth + 1}."
            )
        else:
            continue
        findings.append(
            make_finding(cf.path, "DescendantChain", sel.line, sel.column, message, text=name)
        )
    return findings


NAMING_RULES = [
    check_class_name_format,
    check_id_selector,
    check_bare_element,
    check_descendant_chain,
]
