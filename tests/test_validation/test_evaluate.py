"""Tests for the rule engine: end-to-end evaluation of single files."""

from pathlib import Path

from scssguide.classify import build_component_file
from scssguide.classify.errors import CLASSIFICATION_ERRORS
from scssguide.config import RuleConfiguration, RuleSetting
from scssguide.model.finding import Finding, Severity
from scssguide.parser import parse_scss
from scssguide.runner import check_source
from scssguide.validation import ALL_RULES, RULES, RuleGroup, evaluate
from scssguide.validation.catalog import make_finding

FIXTURES = Path(__file__).parent.parent / "fixtures"

WITHOUT_STYLE = RuleConfiguration(
    rules={
        rule_id: RuleSetting(enabled=False)
        for rule_id, info in RULES.items()
        if info.group is RuleGroup.STYLE
    }
)


def _fixture(name):
    return (FIXTURES / name).read_text()


# ---------------------------------------------------------------------------
# Catalog
# ---------------------------------------------------------------------------


class TestCatalog:
    def test_file_failures_are_fatal(self):
        for rule_id in ("IOError", "ParseError", "InternalError"):
            assert RULES[rule_id].severity is Severity.FATAL
            assert RULES[rule_id].group is RuleGroup.FILE

    def test_classification_errors_are_errors(self):
        ids = [r for r, info in RULES.items() if info.group is RuleGroup.CLASSIFICATION]
        assert sorted(ids) == [
            "MalformedSelectorError",
            "NestedUtilityError",
            "OrphanModifierError",
            "OrphanStateError",
            "StyledJsHookError",
        ]

    def test_every_classification_error_has_a_rule(self):
        for error in CLASSIFICATION_ERRORS:
            info = RULES[error.__name__]
            assert info.group is RuleGroup.CLASSIFICATION
            assert info.severity is Severity.ERROR

    def test_make_finding_uses_default_severity(self):
        finding = make_finding("a.scss", "LineLength", 3, 81, "Too long.")
        assert finding.severity is Severity.WARNING
        assert finding.is_warning and not finding.is_error and not finding.is_fatal
        assert finding.path == "a.scss"


# ---------------------------------------------------------------------------
# Scenarios
# ---------------------------------------------------------------------------


class TestScenarios:
    def test_orphan_modifier(self):
        source = (
            ".global-header { color: red; }\n"
            "\n"
            "\n"
            ".global-header-logo { float: left; }\n"
            "\n"
            "\n"
            ".mod-small { padding: 0; }\n"
        )
        findings = check_source(source, "header.scss")
        assert len(findings) == 1
        finding = findings[0]
        assert finding.rule_id == "OrphanModifierError"
        assert finding.severity is Severity.ERROR
        assert finding.line == 7

    def test_property_order(self):
        findings = check_source(".a-b {\n  width: 1px;\n  color: red;\n}\n", "ab.scss")
        assert [(f.rule_id, f.line, f.column) for f in findings] == [
            ("PropertyOrderViolation", 3, 3),
        ]

    # Written exactly as in the style guide's examples, the inputs also draw
    # Warning-level style findings. Only one finding fails the run.

    def test_orphan_modifier_as_written(self):
        source = (
            ".global-header { color: red; }\n"
            ".global-header-logo { float: left; }\n"
            ".mod-small { padding: 0; }\n"
        )
        findings = check_source(source, "header.scss")
        failing = [(f.rule_id, f.line) for f in findings if f.severity.fails_run]
        assert failing == [("OrphanModifierError", 3)]
        assert all(RULES[f.rule_id].group is RuleGroup.STYLE
                   for f in findings if not f.severity.fails_run)

    def test_orphan_modifier_as_written_without_style_rules(self):
        source = (
            ".global-header { color: red; }\n"
            ".global-header-logo { float: left; }\n"
            ".mod-small { padding: 0; }\n"
        )
        findings = check_source(source, "header.scss", WITHOUT_STYLE)
        assert [(f.rule_id, f.line) for f in findings] == [("OrphanModifierError", 3)]

    def test_property_order_as_written(self):
        findings = check_source(".a-b { width: 1px; color: red; }", "ab.scss")
        failing = [(f.rule_id, f.line, f.column) for f in findings if f.severity.fails_run]
        assert failing == [("PropertyOrderViolation", 1, 20)]
        assert [f.rule_id for f in check_source(
            ".a-b { width: 1px; color: red; }", "ab.scss", WITHOUT_STYLE
        )] == ["PropertyOrderViolation"]

    def test_styled_js_hook_as_written(self):
        findings = check_source(".js-open-menu { display: none; }", "menu.scss")
        assert [(f.rule_id, f.severity) for f in findings] == [
            ("StyledJsHookError", Severity.ERROR),
        ]

    def test_styled_js_hook(self):
        findings = check_source(".js-open-menu {\n  display: none;\n}\n", "menu.scss")
        assert [f.rule_id for f in findings] == ["StyledJsHookError"]

    def test_parse_error(self):
        findings = check_source(_fixture("broken.scss"), "broken.scss")
        assert len(findings) == 1
        assert findings[0].rule_id == "ParseError"
        assert findings[0].severity is Severity.FATAL

    def test_inline_comments_and_protocol_relative_url(self):
        source = (
            ".menu /* main */ {\n"
            "  background: url(//cdn.example.com/a.png) /* hero */;\n"
            "  color: red // brand\n"
            "}\n"
        )
        findings = check_source(source, "menu.scss")
        assert [f.rule_id for f in findings if f.severity.fails_run] == []

    def test_deep_nesting_is_a_parse_error(self):
        source = ".a {\n" * 2000 + "}\n" * 2000
        findings = check_source(source, "deep.scss")
        assert [(f.rule_id, f.severity) for f in findings] == [("ParseError", Severity.FATAL)]
        assert "nested too deeply" in findings[0].message

    def test_clean_fixture(self):
        assert check_source(_fixture("global_header.scss"), "global_header.scss") == []

    def test_clean_base_fixture(self):
        assert check_source(_fixture("_base.scss"), "_base.scss") == []

    def test_messy_fixture(self):
        findings = check_source(_fixture("messy_menu.scss"), "messy_menu.scss")
        assert [(f.rule_id, f.line) for f in findings] == [
            ("PropertyOrderViolation", 3),
            ("BlankLinesBetweenBlocks", 5),
            ("SectionOrderViolation", 10),
            ("ShorthandPreferred", 11),
            ("MalformedSelectorError", 15),
            ("StyledJsHookError", 20),
        ]


# ---------------------------------------------------------------------------
# evaluate
# ---------------------------------------------------------------------------


class TestEvaluate:
    def _cf(self, source, path="menu.scss"):
        return build_component_file(path, source, parse_scss(source))

    def test_rule_functions_registered(self):
        names = [rule.__name__ for rule in ALL_RULES]
        assert names[0] == "check_classification"
        assert len(names) == len(set(names))

    def test_ordered_by_position(self):
        source = ".a-b {\n  width: 1px;\n  color: red;\n}\n.mod-x {\n}\n"
        findings = evaluate(self._cf(source))
        positions = [(f.line, f.column, f.rule_id) for f in findings]
        assert positions == sorted(positions)

    def test_rules_do_not_suppress_each_other(self):
        findings = evaluate(self._cf(".a {\n}\n.js-x {\n  color: red;\n}\n"))
        at_line_3 = {f.rule_id for f in findings if f.line == 3}
        assert at_line_3 == {"BlankLinesBetweenBlocks", "StyledJsHookError"}

    def test_disabled_rule(self):
        config = RuleConfiguration(rules={"PropertyOrderViolation": RuleSetting(enabled=False)})
        source = ".a-b {\n  width: 1px;\n  color: red;\n}\n"
        assert evaluate(self._cf(source), config) == []

    def test_severity_override(self):
        config = RuleConfiguration(
            rules={"PropertyOrderViolation": RuleSetting(severity=Severity.WARNING)}
        )
        source = ".a-b {\n  width: 1px;\n  color: red;\n}\n"
        findings = evaluate(self._cf(source), config)
        assert [f.severity for f in findings] == [Severity.WARNING]

    def test_extra_rules(self):
        def always(cf, config):
            return [make_finding(cf.path, "FileLength", 1, 1, "custom")]

        findings = evaluate(self._cf(".a {\n}\n"), extra_rules=[always])
        assert [f.message for f in findings] == ["custom"]

    def test_one_finding_per_error_under_selector_list(self):
        source = ".a,\n.b {\n  .mod-x {\n  }\n}\n"
        findings = evaluate(self._cf(source))
        orphans = [(f.rule_id, f.line) for f in findings if f.rule_id == "OrphanModifierError"]
        assert orphans == [("OrphanModifierError", 3)]

    def test_suffixed_parent_reference_chain(self):
        source = ".a {\n  &-b {\n    &-c {\n      color: red;\n    }\n  }\n}\n"
        findings = evaluate(self._cf(source))
        assert "DescendantChain" not in {f.rule_id for f in findings}

    def test_deterministic(self):
        source = _fixture("messy_menu.scss")
        first = evaluate(self._cf(source))
        second = evaluate(self._cf(source))
        assert first == second
        assert all(isinstance(f, Finding) for f in first)
