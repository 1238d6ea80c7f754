"""Tests for selector helpers and the selector classifier."""

import pytest

from scssguide.classify import (
    ClassificationError,
    MalformedSelectorError,
    NestedUtilityError,
    OrphanModifierError,
    OrphanStateError,
    StyledJsHookError,
    classify_selector,
)
from scssguide.classify.selectors import (
    class_name_problem,
    parse_compound,
    resolve_parent,
    split_compounds,
    split_selector_list,
)
from scssguide.model.selector import Ancestor, PrefixKind, Section, SelectorKind


# ---------------------------------------------------------------------------
# Selector text helpers
# ---------------------------------------------------------------------------


class TestSelectorHelpers:
    def test_split_selector_list(self):
        assert split_selector_list(".a,\n  .b") == [".a", ".b"]

    def test_split_selector_list_keeps_commas_in_parens(self):
        assert split_selector_list(".a, .b:not(.c, .d)") == [".a", ".b:not(.c, .d)"]

    def test_split_compounds_drops_combinators(self):
        assert split_compounds(".a > .b+.c ~ .d .e") == [".a", ".b", ".c", ".d", ".e"]

    def test_split_compounds_keeps_attribute_spaces(self):
        assert split_compounds('.a [title="x y"]') == [".a", '[title="x y"]']

    def test_parse_compound(self):
        compound = parse_compound("li.nav-item.is-open:hover")
        assert compound.element == "li"
        assert compound.classes == ("nav-item", "is-open")
        assert compound.pseudos == (":hover",)
        assert not compound.is_element_only

    def test_parse_compound_placeholder_and_id(self):
        assert parse_compound("%u-clearfix").placeholders == ("u-clearfix",)
        assert parse_compound("#main").ids == ("main",)

    def test_parse_compound_parent_reference(self):
        compound = parse_compound("&.mod-small")
        assert compound.has_parent_ref
        assert compound.classes == ("mod-small",)

    def test_resolve_parent_without_parent(self):
        assert resolve_parent(".a", None) == ".a"

    def test_resolve_parent_ampersand(self):
        assert resolve_parent("&.mod-x", ".a") == ".a.mod-x"
        assert resolve_parent("&:hover", ".a") == ".a:hover"

    def test_resolve_parent_descendant(self):
        assert resolve_parent(".a-b", ".a") == ".a .a-b"

    @pytest.mark.parametrize(
        "name, problem",
        [
            ("global-header", None),
            ("h1-title", None),
            ("globalHeader", "contains uppercase characters"),
            ("global_header", "contains underscores"),
            ("global--header", "is not lowercase and hyphen-separated"),
            ("", "is empty"),
        ],
    )
    def test_class_name_problem(self, name, problem):
        assert class_name_problem(name) == problem


# ---------------------------------------------------------------------------
# Components, modifiers and states
# ---------------------------------------------------------------------------


class TestComponentKinds:
    def test_component(self):
        sel = classify_selector(".global-header")
        assert sel.kind is SelectorKind.COMPONENT
        assert sel.base_name == "global-header"
        assert sel.depth == 0
        assert sel.section is Section.BASE
        assert sel.tokens[0].prefix is PrefixKind.NONE

    def test_component_with_pseudo(self):
        sel = classify_selector(".global-header:hover")
        assert sel.kind is SelectorKind.COMPONENT
        assert sel.base_name == "global-header"

    def test_modifier(self):
        sel = classify_selector(".global-header.mod-small")
        assert sel.kind is SelectorKind.MODIFIER
        assert sel.base_name == "global-header"
        assert sel.section is Section.MODIFIERS
        token = sel.tokens[1]
        assert token.prefix is PrefixKind.MODIFIER
        assert token.parent == "global-header"
        assert token.name == "small"

    def test_state(self):
        sel = classify_selector(".global-header.is-active")
        assert sel.kind is SelectorKind.STATE
        assert sel.section is Section.STATE

    def test_state_wins_over_modifier(self):
        sel = classify_selector(".menu.mod-wide.is-open")
        assert sel.kind is SelectorKind.STATE

    def test_nested_component(self):
        sel = classify_selector(
            ".global-header .global-header-logo",
            (Ancestor("global-header", SelectorKind.COMPONENT),),
        )
        assert sel.kind is SelectorKind.COMPONENT
        assert sel.base_name == "global-header-logo"
        assert sel.depth == 1
        assert sel.parent.base_name == "global-header"

    def test_class_beneath_base_rule_is_base(self):
        sel = classify_selector("a .icon", (Ancestor("a", SelectorKind.BASE),))
        assert sel.kind is SelectorKind.BASE

    def test_descendant_of_modifier_is_in_modifiers_section(self):
        sel = classify_selector(".menu.mod-wide .menu-item")
        assert sel.kind is SelectorKind.COMPONENT
        assert sel.section is Section.MODIFIERS

    def test_descendant_of_state_is_in_state_section(self):
        sel = classify_selector(".menu.is-open .menu-item")
        assert sel.section is Section.STATE

    def test_media_section(self):
        sel = classify_selector(".menu.is-open", in_media=True)
        assert sel.section is Section.MEDIA
        assert sel.in_media

    def test_written_defaults_to_selector(self):
        assert classify_selector(".a").written == ".a"
        assert classify_selector(".a.mod-x", written="&.mod-x").written == "&.mod-x"


class TestOrphans:
    def test_orphan_modifier(self):
        with pytest.raises(OrphanModifierError):
            classify_selector(".mod-small")

    def test_orphan_state(self):
        with pytest.raises(OrphanStateError):
            classify_selector(".is-active")

    def test_modifier_of_unknown_component(self):
        with pytest.raises(OrphanModifierError) as exc_info:
            classify_selector(".menu.mod-wide", known_components={"header"})
        assert "not defined earlier" in str(exc_info.value)

    def test_modifier_of_known_component(self):
        sel = classify_selector(".menu.mod-wide", known_components={"menu"})
        assert sel.kind is SelectorKind.MODIFIER


# ---------------------------------------------------------------------------
# JS hooks and placeholders
# ---------------------------------------------------------------------------


class TestHooksAndPlaceholders:
    def test_unstyled_js_hook(self):
        sel = classify_selector(".js-open-menu")
        assert sel.kind is SelectorKind.JS_HOOK
        assert sel.base_name == "js-open-menu"

    def test_styled_js_hook(self):
        with pytest.raises(StyledJsHookError) as exc_info:
            classify_selector(".js-open-menu", properties=("display",))
        assert "display" in str(exc_info.value)

    def test_js_hook_on_component(self):
        sel = classify_selector(".menu.js-toggle")
        assert sel.kind is SelectorKind.JS_HOOK
        assert sel.base_name == "menu"

    def test_utility_placeholder(self):
        sel = classify_selector("%u-clearfix")
        assert sel.kind is SelectorKind.UTILITY
        assert sel.tokens[0].prefix is PrefixKind.UTILITY

    def test_mixin_placeholder(self):
        assert classify_selector("%m-button").kind is SelectorKind.MIXIN

    def test_unprefixed_placeholder(self):
        with pytest.raises(MalformedSelectorError):
            classify_selector("%clearfix")

    def test_placeholder_with_nested_rules(self):
        with pytest.raises(NestedUtilityError):
            classify_selector("%u-clearfix", nested_rules=True)


# ---------------------------------------------------------------------------
# Malformed selectors
# ---------------------------------------------------------------------------


class TestMalformed:
    @pytest.mark.parametrize(
        "selector",
        ["", ".", "a", "#main", ".a.b", ".Global-header", ".global_header", ".menu ul"],
    )
    def test_malformed(self, selector):
        with pytest.raises(MalformedSelectorError):
            classify_selector(selector)

    def test_element_allowed_in_base_context(self):
        sel = classify_selector("a:hover", base_context=True)
        assert sel.kind is SelectorKind.BASE
        assert sel.base_name == "a"

    def test_id_allowed_in_base_context(self):
        assert classify_selector("#main", base_context=True).kind is SelectorKind.BASE

    def test_error_carries_position(self):
        with pytest.raises(ClassificationError) as exc_info:
            classify_selector(".Bad", line=4, column=3)
        err = exc_info.value
        assert (err.line, err.column) == (4, 3)
        assert err.selector == ".Bad"
        assert err.rule_id == "MalformedSelectorError"
