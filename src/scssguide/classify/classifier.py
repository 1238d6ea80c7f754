"""Selector classifier: maps one selector onto the naming grammar.

The rightmost compound of a selector is its subject. The subject's class
tokens decide the kind:

    .global-header              Component (or Base beneath an element rule)
    .global-header.mod-small    Modifier of global-header
    .global-header.is-active    State of global-header
    .js-open-menu               JsHook (behaviour only, never styled)
    %u-clearfix / %m-button     Utility / Mixin placeholder
    a, a:hover                  Base (only inside Base files)
"""

from __future__ import annotations

from typing import AbstractSet, Sequence

from scssguide.classify.errors import (
    MalformedSelectorError,
    NestedUtilityError,
    OrphanModifierError,
    OrphanStateError,
    StyledJsHookError,
)
from scssguide.classify.selectors import (
    Compound,
    class_name_problem,
    parse_compound,
    split_compounds,
)
from scssguide.model.selector import (
    Ancestor,
    ClassifiedSelector,
    PrefixKind,
    Section,
    SelectorKind,
    SelectorToken,
)

_CLASS_PREFIXES = (PrefixKind.MODIFIER, PrefixKind.STATE, PrefixKind.JS_HOOK)


def token_prefix(name: str) -> PrefixKind:
    """Prefix kind of a class name (placeholders are handled separately)."""
    for prefix in _CLASS_PREFIXES:
        if name.startswith(prefix.value):
            return prefix
    return PrefixKind.NONE


def class_tokens(compound: Compound) -> tuple[SelectorToken, ...]:
    """Tokens for the classes of *compound*, linking prefixed ones to their component."""
    plain = [c for c in compound.classes if token_prefix(c) is PrefixKind.NONE]
    parent = plain[0] if plain else None
    tokens: list[SelectorToken] = []
    for name in compound.classes:
        prefix = token_prefix(name)
        tokens.append(
            SelectorToken(
                raw=name,
                prefix=prefix,
                parent=parent if prefix is not PrefixKind.NONE else None,
            )
        )
    return tuple(tokens)


def section_for(kind: SelectorKind, context: Sequence[Compound], in_media: bool) -> Section:
    """The file section a selector belongs to.

    Descendants of a modifier or state selector belong to that selector's section.
    """
    if in_media:
        return Section.MEDIA
    context_prefixes = {token_prefix(c) for compound in context for c in compound.classes}
    if kind is SelectorKind.STATE or PrefixKind.STATE in context_prefixes:
        return Section.STATE
    if kind is SelectorKind.MODIFIER or PrefixKind.MODIFIER in context_prefixes:
        return Section.MODIFIERS
    return Section.BASE


def _placeholder(
    subject: Compound, selector: str, nested_rules: bool, line: int, column: int
) -> tuple[SelectorKind, str, tuple[SelectorToken, ...]]:
    if len(subject.placeholders) > 1 or subject.classes or subject.ids:
        raise MalformedSelectorError(
            f"Placeholder selector '{subject.text}' must stand alone.",
            selector, line, column,
        )
    name = subject.placeholders[0]
    if name.startswith("m-"):
        kind, prefix = SelectorKind.MIXIN, PrefixKind.MIXIN
    elif name.startswith("u-"):
        kind, prefix = SelectorKind.UTILITY, PrefixKind.UTILITY
    else:
        raise MalformedSelectorError(
            f"Placeholder '%{name}' must be prefixed %m- (mixin) or %u- (utility).",
            selector, line, column,
        )
    problem = class_name_problem(name)
    if problem:
        raise MalformedSelectorError(
            f"Placeholder name '%{name}' {problem}.", selector, line, column
        )
    if nested_rules:
        raise NestedUtilityError(
            f"Placeholder '%{name}' must not contain nested rules.",
            selector, line, column,
        )
    return kind, name, (SelectorToken(raw=f"%{name}", prefix=prefix),)


def classify_selector(
    selector: str,
    ancestors: Sequence[Ancestor] = (),
    *,
    written: str | None = None,
    known_components: AbstractSet[str] | None = None,
    properties: Sequence[str] = (),
    base_context: bool = False,
    nested_rules: bool = False,
    in_media: bool = False,
    line: int = 0,
    column: int = 0,
    end_line: int = 0,
) -> ClassifiedSelector:
    """Classify one resolved selector.

    Args:
        selector: The selector with any ``&`` already resolved.
        ancestors: Enclosing classified selectors, outermost first.
        written: The selector as it appears in the source (defaults to *selector*).
        known_components: Component names defined earlier in the file. When
            given, a modifier or state must qualify one of them.
        properties: Property names declared by the rule, in written order.
        base_context: True inside a Base file, where elements and ids are allowed.
        nested_rules: True when the rule contains nested rules.
        in_media: True inside an ``@media`` block.

    Raises:
        ClassificationError: One of its subclasses when the selector breaks
            the naming grammar.
    """
    compounds = [parse_compound(c) for c in split_compounds(selector)]
    if not compounds:
        raise MalformedSelectorError("Empty selector.", selector, line, column)
    subject = compounds[-1]
    context = compounds[:-1]
    tokens: tuple[SelectorToken, ...] = ()

    if "" in subject.classes:
        raise MalformedSelectorError(
            f"Selector '{selector}' contains an empty class name.", selector, line, column
        )
    if subject.ids and not base_context:
        raise MalformedSelectorError(
            f"Id selector '#{subject.ids[0]}' is not allowed; use a component class.",
            selector, line, column,
        )

    if subject.placeholders:
        kind, base_name, tokens = _placeholder(subject, selector, nested_rules, line, column)
    elif not subject.classes:
        if not base_context:
            raise MalformedSelectorError(
                f"Element selector '{subject.text}' is only allowed in Base files.",
                selector, line, column,
            )
        kind = SelectorKind.BASE
        base_name = subject.element or subject.text
    else:
        for name in subject.classes:
            problem = class_name_problem(name)
            if problem:
                raise MalformedSelectorError(
                    f"Class name '.{name}' {problem}.", selector, line, column
                )
        tokens = class_tokens(subject)
        kind, base_name = _classify_classes(
            tokens, ancestors, known_components, properties, selector, line, column
        )

    return ClassifiedSelector(
        selector=selector,
        written=written if written is not None else selector,
        base_name=base_name,
        kind=kind,
        depth=len(ancestors),
        properties=tuple(properties),
        tokens=tokens,
        ancestors=tuple(ancestors),
        section=section_for(kind, context, in_media),
        in_media=in_media,
        line=line,
        column=column,
        end_line=end_line,
    )


def _classify_classes(
    tokens: tuple[SelectorToken, ...],
    ancestors: Sequence[Ancestor],
    known_components: AbstractSet[str] | None,
    properties: Sequence[str],
    selector: str,
    line: int,
    column: int,
) -> tuple[SelectorKind, str]:
    plain = [t.raw for t in tokens if t.prefix is PrefixKind.NONE]
    prefixes = {t.prefix for t in tokens}

    if PrefixKind.JS_HOOK in prefixes:
        hook = next(t.raw for t in tokens if t.prefix is PrefixKind.JS_HOOK)
        if properties:
            raise StyledJsHookError(
                f"JavaScript hook '.{hook}' must not be styled "
                f"(declares {', '.join(properties)}).",
                selector, line, column,
            )
        return SelectorKind.JS_HOOK, plain[0] if plain else hook

    if len(plain) > 1:
        raise MalformedSelectorError(
            f"Selector '{selector}' joins component classes "
            f"{', '.join('.' + p for p in plain)}; use one component per element.",
            selector, line, column,
        )

    if PrefixKind.STATE in prefixes:
        _check_owner(OrphanStateError, "State", PrefixKind.STATE, tokens, plain,
                     known_components, selector, line, column)
        return SelectorKind.STATE, plain[0]

    if PrefixKind.MODIFIER in prefixes:
        _check_owner(OrphanModifierError, "Modifier", PrefixKind.MODIFIER, tokens, plain,
                     known_components, selector, line, column)
        return SelectorKind.MODIFIER, plain[0]

    parent = ancestors[-1] if ancestors else None
    if parent is not None and parent.kind is SelectorKind.BASE:
        return SelectorKind.BASE, plain[0]
    return SelectorKind.COMPONENT, plain[0]


def _check_owner(
    error: type[OrphanModifierError] | type[OrphanStateError],
    label: str,
    prefix: PrefixKind,
    tokens: tuple[SelectorToken, ...],
    plain: list[str],
    known_components: AbstractSet[str] | None,
    selector: str,
    line: int,
    column: int,
) -> None:
    marker = next(t.raw for t in tokens if t.prefix is prefix)
    if not plain:
        raise error(
            f"{label} class '.{marker}' must be attached to a component class.",
            selector, line, column,
        )
    if known_components is not None and plain[0] not in known_components:
        raise error(
            f"{label} class '.{marker}' qualifies '.{plain[0]}', "
            "which is not defined earlier in this file.",
            selector, line, column,
        )
