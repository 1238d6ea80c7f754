"""Selector text helpers: list splitting, combinators and compound parsing."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Lowercase, hyphen-separated, no empty segments.
CLASS_NAME_RE = re.compile(r"^[a-z0-9]+(?:-[a-z0-9]+)*$")

_SIMPLE_RE = re.compile(
    r"""
    (?P<marker>[.#%])(?P<name>[^.#%:\[&\s]*)     # class, id or placeholder
  | (?P<pseudo>::?[\w-]+(?:\([^)]*\))?)         # :hover, ::before, :not(...)
  | (?P<attribute>\[[^\]]*\])                   # [type="text"]
  | (?P<parent>&)
  | (?P<element>\*|[A-Za-z][\w-]*|\d+%)         # element, universal, keyframe
    """,
    re.VERBOSE,
)

_COMBINATORS = frozenset(">+~")

# "&" directly followed by name characters.
_SUFFIX_RE = re.compile(r"&[\w-]")


@dataclass(frozen=True)
class Compound:
    """The simple selectors of one compound selector."""

    text: str
    element: str = ""
    classes: tuple[str, ...] = ()
    ids: tuple[str, ...] = ()
    placeholders: tuple[str, ...] = ()
    pseudos: tuple[str, ...] = ()
    has_parent_ref: bool = False

    @property
    def is_element_only(self) -> bool:
        """No class, id or placeholder: an element, pseudo or attribute selector."""
        return not (self.classes or self.ids or self.placeholders)


def _split_top_level(text: str, separators: str) -> list[str]:
    """Split *text* on *separators* outside parentheses, brackets and quotes."""
    parts: list[str] = []
    depth = 0
    quote = ""
    current: list[str] = []
    for ch in text:
        if quote:
            current.append(ch)
            if ch == quote:
                quote = ""
            continue
        if ch in "\"'":
            quote = ch
        elif ch in "([":
            depth += 1
        elif ch in ")]":
            depth = max(depth - 1, 0)
        elif depth == 0 and ch in separators:
            parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    parts.append("".join(current))
    return parts


def split_selector_list(text: str) -> list[str]:
    """Split ``.a, .b`` into its comma-separated selectors."""
    return [" ".join(p.split()) for p in _split_top_level(text, ",") if p.strip()]


def split_compounds(selector: str) -> list[str]:
    """Split a selector on its combinators, dropping the combinators."""
    parts = _split_top_level(selector, " \t\n" + "".join(sorted(_COMBINATORS)))
    return [p.strip() for p in parts if p.strip()]


def parse_compound(text: str) -> Compound:
    """Break one compound selector into its simple selectors."""
    element = ""
    classes: list[str] = []
    ids: list[str] = []
    placeholders: list[str] = []
    pseudos: list[str] = []
    has_parent_ref = False
    for match in _SIMPLE_RE.finditer(text):
        if match.group("marker"):
            target = {".": classes, "#": ids, "%": placeholders}[match.group("marker")]
            target.append(match.group("name"))
        elif match.group("pseudo"):
            pseudos.append(match.group("pseudo"))
        elif match.group("parent"):
            has_parent_ref = True
        elif match.group("element") and not element:
            element = match.group("element")
    return Compound(
        text=text,
        element=element,
        classes=tuple(classes),
        ids=tuple(ids),
        placeholders=tuple(placeholders),
        pseudos=tuple(pseudos),
        has_parent_ref=has_parent_ref,
    )


def class_name_problem(name: str) -> str | None:
    """Describe why *name* is not a lowercase hyphenated class name, if it is not."""
    if CLASS_NAME_RE.match(name):
        return None
    if not name:
        return "is empty"
    if any(ch.isupper() for ch in name):
        return "contains uppercase characters"
    if "_" in name:
        return "contains underscores"
    return "is not lowercase and hyphen-separated"


def resolve_parent(written: str, parent: str | None) -> str:
    """Substitute ``&`` with *parent*, or nest *written* beneath it."""
    if parent is None:
        return " ".join(written.replace("&", "").split())
    if "&" in written:
        return written.replace("&", parent)
    return f"{parent} {written}"


def appends_to_parent(written: str) -> bool:
    """Whether *written* extends the parent's name, as ``&-item`` or ``&__item`` do."""
    return _SUFFIX_RE.search(written) is not None
