"""Lark Transformer that converts an SCSS parse tree into a Stylesheet model."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import VisitError

from scssguide.model.tree import (
    AtBlock,
    AtStatement,
    Comment,
    Declaration,
    Node,
    RuleBlock,
    Stylesheet,
)
from scssguide.parser.errors import ParseError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

# "@name params" at the start of an at-rule prelude.
_AT_RULE_RE = re.compile(r"^@(?P<name>[A-Za-z-]+)\s*(?P<params>.*)$", re.DOTALL)

# "property: value", where the property may be a $variable or interpolated.
_DECLARATION_RE = re.compile(
    r"^(?P<property>[$#A-Za-z_*-][\w#{}$-]*)\s*:(?P<value>.*)$", re.DOTALL
)

# Comments inside a prelude. Strings and url(...) are matched first and kept.
_INLINE_COMMENT_RE = re.compile(
    r"""('[^'\n]*'|"[^"\n]*"|url\((?:"[^"\n]*"|'[^'\n]*'|[^)"'\n])*\))|/\*.*?\*/|//[^\n]*""",
    re.DOTALL | re.IGNORECASE,
)

_TOO_DEEP = "Stylesheet is nested too deeply to parse"


def _end_line(token: Token) -> int:
    """Last line holding non-whitespace text of *token*."""
    return token.line + str(token).rstrip().count("\n")


def _text(token: Token) -> str:
    """Prelude text of *token* with inline comments removed."""
    return _INLINE_COMMENT_RE.sub(lambda m: m.group(1) or "", str(token)).strip()


def _declaration(token: Token) -> Declaration:
    raw = _text(token)
    match = _DECLARATION_RE.match(raw)
    if match is None:
        raise ParseError(
            f"Expected 'property: value' but found {raw!r}",
            line=token.line,
            column=token.column,
        )
    return Declaration(
        property=match.group("property"),
        value=match.group("value").strip(),
        raw=raw,
        line=token.line,
        column=token.column,
        end_line=_end_line(token),
    )


class ScssTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into Stylesheet nodes."""

    def comment(self, items: list[Token]) -> Comment:
        token = items[0]
        return Comment(
            text=str(token),
            line=token.line,
            column=token.column,
            end_line=token.end_line or token.line,
        )

    def statement(self, items: list[Token]) -> Node:
        token = items[0]
        raw = _text(token)
        at_rule = _AT_RULE_RE.match(raw)
        if at_rule:
            return AtStatement(
                name=at_rule.group("name").lower(),
                params=at_rule.group("params").strip(),
                line=token.line,
                column=token.column,
            )
        return _declaration(token)

    def trailing(self, items: list[Token]) -> Declaration:
        return _declaration(items[0])

    def block(self, items: list[object]) -> Node:
        prelude = items[0]
        closing = items[-1]
        assert isinstance(prelude, Token) and isinstance(closing, Token)
        children: list[Node] = [i for i in items[1:-1] if not isinstance(i, Token)]
        raw = _text(prelude)
        at_rule = _AT_RULE_RE.match(raw)
        if at_rule:
            return AtBlock(
                name=at_rule.group("name").lower(),
                params=at_rule.group("params").strip(),
                children=children,
                line=prelude.line,
                column=prelude.column,
                end_line=closing.line,
                end_column=closing.column,
            )
        return RuleBlock(
            selector=raw,
            children=children,
            line=prelude.line,
            column=prelude.column,
            end_line=closing.line,
            end_column=closing.column,
        )

    def start(self, items: list[Node]) -> Stylesheet:
        return Stylesheet(children=list(items))


@lru_cache(maxsize=1)
def _parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(),
        parser="lalr",
        start="start",
    )


def parse_scss(source: str) -> Stylesheet:
    """Parse SCSS source text into a Stylesheet model."""
    try:
        tree = _parser().parse(source)
    except Exception as e:
        # Try to extract line/column from Lark exceptions.
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        if line is not None and line < 1:
            line = column = None
        raise ParseError(str(e), line=line, column=column) from e
    try:
        return ScssTransformer().transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from e
        if isinstance(e.orig_exc, RecursionError):
            raise ParseError(_TOO_DEEP) from e
        raise
    except RecursionError as e:
        # The transformer recurses once per nesting level.
        raise ParseError(_TOO_DEEP) from e
