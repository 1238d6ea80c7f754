"""Classification error types.

Each error describes one selector that breaks the naming grammar. The
error's class name doubles as the rule id of the finding it becomes.
"""

from __future__ import annotations


class ClassificationError(Exception):
    """Base class for selectors that cannot be classified."""

    def __init__(self, message: str, selector: str = "", line: int = 0, column: int = 0):
        self.message = message
        self.selector = selector
        self.line = line
        self.column = column
        super().__init__(message)

    @property
    def rule_id(self) -> str:
        return type(self).__name__


class MalformedSelectorError(ClassificationError):
    """Ids, stray elements, bad characters or an empty class name."""


class OrphanModifierError(ClassificationError):
    """A ``mod-`` class without a component class to modify."""


class OrphanStateError(ClassificationError):
    """An ``is-`` class without a component class to qualify."""


class NestedUtilityError(ClassificationError):
    """A ``%m-``/``%u-`` placeholder rule with nested rules."""


class StyledJsHookError(ClassificationError):
    """A ``js-`` class on a rule that declares properties."""


CLASSIFICATION_ERRORS: tuple[type[ClassificationError], ...] = (
    MalformedSelectorError,
    OrphanModifierError,
    OrphanStateError,
    NestedUtilityError,
    StyledJsHookError,
)
