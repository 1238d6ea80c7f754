from scssguide.classify.builder import build_component_file
from scssguide.classify.classifier import classify_selector
from scssguide.classify.errors import (
    ClassificationError,
    MalformedSelectorError,
    NestedUtilityError,
    OrphanModifierError,
    OrphanStateError,
    StyledJsHookError,
)

__all__ = [
    "build_component_file",
    "classify_selector",
    "ClassificationError",
    "MalformedSelectorError",
    "NestedUtilityError",
    "OrphanModifierError",
    "OrphanStateError",
    "StyledJsHookError",
]
