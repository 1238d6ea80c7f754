"""Finding model: structured rule violations reported against SCSS files."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a finding."""

    FATAL = "Fatal"
    ERROR = "Error"
    WARNING = "Warning"

    @classmethod
    def parse(cls, value: str) -> Severity:
        """Look up a severity by name, case-insensitively."""
        for member in cls:
            if member.value.lower() == value.strip().lower():
                return member
        raise ValueError(f"Unknown severity: {value!r}")

    @property
    def fails_run(self) -> bool:
        return self is not Severity.WARNING


@dataclass(frozen=True)
class Finding:
    """A single rule violation found in a stylesheet.

    Attributes:
        rule_id: Identifier of the rule that produced this finding.
        severity: How serious the violation is.
        path: The file the finding belongs to.
        line: 1-based line of the offending text (0 for whole-file findings).
        column: 1-based column of the offending text (0 for whole-file findings).
        message: Human-readable description of the problem.
        text: The offending selector, property or line fragment, if any.
        end_line: Last line of the offending span, if known.
        end_column: Last column of the offending span, if known.
    """

    rule_id: str
    severity: Severity
    path: str
    line: int
    column: int
    message: str
    text: str = ""
    end_line: int | None = None
    end_column: int | None = None

    @property
    def is_fatal(self) -> bool:
        return self.severity is Severity.FATAL

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    @property
    def sort_key(self) -> tuple[str, int, int, str, str, str, str]:
        """Total order used for deterministic reports."""
        return (
            self.path,
            self.line,
            self.column,
            self.rule_id,
            self.message,
            self.severity.value,
            self.text,
        )

    @property
    def identity(self) -> tuple[str, int, int, str]:
        """Key under which repeated findings are considered duplicates."""
        return (self.path, self.line, self.column, self.rule_id)

    def to_dict(self) -> dict[str, object]:
        return {
            "file": self.path,
            "line": self.line,
            "column": self.column,
            "ruleId": self.rule_id,
            "severity": self.severity.value,
            "message": self.message,
        }

    def __str__(self) -> str:
        location = self.path
        if self.line:
            location += f":{self.line}:{self.column}"
        return f"{location}: {self.severity.value} [{self.rule_id}] {self.message}"
