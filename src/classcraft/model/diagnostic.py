"""Diagnostic model: structured messages about tokens that produced no CSS."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class Severity(Enum):
    """Severity level for a diagnostic message."""

    ERROR = "ERROR"
    WARNING = "WARNING"
    INFO = "INFO"


@dataclass(frozen=True)
class Diagnostic:
    """A single finding about a class token.

    Attributes:
        code: Identifier for the kind of finding (``unresolved``, ``empty``).
        severity: How serious the issue is.
        message: Human-readable description of the problem.
        token: The class token involved, if applicable.
        fix: Suggested remediation, if available.
    """

    code: str
    severity: Severity
    message: str
    token: str | None = None
    fix: str | None = None

    @property
    def is_error(self) -> bool:
        return self.severity is Severity.ERROR

    @property
    def is_warning(self) -> bool:
        return self.severity is Severity.WARNING

    def __str__(self) -> str:
        location = f" [token={self.token}]" if self.token else ""
        return f"{self.severity.value}{location}: {self.message}"
