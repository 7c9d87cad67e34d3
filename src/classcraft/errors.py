"""Error hierarchy for classcraft.

Only registration and configuration problems raise. Lookups that find
nothing (no matching rule, a cache miss, an unresolved token) are
reported as data instead.
"""
from __future__ import annotations


class ClasscraftError(Exception):
    """Base error for all classcraft errors."""

    def __init__(self, message: str, *, cause: Exception | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class InvalidRuleError(ClasscraftError):
    """A rule pattern could not be compiled."""

    def __init__(self, message: str, *, pattern: str = "", **kwargs) -> None:
        super().__init__(message, **kwargs)
        self.pattern = pattern


class DuplicateRuleError(ClasscraftError):
    """A rule name was registered twice on a strict matcher."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Rule {name!r} is already registered")
        self.name = name


class ConfigError(ClasscraftError):
    """Compiler configuration is malformed."""


class RuleFileError(ClasscraftError):
    """A rule file could not be loaded."""

    def __init__(
        self, message: str, *, index: int | None = None, cause: Exception | None = None
    ) -> None:
        if index is not None:
            message = f"rules[{index}]: {message}"
        super().__init__(message, cause=cause)
        self.index = index
