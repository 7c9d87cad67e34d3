"""Event types emitted while compiling class lists."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CacheHit:
    class_name: str


@dataclass(frozen=True)
class CacheMiss:
    class_name: str


@dataclass(frozen=True)
class TokenUnresolved:
    token: str
    utility: str


@dataclass(frozen=True)
class CSSGenerated:
    classes: tuple[str, ...]
    css: str
