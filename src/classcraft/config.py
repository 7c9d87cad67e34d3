"""Compiler configuration."""

from __future__ import annotations

import dataclasses
import math
from dataclasses import dataclass, field
from typing import Any, Mapping

from classcraft.errors import ConfigError
from classcraft.parser.patterns import MAX_CLASS_LENGTH


@dataclass(frozen=True)
class CacheOptions:
    max_size: int = 1000
    ttl: float = math.inf  # milliseconds
    enabled: bool = True


@dataclass(frozen=True)
class CompilerConfig:
    cache: CacheOptions = field(default_factory=CacheOptions)
    strict_rule_names: bool = False
    variant_groups: bool = True
    max_class_length: int = MAX_CLASS_LENGTH
    blocklist: frozenset[str] = frozenset()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> CompilerConfig:
        """Build a config from plain data, e.g. the ``config`` block of a rule file.

        ``cache.ttl`` may be null for "never expires".
        """
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(sorted(unknown))}")

        kwargs = dict(data)
        cache_data = dict(kwargs.pop("cache", None) or {})
        cache_known = {f.name for f in dataclasses.fields(CacheOptions)}
        unknown = set(cache_data) - cache_known
        if unknown:
            raise ConfigError(f"Unknown cache keys: {', '.join(sorted(unknown))}")
        if cache_data.get("ttl", 0) is None:
            cache_data["ttl"] = math.inf
        if "blocklist" in kwargs:
            kwargs["blocklist"] = frozenset(kwargs["blocklist"])
        try:
            return cls(cache=CacheOptions(**cache_data), **kwargs)
        except TypeError as exc:
            raise ConfigError(f"Invalid config: {exc}", cause=exc) from exc
