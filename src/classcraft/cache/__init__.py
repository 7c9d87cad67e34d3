"""Generated-CSS cache."""

from classcraft.cache.css_cache import DEFAULT_THEME_VERSION, CSSCache, CacheStats
from classcraft.cache.theme import hash_theme

__all__ = ["CSSCache", "CacheStats", "DEFAULT_THEME_VERSION", "hash_theme"]
