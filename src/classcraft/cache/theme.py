"""Theme fingerprinting for cache versioning."""

from __future__ import annotations

import hashlib
import json
from typing import Any, Mapping

__all__ = ["hash_theme"]

_FINGERPRINT_LENGTH = 16


def hash_theme(theme: Mapping[str, Any] | None) -> str:
    """Return a stable fingerprint for *theme*.

    Key order does not matter; values that are not JSON-native are
    stringified.
    """
    canonical = json.dumps(theme or {}, sort_keys=True, separators=(",", ":"), default=str)
    return hashlib.sha256(canonical.encode("utf-8")).hexdigest()[:_FINGERPRINT_LENGTH]
