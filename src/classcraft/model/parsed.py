"""ParsedClass: the decomposition of one raw class token."""

from __future__ import annotations

import re
from dataclasses import dataclass

# Trailing opacity/modifier: /50, /12.5%, /[0.35]
_MODIFIER_RE = re.compile(r"/(\d+|[\d.]+%?|\[[^\]]+\])$")
_ARBITRARY_RE = re.compile(r"\[([^\]]+)\]")


@dataclass(frozen=True)
class ParsedClass:
    """One class token split into flags, variant chain and base utility.

    Attributes:
        original: The token exactly as it was handed to the parser.
        variants: Variant names, outer to inner (``("dark", "hover")``).
        utility: The base utility used for rule matching, including any
            arbitrary-value bracket and trailing modifier (``bg-red-500/80``).
        negative: True when the utility carried a leading ``-``.
        important: True when the token carried a leading ``!``.
    """

    original: str
    variants: tuple[str, ...] = ()
    utility: str = ""
    negative: bool = False
    important: bool = False

    @property
    def has_variants(self) -> bool:
        return bool(self.variants)

    @property
    def arbitrary(self) -> str | None:
        """Content of the first arbitrary-value bracket, if any."""
        m = _ARBITRARY_RE.search(self.utility)
        return m.group(1) if m else None

    @property
    def modifier(self) -> str | None:
        """Opacity/modifier suffix after the final ``/``, if any."""
        m = _MODIFIER_RE.search(self.utility)
        return m.group(1) if m else None
