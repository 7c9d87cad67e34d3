"""Class token parser.

Splits whitespace-delimited class lists and decomposes each token into
its ``!``/``-`` flags, variant chain and base utility:

    parse("hover:dark:bg-red-500/80")
    -> ParsedClass(variants=("hover", "dark"), utility="bg-red-500/80")

    parse("!-mt-4")
    -> ParsedClass(utility="mt-4", negative=True, important=True)

The parser never raises. Anything it cannot read as a variant stays in
the base utility so that the matcher simply finds no rule for it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable

from classcraft.model.parsed import ParsedClass
from classcraft.parser.groups import expand_variant_groups
from classcraft.parser.patterns import (
    ARBITRARY_WITH_TYPE_RE,
    HAS_BRACKETS_RE,
    MAX_CLASS_LENGTH,
    UNESCAPED_UNDERSCORE_RE,
)
from classcraft.parser.scan import is_variant, split_by_delimiter, top_level_colon

__all__ = [
    "ArbitraryValue",
    "ClassParser",
    "combine_with_variants",
    "create_class_name",
    "extract_utility",
    "extract_variants",
    "has_arbitrary",
    "has_variants",
    "is_negative",
    "normalize_arbitrary_value",
    "parse",
    "parse_arbitrary_value",
    "parse_classes",
    "split_by_delimiter",
]

logger = logging.getLogger(__name__)


def is_negative(class_name: str) -> bool:
    """True for a leading ``-`` that is not a custom-property ``--``."""
    return class_name.startswith("-") and not class_name.startswith("--")


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------


def parse(token: str, *, max_length: int = MAX_CLASS_LENGTH) -> ParsedClass:
    """Decompose a single class token into a ParsedClass.

    Surrounding whitespace is ignored; the token itself must not contain any.
    """
    token = token.strip()
    if len(token) > max_length:
        logger.warning(
            "Class name exceeds max length (%d), leaving it unresolved", max_length
        )
        return ParsedClass(original=token)

    rest = token
    important = False
    negative = False

    if rest.startswith("!"):
        important = True
        rest = rest[1:]
    if is_negative(rest):
        negative = True
        rest = rest[1:]

    variants: list[str] = []
    while True:
        idx = top_level_colon(rest)
        if idx <= 0:
            break
        head, tail = rest[:idx], rest[idx + 1:]
        if not tail or not is_variant(head):
            break
        variants.append(head)
        rest = tail

    # Flags may also follow the variant chain: hover:!p-4, md:-mt-2
    if variants:
        if not important and rest.startswith("!"):
            important = True
            rest = rest[1:]
        if not negative and is_negative(rest):
            negative = True
            rest = rest[1:]

    return ParsedClass(
        original=token,
        variants=tuple(variants),
        utility=rest,
        negative=negative,
        important=important,
    )


def parse_classes(text: str, *, max_length: int = MAX_CLASS_LENGTH) -> list[ParsedClass]:
    """Parse a whitespace-delimited class list, preserving order and duplicates.

    Variant groups are not expanded here; run expand_variant_groups first.
    """
    return [parse(token, max_length=max_length) for token in text.split()]


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def has_variants(class_name: str) -> bool:
    return len(split_by_delimiter(class_name, ":")) > 1


def has_arbitrary(class_name: str) -> bool:
    return HAS_BRACKETS_RE.search(class_name) is not None


def extract_utility(class_name: str) -> str:
    """The segment after the last top-level colon."""
    parts = split_by_delimiter(class_name, ":")
    return parts[-1] if parts else ""


def extract_variants(class_name: str) -> list[str]:
    return split_by_delimiter(class_name, ":")[:-1]


def combine_with_variants(utility: str, variants: Iterable[str]) -> str:
    return ":".join([*variants, utility])


def create_class_name(
    utility: str,
    variants: Iterable[str] = (),
    *,
    negative: bool = False,
    important: bool = False,
) -> str:
    """Rebuild a class token from its parts; the inverse of parse()."""
    body = utility
    if negative:
        body = f"-{body}"
    if important:
        body = f"!{body}"
    return combine_with_variants(body, variants)


def normalize_arbitrary_value(value: str) -> str:
    """Replace unescaped underscores with spaces: ``1fr_2fr`` -> ``1fr 2fr``."""
    return UNESCAPED_UNDERSCORE_RE.sub(" ", value)


@dataclass(frozen=True)
class ArbitraryValue:
    """Bracket content split into an optional type hint and a value."""

    type: str | None
    value: str


def parse_arbitrary_value(text: str) -> ArbitraryValue | None:
    """Parse ``[color:red]`` or ``[#ff0000]``; None when not bracketed."""
    m = ARBITRARY_WITH_TYPE_RE.match(text)
    if m is None:
        return None
    return ArbitraryValue(type=m.group(1) or None, value=normalize_arbitrary_value(m.group(2)))


# ---------------------------------------------------------------------------
# Object wrapper
# ---------------------------------------------------------------------------


class ClassParser:
    """Parser bound to a maximum token length."""

    def __init__(self, max_class_length: int = MAX_CLASS_LENGTH) -> None:
        self.max_class_length = max_class_length

    def parse(self, token: str) -> ParsedClass:
        return parse(token, max_length=self.max_class_length)

    def parse_classes(self, text: str) -> list[ParsedClass]:
        return parse_classes(text, max_length=self.max_class_length)

    def expand_variant_groups(self, text: str) -> str:
        return expand_variant_groups(text)

    def parse_class_list(self, text: str) -> list[ParsedClass]:
        """Expand variant groups, then parse every resulting token."""
        return self.parse_classes(self.expand_variant_groups(text))
