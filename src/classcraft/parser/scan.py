"""Bracket-aware scanning helpers shared by the parser and group expander."""

from __future__ import annotations

from classcraft.parser.patterns import VARIANT_RE

_OPENERS = "[("
_CLOSERS = "])"


def split_by_delimiter(text: str, delimiter: str) -> list[str]:
    """Split *text* on *delimiter*, ignoring delimiters inside brackets or parens.

    Empty segments are dropped:
        split_by_delimiter("hover:bg-[#fff]:p-4", ":") -> ["hover", "bg-[#fff]", "p-4"]
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in text:
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(depth - 1, 0)
        elif ch == delimiter and depth == 0:
            if current:
                parts.append("".join(current))
            current = []
            continue
        current.append(ch)
    if current:
        parts.append("".join(current))
    return parts


def top_level_colon(text: str) -> int:
    """Index of the first colon outside any bracket pair, or -1."""
    depth = 0
    i = 0
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(depth - 1, 0)
        elif ch == ":" and depth == 0:
            return i
        i += 1
    return -1


def is_variant(segment: str) -> bool:
    return VARIANT_RE.match(segment) is not None


def is_variant_chain(prefix: str) -> bool:
    """True when *prefix* is one or more variants joined by single colons."""
    parts = split_by_delimiter(prefix, ":")
    if not parts or ":".join(parts) != prefix:
        return False
    return all(is_variant(p) for p in parts)


def split_class_list(text: str) -> list[str]:
    """Split a class list on whitespace, keeping variant groups whole.

        split_class_list("p-4 hover:(bg-red text-white)")
        -> ["p-4", "hover:(bg-red text-white)"]
    """
    tokens: list[str] = []
    current: list[str] = []
    depth = 0
    for ch in text:
        if ch.isspace() and depth == 0:
            if current:
                tokens.append("".join(current))
            current = []
            continue
        if ch in _OPENERS:
            depth += 1
        elif ch in _CLOSERS:
            depth = max(depth - 1, 0)
        current.append(ch)
    if current:
        tokens.append("".join(current))
    return tokens
