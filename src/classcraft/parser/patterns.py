"""Precompiled regular expressions shared by the class parser."""

from __future__ import annotations

import re

# Maximum accepted length of a single class token.
MAX_CLASS_LENGTH = 500

# A variant segment: plain identifier or breakpoint (hover, md, 2xl, max-lg),
# optional "@" for container queries, optional bracket payload
# (data-[state=open], aria-[sort=asc], @[500px], [&>*]) and an optional
# "/name" for named groups and peers.
VARIANT_RE = re.compile(
    r"""
    ^@?
    (?:
        [A-Za-z0-9][\w-]*(?:\[[^\]]+\])?   # identifier, optional bracket payload
      | \[[^\]]+\]                          # bare arbitrary variant
    )
    (?:/[\w-]+)?                            # named group/peer
    $
    """,
    re.VERBOSE,
)

# Arbitrary value in brackets, with an optional type hint: [color:red], [#f00]
ARBITRARY_WITH_TYPE_RE = re.compile(r"^\[(?:([a-z-]+):)?(.+)\]$", re.IGNORECASE)

HAS_BRACKETS_RE = re.compile(r"\[[^\]]+\]")

# Underscore not preceded by a backslash
UNESCAPED_UNDERSCORE_RE = re.compile(r"(?<!\\)_")
