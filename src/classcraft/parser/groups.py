"""Variant-group expansion.

Rewrites the shorthand ``variant:(a b c)`` into ``variant:a variant:b
variant:c``. Groups nest, and inner groups unwrap before the outer
variant is distributed:

    hover:(focus:(active:(bg-red)))  ->  hover:focus:active:bg-red

Expansion walks the text once with an explicit stack of open groups, so
nesting depth is limited only by the input length. Parentheses inside an
arbitrary-value bracket (``w-[calc(100%-4px)]``) are never treated as
groups. A group that is never closed is left exactly as written. A
parenthesis that does not follow a variant chain is ordinary text, and a
stray ``)`` with no open group becomes its own token:

    hover:((a b))  ->  hover:(a hover:b )
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from classcraft.parser.scan import is_variant_chain

__all__ = ["expand_variant_group_tokens", "expand_variant_groups"]

logger = logging.getLogger(__name__)


@dataclass
class _Group:
    prefix: str
    start: int  # offset of the token that opened the group
    items: list[str] = field(default_factory=list)


def expand_variant_group_tokens(text: str) -> list[str]:
    """Expand variant groups in *text* and return the flat token list."""
    root = _Group(prefix="", start=0)
    stack = [root]
    token_start: int | None = None
    brackets = 0
    parens = 0  # literal parens in the current token, outside brackets

    def flush(end: int) -> None:
        nonlocal token_start
        if token_start is not None and end > token_start:
            stack[-1].items.append(text[token_start:end])
        token_start = None

    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch.isspace():
            flush(i)
            brackets = 0
            parens = 0
            i += 1
            continue
        if token_start is None:
            token_start = i
        if ch == "\\":
            i += 2
            continue
        if brackets:
            if ch == "[":
                brackets += 1
            elif ch == "]":
                brackets -= 1
        elif ch == "[":
            brackets = 1
        elif ch == "(":
            head = text[token_start:i]
            if parens == 0 and head.endswith(":") and is_variant_chain(head[:-1]):
                stack.append(_Group(prefix=head[:-1], start=token_start))
                token_start = None
            else:
                parens += 1
        elif ch == ")":
            if parens:
                parens -= 1
            elif len(stack) > 1:
                flush(i)
                group = stack.pop()
                stack[-1].items.extend(f"{group.prefix}:{item}" for item in group.items)
        i += 1

    flush(n)
    if len(stack) > 1:
        outer = stack[1]
        logger.warning(
            "Unclosed variant group at offset %d; leaving it unexpanded", outer.start
        )
        root.items.extend(text[outer.start:].split())
    return root.items


def expand_variant_groups(text: str) -> str:
    """Expand variant groups in a class list, returning a class list string."""
    return " ".join(expand_variant_group_tokens(text))
