"""Rule matching."""

from classcraft.matcher.matcher import (
    Matcher,
    anchor_pattern,
    extract_pattern_prefix,
    extract_utility_prefix,
    generate_rule_name,
)

__all__ = [
    "Matcher",
    "anchor_pattern",
    "extract_pattern_prefix",
    "extract_utility_prefix",
    "generate_rule_name",
]
