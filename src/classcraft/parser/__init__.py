"""Class-list parsing and variant-group expansion."""

from classcraft.parser.classes import (
    ArbitraryValue,
    ClassParser,
    combine_with_variants,
    create_class_name,
    extract_utility,
    extract_variants,
    has_arbitrary,
    has_variants,
    is_negative,
    normalize_arbitrary_value,
    parse,
    parse_arbitrary_value,
    parse_classes,
)
from classcraft.parser.groups import expand_variant_group_tokens, expand_variant_groups
from classcraft.parser.patterns import MAX_CLASS_LENGTH
from classcraft.parser.scan import split_by_delimiter, split_class_list

__all__ = [
    "MAX_CLASS_LENGTH",
    "ArbitraryValue",
    "ClassParser",
    "combine_with_variants",
    "create_class_name",
    "expand_variant_group_tokens",
    "expand_variant_groups",
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
    "split_class_list",
]
