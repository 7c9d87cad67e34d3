"""classcraft: compile utility class tokens into cached CSS."""

from classcraft.cache import CSSCache, CacheStats, hash_theme
from classcraft.compiler import CompileResult, Compiler, ResolvedClass
from classcraft.config import CacheOptions, CompilerConfig
from classcraft.errors import (
    ClasscraftError,
    ConfigError,
    DuplicateRuleError,
    InvalidRuleError,
    RuleFileError,
)
from classcraft.matcher import Matcher
from classcraft.model import CompiledRule, MatchResult, ParsedClass, Rule, RuleHandler
from classcraft.parser import expand_variant_groups, parse, parse_classes

__version__ = "0.1.0"

__all__ = [
    "__version__",
    # pipeline
    "Compiler",
    "CompileResult",
    "ResolvedClass",
    "CompilerConfig",
    "CacheOptions",
    # components
    "parse",
    "parse_classes",
    "expand_variant_groups",
    "Matcher",
    "CSSCache",
    "CacheStats",
    "hash_theme",
    # model
    "Rule",
    "RuleHandler",
    "CompiledRule",
    "MatchResult",
    "ParsedClass",
    # errors
    "ClasscraftError",
    "InvalidRuleError",
    "DuplicateRuleError",
    "ConfigError",
    "RuleFileError",
]
