"""Load rules, theme and config from a JSON rule file.

    {
      "theme": {"spacing": {"4": "1rem"}},
      "config": {"cache": {"max_size": 500}},
      "rules": [
        {"name": "padding", "pattern": "p-(\\d+)",
         "properties": {"padding": "{value}"}, "theme_key": "spacing"},
        {"name": "width-arbitrary", "pattern": "w-\\[(.+)\\]",
         "properties": {"width": "{value}"}, "arbitrary": true, "priority": 10}
      ]
    }

Every rule gets a TemplateHandler built from its ``properties``.
"""

from __future__ import annotations

import json
import re
import string
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

from classcraft.config import CompilerConfig
from classcraft.errors import ConfigError, RuleFileError
from classcraft.handlers import TemplateHandler
from classcraft.model.rule import Rule

__all__ = ["RuleSet", "load_rule_file", "rule_from_mapping", "rules_from_data"]

_RULE_KEYS = frozenset(
    {"name", "pattern", "priority", "layer", "properties", "theme_key", "arbitrary"}
)
_FIELD_NAME_RE = re.compile(r"^([^.\[]*)")


def _check_templates(
    properties: Mapping[str, str], pattern: str, index: int | None
) -> None:
    """Reject templates whose fields the pattern's captures can never fill."""
    try:
        groups = re.compile(pattern).groups
    except re.error:
        return  # reported by the matcher as InvalidRuleError
    for prop, template in properties.items():
        auto = 0
        try:
            fields = [f for _, f, _, _ in string.Formatter().parse(template) if f is not None]
        except ValueError as exc:
            raise RuleFileError(f"property {prop!r}: {exc}", index=index, cause=exc) from exc
        for field_name in fields:
            key = _FIELD_NAME_RE.match(field_name).group(1)
            if key == "":
                key, auto = str(auto), auto + 1
            if key == "value":
                continue
            if not key.isdigit():
                raise RuleFileError(
                    f"property {prop!r}: unknown template field {{{key}}}", index=index
                )
            if int(key) > groups:
                raise RuleFileError(
                    f"property {prop!r}: template field {{{key}}} but pattern "
                    f"has {groups} group(s)",
                    index=index,
                )


@dataclass(frozen=True)
class RuleSet:
    rules: list[Rule] = field(default_factory=list)
    theme: dict[str, Any] = field(default_factory=dict)
    config: CompilerConfig = field(default_factory=CompilerConfig)


def rule_from_mapping(data: Mapping[str, Any], index: int | None = None) -> Rule:
    """Build a Rule with a TemplateHandler from one ``rules`` entry."""
    if not isinstance(data, Mapping):
        raise RuleFileError("rule must be an object", index=index)
    unknown = set(data) - _RULE_KEYS
    if unknown:
        raise RuleFileError(f"unknown keys: {', '.join(sorted(unknown))}", index=index)
    pattern = data.get("pattern")
    if not isinstance(pattern, str) or not pattern:
        raise RuleFileError("'pattern' must be a non-empty string", index=index)
    properties = data.get("properties", {})
    if not isinstance(properties, Mapping):
        raise RuleFileError("'properties' must be an object", index=index)
    priority = data.get("priority", 0)
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise RuleFileError("'priority' must be an integer", index=index)

    templates = {str(k): str(v) for k, v in properties.items()}
    _check_templates(templates, pattern, index)

    handler = TemplateHandler(
        properties=templates,
        theme_key=data.get("theme_key"),
        arbitrary=bool(data.get("arbitrary", False)),
    )
    return Rule(
        pattern=pattern,
        handler=handler,
        priority=priority,
        layer=str(data.get("layer", "utilities")),
        name=data.get("name"),
    )


def rules_from_data(data: Mapping[str, Any]) -> RuleSet:
    if not isinstance(data, Mapping):
        raise RuleFileError("rule file must contain a JSON object")
    raw_rules = data.get("rules", [])
    if not isinstance(raw_rules, list):
        raise RuleFileError("'rules' must be a list")
    rules = [rule_from_mapping(item, index=i) for i, item in enumerate(raw_rules)]
    try:
        config = CompilerConfig.from_mapping(data.get("config") or {})
    except ConfigError as exc:
        raise RuleFileError(str(exc), cause=exc) from exc
    return RuleSet(rules=rules, theme=dict(data.get("theme") or {}), config=config)


def load_rule_file(path: str | Path) -> RuleSet:
    """Read and validate a JSON rule file."""
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise RuleFileError(f"cannot read {path}: {exc}", cause=exc) from exc
    return rules_from_data(data)
