"""CLI command: classcraft match -- resolve one base utility to a rule."""

from __future__ import annotations

import sys

import click

from classcraft.errors import ClasscraftError
from classcraft.loader import load_rule_file
from classcraft.matcher import Matcher


@click.command()
@click.argument("utility")
@click.option(
    "--rules", "rules_path", required=True, type=click.Path(exists=True), help="JSON rule file"
)
def match(utility: str, rules_path: str) -> None:
    """Show which rule claims UTILITY and its captures.

    Exits with code 1 when no rule matches.
    """
    try:
        ruleset = load_rule_file(rules_path)
        matcher = Matcher(ruleset.rules, strict=ruleset.config.strict_rule_names)
    except ClasscraftError as exc:
        click.echo(f"Rule error: {exc}", err=True)
        sys.exit(2)

    result = matcher.match(utility)
    if result is None:
        click.echo(f"No rule matches {utility!r}")
        sys.exit(1)

    click.echo(f"Rule: {result.rule.name} (priority={result.rule.priority}, layer={result.rule.layer})")
    for i, capture in enumerate(result.captures):
        click.echo(f"  [{i}] {capture}")
