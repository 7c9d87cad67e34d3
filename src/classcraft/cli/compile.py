"""CLI command: classcraft compile -- turn class strings into CSS."""

from __future__ import annotations

import dataclasses
import logging
import math
import sys

import click

from classcraft.compiler import Compiler
from classcraft.errors import ClasscraftError
from classcraft.loader import load_rule_file
from classcraft.parser import split_class_list


@click.command(name="compile")
@click.argument("classes", nargs=-1, required=True)
@click.option(
    "--rules", "rules_path", required=True, type=click.Path(exists=True), help="JSON rule file"
)
@click.option("--max-size", type=int, default=None, help="Cache capacity (entries)")
@click.option("--ttl", type=float, default=None, help="Cache entry lifetime in milliseconds")
@click.option("--strict", is_flag=True, help="Exit with code 1 if any token is unresolved")
@click.option("--stats", is_flag=True, help="Print cache statistics to stderr")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def compile_(
    classes: tuple[str, ...],
    rules_path: str,
    max_size: int | None,
    ttl: float | None,
    strict: bool,
    stats: bool,
    verbose: bool,
) -> None:
    """Compile CLASSES (each a class list) into CSS using a rule file."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    try:
        ruleset = load_rule_file(rules_path)
        config = ruleset.config
        cache_opts = config.cache
        if max_size is not None:
            cache_opts = dataclasses.replace(cache_opts, max_size=max_size)
        if ttl is not None:
            cache_opts = dataclasses.replace(cache_opts, ttl=ttl if ttl >= 0 else math.inf)
        config = dataclasses.replace(config, cache=cache_opts)
        compiler = Compiler(config=config, rules=ruleset.rules, theme=ruleset.theme)
    except ClasscraftError as exc:
        click.echo(f"Rule error: {exc}", err=True)
        sys.exit(2)

    # Each argument is a whitespace-delimited class list
    raw = [token for text in classes for token in split_class_list(text)]
    result = compiler.compile(raw)

    if result.css:
        click.echo(result.css)
    for diag in result.diagnostics:
        click.echo(str(diag), err=True)
    if stats:
        s = compiler.cache_stats()
        click.echo(
            f"Cache: {s.size}/{s.max_size} entries, {s.hits} hit(s), {s.misses} miss(es)",
            err=True,
        )

    if strict and result.unresolved:
        sys.exit(1)
