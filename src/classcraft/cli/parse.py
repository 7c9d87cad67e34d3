"""CLI commands: classcraft expand / classcraft parse."""

from __future__ import annotations

import dataclasses
import json

import click

from classcraft.parser import ClassParser


@click.command()
@click.argument("text")
def expand(text: str) -> None:
    """Expand variant groups and print the flat class list."""
    click.echo(ClassParser().expand_variant_groups(text))


@click.command()
@click.argument("text")
@click.option("--no-groups", is_flag=True, help="Do not expand variant groups first.")
def parse(text: str, no_groups: bool) -> None:
    """Print one JSON object per class token."""
    parser = ClassParser()
    tokens = parser.parse_classes(text) if no_groups else parser.parse_class_list(text)
    for parsed in tokens:
        click.echo(json.dumps(dataclasses.asdict(parsed)))
