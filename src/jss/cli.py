"""
Command-line inspector for JSS documents.
Decodes documents for a quick look and lists the tags they carry.
"""
# typer relies on function calls used as default values
# pyright: reportCallInDefaultInitializer=false

from __future__ import annotations

import json
import sys
from collections.abc import Iterator
from pathlib import Path as FilePath
from typing import Any

import typer
from rich.console import Console
from rich.pretty import Pretty
from rich.table import Table

from jss.codec import get_default_codec
from jss.decoder import split_tagged_key
from jss.errors import PointerResolutionError
from jss.registry import Registry
from jss.values import Path

cli = typer.Typer(
	name="jss",
	help="JSS (JSON Super Set) - inspect tagged JSON documents",
	no_args_is_help=True,
)


def _read_source(source: str) -> str:
	if source == "-":
		return sys.stdin.read()
	return FilePath(source).read_text(encoding="utf-8")


def _load(source: str, console: Console) -> Any:
	try:
		return json.loads(_read_source(source))
	except OSError as exc:
		console.print(f"[red]Cannot read {source}:[/red] {exc}")
		raise typer.Exit(1) from exc
	except json.JSONDecodeError as exc:
		console.print(f"[red]Invalid JSON in {source}:[/red] {exc}")
		raise typer.Exit(1) from exc


def iter_tags(value: Any, registry: Registry, path: Path = ()) -> Iterator[tuple[Path, str]]:
	"""Yield ``(path, tag)`` for every tagged key of an encoded document.

	Payloads of registered plugins are opaque and not descended into.
	"""
	if isinstance(value, list):
		for index, item in enumerate(value):
			yield from iter_tags(item, registry, (*path, index))
	elif isinstance(value, dict):
		for key, entry in value.items():
			name, tag = split_tagged_key(key)
			child = (*path, name)
			if tag:
				yield child, tag
				if registry.lookup(tag) is not None:
					continue
			yield from iter_tags(entry, registry, child)


def _describe(tag: str, registry: Registry) -> str:
	if tag.startswith("["):
		return "array"
	plugin = registry.lookup(tag)
	if plugin is None:
		return "unknown"
	return plugin.name


@cli.command("decode")
def decode_cmd(
	source: str = typer.Argument(..., help="JSS document to decode, '-' for stdin"),
):
	"""Decode a JSS document and pretty-print the restored value."""
	console = Console()
	err_console = Console(stderr=True)
	document = _load(source, err_console)
	try:
		value = get_default_codec().decode(document)
	except PointerResolutionError as exc:
		err_console.print(f"[red]Broken pointer:[/red] {exc}")
		raise typer.Exit(1) from exc
	console.print(Pretty(value))


@cli.command("tags")
def tags_cmd(
	source: str = typer.Argument(..., help="JSS document to inspect, '-' for stdin"),
):
	"""List every tagged key of a JSS document."""
	console = Console()
	document = _load(source, Console(stderr=True))
	registry = get_default_codec().registry

	table = Table(title="Tagged keys")
	table.add_column("Path")
	table.add_column("Tag")
	table.add_column("Plugin")
	count = 0
	for path, tag in iter_tags(document, registry):
		table.add_row("/".join(str(segment) for segment in path), tag, _describe(tag, registry))
		count += 1
	if count == 0:
		console.print("No tagged keys")
		return
	console.print(table)


@cli.command("builtins")
def builtins_cmd():
	"""Show the built-in type tags."""
	console = Console()
	table = Table(title="Built-in tags")
	table.add_column("Tag")
	table.add_column("Plugin")
	table.add_column("Encodes")
	for tag, plugin in get_default_codec().registry.builtin_plugins():
		encodes = "no (decode only)" if plugin.decode_only else "yes"
		table.add_row(tag, plugin.name, encodes)
	console.print(table)


def main():
	"""Main CLI entry point."""
	try:
		cli()
	except Exception:
		console = Console(stderr=True)
		console.print_exception()
		raise typer.Exit(1) from None


if __name__ == "__main__":
	main()
