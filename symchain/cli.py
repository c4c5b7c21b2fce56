#!/usr/bin/env python3
"""
Find which library in a binary's dependency closure provides a symbol.

Usage:
    symchain /usr/lib/libexample.so 'pthread_create'
    symchain -C -F ./myprog 'MyNamespace::MyClass::func()'
"""

import json
import logging
import sys
from pathlib import Path

import click
import yaml
from pydantic import ValidationError
from rich.console import Console as RichConsole
from rich.logging import RichHandler

from symchain.config import DependencySource, SymchainConfig
from symchain.console import Console
from symchain.errors import SymchainError
from symchain.finder import search_closure
from symchain.models import QueryResult

EXIT_FOUND = 0
EXIT_NOT_FOUND = 1
EXIT_ERROR = 2


def setup_logging(verbose: bool):
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=RichConsole(stderr=True), show_path=False)],
        force=True,
    )


def load_config(config_path: Path | None) -> SymchainConfig:
    if config_path is not None:
        return SymchainConfig.load_from_file(config_path)
    return SymchainConfig.find_config(Path.cwd()) or SymchainConfig()


@click.command()
@click.argument("library")
@click.argument("pattern")
@click.option(
    "-F",
    "--fixed-strings",
    is_flag=True,
    help="Treat PATTERN as a literal string instead of a regular expression",
)
@click.option("-C", "--demangle", is_flag=True, help="Demangle C++ symbol names")
@click.option(
    "--deps",
    "dependency_source",
    type=click.Choice([source.value for source in DependencySource]),
    default=None,
    help="Direct dependencies from readelf NEEDED entries, or everything ldd lists",
)
@click.option(
    "-j",
    "--jobs",
    "max_workers",
    type=click.IntRange(min=1),
    default=None,
    help="Parallel tool invocations",
)
@click.option(
    "--timeout",
    "tool_timeout",
    type=click.FloatRange(min=0, min_open=True),
    default=None,
    help="Timeout in seconds for each tool invocation",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Path to a symchain_config.json file",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["text", "json", "yaml"]),
    default="text",
    help="Output format",
)
@click.option("--tree", is_flag=True, help="Print the dependency tree before the report")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.version_option(package_name="symchain")
def cli(
    library: str,
    pattern: str,
    fixed_strings: bool,
    demangle: bool,
    dependency_source: str | None,
    max_workers: int | None,
    tool_timeout: float | None,
    config_path: Path | None,
    output_format: str,
    tree: bool,
    verbose: bool,
):
    """Search the dependency closure of LIBRARY for symbols matching PATTERN."""
    setup_logging(verbose)
    console = Console()

    try:
        # flags only ever switch a config file setting on
        config = load_config(config_path).merged(
            fixed_strings=fixed_strings or None,
            demangle=demangle or None,
            dependency_source=dependency_source,
            max_workers=max_workers,
            tool_timeout=tool_timeout,
        )
        if output_format == "text":
            console.header(library, pattern)
            with console.status("Scanning dependencies..."):
                graph, result = search_closure(library, pattern, config=config)
        else:
            graph, result = search_closure(library, pattern, config=config)
    except (ValidationError, json.JSONDecodeError) as e:
        click.echo(f"Error: invalid configuration: {e}", err=True)
        sys.exit(EXIT_ERROR)
    except SymchainError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(EXIT_ERROR)
    except KeyboardInterrupt:
        click.echo("\nSearch interrupted by user", err=True)
        sys.exit(EXIT_ERROR)

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
    elif output_format == "yaml":
        click.echo(yaml.safe_dump(result.model_dump(mode="json"), sort_keys=False))
    else:
        if tree:
            matching = (
                {report.node.canonical_path for report in result.reports}
                if isinstance(result, QueryResult)
                else set()
            )
            console.dependency_tree(graph, matching)
        console.result(result)

    sys.exit(EXIT_FOUND if result.found else EXIT_NOT_FOUND)


def main():
    cli()


if __name__ == "__main__":
    main()
