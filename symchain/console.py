#!/usr/bin/env python3

from rich.console import Console as RichConsole
from rich.markup import escape
from rich.tree import Tree

from symchain.models import (
    Classification,
    DependencyGraph,
    QueryResult,
    SymbolNotFound,
)

RULE = "=" * 40


class Console:
    """Console wrapper that renders symbol search reports."""

    def __init__(self, rich_console: RichConsole | None = None):
        self._rich = rich_console or RichConsole(highlight=False)

    def print(self, *args, **kwargs):
        """Print using Rich console."""
        return self._rich.print(*args, **kwargs)

    def status(self, *args, **kwargs):
        """Create Rich status context."""
        return self._rich.status(*args, **kwargs)

    def header(self, library: str, pattern: str):
        self.print(f"[cyan]{RULE}[/cyan]")
        self.print("[cyan]Symbol Search Report[/cyan]")
        self.print(f"[cyan]{RULE}[/cyan]")
        self.print(f"Library: {escape(library)}")
        self.print(f"Symbol Pattern: {escape(pattern)}")
        self.print(f"[cyan]{RULE}[/cyan]")
        self.print()

    def dependency_tree(self, graph: DependencyGraph, matching: set[str]):
        """Print the first-discoverer spanning tree, highlighting matching libraries."""

        def label(path: str) -> str:
            node = graph.nodes[path]
            style = "bold green" if path in matching else "blue"
            return f"[{style}]{escape(node.display_name)}[/{style}] [dim]({escape(path)})[/dim]"

        tree = Tree(label(graph.root))
        pending = [(graph.root, tree)]
        while pending:
            path, branch = pending.pop()
            for child in graph.children(path):
                pending.append((child.canonical_path, branch.add(label(child.canonical_path))))

        self.print("[green]Dependency Tree:[/green]")
        self.print(tree)
        self.print()

    def result(self, result: QueryResult | SymbolNotFound):
        if isinstance(result, SymbolNotFound):
            self.print(
                f"[red]Symbol '{escape(result.pattern)}' not found in dependency tree of "
                f"{escape(result.root.canonical_path)}[/red]"
            )
            self._totals(result)
            return

        for report in result.reports:
            self.print(RULE)
            self.print(f"Library:   {escape(report.node.canonical_path)}")
            self.print(f"Chain:     [blue]{escape(report.chain_text)}[/blue]")
            self.print(f"Symbol:    {escape(result.pattern)}")
            self.print()
            self.print(f"Summary:   {report.summary.label}")
            self.print()
            for match in report.matches:
                if match.effective_classification == Classification.UNDEFINED:
                    self.print(f"  [yellow]↳ Symbol: {escape(match.name)}[/yellow]")
                    self.print(
                        f"    Status: [red]{escape(match.code)}[/red] - {escape(match.description)}"
                    )
                else:
                    self.print(f"  [green]↳ Symbol: {escape(match.name)}[/green]")
                    self.print(
                        f"    Status: [green]{escape(match.code)}[/green] - {escape(match.description)}"
                    )
            self.print()

        self.print(f"[cyan]{RULE}[/cyan]")
        self.print("[cyan]Summary[/cyan]")
        self.print(f"[cyan]{RULE}[/cyan]")
        if result.defined_in:
            self.print("[green]Symbol DEFINED in:[/green]")
            for node in result.defined_in:
                self.print(f"  ✓ {escape(node.display_name)} ({escape(node.canonical_path)})")
        else:
            self.print(
                "[red]Symbol not defined in any library (only undefined references found)[/red]"
            )
        self.print()
        self.print(
            f"Matches: {result.defined_count} defined, {result.undefined_count} undefined "
            f"in {result.nodes_matching} libraries"
        )
        if result.unrecognized_count:
            self.print(f"[yellow]Unrecognized symbol lines: {result.unrecognized_count}[/yellow]")
        self._totals(result)

    def _totals(self, result: QueryResult | SymbolNotFound):
        self.print(f"Total libraries scanned: {result.nodes_visited}")
        if result.unresolved:
            self.print(f"[yellow]Unresolved dependencies: {len(result.unresolved)}[/yellow]")
            for dependency in result.unresolved:
                self.print(
                    f"  [yellow]✗ {escape(dependency.name)}[/yellow] "
                    f"({dependency.reason}, needed by {escape(dependency.parent)})"
                )
