#!/usr/bin/env python3
"""
Find which library in a dependency closure defines or references a symbol.

    result = find_symbol("/usr/bin/curl", "SSL_read")
    if result.found:
        for report in result.reports:
            print(report.chain_text, report.summary.label)
"""

import logging

from symchain.config import SymchainConfig
from symchain.errors import RootNotFound
from symchain.graph import DependencyGraphBuilder
from symchain.models import DependencyGraph, QueryResult, SymbolNotFound
from symchain.pattern import SymbolPattern
from symchain.query import SymbolQueryEngine
from symchain.report import aggregate
from symchain.tools.toolchain import SystemToolchain, Toolchain

logger = logging.getLogger(__name__)


def search_closure(
    root_reference: str,
    pattern: str,
    *,
    toolchain: Toolchain | None = None,
    config: SymchainConfig | None = None,
) -> tuple[DependencyGraph, QueryResult | SymbolNotFound]:
    """Like find_symbol, but also return the traversed dependency graph."""
    config = config or SymchainConfig()
    symbol_pattern = SymbolPattern(pattern, literal=config.fixed_strings)

    if toolchain is None:
        toolchain = SystemToolchain(config)
    toolchain.check()

    builder = DependencyGraphBuilder(toolchain, max_workers=config.max_workers)
    root = builder.canonical_root(root_reference)
    if not root.is_file():
        raise RootNotFound(root_reference, str(root))

    logger.info("Searching %s for %r", root, pattern)
    graph = builder.build(str(root))

    engine = SymbolQueryEngine(
        toolchain,
        symbol_pattern,
        demangle=config.demangle,
        max_workers=config.max_workers,
    )
    return graph, aggregate(graph, engine.run(graph), pattern)


def find_symbol(
    root_reference: str,
    pattern: str,
    *,
    toolchain: Toolchain | None = None,
    config: SymchainConfig | None = None,
) -> QueryResult | SymbolNotFound:
    """Search the dependency closure of `root_reference` for `pattern`.

    Raises a SymchainError subclass for fatal conditions (missing root,
    missing tool, bad pattern, tool timeout). A pattern that matches nowhere
    is reported as SymbolNotFound.
    """
    _, result = search_closure(root_reference, pattern, toolchain=toolchain, config=config)
    return result
