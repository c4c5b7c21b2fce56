#!/usr/bin/env python3

import logging
from concurrent.futures import ThreadPoolExecutor

from symchain.classify import classify_line
from symchain.models import DependencyGraph, SymbolMatch
from symchain.pattern import SymbolPattern
from symchain.tools.toolchain import Toolchain

logger = logging.getLogger(__name__)


class SymbolQueryEngine:
    """Looks up and classifies matching symbols in every node of a graph."""

    def __init__(
        self,
        toolchain: Toolchain,
        pattern: SymbolPattern,
        demangle: bool = False,
        max_workers: int = 1,
    ):
        self.toolchain = toolchain
        self.pattern = pattern
        self.demangle = demangle
        self.max_workers = max(1, max_workers)

    def search(self, path: str) -> list[SymbolMatch]:
        """Matching, classified symbol lines of one library."""
        lines = self.toolchain.list_symbol_table(path, self.demangle)
        return [classify_line(line) for line in lines if self.pattern.matches(line)]

    def run(self, graph: DependencyGraph) -> dict[str, list[SymbolMatch]]:
        """Query every node once.

        Only nodes with at least one match appear in the result, in discovery
        order.
        """
        paths = list(graph.nodes)
        if self.max_workers == 1 or len(paths) <= 1:
            found = [self.search(path) for path in paths]
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
                found = list(pool.map(self.search, paths))

        matches = {path: hits for path, hits in zip(paths, found) if hits}
        logger.info(
            "%r matched in %d of %d libraries", self.pattern.pattern, len(matches), len(paths)
        )
        return matches
