#!/usr/bin/env python3
"""
Breadth-first construction of a library's dependency closure.

The traversal records, for every library, the library that first led to it.
Shared libraries form a DAG (libc is reachable from almost everything), so the
resulting parent map is a spanning tree: later edges into an already seen
library are dropped, and ties go to whichever parent was expanded first.
"""

import logging
import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path

from symchain.canonical import canonicalize
from symchain.models import DependencyGraph, LibraryNode, UnresolvedDependency
from symchain.tools.toolchain import Toolchain

logger = logging.getLogger(__name__)


class DependencyGraphBuilder:
    """Builds the node set and first-discoverer parent map for a root library."""

    def __init__(self, toolchain: Toolchain, max_workers: int = 1):
        self.toolchain = toolchain
        self.max_workers = max(1, max_workers)
        self._lock = threading.Lock()
        self._seen: set[str] = set()

    def canonical_root(self, root_reference: str) -> Path:
        return canonicalize(root_reference, self.toolchain.resolve_bare_name)

    def _claim(self, path: str) -> bool:
        """Insert `path` into the seen set; False if it was already there."""
        with self._lock:
            if path in self._seen:
                return False
            self._seen.add(path)
            return True

    def _expand(self, path: str) -> list[tuple[str, str | None]]:
        return list(self.toolchain.list_direct_dependencies(path))

    def _fetch_level(
        self, level: list[str], pool: ThreadPoolExecutor | None
    ) -> list[list[tuple[str, str | None]]]:
        if pool is None or len(level) == 1:
            return [self._expand(path) for path in level]
        return list(pool.map(self._expand, level))

    def build(self, root_reference: str) -> DependencyGraph:
        root = str(self.canonical_root(root_reference))
        self._seen = set()
        self._claim(root)

        graph = DependencyGraph(root=root)
        graph.nodes[root] = LibraryNode.from_path(root, depth=0)
        graph.parents[root] = None

        queue: deque[str] = deque([root])
        pool = ThreadPoolExecutor(max_workers=self.max_workers) if self.max_workers > 1 else None
        try:
            while queue:
                # Dependency lists for a whole level are fetched together, but
                # applied in queue order so the parent map matches a sequential BFS.
                level = list(queue)
                queue.clear()
                for current, dependencies in zip(level, self._fetch_level(level, pool)):
                    depth = graph.nodes[current].depth + 1
                    for name, location in dependencies:
                        child = self._resolve(graph, current, name, location)
                        if child is None or not self._claim(child):
                            continue
                        graph.nodes[child] = LibraryNode.from_path(child, depth=depth)
                        graph.parents[child] = current
                        queue.append(child)
        finally:
            if pool is not None:
                pool.shutdown()

        logger.info(
            "Visited %d libraries from %s (%d unresolved dependencies)",
            len(graph.nodes),
            root,
            len(graph.unresolved),
        )
        return graph

    def _resolve(
        self, graph: DependencyGraph, parent: str, name: str, location: str | None
    ) -> str | None:
        """Canonical path of a dependency, or None if it must be skipped."""
        if not location:
            logger.info("%s: dependency %s not found", Path(parent).name, name)
            graph.unresolved.append(
                UnresolvedDependency(parent=parent, name=name, reason="not found")
            )
            return None

        path = canonicalize(location, self.toolchain.resolve_bare_name)
        if not path.is_file():
            logger.info("%s: dependency %s missing at %s", Path(parent).name, name, path)
            graph.unresolved.append(
                UnresolvedDependency(
                    parent=parent, name=name, path=str(path), reason="missing file"
                )
            )
            return None

        return str(path)
