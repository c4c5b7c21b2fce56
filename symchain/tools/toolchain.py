#!/usr/bin/env python3

"""External capabilities consumed by the traversal and query engines."""

import logging
import threading
from typing import Protocol

from symchain.config import DependencySource, SymchainConfig
from symchain.tools.ldconfig import LinkerCache
from symchain.tools.ldd import ldd_dependencies
from symchain.tools.nm import dynamic_symbols
from symchain.tools.readelf import needed_libraries
from symchain.tools.shell import check_tools

logger = logging.getLogger(__name__)


class Toolchain(Protocol):
    def check(self) -> None: ...

    def resolve_bare_name(self, name: str) -> str | None: ...

    def list_direct_dependencies(self, path: str) -> list[tuple[str, str | None]]: ...

    def list_symbol_table(self, path: str, demangle: bool) -> list[str]: ...


class SystemToolchain:
    """Toolchain backed by ldconfig, ldd, readelf and nm."""

    def __init__(self, config: SymchainConfig | None = None):
        self.config = config or SymchainConfig()
        self.linker_cache = LinkerCache(self.config.ldconfig, self.config.tool_timeout)
        # every location ldd has reported so far; earlier (closer to the root) wins
        self._locations: dict[str, str] = {}
        self._locations_lock = threading.Lock()

    def check(self) -> None:
        """Raise CollaboratorUnavailable if a required tool is missing."""
        check_tools(self.config.required_tools())

    def resolve_bare_name(self, name: str) -> str | None:
        return self.linker_cache.lookup(name)

    def list_direct_dependencies(self, path: str) -> list[tuple[str, str | None]]:
        timeout = self.config.tool_timeout
        resolved = ldd_dependencies(self.config.ldd, path, timeout)
        if self.config.dependency_source == DependencySource.LDD:
            return resolved

        # ldd knows where each library lives, readelf knows which ones are direct.
        # A library inspected on its own cannot see the executable's RPATH, so
        # locations reported for its ancestors take precedence over its own.
        own: dict[str, str] = {}
        for name, location in resolved:
            if location:
                own.setdefault(name, location)
                own.setdefault(location.rsplit("/", 1)[-1], location)

        needed = needed_libraries(self.config.readelf, path, timeout)
        with self._locations_lock:
            known = dict(self._locations)
            for name, location in own.items():
                self._locations.setdefault(name, location)

        dependencies = []
        for name in needed:
            location = known.get(name) or own.get(name)
            if location is None:
                logger.debug("%s: no location for %s", path, name)
            dependencies.append((name, location))
        return dependencies

    def list_symbol_table(self, path: str, demangle: bool) -> list[str]:
        return dynamic_symbols(self.config.nm, path, demangle, self.config.tool_timeout)
