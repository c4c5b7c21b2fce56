#!/usr/bin/env python3

"""Bare library name lookup through the dynamic linker cache."""

import logging
import shutil
import threading

from symchain.tools.shell import run_tool

logger = logging.getLogger(__name__)

# ldconfig usually lives in /sbin, which is often not on an unprivileged PATH
FALLBACK_DIRS = ("/sbin", "/usr/sbin")


def parse_ldconfig_cache(output: str) -> dict[str, str]:
    """Parse `ldconfig -p` output into a name -> path mapping.

    Lines look like::

        libz.so.1 (libc6,x86-64) => /lib/x86_64-linux-gnu/libz.so.1

    The first entry for a name wins, matching the linker's search order.
    """
    cache: dict[str, str] = {}
    for line in output.splitlines():
        if "=>" not in line:
            continue
        entry, path = line.split("=>", 1)
        fields = entry.split()
        path = path.strip()
        if not fields or not path:
            continue
        cache.setdefault(fields[0], path)
    return cache


def find_ldconfig(executable: str) -> str | None:
    found = shutil.which(executable)
    if found:
        return found
    for directory in FALLBACK_DIRS:
        found = shutil.which(executable, path=directory)
        if found:
            return found
    return None


class LinkerCache:
    """Lazily loaded view of the system's dynamic linker cache."""

    def __init__(self, executable: str = "ldconfig", timeout: float = 60.0):
        self.executable = executable
        self.timeout = timeout
        self._entries: dict[str, str] | None = None
        self._lock = threading.Lock()

    def _load(self) -> dict[str, str]:
        with self._lock:
            if self._entries is None:
                ldconfig = find_ldconfig(self.executable)
                if ldconfig is None:
                    # bare names then fall back to the current directory
                    logger.warning("%s not found, linker cache unavailable", self.executable)
                    self._entries = {}
                else:
                    result = run_tool([ldconfig, "-p"], self.timeout)
                    self._entries = parse_ldconfig_cache(result.stdout)
                    logger.debug("Loaded %d linker cache entries", len(self._entries))
            return self._entries

    def lookup(self, name: str) -> str | None:
        return self._load().get(name)
