#!/usr/bin/env python3

"""Dependency listing through ldd."""

import re

from symchain.tools.shell import run_tool

# libfoo.so.1 => /usr/lib/libfoo.so.1 (0x00007f...)
# libbar.so.2 => not found
_ARROW = re.compile(r"^(\S+)\s+=>\s+(.*?)\s*(?:\(0x[0-9a-fA-F]+\))?$")
# /lib64/ld-linux-x86-64.so.2 (0x00007f...)
# linux-vdso.so.1 (0x00007ffd...)
_BARE = re.compile(r"^(\S+)\s+\(0x[0-9a-fA-F]+\)$")


def parse_ldd_output(output: str) -> list[tuple[str, str | None]]:
    """Parse ldd output into (name, path) pairs.

    Unresolved libraries have a path of None. Virtual objects such as the
    vDSO, and the "statically linked" / "not a dynamic executable" notes,
    produce no entries.
    """
    entries: list[tuple[str, str | None]] = []
    for raw in output.splitlines():
        line = raw.strip()
        if not line:
            continue

        match = _ARROW.match(line)
        if match:
            name, target = match.group(1), match.group(2).strip()
            if not target or target == "not found":
                entries.append((name, None))
            elif target.startswith("/"):
                entries.append((name, target))
            continue

        match = _BARE.match(line)
        if match and match.group(1).startswith("/"):
            path = match.group(1)
            entries.append((path.rsplit("/", 1)[-1], path))

    return entries


def ldd_dependencies(ldd: str, path: str, timeout: float) -> list[tuple[str, str | None]]:
    """Every library ldd reports for `path`."""
    return parse_ldd_output(run_tool([ldd, path], timeout).stdout)
