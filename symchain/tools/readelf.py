#!/usr/bin/env python3

import re

from symchain.tools.shell import run_tool

# 0x0000000000000001 (NEEDED)             Shared library: [libc.so.6]
_NEEDED = re.compile(r"\(NEEDED\)\s+Shared library:\s+\[([^\]]+)\]")


def parse_needed(output: str) -> list[str]:
    """Extract DT_NEEDED entries, in the order the dynamic section lists them."""
    return [match.group(1) for match in _NEEDED.finditer(output)]


def needed_libraries(readelf: str, path: str, timeout: float) -> list[str]:
    return parse_needed(run_tool([readelf, "-d", path], timeout).stdout)
