#!/usr/bin/env python3

from symchain.tools.shell import run_tool


def dynamic_symbols(nm: str, path: str, demangle: bool, timeout: float) -> list[str]:
    """Dump the dynamic symbol table of `path` as raw nm lines."""
    command = [nm, "-D"]
    if demangle:
        command.append("-C")
    command.append(path)
    result = run_tool(command, timeout)
    if not result.ok:
        return []
    return [line for line in result.lines() if line.strip()]
