"""Canonical filesystem identity for library references."""

import os
from collections.abc import Callable
from pathlib import Path


def is_bare_name(reference: str) -> bool:
    """True for names like ``libz.so.1`` that carry no directory component."""
    return os.sep not in reference and (os.altsep is None or os.altsep not in reference)


def canonicalize(
    reference: str, resolve_bare_name: Callable[[str], str | None]
) -> Path:
    """Resolve a bare library name or a path to a symlink-free absolute path.

    Bare names are looked up through `resolve_bare_name` (the dynamic linker
    cache). A name the cache does not know is used literally, relative to the
    current directory. Existence is not checked here.
    """
    if is_bare_name(reference):
        candidate = resolve_bare_name(reference)
        if candidate:
            return Path(candidate).resolve()

    return Path(reference).expanduser().resolve()
