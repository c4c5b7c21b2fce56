#!/usr/bin/env python3

"""Parsing and classification of `nm -D` output lines."""

import logging
import re

from symchain.models import (
    SYMBOL_CODES,
    UNDEFINED_CODES,
    WEAK_DEFINED_CODES,
    WEAK_UNDEFINED_CODES,
    Classification,
    SymbolMatch,
)

logger = logging.getLogger(__name__)

_HEX = re.compile(r"^[0-9a-fA-F]+$")


def classify_code(code: str) -> Classification:
    """Map a single-letter nm code to its classification."""
    if code in UNDEFINED_CODES:
        return Classification.UNDEFINED
    if code in WEAK_DEFINED_CODES or code in WEAK_UNDEFINED_CODES:
        return Classification.WEAK
    return Classification.DEFINED


def split_line(line: str) -> tuple[str | None, str, str] | None:
    """Split an nm line into (address, code, name).

    Defined symbols carry a leading hexadecimal address:

        0000000000001139 T foo

    undefined ones do not:

        U foo

    Demangled names may contain spaces, so the name is everything after the
    code token. Returns None when the line has neither shape.
    """
    tokens = line.split(None, 2)
    if len(tokens) == 3 and _HEX.match(tokens[0]) and len(tokens[1]) == 1:
        return tokens[0], tokens[1], tokens[2].strip()

    tokens = line.split(None, 1)
    if len(tokens) == 2 and len(tokens[0]) == 1:
        return None, tokens[0], tokens[1].strip()

    return None


def classify_line(line: str) -> SymbolMatch:
    """Classify one raw symbol-table line.

    Unknown codes and malformed lines are classified as defined and flagged
    with recognized=False.
    """
    raw_line = line.rstrip("\n")
    parts = split_line(raw_line)
    if parts is None:
        logger.warning("Unclassifiable symbol line: %r", raw_line)
        return SymbolMatch(
            raw_line=raw_line,
            name=raw_line.strip(),
            code="?",
            classification=Classification.DEFINED,
            recognized=False,
        )

    address, code, name = parts
    recognized = code in SYMBOL_CODES
    if not recognized:
        logger.warning("Unknown symbol code %r for %s", code, name)

    return SymbolMatch(
        raw_line=raw_line,
        name=name,
        code=code,
        address=address,
        classification=classify_code(code),
        recognized=recognized,
    )
