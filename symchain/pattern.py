"""Literal or regular-expression matching of symbol-table lines."""

import re

from symchain.errors import InvalidPattern


class SymbolPattern:
    """A user-supplied symbol pattern.

    With `literal` set the pattern is a plain substring (like ``rg -F``),
    otherwise it is a regular expression searched anywhere in the line.
    """

    def __init__(self, pattern: str, literal: bool = False):
        self.pattern = pattern
        self.literal = literal
        self._regex: re.Pattern[str] | None = None
        if not literal:
            try:
                self._regex = re.compile(pattern)
            except re.error as e:
                raise InvalidPattern(pattern, str(e)) from e

    def matches(self, line: str) -> bool:
        if self._regex is None:
            return self.pattern in line
        return self._regex.search(line) is not None

    def __repr__(self) -> str:
        kind = "literal" if self.literal else "regex"
        return f"SymbolPattern({self.pattern!r}, {kind})"
