#!/usr/bin/env python3

"""Fatal error conditions raised by a symbol search."""


class SymchainError(Exception):
    """Base class for errors that abort a query."""


class RootNotFound(SymchainError):
    """Raised when the root library does not exist on the filesystem."""

    def __init__(self, reference: str, path: str):
        self.reference = reference
        self.path = path
        super().__init__(f"Cannot find library {reference} (resolved to {path})")


class CollaboratorUnavailable(SymchainError):
    """Raised when a required external tool cannot be invoked."""

    def __init__(self, tool: str):
        self.tool = tool
        super().__init__(f"{tool} is not installed or not on PATH")


class CollaboratorTimeout(SymchainError):
    """Raised when an external tool does not finish within the configured timeout."""

    def __init__(self, command: list[str], timeout: float):
        self.command = command
        self.timeout = timeout
        super().__init__(f"Command {' '.join(command)} timed out after {timeout:g}s")


class InvalidPattern(SymchainError):
    """Raised when a symbol pattern is not a valid regular expression."""

    def __init__(self, pattern: str, reason: str):
        self.pattern = pattern
        self.reason = reason
        super().__init__(f"Invalid symbol pattern {pattern!r}: {reason}")
