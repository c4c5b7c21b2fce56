"""Pydantic models for dependency graphs, symbol matches and query results."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field, computed_field

from symchain.chain import format_chain

# nm binding/section codes and what they mean for a dynamic symbol table
SYMBOL_CODES: dict[str, str] = {
    "U": "Undefined (external dependency)",
    "T": "Text section (defined function)",
    "t": "Local text (static function)",
    "D": "Data section (initialized global)",
    "d": "Local data (static initialized)",
    "B": "BSS section (uninitialized global)",
    "b": "Local BSS (static uninitialized)",
    "W": "Weak symbol",
    "w": "Weak symbol (undefined)",
    "R": "Read-only data section",
    "r": "Local read-only data",
    "A": "Absolute symbol",
    "a": "Local absolute symbol",
    "C": "Common symbol",
    "c": "Local common symbol",
    "V": "Weak object",
    "v": "Weak object (undefined)",
    "i": "Indirect function (GNU ifunc)",
    "I": "Indirect reference to another symbol",
    "u": "Unique global symbol",
    "S": "Small object section",
    "s": "Local small object section",
    "G": "Small initialized data section",
    "g": "Local small initialized data section",
    "N": "Debugging symbol",
    "n": "Read-only non-data section",
    "p": "Stack unwind section",
}

UNDEFINED_CODES = frozenset({"U"})
WEAK_UNDEFINED_CODES = frozenset({"w", "v"})
WEAK_DEFINED_CODES = frozenset({"W", "V"})


def describe_code(code: str) -> str:
    return SYMBOL_CODES.get(code, f"Unknown status: {code}")


class Classification(str, Enum):
    DEFINED = "defined"
    WEAK = "weak"
    UNDEFINED = "undefined"


class Summary(str, Enum):
    BOTH_DEFINED_AND_REFERENCED = "both"
    DEFINED_ONLY = "defined"
    REFERENCED_ONLY = "referenced"

    @property
    def label(self) -> str:
        return {
            Summary.BOTH_DEFINED_AND_REFERENCED: "defined here and also referenced",
            Summary.DEFINED_ONLY: "defined here",
            Summary.REFERENCED_ONLY: "only referenced here (undefined in this object)",
        }[self]


class LibraryNode(BaseModel):
    """One shared library or executable in the dependency closure."""

    canonical_path: str
    display_name: str
    depth: int = 0

    model_config = {"frozen": True}

    @classmethod
    def from_path(cls, path: Path | str, depth: int = 0) -> "LibraryNode":
        path = Path(path)
        return cls(canonical_path=str(path), display_name=path.name, depth=depth)


class UnresolvedDependency(BaseModel):
    """A direct dependency that was skipped during traversal."""

    parent: str
    name: str
    path: str | None = None
    reason: str


class DependencyGraph(BaseModel):
    """Nodes discovered by a traversal plus the first-discoverer parent map.

    The parent map is a spanning tree over visitation order: a node reachable
    along several paths keeps only the parent that reached it first.
    """

    root: str
    nodes: dict[str, LibraryNode] = Field(default_factory=dict)
    parents: dict[str, str | None] = Field(default_factory=dict)
    unresolved: list[UnresolvedDependency] = Field(default_factory=list)

    @property
    def root_node(self) -> LibraryNode:
        return self.nodes[self.root]

    def children(self, path: str) -> list[LibraryNode]:
        """Nodes first discovered while expanding `path`, in discovery order."""
        return [self.nodes[p] for p, parent in self.parents.items() if parent == path]


class SymbolMatch(BaseModel):
    """One line of symbol-table output that matched the query pattern."""

    raw_line: str
    name: str
    code: str
    address: str | None = None
    classification: Classification
    recognized: bool = True

    model_config = {"frozen": True}

    @computed_field
    @property
    def effective_classification(self) -> Classification:
        """Defined or undefined, for summaries and tallies.

        Weak symbols with an address supply a definition; weak symbols without
        one do not.
        """
        if self.code in UNDEFINED_CODES or self.code in WEAK_UNDEFINED_CODES:
            return Classification.UNDEFINED
        return Classification.DEFINED

    @computed_field
    @property
    def description(self) -> str:
        return describe_code(self.code)


class NodeReport(BaseModel):
    """A matching node with its chain, matches and summary."""

    node: LibraryNode
    chain: list[str]
    matches: list[SymbolMatch]
    summary: Summary

    @property
    def chain_text(self) -> str:
        return format_chain(self.chain)


class QueryResult(BaseModel):
    """Every matching node in the closure together with global tallies."""

    root: LibraryNode
    pattern: str
    reports: list[NodeReport]
    nodes_visited: int
    nodes_matching: int
    defined_count: int
    undefined_count: int
    unrecognized_count: int = 0
    unresolved: list[UnresolvedDependency] = Field(default_factory=list)

    @property
    def found(self) -> bool:
        return True

    @property
    def defined_in(self) -> list[LibraryNode]:
        return [
            report.node
            for report in self.reports
            if report.summary != Summary.REFERENCED_ONLY
        ]


class SymbolNotFound(BaseModel):
    """No node in the closure matched the pattern. A result, not an error."""

    root: LibraryNode
    pattern: str
    nodes_visited: int
    unresolved: list[UnresolvedDependency] = Field(default_factory=list)

    @property
    def found(self) -> bool:
        return False
