from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from symchain.models import DependencyGraph

SEPARATOR = " > "


def reconstruct_chain(graph: "DependencyGraph", path: str) -> list[str]:
    """Display names from the root down to `path`, following parent links."""
    if path not in graph.nodes:
        raise ValueError(f"{path} is not part of the dependency graph")

    reversed_chain: list[str] = []
    visited: set[str] = set()
    current: str | None = path
    while current is not None:
        if current in visited or current not in graph.nodes:
            raise ValueError(f"Corrupt parent map while walking up from {path}")
        visited.add(current)
        reversed_chain.append(graph.nodes[current].display_name)
        current = graph.parents.get(current)

    return reversed_chain[::-1]


def format_chain(names: list[str], separator: str = SEPARATOR) -> str:
    return separator.join(names)
