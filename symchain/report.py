#!/usr/bin/env python3

from symchain.chain import reconstruct_chain
from symchain.models import (
    Classification,
    DependencyGraph,
    NodeReport,
    QueryResult,
    Summary,
    SymbolMatch,
    SymbolNotFound,
)


def summarize(matches: list[SymbolMatch]) -> Summary:
    """Per-library summary of a non-empty match list."""
    kinds = {match.effective_classification for match in matches}
    if kinds == {Classification.DEFINED, Classification.UNDEFINED}:
        return Summary.BOTH_DEFINED_AND_REFERENCED
    if Classification.DEFINED in kinds:
        return Summary.DEFINED_ONLY
    return Summary.REFERENCED_ONLY


def aggregate(
    graph: DependencyGraph, matches: dict[str, list[SymbolMatch]], pattern: str
) -> QueryResult | SymbolNotFound:
    """Combine per-library matches into the final result."""
    reports = []
    # walk graph.nodes so reports follow discovery order
    for path, node in graph.nodes.items():
        hits = matches.get(path)
        if not hits:
            continue
        reports.append(
            NodeReport(
                node=node,
                chain=reconstruct_chain(graph, path),
                matches=hits,
                summary=summarize(hits),
            )
        )

    if not reports:
        return SymbolNotFound(
            root=graph.root_node,
            pattern=pattern,
            nodes_visited=len(graph.nodes),
            unresolved=graph.unresolved,
        )

    every_match = [match for report in reports for match in report.matches]
    return QueryResult(
        root=graph.root_node,
        pattern=pattern,
        reports=reports,
        nodes_visited=len(graph.nodes),
        nodes_matching=len(reports),
        defined_count=sum(
            1 for m in every_match if m.effective_classification == Classification.DEFINED
        ),
        undefined_count=sum(
            1 for m in every_match if m.effective_classification == Classification.UNDEFINED
        ),
        unrecognized_count=sum(1 for m in every_match if not m.recognized),
        unresolved=graph.unresolved,
    )
