#!/usr/bin/env python3
"""
Tests for breadth-first dependency closure construction.
"""

import pytest
from conftest import FakeToolchain, make_libraries

from symchain.graph import DependencyGraphBuilder


def names(graph):
    return [node.display_name for node in graph.nodes.values()]


def parent_name(graph, name):
    for path, node in graph.nodes.items():
        if node.display_name == name:
            parent = graph.parents[path]
            return None if parent is None else graph.nodes[parent].display_name
    raise KeyError(name)


@pytest.mark.parametrize("workers", [1, 4])
def test_breadth_first_order_and_parents(scenario, workers):
    graph = DependencyGraphBuilder(scenario, max_workers=workers).build(scenario.path("R"))

    assert names(graph) == ["R", "A", "B", "C"]
    assert parent_name(graph, "R") is None
    assert parent_name(graph, "A") == "R"
    assert parent_name(graph, "B") == "R"
    assert parent_name(graph, "C") == "A"
    assert graph.nodes[scenario.path("C")].depth == 2


def test_one_dependency_call_per_node(scenario):
    graph = DependencyGraphBuilder(scenario).build(scenario.path("R"))
    assert sorted(scenario.dependency_calls) == sorted(graph.nodes)


@pytest.mark.parametrize("workers", [1, 3])
def test_cycle_visits_each_node_once(libdir, workers):
    make_libraries(libdir, "A", "B")
    toolchain = FakeToolchain(libdir, dependencies={"A": ["B"], "B": ["A"]})

    graph = DependencyGraphBuilder(toolchain, max_workers=workers).build(toolchain.path("A"))

    assert names(graph) == ["A", "B"]
    assert sorted(toolchain.dependency_calls) == sorted([toolchain.path("A"), toolchain.path("B")])


def test_self_reference_terminates(libdir):
    make_libraries(libdir, "A")
    toolchain = FakeToolchain(libdir, dependencies={"A": ["A"]})

    graph = DependencyGraphBuilder(toolchain).build(toolchain.path("A"))

    assert names(graph) == ["A"]
    assert toolchain.dependency_calls == [toolchain.path("A")]


@pytest.mark.parametrize("workers", [1, 8])
def test_diamond_keeps_first_discoverer(libdir, workers):
    make_libraries(libdir, "R", "X", "Y", "Z")
    toolchain = FakeToolchain(
        libdir, dependencies={"R": ["X", "Y"], "X": ["Z"], "Y": ["Z"]}
    )

    graph = DependencyGraphBuilder(toolchain, max_workers=workers).build(toolchain.path("R"))

    assert names(graph).count("Z") == 1
    assert parent_name(graph, "Z") == "X"
    assert [node.display_name for node in graph.children(toolchain.path("Y"))] == []


def test_diamond_tie_follows_enumeration_order(libdir):
    make_libraries(libdir, "R", "X", "Y", "Z")
    toolchain = FakeToolchain(
        libdir, dependencies={"R": ["Y", "X"], "X": ["Z"], "Y": ["Z"]}
    )

    graph = DependencyGraphBuilder(toolchain).build(toolchain.path("R"))

    assert parent_name(graph, "Z") == "Y"


def test_symlinked_dependencies_are_deduplicated(libdir):
    make_libraries(libdir, "R", "libc.so.6.real")
    (libdir / "libc.so.6").symlink_to("libc.so.6.real")
    (libdir / "libc.so").symlink_to("libc.so.6")
    toolchain = FakeToolchain(libdir, dependencies={"R": ["libc.so.6", "libc.so"]})

    graph = DependencyGraphBuilder(toolchain).build(toolchain.path("R"))

    assert names(graph) == ["R", "libc.so.6.real"]
    assert len(set(graph.nodes)) == len(graph.nodes)


def test_unresolved_and_missing_dependencies_are_skipped(libdir):
    make_libraries(libdir, "R", "A")
    toolchain = FakeToolchain(
        libdir,
        dependencies={"R": ["A", "ghost.so"]},
        unresolved={"R": ["libgone.so.1"]},
    )

    graph = DependencyGraphBuilder(toolchain).build(toolchain.path("R"))

    assert names(graph) == ["R", "A"]
    reasons = {(d.name, d.reason) for d in graph.unresolved}
    assert reasons == {("ghost.so", "missing file"), ("libgone.so.1", "not found")}
    assert all(d.parent == toolchain.path("R") for d in graph.unresolved)


def test_root_given_as_bare_name(libdir):
    make_libraries(libdir, "libroot.so.1", "A")
    toolchain = FakeToolchain(
        libdir,
        dependencies={"libroot.so.1": ["A"]},
        linker_cache={"libroot.so.1": str(libdir / "libroot.so.1")},
    )

    graph = DependencyGraphBuilder(toolchain).build("libroot.so.1")

    assert graph.root == str((libdir / "libroot.so.1").resolve())
    assert names(graph) == ["libroot.so.1", "A"]


def test_rebuilding_is_repeatable(scenario):
    builder = DependencyGraphBuilder(scenario, max_workers=2)
    first = builder.build(scenario.path("R"))
    second = builder.build(scenario.path("R"))

    assert first.parents == second.parents
    assert list(first.nodes) == list(second.nodes)
