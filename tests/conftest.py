"""Pytest fixtures: a dictionary-backed toolchain over real temporary files."""

import threading
from pathlib import Path

import pytest


class FakeToolchain:
    """Toolchain built from plain dictionaries.

    `dependencies` maps a library file name to the (name, path-or-None) pairs
    its direct dependencies resolve to; `symbols` maps a file name to raw nm
    lines. Every call is recorded so tests can assert on call counts.
    """

    def __init__(
        self,
        root_dir: Path,
        dependencies: dict[str, list[str]] | None = None,
        symbols: dict[str, list[str]] | None = None,
        linker_cache: dict[str, str] | None = None,
        unresolved: dict[str, list[str]] | None = None,
    ):
        self.root_dir = root_dir
        self.dependencies = dependencies or {}
        self.symbols = symbols or {}
        self.linker_cache = linker_cache or {}
        self.unresolved = unresolved or {}
        self.dependency_calls: list[str] = []
        self.symbol_calls: list[tuple[str, bool]] = []
        self._lock = threading.Lock()

    def check(self) -> None:
        pass

    def path(self, name: str) -> str:
        return str(self.root_dir / name)

    def resolve_bare_name(self, name: str) -> str | None:
        return self.linker_cache.get(name)

    def list_direct_dependencies(self, path: str) -> list[tuple[str, str | None]]:
        with self._lock:
            self.dependency_calls.append(path)
        name = Path(path).name
        entries: list[tuple[str, str | None]] = [
            (dep, self.path(dep)) for dep in self.dependencies.get(name, [])
        ]
        entries.extend((dep, None) for dep in self.unresolved.get(name, []))
        return entries

    def list_symbol_table(self, path: str, demangle: bool) -> list[str]:
        with self._lock:
            self.symbol_calls.append((path, demangle))
        return list(self.symbols.get(Path(path).name, []))


def make_libraries(directory: Path, *names: str) -> dict[str, Path]:
    """Create empty files standing in for shared libraries."""
    paths = {}
    for name in names:
        path = directory / name
        path.write_bytes(b"\x7fELF")
        paths[name] = path
    return paths


@pytest.fixture
def libdir(tmp_path: Path) -> Path:
    directory = tmp_path / "lib"
    directory.mkdir()
    return directory.resolve()


@pytest.fixture
def scenario(libdir: Path) -> FakeToolchain:
    """R depends on A and B, A depends on C, only C defines foo."""
    make_libraries(libdir, "R", "A", "B", "C")
    return FakeToolchain(
        libdir,
        dependencies={"R": ["A", "B"], "A": ["C"]},
        symbols={
            "R": ["                 U bar"],
            "A": ["0000000000001000 T a_init"],
            "B": ["0000000000003000 T bar"],
            "C": ["0000000000001139 T foo", "0000000000002000 T c_init"],
        },
    )
