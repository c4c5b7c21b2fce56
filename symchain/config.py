#!/usr/bin/env python3

import json
from enum import Enum
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

CONFIG_FILENAME = "symchain_config.json"


class DependencySource(str, Enum):
    NEEDED = "needed"  # readelf DT_NEEDED entries, paths from ldd
    LDD = "ldd"  # every ldd line, i.e. the flattened closure


class SymchainConfig(BaseModel):
    """Configuration for a symbol search."""

    # Matching
    demangle: bool = False
    fixed_strings: bool = False

    # Traversal
    dependency_source: DependencySource = DependencySource.NEEDED
    max_workers: int = Field(default=8, ge=1)
    tool_timeout: float = Field(default=60.0, gt=0)

    # External tools
    nm: str = "nm"
    ldd: str = "ldd"
    readelf: str = "readelf"
    ldconfig: str = "ldconfig"

    def required_tools(self) -> list[str]:
        """Tools that must be present before a traversal starts."""
        tools = [self.nm, self.ldd]
        if self.dependency_source == DependencySource.NEEDED:
            tools.append(self.readelf)
        return tools

    def merged(self, **overrides) -> "SymchainConfig":
        """Return a copy with every non-None override applied."""
        update = {key: value for key, value in overrides.items() if value is not None}
        return self.model_validate({**self.model_dump(), **update})

    @classmethod
    def load_from_file(cls, config_path: Path) -> "SymchainConfig":
        """Load configuration from a JSON file."""
        return cls.model_validate(json.loads(config_path.read_text()))

    def save_to_file(self, config_path: Path) -> None:
        """Save configuration to a JSON file."""
        config_path.write_text(json.dumps(self.model_dump(mode="json"), indent=2))

    @classmethod
    def find_config(cls, start_path: Path) -> Optional["SymchainConfig"]:
        """Find configuration by searching up the directory tree."""
        current = start_path.resolve()
        while True:
            config_file = current / CONFIG_FILENAME
            if config_file.exists():
                return cls.load_from_file(config_file)
            if current == current.parent:
                return None
            current = current.parent
