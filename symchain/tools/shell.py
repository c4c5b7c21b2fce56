#!/usr/bin/env python3

import logging
import shutil
import subprocess

from pydantic import BaseModel, Field

from symchain.errors import CollaboratorTimeout, CollaboratorUnavailable

logger = logging.getLogger(__name__)


class ToolResult(BaseModel):
    """Result of running an external binary-inspection tool."""

    stdout: str = Field(description="Standard output")
    stderr: str = Field(description="Standard error")
    returncode: int = Field(description="Exit code")
    command: list[str] = Field(description="Command that was executed")

    @property
    def ok(self) -> bool:
        return self.returncode == 0

    def lines(self) -> list[str]:
        return self.stdout.splitlines()


def check_tools(tools: list[str]) -> None:
    """Raise CollaboratorUnavailable for the first tool not found on PATH."""
    for tool in tools:
        if shutil.which(tool) is None:
            raise CollaboratorUnavailable(tool)


def run_tool(command: list[str], timeout: float) -> ToolResult:
    """Run a tool and capture its output.

    A non-zero exit is not an error here: ldd on a static binary or nm on an
    object without dynamic symbols both fail, and callers treat that as empty
    output.
    """
    logger.debug("Running %s", " ".join(command))
    try:
        result = subprocess.run(
            command,
            capture_output=True,
            text=True,
            timeout=timeout,
        )
    except FileNotFoundError as e:
        raise CollaboratorUnavailable(command[0]) from e
    except subprocess.TimeoutExpired as e:
        raise CollaboratorTimeout(command, timeout) from e

    if result.returncode != 0:
        logger.debug(
            "%s exited with %d: %s",
            command[0],
            result.returncode,
            result.stderr.strip(),
        )

    return ToolResult(
        stdout=result.stdout,
        stderr=result.stderr,
        returncode=result.returncode,
        command=command,
    )
