"""
Pytest configuration and shared fixtures for the jailcell test suite.

This module provides common fixtures for building `jailhouse cell list`
output, a scripted command runner, and a fake jailhouse executable for
integration tests.
"""

import shutil
import stat
import sys
import tempfile
from pathlib import Path
from typing import Dict, List, Sequence, Tuple

import pytest

# Add src to Python path for testing
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


# ============================================================================
# Test Configuration
# ============================================================================


def pytest_configure(config):
    """Configure pytest with custom markers and settings."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")


# ============================================================================
# Core Fixtures
# ============================================================================


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    temp_path = tempfile.mkdtemp()
    yield Path(temp_path)
    shutil.rmtree(temp_path, ignore_errors=True)


# ============================================================================
# Tool Output Fixtures
# ============================================================================

BANNER = "Jailhouse management tool v0.12\n"

HEADER = "%-8s%-24s%-16s%-24s%-24s" % (
    "ID", "Name", "State", "Assigned CPUs", "Failed CPUs"
)


def make_row(cell_id, name, state, assigned="", failed=""):
    """Format one row the way `jailhouse cell list` prints it."""
    return "%-8s%-24s%-16s%-24s%-24s" % (cell_id, name, state, assigned, failed)


def make_listing(*rows: Tuple) -> str:
    """Build a complete listing: header plus one fixed-width row per tuple."""
    return "\n".join([HEADER] + [make_row(*row) for row in rows]) + "\n"


class ToolOutput:
    """Helpers for building jailhouse tool output in tests."""

    banner = BANNER
    header = HEADER
    row = staticmethod(make_row)
    listing = staticmethod(make_listing)


@pytest.fixture
def tool_output():
    """Provide the tool output helpers."""
    return ToolOutput


@pytest.fixture
def two_cell_listing():
    """Root cell running on CPUs 0-1 and a stopped inmate."""
    return make_listing(
        (0, "RootCell", "running", "0-1"),
        (1, "apic-demo", "shut down", "2-3"),
    )


class ScriptedRunner:
    """
    Command runner returning canned results and recording every call.

    Results are looked up by the argument list without the binary. A list
    of results for the same command is consumed one per call, the last
    one repeating.
    """

    def __init__(self, responses: Dict[Tuple[str, ...], object] = None):
        self.responses: Dict[Tuple[str, ...], object] = dict(responses or {})
        self.calls: List[List[str]] = []

    def set(self, args: Sequence[str], stdout: str = "", returncode: int = 0, stderr: str = ""):
        self.responses[tuple(args)] = (returncode, stdout, stderr)

    def set_sequence(self, args: Sequence[str], results: List[Tuple[int, str, str]]):
        self.responses[tuple(args)] = list(results)

    def __call__(self, command: Sequence[str]) -> Tuple[int, str, str]:
        self.calls.append(list(command))
        result = self.responses.get(tuple(command[1:]))
        if result is None:
            return 0, "", ""
        if isinstance(result, list):
            return result.pop(0) if len(result) > 1 else result[0]
        return result


@pytest.fixture
def scripted_runner():
    """A runner that answers `--version` with the jailhouse banner."""
    runner = ScriptedRunner()
    runner.set(["--version"], stdout=BANNER)
    return runner


# ============================================================================
# Fake jailhouse executable
# ============================================================================

FAKE_JAILHOUSE = """#!/bin/sh
DIR="$(dirname "$0")"
if [ "$1" = "--version" ]; then
    echo "Jailhouse management tool v0.12"
    exit 0
fi
if [ "$1" = "cell" ] && [ "$2" = "list" ]; then
    if [ -f "$DIR/list_status" ]; then
        echo "listing failed" >&2
        exit "$(cat "$DIR/list_status")"
    fi
    cat "$DIR/list_output"
    exit 0
fi
echo "$@" >> "$DIR/calls.log"
exit 0
"""


class FakeJailhouse:
    """A shell script standing in for the jailhouse binary."""

    def __init__(self, directory: Path):
        self.directory = directory
        self.path = directory / "jailhouse"
        self.path.write_text(FAKE_JAILHOUSE)
        self.path.chmod(self.path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        self.set_listing(HEADER + "\n")

    def set_listing(self, output: str) -> None:
        (self.directory / "list_output").write_text(output)

    def fail_listing(self, status: int = 1) -> None:
        (self.directory / "list_status").write_text(f"{status}\n")

    def restore_listing(self) -> None:
        (self.directory / "list_status").unlink(missing_ok=True)

    @property
    def calls(self) -> List[str]:
        log = self.directory / "calls.log"
        if not log.exists():
            return []
        return log.read_text().splitlines()


@pytest.fixture
def fake_jailhouse(temp_dir):
    """Provide a fake jailhouse executable in a temporary directory."""
    if shutil.which("sh") is None:
        pytest.skip("requires a POSIX shell")
    return FakeJailhouse(temp_dir)


# ============================================================================
# Configuration cleanup
# ============================================================================


@pytest.fixture(autouse=True)
def clear_config_after_test():
    """Automatically clear configuration cache after each test."""
    original_config_path = Path(__file__).parent.parent / "conf" / "config.toml"

    yield

    from jailcell.config import clear_config_cache, set_config_path

    clear_config_cache()
    set_config_path(original_config_path)
