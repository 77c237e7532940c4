"""
System interaction utilities.

This module provides the process-execution capability used to talk to the
jailhouse tool, and host information gathered with psutil.
"""

# Command execution
from .commands import (
    CommandResult,
    CommandRunner,
    common_environment,
    make_runner,
    run_command,
)

# Host information
from .node import get_node_info

__all__ = [
    # Commands
    "CommandResult",
    "CommandRunner",
    "common_environment",
    "make_runner",
    "run_command",
    # Host information
    "get_node_info",
]
