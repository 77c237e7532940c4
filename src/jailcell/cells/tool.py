"""
Invocation of the jailhouse command-line tool.
"""

import logging
from typing import List, Optional

from ..models.cell import CellRecord
from ..parsing import check_version_banner, parse_cell_list
from ..system.commands import CommandRunner, make_runner
from ..validation import ToolInvocationError, handle_subprocess_error

logger = logging.getLogger(__name__)


class JailhouseTool:
    """
    Thin wrapper that runs `jailhouse` subcommands and checks their status.

    Args:
        binary: Name on PATH or path of the jailhouse binary.
        runner: Callable taking an argument list and returning
            ``(returncode, stdout, stderr)``. Defaults to a subprocess runner.
    """

    def __init__(self, binary: str = "jailhouse", runner: Optional[CommandRunner] = None):
        self.binary = binary
        self._runner = runner or make_runner()

    def run(self, *args: str) -> str:
        """Run ``binary args...`` and return its standard output.

        Raises:
            ToolInvocationError: If the command cannot be run or exits non-zero.
        """
        command = [self.binary, *args]
        command_str = " ".join(command)
        returncode, stdout, stderr = self._runner(command)
        if returncode != 0:
            error = ToolInvocationError(
                f"'{command_str}' failed with exit status {returncode}: {stderr.strip()}",
                command=command,
                returncode=returncode,
                stderr=stderr,
            )
            handle_subprocess_error(error, command_str, reraise=True, logger=logger)
        return stdout

    def version(self) -> str:
        """Return the version banner, verifying this is a jailhouse binary."""
        return check_version_banner(self.run("--version"), self.binary)

    def list_cells(self) -> List[CellRecord]:
        """Run `cell list` and parse it into unreconciled cell records."""
        return parse_cell_list(self.run("cell", "list"))
