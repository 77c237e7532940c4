"""
Cell lifecycle commands.

Each operation runs one `jailhouse cell` subcommand synchronously. None of
them touch the cell cache; callers refresh afterwards to observe the
effect. Failed commands are reported once and never retried.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from ..validation import (
    validate_cell_id,
    validate_cell_name,
    validate_load_address,
)
from .tool import JailhouseTool

logger = logging.getLogger(__name__)


class CellControl:
    """
    Issues create/load/start/shutdown/destroy commands to the jailhouse tool.
    """

    def __init__(self, tool: JailhouseTool):
        self._tool = tool

    def create(self, config: Union[str, Path]) -> None:
        """Create a cell from a cell configuration file.

        Raises:
            ToolInvocationError: If the tool rejects the configuration.
        """
        logger.info(f"Creating cell from configuration '{config}'")
        self._tool.run("cell", "create", str(config))

    def load(
        self,
        name: str,
        binary: Union[str, Path],
        offset: Optional[Union[int, str]] = None,
    ) -> None:
        """Load an image into a cell.

        Args:
            name: Name of the target cell.
            binary: Path of the image to load.
            offset: Load address inside the cell, tool default when None.
        """
        name = validate_cell_name(name, field_name="cell name")
        args = ["cell", "load", name, str(binary)]
        if offset is not None:
            args += ["-a", validate_load_address(offset, field_name="load offset")]
        logger.info(f"Loading '{binary}' into cell '{name}'")
        self._tool.run(*args)

    def start(self, cell_id: int) -> None:
        self._lifecycle("start", cell_id)

    def shutdown(self, cell_id: int) -> None:
        self._lifecycle("shutdown", cell_id)

    def destroy(self, cell_id: int) -> None:
        """Destroy a cell.

        This removes the cell from the hypervisor entirely; it has to be
        created and loaded again before it can run.
        """
        self._lifecycle("destroy", cell_id)

    def _lifecycle(self, subcommand: str, cell_id: int) -> None:
        cell_id = validate_cell_id(cell_id)
        logger.info(f"Cell {cell_id}: {subcommand}")
        self._tool.run("cell", subcommand, str(cell_id))
