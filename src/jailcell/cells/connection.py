"""
Connection to a jailhouse hypervisor.

A connection owns one cell cache and one control façade. Every public
lookup and enumeration refreshes the cache first: the tool is the only
source of truth and offers no change notifications.
"""

import logging
import os
from pathlib import Path
from typing import List, Optional, Union
from uuid import UUID

from ..models.cell import CellInfo, CellRecord, DomainState, NodeInfo, Snapshot
from ..models.config import ToolConfig
from ..system.commands import CommandRunner, make_runner
from ..system.node import get_node_info
from ..validation import (
    CellNotFoundError,
    ToolInvocationError,
    ValidationError,
    handle_error,
    validate_executable,
)
from .cache import CellCache
from .control import CellControl
from .tool import JailhouseTool

logger = logging.getLogger(__name__)


class JailhouseConnection:
    """
    A session with the jailhouse tool.

    Use :meth:`open` to create one; it verifies the binary before any cell
    is listed.
    """

    def __init__(self, tool: JailhouseTool, version: str = ""):
        self._tool = tool
        self.version = version
        self.cache = CellCache(tool.list_cells)
        self.control = CellControl(tool)
        self._closed = False

    @classmethod
    def open(
        cls,
        binary: Optional[str] = None,
        runner: Optional[CommandRunner] = None,
        config: Optional[ToolConfig] = None,
    ) -> "JailhouseConnection":
        """Open a connection after checking the binary's version banner.

        Args:
            binary: Path or name of the jailhouse binary. An explicit path
                must point to an executable file. Defaults to the configured
                binary.
            runner: Command runner; defaults to a subprocess runner using the
                configured timeout and environment policy.
            config: Tool settings; defaults to the loaded application config.

        Raises:
            ToolInvocationError: If the binary is missing, not executable,
                fails to run, or is not a jailhouse binary.
        """
        if config is None:
            from ..config import get_config

            config = get_config().tool

        binary = binary or config.binary
        if os.sep in binary:
            try:
                validate_executable(binary, field_name="jailhouse binary")
            except ValidationError as e:
                error = ToolInvocationError(
                    f"Path '{binary}' is not a valid executable file: {e}",
                    command=[binary],
                )
                handle_error(error, "opening connection", reraise=True, logger=logger)

        if runner is None:
            runner = make_runner(
                timeout=config.command_timeout,
                pass_environment=config.pass_environment,
            )

        tool = JailhouseTool(binary, runner)
        version = tool.version()
        logger.info(f"Connected to {version} ({binary})")
        return cls(tool, version=version)

    def close(self) -> None:
        """Release the cached snapshot; the connection cannot be used afterwards."""
        if not self._closed:
            self.cache.clear()
            self._closed = True
            logger.debug("Connection closed")

    def __enter__(self) -> "JailhouseConnection":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    @property
    def binary(self) -> str:
        return self._tool.binary

    def is_alive(self) -> bool:
        return not self._closed

    def _ensure_open(self) -> None:
        if self._closed:
            raise ToolInvocationError("connection is closed")

    def refresh(self) -> Snapshot:
        self._ensure_open()
        return self.cache.refresh()

    # --- Enumeration ---

    def num_of_cells(self) -> int:
        return self.refresh().count

    def list_ids(self, max_ids: Optional[int] = None) -> List[int]:
        self.refresh()
        ids = self.cache.list_ids()
        return ids if max_ids is None else ids[:max_ids]

    def list_names(self) -> List[str]:
        self.refresh()
        return self.cache.list_names()

    def list_all(self) -> List[CellRecord]:
        return list(self.refresh().cells)

    # --- Lookup ---

    def lookup_by_id(self, cell_id: int) -> Optional[CellRecord]:
        self.refresh()
        return self.cache.find_by_id(cell_id)

    def lookup_by_name(self, name: str) -> Optional[CellRecord]:
        self.refresh()
        return self.cache.find_by_name(name)

    def lookup_by_uuid(self, cell_uuid: Union[UUID, str]) -> Optional[CellRecord]:
        self.refresh()
        return self.cache.find_by_uuid(cell_uuid)

    def _require_cell(self, cell_id: int) -> CellRecord:
        cell = self.lookup_by_id(cell_id)
        if cell is None:
            raise CellNotFoundError(cell_id)
        return cell

    def get_state(self, cell_id: int) -> DomainState:
        """Return the current state of the cell in slot ``cell_id``.

        Raises:
            CellNotFoundError: If no cell is listed in that slot any more.
        """
        return self._require_cell(cell_id).state.domain_state

    def get_info(self, cell_id: int) -> CellInfo:
        """Return state and CPU count of the cell in slot ``cell_id``.

        Raises:
            CellNotFoundError: If no cell is listed in that slot any more.
        """
        cell = self._require_cell(cell_id)
        return CellInfo(
            state=cell.state.domain_state,
            nr_virt_cpu=len(cell.assigned_cpus),
        )

    def node_info(self) -> NodeInfo:
        return get_node_info()

    # --- Lifecycle ---

    def create(self, config: Union[str, Path]) -> None:
        self._ensure_open()
        self.control.create(config)

    def load(
        self,
        name: str,
        binary: Union[str, Path],
        offset: Optional[Union[int, str]] = None,
    ) -> None:
        self._ensure_open()
        self.control.load(name, binary, offset)

    def start(self, cell_id: int) -> None:
        self._ensure_open()
        self.control.start(cell_id)

    def shutdown(self, cell_id: int) -> None:
        self._ensure_open()
        self.control.shutdown(cell_id)

    def destroy(self, cell_id: int) -> None:
        self._ensure_open()
        self.control.destroy(cell_id)
