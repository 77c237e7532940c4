"""
The cell cache: holder of the latest reconciled snapshot.
"""

import logging
import threading
import uuid
from typing import Callable, List, Optional, Sequence, Union
from uuid import UUID

from ..models.cell import CellRecord, Snapshot
from ..validation import (
    ErrorSeverity,
    ParseError,
    ToolInvocationError,
    handle_error,
    handle_parse_error,
)
from .reconciler import reconcile

logger = logging.getLogger(__name__)


class CellCache:
    """
    Holds exactly one snapshot and replaces it wholesale on refresh.

    Refreshes are serialized by a lock. A refresh that fails leaves the
    stored snapshot untouched, so readers only ever see a complete snapshot
    from one listing. Lookups never refresh by themselves.

    Args:
        source: Callable returning the current, unreconciled cell list.
        uuid_factory: Source of fresh UUIDs for newly seen cells.
    """

    def __init__(
        self,
        source: Callable[[], Sequence[CellRecord]],
        uuid_factory: Callable[[], UUID] = uuid.uuid4,
    ):
        self._source = source
        self._uuid_factory = uuid_factory
        self._snapshot = Snapshot()
        self._refresh_lock = threading.Lock()

    @property
    def snapshot(self) -> Snapshot:
        """The current snapshot."""
        return self._snapshot

    def refresh(self) -> Snapshot:
        """Query the tool, reconcile identities and swap in the new snapshot.

        Returns:
            The newly stored snapshot.

        Raises:
            ToolInvocationError: If the listing command failed.
            ParseError: If the listing could not be parsed.
        """
        with self._refresh_lock:
            previous = self._snapshot
            try:
                cells = self._source()
            except ParseError as e:
                handle_parse_error(
                    e,
                    "cell list, keeping previous snapshot",
                    severity=ErrorSeverity.ERROR,
                    reraise=True,
                    logger=logger,
                )
            except ToolInvocationError as e:
                handle_error(
                    e,
                    "cell list refresh, keeping previous snapshot",
                    severity=ErrorSeverity.ERROR,
                    reraise=True,
                    logger=logger,
                )
            snapshot = Snapshot(
                cells=reconcile(cells, previous.cells, uuid_factory=self._uuid_factory)
            )
            self._snapshot = snapshot
            logger.debug(f"Refreshed cell cache: {snapshot.count} cells")
            return snapshot

    def clear(self) -> None:
        """Drop the stored snapshot; the next refresh starts from scratch."""
        with self._refresh_lock:
            self._snapshot = Snapshot()

    def count(self) -> int:
        return self._snapshot.count

    def list_ids(self) -> List[int]:
        return [cell.id for cell in self._snapshot.cells]

    def list_names(self) -> List[str]:
        return [cell.name for cell in self._snapshot.cells]

    def find_by_id(self, cell_id: int) -> Optional[CellRecord]:
        for cell in self._snapshot.cells:
            if cell.id == cell_id:
                return cell
        return None

    def find_by_name(self, name: str) -> Optional[CellRecord]:
        for cell in self._snapshot.cells:
            if cell.name == name:
                return cell
        return None

    def find_by_uuid(self, cell_uuid: Union[UUID, str]) -> Optional[CellRecord]:
        """Find a cell by UUID object or UUID string."""
        if isinstance(cell_uuid, str):
            try:
                cell_uuid = UUID(cell_uuid)
            except ValueError:
                return None
        for cell in self._snapshot.cells:
            if cell.uuid == cell_uuid:
                return cell
        return None
