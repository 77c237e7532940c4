"""
Identity reconciliation across refresh cycles.

The jailhouse tool has no persistent cell identity: slot ids are reused and
nothing like a UUID is printed. A UUID is therefore synthesized for every
cell the first time it is seen and carried forward, keyed by name, for as
long as the cell keeps appearing in consecutive listings.
"""

import logging
import uuid
from dataclasses import replace
from typing import Callable, Dict, Iterable, Sequence, Tuple
from uuid import UUID

from ..models.cell import CellRecord

logger = logging.getLogger(__name__)


def reconcile(
    new_cells: Sequence[CellRecord],
    previous_cells: Iterable[CellRecord],
    uuid_factory: Callable[[], UUID] = uuid.uuid4,
) -> Tuple[CellRecord, ...]:
    """Assign stable UUIDs to a freshly parsed cell list.

    Each new record takes the UUID of the previous record with exactly the
    same name. Matching ignores ``id`` because slot ids are reassigned. If
    the previous list holds a name twice, the first occurrence wins. Cells
    with no match get a new UUID from ``uuid_factory``.

    Args:
        new_cells: Records from the latest listing, in tool order.
        previous_cells: Records of the previous snapshot.
        uuid_factory: Source of fresh UUIDs.

    Returns:
        New records in the same order as ``new_cells``.
    """
    known: Dict[str, UUID] = {}
    for cell in previous_cells:
        if cell.uuid is not None:
            known.setdefault(cell.name, cell.uuid)

    reconciled = []
    for cell in new_cells:
        cell_uuid = known.get(cell.name)
        if cell_uuid is None:
            cell_uuid = uuid_factory()
            logger.debug(f"New cell '{cell.name}' (id {cell.id}) assigned uuid {cell_uuid}")
        reconciled.append(replace(cell, uuid=cell_uuid))
    return tuple(reconciled)
