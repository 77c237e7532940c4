"""
Cell data models.

This module contains the records produced by parsing `jailhouse cell list`
output, the immutable snapshot held by the cell cache, and the derived
views handed out by the connection layer.
"""

import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple
from uuid import UUID


class DomainState(Enum):
    """Management-level view of a cell's state."""

    NOSTATE = "nostate"
    RUNNING = "running"
    SHUTOFF = "shutoff"
    CRASHED = "crashed"


class CellState(Enum):
    """
    Cell state as reported by the jailhouse tool.

    The value is the exact 16-character token printed in the state column.
    """

    RUNNING = "running         "
    RUNNING_LOCKED = "running/locked  "
    SHUT_DOWN = "shut down       "
    FAILED = "failed          "

    @property
    def label(self) -> str:
        """The token without its column padding."""
        return self.value.rstrip()

    @property
    def domain_state(self) -> DomainState:
        """Map the cell state onto the management-level domain state."""
        return _DOMAIN_STATES[self]


_DOMAIN_STATES = {
    CellState.RUNNING: DomainState.RUNNING,
    CellState.RUNNING_LOCKED: DomainState.RUNNING,
    CellState.SHUT_DOWN: DomainState.SHUTOFF,
    CellState.FAILED: DomainState.CRASHED,
}


@dataclass(frozen=True)
class CellRecord:
    """
    One row of `jailhouse cell list` output.

    Records are never mutated: the reconciler produces a copy with the
    ``uuid`` filled in.
    """

    # Tool-assigned slot number. Reused after destroy/create, not an identity.
    id: int
    # Unique among listed cells; the reconciliation key.
    name: str
    state: CellState
    # CPUs in the order the tool lists them, ranges expanded.
    assigned_cpus: Tuple[int, ...] = ()
    # Informational only.
    failed_cpus: Tuple[int, ...] = ()
    # Stable identity; None until the reconciler assigns one.
    uuid: Optional[UUID] = None


@dataclass(frozen=True)
class Snapshot:
    """
    The complete, reconciled result of one refresh cycle.
    """

    cells: Tuple[CellRecord, ...] = ()
    refreshed_at: float = field(default_factory=time.time)

    @property
    def count(self) -> int:
        return len(self.cells)

    def __len__(self) -> int:
        return len(self.cells)

    def __iter__(self):
        return iter(self.cells)


@dataclass(frozen=True)
class CellInfo:
    """
    Summary of a cell in the shape management clients expect.

    The tool exposes no memory or CPU time figures, so those fields carry
    placeholder values of 1.
    """

    state: DomainState
    nr_virt_cpu: int
    max_mem: int = 1
    memory: int = 1
    cpu_time: int = 1


@dataclass(frozen=True)
class NodeInfo:
    """Host information for the machine running the hypervisor."""

    cpu_count: int
    online_cpus: Tuple[int, ...]
    memory_total: int  # Bytes
    cpu_mhz: float
    model: str
