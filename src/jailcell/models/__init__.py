"""
Data models used throughout the application.

Cell Models:
- Parsed cell records and their tool-reported states
- Reconciled snapshots held by the cell cache
- Derived info views and host information

Configuration Models:
- Tool invocation settings
- Logging settings
"""

# Cell models
from .cell import CellInfo, CellRecord, CellState, DomainState, NodeInfo, Snapshot

# Configuration models
from .config import AppConfig, LoggingConfig, ToolConfig

__all__ = [
    # Cells
    "CellInfo",
    "CellRecord",
    "CellState",
    "DomainState",
    "NodeInfo",
    "Snapshot",
    # Configuration
    "AppConfig",
    "LoggingConfig",
    "ToolConfig",
]
