"""
jailcell: Jailhouse cell tracking with stable identities.

The jailhouse management tool lists cells by slot id and name only. This
package queries it, parses its tabular output, and reconciles each listing
against the previous one so that every cell keeps the same UUID for as
long as it stays listed.

The package is organized into specialized modules:
- config: Configuration management and validation
- models: Data structures and type definitions
- validation: Exceptions, input validation and error handling
- system: Command execution and host information
- parsing: CPU-set and cell-list parsers
- cells: Reconciler, cell cache, control façade and connection
- cli: Command-line interface

Usage:
    From command line:
        jailcell list

    Programmatically:
        from jailcell import JailhouseConnection
        with JailhouseConnection.open() as connection:
            for cell in connection.list_all():
                print(cell.name, cell.uuid)
"""

# Main interfaces
from .cells import CellCache, CellControl, JailhouseConnection, JailhouseTool, reconcile
from .config import clear_config_cache, get_config, set_config_path

# Model classes for external use
from .models import (
    AppConfig,
    CellInfo,
    CellRecord,
    CellState,
    DomainState,
    NodeInfo,
    Snapshot,
    ToolConfig,
)

# Parsers
from .parsing import format_cpu_set, parse_cell_list, parse_cpu_set

# Errors
from .validation import (
    CellNotFoundError,
    JailcellError,
    ParseError,
    ToolInvocationError,
    ValidationError,
)

__version__ = "1.0.0"

__all__ = [
    # Main interfaces
    "CellCache",
    "CellControl",
    "JailhouseConnection",
    "JailhouseTool",
    "reconcile",
    "get_config",
    "clear_config_cache",
    "set_config_path",
    # Models
    "AppConfig",
    "CellInfo",
    "CellRecord",
    "CellState",
    "DomainState",
    "NodeInfo",
    "Snapshot",
    "ToolConfig",
    # Parsers
    "format_cpu_set",
    "parse_cell_list",
    "parse_cpu_set",
    # Errors
    "CellNotFoundError",
    "JailcellError",
    "ParseError",
    "ToolInvocationError",
    "ValidationError",
]
