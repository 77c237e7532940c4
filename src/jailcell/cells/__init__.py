"""
Cell tracking and control.

- tool: runs `jailhouse` subcommands
- reconciler: carries UUIDs forward between listings
- cache: holds the latest reconciled snapshot
- control: lifecycle commands
- connection: the session object tying them together
"""

from .cache import CellCache
from .connection import JailhouseConnection
from .control import CellControl
from .reconciler import reconcile
from .tool import JailhouseTool

__all__ = [
    "CellCache",
    "CellControl",
    "JailhouseConnection",
    "JailhouseTool",
    "reconcile",
]
