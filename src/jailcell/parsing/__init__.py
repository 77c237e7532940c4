"""
Parsers for jailhouse tool output.

- cpuset: the compact CPU list/range notation ("0-3,7")
- cell_list: the tabular `jailhouse cell list` output
- banner: the `jailhouse --version` banner check
"""

from .banner import JAILHOUSE_VERSION_BANNER, check_version_banner
from .cell_list import ColumnLayout, layout_from_header, parse_cell_list, parse_state
from .cpuset import CPU_FIELD_WIDTH, MAX_CPUS, format_cpu_set, parse_cpu_set

__all__ = [
    "CPU_FIELD_WIDTH",
    "MAX_CPUS",
    "ColumnLayout",
    "JAILHOUSE_VERSION_BANNER",
    "check_version_banner",
    "format_cpu_set",
    "layout_from_header",
    "parse_cell_list",
    "parse_cpu_set",
    "parse_state",
]
