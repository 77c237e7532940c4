"""
CPU-set field parsing.

The jailhouse tool prints a cell's CPUs in a compact list/range notation
such as ``"0-3,7"`` inside a fixed-width column. This module expands that
notation into an explicit tuple of CPU numbers and formats it back.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

from ..validation import ParseError

logger = logging.getLogger(__name__)

# Width of each CPU column in `jailhouse cell list` output.
CPU_FIELD_WIDTH = 24

# Upper bound on the number of CPUs one field may expand to.
MAX_CPUS = 4096

_GROUP_RE = re.compile(r"^(\d+)(?:-(\d+))?$")


def parse_cpu_set(
    field: str,
    width: Optional[int] = CPU_FIELD_WIDTH,
    line_number: Optional[int] = None,
    field_name: str = "cpus",
) -> Tuple[int, ...]:
    """Parse a CPU column into an ordered tuple of CPU numbers.

    Groups are expanded left to right in the order the tool printed them;
    each range is expanded in ascending order. The result is not sorted
    globally.

    A range with reversed bounds (``"5-3"``) expands to nothing.

    Args:
        field: Raw column text. All spaces means no CPUs.
        width: Maximum length of the CPU list, None for no limit.
        line_number: Line of the tool output, for error messages.
        field_name: Column name, for error messages.

    Returns:
        Tuple of CPU numbers, empty for a blank field.

    Raises:
        ParseError: If a group is empty or not a number or range, if
            anything other than padding follows the list, or if the ranges
            expand to more than ``MAX_CPUS`` CPUs.

    Examples:
        >>> parse_cpu_set("0-3,7")
        (0, 1, 2, 3, 7)
        >>> parse_cpu_set("        ")
        ()
    """
    text = field.rstrip("\r\n").lstrip(" ")
    if not text.strip():
        return ()

    cpu_list, _, padding = text.partition(" ")
    if padding.strip():
        raise ParseError(
            f"unexpected text after {field_name} list: {field!r}",
            line_number=line_number,
            field_name=field_name,
            value=field,
        )
    if width is not None and len(cpu_list) > width:
        raise ParseError(
            f"{field_name} list exceeds column width {width}: {cpu_list!r}",
            line_number=line_number,
            field_name=field_name,
            value=field,
        )

    cpus: List[int] = []
    for group in cpu_list.split(","):
        match = _GROUP_RE.match(group)
        if match is None:
            raise ParseError(
                f"malformed {field_name} group {group!r} in {cpu_list!r}",
                line_number=line_number,
                field_name=field_name,
                value=field,
            )
        start = int(match.group(1))
        if match.group(2) is None:
            cpus.append(start)
            continue
        end = int(match.group(2))
        if end < start:
            logger.debug(f"Ignoring reversed {field_name} range '{group}'")
            continue
        if len(cpus) + end - start + 1 > MAX_CPUS:
            raise ParseError(
                f"{field_name} range {group!r} expands beyond {MAX_CPUS} CPUs",
                line_number=line_number,
                field_name=field_name,
                value=field,
            )
        try:
            cpus.extend(range(start, end + 1))
        except MemoryError:
            raise ParseError(
                f"cannot allocate {field_name} list for range {group!r}",
                line_number=line_number,
                field_name=field_name,
                value=field,
            ) from None

    return tuple(cpus)


def format_cpu_set(cpus: Iterable[int]) -> str:
    """Format CPU numbers into the compact list/range notation.

    Consecutive ascending runs collapse into ranges; the input order is
    kept, so ``parse_cpu_set(format_cpu_set(cpus)) == tuple(cpus)``.

    Examples:
        >>> format_cpu_set([0, 1, 2, 3, 7])
        '0-3,7'
        >>> format_cpu_set([])
        ''
    """
    cpus = list(cpus)
    if not cpus:
        return ""

    ranges = []
    start = end = cpus[0]

    for cpu in cpus[1:]:
        if cpu == end + 1:
            end = cpu
        else:
            ranges.append(str(start) if start == end else f"{start}-{end}")
            start = end = cpu
    ranges.append(str(start) if start == end else f"{start}-{end}")

    return ",".join(ranges)
