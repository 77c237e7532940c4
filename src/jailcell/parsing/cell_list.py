"""
Parsing of `jailhouse cell list` output.

The tool prints one header line followed by one row per cell. Rows are laid
out in fixed-width columns (id 8, name 24, state 16, assigned CPUs 24,
failed CPUs 24). When the header carries the column titles, the column
offsets are taken from it; otherwise each row is tokenized with a regular
expression, which also accepts loosely spaced output.
"""

import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Tuple

from ..models.cell import CellRecord, CellState
from ..validation import MAX_CELL_NAME_LENGTH, ParseError
from .cpuset import CPU_FIELD_WIDTH, parse_cpu_set

logger = logging.getLogger(__name__)

ID_WIDTH = 8
NAME_WIDTH = MAX_CELL_NAME_LENGTH
STATE_WIDTH = 16

HEADER_TITLES = ("ID", "Name", "State", "Assigned CPUs", "Failed CPUs")

_STATES_BY_TOKEN = {state.value: state for state in CellState}

_ROW_RE = re.compile(
    r"^\s*(?P<id>\S+)\s+(?P<name>\S+)\s+"
    r"(?P<state>running/locked|running|shut down|failed|\S+)(?=\s|$)"
    r"(?P<rest>.*)$"
)


@dataclass(frozen=True)
class ColumnLayout:
    """Start offsets of the five columns of a cell list row."""

    id: int = 0
    name: int = ID_WIDTH
    state: int = ID_WIDTH + NAME_WIDTH
    assigned_cpus: int = ID_WIDTH + NAME_WIDTH + STATE_WIDTH
    failed_cpus: int = ID_WIDTH + NAME_WIDTH + STATE_WIDTH + CPU_FIELD_WIDTH

    def split(self, line: str) -> Tuple[str, str, str, str, str]:
        """Cut a row into its five column texts."""
        return (
            line[self.id:self.name],
            line[self.name:self.state],
            line[self.state:self.assigned_cpus],
            line[self.assigned_cpus:self.failed_cpus],
            line[self.failed_cpus:],
        )


def layout_from_header(header: str) -> Optional[ColumnLayout]:
    """Derive column offsets from the header line.

    Returns None when the header does not carry all column titles in order.
    """
    offsets = []
    position = 0
    for title in HEADER_TITLES:
        found = header.find(title, position)
        if found < 0:
            return None
        offsets.append(found)
        position = found + len(title)
    if offsets[0] != len(header) - len(header.lstrip()):
        return None
    return ColumnLayout(
        id=0,
        name=offsets[1],
        state=offsets[2],
        assigned_cpus=offsets[3],
        failed_cpus=offsets[4],
    )


def parse_state(token: str, line_number: Optional[int] = None) -> CellState:
    """Map a state column onto a CellState.

    The token is compared over exactly ``STATE_WIDTH`` characters against
    the four padded strings the tool prints. Anything else is reported as
    FAILED so that an unknown state is never shown as running.
    """
    padded = token.rstrip().ljust(STATE_WIDTH)
    state = _STATES_BY_TOKEN.get(padded)
    if state is None:
        logger.warning(
            f"Unknown cell state {token.strip()!r} on line {line_number}, treating as failed"
        )
        return CellState.FAILED
    return state


def _parse_id(text: str, line_number: int) -> int:
    token = text.strip()
    if not token.isdigit() or not token.isascii():
        raise ParseError(
            f"cell id is not a number: {text!r}",
            line_number=line_number,
            field_name="id",
            value=text,
        )
    return int(token)


def _parse_name(text: str, line_number: int) -> str:
    name = text.strip().split(" ", 1)[0] if text.strip() else ""
    if not name:
        raise ParseError(
            "cell name is empty",
            line_number=line_number,
            field_name="name",
            value=text,
        )
    if len(name) > MAX_CELL_NAME_LENGTH:
        raise ParseError(
            f"cell name exceeds {MAX_CELL_NAME_LENGTH} characters: {name!r}",
            line_number=line_number,
            field_name="name",
            value=text,
        )
    return name


def _parse_fixed_row(line: str, line_number: int, layout: ColumnLayout) -> CellRecord:
    id_text, name_text, state_text, assigned_text, failed_text = layout.split(line)
    return CellRecord(
        id=_parse_id(id_text, line_number),
        name=_parse_name(name_text, line_number),
        state=parse_state(state_text, line_number),
        assigned_cpus=parse_cpu_set(
            assigned_text, line_number=line_number, field_name="assigned CPUs"
        ),
        failed_cpus=parse_cpu_set(
            failed_text, line_number=line_number, field_name="failed CPUs"
        ),
    )


def _parse_loose_row(line: str, line_number: int) -> CellRecord:
    match = _ROW_RE.match(line)
    if match is None:
        raise ParseError(
            f"malformed cell row: {line!r}",
            line_number=line_number,
        )

    cpu_fields = match.group("rest").split()
    if len(cpu_fields) > 2:
        raise ParseError(
            f"too many CPU columns in row: {line!r}",
            line_number=line_number,
            field_name="cpus",
            value=match.group("rest"),
        )
    # A single CPU column is taken as the assigned CPUs.
    cpu_fields += [""] * (2 - len(cpu_fields))

    return CellRecord(
        id=_parse_id(match.group("id"), line_number),
        name=_parse_name(match.group("name"), line_number),
        state=parse_state(match.group("state"), line_number),
        assigned_cpus=parse_cpu_set(
            cpu_fields[0], line_number=line_number, field_name="assigned CPUs"
        ),
        failed_cpus=parse_cpu_set(
            cpu_fields[1], line_number=line_number, field_name="failed CPUs"
        ),
    )


def _parse_row_with_layout(line: str, line_number: int, layout: ColumnLayout) -> CellRecord:
    """Parse a row at the header's column offsets, tokenizing it if it is not aligned."""
    try:
        return _parse_fixed_row(line, line_number, layout)
    except ParseError as fixed_error:
        logger.debug(f"Row {line_number} does not match the header columns: {fixed_error}")
        try:
            return _parse_loose_row(line, line_number)
        except ParseError:
            raise fixed_error from None


def parse_cell_list(output: str) -> List[CellRecord]:
    """Parse the complete output of one `jailhouse cell list` invocation.

    Args:
        output: Captured standard output of the tool.

    Returns:
        Cell records in the tool's row order, with ``uuid`` unset.

    Raises:
        ParseError: If any row is malformed. No partial result is returned.
    """
    lines = output.splitlines()
    first_line = 1

    layout: Optional[ColumnLayout] = None
    if lines and not lines[0].lstrip()[:1].isdigit():
        layout = layout_from_header(lines[0])
        if layout is None:
            logger.debug(f"Header without column titles, tokenizing rows: {lines[0]!r}")
        lines = lines[1:]
        first_line = 2

    cells: List[CellRecord] = []
    seen_names = set()
    for line_number, line in enumerate(lines, start=first_line):
        if not line.strip():
            continue
        if layout is not None:
            cell = _parse_row_with_layout(line, line_number, layout)
        else:
            cell = _parse_loose_row(line, line_number)
        if cell.name in seen_names:
            logger.warning(f"Cell name '{cell.name}' listed more than once (line {line_number})")
        seen_names.add(cell.name)
        cells.append(cell)

    logger.debug(f"Parsed {len(cells)} cells from cell list output")
    return cells
