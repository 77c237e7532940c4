"""
Command-line interface for jailcell.

This module provides the `jailcell` entry point: listing and inspecting
jailhouse cells with stable UUIDs, watching them across refreshes, and
issuing lifecycle commands.
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Dict, List, Optional
from uuid import UUID

from ..cells import JailhouseConnection
from ..config import get_config, set_config_path
from ..models.cell import CellRecord
from ..parsing import format_cpu_set
from ..validation import (
    CellNotFoundError,
    JailcellError,
    ValidationError,
    handle_cli_error,
    validate_positive_float,
    validate_positive_integer,
)

# --- Logging Setup ---
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)-5.5s] %(name)s:%(filename)s:%(lineno)d\t %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    stream=sys.stdout,
)
logger = logging.getLogger(__name__)

ROW_FORMAT = "{:<8}{:<25}{:<17}{:<25}{}"


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser with one subcommand per operation."""
    parser = argparse.ArgumentParser(
        prog="jailcell",
        description="Track and control Jailhouse cells with stable UUIDs.",
    )
    parser.add_argument("--config", type=Path, help="Path to config.toml.")
    parser.add_argument("--binary", type=str, help="Jailhouse binary (overrides config).")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")

    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("list", help="List all cells.")

    info = subparsers.add_parser("info", help="Show one cell by id, name or UUID.")
    info.add_argument("cell", type=str)

    watch = subparsers.add_parser("watch", help="Refresh repeatedly and report changes.")
    watch.add_argument("-i", "--interval", type=str, default="2.0", help="Seconds between refreshes.")
    watch.add_argument("-n", "--count", type=str, default=None, help="Stop after N refreshes.")

    create = subparsers.add_parser("create", help="Create a cell from a configuration file.")
    create.add_argument("config_file", type=Path)

    load = subparsers.add_parser("load", help="Load an image into a cell.")
    load.add_argument("name", type=str)
    load.add_argument("image", type=Path)
    load.add_argument("-a", "--address", type=str, default=None, help="Load address.")

    for name in ("start", "shutdown", "destroy"):
        lifecycle = subparsers.add_parser(name, help=f"{name.capitalize()} a cell by id.")
        lifecycle.add_argument("cell_id", type=str)

    subparsers.add_parser("node", help="Show host information.")

    return parser


def format_cell(cell: CellRecord) -> str:
    return ROW_FORMAT.format(
        cell.id,
        cell.name,
        cell.state.label,
        format_cpu_set(cell.assigned_cpus) or "-",
        cell.uuid,
    )


def _resolve_cell(connection: JailhouseConnection, key: str) -> Optional[CellRecord]:
    """Look a cell up by id, then UUID, then name."""
    if key.isdigit():
        cell = connection.lookup_by_id(int(key))
        if cell is not None:
            return cell
    else:
        try:
            cell_uuid = UUID(key)
        except ValueError:
            pass
        else:
            return connection.lookup_by_uuid(cell_uuid)
    return connection.lookup_by_name(key)


def cmd_list(connection: JailhouseConnection, args: argparse.Namespace) -> None:
    print(ROW_FORMAT.format("ID", "Name", "State", "Assigned CPUs", "UUID"))
    for cell in connection.list_all():
        print(format_cell(cell))


def cmd_info(connection: JailhouseConnection, args: argparse.Namespace) -> None:
    cell = _resolve_cell(connection, args.cell)
    if cell is None:
        raise CellNotFoundError(args.cell)
    info = connection.get_info(cell.id)
    print(f"Id:            {cell.id}")
    print(f"Name:          {cell.name}")
    print(f"UUID:          {cell.uuid}")
    print(f"State:         {cell.state.label} ({info.state.value})")
    print(f"CPU(s):        {info.nr_virt_cpu}")
    print(f"Assigned CPUs: {format_cpu_set(cell.assigned_cpus) or '-'}")
    print(f"Failed CPUs:   {format_cpu_set(cell.failed_cpus) or '-'}")


def cmd_watch(connection: JailhouseConnection, args: argparse.Namespace) -> None:
    interval = validate_positive_float(
        args.interval, min_value=0.1, field_name="--interval"
    )
    count = None
    if args.count is not None:
        count = validate_positive_integer(args.count, min_value=1, field_name="--count")

    previous: Dict[UUID, CellRecord] = {}
    iteration = 0
    try:
        while count is None or iteration < count:
            if iteration:
                time.sleep(interval)
            iteration += 1
            try:
                snapshot = connection.refresh()
            except JailcellError as e:
                logger.warning(f"Refresh failed, keeping previous view: {e}")
                continue

            current = {cell.uuid: cell for cell in snapshot.cells}
            changes: List[str] = []
            for cell_uuid, cell in current.items():
                old = previous.get(cell_uuid)
                if old is None:
                    changes.append(f"+ {format_cell(cell)}")
                elif (old.id, old.state) != (cell.id, cell.state):
                    changes.append(f"~ {format_cell(cell)}")
            for cell_uuid, cell in previous.items():
                if cell_uuid not in current:
                    changes.append(f"- {format_cell(cell)}")
            if changes:
                stamp = time.strftime("%H:%M:%S", time.localtime(snapshot.refreshed_at))
                print(f"[{stamp}] {snapshot.count} cells")
                print("\n".join(changes))
            previous = current
    except KeyboardInterrupt:
        logger.info("Watch interrupted")


def cmd_create(connection: JailhouseConnection, args: argparse.Namespace) -> None:
    connection.create(args.config_file)


def cmd_load(connection: JailhouseConnection, args: argparse.Namespace) -> None:
    connection.load(args.name, args.image, args.address)


def _cell_id(args: argparse.Namespace) -> int:
    return validate_positive_integer(args.cell_id, min_value=0, field_name="cell_id")


def cmd_start(connection: JailhouseConnection, args: argparse.Namespace) -> None:
    connection.start(_cell_id(args))


def cmd_shutdown(connection: JailhouseConnection, args: argparse.Namespace) -> None:
    connection.shutdown(_cell_id(args))


def cmd_destroy(connection: JailhouseConnection, args: argparse.Namespace) -> None:
    connection.destroy(_cell_id(args))


def cmd_node(connection: JailhouseConnection, args: argparse.Namespace) -> None:
    node = connection.node_info()
    print(f"CPU model:    {node.model}")
    print(f"CPU(s):       {node.cpu_count}")
    print(f"Online CPUs:  {format_cpu_set(node.online_cpus)}")
    print(f"CPU MHz:      {node.cpu_mhz:.0f}")
    print(f"Memory:       {node.memory_total // 1024} KiB")


COMMANDS = {
    "list": cmd_list,
    "info": cmd_info,
    "watch": cmd_watch,
    "create": cmd_create,
    "load": cmd_load,
    "start": cmd_start,
    "shutdown": cmd_shutdown,
    "destroy": cmd_destroy,
    "node": cmd_node,
}


def main_cli(argv: Optional[List[str]] = None) -> None:
    """
    Main command-line interface for jailcell.

    Loads the configuration, opens a connection to the jailhouse tool and
    dispatches to the requested subcommand.

    Raises:
        SystemExit: On configuration errors, tool failures or unknown cells.
    """
    args = build_parser().parse_args(argv)

    if args.config:
        set_config_path(args.config)

    try:
        app_config = get_config()
    except (OSError, ValueError, ValidationError) as e:
        handle_cli_error(
            error=e,
            context="configuration loading",
            exit_code=1,
            include_traceback=True,
            logger=logger,
        )

    level = "DEBUG" if args.verbose else app_config.logging.level
    logging.getLogger().setLevel(level)

    try:
        with JailhouseConnection.open(binary=args.binary, config=app_config.tool) as connection:
            COMMANDS[args.command](connection, args)
    except JailcellError as e:
        handle_cli_error(
            error=e,
            context=f"'{args.command}' command",
            exit_code=1,
            include_traceback=False,
            logger=logger,
        )


if __name__ == "__main__":
    main_cli()
