"""
Host information for the machine running the hypervisor.
"""

import logging
import platform

import psutil

from ..models.cell import NodeInfo

logger = logging.getLogger(__name__)


def get_node_info() -> NodeInfo:
    """Collect host CPU and memory information using psutil.

    The jailhouse tool itself reports nothing about the root cell's
    hardware, so this describes the machine the driver runs on.
    """
    cpu_count = psutil.cpu_count() or 1

    try:
        online_cpus = tuple(sorted(psutil.Process().cpu_affinity()))
    except (AttributeError, psutil.Error):
        # cpu_affinity() is not available on every platform
        online_cpus = tuple(range(cpu_count))

    try:
        freq = psutil.cpu_freq()
    except (AttributeError, OSError, NotImplementedError):
        freq = None
    cpu_mhz = float(freq.current) if freq else 0.0

    memory_total = psutil.virtual_memory().total

    model = platform.machine() or "unknown"
    logger.debug(f"Node info: {cpu_count} CPUs, {memory_total} bytes, {cpu_mhz} MHz")

    return NodeInfo(
        cpu_count=cpu_count,
        online_cpus=online_cpus,
        memory_total=memory_total,
        cpu_mhz=cpu_mhz,
        model=model,
    )
