"""
Version banner check for the jailhouse tool.
"""

from ..validation import ToolInvocationError

JAILHOUSE_VERSION_BANNER = "Jailhouse management tool"


def check_version_banner(output: str, binary: str = "jailhouse") -> str:
    """Verify that ``<binary> --version`` output comes from the jailhouse tool.

    Returns:
        The first line of the output, e.g. ``"Jailhouse management tool v0.12"``.

    Raises:
        ToolInvocationError: If the output does not start with the banner.
    """
    if not output.startswith(JAILHOUSE_VERSION_BANNER):
        raise ToolInvocationError(
            f"{binary} doesn't seem to be a correct Jailhouse binary",
            command=[binary, "--version"],
        )
    return output.splitlines()[0].strip()
