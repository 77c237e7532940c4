"""
Command execution utilities.

This module provides the single capability the cell core consumes from the
operating system: run an external command with an argument list and an
environment, and capture its exit status and output synchronously.
"""

import logging
import os
import subprocess
from typing import Callable, Dict, Mapping, Optional, Sequence, Tuple

logger = logging.getLogger(__name__)

# (returncode, stdout, stderr)
CommandResult = Tuple[int, str, str]
CommandRunner = Callable[[Sequence[str]], CommandResult]

# Variables forwarded to the tool when the caller's environment is passed.
COMMON_ENV_VARS = (
    "LD_PRELOAD",
    "LD_LIBRARY_PATH",
    "PATH",
    "HOME",
    "USER",
    "LOGNAME",
    "TMPDIR",
)

DEFAULT_PATH = "/usr/local/sbin:/usr/local/bin:/usr/sbin:/usr/bin:/sbin:/bin"


def common_environment(
    pass_environment: bool = True, source: Optional[Mapping[str, str]] = None
) -> Dict[str, str]:
    """Build the environment for a tool invocation.

    The locale is always forced to ``C`` so the tool's column layout and
    state tokens are not translated.

    Args:
        pass_environment: Forward the common variables from ``source``.
        source: Environment to copy from (defaults to ``os.environ``).

    Returns:
        A new environment dictionary.
    """
    env = {"LC_ALL": "C"}
    if pass_environment:
        source = os.environ if source is None else source
        for name in COMMON_ENV_VARS:
            if name in source:
                env[name] = source[name]
    env.setdefault("PATH", DEFAULT_PATH)
    return env


def run_command(
    args: Sequence[str],
    timeout: Optional[float] = None,
    env: Optional[Mapping[str, str]] = None,
) -> CommandResult:
    """Execute a command and capture its output with robust error handling.

    The command is executed directly, never through a shell.

    Args:
        args: Program followed by its arguments.
        timeout: Seconds to wait before the process is killed, None to wait forever.
        env: Environment for the child process, None to inherit ours.

    Returns:
        Tuple of (return_code, stdout_string, stderr_string).
        return_code is -1 for execution errors and timeouts.

    Note:
        Uses UTF-8 encoding with error replacement for robust text handling.
    """
    command_str = " ".join(args)
    logger.debug(f"Executing command: '{command_str}'")
    try:
        process = subprocess.run(
            list(args),
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            env=dict(env) if env is not None else None,
            timeout=timeout,
            check=False,
        )
        return process.returncode, process.stdout, process.stderr
    except FileNotFoundError as e:
        logger.error(f"Command not found: {args[0]}: {type(e).__name__}: {e}")
        return -1, "", f"Error: Command not found '{args[0]}'"
    except PermissionError as e:
        logger.error(f"Command not executable: {args[0]}: {type(e).__name__}: {e}")
        return -1, "", f"Error: Command not executable '{args[0]}'"
    except subprocess.TimeoutExpired:
        logger.error(f"Command '{command_str}' timed out after {timeout}s")
        return -1, "", f"Error: Command timed out after {timeout}s"
    except OSError as e:
        logger.error(
            f"Unexpected error while running command '{command_str[:50]}': {type(e).__name__}: {e}",
            exc_info=True,
        )
        return -1, "", f"An unexpected error occurred: {e}"


def make_runner(
    timeout: Optional[float] = None, pass_environment: bool = True
) -> CommandRunner:
    """Bind a timeout and environment policy into a command runner."""
    env = common_environment(pass_environment)

    def runner(args: Sequence[str]) -> CommandResult:
        return run_command(args, timeout=timeout, env=env)

    return runner
