"""
Unit tests for command execution and host information.
"""

import subprocess
from types import SimpleNamespace
from unittest.mock import Mock, patch

import pytest

from jailcell.system.commands import (
    common_environment,
    make_runner,
    run_command,
)
from jailcell.system.node import get_node_info


@pytest.mark.unit
class TestRunCommand:
    """Test cases for run_command."""

    @patch("jailcell.system.commands.subprocess.run")
    def test_success(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="out", stderr="")

        result = run_command(["jailhouse", "cell", "list"], timeout=5.0, env={"LC_ALL": "C"})

        assert result == (0, "out", "")
        args, kwargs = mock_run.call_args
        assert args[0] == ["jailhouse", "cell", "list"]
        assert kwargs["timeout"] == 5.0
        assert kwargs["env"] == {"LC_ALL": "C"}
        assert "shell" not in kwargs

    @patch("jailcell.system.commands.subprocess.run")
    def test_nonzero_exit_is_returned(self, mock_run):
        mock_run.return_value = Mock(returncode=3, stdout="", stderr="failed")
        assert run_command(["jailhouse", "cell", "start", "1"]) == (3, "", "failed")

    @patch("jailcell.system.commands.subprocess.run", side_effect=FileNotFoundError("nope"))
    def test_missing_binary(self, mock_run):
        returncode, stdout, stderr = run_command(["jailhouse", "--version"])
        assert returncode == -1
        assert "not found" in stderr

    @patch("jailcell.system.commands.subprocess.run", side_effect=PermissionError("denied"))
    def test_not_executable(self, mock_run):
        returncode, _, stderr = run_command(["./jailhouse", "--version"])
        assert returncode == -1
        assert "not executable" in stderr

    @patch(
        "jailcell.system.commands.subprocess.run",
        side_effect=subprocess.TimeoutExpired(cmd="jailhouse", timeout=1.0),
    )
    def test_timeout(self, mock_run):
        returncode, _, stderr = run_command(["jailhouse", "cell", "list"], timeout=1.0)
        assert returncode == -1
        assert "timed out" in stderr

    def test_real_process(self):
        returncode, stdout, _ = run_command(["sh", "-c", "echo hello"])
        assert returncode == 0
        assert stdout == "hello\n"


@pytest.mark.unit
class TestEnvironment:
    """Test cases for the tool environment."""

    def test_common_variables_are_passed(self):
        source = {"PATH": "/bin", "HOME": "/root", "SECRET": "x", "LC_ALL": "de_DE"}
        env = common_environment(True, source)
        assert env == {"LC_ALL": "C", "PATH": "/bin", "HOME": "/root"}

    def test_nothing_passed(self):
        env = common_environment(False, {"PATH": "/bin", "HOME": "/root"})
        assert env["LC_ALL"] == "C"
        assert "HOME" not in env
        assert env["PATH"]

    @patch("jailcell.system.commands.run_command", return_value=(0, "", ""))
    def test_make_runner_binds_settings(self, mock_run_command):
        runner = make_runner(timeout=7.0, pass_environment=False)
        runner(["jailhouse", "cell", "list"])
        args, kwargs = mock_run_command.call_args
        assert args[0] == ["jailhouse", "cell", "list"]
        assert kwargs["timeout"] == 7.0
        assert kwargs["env"]["LC_ALL"] == "C"


@pytest.mark.unit
class TestNodeInfo:
    """Test cases for get_node_info."""

    def test_node_info_from_psutil(self):
        process = Mock()
        process.cpu_affinity.return_value = [3, 1, 0, 2]
        with (
            patch("jailcell.system.node.psutil.cpu_count", return_value=4),
            patch("jailcell.system.node.psutil.Process", return_value=process),
            patch("jailcell.system.node.psutil.cpu_freq", return_value=SimpleNamespace(current=2400.0)),
            patch("jailcell.system.node.psutil.virtual_memory", return_value=SimpleNamespace(total=8 << 30)),
        ):
            node = get_node_info()

        assert node.cpu_count == 4
        assert node.online_cpus == (0, 1, 2, 3)
        assert node.cpu_mhz == 2400.0
        assert node.memory_total == 8 << 30

    def test_node_info_without_affinity_or_freq(self):
        process = Mock()
        process.cpu_affinity.side_effect = AttributeError
        with (
            patch("jailcell.system.node.psutil.cpu_count", return_value=2),
            patch("jailcell.system.node.psutil.Process", return_value=process),
            patch("jailcell.system.node.psutil.cpu_freq", return_value=None),
        ):
            node = get_node_info()

        assert node.online_cpus == (0, 1)
        assert node.cpu_mhz == 0.0

    def test_real_host(self):
        node = get_node_info()
        assert node.cpu_count >= 1
        assert node.memory_total > 0
