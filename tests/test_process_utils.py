import subprocess
from unittest.mock import MagicMock, patch

import psutil
import pytest

from sasm_launcher.core.errors import CommandError
from sasm_launcher.utils.process_utils import ProcessUtils


def _proc(name, pid=100):
    process = MagicMock()
    process.info = {"name": name}
    process.pid = pid
    return process


class TestProcessUtils:
    @patch("shutil.which")
    def test_which(self, mock_which):
        mock_which.return_value = "/opt/homebrew/bin/brew"
        assert ProcessUtils.which("brew") == "/opt/homebrew/bin/brew"

        mock_which.return_value = None
        assert ProcessUtils.which("brew") is None

    @patch("subprocess.run")
    def test_read_output(self, mock_run):
        mock_run.return_value = MagicMock(stdout="0\n")
        assert ProcessUtils.read_output(["defaults", "read", "d", "k"]) == "0"

    @patch("subprocess.run", side_effect=subprocess.CalledProcessError(1, ["defaults"]))
    def test_read_output_failure(self, mock_run):
        """A missing key makes defaults exit non-zero."""
        assert ProcessUtils.read_output(["defaults", "read", "d", "k"]) is None

    @patch("subprocess.run", side_effect=FileNotFoundError("defaults"))
    def test_read_output_missing_binary(self, mock_run):
        assert ProcessUtils.read_output(["defaults"]) is None

    @patch("subprocess.run")
    def test_run_step_success(self, mock_run):
        ProcessUtils.run_step("brew install docker", ["brew", "install", "--cask", "docker"])
        mock_run.assert_called_once_with(
            ["brew", "install", "--cask", "docker"], check=True, capture_output=True, text=True
        )

    @patch("subprocess.run")
    def test_run_step_interactive_inherits_terminal(self, mock_run):
        ProcessUtils.run_step("script", ["/bin/bash", "-c", "true"], interactive=True)
        mock_run.assert_called_once_with(["/bin/bash", "-c", "true"], check=True)

    @patch("subprocess.run", side_effect=FileNotFoundError("brew"))
    def test_run_step_missing_binary(self, mock_run):
        with pytest.raises(CommandError) as exc:
            ProcessUtils.run_step("brew install docker", ["brew"])
        assert exc.value.returncode is None
        assert "brew not found" in str(exc.value)

    @patch("subprocess.run", side_effect=subprocess.CalledProcessError(3, ["brew"], stderr="boom"))
    def test_run_step_non_zero_exit(self, mock_run):
        with pytest.raises(CommandError) as exc:
            ProcessUtils.run_step("brew install docker", ["brew"])
        assert str(exc.value) == "brew install docker failed (exit status 3): boom"

    @patch("subprocess.run")
    def test_run_best_effort(self, mock_run):
        assert ProcessUtils.run_best_effort("stop daemon", ["launchctl", "stop", "x"]) is True

        mock_run.side_effect = subprocess.CalledProcessError(1, ["launchctl"])
        assert ProcessUtils.run_best_effort("stop daemon", ["launchctl", "stop", "x"]) is False

        mock_run.side_effect = FileNotFoundError("launchctl")
        assert ProcessUtils.run_best_effort("stop daemon", ["launchctl", "stop", "x"]) is False

    @patch("psutil.process_iter")
    def test_kill_processes_by_name(self, mock_iter):
        xquartz = _proc("XQuartz", 1)
        other = _proc("Finder", 2)
        gone = _proc("XQuartz", 3)
        gone.terminate.side_effect = psutil.NoSuchProcess(3)
        denied = _proc("XQuartz", 4)
        denied.terminate.side_effect = psutil.AccessDenied(4)
        mock_iter.return_value = [xquartz, other, gone, denied]

        assert ProcessUtils.kill_processes_by_name("XQuartz") == 1
        xquartz.terminate.assert_called_once()
        other.terminate.assert_not_called()

    @patch("psutil.process_iter", side_effect=psutil.AccessDenied())
    def test_kill_processes_listing_denied(self, mock_iter):
        assert ProcessUtils.kill_processes_by_name("XQuartz") == 0

    @patch("subprocess.Popen")
    def test_launch_detached(self, mock_popen):
        mock_popen.return_value = MagicMock(pid=4242)

        proc = ProcessUtils.launch_detached(["sasm-docker-launcher"])

        assert proc.pid == 4242
        mock_popen.assert_called_once_with(
            ["sasm-docker-launcher"],
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
