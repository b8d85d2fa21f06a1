"""Process utilities."""
import shutil
import subprocess
from typing import List, Optional

import psutil
from loguru import logger

from sasm_launcher.core.errors import CommandError


class ProcessUtils:
    """Utility class for running external commands and managing processes."""

    @staticmethod
    def which(binary: str) -> Optional[str]:
        """
        Resolve a binary on the executable search path.

        Args:
            binary: Command name

        Returns:
            Absolute path or None if not found
        """
        try:
            return shutil.which(binary)
        except OSError as e:
            logger.debug(f"[ProcessUtils] which({binary}) failed: {e}")
            return None

    @staticmethod
    def read_output(cmd: List[str], timeout: Optional[int] = 10) -> Optional[str]:
        """
        Run a read-only command and return its stripped stdout.

        Returns:
            Output text, or None if the command is missing, fails or times out
        """
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, timeout=timeout, check=True)
            return result.stdout.strip()
        except (OSError, subprocess.SubprocessError) as e:
            logger.debug(f"[ProcessUtils] {' '.join(cmd)} unreadable: {e}")
            return None

    @staticmethod
    def run_step(step: str, cmd: List[str], interactive: bool = False) -> None:
        """
        Run a command whose failure must reach the caller.

        Args:
            step: Short description used in the error message
            cmd: Command and arguments
            interactive: Inherit the terminal (for installers that prompt for a password)

        Raises:
            CommandError: If the command cannot be started or exits non-zero
        """
        logger.info(f"[ProcessUtils] {step}: {' '.join(cmd)}")
        try:
            if interactive:
                subprocess.run(cmd, check=True)
            else:
                subprocess.run(cmd, check=True, capture_output=True, text=True)
        except FileNotFoundError as e:
            raise CommandError(step, cmd, detail=f"{cmd[0]} not found") from e
        except subprocess.CalledProcessError as e:
            detail = (e.stderr or "").strip() if not interactive else ""
            raise CommandError(step, cmd, e.returncode, detail) from e
        except OSError as e:
            raise CommandError(step, cmd, detail=str(e)) from e

    @staticmethod
    def run_best_effort(step: str, cmd: List[str]) -> bool:
        """
        Run a command whose failure is logged and ignored.

        Returns:
            True if the command exited zero
        """
        try:
            subprocess.run(cmd, check=True, capture_output=True, text=True)
            logger.debug(f"[ProcessUtils] {step}: ok")
            return True
        except (OSError, subprocess.CalledProcessError) as e:
            logger.warning(f"[ProcessUtils] {step} skipped: {e}")
            return False

    @staticmethod
    def kill_processes_by_name(name: str) -> int:
        """
        Terminate every process whose name matches exactly.

        Args:
            name: Process name (as shown by killall)

        Returns:
            Number of processes signalled
        """
        killed = 0
        try:
            processes = list(psutil.process_iter(["name"]))
        except psutil.Error as e:
            logger.warning(f"[ProcessUtils] Could not list processes: {e}")
            return 0

        for process in processes:
            if process.info.get("name") != name:
                continue
            try:
                process.terminate()
                killed += 1
            except psutil.NoSuchProcess:
                pass  # Already gone
            except psutil.AccessDenied:
                logger.warning(f"Access denied when trying to terminate {name} ({process.pid})")

        logger.debug(f"[ProcessUtils] Terminated {killed} {name} process(es)")
        return killed

    @staticmethod
    def launch_detached(cmd: List[str]) -> subprocess.Popen:
        """
        Start a program that outlives this process.

        Raises:
            OSError: If the program cannot be started
        """
        logger.info(f"[ProcessUtils] Launching {' '.join(cmd)}")
        return subprocess.Popen(
            cmd,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            start_new_session=True,
        )
