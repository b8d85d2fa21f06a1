"""Hand-off to the downstream SASM Docker launcher."""
from typing import Optional

from loguru import logger

from sasm_launcher.core.config import Config
from sasm_launcher.core.errors import LaunchError
from sasm_launcher.utils.process_utils import ProcessUtils


class LauncherService:
    """Starts the launcher application once the user elects to continue."""

    def __init__(self, config: Optional[Config] = None):
        self.config = config or Config()

    def launch(self) -> int:
        """
        Start the launcher detached from this process.

        Returns:
            PID of the launcher

        Raises:
            LaunchError: If the data directory or the launcher process cannot be created
        """
        command = self.config.get_launcher_command()
        if not command:
            raise LaunchError("No launcher command configured")

        data_dir = self.config.get_data_dir()
        try:
            data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise LaunchError(f"Cannot create data directory {data_dir}: {e}") from e

        try:
            process = ProcessUtils.launch_detached(command)
        except FileNotFoundError as e:
            raise LaunchError(f"Launcher not found: {command[0]}") from e
        except OSError as e:
            raise LaunchError(f"Failed to start launcher: {e}") from e

        logger.info(f"[Launcher] Started {command[0]} (pid {process.pid}), data dir {data_dir}")
        return process.pid
