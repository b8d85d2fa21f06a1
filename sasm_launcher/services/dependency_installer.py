"""Dependency Installer - installs Homebrew, Docker and XQuartz."""
from typing import Callable, Optional

import requests
from loguru import logger

from sasm_launcher.core.constants import (
    DOCKER_CASK,
    HOMEBREW_DOWNLOAD_TIMEOUT,
    HOMEBREW_INSTALL_URL,
    XQUARTZ_CASK,
)
from sasm_launcher.core.errors import DownloadError, PackageManagerRequiredError
from sasm_launcher.core.types import Dependency
from sasm_launcher.services.dependency_prober import DependencyProber
from sasm_launcher.utils.process_utils import ProcessUtils


class DependencyInstaller:
    """
    Runs the installers. Every operation mutates the system, is slow and may
    prompt for administrator rights; callers re-probe afterwards.
    """

    def __init__(
        self,
        prober: Optional[DependencyProber] = None,
        progress_callback: Optional[Callable[[str], None]] = None,
    ):
        self._prober = prober or DependencyProber()
        self._progress_callback = progress_callback

    def _report(self, message: str) -> None:
        logger.info(f"[Installer] {message}")
        if self._progress_callback:
            self._progress_callback(message)

    def install_homebrew(self) -> None:
        """
        Download and run the official Homebrew install script.

        Raises:
            DownloadError: If the script cannot be fetched
            CommandError: If the script exits non-zero
        """
        self._report("Downloading Homebrew install script...")
        script = self._download_install_script()

        self._report("Installing Homebrew...")
        ProcessUtils.run_step("Homebrew install script", ["/bin/bash", "-c", script], interactive=True)
        self._report("Homebrew installation complete!")

    def install_docker(self) -> None:
        """
        Raises:
            PackageManagerRequiredError: If Homebrew is not installed
            CommandError: If brew fails
        """
        self._install_cask(Dependency.DOCKER, DOCKER_CASK)

    def install_xquartz(self) -> None:
        """
        Raises:
            PackageManagerRequiredError: If Homebrew is not installed
            CommandError: If brew fails
        """
        self._install_cask(Dependency.XQUARTZ, XQUARTZ_CASK)

    def _install_cask(self, dependency: Dependency, cask: str) -> None:
        brew = self._prober.check_homebrew()
        if not brew.installed:
            raise PackageManagerRequiredError(dependency.value)

        self._report(f"Installing {dependency.value}...")
        ProcessUtils.run_step(f"brew install {cask}", [brew.path, "install", "--cask", cask])
        self._report(f"{dependency.value} installation complete!")

    def _download_install_script(self) -> str:
        try:
            response = requests.get(HOMEBREW_INSTALL_URL, timeout=HOMEBREW_DOWNLOAD_TIMEOUT)
            response.raise_for_status()
        except requests.RequestException as e:
            raise DownloadError(f"Failed to download Homebrew install script: {e}") from e

        if not response.text.strip():
            raise DownloadError("Homebrew install script is empty")
        return response.text
