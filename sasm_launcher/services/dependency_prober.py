"""Dependency Prober - reads the machine state for Homebrew, Docker and XQuartz."""
import os
from dataclasses import dataclass
from typing import Optional

from loguru import logger

from sasm_launcher.core.constants import (
    BREW_BINARY,
    DOCKER_APP_PATH,
    DOCKER_BINARY,
    DOCKER_FIXED_BINARY_PATH,
    NOLISTEN_TCP_CONFIGURED_VALUE,
    NOLISTEN_TCP_KEY,
    XQUARTZ_APP_PATH,
    XQUARTZ_PREFS_DOMAIN,
    XQUARTZ_PREFS_FILE,
)
from sasm_launcher.core.types import Dependency, DependencySet, DependencyStatus, XQuartzState
from sasm_launcher.utils.plist_utils import read_preference
from sasm_launcher.utils.process_utils import ProcessUtils


@dataclass(frozen=True)
class ProbePaths:
    """Filesystem locations and binary names the prober inspects."""

    brew_binary: str = BREW_BINARY
    docker_app: str = DOCKER_APP_PATH
    docker_binary: str = DOCKER_BINARY
    docker_fixed_binary: str = DOCKER_FIXED_BINARY_PATH
    xquartz_app: str = XQUARTZ_APP_PATH
    xquartz_prefs_file: str = XQUARTZ_PREFS_FILE


class DependencyProber:
    """Produces a fresh DependencySet on every call; never mutates the system."""

    def __init__(self, paths: Optional[ProbePaths] = None):
        self.paths = paths or ProbePaths()

    def probe_all(self) -> DependencySet:
        """Probe all three dependencies. Never raises."""
        deps = DependencySet(
            homebrew=self.check_homebrew(),
            docker=self.check_docker(),
            xquartz=self.check_xquartz(),
        )
        logger.debug(f"[Prober] {[s.message for s in deps]}")
        return deps

    def check_homebrew(self) -> DependencyStatus:
        name = Dependency.HOMEBREW.value
        brew_path = ProcessUtils.which(self.paths.brew_binary)
        if not brew_path:
            return DependencyStatus(
                name=name,
                installed=False,
                message="Homebrew not found - required for installing other dependencies",
            )
        return DependencyStatus(name=name, installed=True, path=brew_path, message="Homebrew is installed")

    def check_docker(self) -> DependencyStatus:
        """Bundle first, then PATH, then the fixed binary location."""
        name = Dependency.DOCKER.value

        if _exists(self.paths.docker_app):
            return DependencyStatus(
                name=name, installed=True, path=self.paths.docker_app, message="Docker Desktop is installed"
            )

        docker_path = ProcessUtils.which(self.paths.docker_binary)
        if docker_path:
            return DependencyStatus(name=name, installed=True, path=docker_path, message="Docker is installed")

        if _exists(self.paths.docker_fixed_binary):
            return DependencyStatus(
                name=name, installed=True, path=self.paths.docker_fixed_binary, message="Docker is installed"
            )

        return DependencyStatus(
            name=name,
            installed=False,
            message="Docker Desktop not found - required for running containers",
        )

    def check_xquartz(self) -> DependencyStatus:
        name = Dependency.XQUARTZ.value

        if not _exists(self.paths.xquartz_app):
            return DependencyStatus(
                name=name,
                installed=False,
                message="XQuartz not found - required for X11 forwarding",
                state=XQuartzState.ABSENT,
            )

        if self.is_xquartz_configured():
            return DependencyStatus(
                name=name,
                installed=True,
                path=self.paths.xquartz_app,
                message="XQuartz is installed and configured",
                state=XQuartzState.CONFIGURED,
            )
        return DependencyStatus(
            name=name,
            installed=True,
            path=self.paths.xquartz_app,
            message="XQuartz is installed but needs configuration",
            state=XQuartzState.INSTALLED_UNCONFIGURED,
        )

    def is_xquartz_configured(self) -> bool:
        """True when the preference file exists and TCP listening is not disabled."""
        if not _exists(self.paths.xquartz_prefs_file):
            return False
        try:
            value = read_preference(XQUARTZ_PREFS_DOMAIN, NOLISTEN_TCP_KEY, self.paths.xquartz_prefs_file)
        except Exception as e:
            logger.debug(f"[Prober] Reading {NOLISTEN_TCP_KEY} failed: {e}")
            return False
        return value == NOLISTEN_TCP_CONFIGURED_VALUE


def _exists(path: str) -> bool:
    try:
        return bool(path) and os.path.exists(path)
    except (OSError, ValueError):
        return False
