"""Errors raised by installer and launcher operations.

Probing never raises; these only surface from operations that mutate the
system or start other programs.
"""
from typing import List, Optional


class DependencyError(Exception):
    """Base class for installer, configurator and launcher failures."""


class PackageManagerRequiredError(DependencyError):
    """Homebrew must be installed before the requested operation."""

    def __init__(self, dependency: str):
        self.dependency = dependency
        super().__init__(f"Homebrew is required to install {dependency}")


class CommandError(DependencyError):
    """An external command exited non-zero or could not be started."""

    def __init__(self, step: str, command: List[str], returncode: Optional[int] = None, detail: str = ""):
        self.step = step
        self.command = command
        self.returncode = returncode
        message = f"{step} failed"
        if returncode is not None:
            message += f" (exit status {returncode})"
        if detail:
            message += f": {detail}"
        super().__init__(message)


class DownloadError(DependencyError):
    """Fetching a remote install script failed."""


class PreferenceFileError(DependencyError):
    """A file step of the XQuartz preference edit failed."""

    def __init__(self, step: str, cause: Exception):
        self.step = step
        self.cause = cause
        super().__init__(f"failed to {step}: {cause}")


class LaunchError(DependencyError):
    """The downstream launcher could not be started."""
