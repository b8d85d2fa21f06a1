"""SASM Launcher - dependency check and setup for the SASM Docker launcher on macOS."""

__version__ = "0.1.0"
__author__ = "sasm-docker contributors"
__description__ = "Checks for Homebrew, Docker and XQuartz before handing off to the launcher"

from sasm_launcher.core.types import DependencySet, DependencyStatus, XQuartzState
from sasm_launcher.services.dependency_prober import DependencyProber

__all__ = ["DependencyProber", "DependencySet", "DependencyStatus", "XQuartzState", "__version__"]
