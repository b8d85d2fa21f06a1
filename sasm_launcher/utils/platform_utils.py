"""Platform detection utilities."""
import os
import platform
from enum import Enum


class Platform(Enum):
    """Operating system platforms."""
    WINDOWS = "windows"
    MACOS = "macos"
    LINUX = "linux"


class PlatformUtils:
    """Utility class for platform detection."""

    @staticmethod
    def get_platform() -> Platform:
        """
        Detect the current operating system.

        Returns:
            Platform enum value: Platform.WINDOWS, Platform.MACOS, or Platform.LINUX
        """
        system = platform.system()
        if system == "Windows" or os.name == "nt":
            return Platform.WINDOWS
        elif system == "Darwin":
            return Platform.MACOS
        else:
            return Platform.LINUX

    @staticmethod
    def get_config_dir(app_name: str) -> str:
        """
        Get the per-user configuration directory for the platform.

        Args:
            app_name: Application directory name

        Returns:
            Absolute path (not created)
        """
        home = os.path.expanduser("~")
        plat = PlatformUtils.get_platform()
        if plat == Platform.WINDOWS:
            return os.path.join(home, "AppData", "Roaming", app_name)
        elif plat == Platform.MACOS:
            return os.path.join(home, "Library", "Application Support", app_name)
        return os.path.join(home, ".config", app_name)
