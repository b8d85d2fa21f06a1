import os
import tempfile
from pathlib import Path

# Load environment variables from .env file
from dotenv import load_dotenv

from sasm_launcher.utils.platform_utils import Platform, PlatformUtils

# Load .env from project root
_project_root = Path(__file__).parent.parent.parent
load_dotenv(_project_root / ".env")

APP_NAME = "sasm-launcher"

# Homebrew
BREW_BINARY = os.getenv("SASM_BREW_BINARY", "brew")
HOMEBREW_INSTALL_URL = os.getenv(
    "SASM_HOMEBREW_INSTALL_URL",
    "https://raw.githubusercontent.com/Homebrew/install/HEAD/install.sh",
)
HOMEBREW_DOWNLOAD_TIMEOUT = float(os.getenv("SASM_HOMEBREW_DOWNLOAD_TIMEOUT", "60"))

# Docker
DOCKER_APP_PATH = os.getenv("SASM_DOCKER_APP_PATH", "/Applications/Docker.app")
DOCKER_BINARY = os.getenv("SASM_DOCKER_BINARY", "docker")
DOCKER_FIXED_BINARY_PATH = os.getenv("SASM_DOCKER_FIXED_BINARY_PATH", "/usr/local/bin/docker")
DOCKER_CASK = os.getenv("SASM_DOCKER_CASK", "docker")

# XQuartz
XQUARTZ_APP_PATH = os.getenv("SASM_XQUARTZ_APP_PATH", "/Applications/Utilities/XQuartz.app")
XQUARTZ_CASK = os.getenv("SASM_XQUARTZ_CASK", "xquartz")
XQUARTZ_PROCESS_NAME = "XQuartz"

# XQuartz user preferences
XQUARTZ_PREFS_DOMAIN = "org.macosforge.xquartz.X11"
XQUARTZ_PREFS_FILE = os.getenv(
    "SASM_XQUARTZ_PREFS_FILE",
    os.path.join(os.path.expanduser("~"), "Library", "Preferences", f"{XQUARTZ_PREFS_DOMAIN}.plist"),
)
NOLISTEN_TCP_KEY = "nolisten_tcp"
# `defaults read` prints booleans as 0/1
NOLISTEN_TCP_CONFIGURED_VALUE = "0"
PREFS_DAEMON_LABEL = "com.apple.cfprefsd.xpc.agent"

MINIMAL_PLIST = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE plist PUBLIC "-//Apple//DTD PLIST 1.0//EN" "http://www.apple.com/DTDs/PropertyList-1.0.dtd">
<plist version="1.0">
<dict>
</dict>
</plist>
"""

# Downstream launcher
DEFAULT_LAUNCHER_COMMAND = os.getenv("SASM_LAUNCHER_COMMAND", "sasm-docker-launcher")
DEFAULT_DATA_DIR = os.getenv("SASM_DATA_DIR", os.path.join(os.path.expanduser("~"), "sasm-data"))

# Temporary directory (cross-platform)
if PlatformUtils.get_platform() == Platform.MACOS:
    TMPDIR = os.path.join(os.path.expanduser("~/Library/Caches"), APP_NAME)
elif PlatformUtils.get_platform() == Platform.WINDOWS:
    TMPDIR = os.path.join(tempfile.gettempdir(), APP_NAME)
else:
    TMPDIR = os.path.join(os.environ.get("TMPDIR", "/tmp"), APP_NAME)

# Log files
LOG_FILE = os.path.join(TMPDIR, "sasm_launcher.log")
