"""XQuartz Configurator - lets XQuartz accept X11 connections over TCP.

Docker containers reach the host display over TCP, so the XQuartz preference
`nolisten_tcp` has to be false. The edit goes straight to the plist file while
cfprefsd is stopped, so its in-memory cache cannot overwrite the change.
"""
import threading
from typing import Callable, Optional

from loguru import logger

from sasm_launcher.core.constants import (
    NOLISTEN_TCP_KEY,
    PREFS_DAEMON_LABEL,
    XQUARTZ_PREFS_FILE,
    XQUARTZ_PROCESS_NAME,
)
from sasm_launcher.core.errors import PreferenceFileError
from sasm_launcher.utils.plist_utils import atomic_write, load_as_xml, set_bool_key
from sasm_launcher.utils.process_utils import ProcessUtils

_configure_lock = threading.Lock()


class XQuartzConfigurator:
    """Edits the XQuartz preference file. Safe to run repeatedly."""

    def __init__(
        self,
        prefs_file: str = XQUARTZ_PREFS_FILE,
        progress_callback: Optional[Callable[[str], None]] = None,
    ):
        self.prefs_file = prefs_file
        self._progress_callback = progress_callback

    def _report(self, message: str) -> None:
        logger.info(f"[XQuartz] {message}")
        if self._progress_callback:
            self._progress_callback(message)

    def configure(self) -> None:
        """
        Set nolisten_tcp to false and restart XQuartz.

        Only the file steps can fail; daemon control and process termination
        are best effort.

        Raises:
            PreferenceFileError: If the preference file cannot be read, edited or written
        """
        with _configure_lock:
            ProcessUtils.run_best_effort("stop preferences daemon", ["launchctl", "stop", PREFS_DAEMON_LABEL])
            try:
                self._report("Updating XQuartz preferences...")
                self._write_preference()
            finally:
                ProcessUtils.run_best_effort(
                    "start preferences daemon", ["launchctl", "start", PREFS_DAEMON_LABEL]
                )

        self._report("Restarting XQuartz...")
        ProcessUtils.kill_processes_by_name(XQUARTZ_PROCESS_NAME)

    def _write_preference(self) -> None:
        try:
            xml_text = load_as_xml(self.prefs_file)
        except (OSError, ValueError, UnicodeDecodeError) as e:
            raise PreferenceFileError("read preference file", e) from e

        try:
            updated = set_bool_key(xml_text, NOLISTEN_TCP_KEY, False)
        except ValueError as e:
            raise PreferenceFileError("modify plist", e) from e

        try:
            atomic_write(self.prefs_file, updated)
        except OSError as e:
            raise PreferenceFileError("write preference file", e) from e

        logger.debug(f"[XQuartz] {NOLISTEN_TCP_KEY}=false written to {self.prefs_file}")
