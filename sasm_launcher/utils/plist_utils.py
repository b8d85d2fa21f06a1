"""Property list helpers for the macOS preference store."""
import os
import plistlib
import tempfile
from typing import Any, Optional
from xml.parsers.expat import ExpatError

from loguru import logger

from sasm_launcher.core.constants import MINIMAL_PLIST
from sasm_launcher.utils.process_utils import ProcessUtils

BINARY_PLIST_MAGIC = b"bplist"


def _format_like_defaults(value: Any) -> str:
    """Render a plist value the way `defaults read` prints scalars."""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)


def read_preference(domain: str, key: str, plist_path: str) -> Optional[str]:
    """
    Read one key from the user preference store.

    Uses `defaults` when present so values cached by cfprefsd are seen;
    otherwise parses the plist file directly.

    Args:
        domain: Preference domain, e.g. org.macosforge.xquartz.X11
        key: Preference key
        plist_path: Backing plist file of the domain

    Returns:
        Value as printed by `defaults read`, or None if unreadable
    """
    defaults = ProcessUtils.which("defaults")
    if defaults:
        return ProcessUtils.read_output([defaults, "read", domain, key])

    try:
        with open(plist_path, "rb") as f:
            data = plistlib.load(f)
    except (OSError, plistlib.InvalidFileException, ValueError) as e:
        logger.debug(f"[Prefs] Cannot parse {plist_path}: {e}")
        return None

    if not isinstance(data, dict) or key not in data:
        return None
    return _format_like_defaults(data[key])


def load_as_xml(plist_path: str) -> str:
    """
    Return the plist at plist_path as XML text.

    A missing file yields a minimal empty plist; a binary plist is converted.

    Raises:
        OSError: If the file exists but cannot be read
        ValueError: If a binary plist is corrupt
    """
    if not os.path.exists(plist_path):
        logger.debug(f"[Prefs] {plist_path} missing, starting from an empty plist")
        return MINIMAL_PLIST

    with open(plist_path, "rb") as f:
        raw = f.read()

    if raw.startswith(BINARY_PLIST_MAGIC):
        try:
            data = plistlib.loads(raw, fmt=plistlib.FMT_BINARY)
        except plistlib.InvalidFileException as e:
            raise ValueError(f"corrupt binary plist: {e}") from e
        return plistlib.dumps(data, fmt=plistlib.FMT_XML).decode("utf-8")

    return raw.decode("utf-8")


def set_bool_key(xml_text: str, key: str, value: bool) -> str:
    """
    Set a boolean key in the top-level dict of an XML plist.

    Nested dicts are left alone. Duplicate entries of the key collapse into one.

    Raises:
        ValueError: If the text is not a plist with a top-level dict
    """
    try:
        data = plistlib.loads(xml_text.encode("utf-8"), fmt=plistlib.FMT_XML)
    except ExpatError as e:
        raise ValueError(f"malformed plist: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("plist has no top-level dict")

    data[key] = value
    return plistlib.dumps(data, fmt=plistlib.FMT_XML).decode("utf-8")


def atomic_write(path: str, text: str) -> None:
    """
    Replace path with text so readers see either the old or the new file.

    The scratch file lives next to the target so the final rename stays on
    one filesystem. It is removed if anything fails before the rename.
    """
    directory = os.path.dirname(path) or "."
    os.makedirs(directory, exist_ok=True)
    fd, scratch = tempfile.mkstemp(dir=directory, prefix=f".{os.path.basename(path)}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        if os.path.exists(path):
            os.chmod(scratch, os.stat(path).st_mode & 0o777)
        else:
            os.chmod(scratch, 0o644)
        os.replace(scratch, path)
    finally:
        if os.path.exists(scratch):
            os.remove(scratch)
