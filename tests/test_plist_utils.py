"""Tests for property list helpers."""
import os
import plistlib
from unittest.mock import patch

import pytest

from sasm_launcher.core.constants import MINIMAL_PLIST
from sasm_launcher.utils.plist_utils import atomic_write, load_as_xml, read_preference, set_bool_key

WHICH = "sasm_launcher.utils.process_utils.ProcessUtils.which"


class TestReadPreference:
    @patch("sasm_launcher.utils.process_utils.ProcessUtils.read_output", return_value="0")
    @patch(WHICH, return_value="/usr/bin/defaults")
    def test_uses_defaults_when_available(self, mock_which, mock_read):
        value = read_preference("org.example", "nolisten_tcp", "/nonexistent.plist")

        assert value == "0"
        mock_read.assert_called_once_with(["/usr/bin/defaults", "read", "org.example", "nolisten_tcp"])

    @patch(WHICH, return_value=None)
    def test_parses_file_without_defaults(self, mock_which, tmp_path):
        """Booleans are rendered the way `defaults read` prints them."""
        plist = tmp_path / "prefs.plist"
        plist.write_bytes(plistlib.dumps({"flag": True, "off": False, "name": "x"}, fmt=plistlib.FMT_BINARY))

        assert read_preference("d", "flag", str(plist)) == "1"
        assert read_preference("d", "off", str(plist)) == "0"
        assert read_preference("d", "name", str(plist)) == "x"
        assert read_preference("d", "missing", str(plist)) is None

    @patch(WHICH, return_value=None)
    def test_missing_file(self, mock_which, tmp_path):
        assert read_preference("d", "k", str(tmp_path / "none.plist")) is None


class TestLoadAsXml:
    def test_missing_file_gives_minimal_plist(self, tmp_path):
        assert load_as_xml(str(tmp_path / "none.plist")) == MINIMAL_PLIST

    def test_binary_plist_is_converted(self, tmp_path):
        plist = tmp_path / "prefs.plist"
        plist.write_bytes(plistlib.dumps({"app_to_run": "/usr/bin/xterm"}, fmt=plistlib.FMT_BINARY))

        text = load_as_xml(str(plist))

        assert text.startswith("<?xml")
        assert plistlib.loads(text.encode()) == {"app_to_run": "/usr/bin/xterm"}

    def test_corrupt_binary_plist(self, tmp_path):
        plist = tmp_path / "prefs.plist"
        plist.write_bytes(b"bplist00garbage")

        with pytest.raises(ValueError):
            load_as_xml(str(plist))


class TestSetBoolKey:
    def test_inserts_into_minimal_plist(self):
        text = set_bool_key(MINIMAL_PLIST, "nolisten_tcp", False)

        assert plistlib.loads(text.encode()) == {"nolisten_tcp": False}

    def test_inserts_into_self_closing_dict(self):
        text = set_bool_key(plistlib.dumps({}).decode(), "nolisten_tcp", False)

        assert plistlib.loads(text.encode()) == {"nolisten_tcp": False}

    def test_replaces_existing_value(self):
        original = plistlib.dumps({"nolisten_tcp": True, "depth": 24}).decode()

        text = set_bool_key(original, "nolisten_tcp", False)

        assert plistlib.loads(text.encode()) == {"nolisten_tcp": False, "depth": 24}
        assert text.count("<key>nolisten_tcp</key>") == 1

    def test_is_idempotent(self):
        once = set_bool_key(MINIMAL_PLIST, "nolisten_tcp", False)
        twice = set_bool_key(once, "nolisten_tcp", False)

        assert twice == once

    def test_collapses_duplicate_entries(self):
        """Files edited twice by an unconditional insert carry the key twice."""
        duplicated = MINIMAL_PLIST.replace(
            "<dict>\n",
            "<dict>\n\t<key>nolisten_tcp</key>\n\t<true/>\n\t<key>nolisten_tcp</key>\n\t<false/>\n",
        )

        text = set_bool_key(duplicated, "nolisten_tcp", False)

        assert text.count("<key>nolisten_tcp</key>") == 1
        assert plistlib.loads(text.encode()) == {"nolisten_tcp": False}

    def test_nested_key_name_not_confused(self):
        original = plistlib.dumps({"nolisten_tcp_extra": "1"}).decode()

        text = set_bool_key(original, "nolisten_tcp", False)

        assert plistlib.loads(text.encode()) == {"nolisten_tcp_extra": "1", "nolisten_tcp": False}

    def test_nested_dict_entry_left_alone(self):
        original = plistlib.dumps({"sub": {"nolisten_tcp": True}}).decode()

        text = set_bool_key(original, "nolisten_tcp", False)

        assert plistlib.loads(text.encode()) == {"sub": {"nolisten_tcp": True}, "nolisten_tcp": False}

    def test_malformed_xml(self):
        with pytest.raises(ValueError):
            set_bool_key("<plist><dict><key>k</dict>", "k", True)

    def test_no_dict(self):
        with pytest.raises(ValueError):
            set_bool_key('<plist version="1.0"><array/></plist>', "k", True)


class TestAtomicWrite:
    def test_writes_and_leaves_no_scratch(self, tmp_path):
        target = tmp_path / "prefs.plist"
        target.write_text("old")
        os.chmod(target, 0o600)

        atomic_write(str(target), "new")

        assert target.read_text() == "new"
        assert os.listdir(tmp_path) == ["prefs.plist"]
        assert os.stat(target).st_mode & 0o777 == 0o600

    def test_creates_parent_directory(self, tmp_path):
        target = tmp_path / "Library" / "Preferences" / "prefs.plist"

        atomic_write(str(target), "data")

        assert target.read_text() == "data"

    def test_failure_keeps_original(self, tmp_path):
        target = tmp_path / "prefs.plist"
        target.write_text("old")

        with patch("sasm_launcher.utils.plist_utils.os.replace", side_effect=OSError("disk full")):
            with pytest.raises(OSError):
                atomic_write(str(target), "new")

        assert target.read_text() == "old"
        assert os.listdir(tmp_path) == ["prefs.plist"]
