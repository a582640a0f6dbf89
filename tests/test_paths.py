"""
Tests for XDG directory resolution.
"""
import stat
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from wallpaper_switch.core import paths
from wallpaper_switch.core.errors import StorageError


class TestGetDirectories(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self):
        self._tmp.cleanup()

    def test_uses_xdg_variables(self):
        env = {
            "XDG_CONFIG_HOME": str(self.root / "cfg"),
            "XDG_DATA_HOME": str(self.root / "data"),
            "HOME": str(self.root / "home"),
        }
        config_dir, data_dir = paths.get_directories(env)
        self.assertEqual(config_dir, self.root / "cfg" / "wallpaper-switch")
        self.assertEqual(data_dir, self.root / "data" / "wallpaper-switch")
        self.assertTrue(config_dir.is_dir())
        self.assertTrue(data_dir.is_dir())

    def test_empty_variables_fall_back_to_home(self):
        env = {"XDG_CONFIG_HOME": "", "HOME": str(self.root)}
        config_dir, data_dir = paths.get_directories(env)
        self.assertEqual(config_dir, self.root / ".config" / "wallpaper-switch")
        self.assertEqual(data_dir, self.root / ".local" / "share" / "wallpaper-switch")

    def test_directories_are_private(self):
        config_dir, data_dir = paths.get_directories({"HOME": str(self.root)})
        self.assertEqual(stat.S_IMODE(data_dir.stat().st_mode) & 0o077, 0)
        self.assertEqual(stat.S_IMODE(config_dir.stat().st_mode) & 0o077, 0)

    def test_existing_directories_are_fine(self):
        first = paths.get_directories({"HOME": str(self.root)})
        second = paths.get_directories({"HOME": str(self.root)})
        self.assertEqual(first, second)

    def test_creation_failure_raises_storage_error(self):
        with mock.patch.object(Path, "mkdir", side_effect=PermissionError("denied")):
            with self.assertRaises(StorageError):
                paths.get_directories({"HOME": str(self.root)})


if __name__ == "__main__":
    unittest.main()
