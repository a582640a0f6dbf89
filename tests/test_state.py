"""
Tests for loading, storing and comparing the persisted wallpaper state.
"""
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest import mock

from wallpaper_switch.core import state as core_state
from wallpaper_switch.core.errors import StorageError
from wallpaper_switch.core.state import State


class TestStateStore(unittest.TestCase):

    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name)
        self.path = core_state.get_state_file(self.data_dir)

    def tearDown(self):
        self._tmp.cleanup()

    def _populated(self):
        return State(
            last_modification=datetime(2024, 3, 1, 12, 30, 5, tzinfo=timezone.utc),
            source_url="https://apod.nasa.gov/apod/image/2403/M42%20wide.jpg",
            picture_file_path=str(self.data_dir / "background-abc.jpg"),
            rotation_count=7,
        )

    def test_missing_file_gives_zero_state(self):
        state = core_state.load_state(self.path)
        self.assertEqual(state, State())
        self.assertIsNone(state.last_modification)
        self.assertEqual(state.source_url, "")
        self.assertEqual(state.picture_file_path, "")
        self.assertEqual(state.rotation_count, 0)

    def test_round_trip(self):
        original = self._populated()
        core_state.store_state(self.path, original)
        first_bytes = self.path.read_bytes()

        loaded = core_state.load_state(self.path)
        self.assertEqual(loaded, original)

        core_state.store_state(self.path, loaded)
        self.assertEqual(self.path.read_bytes(), first_bytes)

    def test_store_replaces_previous_content(self):
        core_state.store_state(self.path, self._populated())
        core_state.store_state(self.path, State(source_url="https://example/b.png"))
        loaded = core_state.load_state(self.path)
        self.assertEqual(loaded, State(source_url="https://example/b.png"))
        self.assertEqual([p.name for p in self.data_dir.iterdir()], ["status.ini"])

    def test_unparseable_file_gives_zero_state(self):
        self.path.write_text("\x00garbage without sections\n")
        self.assertEqual(core_state.load_state(self.path), State())

    def test_missing_fields_default(self):
        self.path.write_text("[State]\nsource_url = https://example/a.jpg\n")
        self.assertEqual(core_state.load_state(self.path),
                         State(source_url="https://example/a.jpg"))

    def test_bad_fields_are_dropped_individually(self):
        self.path.write_text(
            "[State]\n"
            "last_modification = yesterday\n"
            "source_url = https://example/a.jpg\n"
            "picture_file_path = /tmp/a.jpg\n"
            "rotation_count = many\n"
        )
        loaded = core_state.load_state(self.path)
        self.assertIsNone(loaded.last_modification)
        self.assertEqual(loaded.rotation_count, 0)
        self.assertEqual(loaded.source_url, "https://example/a.jpg")
        self.assertEqual(loaded.picture_file_path, "/tmp/a.jpg")

    def test_store_failure_raises_storage_error(self):
        missing = self.data_dir / "no-such-dir" / "status.ini"
        with self.assertRaises(StorageError):
            core_state.store_state(missing, State())

    def test_failed_replace_keeps_old_file(self):
        core_state.store_state(self.path, self._populated())
        before = self.path.read_bytes()
        with mock.patch("wallpaper_switch.core.state.os.replace", side_effect=OSError("disk full")):
            with self.assertRaises(StorageError):
                core_state.store_state(self.path, State())
        self.assertEqual(self.path.read_bytes(), before)
        self.assertEqual([p.name for p in self.data_dir.iterdir()], ["status.ini"])


class TestIsUnchanged(unittest.TestCase):

    def test_equal_url(self):
        self.assertTrue(core_state.is_unchanged(State(source_url="https://x/a.jpg"), "https://x/a.jpg"))

    def test_different_url(self):
        self.assertFalse(core_state.is_unchanged(State(source_url="https://x/a.jpg"), "https://x/A.jpg"))

    def test_first_run_is_a_change(self):
        self.assertFalse(core_state.is_unchanged(State(), "https://x/a.jpg"))


if __name__ == "__main__":
    unittest.main()
