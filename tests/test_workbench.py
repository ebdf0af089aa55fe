"""
Tests for the headless filter workbench.

Tests cover:
- Applying filters to a copy of the current image
- Single level undo and revert
- Opening, grabbing and saving images
- Preference bookkeeping
- Error handling
"""

import tempfile
import unittest
from pathlib import Path
from unittest.mock import Mock, patch

import numpy as np
import requests
from PIL import Image

from FT_Libs.FiltersLib.color_range_filter import ColorRangeFilter
from FT_Libs.FiltersLib.cv_filters import FillChannel, GrayScale
from FT_Libs.WorkbenchLib.preferences_store import PreferencesStore
from FT_Libs.WorkbenchLib.workbench import FilterWorkbench


class TestFilterWorkbench(unittest.TestCase):
    """Test image management of FilterWorkbench."""

    def setUp(self):
        """Create a temporary directory with a test image and preferences."""
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)
        self.preferences = PreferencesStore(self.temp_path / "preferences.json")
        self.workbench = FilterWorkbench(self.preferences)

        # Red on the left, blue on the right
        self.image_path = self.temp_path / "input.png"
        image = Image.new("RGB", (4, 2), color=(255, 0, 0))
        for y in range(2):
            for x in range(2, 4):
                image.putpixel((x, y), (0, 0, 255))
        image.save(self.image_path)

    def tearDown(self):
        """Clean up temporary files."""
        self.temp_dir.cleanup()

    def test_starts_empty(self):
        self.assertIsNone(self.workbench.image)
        self.assertFalse(self.workbench.can_process)

    def test_open_image_loads_bgr(self):
        image = self.workbench.open_image(self.image_path)

        self.assertEqual(image.shape, (2, 4, 3))
        self.assertEqual(image[0, 0].tolist(), [0, 0, 255])
        self.assertEqual(image[0, 3].tolist(), [255, 0, 0])
        self.assertTrue(self.workbench.can_process)
        self.assertIs(self.workbench.last_loaded_image, image)
        self.assertEqual(self.workbench.last_file, self.image_path.absolute())
        self.assertEqual(self.preferences.get_last_opened_file(), str(self.image_path.absolute()))

    def test_open_missing_image_raises(self):
        with self.assertRaises(OSError):
            self.workbench.open_image(self.temp_path / "missing.png")
        self.assertIsNone(self.workbench.image)

    def test_open_image_with_unwritable_preferences(self):
        blocker = self.temp_path / "blocker"
        blocker.write_text("not a directory")
        workbench = FilterWorkbench(PreferencesStore(blocker / "preferences.json"))

        with self.assertLogs("FT_Libs.WorkbenchLib.workbench", level="WARNING") as logs:
            image = workbench.open_image(self.image_path)

        self.assertIs(workbench.image, image)
        self.assertEqual(workbench.last_file, self.image_path.absolute())
        self.assertIn("last opened file", logs.output[0])

    def test_save_image_with_unwritable_preferences(self):
        blocker = self.temp_path / "blocker"
        blocker.write_text("not a directory")
        workbench = FilterWorkbench(PreferencesStore(blocker / "preferences.json"))
        workbench.set_image(np.zeros((2, 2), dtype=np.uint8))
        target = self.temp_path / "out.png"

        with self.assertLogs("FT_Libs.WorkbenchLib.workbench", level="WARNING"):
            saved = workbench.save_image(target)

        self.assertEqual(saved, target.absolute())
        self.assertTrue(target.exists())

    def test_apply_filter_works_on_copy(self):
        original = self.workbench.open_image(self.image_path)
        snapshot = original.copy()

        result = self.workbench.apply_filter(FillChannel(2))

        self.assertIsNot(result, original)
        np.testing.assert_array_equal(original, snapshot)
        self.assertTrue(np.all(result[..., 2] == 0))
        self.assertIs(self.workbench.image, result)
        self.assertIs(self.workbench.undo_image, original)

    def test_apply_color_range_keeps_only_red(self):
        self.workbench.open_image(self.image_path)
        keep_red = ColorRangeFilter([0, 0, 200], [50, 50, 255], keep=True)

        result = self.workbench.apply_filter(keep_red)

        self.assertEqual(result[0, 0].tolist(), [0, 0, 255])
        self.assertEqual(result[0, 3].tolist(), [0, 0, 0])

    def test_apply_without_image_raises(self):
        with self.assertRaises(RuntimeError):
            self.workbench.apply_filter(GrayScale())

    def test_undo_restores_previous_image(self):
        original = self.workbench.open_image(self.image_path)
        filtered = self.workbench.apply_filter(GrayScale())

        self.assertTrue(self.workbench.undo())
        self.assertIs(self.workbench.image, original)

        # A second undo swaps back, there is only one level
        self.assertTrue(self.workbench.undo())
        self.assertIs(self.workbench.image, filtered)

    def test_undo_without_history(self):
        self.assertFalse(self.workbench.undo())

    def test_revert_returns_to_loaded_image(self):
        original = self.workbench.open_image(self.image_path)
        self.workbench.apply_filter(GrayScale())
        self.workbench.apply_filter(FillChannel(0))

        self.assertTrue(self.workbench.revert())
        self.assertIs(self.workbench.image, original)

    def test_revert_without_loaded_image(self):
        self.assertFalse(self.workbench.revert())

    def test_save_without_image_returns_none(self):
        self.assertIsNone(self.workbench.save_image(self.temp_path / "out.png"))

    def test_save_to_explicit_path(self):
        self.workbench.open_image(self.image_path)
        self.workbench.apply_filter(GrayScale())
        target = self.temp_path / "gray.png"

        saved = self.workbench.save_image(target)

        self.assertEqual(saved, target.absolute())
        with Image.open(target) as written:
            self.assertEqual(written.mode, "L")
            self.assertEqual(written.size, (4, 2))
        self.assertEqual(self.preferences.get_last_saved_file(), str(target.absolute()))

    def test_save_defaults_to_last_saved_file(self):
        self.workbench.open_image(self.image_path)
        target = self.temp_path / "first.png"
        self.workbench.save_image(target)
        target.unlink()

        saved = self.workbench.save_image()

        self.assertEqual(saved, target.absolute())
        self.assertTrue(target.exists())

    def test_save_defaults_to_last_opened_file(self):
        self.workbench.open_image(self.image_path)

        saved = self.workbench.save_image()

        self.assertEqual(saved, self.image_path.absolute())

    def test_save_without_any_path_raises(self):
        self.workbench.set_image(np.zeros((2, 2), dtype=np.uint8))

        with self.assertRaises(ValueError):
            self.workbench.save_image()

    def test_restore_last_opened(self):
        self.preferences.set_last_opened_file(str(self.image_path))

        image = self.workbench.restore_last_opened()

        self.assertIsNotNone(image)
        self.assertEqual(image.shape, (2, 4, 3))

    def test_restore_last_opened_missing_file(self):
        self.preferences.set_last_opened_file(str(self.temp_path / "gone.png"))

        self.assertIsNone(self.workbench.restore_last_opened())
        self.assertIsNone(self.workbench.image)

    def test_restore_last_opened_without_preference(self):
        self.assertIsNone(self.workbench.restore_last_opened())


class TestGrabImage(unittest.TestCase):
    """Test grabbing images over HTTP with requests mocked out."""

    def setUp(self):
        self.temp_dir = tempfile.TemporaryDirectory()
        self.temp_path = Path(self.temp_dir.name)
        self.preferences = PreferencesStore(self.temp_path / "preferences.json")
        self.workbench = FilterWorkbench(self.preferences)

        png_path = self.temp_path / "camera.png"
        Image.new("RGB", (3, 2), color=(0, 255, 0)).save(png_path)
        self.png_bytes = png_path.read_bytes()

    def tearDown(self):
        self.temp_dir.cleanup()

    def _response(self, content):
        response = Mock()
        response.content = content
        response.raise_for_status.return_value = None
        return response

    @patch("FT_Libs.WorkbenchLib.image_io.requests.get")
    def test_grab_uses_preference_url(self, mock_get):
        mock_get.return_value = self._response(self.png_bytes)
        self.preferences.set_image_url("http://camera.local/image.jpg")

        image = self.workbench.grab_image()

        mock_get.assert_called_once()
        self.assertEqual(mock_get.call_args[0][0], "http://camera.local/image.jpg")
        self.assertEqual(image.shape, (2, 3, 3))
        self.assertEqual(image[0, 0].tolist(), [0, 255, 0])
        self.assertIs(self.workbench.last_loaded_image, image)

    @patch("FT_Libs.WorkbenchLib.image_io.requests.get")
    def test_grab_explicit_url(self, mock_get):
        mock_get.return_value = self._response(self.png_bytes)

        self.workbench.grab_image("http://other/snap.png")

        self.assertEqual(mock_get.call_args[0][0], "http://other/snap.png")

    @patch("FT_Libs.WorkbenchLib.image_io.requests.get")
    def test_grab_network_error_raises_os_error(self, mock_get):
        mock_get.side_effect = requests.ConnectionError("unreachable")

        with self.assertRaises(OSError):
            self.workbench.grab_image("http://camera.local/image.jpg")
        self.assertIsNone(self.workbench.image)

    @patch("FT_Libs.WorkbenchLib.image_io.requests.get")
    def test_grab_non_image_raises_os_error(self, mock_get):
        mock_get.return_value = self._response(b"<html>not an image</html>")

        with self.assertRaises(OSError):
            self.workbench.grab_image("http://camera.local/image.jpg")


if __name__ == "__main__":
    unittest.main()
