"""
Working image management for Filter Tool.

The workbench holds the image being experimented on, exactly one previous
image for undo, and the last image that was opened or grabbed for revert.
Filters are always applied to a copy of the current image.

Classes:
    FilterWorkbench: Open/grab/save images and apply filters with undo/revert
"""

import logging
from pathlib import Path
from typing import Any, Optional

import requests

from FT_Libs.constants import GRAB_TIMEOUT_SECONDS
from FT_Libs.FiltersLib.image_models import ImageArray
from FT_Libs.WorkbenchLib import image_io
from FT_Libs.WorkbenchLib.preferences_store import PreferencesStore

logger = logging.getLogger(__name__)


class FilterWorkbench:
    """
    Headless image workbench.

    Example:
        >>> workbench = FilterWorkbench(PreferencesStore(prefs_path))
        >>> workbench.open_image(Path("target.png"))
        >>> workbench.apply_filter(Blur(3, 3))
        >>> workbench.undo()
        >>> workbench.save_image(Path("result.png"))
    """

    def __init__(self, preferences: Optional[PreferencesStore] = None) -> None:
        self.preferences = preferences if preferences is not None else PreferencesStore()
        self.image: Optional[ImageArray] = None
        self.undo_image: Optional[ImageArray] = None
        self.last_loaded_image: Optional[ImageArray] = None
        self.last_file: Optional[Path] = None

    @property
    def can_process(self) -> bool:
        return self.image is not None

    def set_image(self, image: Optional[ImageArray]) -> None:
        """Install a new current image; the previous one becomes the undo image."""
        self.undo_image = self.image
        self.image = image

    def apply_filter(self, image_filter: Any) -> ImageArray:
        """
        Run a filter on a copy of the current image and install the result.

        Args:
            image_filter: Any object with a ``process(image) -> image`` method

        Returns:
            The new current image

        Raises:
            RuntimeError: If no image is loaded
        """
        if self.image is None:
            raise RuntimeError("No image loaded to process")

        result = image_filter.process(self.image.copy())
        self.set_image(result)
        logger.debug(f"Applied {type(image_filter).__name__}")
        return result

    def undo(self) -> bool:
        """Swap back to the previous image. Returns False when there is none."""
        if self.undo_image is None:
            return False
        self.set_image(self.undo_image)
        return True

    def revert(self) -> bool:
        """Return to the last opened or grabbed image. Returns False when there is none."""
        if self.last_loaded_image is None:
            return False
        self.set_image(self.last_loaded_image)
        return True

    def open_image(self, path: Path) -> ImageArray:
        """
        Load an image file and make it the current image.

        Raises:
            OSError: If the file cannot be opened
        """
        path = Path(path).absolute()
        image = image_io.load_image(path)
        self.last_file = path
        self.last_loaded_image = image
        self.set_image(image)
        try:
            self.preferences.set_last_opened_file(str(path))
        except OSError as exc:
            logger.warning(f"Could not remember last opened file {path}: {exc}")
        return image

    def restore_last_opened(self) -> Optional[ImageArray]:
        """Reopen the file that was open last time, if it still exists."""
        last_opened = self.preferences.get_last_opened_file()
        if last_opened is None:
            return None
        path = Path(last_opened)
        if not path.is_file():
            logger.warning(f"Last opened image no longer exists: {path}")
            return None
        return self.open_image(path)

    def grab_image(self, url: Optional[str] = None, timeout: float = GRAB_TIMEOUT_SECONDS) -> ImageArray:
        """
        Download an image and make it the current image.

        Args:
            url: Image URL; defaults to the URL stored in preferences
            timeout: Request timeout in seconds

        Raises:
            OSError: If the image cannot be downloaded or decoded
        """
        url = url or self.preferences.get_image_url()
        try:
            image = image_io.fetch_image(url, timeout=timeout)
        except requests.RequestException as exc:
            logger.error(f"Failed to grab image from {url}: {exc}")
            raise OSError(f"Failed to grab image from {url}") from exc

        self.last_loaded_image = image
        self.set_image(image)
        return image

    def save_image(self, path: Optional[Path] = None) -> Optional[Path]:
        """
        Save the current image.

        Args:
            path: Target file; defaults to the last saved file, then the
                last opened file

        Returns:
            The path written, or None when there is no image to save

        Raises:
            ValueError: If no target path is known
            OSError: If the file cannot be written
        """
        if self.image is None:
            return None

        if path is None:
            last_saved = self.preferences.get_last_saved_file()
            path = Path(last_saved) if last_saved is not None else self.last_file
        if path is None:
            raise ValueError("No file name given to save the image to")

        path = Path(path).absolute()
        image_io.save_image(self.image, path)
        try:
            self.preferences.set_last_saved_file(str(path))
        except OSError as exc:
            logger.warning(f"Could not remember last saved file {path}: {exc}")
        return path
