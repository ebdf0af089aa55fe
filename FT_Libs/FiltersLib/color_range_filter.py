"""
Color range keep/remove filter for Filter Tool.

This filter is useful if you are only interested in pixels having colors
within a certain range. It is used in the following manner:

1. Create two sequences holding the minimum and maximum values you are
   interested in for each channel.
2. Construct a ColorRangeFilter passing the ranges and whether you want to
   keep or remove the pixels inside the range.
3. Call ``process`` on a disposable working copy of your image.

Pixels that are rejected have every channel cleared to 0. The filter modifies
the image passed in and returns that same image; callers that need the
original must copy it first.

Classes:
    InvalidConfiguration: Raised for empty or mismatched range sequences
    ColorRangeSettings: Immutable (minimums, maximums, keep) snapshot
    ColorRangeFilter: The filter with its change listener list
"""

import logging
import threading
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple

import numpy as np
from PIL import Image

from FT_Libs.FiltersLib.image_models import ChannelValues, channel_count, image_dimensions

logger = logging.getLogger(__name__)

ChangeListener = Callable[[], None]


class InvalidConfiguration(ValueError):
    """Color range sequences are empty or differ in length."""


@dataclass(frozen=True)
class ColorRangeSettings:
    minimums: Tuple[int, ...]
    maximums: Tuple[int, ...]
    keep: bool = True

    @classmethod
    def create(
        cls,
        minimums: ChannelValues,
        maximums: ChannelValues,
        keep: bool = True,
    ) -> "ColorRangeSettings":
        """
        Build a validated settings snapshot.

        Args:
            minimums: Lower limit for each channel (at least one entry)
            maximums: Upper limit for each channel (same length as minimums)
            keep: True keeps in-range pixels, False keeps out-of-range pixels

        Raises:
            InvalidConfiguration: If the sequences are empty or differ in length
        """
        lows = tuple(int(value) for value in minimums)
        highs = tuple(int(value) for value in maximums)
        if len(lows) != len(highs) or len(lows) == 0:
            raise InvalidConfiguration(
                "Color range sequences must have non-zero matching lengths "
                f"(got {len(lows)} minimums and {len(highs)} maximums)"
            )
        return cls(minimums=lows, maximums=highs, keep=bool(keep))

    @property
    def channels(self) -> int:
        return len(self.minimums)

    def contains(self, values: Sequence[int]) -> bool:
        """Check whether every channel value lies inside its inclusive range."""
        return all(
            low <= int(value) <= high
            for value, low, high in zip(values, self.minimums, self.maximums)
        )


class ColorRangeFilter:
    """
    Keeps or removes pixels whose channels all fall inside a range.

    The (minimums, maximums, keep) triple is held as one immutable snapshot
    that is swapped under a lock, so a ``process`` call running on another
    thread always sees a consistent configuration.

    Example:
        >>> color_range = ColorRangeFilter([100], [220], keep=True)
        >>> color_range.add_listener(refresh_preview)
        >>> color_range.process(working_copy)
    """

    def __init__(
        self,
        minimums: ChannelValues,
        maximums: ChannelValues,
        keep: bool = True,
    ) -> None:
        self._lock = threading.Lock()
        self._settings = ColorRangeSettings.create(minimums, maximums, keep)
        self._listeners: List[ChangeListener] = []

    @property
    def settings(self) -> ColorRangeSettings:
        return self._settings

    @property
    def minimums(self) -> Tuple[int, ...]:
        return self._settings.minimums

    @property
    def maximums(self) -> Tuple[int, ...]:
        return self._settings.maximums

    @property
    def keep(self) -> bool:
        return self._settings.keep

    def set_ranges(self, minimums: ChannelValues, maximums: ChannelValues) -> None:
        """
        Change the ranges used on each channel when processing images.

        Both sequences are replaced together. On failure the previous
        configuration stays in effect.

        Raises:
            InvalidConfiguration: If the sequences are empty or differ in length
        """
        with self._lock:
            settings = ColorRangeSettings.create(minimums, maximums, self._settings.keep)
            self._settings = settings
        logger.debug(f"Color range set to {settings.minimums} - {settings.maximums}")

    def set_keep(self, keep: bool) -> None:
        """Keep pixels inside the range (True) or outside the range (False)."""
        with self._lock:
            current = self._settings
            self._settings = ColorRangeSettings(current.minimums, current.maximums, bool(keep))

    def configure(
        self,
        minimums: ChannelValues,
        maximums: ChannelValues,
        keep: bool,
    ) -> None:
        """Replace ranges and keep flag in a single step."""
        settings = ColorRangeSettings.create(minimums, maximums, keep)
        with self._lock:
            self._settings = settings

    def process(self, image: Any) -> Any:
        """
        Apply the filter to an image in place.

        Args:
            image: numpy image array or 8-bit PIL Image. Its contents are
                modified.

        Returns:
            The same image object that was passed in. When its channel count
            does not match the configured range length it is returned
            untouched.
        """
        settings = self._settings
        nchannels = channel_count(image)
        if nchannels != settings.channels:
            logger.debug(
                f"Skipping color range: image has {nchannels} channel(s), "
                f"range has {settings.channels}"
            )
            return image

        if isinstance(image, Image.Image):
            return self._process_pil(image, settings)

        clear = self._clear_mask(image, settings)
        image[clear] = 0
        rows, cols = image_dimensions(image)
        logger.debug(f"Color range cleared {int(clear.sum())} of {rows * cols} pixels")
        return image

    def _process_pil(self, image: Any, settings: ColorRangeSettings) -> Any:
        clear = self._clear_mask(np.asarray(image), settings)
        if clear.any():
            fill = 0 if settings.channels == 1 else (0,) * settings.channels
            mask = Image.fromarray(clear.astype(np.uint8) * 255)
            image.paste(fill, mask=mask)
        return image

    @staticmethod
    def _clear_mask(pixels: np.ndarray, settings: ColorRangeSettings) -> np.ndarray:
        """Boolean (rows, cols) mask of the pixels whose channels must be cleared."""
        samples = pixels.view(np.uint8) if pixels.dtype == np.int8 else pixels
        if samples.ndim == 2:
            samples = samples[..., np.newaxis]

        lows = np.asarray(settings.minimums, dtype=np.int64)
        highs = np.asarray(settings.maximums, dtype=np.int64)
        in_range = np.all((samples >= lows) & (samples <= highs), axis=-1)
        return in_range != settings.keep

    def add_listener(self, listener: ChangeListener) -> None:
        """Register a callback to be notified when the settings are changed interactively."""
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: ChangeListener) -> None:
        """Unregister a callback. Unknown callbacks are ignored."""
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def notify_listeners(self) -> None:
        """Call every registered listener, in registration order."""
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            listener()
