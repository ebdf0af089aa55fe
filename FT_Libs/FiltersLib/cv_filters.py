"""
OpenCV backed image filters for Filter Tool.

Each filter is a small class exposing ``process(image) -> image``, the same
call the color range filter answers, so the workbench and the edit menu can
hold any of them. These filters may return a new array instead of the one
passed in; the workbench always hands them a disposable copy.

Classes:
    ColorSpace: Color space conversion (BGR/RGB <-> HSV/XYZ)
    Blur: Normalized box blur
    Erode: Morphological erosion with a square element
    Dilate: Morphological dilation with a square element
    ContrastBrightness: Linear gain/bias adjustment with saturation
    FillChannel: Overwrite one channel with a constant
    GrayScale: Convert to a single channel gray image
    BlackWhite: Binary threshold of the gray image
    Contours: Outline of the shapes found in the thresholded image
"""

import logging

import cv2
import numpy as np

from FT_Libs.constants import CHANNEL_MAX_VALUE, CHANNEL_MIN_VALUE, DEFAULT_THRESHOLD
from FT_Libs.FiltersLib.image_models import ImageArray, channel_count

logger = logging.getLogger(__name__)


def _to_gray(image: ImageArray) -> ImageArray:
    nchannels = channel_count(image)
    if nchannels == 3:
        return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)
    if nchannels == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return image


def _check_size(size: int, name: str) -> int:
    size = int(size)
    if size < 1:
        raise ValueError(f"{name} must be at least 1, got {size}")
    return size


class ColorSpace:
    """Convert a three channel image from one color space to another."""

    def __init__(self, code: int, name: str = "") -> None:
        self.code = code
        self.name = name

    def process(self, image: ImageArray) -> ImageArray:
        if channel_count(image) != 3:
            logger.debug(f"Skipping {self.name or 'color space'} conversion of non 3-channel image")
            return image
        return cv2.cvtColor(image, self.code)

    @classmethod
    def bgr_to_hsv(cls) -> "ColorSpace":
        return cls(cv2.COLOR_BGR2HSV, "BGR->HSV")

    @classmethod
    def hsv_to_bgr(cls) -> "ColorSpace":
        return cls(cv2.COLOR_HSV2BGR, "HSV->BGR")

    @classmethod
    def rgb_to_hsv(cls) -> "ColorSpace":
        return cls(cv2.COLOR_RGB2HSV, "RGB->HSV")

    @classmethod
    def hsv_to_rgb(cls) -> "ColorSpace":
        return cls(cv2.COLOR_HSV2RGB, "HSV->RGB")

    @classmethod
    def bgr_to_xyz(cls) -> "ColorSpace":
        return cls(cv2.COLOR_BGR2XYZ, "BGR->XYZ")

    @classmethod
    def xyz_to_bgr(cls) -> "ColorSpace":
        return cls(cv2.COLOR_XYZ2BGR, "XYZ->BGR")

    @classmethod
    def rgb_to_xyz(cls) -> "ColorSpace":
        return cls(cv2.COLOR_RGB2XYZ, "RGB->XYZ")

    @classmethod
    def xyz_to_rgb(cls) -> "ColorSpace":
        return cls(cv2.COLOR_XYZ2RGB, "XYZ->RGB")


class Blur:
    """Box blur over a width x height neighborhood."""

    def __init__(self, width: int, height: int) -> None:
        self.width = _check_size(width, "Blur width")
        self.height = _check_size(height, "Blur height")

    def process(self, image: ImageArray) -> ImageArray:
        return cv2.blur(image, (self.width, self.height))


class Erode:
    """Erode bright regions using a size x size rectangle."""

    def __init__(self, size: int) -> None:
        self.size = _check_size(size, "Erode size")

    def process(self, image: ImageArray) -> ImageArray:
        kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (self.size, self.size))
        return cv2.erode(image, kernel)


class Dilate:
    """Grow bright regions using a size x size rectangle."""

    def __init__(self, size: int) -> None:
        self.size = _check_size(size, "Dilate size")

    def process(self, image: ImageArray) -> ImageArray:
        kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (self.size, self.size))
        return cv2.dilate(image, kernel)


class ContrastBrightness:
    """
    Linear adjustment ``gain * value + bias`` of every sample.

    Results are rounded and saturated into 0-255 and written back into the
    image passed in.

    Args:
        gain: Contrast multiplier (1.0 leaves contrast alone)
        bias: Brightness offset added after the gain (0 leaves brightness alone)
    """

    def __init__(self, gain: float = 1.0, bias: float = 0.0) -> None:
        self.gain = float(gain)
        self.bias = float(bias)

    def process(self, image: ImageArray) -> ImageArray:
        adjusted = np.rint(image.astype(np.float64) * self.gain + self.bias)
        image[...] = np.clip(adjusted, CHANNEL_MIN_VALUE, CHANNEL_MAX_VALUE).astype(image.dtype)
        return image


class FillChannel:
    """Set every sample of one channel to a constant (0 removes the channel)."""

    def __init__(self, channel: int, value: int = 0) -> None:
        self.channel = int(channel)
        self.value = int(max(CHANNEL_MIN_VALUE, min(CHANNEL_MAX_VALUE, value)))

    def process(self, image: ImageArray) -> ImageArray:
        nchannels = channel_count(image)
        if not 0 <= self.channel < nchannels:
            logger.debug(f"Channel {self.channel} not present in {nchannels} channel image")
            return image
        if image.ndim == 2:
            image[...] = self.value
        else:
            image[..., self.channel] = self.value
        return image


class GrayScale:
    def process(self, image: ImageArray) -> ImageArray:
        return _to_gray(image)


class BlackWhite:
    """Gray scale followed by a binary threshold (above threshold -> 255, else 0)."""

    def __init__(self, threshold: int = DEFAULT_THRESHOLD) -> None:
        self.threshold = int(threshold)

    def process(self, image: ImageArray) -> ImageArray:
        _, binary = cv2.threshold(_to_gray(image), self.threshold, CHANNEL_MAX_VALUE, cv2.THRESH_BINARY)
        return binary


class Contours:
    """
    Draw the outer contours of the shapes in an image.

    The gray image is thresholded, external contours are located and drawn
    in white on a black image with the same shape as the input.
    """

    def __init__(self, threshold: int = DEFAULT_THRESHOLD, thickness: int = 1) -> None:
        self.threshold = int(threshold)
        self.thickness = _check_size(thickness, "Contour thickness")

    def process(self, image: ImageArray) -> ImageArray:
        _, binary = cv2.threshold(_to_gray(image), self.threshold, CHANNEL_MAX_VALUE, cv2.THRESH_BINARY)
        # OpenCV 3 returns (image, contours, hierarchy), OpenCV 4 (contours, hierarchy)
        contours = cv2.findContours(binary, cv2.RETR_EXTERNAL, cv2.CHAIN_APPROX_SIMPLE)[-2]

        canvas = np.zeros_like(image)
        color = (CHANNEL_MAX_VALUE,) * max(1, channel_count(image))
        if contours:
            cv2.drawContours(canvas, contours, -1, color, self.thickness)
        logger.debug(f"Found {len(contours)} contour(s)")
        return canvas
