"""
Image data models for Filter Tool.

Images are numpy arrays laid out the way OpenCV lays them out: ``(rows, cols)``
for single channel images and ``(rows, cols, channels)`` otherwise, with
multi-channel images stored in BGR order. Pillow images are accepted where
noted.

Type Aliases:
    ImageArray: An 8-bit numpy image buffer
    ChannelValues: One integer per channel (range limits, pixel values)

Functions:
    channel_count: Number of channels in an image handle
    image_dimensions: (rows, cols) of an image handle
"""

from typing import Any, Sequence, Tuple

import numpy as np
from PIL import Image

ImageArray = np.ndarray
ChannelValues = Sequence[int]


def channel_count(image: Any) -> int:
    """
    Get the number of channels of an image handle.

    Args:
        image: numpy image array or PIL Image

    Returns:
        1 for 2-D arrays, the last dimension for 3-D arrays, the band count
        for PIL images and 0 for anything else
    """
    if isinstance(image, np.ndarray):
        if image.ndim == 2:
            return 1
        if image.ndim == 3:
            return int(image.shape[2])
        return 0
    if isinstance(image, Image.Image):
        return len(image.getbands())
    return 0


def image_dimensions(image: Any) -> Tuple[int, int]:
    """Get (rows, cols) of an image handle."""
    if isinstance(image, Image.Image):
        width, height = image.size
        return height, width
    return int(image.shape[0]), int(image.shape[1])
