"""
Image loading, grabbing and saving for Filter Tool.

Decoding and encoding are done by Pillow. Loaded images are converted to
three channel BGR numpy arrays, the layout the OpenCV filters expect.

Functions:
    load_image: Read an image file into a BGR array
    fetch_image: Download an image (e.g. a camera snapshot) into a BGR array
    to_pil_image: Convert a 1, 3 or 4 channel array into a PIL Image
    save_image: Write an array to disk
"""

import io
import logging
from pathlib import Path
from typing import Optional

import numpy as np
import requests
from PIL import Image, UnidentifiedImageError

from FT_Libs.constants import DEFAULT_OUTPUT_FORMAT, GRAB_TIMEOUT_SECONDS
from FT_Libs.FiltersLib.image_models import ImageArray, channel_count

logger = logging.getLogger(__name__)


def _pil_to_bgr(pil_image) -> ImageArray:
    rgb = np.asarray(pil_image.convert("RGB"), dtype=np.uint8)
    return np.ascontiguousarray(rgb[..., ::-1])


def load_image(path: Path) -> ImageArray:
    """
    Load an image file as a three channel BGR array.

    Args:
        path: Image file to read

    Returns:
        uint8 array of shape (rows, cols, 3)

    Raises:
        OSError: If the file is missing or cannot be decoded
    """
    path = Path(path)
    try:
        with Image.open(path) as pil_image:
            image = _pil_to_bgr(pil_image)
    except (OSError, UnidentifiedImageError) as exc:
        raise OSError(f"Cannot open image file: {path.absolute()}") from exc

    logger.info(f"Loaded {path} ({image.shape[1]}x{image.shape[0]})")
    return image


def fetch_image(url: str, timeout: float = GRAB_TIMEOUT_SECONDS) -> ImageArray:
    """
    Download an image and decode it as a three channel BGR array.

    Raises:
        requests.RequestException: If the request fails or returns an error status
        OSError: If the response body is not a decodable image
    """
    response = requests.get(url, timeout=timeout)
    response.raise_for_status()
    try:
        with Image.open(io.BytesIO(response.content)) as pil_image:
            image = _pil_to_bgr(pil_image)
    except UnidentifiedImageError as exc:
        raise OSError(f"Response from {url} is not an image") from exc

    logger.info(f"Grabbed image from {url} ({image.shape[1]}x{image.shape[0]})")
    return image


def to_pil_image(image: ImageArray) -> Optional["Image.Image"]:
    """
    Convert an 8-bit array into a PIL Image.

    Returns:
        An 'L', 'RGB' or 'RGBA' image, or None when the array is not an
        8-bit 1, 3 or 4 channel image
    """
    if not isinstance(image, np.ndarray) or image.dtype != np.uint8:
        return None

    nchannels = channel_count(image)
    if nchannels == 1:
        pixels = image if image.ndim == 2 else image[..., 0]
        return Image.fromarray(np.ascontiguousarray(pixels))
    if nchannels == 3:
        return Image.fromarray(np.ascontiguousarray(image[..., ::-1]))
    if nchannels == 4:
        return Image.fromarray(np.ascontiguousarray(image[..., [2, 1, 0, 3]]))
    return None


def save_image(image: ImageArray, path: Path) -> Path:
    """
    Save an image array to disk.

    The format is taken from the file suffix; files without a suffix are
    written as PNG.

    Raises:
        ValueError: If the array cannot be represented as an image file
        OSError: If the file cannot be written
    """
    path = Path(path)
    pil_image = to_pil_image(image)
    if pil_image is None:
        raise ValueError(
            f"Cannot save image of shape {getattr(image, 'shape', None)} "
            f"and type {getattr(image, 'dtype', type(image))}"
        )

    image_format = None if path.suffix else DEFAULT_OUTPUT_FORMAT
    pil_image.save(path, format=image_format)
    logger.info(f"Saved image to {path}")
    return path
