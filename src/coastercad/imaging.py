"""Image to height field conversion.

Only the thin adapter the relief builder needs: load, reduce to
luminance, optionally resize/blur/invert, normalise to ``[0, 1]`` and
flip so that row 0 is the bottom of the picture.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

import numpy as np
from PIL import Image, ImageFilter

from coastercad.relief import HeightField

logger = logging.getLogger(__name__)

LUMA_WEIGHTS = (0.299, 0.587, 0.114)


def luminance(rgb: np.ndarray) -> np.ndarray:
    """Weighted grey level of an ``(h, w, 3)`` array, scaled to ``[0, 1]``."""

    rgb = np.asarray(rgb, dtype=np.float64)
    return (rgb[..., 0] * LUMA_WEIGHTS[0] +
            rgb[..., 1] * LUMA_WEIGHTS[1] +
            rgb[..., 2] * LUMA_WEIGHTS[2]) / 255.0


def height_field_from_array(rgb: np.ndarray, invert: bool = False) -> HeightField:
    """Build a field from image-ordered RGB data (row 0 at the top)."""

    values = np.clip(luminance(rgb), 0.0, 1.0)
    if invert:
        values = 1.0 - values
    return HeightField(np.flipud(values))


def height_field_from_image(path, resolution: Optional[int] = None, invert: bool = False,
                            blur: float = 0.0) -> HeightField:
    """Load ``path`` with Pillow and convert it to a :class:`HeightField`.

    ``resolution`` resizes to a ``resolution x resolution`` square first.
    ``blur`` is a Gaussian radius in pixels applied after resizing.
    """

    if not os.path.exists(path):
        raise FileNotFoundError(f"Image file not found: {path}")

    with Image.open(path) as img:
        img = img.convert('RGB')
        logger.info("Loaded image %s (%dx%d)", path, img.width, img.height)
        if resolution:
            img = img.resize((resolution, resolution))
        if blur > 0:
            img = img.filter(ImageFilter.GaussianBlur(blur))
        rgb = np.array(img)

    field = height_field_from_array(rgb, invert=invert)
    logger.debug("Height field %dx%d, range %.3f..%.3f",
                 field.width, field.height, float(field.data.min()), float(field.data.max()))
    return field


__all__ = ['luminance', 'height_field_from_array', 'height_field_from_image', 'LUMA_WEIGHTS']
