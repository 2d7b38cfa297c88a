# renderer/output.py
import math
from pathlib import Path
from typing import Tuple, Union

import numpy as np
from PIL import Image

from core.errors import RenderWriteError
from core.vector import Vector3
from renderer.config import DrawingMode


def encode_color(color: Vector3, mode: DrawingMode) -> Tuple[int, int, int]:
    """
    Convert an accumulated color to 8-bit channels.

    Colors and normals are scaled by 255 and truncated. Sampled colors are
    averaged over the sample count, gamma corrected with gamma 2 and clamped
    to 0.999 before scaling, so they never reach 256.
    """
    if mode.is_sampled:
        scale = 1.0 / mode.samples
        channels = tuple(
            int(min(math.sqrt(max(c * scale, 0.0)), 0.999) * 255)
            for c in color
        )
    else:
        channels = tuple(int(c * 255.0) for c in color)

    for c in channels:
        if c < 0 or c > 255:
            raise AssertionError(f"Color value out of range: {channels} from {color!r}")
    return channels


def _write(output, data: bytes):
    try:
        output.write(data)
    except OSError as e:
        raise RenderWriteError(f"Failed to write to PPM output: {e}") from e


def write_header(output, width: int, height: int):
    """Writes the plain PPM (P3) header."""
    _write(output, f"P3\n{width} {height}\n255\n".encode("ascii"))


def write_color(output, rgb: Tuple[int, int, int]):
    _write(output, f"{rgb[0]} {rgb[1]} {rgb[2]}\n".encode("ascii"))


def write_ppm(output, image: np.ndarray):
    """Writes an encoded (height, width, 3) uint8 image as a P3 stream, top row first."""
    height, width = image.shape[:2]
    write_header(output, width, height)
    for row in image:
        _write(output, "".join(f"{r} {g} {b}\n" for r, g, b in row.tolist()).encode("ascii"))


def save_image(image: np.ndarray, path: Union[str, Path]):
    """
    Saves an encoded (height, width, 3) uint8 image with Pillow. The format
    follows the file extension; .ppm is written as plain-text P3.
    """
    path = Path(path)
    try:
        if path.suffix.lower() == ".ppm":
            with open(path, "wb") as f:
                write_ppm(f, image)
        else:
            Image.fromarray(np.ascontiguousarray(image, dtype=np.uint8)).save(path)
    except (OSError, ValueError) as e:
        raise RenderWriteError(f"Failed to save image to {path}: {e}") from e
