"""CHIP-8 rendering utilities for visualization."""

from typing import Tuple, Union

import jax.numpy as jnp
import numpy as np
from PIL import Image

from vipax.peripherals import Display


def display_to_rgb(
    display: Union[Display, jnp.ndarray],
    scale: int = 10,
    on_color: Tuple[int, int, int] = (255, 255, 255),
    off_color: Tuple[int, int, int] = (0, 0, 0),
) -> np.ndarray:
    """Convert CHIP-8 boolean display to RGB array with optional upscaling.

    Args:
        display: Display, or boolean array of shape (width, height)
        scale: Upscaling factor, each pixel becomes a scale x scale block
        on_color: RGB color for "on" pixels (default: white)
        off_color: RGB color for "off" pixels (default: black)

    Returns:
        RGB array of shape (height*scale, width*scale, 3) with uint8 values
    """
    if scale < 1:
        raise ValueError(f"scale must be positive, got {scale}")
    if isinstance(display, Display):
        display = display.pixels
    pixels = np.array(display, dtype=np.bool_)

    # (width, height) framebuffer -> (height, width) image rows
    pixels = pixels.T
    height, width = pixels.shape

    rgb_frame = np.zeros((height, width, 3), dtype=np.uint8)

    rgb_frame[pixels] = on_color
    rgb_frame[~pixels] = off_color

    # Apply upscaling using nearest neighbor interpolation
    if scale > 1:
        rgb_frame = np.repeat(np.repeat(rgb_frame, scale, axis=0), scale, axis=1)

    return rgb_frame


def create_color_scheme(
    scheme: str = "white",
) -> Tuple[Tuple[int, int, int], Tuple[int, int, int]]:
    """Get predefined color schemes for CHIP-8 rendering.

    Args:
        scheme: Color scheme name ("white", "classic", "amber", "blue", "retro")

    Returns:
        Tuple of (on_color, off_color) as RGB tuples
    """
    schemes = {
        "white": ((255, 255, 255), (0, 0, 0)),  # White on black
        "classic": ((0, 255, 0), (0, 0, 0)),  # Green on black
        "amber": ((255, 176, 0), (0, 0, 0)),  # Amber on black
        "blue": ((0, 255, 255), (0, 0, 64)),  # Cyan on dark blue
        "retro": ((255, 255, 0), (64, 0, 64)),  # Yellow on purple
    }

    if scheme not in schemes:
        raise ValueError(
            f"Unknown color scheme '{scheme}'. Available: {list(schemes.keys())}"
        )

    return schemes[scheme]


def save_frame(
    display: Union[Display, jnp.ndarray],
    filename: str,
    scale: int = 10,
    color_scheme: str = "white",
) -> None:
    """Save the current framebuffer as an image file (PNG, GIF, ...)."""
    on_color, off_color = create_color_scheme(color_scheme)
    frame = display_to_rgb(display, scale, on_color, off_color)
    Image.fromarray(frame).save(filename)
