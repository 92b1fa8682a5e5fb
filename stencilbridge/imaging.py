from pathlib import Path

import numpy as np
from PIL import Image


def load_image(path: Path) -> Image.Image:
    """Open an image as RGBA with fully transparent pixels turned white."""
    image = Image.open(path).convert("RGBA")
    paper = Image.new("RGBA", image.size, (255, 255, 255, 255))
    return Image.alpha_composite(paper, image)


def save_rgba(path: Path, rgba: np.ndarray) -> None:
    Image.fromarray(rgba).save(path)


def _check_rgba(rgba: np.ndarray) -> None:
    if rgba.ndim != 3 or rgba.shape[2] != 4:
        raise ValueError(f"Expected an RGBA array of shape (height, width, 4), got {rgba.shape}")


def mask_from_rgba(rgba: np.ndarray, ink_value: int = 255) -> np.ndarray:
    """Ink where the first channel equals ink_value."""
    _check_rgba(rgba)
    return rgba[:, :, 0] == ink_value


def mask_to_rgba(mask: np.ndarray, ink_value: int = 255) -> np.ndarray:
    """Encode a bool mask as opaque RGBA: ink_value grey for ink, its complement elsewhere."""
    if mask.ndim != 2:
        raise ValueError(f"Expected a 2-D mask, got shape {mask.shape}")
    height, width = mask.shape
    rgba = np.empty((height, width, 4), dtype=np.uint8)
    rgba[:, :, :3] = np.where(mask, ink_value, 255 - ink_value).astype(np.uint8)[:, :, None]
    rgba[:, :, 3] = 255
    return rgba


def threshold(gray: np.ndarray, level: int = 128, invert: bool = False) -> np.ndarray:
    """Binarize a grayscale canvas into opaque black/white RGBA.

    Dark pixels (below level, or at/above it when inverted) become black cut
    openings; everything else is white stencil material.
    """
    dark = gray >= level if invert else gray < level
    return mask_to_rgba(~dark, ink_value=255)
