from typing import Any, Tuple, cast

import numpy as np
from scipy import ndimage

_STRUCTURE_4CONN = np.array([[0, 1, 0], [1, 1, 1], [0, 1, 0]], dtype=bool)


def count_floating_regions(mask: np.ndarray) -> int:
    """Number of 4-connected ink regions that do not touch the canvas border."""
    result = ndimage.label(mask, structure=_STRUCTURE_4CONN)
    labeled, count = cast(Tuple[Any, int], result)
    if count == 0:
        return 0
    border_labels = set()
    border_labels.update(labeled[0, :].flatten())
    border_labels.update(labeled[-1, :].flatten())
    border_labels.update(labeled[:, 0].flatten())
    border_labels.update(labeled[:, -1].flatten())
    border_labels.discard(0)
    return count - len(border_labels)


def blend_overlay(base: np.ndarray, mask: np.ndarray, color: tuple, alpha: float = 0.75) -> np.ndarray:
    """Blend a semi-transparent color onto base image where mask is True."""
    result = base.copy().astype(np.float32)
    overlay_color = np.array(color[:3], dtype=np.float32)
    result[mask, :3] = result[mask, :3] * (1 - alpha) + overlay_color * alpha
    result[mask, 3] = 255
    return result.astype(np.uint8)
