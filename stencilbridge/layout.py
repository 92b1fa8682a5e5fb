from typing import Dict, NamedTuple, Optional, Tuple

import numpy as np
from PIL import Image, ImageFilter

from .raster import round_half_up

PAPER_MM: Dict[str, Tuple[float, float]] = {
    "a4": (210, 297),
    "letter": (215.9, 279.4),
}
DEFAULT_DPI = 300
MIN_DPI = 72
MAX_DPI = 600


class Placement(NamedTuple):
    x: int
    y: int
    w: int
    h: int


def mm_to_px(mm: float, dpi: int) -> int:
    return round_half_up(mm / 25.4 * dpi)


def clamp_dpi(dpi: Optional[int]) -> int:
    return max(MIN_DPI, min(MAX_DPI, dpi or DEFAULT_DPI))


def paper_pixels(paper: str, dpi: int, orientation: str = "portrait") -> Tuple[int, int]:
    """Canvas size (width, height) in pixels for a paper format; unknown formats use A4."""
    dpi = clamp_dpi(dpi)
    w_mm, h_mm = PAPER_MM.get(paper, PAPER_MM["a4"])
    width = mm_to_px(w_mm, dpi)
    height = mm_to_px(h_mm, dpi)
    if orientation == "landscape":
        width, height = height, width
    return width, height


def fit_contain(src_w: int, src_h: int, dst_w: int, dst_h: int) -> Placement:
    """Largest aspect-preserving box for the source, centred in the destination."""
    ratio = min(dst_w / src_w, dst_h / src_h)
    w = round_half_up(src_w * ratio)
    h = round_half_up(src_h * ratio)
    x = round_half_up((dst_w - w) / 2)
    y = round_half_up((dst_h - h) / 2)
    return Placement(x, y, w, h)


def compose_on_paper(image: Image.Image, width: int, height: int, blur: float = 0) -> np.ndarray:
    """Grayscale canvas of the given size: white paper with the image fitted and centred."""
    canvas = Image.new("L", (width, height), 255)
    fit = fit_contain(image.width, image.height, width, height)
    gray = image.convert("L")
    if (fit.w, fit.h) != gray.size:
        gray = gray.resize((max(1, fit.w), max(1, fit.h)), Image.LANCZOS)
    canvas.paste(gray, (fit.x, fit.y))
    if blur > 0:
        canvas = canvas.filter(ImageFilter.GaussianBlur(blur))
    return np.array(canvas)
