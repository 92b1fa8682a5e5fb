import numpy as np
import pytest
from PIL import Image

from stencilbridge.imaging import load_image, mask_from_rgba, mask_to_rgba, save_rgba, threshold
from stencilbridge.layout import clamp_dpi, compose_on_paper, fit_contain, mm_to_px, paper_pixels
from stencilbridge.report import blend_overlay, count_floating_regions


def test_mask_rgba_encoding():
    mask = np.array([[True, False], [False, True]])
    rgba = mask_to_rgba(mask)
    assert rgba.dtype == np.uint8
    assert rgba[0, 0].tolist() == [255, 255, 255, 255]
    assert rgba[0, 1].tolist() == [0, 0, 0, 255]
    assert (mask_from_rgba(rgba) == mask).all()


def test_mask_rgba_with_black_ink():
    mask = np.array([[True, False]])
    rgba = mask_to_rgba(mask, ink_value=0)
    assert rgba[0, 0].tolist() == [0, 0, 0, 255]
    assert (mask_from_rgba(rgba, ink_value=0) == mask).all()


def test_rgba_shape_is_checked():
    with pytest.raises(ValueError):
        mask_from_rgba(np.zeros((4, 4, 3), dtype=np.uint8))
    with pytest.raises(ValueError):
        mask_to_rgba(np.zeros(16, dtype=bool))


def test_threshold_turns_dark_pixels_black():
    gray = np.array([[0, 127, 128, 255]], dtype=np.uint8)
    assert threshold(gray, 128)[0, :, 0].tolist() == [0, 0, 255, 255]
    assert threshold(gray, 128, invert=True)[0, :, 0].tolist() == [255, 255, 0, 0]
    assert (threshold(gray)[:, :, 3] == 255).all()


def test_transparent_pixels_load_as_white(tmp_path):
    rgba = np.zeros((4, 4, 4), dtype=np.uint8)
    rgba[0, 0] = (0, 0, 0, 255)
    path = tmp_path / "in.png"
    save_rgba(path, rgba)
    image = np.array(load_image(path))
    assert image[0, 0, :3].tolist() == [0, 0, 0]
    assert image[3, 3, :3].tolist() == [255, 255, 255]


def test_paper_sizes():
    assert mm_to_px(210, 300) == 2480
    assert paper_pixels("a4", 300) == (2480, 3508)
    assert paper_pixels("a4", 300, "landscape") == (3508, 2480)
    assert paper_pixels("letter", 100) == (850, 1100)
    assert paper_pixels("unknown", 300) == paper_pixels("a4", 300)


def test_dpi_is_clamped():
    assert clamp_dpi(10) == 72
    assert clamp_dpi(1200) == 600
    assert clamp_dpi(0) == 300
    assert clamp_dpi(None) == 300


def test_fit_contain_centres_the_image():
    assert fit_contain(100, 50, 200, 200) == (0, 50, 200, 100)
    assert fit_contain(50, 100, 200, 100) == (75, 0, 50, 100)


def test_compose_on_paper():
    image = Image.new("RGBA", (10, 5), (0, 0, 0, 255))
    gray = compose_on_paper(image, 20, 20)
    assert gray.shape == (20, 20)
    assert gray[10, 10] == 0
    assert gray[0, 0] == 255
    assert gray[19, 10] == 255


def test_count_floating_regions():
    mask = np.zeros((20, 20), dtype=bool)
    assert count_floating_regions(mask) == 0
    mask[0:3, 0:3] = True
    mask[8:10, 8:10] = True
    mask[14, 14] = True
    mask[15, 15] = True  # diagonal neighbour, separate region
    assert count_floating_regions(mask) == 3


def test_blend_overlay_only_touches_masked_pixels():
    base = mask_to_rgba(np.zeros((2, 2), dtype=bool))
    mask = np.array([[True, False], [False, False]])
    out = blend_overlay(base, mask, (0, 0, 255), alpha=1.0)
    assert out[0, 0].tolist() == [0, 0, 255, 255]
    assert out[1, 1].tolist() == base[1, 1].tolist()


def test_threshold_level_keyword():
    gray = np.array([[10, 60, 200]], dtype=np.uint8)
    assert threshold(gray, level=50)[0, :, 0].tolist() == [0, 255, 255]
    assert threshold(gray, level=100, invert=True)[0, :, 0].tolist() == [255, 255, 0]
