import numpy as np

from stencilbridge.raster import bresenham
from stencilbridge.render import bridge_radius, draw_bridge, get_disk_rows, paint_disk
from stencilbridge.router import edge_fallback


def test_bridge_radius_rounds_half_up():
    assert bridge_radius(2) == 1
    assert bridge_radius(3) == 2
    assert bridge_radius(5) == 3
    assert bridge_radius(14) == 7


def test_disk_rows_radius_one_is_a_plus():
    assert get_disk_rows(1) == [(-1, 0), (0, 1), (1, 0)]
    mask = np.zeros((5, 5), dtype=bool)
    paint_disk(mask, 2, 2, 1)
    assert int(mask.sum()) == 5
    assert mask[1, 2] and mask[2, 1] and mask[2, 3] and mask[3, 2]


def test_bresenham_includes_both_endpoints():
    points = list(bresenham((0, 0), (4, 2)))
    assert points[0] == (0, 0)
    assert points[-1] == (4, 2)
    assert len(points) == 5
    assert list(bresenham((3, 3), (3, 3))) == [(3, 3)]


def test_draw_bridge_has_width_along_the_line():
    mask = np.zeros((30, 30), dtype=bool)
    draw_bridge(mask, (5, 15), (20, 15), 6)
    assert mask[12:19, 10].all()
    assert not mask[11, 10]
    assert not mask[19, 10]
    assert mask[15, 2:24].all()


def test_draw_bridge_is_idempotent():
    mask = np.zeros((40, 40), dtype=bool)
    draw_bridge(mask, (3, 30), (33, 4), 5)
    first = mask.copy()
    draw_bridge(mask, (3, 30), (33, 4), 5)
    assert (mask == first).all()


def test_disk_is_clipped_to_canvas():
    mask = np.zeros((5, 5), dtype=bool)
    draw_bridge(mask, (0, 0), (0, 0), 10)
    assert mask[0, 0]
    assert mask[4, 0]
    assert not mask[4, 4]


def test_edge_fallback_picks_nearest_edge():
    assert edge_fallback(5 * 10 + 2, 10, 10) == ((2, 5), (0, 5))
    assert edge_fallback(5 * 10 + 7, 10, 10) == ((7, 5), (9, 5))
    assert edge_fallback(1 * 10 + 5, 10, 10) == ((5, 1), (5, 0))
    assert edge_fallback(8 * 10 + 5, 10, 10) == ((5, 8), (5, 9))


def test_edge_fallback_ties_prefer_left_then_right_then_top():
    assert edge_fallback(4 * 9 + 4, 9, 9) == ((4, 4), (0, 4))
    assert edge_fallback(2 * 9 + 6, 9, 5) == ((6, 2), (8, 2))
    assert edge_fallback(2 * 7 + 3, 7, 5) == ((3, 2), (3, 0))
