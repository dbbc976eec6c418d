"""Unit tests for PageGeometry and Viewport."""

import pytest

from pdfmd.models.page import PageGeometry, Viewport


def test_viewport_exact_scale():
    geometry = PageGeometry(page_number=1, width=595.0, height=842.0)
    viewport = geometry.viewport(2.0)
    assert (viewport.width, viewport.height) == (1190, 1684)
    assert viewport.scale == 2.0


def test_viewport_rounds_fractional_sizes_up():
    geometry = PageGeometry(page_number=1, width=612.3, height=791.9)
    viewport = geometry.viewport(1.5)
    # 918.45 x 1187.85
    assert (viewport.width, viewport.height) == (919, 1188)


def test_viewport_ignores_float_noise():
    geometry = PageGeometry(page_number=1, width=100.0000001, height=50.0)
    assert geometry.viewport(1.0).width == 100


def test_viewport_minimum_one_pixel():
    geometry = PageGeometry(page_number=1, width=0.5, height=0.5)
    viewport = geometry.viewport(0.1)
    assert (viewport.width, viewport.height) == (1, 1)


def test_page_number_validation():
    with pytest.raises(ValueError, match="Page number must be >= 1"):
        PageGeometry(page_number=0, width=595.0, height=842.0)


@pytest.mark.parametrize("width,height", [(0, 842.0), (595.0, -1.0)])
def test_page_dimensions_must_be_positive(width, height):
    with pytest.raises(ValueError, match="positive"):
        PageGeometry(page_number=1, width=width, height=height)


def test_viewport_dimensions_must_be_positive():
    with pytest.raises(ValueError, match="positive"):
        Viewport(width=0, height=10, scale=1.0)


def test_viewport_scale_must_be_positive():
    with pytest.raises(ValueError, match="scale"):
        Viewport(width=10, height=10, scale=0.0)
