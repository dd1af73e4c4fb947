"""
-------
conftest.py
-------
Shared pytest fixtures for the pattern tests.
"""

import os
import sys

import pytest
import matplotlib
matplotlib.use("Agg")  # headless backend for CI
import matplotlib.pyplot as plt

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from pattern import Color, ParameterSet  # noqa: E402
from shapes import ShapeKind  # noqa: E402


@pytest.fixture(scope="function")
def fig_ax():
    """
    Create and yield an isolated Matplotlib Figure/Axes pair.

    The figure is automatically closed after the test to avoid memory leaks.
    """
    fig, ax = plt.subplots(figsize=(4, 4))
    yield fig, ax
    plt.close(fig)


@pytest.fixture
def star_params() -> ParameterSet:
    """The end-to-end example: 3 layers x 2 stars, 45 degrees per layer."""
    return ParameterSet(
        shape_kind=ShapeKind.STAR,
        rotation=45.0,
        scale=1.2,
        layer_count=3,
        skew_x=0.0,
        skew_y=0.0,
        spread=10.0,
        horizontal=0.0,
        vertical=0.0,
        primitive_count=2,
    )


@pytest.fixture
def rich_params() -> ParameterSet:
    """Every field away from its default, all within range."""
    return ParameterSet(
        shape_kind=ShapeKind.TRAPEZOID,
        rotation=33.5,
        scale=1.75,
        layer_count=12,
        skew_x=25.0,
        skew_y=80.0,
        spread=42.5,
        horizontal=-120.0,
        vertical=64.25,
        primitive_count=5,
        color_presets=tuple(
            Color.from_hex(h) for h in (
                "#102030", "#405060", "#708090", "#A0B0C0", "#D0E0F0",
                "#FF0000", "#00FF00", "#0000FF", "#123456", "#ABCDEF",
            )
        ),
        background_color=Color.from_hex("#222222"),
        use_rainbow_colors=True,
        rainbow_style=2,
        hue_adjustment=0.25,
        saturation_adjustment=0.6,
        visible_preset_count=7,
        stroke_color=Color.from_hex("#FAFAFA"),
        stroke_width=3.5,
        shape_alpha=0.75,
    )
