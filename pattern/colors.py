from __future__ import annotations

from typing import Callable, Sequence
import math

from .params import Color, DEFAULT_PALETTE


# Alpha at or above 1 - OPACITY_EPSILON is treated as fully opaque for every layer.
OPACITY_EPSILON = 0.01
NESTED_LAYER_OPACITY = 0.8


def _clamp(v: float, lo: float, hi: float) -> float:
    return lo if v < lo else hi if v > hi else v


def adjust_saturation(color: Color, saturation_scale: float) -> Color:
    """
    Scale the native saturation of `color`; hue and brightness are kept.
    """
    if saturation_scale == 1.0:
        return color
    h, s, v = color.to_hsv()
    return Color.from_hsv(h, _clamp(s * saturation_scale, 0.0, 1.0), v)


def rainbow_color(index: int, hue_adjustment: float, saturation_adjustment: float) -> Color:
    """
    Style 0, "dynamic": a 30 degree hue step per layer with a slow sine wobble.
    """
    scaled_position = (index * 30) % 360
    angle = index * 0.1
    base_hue = scaled_position / 360.0
    hue_shift = 0.15 * math.sin(angle * 0.5)
    hue = (base_hue + hue_shift + (hue_adjustment - 0.5)) % 1.0

    saturation = _clamp(0.9 + 0.1 * math.sin(angle * 0.7), 0.3, 1.0)
    saturation = _clamp(saturation * saturation_adjustment, 0.0, 1.0)

    brightness = _clamp(0.95 + 0.1 * math.cos(angle * 0.3), 0.8, 1.0)
    return Color.from_hsv(hue, saturation, brightness)


def cyberpunk_rainbow_color(index: int, hue_adjustment: float, saturation_adjustment: float) -> Color:
    """
    Style 1, "cyberpunk": two superposed hue perturbations.
    """
    scaled_position = (index * 24) % 360
    t = index * 0.05
    base_hue = scaled_position / 360.0
    hue_shift1 = 0.2 * math.sin(t * 1.1)
    hue_shift2 = 0.15 * math.sin(t * 0.7 + 2.0)
    hue = (base_hue + hue_shift1 + hue_shift2 + (hue_adjustment - 0.5)) % 1.0

    saturation = min(1.0, 0.85 + 0.15 * math.sin(t * 0.5))
    saturation = _clamp(saturation * saturation_adjustment, 0.0, 1.0)

    bright_phase = 0.5 * math.sin(t * 1.7) + 0.5 * math.cos(t * 2.3)
    brightness = min(1.0, 0.85 + 0.15 * bright_phase)
    return Color.from_hsv(hue, saturation, brightness)


def half_spectrum_rainbow_color(index: int, hue_adjustment: float, saturation_adjustment: float) -> Color:
    """
    Style 2, "half-spectrum": hue confined to a 0.5 wide band starting at 0.75.
    """
    scaled_position = (index * 18) % 180
    start_hue = 0.75
    hue_range = 0.5
    angle = index * 0.05
    position_in_range = scaled_position / 180.0
    wrapped = (start_hue + position_in_range * hue_range + (hue_adjustment - 0.5)) % 1.0
    hue = (wrapped + 0.08 * math.sin(angle * 0.7)) % 1.0

    saturation = _clamp(0.95 + 0.05 * math.sin(angle * 0.9), 0.3, 1.0)
    saturation = _clamp(saturation * saturation_adjustment, 0.0, 1.0)

    brightness = _clamp(0.95 + 0.05 * math.cos(angle * 0.5), 0.9, 1.0)
    return Color.from_hsv(hue, saturation, brightness)


RAINBOW_STYLES: Sequence[Callable[[int, float, float], Color]] = (
    rainbow_color,
    cyberpunk_rainbow_color,
    half_spectrum_rainbow_color,
)


def color_for_layer(index: int,
                    presets: Sequence[Color],
                    visible_count: int,
                    use_rainbow: bool,
                    style: int,
                    hue_adjustment: float,
                    saturation_adjustment: float) -> Color:
    if use_rainbow:
        fn = RAINBOW_STYLES[int(_clamp(style, 0, len(RAINBOW_STYLES) - 1))]
        return fn(index, hue_adjustment, saturation_adjustment)
    visible = list(presets)[:max(1, min(visible_count, len(presets)))]
    if not visible:
        visible = [DEFAULT_PALETTE[0]]
    base = visible[index % len(visible)]
    return adjust_saturation(base, saturation_adjustment)


def layer_opacity(layer_index: int, shape_alpha: float) -> float:
    """
    Layers after the first are dimmed by 0.8, unless alpha is effectively 1.
    """
    if shape_alpha >= 1.0 - OPACITY_EPSILON:
        return 1.0
    if layer_index == 0:
        return shape_alpha
    return shape_alpha * NESTED_LAYER_OPACITY
