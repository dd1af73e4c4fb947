from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Optional, Tuple
import math
import re
import numpy as np
import matplotlib.colors as mcolors

from shapes import ShapeKind


_HEX_RE = re.compile(r"^[0-9A-Fa-f]{6}$")


@dataclass(frozen=True)
class Color:
    """
    Opaque sRGB color with channels in [0, 1].
    """
    r: float
    g: float
    b: float

    @staticmethod
    def from_hex(text: str) -> Optional["Color"]:
        """
        Parse '#RRGGBB' (the '#' and surrounding whitespace are optional).
        Returns None when the text is not a 6-digit hex color.
        """
        s = text.strip()
        if s.startswith("#"):
            s = s[1:]
        if not _HEX_RE.match(s):
            return None
        r, g, b = mcolors.to_rgb("#" + s)
        return Color(r, g, b)

    @staticmethod
    def from_hsv(h: float, s: float, v: float) -> "Color":
        r, g, b = mcolors.hsv_to_rgb(np.array([h, s, v], dtype=float))
        return Color(float(r), float(g), float(b))

    def to_hex(self) -> str:
        return mcolors.to_hex(self.as_array(), keep_alpha=False).upper()

    def to_hsv(self) -> Tuple[float, float, float]:
        h, s, v = mcolors.rgb_to_hsv(self.as_array())
        return float(h), float(s), float(v)

    def as_array(self) -> np.ndarray:
        return np.clip(np.array([self.r, self.g, self.b], dtype=float), 0.0, 1.0)

    def with_alpha(self, alpha: float) -> Tuple[float, float, float, float]:
        r, g, b = self.as_array()
        return float(r), float(g), float(b), float(alpha)


WHITE = Color(1.0, 1.0, 1.0)
BLACK = Color(0.0, 0.0, 0.0)

PALETTE_SIZE = 10

# purple, blue, pink, yellow, green, red, orange, cyan, indigo, mint
DEFAULT_PALETTE: Tuple[Color, ...] = tuple(
    Color.from_hex(h)  # type: ignore[misc]
    for h in (
        "#AF52DE", "#007AFF", "#FF2D55", "#FFCC00", "#34C759",
        "#FF3B30", "#FF9500", "#32ADE6", "#5856D6", "#00C7BE",
    )
)


@dataclass(frozen=True)
class FieldRange:
    low: float
    high: float
    integral: bool = False

    def clamp(self, value: float) -> float:
        if math.isnan(value):
            return self.low
        v = self.low if value < self.low else self.high if value > self.high else value
        if self.integral:
            return float(int(v))
        return float(v)


# Serialized key -> legal closed interval. The layer range is the widest one used
# anywhere (0-360); narrower slider limits are a presentation concern.
FIELD_RANGES: Dict[str, FieldRange] = {
    "rotation": FieldRange(0.0, 360.0),
    "scale": FieldRange(0.5, 2.0),
    "layer": FieldRange(0.0, 360.0),
    "skewX": FieldRange(0.0, 100.0),
    "skewY": FieldRange(0.0, 100.0),
    "spread": FieldRange(0.0, 100.0),
    "horizontal": FieldRange(-300.0, 300.0),
    "vertical": FieldRange(-300.0, 300.0),
    "primitive": FieldRange(1.0, 6.0),
    "rainbowStyle": FieldRange(0.0, 2.0, integral=True),
    "hueAdj": FieldRange(0.0, 1.0),
    "satAdj": FieldRange(0.0, 1.0),
    "presetCount": FieldRange(1.0, float(PALETTE_SIZE), integral=True),
    "strokeWidth": FieldRange(0.0, 20.0),
    "alpha": FieldRange(0.0, 1.0),
}

# Serialized key -> ParameterSet attribute, for every numeric field.
NUMERIC_FIELDS: Dict[str, str] = {
    "rotation": "rotation",
    "scale": "scale",
    "layer": "layer_count",
    "skewX": "skew_x",
    "skewY": "skew_y",
    "spread": "spread",
    "horizontal": "horizontal",
    "vertical": "vertical",
    "primitive": "primitive_count",
    "rainbowStyle": "rainbow_style",
    "hueAdj": "hue_adjustment",
    "satAdj": "saturation_adjustment",
    "presetCount": "visible_preset_count",
    "strokeWidth": "stroke_width",
    "alpha": "shape_alpha",
}

INTEGER_ATTRIBUTES = frozenset(
    {"layer_count", "primitive_count", "rainbow_style", "visible_preset_count"}
)

# UI slider limit for layers, used by randomized initialization only.
UI_MAX_LAYERS = 72


def pad_palette(colors: Iterable[Color],
                fallback: Tuple[Color, ...] = DEFAULT_PALETTE,
                size: int = PALETTE_SIZE) -> Tuple[Color, ...]:
    """
    Truncate to `size` colors, or fill the missing slots from `fallback`.
    """
    out = list(colors)[:size]
    if len(out) < size:
        out.extend(fallback[len(out):size])
    return tuple(out)


@dataclass
class ParameterSet:
    """
    Complete description of one artwork's generation inputs.
    """
    shape_kind: ShapeKind = ShapeKind.CIRCLE
    rotation: float = 0.0
    scale: float = 1.0
    layer_count: int = 1
    skew_x: float = 0.0
    skew_y: float = 0.0
    spread: float = 0.0
    horizontal: float = 0.0
    vertical: float = 0.0
    primitive_count: int = 1
    color_presets: Tuple[Color, ...] = DEFAULT_PALETTE
    background_color: Color = WHITE
    use_rainbow_colors: bool = False
    rainbow_style: int = 0
    hue_adjustment: float = 0.5
    saturation_adjustment: float = 0.8
    visible_preset_count: int = 5
    stroke_color: Color = BLACK
    stroke_width: float = 2.0
    shape_alpha: float = 1.0
    # Unrecognized serialized keys, kept verbatim
    extras: Dict[str, str] = field(default_factory=dict)

    def copy(self) -> "ParameterSet":
        return replace(self, color_presets=tuple(self.color_presets), extras=dict(self.extras))

    def get_field(self, key: str) -> float:
        return float(getattr(self, NUMERIC_FIELDS[key]))

    def set_field(self, key: str, value: float) -> None:
        """
        Assign a numeric field by its serialized key, clamping to the legal range.
        """
        attr = NUMERIC_FIELDS[key]
        v = FIELD_RANGES[key].clamp(float(value))
        setattr(self, attr, int(v) if attr in INTEGER_ATTRIBUTES else v)

    def clamped(self) -> "ParameterSet":
        out = self.copy()
        for key in NUMERIC_FIELDS:
            out.set_field(key, self.get_field(key))
        out.shape_kind = ShapeKind(self.shape_kind)
        return out


def random_parameters(rng: np.random.Generator,
                      max_layers: int = UI_MAX_LAYERS) -> ParameterSet:
    kinds = list(ShapeKind)
    kind = kinds[int(rng.integers(0, len(kinds)))]

    def _uniform(key: str) -> float:
        r = FIELD_RANGES[key]
        return float(rng.uniform(r.low, r.high))

    p = ParameterSet(
        shape_kind=kind,
        rotation=_uniform("rotation"),
        scale=_uniform("scale"),
        layer_count=int(rng.integers(1, max_layers + 1)),
        skew_x=_uniform("skewX"),
        skew_y=_uniform("skewY"),
        spread=_uniform("spread"),
        horizontal=0.0,
        vertical=0.0,
        primitive_count=int(rng.integers(1, 7)),
        use_rainbow_colors=bool(rng.random() < 0.5),
        rainbow_style=int(rng.integers(0, 3)),
        hue_adjustment=_uniform("hueAdj"),
        saturation_adjustment=float(rng.uniform(0.5, 1.0)),
        visible_preset_count=int(rng.integers(1, PALETTE_SIZE + 1)),
        stroke_width=float(rng.uniform(0.0, 4.0)),
        shape_alpha=float(rng.uniform(0.3, 1.0)),
    )
    return p.clamped()
