"""
Artwork string format: ';'-separated 'key:value' pairs.

    shape:star;rotation:45.0;scale:1.2;layer:3.0;...;colors:#AF52DE,#007AFF,...

Numeric values are clamped to their legal range on both encode and decode.
"""
from __future__ import annotations

from typing import Dict, List, Optional
import logging
import math

from shapes import ShapeKind
from .params import (
    Color,
    FIELD_RANGES,
    NUMERIC_FIELDS,
    ParameterSet,
    pad_palette,
)

logger = logging.getLogger(__name__)

PAIR_SEPARATOR = ";"
KEY_SEPARATOR = ":"
COLOR_SEPARATOR = ","

# Emission order of the known keys.
KEY_ORDER = (
    "shape",
    "rotation",
    "scale",
    "layer",
    "skewX",
    "skewY",
    "spread",
    "horizontal",
    "vertical",
    "primitive",
    "colors",
    "background",
    "useRainbow",
    "rainbowStyle",
    "hueAdj",
    "satAdj",
    "presetCount",
    "strokeColor",
    "strokeWidth",
    "alpha",
)
KNOWN_KEYS = frozenset(KEY_ORDER)


def format_number(key: str, value: float) -> str:
    if FIELD_RANGES[key].integral:
        return str(int(value))
    return repr(float(value))


def format_colors(colors) -> str:
    return COLOR_SEPARATOR.join(c.to_hex() for c in colors)


def reconstruct_colors(text: str) -> List[Color]:
    """
    Split a comma-joined hex list, dropping entries that do not parse.
    """
    out: List[Color] = []
    for item in text.split(COLOR_SEPARATOR):
        c = Color.from_hex(item)
        if c is None:
            logger.debug("dropping unparseable color %r", item)
            continue
        out.append(c)
    return out


def encode(params: ParameterSet) -> str:
    values: Dict[str, str] = {
        "shape": ShapeKind(params.shape_kind).value,
        "colors": format_colors(params.color_presets),
        "background": params.background_color.to_hex(),
        "useRainbow": "true" if params.use_rainbow_colors else "false",
        "strokeColor": params.stroke_color.to_hex(),
    }
    for key in NUMERIC_FIELDS:
        values[key] = format_number(key, FIELD_RANGES[key].clamp(params.get_field(key)))
    pairs = [f"{key}{KEY_SEPARATOR}{values[key]}" for key in KEY_ORDER]
    for key, value in params.extras.items():
        if key in KNOWN_KEYS:
            continue
        pairs.append(f"{key}{KEY_SEPARATOR}{value}")
    return PAIR_SEPARATOR.join(pairs)


def decode(text: str) -> Dict[str, str]:
    """
    Split into a key -> value mapping. Numeric keys are clamped and re-formatted;
    malformed pairs and unparseable numbers are dropped.
    """
    result: Dict[str, str] = {}
    for entry in text.split(PAIR_SEPARATOR):
        if not entry.strip():
            continue
        if KEY_SEPARATOR not in entry:
            logger.debug("dropping malformed entry %r", entry)
            continue
        key, value = entry.split(KEY_SEPARATOR, 1)
        key = key.strip()
        if not key:
            logger.debug("dropping entry without key %r", entry)
            continue
        if key in FIELD_RANGES:
            try:
                number = float(value)
            except ValueError:
                logger.debug("dropping unparseable number %s=%r", key, value)
                continue
            if math.isnan(number):
                logger.debug("dropping NaN for %s", key)
                continue
            clamped = FIELD_RANGES[key].clamp(number)
            if clamped != number:
                logger.debug("clamped %s from %r to %r", key, number, clamped)
            value = format_number(key, clamped)
        result[key] = value
    return result


def parse(text: str, base: Optional[ParameterSet] = None) -> ParameterSet:
    """
    Decode into a typed ParameterSet. Fields missing from the string keep the
    value from `base` (defaults when omitted); the palette is padded to 10.
    """
    fields = decode(text)
    params = base.copy() if base is not None else ParameterSet()
    params.extras = {}
    for key, value in fields.items():
        if key in NUMERIC_FIELDS:
            params.set_field(key, float(value))
        elif key == "shape":
            try:
                params.shape_kind = ShapeKind(value.strip())
            except ValueError:
                logger.debug("unknown shape %r, falling back to circle", value)
                params.shape_kind = ShapeKind.CIRCLE
        elif key == "colors":
            colors = reconstruct_colors(value)
            if colors:
                params.color_presets = tuple(colors)
        elif key in ("background", "strokeColor"):
            c = Color.from_hex(value)
            if c is None:
                logger.debug("ignoring unparseable %s %r", key, value)
            elif key == "background":
                params.background_color = c
            else:
                params.stroke_color = c
        elif key == "useRainbow":
            flag = value.strip().lower()
            if flag in ("true", "false"):
                params.use_rainbow_colors = flag == "true"
        else:
            params.extras[key] = value
    params.color_presets = pad_palette(params.color_presets)
    return params
