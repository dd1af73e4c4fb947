from __future__ import annotations

from enum import Enum
from typing import Sequence, Tuple
import math
import numpy as np
from shapely.geometry import Point, LineString, box
from shapely import affinity


Center = Tuple[float, float]

# Outlines are (N, 2) vertex arrays in pixel coordinates (y grows downward).
# The closing edge from the last vertex back to the first is implicit.
EMPTY_OUTLINE = np.zeros((0, 2), dtype=float)

CURVE_QUAD_SEGS = 16


class ShapeKind(str, Enum):
    CIRCLE = "circle"
    SQUARE = "square"
    TRIANGLE = "triangle"
    HEXAGON = "hexagon"
    STAR = "star"
    RECTANGLE = "rectangle"
    OVAL = "oval"
    DIAMOND = "diamond"
    PENTAGON = "pentagon"
    OCTAGON = "octagon"
    ARROW = "arrow"
    RHOMBUS = "rhombus"
    PARALLELOGRAM = "parallelogram"
    TRAPEZOID = "trapezoid"
    CAPSULE = "capsule"


REGULAR_SIDES = {
    ShapeKind.HEXAGON: 6,
    ShapeKind.PENTAGON: 5,
    ShapeKind.OCTAGON: 8,
}

STAR_POINTS = 5
STAR_INNER_RATIO = 0.4

# Vertex offsets in units of the radius, clockwise on screen starting at the top.
FIXED_VERTEX_OFFSETS = {
    ShapeKind.TRIANGLE: ((0.0, -1.0), (1.0, 1.0), (-1.0, 1.0)),
    ShapeKind.DIAMOND: ((0.0, -1.0), (1.0, 0.0), (0.0, 1.0), (-1.0, 0.0)),
    ShapeKind.RHOMBUS: ((0.0, -1.0), (0.8, 0.0), (0.0, 1.0), (-0.8, 0.0)),
    ShapeKind.PARALLELOGRAM: ((-0.6, -1.0), (1.0, -1.0), (0.6, 1.0), (-1.0, 1.0)),
    ShapeKind.TRAPEZOID: ((-0.6, -1.0), (0.6, -1.0), (1.0, 1.0), (-1.0, 1.0)),
}

# (width, height) in units of the radius
RECT_LIKE_RATIOS = {
    ShapeKind.CIRCLE: (2.0, 2.0),
    ShapeKind.SQUARE: (2.0, 2.0),
    ShapeKind.RECTANGLE: (2.0, 1.2),
    ShapeKind.OVAL: (2.0, 1.2),
    ShapeKind.CAPSULE: (1.6, 2.0),
}


def _ring_vertices(geom) -> np.ndarray:
    # shapely repeats the first coordinate at the end of a ring
    coords = np.asarray(geom.exterior.coords, dtype=float)
    return coords[:-1].copy()


def polygon(center: Center, radius: float, sides: int) -> np.ndarray:
    """
    Regular polygon with its first vertex at 12 o'clock.
    Fewer than 3 sides yields an empty outline.
    """
    if sides < 3:
        return EMPTY_OUTLINE.copy()
    step = (2.0 * math.pi) / sides
    cx, cy = center
    verts = []
    for i in range(sides):
        a = step * i - math.pi / 2.0
        verts.append((cx + radius * math.cos(a), cy + radius * math.sin(a)))
    return np.array(verts, dtype=float)


def star(center: Center, inner_radius: float, outer_radius: float, points: int) -> np.ndarray:
    """
    Star alternating outer and inner vertices, starting with an outer one at the top.
    Fewer than 2 points yields an empty outline.
    """
    if points < 2:
        return EMPTY_OUTLINE.copy()
    total = points * 2
    step = (2.0 * math.pi) / total
    cx, cy = center
    verts = []
    for i in range(total):
        r = outer_radius if i % 2 == 0 else inner_radius
        a = step * i - math.pi / 2.0
        verts.append((cx + r * math.cos(a), cy + r * math.sin(a)))
    return np.array(verts, dtype=float)


def arrow(center: Center, size: float) -> np.ndarray:
    """
    Upward arrow: triangular head over a rectangular stem.
    """
    width = size * 1.5
    height = size * 2.0
    stem = width * 0.3
    cx, cy = center
    return np.array(
        [
            (cx, cy - height * 0.5),
            (cx + width * 0.5, cy),
            (cx + stem * 0.5, cy),
            (cx + stem * 0.5, cy + height * 0.5),
            (cx - stem * 0.5, cy + height * 0.5),
            (cx - stem * 0.5, cy),
            (cx - width * 0.5, cy),
        ],
        dtype=float,
    )


def fixed_vertex(center: Center, radius: float, offsets: Sequence[Tuple[float, float]]) -> np.ndarray:
    cx, cy = center
    return np.array([(cx + ox * radius, cy + oy * radius) for ox, oy in offsets], dtype=float)


def rectangle(center: Center, width: float, height: float) -> np.ndarray:
    cx, cy = center
    rect = box(cx - width / 2.0, cy - height / 2.0, cx + width / 2.0, cy + height / 2.0)
    return _ring_vertices(rect)


def ellipse(center: Center, width: float, height: float) -> np.ndarray:
    base = Point(0.0, 0.0).buffer(1.0, quad_segs=CURVE_QUAD_SEGS)
    geom = affinity.scale(base, xfact=width / 2.0, yfact=height / 2.0, origin=(0, 0))
    geom = affinity.translate(geom, xoff=center[0], yoff=center[1])
    return _ring_vertices(geom)


def capsule(center: Center, width: float, height: float) -> np.ndarray:
    """
    Stadium with fully rounded ends along its longer axis.
    """
    cx, cy = center
    cap = min(width, height) / 2.0
    if width >= height:
        half = width / 2.0 - cap
        spine = ((cx - half, cy), (cx + half, cy))
    else:
        half = height / 2.0 - cap
        spine = ((cx, cy - half), (cx, cy + half))
    if half <= 0.0:
        return ellipse(center, width, height)
    geom = LineString(spine).buffer(cap, quad_segs=CURVE_QUAD_SEGS)
    return _ring_vertices(geom)


def build_outline(kind: ShapeKind, center: Center, radius: float) -> np.ndarray:
    """
    Untransformed outline of the given kind centered at `center`.
    """
    kind = ShapeKind(kind)
    if kind in REGULAR_SIDES:
        return polygon(center, radius, REGULAR_SIDES[kind])
    if kind == ShapeKind.STAR:
        return star(center, radius * STAR_INNER_RATIO, radius, STAR_POINTS)
    if kind == ShapeKind.ARROW:
        return arrow(center, radius)
    if kind in FIXED_VERTEX_OFFSETS:
        return fixed_vertex(center, radius, FIXED_VERTEX_OFFSETS[kind])
    w, h = RECT_LIKE_RATIOS[kind]
    if kind in (ShapeKind.CIRCLE, ShapeKind.OVAL):
        return ellipse(center, w * radius, h * radius)
    if kind == ShapeKind.CAPSULE:
        return capsule(center, w * radius, h * radius)
    return rectangle(center, w * radius, h * radius)
