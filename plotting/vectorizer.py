from __future__ import annotations

from typing import List, Optional, Sequence, Tuple
import numpy as np
import matplotlib.pyplot as plt
from shapely.geometry import Polygon, box
import shapely.ops

from pattern.engine import DrawablePrimitive

Bounds = Tuple[float, float, float, float]


def primitive_to_shapely(primitive: DrawablePrimitive) -> Polygon:
    geom = Polygon(primitive.outline)
    if not geom.is_valid:
        geom = geom.buffer(0)
    return geom


def primitives_bounds(primitives: Sequence[DrawablePrimitive], margin: float = 0.0) -> Optional[Bounds]:
    """
    (minx, miny, maxx, maxy) of the union of all outlines, or None when empty.
    """
    geoms = [primitive_to_shapely(p) for p in primitives if p.outline.shape[0] >= 3]
    geoms = [g for g in geoms if not g.is_empty]
    if not geoms:
        return None
    minx, miny, maxx, maxy = shapely.ops.unary_union(geoms).bounds
    return minx - margin, miny - margin, maxx + margin, maxy + margin


def square_view(bounds: Bounds, margin: float = 0.0) -> Bounds:
    """
    Smallest square around `bounds` sharing its center, padded by margin.
    """
    minx, miny, maxx, maxy = bounds
    half = max(maxx - minx, maxy - miny) / 2.0 + margin
    cx = (minx + maxx) / 2.0
    cy = (miny + maxy) / 2.0
    view = box(cx - half, cy - half, cx + half, cy + half)
    return view.bounds


def draw_primitives_on_axis(
    ax: plt.Axes,
    primitives: Sequence[DrawablePrimitive],
    px_to_pt: float = 1.0,
) -> List[object]:
    """
    Paints primitives in list order, so later ones land on top.
    Stroke widths are given in canvas pixels and converted with `px_to_pt`.
    """
    artists: List[object] = []
    for prim in primitives:
        if prim.outline.shape[0] < 3:
            continue
        xy = np.vstack([prim.outline, prim.outline[:1]])
        rgba = prim.fill_color.with_alpha(prim.fill_alpha)
        if prim.has_stroke:
            ec = prim.stroke_color.with_alpha(prim.fill_alpha)
            lw = float(prim.stroke_width) * px_to_pt
        else:
            ec = "none"
            lw = 0.0
        patches = ax.fill(
            xy[:, 0], xy[:, 1],
            fc=rgba, ec=ec, linewidth=lw, joinstyle="round",
        )
        artists.extend(patches)
    return artists
