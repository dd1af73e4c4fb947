from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional
import logging
import numpy as np

from shapes import build_outline
from .colors import color_for_layer, layer_opacity
from .params import Color, ParameterSet
from .transform import CanvasGeometry, place_instance

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class DrawablePrimitive:
    """
    One positioned, transformed, colored shape instance, ready to paint.
    """
    outline: np.ndarray  # (N, 2), implicitly closed
    fill_color: Color
    fill_alpha: float
    layer: int
    repetition: int
    stroke_color: Optional[Color] = None
    stroke_width: Optional[float] = None

    @property
    def has_stroke(self) -> bool:
        return self.stroke_width is not None


def generate(params: ParameterSet,
             canvas: CanvasGeometry = CanvasGeometry()) -> List[DrawablePrimitive]:
    """
    Expand a parameter set into primitives in paint order (layer-major).
    The parameter set is expected to be clamped already.
    """
    primitives: List[DrawablePrimitive] = []
    count = params.primitive_count
    stroke = params.stroke_width > 0
    for layer in range(params.layer_count):
        fill = color_for_layer(
            layer,
            params.color_presets,
            params.visible_preset_count,
            params.use_rainbow_colors,
            params.rainbow_style,
            params.hue_adjustment,
            params.saturation_adjustment,
        )
        alpha = layer_opacity(layer, params.shape_alpha)
        for rep in range(count):
            placement = place_instance(layer, rep, count, params, canvas)
            outline = build_outline(params.shape_kind, placement.center, placement.scaled_radius)
            if outline.shape[0] == 0:
                continue
            primitives.append(
                DrawablePrimitive(
                    outline=placement.apply(outline),
                    fill_color=fill,
                    fill_alpha=alpha,
                    layer=layer,
                    repetition=rep,
                    stroke_color=params.stroke_color if stroke else None,
                    stroke_width=params.stroke_width * canvas.unit if stroke else None,
                )
            )
    logger.debug("generated %d primitives (%d layers x %d)", len(primitives), params.layer_count, count)
    return primitives
