from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple
import math
import numpy as np

from shapes import Affine2D
from .params import ParameterSet


SCALE_DAMPING = 0.25
MAX_SKEW_ANGLE = math.pi / 15.0  # 12 degrees at skew 100


@dataclass(frozen=True)
class CanvasGeometry:
    """
    Output surface the pattern is laid out on, in pixels.
    `unit` converts parameter lengths (spread, offsets, stroke) to output pixels.
    """
    width: float = 1600.0
    height: float = 1600.0
    base_radius: float = 30.0
    unit: float = 1.0

    @property
    def center(self) -> Tuple[float, float]:
        return self.width / 2.0, self.height / 2.0

    def scaled(self, factor: float) -> "CanvasGeometry":
        return CanvasGeometry(
            width=self.width * factor,
            height=self.height * factor,
            base_radius=self.base_radius * factor,
            unit=self.unit * factor,
        )


def skew_angle(skew: float) -> float:
    return (skew / 100.0) * MAX_SKEW_ANGLE


def layer_scale(scale: float, layer: int) -> float:
    return (1.0 + (scale - 1.0) * SCALE_DAMPING) ** (layer + 1)


def spread_distance(spread: float, layer: int) -> float:
    return max(spread * layer, float(layer))


def local_transform(angle_radians: float, skew_x: float, skew_y: float) -> Affine2D:
    """
    Rotate, then shear horizontally, then shear vertically (about the origin).
    """
    return (
        Affine2D.from_rotation(angle_radians)
        .then(Affine2D.from_shear_x(skew_angle(skew_x)))
        .then(Affine2D.from_shear_y(skew_angle(skew_y)))
    )


@dataclass(frozen=True)
class InstancePlacement:
    layer: int
    repetition: int
    angle: float  # radians
    scaled_radius: float
    center: Tuple[float, float]
    transform: Affine2D  # pivots about `center`

    def apply(self, outline: np.ndarray) -> np.ndarray:
        if outline.shape[0] == 0:
            return outline
        return self.transform.apply(outline)


def place_instance(layer: int,
                   repetition: int,
                   count: int,
                   params: ParameterSet,
                   canvas: CanvasGeometry = CanvasGeometry()) -> InstancePlacement:
    angle_degrees = params.rotation * layer + (360.0 / count) * repetition
    angle = math.radians(angle_degrees)

    scaled_radius = canvas.base_radius * layer_scale(params.scale, layer)
    spread = spread_distance(params.spread, layer) * canvas.unit

    cos_a = math.cos(angle)
    sin_a = math.sin(angle)
    cx, cy = canvas.center
    final_x = cx + scaled_radius * cos_a + spread * cos_a + params.horizontal * canvas.unit
    final_y = cy + scaled_radius * sin_a + spread * sin_a - params.vertical * canvas.unit

    transform = local_transform(angle, params.skew_x, params.skew_y).about((final_x, final_y))
    return InstancePlacement(
        layer=layer,
        repetition=repetition,
        angle=angle,
        scaled_radius=scaled_radius,
        center=(final_x, final_y),
        transform=transform,
    )
