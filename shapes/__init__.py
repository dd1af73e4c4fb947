# Re-export core geometry API for convenience
from .geometry import Affine2D
from .library import (
    ShapeKind,
    EMPTY_OUTLINE,
    polygon,
    star,
    arrow,
    fixed_vertex,
    rectangle,
    ellipse,
    capsule,
    build_outline,
)
