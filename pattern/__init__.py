
from .params import (
    Color,
    ParameterSet,
    FieldRange,
    FIELD_RANGES,
    DEFAULT_PALETTE,
    PALETTE_SIZE,
    WHITE,
    BLACK,
    pad_palette,
    random_parameters,
)
from .colors import (
    color_for_layer,
    layer_opacity,
    adjust_saturation,
    rainbow_color,
    cyberpunk_rainbow_color,
    half_spectrum_rainbow_color,
)
from .transform import (
    CanvasGeometry,
    InstancePlacement,
    place_instance,
    skew_angle,
    layer_scale,
    spread_distance,
)
from .engine import DrawablePrimitive, generate
from .codec import encode, decode, parse, reconstruct_colors
from .palette import PaletteState
