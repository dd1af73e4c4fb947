from __future__ import annotations

from typing import Callable, Dict, List, Literal, Sequence
import logging

from .params import (
    BLACK,
    DEFAULT_PALETTE,
    FIELD_RANGES,
    PALETTE_SIZE,
    WHITE,
    Color,
    ParameterSet,
    pad_palette,
)

logger = logging.getLogger(__name__)

PaletteEvent = Literal["colors", "background", "stroke"]
Listener = Callable[[PaletteEvent, "PaletteState"], None]


class PaletteState:
    """
    Owned color settings of one editing session.

    Every mutation clamps its input and notifies subscribers with the kind of
    change: "colors" (presets, visible count, rainbow settings), "background",
    or "stroke" (stroke color, stroke width, shape alpha).
    """

    def __init__(self,
                 presets: Sequence[Color] = DEFAULT_PALETTE,
                 visible_count: int = 5,
                 background: Color = WHITE,
                 stroke_color: Color = BLACK,
                 stroke_width: float = 2.0,
                 shape_alpha: float = 1.0,
                 use_rainbow: bool = False,
                 rainbow_style: int = 0,
                 hue_adjustment: float = 0.5,
                 saturation_adjustment: float = 0.8):
        self._listeners: List[Listener] = []
        self._presets = pad_palette(presets)
        self._visible_count = int(FIELD_RANGES["presetCount"].clamp(visible_count))
        self._background = background
        self._stroke_color = stroke_color
        self._stroke_width = FIELD_RANGES["strokeWidth"].clamp(stroke_width)
        self._shape_alpha = FIELD_RANGES["alpha"].clamp(shape_alpha)
        self._use_rainbow = bool(use_rainbow)
        self._rainbow_style = int(FIELD_RANGES["rainbowStyle"].clamp(rainbow_style))
        self._hue_adjustment = FIELD_RANGES["hueAdj"].clamp(hue_adjustment)
        self._saturation_adjustment = FIELD_RANGES["satAdj"].clamp(saturation_adjustment)

    # ---- Subscription ----
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register `listener`; the returned callable unsubscribes it.
        """
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _emit(self, event: PaletteEvent) -> None:
        logger.debug("palette change: %s", event)
        for listener in list(self._listeners):
            listener(event, self)

    # ---- Colors ----
    @property
    def presets(self):
        return self._presets

    @presets.setter
    def presets(self, colors: Sequence[Color]) -> None:
        self._presets = pad_palette(colors)
        self._emit("colors")

    def set_preset(self, index: int, color: Color) -> None:
        if not 0 <= index < PALETTE_SIZE:
            raise IndexError(f"preset index out of range: {index}")
        colors = list(self._presets)
        colors[index] = color
        self.presets = colors

    @property
    def visible_count(self) -> int:
        return self._visible_count

    @visible_count.setter
    def visible_count(self, value: int) -> None:
        self._visible_count = int(FIELD_RANGES["presetCount"].clamp(value))
        self._emit("colors")

    @property
    def visible_presets(self):
        return self._presets[:self._visible_count]

    @property
    def use_rainbow(self) -> bool:
        return self._use_rainbow

    @use_rainbow.setter
    def use_rainbow(self, value: bool) -> None:
        self._use_rainbow = bool(value)
        if self._use_rainbow:
            self._rainbow_style = 0
        self._emit("colors")

    @property
    def rainbow_style(self) -> int:
        return self._rainbow_style

    @rainbow_style.setter
    def rainbow_style(self, value: int) -> None:
        self._rainbow_style = int(FIELD_RANGES["rainbowStyle"].clamp(value))
        self._emit("colors")

    @property
    def hue_adjustment(self) -> float:
        return self._hue_adjustment

    @hue_adjustment.setter
    def hue_adjustment(self, value: float) -> None:
        self._hue_adjustment = FIELD_RANGES["hueAdj"].clamp(value)
        self._emit("colors")

    @property
    def saturation_adjustment(self) -> float:
        return self._saturation_adjustment

    @saturation_adjustment.setter
    def saturation_adjustment(self, value: float) -> None:
        self._saturation_adjustment = FIELD_RANGES["satAdj"].clamp(value)
        self._emit("colors")

    # ---- Background ----
    @property
    def background(self) -> Color:
        return self._background

    @background.setter
    def background(self, color: Color) -> None:
        self._background = color
        self._emit("background")

    # ---- Stroke ----
    @property
    def stroke_color(self) -> Color:
        return self._stroke_color

    @stroke_color.setter
    def stroke_color(self, color: Color) -> None:
        self._stroke_color = color
        self._emit("stroke")

    @property
    def stroke_width(self) -> float:
        return self._stroke_width

    @stroke_width.setter
    def stroke_width(self, value: float) -> None:
        self._stroke_width = FIELD_RANGES["strokeWidth"].clamp(value)
        self._emit("stroke")

    @property
    def shape_alpha(self) -> float:
        return self._shape_alpha

    @shape_alpha.setter
    def shape_alpha(self, value: float) -> None:
        self._shape_alpha = FIELD_RANGES["alpha"].clamp(value)
        self._emit("stroke")

    # ---- ParameterSet bridge ----
    @classmethod
    def from_parameters(cls, params: ParameterSet) -> "PaletteState":
        return cls(
            presets=params.color_presets,
            visible_count=params.visible_preset_count,
            background=params.background_color,
            stroke_color=params.stroke_color,
            stroke_width=params.stroke_width,
            shape_alpha=params.shape_alpha,
            use_rainbow=params.use_rainbow_colors,
            rainbow_style=params.rainbow_style,
            hue_adjustment=params.hue_adjustment,
            saturation_adjustment=params.saturation_adjustment,
        )

    def apply_to(self, params: ParameterSet) -> ParameterSet:
        """
        Copy of `params` carrying this palette's color settings.
        """
        out = params.copy()
        out.color_presets = self._presets
        out.visible_preset_count = self._visible_count
        out.background_color = self._background
        out.stroke_color = self._stroke_color
        out.stroke_width = self._stroke_width
        out.shape_alpha = self._shape_alpha
        out.use_rainbow_colors = self._use_rainbow
        out.rainbow_style = self._rainbow_style
        out.hue_adjustment = self._hue_adjustment
        out.saturation_adjustment = self._saturation_adjustment
        return out

    def snapshot(self) -> Dict[str, object]:
        return {
            "presets": [c.to_hex() for c in self._presets],
            "visible_count": self._visible_count,
            "background": self._background.to_hex(),
            "stroke_color": self._stroke_color.to_hex(),
            "stroke_width": self._stroke_width,
            "shape_alpha": self._shape_alpha,
            "use_rainbow": self._use_rainbow,
            "rainbow_style": self._rainbow_style,
            "hue_adjustment": self._hue_adjustment,
            "saturation_adjustment": self._saturation_adjustment,
        }
