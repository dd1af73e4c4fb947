from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple
import io
import logging
import os
import matplotlib.pyplot as plt
from matplotlib.patches import Circle
from PIL import Image
from PIL.PngImagePlugin import PngInfo

from pattern.engine import DrawablePrimitive, generate
from pattern.params import ParameterSet
from pattern.transform import CanvasGeometry
from plotting.vectorizer import draw_primitives_on_axis, primitives_bounds, square_view

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = ("png", "jpeg")
EXPORT_COMMENT = "Created with PatternArt"
EXIF_IMAGE_DESCRIPTION = 0x010E
CENTER_MARKER_RADIUS = 6.0


class ExportError(RuntimeError):
    """Raised when an image cannot be produced or written."""


@dataclass(frozen=True)
class RenderConfig:
    size: int = 800  # output width in pixels; height follows the canvas aspect
    dpi: int = 100
    format: str = "png"
    quality: int = 90  # JPEG only
    show_center_marker: bool = True
    fit: bool = False  # crop the view to the drawn content


def render_canvas(
    ax: plt.Axes,
    params: ParameterSet,
    canvas: CanvasGeometry = CanvasGeometry(),
    px_to_pt: float = 1.0,
    show_center_marker: bool = True,
    fit: bool = False,
    title: Optional[str] = None,
) -> List[DrawablePrimitive]:
    """
    Paint one artwork onto an Axes in canvas pixel coordinates (y down).
    """
    primitives = generate(params, canvas)
    bg = params.background_color.with_alpha(1.0)
    ax.set_facecolor(bg)
    draw_primitives_on_axis(ax, primitives, px_to_pt=px_to_pt)

    if not primitives and show_center_marker:
        marker = params.color_presets[0] if params.color_presets else params.stroke_color
        ax.add_patch(Circle(canvas.center, radius=CENTER_MARKER_RADIUS * canvas.unit,
                            color=marker.with_alpha(1.0)))

    xmin, ymin, xmax, ymax = 0.0, 0.0, canvas.width, canvas.height
    if fit:
        bounds = primitives_bounds(primitives)
        if bounds is not None:
            xmin, ymin, xmax, ymax = square_view(bounds, margin=canvas.base_radius * 0.5)
    ax.set_aspect("equal")
    ax.set_xlim(xmin, xmax)
    ax.set_ylim(ymax, ymin)
    ax.set_xticks([])
    ax.set_yticks([])
    for spine in ax.spines.values():
        spine.set_visible(False)
    if title:
        ax.set_title(title)
    return primitives


def _output_canvas(canvas: CanvasGeometry, size: int) -> Tuple[CanvasGeometry, int, int]:
    factor = size / canvas.width
    out = canvas.scaled(factor)
    return out, int(round(out.width)), int(round(out.height))


def render_image(
    params: ParameterSet,
    config: RenderConfig = RenderConfig(),
    canvas: CanvasGeometry = CanvasGeometry(),
) -> Image.Image:
    """
    Rasterize to an in-memory RGBA PIL image of width `config.size`.
    """
    out_canvas, w_px, h_px = _output_canvas(canvas, config.size)
    dpi = config.dpi
    fig = plt.figure(figsize=(w_px / dpi, h_px / dpi), dpi=dpi)
    try:
        fig.patch.set_facecolor(params.background_color.with_alpha(1.0))
        ax = fig.add_axes((0.0, 0.0, 1.0, 1.0))
        render_canvas(
            ax,
            params,
            canvas=out_canvas,
            px_to_pt=72.0 / dpi,
            show_center_marker=config.show_center_marker,
            fit=config.fit,
        )
        buffer = io.BytesIO()
        fig.savefig(buffer, format="png", dpi=dpi, facecolor=fig.get_facecolor())
    finally:
        plt.close(fig)
    buffer.seek(0)
    image = Image.open(buffer)
    image.load()
    return image.convert("RGBA")


def render_thumbnail(
    params: ParameterSet,
    size: int = 128,
    canvas: CanvasGeometry = CanvasGeometry(),
) -> Image.Image:
    return render_image(params, RenderConfig(size=size, show_center_marker=True), canvas)


def render_to_file(
    params: ParameterSet,
    out_path: str,
    config: RenderConfig = RenderConfig(),
    canvas: CanvasGeometry = CanvasGeometry(),
) -> str:
    fmt = config.format.lower()
    if fmt == "jpg":
        fmt = "jpeg"
    if fmt not in SUPPORTED_FORMATS:
        raise ValueError(f"unsupported export format: {config.format!r}")

    image = render_image(params, config, canvas)
    directory = os.path.dirname(out_path)
    try:
        if directory:
            os.makedirs(directory, exist_ok=True)
        if fmt == "jpeg":
            exif = Image.Exif()
            exif[EXIF_IMAGE_DESCRIPTION] = EXPORT_COMMENT
            image.convert("RGB").save(out_path, format="JPEG", quality=config.quality, exif=exif)
        else:
            info = PngInfo()
            info.add_text("Comment", EXPORT_COMMENT)
            image.save(out_path, format="PNG", pnginfo=info)
    except OSError as e:
        raise ExportError(f"Failed to write image {out_path}: {e}") from e
    logger.info("exported %s (%dx%d) -> %s", fmt, image.width, image.height, out_path)
    return out_path


def render_gallery_grid(
    artworks: Sequence[ParameterSet],
    out_path: str,
    titles: Optional[Sequence[str]] = None,
    cols: int = 4,
    figsize_per_cell: Tuple[float, float] = (3.0, 3.0),
    canvas: CanvasGeometry = CanvasGeometry(),
) -> None:
    """
    Renders a grid of artworks, each cropped to its content.
    """
    n = len(artworks)
    cols = max(1, cols)
    rows = max(1, (n + cols - 1) // cols)
    fig_w = figsize_per_cell[0] * cols
    fig_h = figsize_per_cell[1] * rows

    fig, axes = plt.subplots(rows, cols, figsize=(fig_w, fig_h), squeeze=False, constrained_layout=True)
    fig.patch.set_facecolor("white")
    px_to_pt = figsize_per_cell[0] * 72.0 / canvas.width

    for idx, params in enumerate(artworks):
        ax = axes[idx // cols, idx % cols]
        title = titles[idx] if titles is not None and idx < len(titles) else f"{idx}"
        render_canvas(ax, params, canvas=canvas, px_to_pt=px_to_pt, fit=True, title=title)

    for idx in range(n, rows * cols):
        axes[idx // cols, idx % cols].axis("off")

    directory = os.path.dirname(out_path)
    try:
        if directory:
            os.makedirs(directory, exist_ok=True)
        fig.savefig(out_path, dpi=200, format="png", transparent=False, facecolor="white")
    except OSError as e:
        raise ExportError(f"Failed to write gallery grid {out_path}: {e}") from e
    finally:
        plt.close(fig)
