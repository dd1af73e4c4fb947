# Re-export the rendering adapters for convenience
from .renderer import (
    ExportError,
    RenderConfig,
    render_canvas,
    render_image,
    render_thumbnail,
    render_to_file,
    render_gallery_grid,
)
from .vectorizer import draw_primitives_on_axis, primitives_bounds
