from typing import Dict, Optional, Tuple

from coloring.gradient import Color, LinearGradient, BLACK
from rendering.simulator import FrameResult
from rendering.surface import RasterSurface
from utils.coords import PlaneMapper


def render(frame: FrameResult, gradient: LinearGradient, mapper: PlaneMapper,
           surface: RasterSurface, point_size: Optional[Tuple[float, float]] = None,
           background: Color = BLACK) -> None:
    """
    Paint a simulated frame. Every escaped sample becomes a point_size rectangle
    colored by its escape count; in-set samples are left as background.
    """
    if point_size is None:
        point_size = mapper.point_size(frame.resolution)
    pw, ph = point_size

    surface.clear(background)

    # Escape counts repeat heavily across a frame.
    colors: Dict[int, Color] = {}
    for record in frame.records():
        color = colors.get(record.escape)
        if color is None:
            color = colors[record.escape] = gradient.color_at(record.escape)
        px, py = mapper.to_raster(record.point)
        surface.fill_rect(px, py, pw, ph, color)
