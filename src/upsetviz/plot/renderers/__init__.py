"""Chart layer renderers."""

from .base import ArtistRegistry, Renderer, chart_transform
from .bars import BarRenderer
from .labels import HitSurfaceRenderer, IntersectionLabelsRenderer, SetLabelsRenderer
from .matrix import DotMatrixRenderer, MatrixFrameRenderer
from .tooltip import Tooltip

__all__ = [
    "ArtistRegistry",
    "Renderer",
    "chart_transform",
    "BarRenderer",
    "HitSurfaceRenderer",
    "IntersectionLabelsRenderer",
    "SetLabelsRenderer",
    "DotMatrixRenderer",
    "MatrixFrameRenderer",
    "Tooltip",
]
