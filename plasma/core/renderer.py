"""
Plasma Renderer - Genome + settings -> frames
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from ..fastmath import wrap
from ..color.colormapper import ColorMapper
from .formulas import PlasmaFormulas


@dataclass
class Image:
    """A rendered RGB frame"""
    width: int
    height: int
    pixel_data: np.ndarray  # (height, width, 3) uint8


def pixel_coordinates(width: int, height: int) -> Tuple[np.ndarray, np.ndarray]:
    """
    Plasma-space coordinates of each pixel, as a column of y and a row of x.

    The image is centered on the origin and the smaller dimension spans
    [-1, 1], so the pattern keeps its proportions at any aspect ratio.
    """
    scale = 2.0 / min(width, height)
    x = np.arange(width, dtype=np.float32) * scale - width / 2.0 * scale
    y = np.arange(height, dtype=np.float32) * scale - height / 2.0 * scale
    return y[:, None].astype(np.float32), x[None, :].astype(np.float32)


class PlasmaRenderer:
    """Renders one genome at any size and time"""

    def __init__(self, genome, settings):
        self.genome = genome
        self.settings = settings
        self.formulas = PlasmaFormulas.from_chromosome(genome.pattern)
        self.color_mapper = ColorMapper(genome.color, settings)

    def get_values(self, width: int, height: int, time: float) -> np.ndarray:
        y, x = pixel_coordinates(width, height)
        return self.formulas.get_values(x, y, float(wrap(time)))

    def _frame_size(self, width, height) -> Tuple[int, int]:
        if width is None:
            width = self.settings.width
        if height is None:
            height = self.settings.height
        if width <= 0 or height <= 0:
            raise ValueError(f"Frame size must be positive, got {width}x{height}")
        return width, height

    def render_indexed(self, time: float, width: int = None, height: int = None) -> np.ndarray:
        """(height, width) palette indexes for the frame at time"""
        width, height = self._frame_size(width, height)
        return self.color_mapper.get_palette_indexes(self.get_values(width, height, time))

    def render(self, time: float, width: int = None, height: int = None) -> Image:
        width, height = self._frame_size(width, height)
        indexes = self.render_indexed(time, width, height)
        return Image(width, height, self.color_mapper.gamma_palette_array[indexes])
