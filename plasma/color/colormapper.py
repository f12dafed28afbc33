"""
Color Mapping

Turns the color chromosome into something the renderer can use: a function
from plasma value (a position on the gradient ring) to a palette color.

Gene layout (CONTROL_POINT_GENE_SIZE bytes):
    [activation, color_x, color_y, lightness, position]

Only genes with activation > ACTIVATION_THRESHOLD contribute a control point,
so mutations can switch gradient stops on and off.
"""

import logging
import time
from dataclasses import dataclass
from typing import List, Optional, Sequence, Union

import numpy as np

from ..fastmath import wrap
from .color import Color, LinearColor
from .dither import BAYER_SIZE, DitherPattern
from .gradient import ControlPoint, Gradient
from .palette import Palette


logger = logging.getLogger(__name__)

LOOKUP_TABLE_SIZE = 512
NUM_COLOR_GENES = 8
CONTROL_POINT_GENE_SIZE = 5
ACTIVATION_THRESHOLD = 140


def control_point_from_gene(gene) -> Optional[ControlPoint]:
    """
    Decode one color gene, or None if it is switched off.

    Accepts a Gene or a plain byte sequence.
    """
    data = bytes(getattr(gene, 'data', gene))
    if len(data) != CONTROL_POINT_GENE_SIZE:
        raise ValueError(
            f"Color gene must be {CONTROL_POINT_GENE_SIZE} bytes, got {len(data)}"
        )
    if data[0] <= ACTIVATION_THRESHOLD:
        return None

    color_x = data[1] / 255.0    # reaches 1.0
    color_y = data[2] / 255.0
    lightness = data[3] / 255.0
    position = data[4] / 256.0   # stops short of 1.0, which would wrap to 0.0

    return ControlPoint(LinearColor.from_square_hsl(color_x, color_y, lightness), position)


# =============================================================================
# Lookup Tables
# =============================================================================

@dataclass(frozen=True)
class NearestLookupTable:
    """Gradient slot -> nearest palette index"""
    palette_indexes: np.ndarray   # (LOOKUP_TABLE_SIZE,)


@dataclass(frozen=True)
class DitheredLookupTable:
    """Gradient slot -> dither pattern, plus each pattern expanded to an 8x8 tile"""
    patterns: List[DitherPattern]
    tiles: np.ndarray             # (LOOKUP_TABLE_SIZE, 8, 8)


LookupTable = Union[NearestLookupTable, DitheredLookupTable]


def build_lookup_table(samples, palette: Palette, dithering: bool) -> LookupTable:
    if dithering:
        patterns = [palette.get_dither_pattern(color) for color in samples]
        tiles = np.stack([pattern.to_tile() for pattern in patterns])
        tiles.flags.writeable = False
        return DitheredLookupTable(patterns, tiles)

    indexes = palette.get_nearest_indexes(samples)
    indexes.flags.writeable = False
    return NearestLookupTable(indexes)


def _table_index(position: float) -> int:
    return int(np.floor(wrap(position) * LOOKUP_TABLE_SIZE)) % LOOKUP_TABLE_SIZE


# =============================================================================
# Color Mapper
# =============================================================================

class ColorMapper:
    """
    Maps gradient positions to gamma-encoded palette colors.

    Immutable after construction, so one instance can be read from several
    threads at once.
    """

    def __init__(self, chromosome, settings):
        start = time.perf_counter()

        genes: Sequence = getattr(chromosome, 'genes', chromosome)
        control_points = [cp for cp in (control_point_from_gene(g) for g in genes) if cp is not None]
        gradient = Gradient(control_points)
        samples = gradient.sample(LOOKUP_TABLE_SIZE)

        palette_size = settings.palette_size or LOOKUP_TABLE_SIZE
        palette = Palette.from_samples(palette_size, samples, settings.effective_maximize_range)

        self.dithering = bool(settings.dithering)
        self._table = build_lookup_table(samples, palette, self.dithering)
        self._gamma_palette = palette.to_gamma()

        gamma_array = np.array(self._gamma_palette, dtype=np.uint8).reshape(-1, 3)
        gamma_array.flags.writeable = False
        self._gamma_array = gamma_array

        logger.debug(
            "ColorMapper: %d control points, %d colors, dithering=%s (%.1f ms)",
            len(control_points), len(palette), self.dithering,
            (time.perf_counter() - start) * 1000.0,
        )

    @property
    def lookup_table(self) -> LookupTable:
        return self._table

    @property
    def gamma_palette_array(self) -> np.ndarray:
        """Read-only (n, 3) uint8 palette"""
        return self._gamma_array

    def get_palette(self) -> List[Color]:
        return list(self._gamma_palette)

    def get_nearest_color(self, position: float) -> Color:
        if not isinstance(self._table, NearestLookupTable):
            raise RuntimeError("ColorMapper created with dithering on")
        palette_index = self._table.palette_indexes[_table_index(position)]
        return self._gamma_palette[int(palette_index)]

    def get_dithered_color(self, position: float, x: int, y: int) -> Color:
        if not isinstance(self._table, DitheredLookupTable):
            raise RuntimeError("ColorMapper created with dithering off")
        pattern = self._table.patterns[_table_index(position)]
        return self._gamma_palette[pattern.get_palette_index(x, y)]

    def get_palette_indexes(self, values: np.ndarray) -> np.ndarray:
        """
        Palette index for every value of a 2D field.

        In dithered mode the array's own (row, column) coordinates pick the
        Bayer cell, so values[y, x] is treated as pixel (x, y).
        """
        values = np.asarray(values)
        slots = np.floor(wrap(values.astype(np.float64)) * LOOKUP_TABLE_SIZE).astype(np.int64)
        slots %= LOOKUP_TABLE_SIZE

        if isinstance(self._table, NearestLookupTable):
            return self._table.palette_indexes[slots]

        ys, xs = np.indices(values.shape)
        return self._table.tiles[slots, ys % BAYER_SIZE, xs % BAYER_SIZE]

    def get_colors(self, values: np.ndarray) -> np.ndarray:
        """(h, w, 3) uint8 image for a 2D field of values"""
        return self._gamma_array[self.get_palette_indexes(values)]
