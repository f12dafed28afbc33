"""
Ordered Dithering with Color Mixtures

Each gradient color that the palette can't hit exactly is approximated by a
mix of up to 4 palette colors in proportions out of 64. An 8x8 Bayer matrix
then decides, per pixel, which color of the mix to draw, so every 8x8 tile
contains each color in exactly its proportion.

The mix is found with Yliluoma's error-diffusion search:
http://bisqwit.iki.fi/story/howto/dither/jy/
"""

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..fastmath import clamp
from .color import MAX_LINEAR_COMPONENT, LinearColor


# =============================================================================
# Constants
# =============================================================================

BAYER_MATRIX = np.array([
    [ 0, 48, 12, 60,  3, 51, 15, 63],
    [32, 16, 44, 28, 35, 19, 47, 31],
    [ 8, 56,  4, 52, 11, 59,  7, 55],
    [40, 24, 36, 20, 43, 27, 39, 23],
    [ 2, 50, 14, 62,  1, 49, 13, 61],
    [34, 18, 46, 30, 33, 17, 45, 29],
    [10, 58,  6, 54,  9, 57,  5, 53],
    [42, 26, 38, 22, 41, 25, 37, 21],
], dtype=np.uint8)
BAYER_MATRIX.flags.writeable = False

BAYER_SIZE = 8
PROPORTION_TOTAL = 64     # one trial per Bayer cell
MAX_COLORS = 4            # colors mixed per pattern
MAX_NEW_COLOR_TRIALS = 16 # after this many trials, only reuse colors already picked


# =============================================================================
# Dither Pattern
# =============================================================================

@dataclass(frozen=True)
class DitherPattern:
    """
    Up to 4 palette colors and how many of 64 cells each gets.

    Unused slots hold index 0 with proportion 0.
    """
    palette_indexes: Tuple[int, int, int, int]
    palette_proportions: Tuple[int, int, int, int]

    def __post_init__(self):
        if len(self.palette_indexes) != MAX_COLORS or len(self.palette_proportions) != MAX_COLORS:
            raise ValueError(f"DitherPattern needs exactly {MAX_COLORS} slots")
        if sum(self.palette_proportions) != PROPORTION_TOTAL:
            raise ValueError(
                f"Proportions must total {PROPORTION_TOTAL}, got {self.palette_proportions}"
            )
        if any(p < 0 for p in self.palette_proportions):
            raise ValueError(f"Negative proportion in {self.palette_proportions}")

    @classmethod
    def from_color(cls, color: LinearColor, palette) -> 'DitherPattern':
        """
        Find the mix of palette colors that best approximates color.

        Runs 64 trials. Each trial picks the palette color nearest to the
        target minus the error accumulated so far, then adds that pick's error
        against the true target. New colors may join the mix only during the
        first 16 trials and while fewer than 4 are in use.
        """
        palette_indexes: List[int] = []
        counts: List[int] = []
        errors = [0, 0, 0]

        for trial in range(PROPORTION_TOTAL):
            target = LinearColor(*(
                clamp(component - error, 0, MAX_LINEAR_COMPONENT)
                for component, error in zip(color, errors)
            ))

            allow_new_colors = trial < MAX_NEW_COLOR_TRIALS and len(palette_indexes) < MAX_COLORS
            slot: Optional[int]
            if allow_new_colors:
                palette_index = palette.get_nearest_index(target)
                slot = palette_indexes.index(palette_index) if palette_index in palette_indexes else None
            else:
                slot = min(
                    range(len(palette_indexes)),
                    key=lambda s: target.squared_distance(palette[palette_indexes[s]]),
                )
                palette_index = palette_indexes[slot]

            if slot is None:
                palette_indexes.append(palette_index)
                counts.append(1)
            else:
                counts[slot] += 1

            chosen = palette[palette_index]
            errors = [e + c - t for e, c, t in zip(errors, chosen, color)]

        # Sorted so neighbouring gradient positions that share colors keep them
        # in the same slots. Otherwise a black->white ramp over a black/white
        # palette would swap slot order halfway and leave a visible seam.
        entries = sorted(zip(palette_indexes, counts))
        entries += [(0, 0)] * (MAX_COLORS - len(entries))
        indexes, proportions = zip(*entries)
        return cls(tuple(indexes), tuple(proportions))

    def get_palette_index(self, x: int, y: int) -> int:
        """Palette index to draw at pixel (x, y)"""
        threshold = int(BAYER_MATRIX[y % BAYER_SIZE, x % BAYER_SIZE])
        slot = 0
        cumulative = self.palette_proportions[0]
        while cumulative <= threshold:
            slot += 1
            cumulative += self.palette_proportions[slot]
        return self.palette_indexes[slot]

    def to_tile(self) -> np.ndarray:
        """8x8 array of palette indexes, tile[y, x] == get_palette_index(x, y)"""
        cumulative = np.cumsum(self.palette_proportions)
        slots = np.searchsorted(cumulative, BAYER_MATRIX, side='right')
        return np.asarray(self.palette_indexes, dtype=np.int64)[slots]
