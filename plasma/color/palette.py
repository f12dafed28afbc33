"""
Palette Generation

Builds a fixed-size palette from gradient samples with k-means clustering,
optionally pushing the outermost entries to the most extreme samples first so
dithering can reach the full range of the gradient.
"""

import logging
from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.spatial.distance import cdist

from .color import BLACK, MAX_LINEAR_COMPONENT, Color, LinearColor
from .dither import DitherPattern


logger = logging.getLogger(__name__)

MIN_PALETTE_SIZE = 2
MAX_PALETTE_SIZE = 65535
MAX_KMEANS_ITERATIONS = 1000


def _as_color_array(colors) -> np.ndarray:
    arr = np.asarray(colors, dtype=np.int64)
    return arr.reshape(-1, 3)


def _nearest(colors: np.ndarray, samples: np.ndarray) -> np.ndarray:
    """Index of the nearest color for every sample (first index on ties)"""
    # Linear components squared stay below 2**53, so float64 distances are exact
    dists = cdist(samples.astype(np.float64), colors.astype(np.float64), 'sqeuclidean')
    return np.argmin(dists, axis=1)


# =============================================================================
# K-Means
# =============================================================================

def kmeans_step(
    colors: np.ndarray,
    samples: np.ndarray,
    pinned: Optional[Sequence[int]] = None,
) -> Tuple[np.ndarray, bool]:
    """
    One pass of k-means.

    Assigns every sample to its nearest color, then moves each unpinned color
    that got at least one sample to the rounded mean of its samples.

    Args:
        colors: (n, 3) linear colors
        samples: (m, 3) linear colors
        pinned: color indexes to leave in place

    Returns:
        (new_colors, changed)
    """
    colors = _as_color_array(colors)
    samples = _as_color_array(samples)
    k = len(colors)

    labels = _nearest(colors, samples)
    counts = np.bincount(labels, minlength=k)
    totals = np.zeros((k, 3), dtype=np.int64)
    np.add.at(totals, labels, samples)

    movable = counts > 0
    if pinned is not None and len(pinned) > 0:
        movable[np.asarray(pinned, dtype=np.int64)] = False

    new_colors = colors.copy()
    n = counts[movable][:, None]
    # round_half_up(total / n) without leaving integers
    new_colors[movable] = (2 * totals[movable] + n) // (2 * n)

    changed = not np.array_equal(new_colors, colors)
    return new_colors, changed


def _maximize_range(colors: np.ndarray, samples: np.ndarray) -> Tuple[np.ndarray, List[int]]:
    """
    Move palette entries on the outside of the color cloud to the most extreme
    samples in their direction.

    Each entry feels a repelling force from every other entry, falling off with
    the cube of distance. An entry is on the outside when no other entry lies
    ahead of it along its force.
    """
    vectors = colors / MAX_LINEAR_COMPONENT
    sample_vectors = samples / MAX_LINEAR_COMPONENT

    deltas = vectors[:, None, :] - vectors[None, :, :]
    mag2 = np.sum(deltas * deltas, axis=2)
    scale = mag2 * mag2
    with np.errstate(divide='ignore', invalid='ignore'):
        scaled = np.where(scale[:, :, None] > 0.0, deltas / scale[:, :, None], 0.0)
    forces = scaled.sum(axis=1)

    # ahead[i, j]: entry j lies in the direction of entry i's force
    ahead = np.einsum('ik,ijk->ij', forces, -deltas) > 0.0
    outside = [int(i) for i in np.flatnonzero(~ahead.any(axis=1))]

    new_colors = colors.copy()
    for i in outside:
        scores = sample_vectors @ forces[i]
        # Last of the maxima wins
        best = len(scores) - 1 - int(np.argmax(scores[::-1]))
        new_colors[i] = samples[best]

    logger.debug("Pinned %d outside palette entries", len(outside))
    return new_colors, outside


# =============================================================================
# Palette
# =============================================================================

class Palette:
    """Fixed, ordered list of linear colors"""

    def __init__(self, colors: Sequence[LinearColor], pinned: Sequence[int] = ()):
        arr = _as_color_array(colors)
        if len(arr) == 0:
            raise ValueError("Palette needs at least one color")
        if arr.min() < 0 or arr.max() > MAX_LINEAR_COMPONENT:
            raise ValueError("Palette colors must be in [0, 65535]")
        arr = arr.copy()
        arr.flags.writeable = False
        self._colors = arr
        # Entries placed by range maximization, which k-means never moves
        self.pinned = tuple(int(i) for i in pinned)

    @classmethod
    def from_samples(
        cls,
        palette_size: int,
        samples: Sequence[LinearColor],
        maximize_range: bool = False,
    ) -> 'Palette':
        """
        Cluster samples down to palette_size colors.

        With fewer samples than palette_size, the samples are used as-is and
        the rest of the palette is black.
        """
        if not MIN_PALETTE_SIZE <= palette_size <= MAX_PALETTE_SIZE:
            raise ValueError(
                f"Palette size must be {MIN_PALETTE_SIZE}-{MAX_PALETTE_SIZE}, got {palette_size}"
            )

        sample_list = list(samples)
        if len(sample_list) <= palette_size:
            padded = sample_list + [BLACK] * (palette_size - len(sample_list))
            return cls(padded)

        sample_array = _as_color_array(sample_list)
        num_samples = len(sample_array)
        initial = [int(i * num_samples / palette_size) for i in range(palette_size)]
        colors = sample_array[initial].copy()

        pinned: List[int] = []
        if maximize_range:
            colors, pinned = _maximize_range(colors, sample_array)

        for iteration in range(MAX_KMEANS_ITERATIONS):
            colors, changed = kmeans_step(colors, sample_array, pinned)
            if not changed:
                logger.debug("k-means converged after %d iterations", iteration + 1)
                break
        else:
            logger.warning(
                "k-means did not converge after %d iterations, using last palette",
                MAX_KMEANS_ITERATIONS,
            )

        return cls(colors, pinned)

    def __len__(self) -> int:
        return len(self._colors)

    def __getitem__(self, index: int) -> LinearColor:
        r, g, b = self._colors[index]
        return LinearColor(int(r), int(g), int(b))

    def __iter__(self):
        for i in range(len(self)):
            yield self[i]

    @property
    def colors(self) -> List[LinearColor]:
        return list(self)

    @property
    def array(self) -> np.ndarray:
        """Read-only (n, 3) int64 view"""
        return self._colors

    def to_gamma(self) -> List[Color]:
        return [color.to_gamma() for color in self]

    def get_nearest_index(self, color: LinearColor) -> int:
        diffs = self._colors - np.asarray(color, dtype=np.int64)
        return int(np.argmin(np.sum(diffs * diffs, axis=1)))

    def get_nearest_indexes(self, colors) -> np.ndarray:
        """Vectorised get_nearest_index over an (m, 3) array"""
        return _nearest(self._colors, _as_color_array(colors))

    def get_dither_pattern(self, color: LinearColor) -> DitherPattern:
        return DitherPattern.from_color(color, self)
