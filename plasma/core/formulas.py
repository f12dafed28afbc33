"""
Plasma Formulas - The pattern chromosome decoded into a wave field

Three kinds of wave are summed, three of each:
- WaveFormula:          straight wavefronts moving across the screen
- RotatingWaveFormula:  straight wavefronts whose direction turns over time
- CircularWaveFormula:  rings spreading from a wandering center

Every time multiplier is a whole number, so the field at time 1.0 is the
field at time 0.0 and animations loop seamlessly.
"""

from dataclasses import dataclass
from typing import List, Sequence

import numpy as np

from ..fastmath import cowave, round_half_up, wave


NUM_FORMULA_GENES = 9
FORMULA_GENE_SIZE = 4
GENES_PER_KIND = 3


def byte_to_float(byte: int) -> float:
    """0-255 -> 0.0-3.98"""
    return byte / 64.0


def byte_to_ifloat(byte: int) -> float:
    """0-255 -> whole number in -8.0 to 8.0"""
    return float(round_half_up(byte / 255.0 * 16.0 - 8.0))


def _gene_bytes(gene) -> bytes:
    data = bytes(getattr(gene, 'data', gene))
    if len(data) != FORMULA_GENE_SIZE:
        raise ValueError(f"Formula gene must be {FORMULA_GENE_SIZE} bytes, got {len(data)}")
    return data


# ============================================================================
# Formulas
# ============================================================================

@dataclass(frozen=True)
class WaveFormula:
    x_stretch: float
    y_stretch: float
    scale: float
    wave_speed: float

    @classmethod
    def from_gene(cls, gene) -> 'WaveFormula':
        data = _gene_bytes(gene)
        return cls(
            x_stretch=byte_to_float(data[0]),
            y_stretch=byte_to_float(data[1]),
            scale=byte_to_float(data[2]),
            wave_speed=byte_to_ifloat(data[3]),
        )

    def get_values(self, x: np.ndarray, y: np.ndarray, time: float) -> np.ndarray:
        return self.scale * wave(x * self.x_stretch + y * self.y_stretch + time * self.wave_speed)


@dataclass(frozen=True)
class RotatingWaveFormula:
    x_time: float
    y_time: float
    scale: float
    wave_speed: float

    @classmethod
    def from_gene(cls, gene) -> 'RotatingWaveFormula':
        data = _gene_bytes(gene)
        return cls(
            x_time=byte_to_ifloat(data[0]),
            y_time=byte_to_ifloat(data[1]),
            scale=byte_to_float(data[2]),
            wave_speed=byte_to_ifloat(data[3]),
        )

    def get_values(self, x: np.ndarray, y: np.ndarray, time: float) -> np.ndarray:
        dx = wave(time * self.x_time)
        dy = cowave(time * self.y_time)
        return wave(self.scale * (x * dx + y * dy) + time * self.wave_speed)


@dataclass(frozen=True)
class CircularWaveFormula:
    x_time: float
    y_time: float
    scale: float
    wave_speed: float

    @classmethod
    def from_gene(cls, gene) -> 'CircularWaveFormula':
        data = _gene_bytes(gene)
        return cls(
            x_time=byte_to_ifloat(data[0]),
            y_time=byte_to_ifloat(data[1]),
            scale=byte_to_float(data[2]),
            wave_speed=byte_to_ifloat(data[3]),
        )

    def get_values(self, x: np.ndarray, y: np.ndarray, time: float) -> np.ndarray:
        # Center wanders around the unit square
        cx = wave(time * self.x_time)
        cy = cowave(time * self.y_time)
        dist = np.sqrt((x - cx) ** 2 + (y - cy) ** 2)
        return wave(self.scale * dist + time * self.wave_speed)


# ============================================================================
# Combined
# ============================================================================

class PlasmaFormulas:
    """All nine formulas of one pattern chromosome"""

    def __init__(
        self,
        waves: Sequence[WaveFormula],
        rotating_waves: Sequence[RotatingWaveFormula],
        circular_waves: Sequence[CircularWaveFormula],
    ):
        self.waves = list(waves)
        self.rotating_waves = list(rotating_waves)
        self.circular_waves = list(circular_waves)

    @classmethod
    def from_chromosome(cls, chromosome) -> 'PlasmaFormulas':
        genes = list(getattr(chromosome, 'genes', chromosome))
        if len(genes) != NUM_FORMULA_GENES:
            raise ValueError(f"Pattern chromosome must have {NUM_FORMULA_GENES} genes, got {len(genes)}")
        n = GENES_PER_KIND
        return cls(
            waves=[WaveFormula.from_gene(g) for g in genes[0:n]],
            rotating_waves=[RotatingWaveFormula.from_gene(g) for g in genes[n:2 * n]],
            circular_waves=[CircularWaveFormula.from_gene(g) for g in genes[2 * n:3 * n]],
        )

    @property
    def formulas(self) -> List:
        return self.waves + self.rotating_waves + self.circular_waves

    def get_values(self, x, y, time: float) -> np.ndarray:
        """
        Summed field at coordinates (x, y) and time, as float32.

        x and y broadcast against each other, so a column and a row vector
        give a full grid.
        """
        x = np.asarray(x, dtype=np.float32)
        y = np.asarray(y, dtype=np.float32)
        t = np.float32(time)
        total = np.zeros(np.broadcast(x, y).shape, dtype=np.float32)
        for formula in self.formulas:
            total += formula.get_values(x, y, t).astype(np.float32)
        return total

    def get_value(self, x: float, y: float, time: float) -> float:
        return float(self.get_values(x, y, time))
