"""
Genetics - Byte-level genes, chromosomes and genomes

This module only knows how to mix and mutate bytes. What a gene *means*
(a control point, a wave formula) is decided by the modules that decode it.

A genome has two chromosomes:
- pattern: decoded by core.formulas into the plasma wave field
- color:   decoded by color.colormapper into the gradient and palette
"""

import base64
import binascii
from collections import deque
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np


MUTATION_RATE = 0.05    # chance per byte of mutating when breeding
MUTATION_AMOUNT = 32    # largest offset added to a mutated byte


def _default_rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


# ============================================================================
# Gene / Chromosome
# ============================================================================

@dataclass(frozen=True)
class Gene:
    """A run of bytes, interpreted by whoever decodes it"""
    data: bytes

    @classmethod
    def random(cls, num_bytes: int, rng: Optional[np.random.Generator] = None) -> 'Gene':
        rng = _default_rng(rng)
        return cls(bytes(rng.integers(0, 256, size=num_bytes, dtype=np.uint8)))

    def mutate(
        self,
        rng: Optional[np.random.Generator] = None,
        rate: float = MUTATION_RATE,
        amount: int = MUTATION_AMOUNT,
    ) -> 'Gene':
        """Copy with each byte offset by up to +/-amount (mod 256) with probability rate"""
        rng = _default_rng(rng)
        data = np.frombuffer(self.data, dtype=np.uint8).astype(np.int64)
        mask = rng.random(len(data)) < rate
        offsets = rng.integers(-amount, amount + 1, size=len(data))
        data = np.where(mask, (data + offsets) % 256, data)
        return Gene(bytes(data.astype(np.uint8)))

    def __len__(self) -> int:
        return len(self.data)


@dataclass(frozen=True)
class Chromosome:
    genes: Tuple[Gene, ...]

    def __post_init__(self):
        object.__setattr__(self, 'genes', tuple(self.genes))

    @classmethod
    def random(
        cls,
        num_genes: int,
        gene_size: int,
        rng: Optional[np.random.Generator] = None,
    ) -> 'Chromosome':
        rng = _default_rng(rng)
        return cls(tuple(Gene.random(gene_size, rng) for _ in range(num_genes)))

    def breed(self, other: 'Chromosome', rng: Optional[np.random.Generator] = None) -> 'Chromosome':
        """Child takes each gene from one parent or the other"""
        if len(self.genes) != len(other.genes):
            raise ValueError(
                f"Cannot breed chromosomes with {len(self.genes)} and {len(other.genes)} genes"
            )
        rng = _default_rng(rng)
        picks = rng.random(len(self.genes)) < 0.5
        return Chromosome(tuple(
            a if pick else b for a, b, pick in zip(self.genes, other.genes, picks)
        ))

    def mutate(
        self,
        rng: Optional[np.random.Generator] = None,
        rate: float = MUTATION_RATE,
        amount: int = MUTATION_AMOUNT,
    ) -> 'Chromosome':
        rng = _default_rng(rng)
        return Chromosome(tuple(gene.mutate(rng, rate, amount) for gene in self.genes))

    def to_bytes(self) -> bytes:
        return b''.join(gene.data for gene in self.genes)

    @classmethod
    def from_bytes(cls, data: bytes, gene_size: int) -> 'Chromosome':
        if gene_size <= 0 or len(data) % gene_size != 0:
            raise ValueError(f"{len(data)} bytes do not split into genes of {gene_size}")
        return cls(tuple(
            Gene(bytes(data[i:i + gene_size])) for i in range(0, len(data), gene_size)
        ))

    def __len__(self) -> int:
        return len(self.genes)


# ============================================================================
# Genome
# ============================================================================

def _chromosome_shapes() -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """(num_genes, gene_size) for the pattern and color chromosomes"""
    from .core.formulas import NUM_FORMULA_GENES, FORMULA_GENE_SIZE
    from .color.colormapper import NUM_COLOR_GENES, CONTROL_POINT_GENE_SIZE
    return (NUM_FORMULA_GENES, FORMULA_GENE_SIZE), (NUM_COLOR_GENES, CONTROL_POINT_GENE_SIZE)


@dataclass(frozen=True)
class Genome:
    pattern: Chromosome
    color: Chromosome

    @classmethod
    def random(cls, rng: Optional[np.random.Generator] = None) -> 'Genome':
        rng = _default_rng(rng)
        (pattern_genes, pattern_size), (color_genes, color_size) = _chromosome_shapes()
        return cls(
            pattern=Chromosome.random(pattern_genes, pattern_size, rng),
            color=Chromosome.random(color_genes, color_size, rng),
        )

    def breed(
        self,
        other: 'Genome',
        rng: Optional[np.random.Generator] = None,
        mutation_rate: float = MUTATION_RATE,
    ) -> 'Genome':
        rng = _default_rng(rng)
        return Genome(
            pattern=self.pattern.breed(other.pattern, rng).mutate(rng, mutation_rate),
            color=self.color.breed(other.color, rng).mutate(rng, mutation_rate),
        )

    def to_base64(self) -> str:
        """Pattern bytes followed by color bytes"""
        data = self.pattern.to_bytes() + self.color.to_bytes()
        return base64.b64encode(data).decode('ascii')

    @classmethod
    def from_base64(cls, text: str) -> 'Genome':
        """
        Parse a genome printed by to_base64().

        Raises:
            ValueError: not Base64, or the wrong number of bytes
        """
        try:
            data = base64.b64decode(text.strip(), validate=True)
        except binascii.Error as e:
            raise ValueError(f"Invalid genome {text!r}: {e}") from e

        (pattern_genes, pattern_size), (color_genes, color_size) = _chromosome_shapes()
        pattern_len = pattern_genes * pattern_size
        expected = pattern_len + color_genes * color_size
        if len(data) != expected:
            raise ValueError(
                f"Invalid genome {text!r}: expected {expected} bytes, got {len(data)}"
            )
        return cls(
            pattern=Chromosome.from_bytes(data[:pattern_len], pattern_size),
            color=Chromosome.from_bytes(data[pattern_len:], color_size),
        )


# ============================================================================
# Population
# ============================================================================

class Population:
    """
    The genomes a user has approved so far.

    Bounded: once full, adding a genome drops the oldest.
    """

    def __init__(self, max_size: int, genomes: Iterable[Genome] = ()):
        if max_size < 1:
            raise ValueError(f"Population size must be at least 1, got {max_size}")
        self.max_size = max_size
        self._genomes = deque(genomes, maxlen=max_size)

    def add(self, genome: Genome) -> None:
        self._genomes.append(genome)

    def __len__(self) -> int:
        return len(self._genomes)

    @property
    def genomes(self) -> List[Genome]:
        return list(self._genomes)

    def breed(self, rng: Optional[np.random.Generator] = None) -> Genome:
        """
        Child of two members picked at random (possibly the same one).

        An empty population yields a random genome.
        """
        rng = _default_rng(rng)
        if not self._genomes:
            return Genome.random(rng)
        a = self._genomes[int(rng.integers(len(self._genomes)))]
        b = self._genomes[int(rng.integers(len(self._genomes)))]
        return a.breed(b, rng)
