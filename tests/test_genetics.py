import numpy as np
import pytest

from plasma.genetics import Chromosome, Gene, Genome, Population


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


def test_random_gene_length(rng):
    assert len(Gene.random(7, rng)) == 7


def test_mutate_with_zero_rate_is_identity(rng):
    gene = Gene.random(16, rng)
    assert gene.mutate(rng, rate=0.0) == gene


def test_mutate_with_full_rate_stays_in_range(rng):
    gene = Gene(bytes([0, 255, 128] * 10))
    mutated = gene.mutate(rng, rate=1.0, amount=64)
    assert len(mutated) == len(gene)
    assert mutated != gene


def test_breed_takes_genes_from_parents(rng):
    a = Chromosome.random(16, 8, rng)
    b = Chromosome.random(16, 8, rng)
    child = a.breed(b, rng)
    assert len(child) == 16
    for i, gene in enumerate(child.genes):
        assert gene == a.genes[i] or gene == b.genes[i]


def test_breed_rejects_mismatched_lengths(rng):
    with pytest.raises(ValueError):
        Chromosome.random(3, 4, rng).breed(Chromosome.random(4, 4, rng), rng)


def test_chromosome_bytes(rng):
    chromosome = Chromosome.random(3, 4, rng)
    data = chromosome.to_bytes()
    assert len(data) == 12
    assert Chromosome.from_bytes(data, 4) == chromosome
    with pytest.raises(ValueError):
        Chromosome.from_bytes(data[:-1], 4)


def test_random_genome_shape(rng):
    genome = Genome.random(rng)
    assert len(genome.pattern) == 9
    assert all(len(g) == 4 for g in genome.pattern.genes)
    assert len(genome.color) == 8
    assert all(len(g) == 5 for g in genome.color.genes)


def test_genome_base64(rng):
    genome = Genome.random(rng)
    text = genome.to_base64()
    assert Genome.from_base64(text) == genome
    assert Genome.from_base64(f"  {text}\n") == genome


@pytest.mark.parametrize('text', ['not base64!', 'AAAA'])
def test_bad_genome_text(text):
    with pytest.raises(ValueError):
        Genome.from_base64(text)


def test_genome_breed_keeps_shape(rng):
    child = Genome.random(rng).breed(Genome.random(rng), rng)
    assert len(child.pattern) == 9
    assert len(child.color) == 8


def test_population_drops_oldest(rng):
    genomes = [Genome.random(rng) for _ in range(3)]
    population = Population(2)
    for genome in genomes:
        population.add(genome)
    assert population.genomes == genomes[1:]


def test_population_breed(rng):
    population = Population(4, [Genome.random(rng), Genome.random(rng)])
    assert isinstance(population.breed(rng), Genome)
    assert isinstance(Population(4).breed(rng), Genome)
    with pytest.raises(ValueError):
        Population(0)
