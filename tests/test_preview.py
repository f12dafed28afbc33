import numpy as np

from plasma.core.preview import PlasmaState
from plasma.genetics import Genome, Population


class RecordingRenderer:
    def __init__(self):
        self.genomes = []
        self.requests = []

    def set_genome(self, genome):
        self.genomes.append(genome)

    def render(self, width, height, time):
        self.requests.append((width, height, time))


def make_state():
    rng = np.random.default_rng(11)
    genome = Genome.random(rng)
    population = Population(4, [Genome.random(rng)])
    return PlasmaState(genome, population, RecordingRenderer(), 32, 24, rng=rng), genome


def test_state_starts_rendering_first_frame():
    state, genome = make_state()
    assert state.renderer.genomes == [genome]
    assert state.renderer.requests == [(32, 24, 0.0)]


def test_approve_adds_to_population():
    state, genome = make_state()
    state.approve_current_genome()
    assert state.population.genomes[-1] == genome
    assert len(state.population) == 2
    assert state.renderer.genomes[-1] == state.current_genome


def test_reject_leaves_population():
    state, _ = make_state()
    state.reject_current_genome()
    assert len(state.population) == 1
    assert len(state.renderer.genomes) == 2


def test_randomize():
    state, genome = make_state()
    state.randomize_current_genome()
    assert state.current_genome != genome
    assert state.frame_deadline == 0.0
