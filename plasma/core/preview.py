"""
Interactive Plasma Window

Shows the current genome as a live animation and lets the user steer the
population by approving or rejecting what they see.

Controls:
    +/=         - Approve: add to population, show a child
    -/_         - Reject: show a new child without adding
    P           - Print the current genome as Base64
    R           - Random genome
    ESC/Q       - Quit

Requires: pygame (pip install pygame)
"""

import logging
import time
from typing import Any, Optional

import numpy as np

from ..fastmath import wrap
from ..genetics import Genome
from .async_renderer import AsyncRenderer

# Try to import pygame
try:
    import pygame
    from pygame import Surface
    PYGAME_AVAILABLE = True
except ImportError:
    PYGAME_AVAILABLE = False
    pygame = None
    # Dummy type for annotations when pygame not installed
    Surface = Any


logger = logging.getLogger(__name__)

WINDOW_TITLE = "plasma"
EVENT_WAIT_SECONDS = 0.005


# =============================================================================
# Session State
# =============================================================================

class PlasmaState:
    """
    Current genome, population and frame clock.

    Kept apart from the window so the genetics side can run headless.
    """

    def __init__(self, genome, population, renderer, width: int, height: int, rng=None):
        self.current_genome = genome
        self.population = population
        self.renderer = renderer
        self.width = width
        self.height = height
        self.rng = rng if rng is not None else np.random.default_rng()
        self.clock_start = time.perf_counter()
        self.frame_deadline = 0.0
        self.set_genome(genome)

    def clock_seconds(self) -> float:
        return time.perf_counter() - self.clock_start

    def set_genome(self, genome) -> None:
        """Switch genomes and restart the animation clock"""
        self.current_genome = genome
        self.clock_start = time.perf_counter()
        self.renderer.set_genome(genome)
        self.renderer.render(self.width, self.height, 0.0)
        self.frame_deadline = 0.0

    def approve_current_genome(self) -> None:
        self.population.add(self.current_genome)
        self.set_genome(self.population.breed(self.rng))

    def reject_current_genome(self) -> None:
        self.set_genome(self.population.breed(self.rng))

    def randomize_current_genome(self) -> None:
        self.set_genome(Genome.random(self.rng))


# =============================================================================
# Window
# =============================================================================

def _image_to_surface(pixel_data: np.ndarray) -> Surface:
    # Pygame expects (width, height) but numpy is (height, width)
    return pygame.surfarray.make_surface(pixel_data.swapaxes(0, 1))


def run_interactive(settings) -> None:
    """
    Open the plasma window and run until the user quits.

    Args:
        settings: PlasmaSettings
    """
    if not PYGAME_AVAILABLE:
        raise ImportError(
            "pygame is required for interactive mode. Install with: pip install pygame"
        )

    rendering = settings.rendering
    frame_delay = 1.0 / rendering.frames_per_second
    time_scale = 1.0 / rendering.loop_duration

    pygame.init()
    pygame.display.set_caption(WINDOW_TITLE)
    screen = pygame.display.set_mode((rendering.width, rendering.height), pygame.RESIZABLE)
    screen.fill((0, 0, 0))
    pygame.display.flip()

    renderer = AsyncRenderer(rendering)
    state = PlasmaState(
        settings.genetics.genome,
        settings.genetics.population,
        renderer,
        rendering.width,
        rendering.height,
    )
    current_surface: Optional[Surface] = None

    try:
        running = True
        while running:
            # If a frame is due, put it on the screen and start the next one
            if state.frame_deadline <= state.clock_seconds():
                image = renderer.get_image()
                if image is not None:
                    state.frame_deadline = state.clock_seconds() + frame_delay
                    next_time = float(wrap(state.frame_deadline * time_scale))
                    renderer.render(state.width, state.height, next_time)

                    current_surface = _image_to_surface(image.pixel_data)
                    screen.blit(pygame.transform.scale(current_surface, screen.get_size()), (0, 0))
                    pygame.display.flip()

            pygame.time.wait(int(round(min(frame_delay, EVENT_WAIT_SECONDS) * 1000)))

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    running = False
                elif event.type == pygame.KEYDOWN:
                    running = _handle_key(state, event)
                elif event.type == pygame.VIDEORESIZE:
                    state.width, state.height = event.w, event.h
                    screen = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                    if current_surface is not None:
                        screen.blit(pygame.transform.scale(current_surface, (event.w, event.h)), (0, 0))
                        pygame.display.flip()
    finally:
        renderer.close(timeout=1.0)
        pygame.quit()


def _handle_key(state: PlasmaState, event) -> bool:
    """Handle keyboard input. Returns False to quit."""
    key = event.key
    if key in (pygame.K_ESCAPE, pygame.K_q):
        return False
    elif key in (pygame.K_EQUALS, pygame.K_PLUS, pygame.K_KP_PLUS):
        state.approve_current_genome()
        logger.info("Approved genome, population is now %d", len(state.population))
    elif key in (pygame.K_MINUS, pygame.K_UNDERSCORE, pygame.K_KP_MINUS):
        state.reject_current_genome()
    elif key == pygame.K_p:
        print(state.current_genome.to_base64())
    elif key == pygame.K_r:
        state.randomize_current_genome()
    return True
