"""
Genetic Plasma - Animated plasma effects bred from byte genomes
"""

from .genetics import Gene, Chromosome, Genome, Population
from .settings import (
    RenderingSettings, OutputMode, OutputSettings, GeneticSettings, PlasmaSettings,
    load_rendering_settings,
)
from .color import Color, LinearColor, Gradient, Palette, DitherPattern, ColorMapper
from .core import PlasmaRenderer, AsyncRenderer, export_gif, run_interactive

__version__ = "0.1.0"
__all__ = [
    'Gene', 'Chromosome', 'Genome', 'Population',
    'RenderingSettings', 'OutputMode', 'OutputSettings', 'GeneticSettings', 'PlasmaSettings',
    'load_rendering_settings',
    'Color', 'LinearColor', 'Gradient', 'Palette', 'DitherPattern', 'ColorMapper',
    'PlasmaRenderer', 'AsyncRenderer', 'export_gif', 'run_interactive',
    'render_gif',
]


def render_gif(
    output_path: str,
    genome: str = None,
    width: int = 320,
    height: int = 240,
    fps: float = 10.0,
    loop_duration: float = 60.0,
    palette_size: int = 64,
    dithering: bool = True,
) -> str:
    """
    Render a genome to a looping GIF.

    Args:
        output_path: GIF to write
        genome: Base64 genome (random if None)
        width, height: Frame size
        fps: Frames per second
        loop_duration: Seconds per loop
        palette_size: Colors in the palette
        dithering: Ordered dithering on/off

    Returns:
        Base64 of the genome that was rendered
    """
    parsed = Genome.from_base64(genome) if genome else Genome.random()
    settings = RenderingSettings(
        dithering=dithering,
        frames_per_second=fps,
        loop_duration=loop_duration,
        palette_size=palette_size,
        width=width,
        height=height,
    )
    export_gif(parsed, settings, output_path)
    return parsed.to_base64()
