"""
Genetic Plasma - Rendering and Output
"""

from .formulas import (
    PlasmaFormulas, WaveFormula, RotatingWaveFormula, CircularWaveFormula,
    NUM_FORMULA_GENES, FORMULA_GENE_SIZE,
    byte_to_float, byte_to_ifloat,
)
from .renderer import Image, PlasmaRenderer, pixel_coordinates
from .async_renderer import AsyncRenderer
from .exporter import PlasmaExporter, export_gif, render_frames
from .preview import PlasmaState, run_interactive

__all__ = [
    # Formulas
    'PlasmaFormulas', 'WaveFormula', 'RotatingWaveFormula', 'CircularWaveFormula',
    'NUM_FORMULA_GENES', 'FORMULA_GENE_SIZE',
    'byte_to_float', 'byte_to_ifloat',
    # Rendering
    'Image', 'PlasmaRenderer', 'pixel_coordinates',
    'AsyncRenderer',
    # Export
    'PlasmaExporter', 'export_gif', 'render_frames',
    # Interactive
    'PlasmaState', 'run_interactive',
]
