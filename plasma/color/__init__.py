"""
Genetic Plasma - Color Pipeline
Gradient -> palette -> (optionally dithered) lookup table
"""

from .color import (
    Color, LinearColor, BLACK, WHITE,
    component_to_linear, component_to_gamma,
)
from .gradient import ControlPoint, Subgradient, Gradient
from .dither import BAYER_MATRIX, DitherPattern
from .palette import Palette, kmeans_step
from .colormapper import (
    ColorMapper, control_point_from_gene, build_lookup_table,
    NearestLookupTable, DitheredLookupTable,
    LOOKUP_TABLE_SIZE, NUM_COLOR_GENES, CONTROL_POINT_GENE_SIZE,
)

__all__ = [
    # Colors
    'Color', 'LinearColor', 'BLACK', 'WHITE',
    'component_to_linear', 'component_to_gamma',
    # Gradients
    'ControlPoint', 'Subgradient', 'Gradient',
    # Dithering
    'BAYER_MATRIX', 'DitherPattern',
    # Palettes
    'Palette', 'kmeans_step',
    # Color mapping
    'ColorMapper', 'control_point_from_gene', 'build_lookup_table',
    'NearestLookupTable', 'DitheredLookupTable',
    'LOOKUP_TABLE_SIZE', 'NUM_COLOR_GENES', 'CONTROL_POINT_GENE_SIZE',
]
