"""
Genetic Plasma CLI - Breed animated plasma effects

Usage:
    plasma [OPTION]... [GENOME]...

Examples:
    plasma                                  # Interactive window, random genomes
    plasma -d                               # Interactive, dithered 255-color palette
    plasma -o plasma.gif GENOME             # Render GENOME to a GIF
    plasma -o small.gif -w 160 -h 120 -f 8  # Smaller, choppier GIF
"""

import argparse
import logging
import sys
from dataclasses import replace
from typing import List, Optional

from .genetics import Genome, Population
from .settings import (
    GeneticSettings, OutputMode, OutputSettings, PlasmaSettings, RenderingSettings,
    load_rendering_settings,
)


DEFAULT_RANDOM_GENOMES = 8
MIN_POPULATION_SIZE = 32
MAX_DITHER_PALETTE_SIZE = 255


def build_parser() -> argparse.ArgumentParser:
    # -h is height, so help is long-form only
    parser = argparse.ArgumentParser(
        prog="plasma",
        description="Breed animated plasma effects, or render one to a GIF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
        epilog="""
Interactive controls:
  +         Approve the current plasma and breed a new one from the population
  -         Reject the current plasma
  p         Print the current genome
  r         Random genome
  Esc, q    Quit

Genomes are the Base64 strings printed with 'p'. With no genomes, the
population starts from random ones.
        """,
    )
    parser.add_argument('genomes', nargs='*', metavar='GENOME',
                        help='Base64 genome(s) to start the population from')
    parser.add_argument('--help', action='help', help='Show this help and exit')
    parser.add_argument('-d', '--dithering', action='store_true',
                        help='Dither to a limited palette (255 colors unless --palette is given)')
    parser.add_argument('-p', '--palette', type=int, metavar='N',
                        help='Palette size, 2-255')
    parser.add_argument('-f', '--fps', type=float, metavar='N',
                        help='Frames per second')
    parser.add_argument('-l', '--loop-duration', type=float, metavar='N',
                        help='Seconds per animation loop')
    parser.add_argument('-o', '--output', metavar='FILE',
                        help='Render one loop to a GIF instead of opening a window')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Show progress')
    parser.add_argument('-w', '--width', type=int, metavar='X',
                        help='Width in pixels (requires --height)')
    parser.add_argument('-h', '--height', type=int, metavar='Y',
                        help='Height in pixels (requires --width)')
    parser.add_argument('-c', '--config', metavar='FILE',
                        help='YAML file of rendering settings')
    return parser


def build_rendering_settings(args: argparse.Namespace) -> RenderingSettings:
    """Mode defaults, then the config file, then command line options"""
    if args.output:
        settings = RenderingSettings.for_file_output()
    else:
        settings = RenderingSettings.for_interactive()

    if args.config:
        settings = load_rendering_settings(args.config, defaults=settings)

    if (args.width is None) != (args.height is None):
        raise ValueError("--width and --height must be given together")
    if args.palette is not None and not 2 <= args.palette <= MAX_DITHER_PALETTE_SIZE:
        raise ValueError(f"Palette size must be 2-{MAX_DITHER_PALETTE_SIZE}, got {args.palette}")

    overrides = {}
    if args.dithering:
        overrides['dithering'] = True
        if settings.palette_size is None:
            overrides['palette_size'] = MAX_DITHER_PALETTE_SIZE
    if args.palette is not None:
        overrides['palette_size'] = args.palette
    if args.fps is not None:
        overrides['frames_per_second'] = args.fps
    if args.loop_duration is not None:
        overrides['loop_duration'] = args.loop_duration
    if args.width is not None:
        overrides['width'] = args.width
        overrides['height'] = args.height

    return replace(settings, **overrides)


def build_settings(args: argparse.Namespace) -> PlasmaSettings:
    rendering = build_rendering_settings(args)

    if args.genomes:
        genomes = [Genome.from_base64(text) for text in args.genomes]
    else:
        genomes = [Genome.random() for _ in range(DEFAULT_RANDOM_GENOMES)]
    population = Population(max(MIN_POPULATION_SIZE, len(genomes)), genomes)

    if args.output:
        output = OutputSettings(OutputMode.FILE, args.output, args.verbose)
    else:
        output = OutputSettings(OutputMode.INTERACTIVE, None, args.verbose)

    return PlasmaSettings(
        genetics=GeneticSettings(genome=genomes[0], population=population),
        rendering=rendering,
        output=output,
    )


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        settings = build_settings(args)
    except (ValueError, OSError) as e:
        print(f"{parser.prog}: {e}", file=sys.stderr)
        return 1

    # Imported here so --help works without the rendering stack loaded
    if settings.output.mode == OutputMode.FILE:
        from .core.exporter import export_gif
        try:
            path = export_gif(settings.genetics.genome, settings.rendering, settings.output.path)
        except (ValueError, OSError) as e:
            print(f"{parser.prog}: {e}", file=sys.stderr)
            return 1
        if args.verbose:
            print(f"Genome: {settings.genetics.genome.to_base64()}")
            print(f"Output: {path}")
    else:
        from .core.preview import run_interactive
        try:
            run_interactive(settings)
        except ImportError as e:
            print(f"{parser.prog}: {e}", file=sys.stderr)
            return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
