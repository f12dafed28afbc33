"""
Plasma Exporter - Renders a full animation loop to an animated GIF
"""

import logging
import time as timer
from PIL import Image
import numpy as np
from pathlib import Path
from typing import List, Optional

from .renderer import PlasmaRenderer


logger = logging.getLogger(__name__)

GIF_MAX_COLORS = 256


class PlasmaExporter:
    """Exports rendered plasma animations"""

    @classmethod
    def indexed_frame(cls, indexes: np.ndarray, palette: np.ndarray) -> Image.Image:
        """P-mode image sharing the renderer's palette"""
        h, w = indexes.shape
        img = Image.frombytes('P', (w, h), np.ascontiguousarray(indexes, dtype=np.uint8).tobytes())
        flat = palette.astype(np.uint8).reshape(-1).tolist()
        flat += [0] * (GIF_MAX_COLORS * 3 - len(flat))
        img.putpalette(flat)
        return img

    @classmethod
    def to_gif(
        cls,
        frames: List[Image.Image],
        path: str | Path,
        duration: float = 100,
        loop: int = 0
    ) -> Path:
        """Export animation frames to GIF"""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        if not frames:
            raise ValueError("No frames to export")

        images = []
        for frame in frames:
            if frame.mode != 'P':
                # More colors than a GIF table holds
                frame = frame.convert('RGB').convert('P', palette=Image.ADAPTIVE, colors=GIF_MAX_COLORS)
            images.append(frame)

        images[0].save(
            path,
            save_all=True,
            append_images=images[1:],
            duration=duration,
            loop=loop,
            optimize=False,
        )

        return path


def render_frames(genome, settings, renderer: Optional[PlasmaRenderer] = None) -> List[Image.Image]:
    """One loop of frames, at time i / frame_count"""
    renderer = renderer or PlasmaRenderer(genome, settings)
    palette = renderer.color_mapper.gamma_palette_array
    indexed = len(palette) <= GIF_MAX_COLORS
    frame_count = settings.frame_count

    frames = []
    for i in range(frame_count):
        t = i / frame_count
        if indexed:
            frames.append(PlasmaExporter.indexed_frame(renderer.render_indexed(t), palette))
        else:
            frames.append(Image.fromarray(renderer.render(t).pixel_data))
        if (i + 1) % 10 == 0 or i + 1 == frame_count:
            logger.info("Rendered frame %d/%d", i + 1, frame_count)
    return frames


def export_gif(genome, settings, path: str | Path) -> Path:
    """
    Render one loop of genome and write it as an infinitely looping GIF.

    Returns:
        Path written
    """
    start = timer.perf_counter()
    logger.info(
        "Exporting %dx%d, %d frames at %g fps to %s",
        settings.width, settings.height, settings.frame_count, settings.frames_per_second, path,
    )
    frames = render_frames(genome, settings)
    out = PlasmaExporter.to_gif(frames, path, duration=1000.0 / settings.frames_per_second)
    logger.info("Wrote %s in %.1f s", out, timer.perf_counter() - start)
    return out
