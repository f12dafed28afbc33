"""
Background Rendering

Renders frames on a worker thread so the preview window stays responsive
while a new genome's palette is being built.
"""

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Optional

from .renderer import Image, PlasmaRenderer


logger = logging.getLogger(__name__)


@dataclass
class _Request:
    genome: Optional[object]   # None: keep rendering the previous genome
    width: int
    height: int
    time: float


_STOP = object()


def _unwrap(item):
    if isinstance(item, Exception):
        raise item
    return item


class AsyncRenderer:
    """
    Example:
        renderer = AsyncRenderer(settings)
        renderer.set_genome(genome)
        renderer.render(320, 240, 0.0)
        ...
        image = renderer.get_image()  # None until a frame is ready
    """

    def __init__(self, settings):
        self.settings = settings
        self._requests: queue.Queue = queue.Queue()
        self._images: queue.Queue = queue.Queue()
        self._genome = None
        self._genome_set = False
        self._thread = threading.Thread(target=self._run, name="plasma-renderer", daemon=True)
        self._thread.start()

    def set_genome(self, genome) -> None:
        """Genome for the next render() call and all after it"""
        self._genome = genome
        self._genome_set = True

    def render(self, width: int, height: int, time: float) -> None:
        """Queue a frame. The result arrives later through get_image()."""
        if not self._genome_set:
            raise RuntimeError("Must call set_genome() before calling render()")
        # Only the first request after a genome change carries it
        genome, self._genome = self._genome, None
        self._requests.put(_Request(genome, width, height, time))

    def get_image(self) -> Optional[Image]:
        """Next finished frame, or None. Re-raises an error from the worker."""
        try:
            return _unwrap(self._images.get_nowait())
        except queue.Empty:
            return None

    def wait_image(self, timeout: Optional[float] = None) -> Optional[Image]:
        """Blocking get_image()"""
        try:
            item = self._images.get(timeout=timeout)
        except queue.Empty:
            return None
        return _unwrap(item)

    def close(self, timeout: Optional[float] = None) -> None:
        self._requests.put(_STOP)
        self._thread.join(timeout)

    def __enter__(self) -> 'AsyncRenderer':
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def _run(self) -> None:
        renderer: Optional[PlasmaRenderer] = None
        while True:
            request = self._requests.get()
            if request is _STOP:
                return

            # Skip to the newest request, keeping the newest genome seen on the way
            while True:
                try:
                    newer = self._requests.get_nowait()
                except queue.Empty:
                    break
                if newer is _STOP:
                    return
                if newer.genome is None:
                    newer.genome = request.genome
                request = newer

            try:
                if request.genome is not None:
                    logger.debug("Building renderer for new genome")
                    renderer = None
                    renderer = PlasmaRenderer(request.genome, self.settings)
                if renderer is None:
                    raise RuntimeError("No usable genome to render")
                self._images.put(renderer.render(request.time, request.width, request.height))
            except Exception as e:
                logger.exception("Render failed")
                # Handed to the caller, which raises it from get_image()
                self._images.put(e)
