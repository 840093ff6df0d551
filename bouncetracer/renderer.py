"""
Renderer module - the sampling loop around the bounce engine.

Implements:
- Jittered multi-sample antialiasing with running per-pixel averages
- Multi-threaded rendering with private per-worker buffers
- Seedable, reproducible random streams
- Gamma correction and 8-bit RGBA conversion
"""

from __future__ import annotations
import logging
import numbers
import os
import threading
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Callable, Optional

import numpy as np

from .camera import PinholeCamera
from .bouncer import trace
from .shapes import Scene, Hittable

logger = logging.getLogger(__name__)


def _is_integer(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


@dataclass
class RenderSettings:
    """Configuration for the renderer."""
    width: int = 512
    height: int = 512
    samples_per_pixel: int = 256
    max_depth: int = 1000
    num_threads: int = 0  # 0 = one worker per CPU core
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ('width', 'height', 'samples_per_pixel', 'max_depth'):
            value = getattr(self, name)
            if not _is_integer(value) or value <= 0:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
            setattr(self, name, int(value))
        if not _is_integer(self.num_threads) or self.num_threads < 0:
            raise ValueError(f"num_threads must be an integer >= 0, got {self.num_threads!r}")
        self.num_threads = int(self.num_threads)
        if self.num_threads == 0:
            self.num_threads = os.cpu_count() or 4

    @property
    def pixel_count(self) -> int:
        return self.width * self.height


class Renderer:
    """Monte Carlo renderer over a brute-force object list."""

    def __init__(self, settings: RenderSettings = None, camera: PinholeCamera = None):
        """Create a renderer with the given settings.

        Args:
            settings: Render configuration (uses defaults if None)
            camera: Camera to shoot primary rays from (default pinhole if None)
        """
        self.settings = settings if settings else RenderSettings()
        self.camera = camera if camera else PinholeCamera()
        self._progress_callback: Optional[Callable[[float], None]] = None

    def set_progress_callback(self, callback: Callable[[float], None]) -> None:
        """Set a callback function for progress updates.

        Args:
            callback: Function that takes progress as float (0.0 to 1.0)
        """
        self._progress_callback = callback

    def render(self, scene: Scene) -> np.ndarray:
        """Render the scene into a flat buffer of linear colors.

        Args:
            scene: Objects to render; must not be modified during the call

        Returns:
            Array of shape (width * height, 3), row-major with the top row
            first, so pixel (x, y) is at index y * width + x
        """
        settings = self.settings
        workers = min(settings.num_threads, settings.samples_per_pixel)
        sample_counts = self._split_samples(settings.samples_per_pixel, workers)
        seeds = np.random.SeedSequence(settings.seed).spawn(workers)

        total_rows = settings.height * settings.samples_per_pixel
        completed_rows = [0]
        lock = threading.Lock()

        def row_done() -> None:
            with lock:
                completed_rows[0] += 1
                if self._progress_callback:
                    self._progress_callback(completed_rows[0] / total_rows)

        logger.info(
            "Rendering %dx%d, %d samples, max depth %d, %d object(s) on %d worker(s)",
            settings.width, settings.height, settings.samples_per_pixel,
            settings.max_depth, len(scene), workers
        )
        start_time = time.perf_counter()

        def render_worker(index: int) -> np.ndarray:
            rng = np.random.default_rng(seeds[index])
            buffer = self._render_pass(scene, sample_counts[index], rng, row_done)
            logger.debug("Worker %d finished %d sample(s)", index, sample_counts[index])
            return buffer

        if workers > 1:
            with ThreadPoolExecutor(max_workers=workers) as executor:
                buffers = list(executor.map(render_worker, range(workers)))
        else:
            buffers = [render_worker(0)]

        # Weighted merge of the per-worker averages
        if len(buffers) == 1:
            image = buffers[0]
        else:
            image = np.zeros((settings.pixel_count, 3), dtype=np.float64)
            for buffer, count in zip(buffers, sample_counts):
                image += buffer * count
            image /= settings.samples_per_pixel

        logger.info("Render finished in %.2fs", time.perf_counter() - start_time)
        return image

    def _render_pass(
        self,
        scene: Scene,
        samples: int,
        rng: np.random.Generator,
        row_done: Callable[[], None]
    ) -> np.ndarray:
        """Render every pixel ``samples`` times into a private buffer."""
        width = self.settings.width
        height = self.settings.height
        max_depth = self.settings.max_depth
        buffer = np.zeros((width * height, 3), dtype=np.float64)

        for n in range(samples):
            for y in range(height):
                row = y * width
                for x in range(width):
                    ray = self.camera.get_ray(x, y, width, height, rng)
                    color = trace(ray, scene, max_depth, rng)
                    index = row + x
                    buffer[index] = (buffer[index] * n + color.to_array()) / (n + 1)
                row_done()

        return buffer

    @staticmethod
    def _split_samples(samples: int, workers: int) -> list[int]:
        """Share ``samples`` among ``workers`` as evenly as possible."""
        base, extra = divmod(samples, workers)
        return [base + 1 if i < extra else base for i in range(workers)]


def render(
    scene: Scene | list[Hittable],
    image_width: int,
    image_height: int,
    sample_num: int,
    max_depth: int,
    seed: Optional[int] = None,
    num_threads: int = 0
) -> np.ndarray:
    """Render ``scene`` from the default pinhole camera.

    Returns:
        Linear colors of shape (image_width * image_height, 3), top row first
    """
    if not isinstance(scene, Scene):
        scene = Scene(scene)
    settings = RenderSettings(
        width=image_width,
        height=image_height,
        samples_per_pixel=sample_num,
        max_depth=max_depth,
        num_threads=num_threads,
        seed=seed
    )
    return Renderer(settings).render(scene)


def to_image(buffer: np.ndarray, width: int, height: int) -> np.ndarray:
    """Reshape a flat pixel buffer to (height, width, 3)."""
    return np.asarray(buffer, dtype=np.float64).reshape(height, width, 3)


def to_rgba8(buffer: np.ndarray, width: int, height: int) -> np.ndarray:
    """Convert linear colors to display-ready 8-bit RGBA.

    This is the only place gamma is applied: each channel goes through a
    square root (gamma 2.0) and is scaled by 256, truncated and saturated
    to [0, 255]. Alpha is always 255.

    Returns:
        uint8 array of shape (height, width, 4)
    """
    image = to_image(buffer, width, height)
    corrected = np.sqrt(np.clip(image, 0.0, None))
    rgb = np.clip(np.floor(corrected * 256.0), 0, 255).astype(np.uint8)
    alpha = np.full((height, width, 1), 255, dtype=np.uint8)
    return np.concatenate([rgb, alpha], axis=2)
