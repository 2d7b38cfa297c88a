# renderer/raytracer.py
import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor, ThreadPoolExecutor
from typing import List, Optional

import numpy as np

from camera.camera import Camera
from core.errors import ConfigError
from core.ray import Ray
from core.utils import reseed_thread_rng, thread_rng
from core.vector import Vector3
from geometry.mesh import TriangleMesh
from geometry.world import World
from renderer.config import DrawingMode, RayTracerConfig
from renderer.output import encode_color, write_color, write_header

logger = logging.getLogger(__name__)

BLACK = Vector3(0.0, 0.0, 0.0)
WHITE = Vector3(1.0, 1.0, 1.0)
SKY_BLUE = Vector3(0.5, 0.7, 1.0)

BACKENDS = ("process", "thread")

# Tracer snapshot owned by a process-pool worker, installed by _init_worker.
_worker_tracer = None


def _init_worker(tracer: "RayTracer"):
    global _worker_tracer
    _worker_tracer = tracer
    reseed_thread_rng()


def _render_row_in_worker(y: int) -> List[Vector3]:
    return _worker_tracer.render_row(y)


def background(ray: Ray) -> Vector3:
    """
    Sky gradient from white at the bottom to light blue at the top, keyed
    on the raw direction. Camera rays span y in [-1, 1] across the viewport;
    scattered rays can leave that range, so t is clamped.
    """
    t = 0.5 * (ray.direction.y + 1.0)
    t = min(max(t, 0.0), 1.0)
    return WHITE * (1.0 - t) + SKY_BLUE * t


class RayTracer:
    """
    Renders the meshes of a World through a fixed Camera.

    Meshes must all be added before the first render; the scene is only
    read while pixels are computed, so it can be shared with pool workers.
    """
    def __init__(self, config: Optional[RayTracerConfig] = None):
        self.config = config if config is not None else RayTracerConfig()
        self.camera = Camera(self.config.aspect_ratio)
        self.world = World()

    def add_mesh(self, mesh: TriangleMesh):
        self.world.add(mesh)

    # -----------------------------------------------------------------
    # Per-pixel evaluation

    def pixel_ray(self, x: int, y: int, rng=None) -> Ray:
        """
        Camera ray for pixel (x, y), with y = 0 the bottom row. With an rng
        the ray is jittered by uniform [0, 1) offsets added to x and y.
        """
        u_span = max(self.config.width - 1, 1)
        v_span = max(self.config.height - 1, 1)
        if rng is None:
            return self.camera.get_ray(x / u_span, y / v_span)
        u = (x + rng.random()) / u_span
        v = (y + rng.random()) / v_span
        return self.camera.get_ray(u, v)

    def generate_pixel(self, x: int, y: int, rng=None) -> Vector3:
        """
        Unencoded color of one pixel. In sampled mode this is the sum over
        all samples; encoding divides by the sample count.
        """
        mode = self.config.mode
        if mode.kind == DrawingMode.COLORS:
            return self.flat_color(self.pixel_ray(x, y))
        if mode.kind == DrawingMode.NORMALS:
            return self.normal_color(self.pixel_ray(x, y))

        if rng is None:
            rng = thread_rng()
        color = Vector3(0.0, 0.0, 0.0)
        for _ in range(mode.samples):
            r = self.pixel_ray(x, y, rng)
            color = color + self.ray_color(r, self.config.max_depth, rng)
        return color

    def flat_color(self, ray: Ray) -> Vector3:
        hit = self.world.hit(ray)
        if hit.is_hit:
            return hit.material.albedo
        return background(ray)

    def normal_color(self, ray: Ray) -> Vector3:
        hit = self.world.hit(ray)
        if hit.is_hit:
            n = hit.normal
            return Vector3(n.x + 1.0, n.y + 1.0, n.z + 1.0) * 0.5
        return background(ray)

    def ray_color(self, ray: Ray, depth: int, rng=None) -> Vector3:
        """
        Path-traced color of a ray: the product of the attenuations along
        the bounce chain times the sky it escapes to, or black once the
        bounce budget runs out or a surface absorbs the ray.
        """
        if depth <= 0:
            return BLACK

        hit = self.world.hit(ray)
        if not hit.is_hit:
            return background(ray)

        if rng is None:
            rng = thread_rng()
        result = hit.material.scatter(ray, hit, rng)
        if result is None:
            return BLACK
        scattered, attenuation = result
        return attenuation * self.ray_color(scattered, depth - 1, rng)

    # -----------------------------------------------------------------
    # Whole-image rendering

    def rows(self) -> range:
        """Scanline order of the output: top row first."""
        return range(self.config.height - 1, -1, -1)

    def render_row(self, y: int) -> List[Vector3]:
        return [self.generate_pixel(x, y) for x in range(self.config.width)]

    def render_pixels(self, workers: Optional[int] = None,
                      backend: str = "process") -> List[List[Vector3]]:
        """
        Computes every row on a worker pool and returns them in output
        order. Rows are computed in any order; map() hands them back in
        submission order.
        """
        if backend not in BACKENDS:
            raise ConfigError(f"Unknown backend {backend!r}, expected one of {', '.join(BACKENDS)}")
        if workers is not None and workers < 1:
            raise ConfigError(f"workers must be >= 1, got {workers}")

        rows = list(self.rows())
        n_workers = workers or os.cpu_count() or 1
        logger.debug("Rendering %d rows on %d %s workers", len(rows), n_workers, backend)

        if backend == "thread":
            with ThreadPoolExecutor(max_workers=n_workers) as pool:
                return list(pool.map(self.render_row, rows))

        chunksize = max(1, len(rows) // (n_workers * 4))
        with ProcessPoolExecutor(max_workers=n_workers, initializer=_init_worker,
                                 initargs=(self,)) as pool:
            return list(pool.map(_render_row_in_worker, rows, chunksize=chunksize))

    def run_sequential(self, output):
        """Renders pixel by pixel, writing each one to `output` as soon as it is done."""
        start = self._log_start("sequential")
        mode = self.config.mode
        write_header(output, self.config.width, self.config.height)

        for y in self.rows():
            for x in range(self.config.width):
                write_color(output, encode_color(self.generate_pixel(x, y), mode))

        self._log_done(start)

    def run_parallel(self, output, workers: Optional[int] = None, backend: str = "process"):
        """
        Renders on a worker pool, then writes all pixels in scanline order
        from the calling thread.
        """
        start = self._log_start(f"parallel/{backend}")
        mode = self.config.mode
        write_header(output, self.config.width, self.config.height)

        for row in self.render_pixels(workers, backend):
            for pixel in row:
                write_color(output, encode_color(pixel, mode))

        self._log_done(start)

    def render_image(self, parallel: bool = True, workers: Optional[int] = None,
                     backend: str = "process") -> np.ndarray:
        """Renders and encodes into a (height, width, 3) uint8 array, top row first."""
        start = self._log_start(f"parallel/{backend}" if parallel else "sequential")
        if parallel:
            rows = self.render_pixels(workers, backend)
        else:
            rows = [self.render_row(y) for y in self.rows()]

        mode = self.config.mode
        image = np.empty((self.config.height, self.config.width, 3), dtype=np.uint8)
        for i, row in enumerate(rows):
            for x, pixel in enumerate(row):
                image[i, x] = encode_color(pixel, mode)

        self._log_done(start)
        return image

    def _log_start(self, path: str) -> float:
        cfg = self.config
        logger.info("Rendering %dx%d %r, max depth %d, %d triangles (%s)",
                    cfg.width, cfg.height, cfg.mode, cfg.max_depth,
                    self.world.triangle_count, path)
        return time.perf_counter()

    def _log_done(self, start: float):
        logger.info("Render finished in %.2fs", time.perf_counter() - start)
