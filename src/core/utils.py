# core/utils.py
import threading
from typing import Optional

import numpy as np

from core.vector import Vector3

_local = threading.local()


def thread_rng() -> np.random.Generator:
    """
    Returns the random generator owned by the calling thread, creating it
    from fresh OS entropy on first use.
    """
    rng = getattr(_local, "rng", None)
    if rng is None:
        rng = _local.rng = np.random.default_rng()
    return rng


def reseed_thread_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Replaces the calling thread's generator. Forked pool workers inherit the
    parent's generator state, so each worker calls this once on startup.
    """
    _local.rng = np.random.default_rng(seed)
    return _local.rng


def random_in_unit_sphere(rng) -> Vector3:
    """
    Returns a random point inside a unit sphere.
    """
    while True:
        p = Vector3(rng.uniform(-1, 1),
                    rng.uniform(-1, 1),
                    rng.uniform(-1, 1))
        if p.dot(p) < 1.0:
            return p


def random_unit_vector(rng) -> Vector3:
    """
    Returns a random unit vector (uniformly distributed over the sphere).
    """
    while True:
        p = random_in_unit_sphere(rng)
        if not p.near_zero():
            return p.normalize()


def reflect(v: Vector3, n: Vector3) -> Vector3:
    """
    Reflects vector v about the normal n.
    """
    return v - n * 2 * v.dot(n)
