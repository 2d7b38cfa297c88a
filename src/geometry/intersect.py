# geometry/intersect.py

import math

import numpy as np
from numba import njit

EPSILON = 1e-7
NO_HIT = -1.0


@njit(cache=True, nogil=True)
def ray_triangle_intersect(ray_origin, ray_dir, v0, v1, v2):
    """
    Ray-triangle intersection using the Möller–Trumbore algorithm.
    Triangles are two-sided. Returns (t, u, v) where t is NO_HIT when the
    ray is parallel to the triangle, misses it, or meets it at or behind
    the origin.
    """
    e1x = v1[0] - v0[0]
    e1y = v1[1] - v0[1]
    e1z = v1[2] - v0[2]
    e2x = v2[0] - v0[0]
    e2y = v2[1] - v0[1]
    e2z = v2[2] - v0[2]

    # h = dir x edge2
    hx = ray_dir[1] * e2z - ray_dir[2] * e2y
    hy = ray_dir[2] * e2x - ray_dir[0] * e2z
    hz = ray_dir[0] * e2y - ray_dir[1] * e2x
    a = e1x * hx + e1y * hy + e1z * hz

    if abs(a) < EPSILON:
        return NO_HIT, 0.0, 0.0

    f = 1.0 / a
    sx = ray_origin[0] - v0[0]
    sy = ray_origin[1] - v0[1]
    sz = ray_origin[2] - v0[2]
    u = f * (sx * hx + sy * hy + sz * hz)
    if u < 0.0 or u > 1.0:
        return NO_HIT, 0.0, 0.0

    # q = s x edge1
    qx = sy * e1z - sz * e1y
    qy = sz * e1x - sx * e1z
    qz = sx * e1y - sy * e1x
    v = f * (ray_dir[0] * qx + ray_dir[1] * qy + ray_dir[2] * qz)
    if v < 0.0 or u + v > 1.0:
        return NO_HIT, 0.0, 0.0

    t = f * (e2x * qx + e2y * qy + e2z * qz)
    if t <= EPSILON:
        return NO_HIT, 0.0, 0.0
    return t, u, v


@njit(cache=True, nogil=True)
def closest_triangle(ray_origin, ray_dir, vertices):
    """
    Scans an (n, 3, 3) vertex array and returns (index, t, u, v) of the
    winning triangle, or index -1. The winner is the hit point with the
    largest z, not the smallest t.
    """
    best_index = -1
    best_t = NO_HIT
    best_u = 0.0
    best_v = 0.0
    best_z = -math.inf
    for i in range(vertices.shape[0]):
        t, u, v = ray_triangle_intersect(ray_origin, ray_dir,
                                         vertices[i, 0], vertices[i, 1], vertices[i, 2])
        if t > 0.0:
            z = ray_origin[2] + ray_dir[2] * t
            if z > best_z:
                best_index = i
                best_t = t
                best_u = u
                best_v = v
                best_z = z
    return best_index, best_t, best_u, best_v


def pack_vertices(triangles) -> np.ndarray:
    """Packs triangle vertex positions into a contiguous (n, 3, 3) float64 array."""
    packed = np.empty((len(triangles), 3, 3), dtype=np.float64)
    for i, triangle in enumerate(triangles):
        for j, point in enumerate(triangle.points):
            packed[i, j, 0] = point.x
            packed[i, j, 1] = point.y
            packed[i, j, 2] = point.z
    return packed
