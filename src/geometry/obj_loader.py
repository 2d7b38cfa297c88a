# geometry/obj_loader.py
import logging
from pathlib import Path
from typing import List, Optional, Tuple, Union

from core.errors import MeshLoadError
from core.vector import Vector3
from geometry.mesh import Triangle, TriangleMesh
from materials.material import Material

logger = logging.getLogger(__name__)


def _resolve(index: int, count: int) -> int:
    # OBJ indices are 1-based; negative ones count back from the last record.
    if index < 0:
        resolved = count + index
    else:
        resolved = index - 1
    if not 0 <= resolved < count:
        raise IndexError(f"index {index} out of range (have {count})")
    return resolved


def _parse_corner(corner: str) -> Tuple[int, Optional[int]]:
    """Splits a face corner ("v", "v/vt", "v//vn" or "v/vt/vn") into vertex and normal indices."""
    indices = corner.split('/')
    v_idx = int(indices[0])
    n_idx = int(indices[2]) if len(indices) > 2 and indices[2] else None
    return v_idx, n_idx


def load_obj(filename: Union[str, Path], smooth: bool = False,
             material: Optional[Material] = None) -> TriangleMesh:
    """
    Load a triangle mesh from an OBJ file.

    Polygonal faces are split into a triangle fan. The face normal is the
    normal of a face's first corner when the file provides normals, and is
    computed from the winding otherwise. With `smooth` set, each triangle
    keeps its three corner normals for interpolated shading.

    Raises:
        MeshLoadError: if the file cannot be read or a record is malformed
    """
    vertices: List[Vector3] = []
    normals: List[Vector3] = []
    triangles: List[Triangle] = []

    try:
        f = open(filename, 'r')
    except OSError as e:
        raise MeshLoadError(filename, f"cannot open file: {e.strerror or e}") from e

    with f:
        for line_num, line in enumerate(f, 1):
            values = line.split()
            if not values or values[0].startswith('#'):
                continue
            try:
                if values[0] == 'v':
                    vertices.append(Vector3(float(values[1]), float(values[2]), float(values[3])))
                elif values[0] == 'vn':
                    normals.append(Vector3(float(values[1]), float(values[2]), float(values[3])))
                elif values[0] == 'f':
                    corners = [_parse_corner(c) for c in values[1:]]
                    if len(corners) < 3:
                        raise ValueError(f"face needs at least 3 corners, got {len(corners)}")
                    points = [vertices[_resolve(v, len(vertices))] for v, _ in corners]
                    if all(n is not None for _, n in corners):
                        corner_normals = [normals[_resolve(n, len(normals))] for _, n in corners]
                    else:
                        corner_normals = None

                    for i in range(1, len(corners) - 1):
                        if corner_normals is None:
                            triangle = Triangle(points[0], points[i], points[i + 1])
                        elif smooth:
                            triangle = Triangle(points[0], points[i], points[i + 1],
                                                normal=corner_normals[0],
                                                normals=[corner_normals[0], corner_normals[i],
                                                         corner_normals[i + 1]],
                                                smooth=True)
                        else:
                            triangle = Triangle(points[0], points[i], points[i + 1],
                                                normal=corner_normals[0])
                        triangles.append(triangle)
            except (ValueError, IndexError) as e:
                logger.error("Error processing line %d of %s: %s", line_num, filename, line.strip())
                raise MeshLoadError(filename, str(e), line_num) from e

    logger.info("Loaded %s: %d vertices, %d normals, %d triangles",
                filename, len(vertices), len(normals), len(triangles))
    return TriangleMesh(triangles, material)
