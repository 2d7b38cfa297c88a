"""Triangles, meshes, OBJ loading and the scene container."""
