# core/errors.py


class RayTracerError(Exception):
    """Base class for every error raised by the ray tracer."""


class RenderWriteError(RayTracerError):
    """The output sink rejected a write. The render is aborted."""


class MeshLoadError(RayTracerError):
    """An OBJ file could not be read or contains a malformed record."""

    def __init__(self, path, message: str, line_num: int = None):
        self.path = str(path)
        self.line_num = line_num
        if line_num is None:
            super().__init__(f"{self.path}: {message}")
        else:
            super().__init__(f"{self.path}:{line_num}: {message}")


class ConfigError(RayTracerError, ValueError):
    """Invalid render configuration."""
