# renderer/config.py
import numbers

from core.errors import ConfigError


def _is_int(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


# Named presets, from fastest to best looking.
QUALITY_LEVELS = {
    "interactive": {"samples": 1, "bounces": 2},
    "balanced": {"samples": 4, "bounces": 4},
    "high_quality": {"samples": 8, "bounces": 6},
}


class DrawingMode:
    """
    What a render produces:
    * COLORS  - the flat albedo of whatever each pixel's ray hits
    * NORMALS - the surface normal, remapped to [0, 1]
    * SAMPLES - the path-traced image with `samples` rays per pixel
    """
    COLORS = "colors"
    NORMALS = "normals"
    SAMPLES = "samples"
    KINDS = (COLORS, NORMALS, SAMPLES)

    def __init__(self, kind: str, samples: int = 1):
        if kind not in self.KINDS:
            raise ConfigError(f"Unknown drawing mode {kind!r}, expected one of {', '.join(self.KINDS)}")
        if kind == self.SAMPLES and not _is_int(samples):
            raise ConfigError(f"Sample count must be an integer, got {samples!r}")
        if kind == self.SAMPLES and samples <= 0:
            raise ConfigError(f"Sample count must be positive, got {samples}")
        self.kind = kind
        self.samples = samples if kind == self.SAMPLES else 1

    @classmethod
    def colors(cls) -> "DrawingMode":
        return cls(cls.COLORS)

    @classmethod
    def normals(cls) -> "DrawingMode":
        return cls(cls.NORMALS)

    @classmethod
    def sampled(cls, samples: int) -> "DrawingMode":
        return cls(cls.SAMPLES, samples)

    @classmethod
    def parse(cls, name: str, samples: int = 1) -> "DrawingMode":
        return cls(name.strip().lower(), samples)

    @property
    def is_sampled(self) -> bool:
        return self.kind == self.SAMPLES

    def __eq__(self, other) -> bool:
        if not isinstance(other, DrawingMode):
            return NotImplemented
        return self.kind == other.kind and self.samples == other.samples

    def __hash__(self) -> int:
        return hash((self.kind, self.samples))

    def __repr__(self) -> str:
        if self.is_sampled:
            return f"DrawingMode.sampled({self.samples})"
        return f"DrawingMode.{self.kind}()"


class RayTracerConfig:
    """Image size, drawing mode and bounce budget for one render."""

    def __init__(self, mode: DrawingMode = None, width: int = 480, height: int = 270,
                 max_depth: int = 5):
        self.mode = mode if mode is not None else DrawingMode.sampled(3)
        self.width = width
        self.height = height
        self.max_depth = max_depth
        self.validate()

    def validate(self):
        if not isinstance(self.mode, DrawingMode):
            raise ConfigError(f"mode must be a DrawingMode, got {self.mode!r}")
        for name in ("width", "height", "max_depth"):
            value = getattr(self, name)
            if not _is_int(value):
                raise ConfigError(f"{name} must be an integer, got {value!r}")
        if self.width <= 0 or self.height <= 0:
            raise ConfigError(f"Image size must be positive, got {self.width}x{self.height}")
        if self.max_depth < 0:
            raise ConfigError(f"max_depth must be >= 0, got {self.max_depth}")

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def replace(self, **changes) -> "RayTracerConfig":
        """Returns a validated copy with the given fields changed."""
        values = {
            "mode": self.mode,
            "width": self.width,
            "height": self.height,
            "max_depth": self.max_depth,
        }
        unknown = set(changes) - set(values)
        if unknown:
            raise ConfigError(f"Unknown config field(s): {', '.join(sorted(unknown))}")
        values.update(changes)
        return RayTracerConfig(**values)

    @classmethod
    def from_quality(cls, name: str, width: int = 480, height: int = 270) -> "RayTracerConfig":
        try:
            quality = QUALITY_LEVELS[name]
        except KeyError:
            raise ConfigError(
                f"Unknown quality level {name!r}, expected one of {', '.join(QUALITY_LEVELS)}"
            ) from None
        return cls(DrawingMode.sampled(quality["samples"]), width, height, quality["bounces"])

    def __repr__(self) -> str:
        return (f"RayTracerConfig(mode={self.mode!r}, width={self.width}, "
                f"height={self.height}, max_depth={self.max_depth})")
