# main.py
import argparse
import logging
import sys
from pathlib import Path

from core.errors import RayTracerError
from core.vector import Vector3
from geometry.obj_loader import load_obj
from materials.presets import ColorPresets, MetalPresets
from renderer.config import QUALITY_LEVELS, DrawingMode, RayTracerConfig
from renderer.output import save_image
from renderer.raytracer import BACKENDS, RayTracer

logger = logging.getLogger("raytrace")

MODELS_DIR = Path(__file__).resolve().parent / "models"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="raytrace",
        description="Path trace the default triangle-mesh scene into an image.",
    )
    parser.add_argument("-o", "--output", default="output.ppm",
                        help="Output file; .ppm is written as plain P3, other extensions go through Pillow")
    parser.add_argument("--width", type=int, default=480, help="Image width in pixels")
    parser.add_argument("--height", type=int, default=270, help="Image height in pixels")
    parser.add_argument("--mode", choices=DrawingMode.KINDS, default=DrawingMode.SAMPLES,
                        help="What to draw")
    parser.add_argument("--samples", type=int, default=3, help="Rays per pixel in samples mode")
    parser.add_argument("--max-depth", type=int, default=5, help="Maximum bounces per ray")
    parser.add_argument("--quality", choices=list(QUALITY_LEVELS),
                        help="Preset for samples and bounces; overrides --mode/--samples/--max-depth")
    parser.add_argument("--sequential", action="store_true", help="Render on the calling thread only")
    parser.add_argument("--workers", type=int, default=None, help="Worker pool size (default: CPU count)")
    parser.add_argument("--backend", choices=BACKENDS, default="process", help="Worker pool kind")
    parser.add_argument("--models-dir", type=Path, default=MODELS_DIR,
                        help="Directory holding plane.obj and cube.obj")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    return parser


def config_from_args(args) -> RayTracerConfig:
    if args.quality:
        return RayTracerConfig.from_quality(args.quality, args.width, args.height)
    return RayTracerConfig(DrawingMode.parse(args.mode, args.samples),
                           args.width, args.height, args.max_depth)


def create_scene(ray_tracer: RayTracer, models_dir: Path = MODELS_DIR):
    """Default scene: a mirror-like floor under a diffuse cube."""
    floor = load_obj(models_dir / "plane.obj", smooth=False,
                     material=MetalPresets.mirror(ColorPresets.ROSE))
    floor.scale(4.0)
    floor.rotate(Vector3(0.0, 0.0, 0.0))
    floor.translate(Vector3(0.0, -1.4, -10.0))
    logger.info("Added floor with %d triangles at (0, -1.4, -10)", len(floor))

    cube = load_obj(models_dir / "cube.obj", smooth=False,
                    material=ColorPresets.matte(ColorPresets.SAND))
    cube.scale(1.0)
    cube.rotate(Vector3(0.0, 10.0, 0.0))
    cube.translate(Vector3(0.0, -0.4, -12.0))
    logger.info("Added cube with %d triangles at (0, -0.4, -12)", len(cube))

    ray_tracer.add_mesh(floor)
    ray_tracer.add_mesh(cube)


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        config = config_from_args(args)
        ray_tracer = RayTracer(config)
        create_scene(ray_tracer, args.models_dir)

        output = Path(args.output)
        if output.suffix.lower() == ".ppm":
            with open(output, "wb") as f:
                if args.sequential:
                    ray_tracer.run_sequential(f)
                else:
                    ray_tracer.run_parallel(f, workers=args.workers, backend=args.backend)
        else:
            image = ray_tracer.render_image(parallel=not args.sequential,
                                            workers=args.workers, backend=args.backend)
            save_image(image, output)
        logger.info("Wrote %s", output)
    except RayTracerError as e:
        logger.error("%s", e)
        return 1
    except OSError as e:
        logger.error("Failed to create %s: %s", args.output, e)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
