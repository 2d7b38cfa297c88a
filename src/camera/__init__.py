"""Fixed pinhole camera."""
