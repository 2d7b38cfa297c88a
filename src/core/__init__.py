"""Vector math, rays, random sampling helpers and error types."""
