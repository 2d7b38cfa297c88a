"""Render configuration, the ray tracer and image output."""
