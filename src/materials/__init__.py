"""Surface materials: Lambertian and Metal."""
