# camera/camera.py
from core.vector import Vector3
from core.ray import Ray

class Camera:
    """
    Fixed pinhole camera at the origin looking down -z. The viewport is
    `viewport_height` tall and `aspect_ratio` times as wide, placed
    `focal_length` in front of the origin.
    """
    def __init__(self, aspect_ratio: float, viewport_height: float = 2.0, focal_length: float = 5.0):
        self.aspect_ratio = aspect_ratio
        self.viewport_height = viewport_height
        self.focal_length = focal_length
        self.origin = Vector3(0.0, 0.0, 0.0)
        self.update_camera()

    def update_camera(self):
        """Computes the viewport extents and its lower-left corner."""
        viewport_width = self.aspect_ratio * self.viewport_height

        self.horizontal = Vector3(viewport_width, 0.0, 0.0)
        self.vertical = Vector3(0.0, self.viewport_height, 0.0)
        self.lower_left_corner = (self.origin -
                                  self.horizontal / 2.0 -
                                  self.vertical / 2.0 -
                                  Vector3(0.0, 0.0, self.focal_length))

    def get_ray(self, u: float, v: float) -> Ray:
        """Ray through the viewport point (u, v); (0, 0) is the lower-left corner."""
        direction = (self.lower_left_corner +
                     self.horizontal * u +
                     self.vertical * v -
                     self.origin)
        return Ray(self.origin, direction)
