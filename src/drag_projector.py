"""
Tube Joint Studio - Drag Projector
Maps a pointer position on the viewport onto the ground plane
"""

import math
from dataclasses import dataclass, field

import numpy as np

# Reference plane: Y = 0, normal pointing up
PLANE_NORMAL = np.array([0.0, 1.0, 0.0])
PLANE_POINT = np.array([0.0, 0.0, 0.0])

PARALLEL_EPSILON = 1e-6

# Orbit elevation stays this far (degrees) from straight up or down
MAX_ORBIT_ELEVATION = 90.0 - math.degrees(0.1)


@dataclass
class CameraState:
    """Perspective camera as seen by the projector."""
    position: np.ndarray
    target: np.ndarray = field(default_factory=lambda: np.zeros(3))
    up: np.ndarray = field(default_factory=lambda: np.array([0.0, 1.0, 0.0]))
    fov_degrees: float = 75.0
    aspect: float = 1.0

    def __post_init__(self):
        self.position = np.array(self.position, dtype=float)
        self.target = np.array(self.target, dtype=float)
        self.up = np.array(self.up, dtype=float)

    @classmethod
    def default(cls, aspect=1.0):
        """Camera at (200, 200, 200) looking at the origin."""
        return cls(position=[200.0, 200.0, 200.0], aspect=aspect)

    @classmethod
    def from_orbit(cls, azimuth, elevation, distance, target=(0.0, 0.0, 0.0),
                   fov_degrees=75.0, aspect=1.0):
        """
        Build a camera orbiting target.

        Args:
            azimuth: horizontal rotation in degrees (0 looks down -Z)
            elevation: vertical rotation in degrees above the ground, clamped
                to +/- MAX_ORBIT_ELEVATION
            distance: distance from target
        """
        target = np.array(target, dtype=float)
        elevation = max(-MAX_ORBIT_ELEVATION, min(MAX_ORBIT_ELEVATION, elevation))
        azimuth_rad = math.radians(azimuth)
        elevation_rad = math.radians(elevation)

        camera_x = target[0] + distance * math.cos(elevation_rad) * math.sin(azimuth_rad)
        camera_y = target[1] + distance * math.sin(elevation_rad)
        camera_z = target[2] + distance * math.cos(elevation_rad) * math.cos(azimuth_rad)

        return cls(position=[camera_x, camera_y, camera_z], target=target,
                   fov_degrees=fov_degrees, aspect=aspect)


def pointer_to_ndc(screen_x, screen_y, width, height):
    """Convert widget pixel coordinates to normalized device coordinates (+y up)."""
    width = width if width > 0 else 1
    height = height if height > 0 else 1
    ndc_x = (screen_x / width) * 2.0 - 1.0
    ndc_y = -(screen_y / height) * 2.0 + 1.0
    return ndc_x, ndc_y


def camera_ray(pointer_ndc, camera):
    """
    Ray from the camera through a point in normalized device coordinates.

    Returns:
        (origin, direction) with direction normalized, or None when the
        camera basis is degenerate (target on the camera, or view along up)
    """
    forward = camera.target - camera.position
    forward_len = np.linalg.norm(forward)
    if forward_len < PARALLEL_EPSILON:
        return None
    forward = forward / forward_len

    right = np.cross(forward, camera.up)
    right_len = np.linalg.norm(right)
    if right_len < PARALLEL_EPSILON:
        return None
    right = right / right_len
    true_up = np.cross(right, forward)

    ndc_x, ndc_y = pointer_ndc
    tan_half = math.tan(math.radians(camera.fov_degrees) / 2.0)

    direction = (forward
                 + right * (ndc_x * tan_half * camera.aspect)
                 + true_up * (ndc_y * tan_half))
    direction = direction / np.linalg.norm(direction)

    return camera.position.copy(), direction


def intersect_plane(origin, direction, plane_point=PLANE_POINT, plane_normal=PLANE_NORMAL):
    """
    Intersect a ray with a plane.

    Returns:
        numpy array [x, y, z], or None if the ray is parallel to the plane
        or the plane lies behind the ray origin
    """
    # Plane: dot(normal, P - plane_point) = 0, ray: P = origin + t * direction
    denom = np.dot(plane_normal, direction)
    if abs(denom) < PARALLEL_EPSILON:
        return None

    t = np.dot(plane_normal, plane_point - origin) / denom
    if t < 0:
        return None

    return origin + t * direction


def project(pointer_ndc, camera):
    """
    Project a pointer position onto the ground plane.

    Args:
        pointer_ndc: (x, y) in [-1, 1], +y up
        camera: CameraState

    Returns:
        numpy array [x, y, z] on the plane, or None meaning "no update this frame"
    """
    ray = camera_ray(pointer_ndc, camera)
    if ray is None:
        return None
    origin, direction = ray
    return intersect_plane(origin, direction)
