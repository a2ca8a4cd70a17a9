"""
Tube Joint Studio - Tube Segment Class
A rigid hollow rectangular/square tube with a mutable pose
"""

import math
import uuid
from dataclasses import dataclass

import numpy as np

PROFILE_RECTANGULAR = 'rectangular'
PROFILE_SQUARE = 'square'
PROFILES = (PROFILE_RECTANGULAR, PROFILE_SQUARE)


class TubeDimensionError(ValueError):
    """Raised when tube dimensions cannot describe a hollow tube."""


def validate_dimensions(width, height, thickness, length):
    """
    Check that the dimensions describe a hollow tube.

    Raises:
        TubeDimensionError: if any dimension is not a positive finite number,
            or the wall leaves no interior (thickness >= min(width, height) / 2)
    """
    for name, value in (('width', width), ('height', height),
                        ('thickness', thickness), ('length', length)):
        if not math.isfinite(value) or value <= 0:
            raise TubeDimensionError(f"{name} must be a positive number, got {value}")

    if thickness >= min(width, height) / 2:
        raise TubeDimensionError(
            f"thickness {thickness} leaves no hollow interior in a "
            f"{width} x {height} tube (must be < {min(width, height) / 2})"
        )


def _new_segment_id():
    return uuid.uuid4().hex


def _pose_vector(value, name):
    vector = np.array(value, dtype=float)
    if vector.shape != (3,):
        raise ValueError(f"{name} must have 3 components, got shape {vector.shape}")
    return vector


class TubeSegment:
    """
    One rigid tube piece in the chain.

    The cross-section (width x height, wall thickness) and length are fixed at
    construction. The pose is:
    - position: centre of the tube in world space
    - rotation: Euler angles in radians, applied in XYZ order; the tube's
      length runs along its local +Z axis
    """

    def __init__(self, width, height, thickness, length,
                 position=None, rotation=None, segment_id=None):
        """
        Initialize a tube segment.

        Args:
            width, height: outer cross-section size (mm)
            thickness: wall thickness (mm)
            length: tube length (mm)
            position: numpy array [x, y, z], defaults to the origin
            rotation: numpy array [rx, ry, rz] in radians, defaults to identity
            segment_id: identifier to reuse (history restore); a new one is
                generated when omitted
        """
        width, height = float(width), float(height)
        thickness, length = float(thickness), float(length)
        validate_dimensions(width, height, thickness, length)

        self._id = segment_id if segment_id is not None else _new_segment_id()
        self._width = width
        self._height = height
        self._thickness = thickness
        self._length = length

        self.position = np.zeros(3) if position is None else position
        self.rotation = np.zeros(3) if rotation is None else rotation

        self.selected = False

    # Shape is read-only once constructed
    @property
    def id(self):
        return self._id

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def thickness(self):
        return self._thickness

    @property
    def length(self):
        return self._length

    # Pose is always a float array of shape (3,)
    @property
    def position(self):
        return self._position

    @position.setter
    def position(self, value):
        self._position = _pose_vector(value, 'position')

    @property
    def rotation(self):
        return self._rotation

    @rotation.setter
    def rotation(self, value):
        self._rotation = _pose_vector(value, 'rotation')

    def clone(self):
        """Copy with the same id and independently owned pose arrays."""
        segment = TubeSegment(
            self._width,
            self._height,
            self._thickness,
            self._length,
            position=self.position.copy(),
            rotation=self.rotation.copy(),
            segment_id=self._id
        )
        segment.selected = self.selected
        return segment

    def to_dict(self):
        """Convert segment to an export record"""
        return {
            'width': self._width,
            'height': self._height,
            'thickness': self._thickness,
            'length': self._length,
            'position': {
                'x': float(self.position[0]),
                'y': float(self.position[1]),
                'z': float(self.position[2]),
            },
            'rotation': {
                'x': float(self.rotation[0]),
                'y': float(self.rotation[1]),
                'z': float(self.rotation[2]),
            },
        }

    @classmethod
    def from_dict(cls, data):
        """
        Create segment from an export record (a fresh id is assigned).

        Raises:
            ValueError: if a pose component is missing a number or not finite
        """
        pose = {}
        for key in ('position', 'rotation'):
            values = data.get(key, {})
            vector = [values.get(axis, 0.0) for axis in ('x', 'y', 'z')]
            for axis, value in zip(('x', 'y', 'z'), vector):
                if isinstance(value, bool) or not isinstance(value, (int, float)) \
                        or not math.isfinite(value):
                    raise ValueError(f"{key}.{axis} must be a finite number, got {value!r}")
            pose[key] = vector

        return cls(
            data['width'],
            data['height'],
            data['thickness'],
            data['length'],
            position=pose['position'],
            rotation=pose['rotation'],
        )

    def same_state(self, other, tolerance=1e-9):
        """Field-for-field comparison (identity is ignored)."""
        return (
            self._id == other.id
            and self.selected == other.selected
            and abs(self._width - other.width) <= tolerance
            and abs(self._height - other.height) <= tolerance
            and abs(self._thickness - other.thickness) <= tolerance
            and abs(self._length - other.length) <= tolerance
            and np.allclose(self.position, other.position, atol=tolerance)
            and np.allclose(self.rotation, other.rotation, atol=tolerance)
        )

    def __repr__(self):
        return (f"TubeSegment(id='{self._id}', {self._width:g}x{self._height:g}"
                f"x{self._thickness:g}, length={self._length:g}, "
                f"position={self.position}, rotation={self.rotation})")


@dataclass
class TubeParameters:
    """The raw form values used to build the next segment."""
    width: float = 50.0
    height: float = 30.0
    thickness: float = 3.0
    length: float = 100.0
    angle: float = 90.0
    snap: bool = True
    profile: str = PROFILE_RECTANGULAR

    @classmethod
    def from_settings(cls, settings):
        return cls(
            width=settings.get('default_width'),
            height=settings.get('default_height'),
            thickness=settings.get('default_thickness'),
            length=settings.get('default_length'),
            angle=settings.get('default_angle'),
            snap=settings.get('snap_to_angle'),
            profile=settings.get('default_profile'),
        )

    def effective_height(self):
        """Square tubes ignore the height field."""
        if self.profile == PROFILE_SQUARE:
            return self.width
        return self.height

    def build_segment(self):
        """
        Construct an unposed segment from these parameters.

        Raises:
            TubeDimensionError: for an unknown profile or invalid dimensions
        """
        if self.profile not in PROFILES:
            raise TubeDimensionError(f"Unknown tube profile '{self.profile}'")
        return TubeSegment(self.width, self.effective_height(), self.thickness, self.length)
