"""
Tube Joint Studio - Joint Placement
Derives the pose of the next tube in the chain from its predecessor
"""

import math
import numpy as np

# Canonical joint angles (degrees), ascending
SNAP_ANGLES = (0.0, 30.0, 45.0, 60.0, 90.0, 120.0, 135.0, 150.0, 180.0)

# Local axis the tube length runs along
FORWARD_AXIS = np.array([0.0, 0.0, 1.0])


def snap_angle(angle_degrees):
    """
    Return the snap angle nearest to angle_degrees.

    On an exact tie the smaller snap angle wins (37.5 -> 30, 15 -> 0).
    """
    best = SNAP_ANGLES[0]
    for candidate in SNAP_ANGLES[1:]:
        # Strictly closer only, so earlier entries keep ties
        if abs(candidate - angle_degrees) < abs(best - angle_degrees):
            best = candidate
    return best


def rotation_matrix(rotation):
    """
    Build the 3x3 rotation matrix for XYZ-ordered Euler angles (radians).

    Equivalent to Rx @ Ry @ Rz, so a vector is rotated about Z first,
    then Y, then X.
    """
    rx, ry, rz = rotation
    cx, sx = math.cos(rx), math.sin(rx)
    cy, sy = math.cos(ry), math.sin(ry)
    cz, sz = math.cos(rz), math.sin(rz)

    rot_x = np.array([[1.0, 0.0, 0.0],
                      [0.0, cx, -sx],
                      [0.0, sx, cx]])
    rot_y = np.array([[cy, 0.0, sy],
                      [0.0, 1.0, 0.0],
                      [-sy, 0.0, cy]])
    rot_z = np.array([[cz, -sz, 0.0],
                      [sz, cz, 0.0],
                      [0.0, 0.0, 1.0]])
    return rot_x @ rot_y @ rot_z


def forward_vector(rotation):
    """Unit vector along the tube's length for a given rotation."""
    return rotation_matrix(rotation) @ FORWARD_AXIS


def end_face_center(segment):
    """World-space centre of the tube's far (+Z) face."""
    return segment.position + forward_vector(segment.rotation) * (segment.length / 2)


def start_face_center(segment):
    """World-space centre of the tube's near (-Z) face."""
    return segment.position - forward_vector(segment.rotation) * (segment.length / 2)


def place_next(predecessor, new_segment, angle_degrees, snap):
    """
    Compute the pose of new_segment joined to the end of predecessor.

    The joint turns about the Y axis: the angle is added to the
    predecessor's yaw, the other two rotation components are inherited.
    The new tube is rotated first and then pushed half its own length
    along its new forward axis, so it extends away from the joint instead
    of swinging back into the predecessor.

    Args:
        predecessor: last TubeSegment in the chain, or None
        new_segment: TubeSegment being added (only its length is used)
        angle_degrees: joint angle in degrees
        snap: round the angle to the nearest SNAP_ANGLES entry

    Returns:
        (position, rotation) as new numpy arrays
    """
    if predecessor is None:
        return np.zeros(3), np.zeros(3)

    angle = float(angle_degrees)
    if not math.isfinite(angle):
        angle = 0.0
    if snap:
        angle = snap_angle(angle)

    rotation = np.array(predecessor.rotation, dtype=float)
    rotation[1] += math.radians(angle)

    joint_point = end_face_center(predecessor)
    position = joint_point + forward_vector(rotation) * (new_segment.length / 2)

    return position, rotation
