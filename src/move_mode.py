"""
Tube Joint Studio - Move Mode
Drags tube segments across the ground plane with the pointer
"""

from drag_projector import CameraState, pointer_to_ndc, project
from logging_config import get_logger

logger = get_logger(__name__)


class MoveController:
    """
    Pointer-driven repositioning of segments.

    A drag session lasts from press to release:
    - press on a segment selects it and starts the session
    - every move projects the pointer onto the ground plane and translates
      the segment there (rotation is never touched); no history is recorded
    - release records exactly one history entry and always ends the session,
      even if no move ever hit the plane
    """

    def __init__(self, assembly, camera=None):
        """
        Args:
            assembly: TubeAssembly being edited
            camera: CameraState used for projection (default camera when omitted)
        """
        self.assembly = assembly
        self.camera = camera if camera is not None else CameraState.default()

        # Drag session state
        self.dragged_segment_id = None
        self.move_count = 0
        self.last_drag_point = None

    def is_dragging(self):
        return self.dragged_segment_id is not None

    def start_move(self, segment_id):
        """
        Begin dragging a segment (the segment hit under the pointer).

        Passing None, or an id that no longer exists, clears the selection
        and starts nothing.

        Returns:
            bool: True if a drag session started
        """
        if self.is_dragging():
            self.end_move()

        if not self.assembly.select(segment_id) or segment_id is None:
            return False

        self.dragged_segment_id = segment_id
        self.move_count = 0
        self.last_drag_point = None
        logger.debug("Started moving %s", segment_id)
        return True

    def update_move(self, pointer_ndc, camera=None):
        """
        Move the dragged segment to where the pointer meets the ground plane.

        Args:
            pointer_ndc: (x, y) in normalized device coordinates
            camera: CameraState for this frame (defaults to self.camera)

        Returns:
            The new position, or None if nothing moved this frame
        """
        if not self.is_dragging():
            return None

        point = project(pointer_ndc, camera if camera is not None else self.camera)
        if point is None:
            return None

        if not self.assembly.move_segment(self.dragged_segment_id, point):
            return None

        self.move_count += 1
        self.last_drag_point = point
        return point

    def update_move_at(self, screen_x, screen_y, width, height, camera=None):
        """update_move() taking widget pixel coordinates."""
        return self.update_move(pointer_to_ndc(screen_x, screen_y, width, height), camera)

    def end_move(self):
        """
        Finish the drag session.

        Returns:
            bool: True if a session was open (and one history entry was recorded)
        """
        if not self.is_dragging():
            return False

        segment_id = self.dragged_segment_id
        try:
            self.assembly.commit("move segment")
            logger.debug("Finished moving %s after %d updates", segment_id, self.move_count)
        finally:
            self.dragged_segment_id = None
            self.move_count = 0
            self.last_drag_point = None
        return True
