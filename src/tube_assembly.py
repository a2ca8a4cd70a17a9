"""
Tube Joint Studio - Tube Assembly
Ordered chain of tube segments, selection and history; the single source of truth
"""

import numpy as np
from PyQt5.QtCore import QObject, pyqtSignal

from joint_placement import place_next
from logging_config import get_logger
from tube_segment import TubeParameters
from undo_redo_manager import UndoRedoManager

logger = get_logger(__name__)


class TubeAssembly(QObject):
    """
    A single chain of tube segments.

    Render layers connect to the signals below and never get queried back.
    Every discrete edit (add, remove, finished drag) records one history
    entry; clear_all() resets the history instead.
    """

    # Signals
    segment_added = pyqtSignal(object)                        # TubeSegment
    segment_removed = pyqtSignal(str)                         # segment id
    segment_pose_changed = pyqtSignal(str, object, object)    # id, position, rotation
    selection_changed = pyqtSignal(object)                    # segment id or None
    assembly_replaced = pyqtSignal(object)                    # list of TubeSegment

    def __init__(self, history=None, max_history=50):
        """
        Args:
            history: UndoRedoManager to use; a new one is created when omitted
            max_history: capacity of the created UndoRedoManager
        """
        super().__init__()

        self._segments = []
        self._selected_id = None
        self.history = history if history is not None else UndoRedoManager(max_history=max_history)

    @classmethod
    def from_settings(cls, settings):
        return cls(max_history=settings.max_history)

    # ==================== Queries ====================

    @property
    def segments(self):
        """Segments in chain order (a new list; the segments are live)."""
        return list(self._segments)

    @property
    def selected_id(self):
        return self._selected_id

    @property
    def selected_segment(self):
        return self.get_segment(self._selected_id)

    @property
    def last_segment(self):
        return self._segments[-1] if self._segments else None

    def get_segment(self, segment_id):
        if segment_id is None:
            return None
        for segment in self._segments:
            if segment.id == segment_id:
                return segment
        return None

    def __len__(self):
        return len(self._segments)

    def __iter__(self):
        return iter(list(self._segments))

    # ==================== Edits ====================

    def add_segment(self, params=None):
        """
        Append a new tube joined to the end of the chain.

        Args:
            params: TubeParameters (defaults when omitted)

        Returns:
            The new TubeSegment

        Raises:
            TubeDimensionError: if the parameters describe an invalid tube
        """
        if params is None:
            params = TubeParameters()

        segment = params.build_segment()
        position, rotation = place_next(self.last_segment, segment, params.angle, params.snap)
        segment.position = position
        segment.rotation = rotation

        self._segments.append(segment)
        logger.info("Added segment %s at %s (%d in chain)",
                    segment.id, np.round(position, 3), len(self._segments))

        self.segment_added.emit(segment)
        self.history.record(self, "add segment")
        return segment

    def remove_segment(self, segment_id):
        """
        Remove a segment by id.

        Returns:
            bool: True if removed, False if no segment has that id
        """
        segment = self.get_segment(segment_id)
        if segment is None:
            logger.warning("Cannot remove segment %r: not found", segment_id)
            return False

        self._segments.remove(segment)
        self.segment_removed.emit(segment.id)

        if self._selected_id == segment.id:
            self._selected_id = None
            self.selection_changed.emit(None)

        logger.info("Removed segment %s (%d left)", segment.id, len(self._segments))
        self.history.record(self, "remove segment")
        return True

    def select(self, segment_id):
        """
        Select a segment, or clear the selection with None.

        Returns:
            bool: False if segment_id is unknown (selection is cleared)
        """
        found = segment_id is None or self.get_segment(segment_id) is not None
        if not found:
            logger.debug("Cannot select segment %r: not found", segment_id)
            segment_id = None

        self._set_selected(segment_id)
        return found

    def move_segment(self, segment_id, position):
        """
        Live pose update used while dragging; records no history.

        Returns:
            bool: True if the segment exists

        Raises:
            ValueError: if position does not have 3 components
        """
        segment = self.get_segment(segment_id)
        if segment is None:
            logger.debug("Cannot move segment %r: not found", segment_id)
            return False

        segment.position = position
        self.segment_pose_changed.emit(segment.id, segment.position.copy(), segment.rotation.copy())
        return True

    def commit(self, description="edit"):
        """Record the current state as one history entry (end of a gesture)."""
        return self.history.record(self, description)

    def clear_all(self):
        """Empty the assembly and reset history (there is nothing to undo to)."""
        self._segments = []
        had_selection = self._selected_id is not None
        self._selected_id = None

        self.history.clear_history()
        self.assembly_replaced.emit([])
        if had_selection:
            self.selection_changed.emit(None)
        logger.info("Cleared assembly")

    # ==================== History ====================

    def undo(self):
        """Restore the previous history entry. Returns False if there is none."""
        snapshot = self.history.undo()
        if snapshot is None:
            return False
        self.restore(snapshot)
        return True

    def redo(self):
        """Restore the next history entry. Returns False if there is none."""
        snapshot = self.history.redo()
        if snapshot is None:
            return False
        self.restore(snapshot)
        return True

    def restore(self, snapshot):
        """
        Replace segments and selection wholesale from a snapshot.

        New segment objects are built; ids survive, object identity does not.
        The snapshot itself is left untouched.
        """
        previous_selection = self._selected_id

        self._segments = [segment.clone() for segment in snapshot.segments]
        selected_id = snapshot.selected_id
        if self.get_segment(selected_id) is None:
            selected_id = None
        self._selected_id = selected_id
        for segment in self._segments:
            segment.selected = segment.id == selected_id

        self.assembly_replaced.emit(self.segments)
        if previous_selection != selected_id:
            self.selection_changed.emit(selected_id)

    def replace_segments(self, segments, description="load"):
        """
        Replace the chain with new segments and start a fresh history.

        Used by import; the new state becomes the only history entry.
        """
        self._segments = list(segments)
        self._selected_id = None
        for segment in self._segments:
            segment.selected = False

        self.history.clear_history()
        self.assembly_replaced.emit(self.segments)
        self.selection_changed.emit(None)
        self.history.record(self, description)
        logger.info("Loaded %d segments", len(self._segments))

    # ==================== Helpers ====================

    def _set_selected(self, segment_id):
        if segment_id == self._selected_id:
            return
        for segment in self._segments:
            segment.selected = segment.id == segment_id
        self._selected_id = segment_id
        self.selection_changed.emit(segment_id)
