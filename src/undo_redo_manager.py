"""
Tube Joint Studio - Undo/Redo Manager
Manages the undo/redo history of the tube assembly
"""

from PyQt5.QtCore import QObject, pyqtSignal

from logging_config import get_logger

logger = get_logger(__name__)


class AssemblySnapshot:
    """
    Independent copy of the assembly at one point in time.

    Segments are clones, so later edits to the live assembly never show up
    here. Consumers must clone again before handing segments to live code.
    """

    def __init__(self, segments, selected_id=None):
        self.segments = tuple(segment.clone() for segment in segments)
        self.selected_id = selected_id

    @classmethod
    def capture(cls, assembly):
        return cls(assembly.segments, assembly.selected_id)

    def __len__(self):
        return len(self.segments)

    def __repr__(self):
        return f"AssemblySnapshot({len(self.segments)} segments, selected={self.selected_id!r})"


class UndoRedoManager(QObject):
    """
    Linear undo/redo history using in-memory assembly snapshots.

    Design:
    - One list of snapshots plus a cursor pointing at the current state
    - Entries after the cursor are the redo-able future; recording a new
      state discards them
    - Cursor is -1 only while the history is empty
    - Maximum history limit drops the oldest entries first
    """

    # Signals for UI updates
    state_changed = pyqtSignal()  # Emitted when undo/redo availability changes
    undo_performed = pyqtSignal()  # Emitted after successful undo
    redo_performed = pyqtSignal()  # Emitted after successful redo

    def __init__(self, max_history=50):
        """
        Initialize the undo/redo manager.

        Args:
            max_history: Maximum number of snapshots to keep (0 or less = unbounded)
        """
        super().__init__()

        self.max_history = max_history
        self._entries = []
        self._cursor = -1

    @property
    def cursor(self):
        return self._cursor

    def __len__(self):
        return len(self._entries)

    def record(self, assembly, description=""):
        """
        Append a deep copy of the assembly as the new current state.

        Args:
            assembly: anything with .segments and .selected_id
            description: Optional description for debugging

        Returns:
            AssemblySnapshot: the recorded entry
        """
        # Drop the redo-able future
        del self._entries[self._cursor + 1:]

        snapshot = AssemblySnapshot.capture(assembly)
        self._entries.append(snapshot)

        # Enforce max history limit
        if self.max_history and self.max_history > 0:
            while len(self._entries) > self.max_history:
                self._entries.pop(0)

        self._cursor = len(self._entries) - 1

        logger.debug("Recorded %s (%s), cursor=%d", snapshot, description or "change", self._cursor)
        self.state_changed.emit()
        return snapshot

    def undo(self):
        """
        Step back one entry.

        Returns:
            AssemblySnapshot now at the cursor, or None if there is nothing to undo
        """
        if not self.can_undo():
            logger.debug("Nothing to undo")
            return None

        self._cursor -= 1
        snapshot = self._entries[self._cursor]

        self.state_changed.emit()
        self.undo_performed.emit()
        return snapshot

    def redo(self):
        """
        Step forward one entry.

        Returns:
            AssemblySnapshot now at the cursor, or None if there is nothing to redo
        """
        if not self.can_redo():
            logger.debug("Nothing to redo")
            return None

        self._cursor += 1
        snapshot = self._entries[self._cursor]

        self.state_changed.emit()
        self.redo_performed.emit()
        return snapshot

    def can_undo(self):
        """Check if undo is available."""
        return self._cursor > 0

    def can_redo(self):
        """Check if redo is available."""
        return self._cursor < len(self._entries) - 1

    def current(self):
        """Snapshot at the cursor, or None when empty."""
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    def clear_history(self):
        """Clear all undo/redo history."""
        self._entries.clear()
        self._cursor = -1
        self.state_changed.emit()
