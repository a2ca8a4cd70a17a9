"""Tests for the snapshot-based undo/redo history."""

import unittest

import numpy as np

from tube_segment import TubeSegment
from undo_redo_manager import AssemblySnapshot, UndoRedoManager


class FakeAssembly:
    """Minimal stand-in exposing what the history reads."""

    def __init__(self):
        self.segments = []
        self.selected_id = None

    def add(self, length=100):
        segment = TubeSegment(50, 30, 3, length)
        self.segments.append(segment)
        return segment


class TestHistoryStack(unittest.TestCase):

    def setUp(self):
        self.history = UndoRedoManager()
        self.assembly = FakeAssembly()

    def test_empty_history(self):
        self.assertEqual(self.history.cursor, -1)
        self.assertEqual(len(self.history), 0)
        self.assertIsNone(self.history.current())
        self.assertFalse(self.history.can_undo())
        self.assertFalse(self.history.can_redo())
        self.assertIsNone(self.history.undo())
        self.assertIsNone(self.history.redo())

    def test_record_moves_cursor_to_end(self):
        for i in range(3):
            self.assembly.add()
            self.history.record(self.assembly)
            self.assertEqual(self.history.cursor, i)
        self.assertEqual(len(self.history), 3)

    def test_single_entry_cannot_undo(self):
        self.assembly.add()
        self.history.record(self.assembly)
        self.assertFalse(self.history.can_undo())
        self.assertIsNone(self.history.undo())
        self.assertEqual(self.history.cursor, 0)

    def test_undo_then_redo(self):
        for _ in range(3):
            self.assembly.add()
            self.history.record(self.assembly)

        snapshot = self.history.undo()
        self.assertEqual(len(snapshot), 2)
        self.assertEqual(self.history.cursor, 1)

        snapshot = self.history.undo()
        self.assertEqual(len(snapshot), 1)
        self.assertIsNone(self.history.undo())

        self.assertEqual(len(self.history.redo()), 2)
        self.assertEqual(len(self.history.redo()), 3)
        self.assertIsNone(self.history.redo())
        self.assertEqual(self.history.cursor, 2)

    def test_record_after_undo_discards_future(self):
        for _ in range(3):
            self.assembly.add()
            self.history.record(self.assembly)
        self.history.undo()
        self.history.undo()

        self.assembly.segments = self.assembly.segments[:1]
        self.assembly.add(length=42)
        self.history.record(self.assembly)

        self.assertEqual(len(self.history), 2)
        self.assertEqual(self.history.cursor, 1)
        self.assertFalse(self.history.can_redo())
        self.assertEqual(self.history.current().segments[-1].length, 42.0)

    def test_clear_history(self):
        self.assembly.add()
        self.history.record(self.assembly)
        self.history.clear_history()
        self.assertEqual(self.history.cursor, -1)
        self.assertEqual(len(self.history), 0)
        self.assertIsNone(self.history.undo())

    def test_max_history_drops_oldest(self):
        history = UndoRedoManager(max_history=3)
        for length in (10, 20, 30, 40, 50):
            self.assembly.add(length=length)
            history.record(self.assembly)
        self.assertEqual(len(history), 3)
        self.assertEqual(history.cursor, 2)
        history.undo()
        oldest = history.undo()
        self.assertEqual(len(oldest), 3)
        self.assertIsNone(history.undo())


class TestSnapshotIndependence(unittest.TestCase):

    def test_snapshot_does_not_see_later_mutation(self):
        history = UndoRedoManager()
        assembly = FakeAssembly()
        segment = assembly.add()
        assembly.selected_id = segment.id
        snapshot = history.record(assembly)

        segment.position[:] = [7.0, 0.0, 9.0]
        assembly.add()
        assembly.selected_id = None

        self.assertEqual(len(snapshot), 1)
        np.testing.assert_array_equal(snapshot.segments[0].position, np.zeros(3))
        self.assertIsNot(snapshot.segments[0], segment)
        self.assertEqual(snapshot.segments[0].id, segment.id)
        self.assertEqual(snapshot.selected_id, segment.id)

    def test_capture(self):
        assembly = FakeAssembly()
        assembly.add()
        snapshot = AssemblySnapshot.capture(assembly)
        self.assertIsInstance(snapshot.segments, tuple)
        self.assertEqual(snapshot.segments[0].id, assembly.segments[0].id)


class TestSignals(unittest.TestCase):

    def test_signals(self):
        history = UndoRedoManager()
        assembly = FakeAssembly()
        events = []
        history.state_changed.connect(lambda: events.append('state'))
        history.undo_performed.connect(lambda: events.append('undo'))
        history.redo_performed.connect(lambda: events.append('redo'))

        assembly.add()
        history.record(assembly)
        assembly.add()
        history.record(assembly)
        history.undo()
        history.redo()
        history.redo()  # nothing to redo, no signal

        self.assertEqual(events, ['state', 'state', 'state', 'undo', 'state', 'redo'])


if __name__ == '__main__':
    unittest.main()
