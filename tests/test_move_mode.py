"""Tests for dragging segments with the pointer."""

import unittest

import numpy as np

from drag_projector import CameraState
from move_mode import MoveController
from tube_assembly import TubeAssembly
from tube_segment import TubeParameters

TOP_DOWN = CameraState(position=[0, 100, 0], target=[0, 0, 0], up=[0, 0, -1],
                       fov_degrees=90.0, aspect=1.0)
SIDEWAYS = CameraState(position=[0, 10, 100], target=[0, 10, 0])


class TestMoveController(unittest.TestCase):

    def setUp(self):
        self.assembly = TubeAssembly()
        self.first = self.assembly.add_segment(TubeParameters())
        self.second = self.assembly.add_segment(TubeParameters(angle=90))
        self.controller = MoveController(self.assembly, camera=TOP_DOWN)

    def test_start_selects_segment(self):
        self.assertTrue(self.controller.start_move(self.second.id))
        self.assertTrue(self.controller.is_dragging())
        self.assertEqual(self.controller.dragged_segment_id, self.second.id)
        self.assertEqual(self.assembly.selected_id, self.second.id)

    def test_start_on_empty_space_clears_selection(self):
        self.assembly.select(self.first.id)
        self.assertFalse(self.controller.start_move(None))
        self.assertFalse(self.controller.is_dragging())
        self.assertIsNone(self.assembly.selected_id)

    def test_start_on_unknown_segment(self):
        self.assertFalse(self.controller.start_move('missing'))
        self.assertFalse(self.controller.is_dragging())

    def test_drag_translates_without_rotating(self):
        rotation = self.second.rotation.copy()
        self.controller.start_move(self.second.id)
        point = self.controller.update_move((0.5, 0.0))
        np.testing.assert_allclose(point, [50, 0, 0], atol=1e-9)
        np.testing.assert_allclose(self.second.position, [50, 0, 0], atol=1e-9)
        np.testing.assert_array_equal(self.second.rotation, rotation)

    def test_one_history_entry_per_drag(self):
        before = len(self.assembly.history)
        self.controller.start_move(self.second.id)
        for x in np.linspace(-0.9, 0.9, 25):
            self.controller.update_move((x, 0.2))
        self.assertEqual(len(self.assembly.history), before)
        self.assertTrue(self.controller.end_move())
        self.assertEqual(len(self.assembly.history), before + 1)
        self.assertFalse(self.controller.is_dragging())

    def test_release_without_intersection(self):
        before = len(self.assembly.history)
        position = self.second.position.copy()
        self.controller.start_move(self.second.id)
        self.assertIsNone(self.controller.update_move((0.0, 0.0), camera=SIDEWAYS))
        np.testing.assert_array_equal(self.second.position, position)
        self.assertTrue(self.controller.end_move())
        self.assertIsNone(self.controller.dragged_segment_id)
        self.assertEqual(len(self.assembly.history), before + 1)

    def test_release_without_drag_session(self):
        before = len(self.assembly.history)
        self.assertFalse(self.controller.end_move())
        self.assertEqual(len(self.assembly.history), before)

    def test_move_without_session_does_nothing(self):
        position = self.first.position.copy()
        self.assertIsNone(self.controller.update_move((0.5, 0.5)))
        np.testing.assert_array_equal(self.first.position, position)

    def test_undo_reverts_whole_drag(self):
        original = self.second.position.copy()
        self.controller.start_move(self.second.id)
        self.controller.update_move((0.1, 0.1))
        self.controller.update_move((0.3, -0.2))
        self.controller.end_move()

        self.assertTrue(self.assembly.undo())
        np.testing.assert_allclose(self.assembly.get_segment(self.second.id).position, original)

    def test_pixel_coordinates(self):
        self.controller.start_move(self.first.id)
        point = self.controller.update_move_at(600, 300, 800, 600)
        np.testing.assert_allclose(point, [50, 0, 0], atol=1e-9)

    def test_segment_removed_mid_drag(self):
        self.controller.start_move(self.second.id)
        self.assembly.remove_segment(self.second.id)
        self.assertIsNone(self.controller.update_move((0.5, 0.0)))
        self.assertTrue(self.controller.end_move())
        self.assertFalse(self.controller.is_dragging())

    def test_starting_new_drag_closes_previous(self):
        before = len(self.assembly.history)
        self.controller.start_move(self.first.id)
        self.controller.start_move(self.second.id)
        self.assertEqual(self.controller.dragged_segment_id, self.second.id)
        self.assertEqual(len(self.assembly.history), before + 1)


if __name__ == '__main__':
    unittest.main()
