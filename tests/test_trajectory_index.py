#!/usr/bin/env python3
"""
Unit tests for the spatiotemporal trajectory index.
"""

import numpy as np
import pytest

from trajectory_inspector.core.trajectory_index import TrajectoryIndex, round_half_away
from trajectory_inspector.core.exceptions import InvalidInputError, IndexOutOfBoundsError
from trajectory_inspector.data.trajectories import Trajectory


def test_single_point_lookup():
    index = TrajectoryIndex(10, 10, 3)
    index.insert(5, [(2.0, 2.0, 1)])

    assert index.lookup(2, 2, 1) == 5
    assert index.lookup(2, 2, 0) is None
    assert index.lookup(9, 9, 2) is None


def test_new_index_is_empty():
    index = TrajectoryIndex(4, 3, 2)
    assert not index.is_populated
    assert index.shape == (4, 3, 2)
    assert np.all(index.grid == -1)
    for t in range(2):
        for y in range(3):
            for x in range(4):
                assert index.lookup(x, y, t) is None


def test_footprint_is_dilated_by_margin():
    index = TrajectoryIndex(10, 10, 1, margin=1)
    index.insert(0, [(5.0, 5.0, 0)])

    covered = {(x, y) for y in range(10) for x in range(10) if index.lookup(x, y, 0) == 0}
    assert covered == {(x, y) for x in range(4, 7) for y in range(4, 7)}


def test_wider_margin():
    index = TrajectoryIndex(10, 10, 1, margin=2)
    index.insert(1, [(5.0, 5.0, 0)])
    assert index.lookup(3, 7, 0) == 1
    assert index.lookup(2, 5, 0) is None


def test_zero_margin_stamps_single_pixel():
    index = TrajectoryIndex(5, 5, 1, margin=0)
    index.insert(2, [(1.4, 3.6, 0)])
    assert int(np.sum(index.grid == 2)) == 1
    assert index.lookup(1, 4, 0) == 2


def test_subpixel_positions_are_rounded():
    index = TrajectoryIndex(10, 10, 1, margin=0)
    index.insert(3, [(2.5, 6.49, 0)])
    assert index.lookup(3, 6, 0) == 3


def test_footprint_clamped_at_frame_border():
    index = TrajectoryIndex(6, 4, 1, margin=2)
    index.insert(7, [(0.0, 3.0, 0)])

    assert index.footprint(0.0, 3.0) == (0, 1, 2, 3)
    assert index.lookup(0, 3, 0) == 7
    assert index.lookup(2, 1, 0) == 7
    assert index.lookup(3, 3, 0) is None


def test_last_writer_wins():
    index = TrajectoryIndex(10, 10, 1)
    index.insert(1, [(4.0, 4.0, 0)])
    index.insert(2, [(5.0, 5.0, 0)])

    # Overlap of both footprints belongs to the later insert
    assert index.lookup(4, 4, 0) == 2
    assert index.lookup(5, 5, 0) == 2
    # Parts only the first trajectory covers keep its id
    assert index.lookup(3, 3, 0) == 1


def test_frames_are_independent():
    index = TrajectoryIndex(10, 10, 3)
    index.insert(1, [(4.0, 4.0, 0), (4.0, 4.0, 1)])
    index.insert(2, [(4.0, 4.0, 1)])

    assert index.lookup(4, 4, 0) == 1
    assert index.lookup(4, 4, 1) == 2
    assert index.lookup(4, 4, 2) is None


def test_resize_to_same_dimensions_clears():
    index = TrajectoryIndex(10, 10, 3)
    index.insert(5, [(2.0, 2.0, 1)])
    assert index.is_populated

    index.resize(10, 10, 3)

    assert not index.is_populated
    assert index.lookup(2, 2, 1) is None
    assert np.all(index.grid == -1)


def test_resize_changes_dimensions():
    index = TrajectoryIndex(10, 10, 3)
    index.insert(0, [(1.0, 1.0, 0)])
    index.resize(20, 5, 7)

    assert index.shape == (20, 5, 7)
    assert index.lookup(19, 4, 6) is None
    with pytest.raises(IndexOutOfBoundsError):
        index.lookup(1, 6, 0)


def test_lookup_out_of_bounds():
    index = TrajectoryIndex(10, 8, 3)
    for x, y, t in [(-1, 0, 0), (10, 0, 0), (0, -1, 0), (0, 8, 0), (0, 0, -1), (0, 0, 3)]:
        with pytest.raises(IndexOutOfBoundsError):
            index.lookup(x, y, t)


def test_insert_out_of_bounds_leaves_grid_unchanged():
    index = TrajectoryIndex(10, 10, 3)
    with pytest.raises(IndexOutOfBoundsError):
        index.insert(4, [(2.0, 2.0, 0), (2.0, 2.0, 3)])

    assert not index.is_populated
    assert index.lookup(2, 2, 0) is None


def test_insert_point_outside_frame():
    index = TrajectoryIndex(10, 10, 1)
    # Dilated square 11..13 does not touch the 10-px frame
    with pytest.raises(IndexOutOfBoundsError):
        index.insert(0, [(12.0, 2.0, 0)])
    with pytest.raises(IndexOutOfBoundsError):
        index.insert(0, [(2.0, -2.0, 0)])
    assert not index.is_populated


def test_point_rounding_onto_frame_edge_is_clamped():
    index = TrajectoryIndex(40, 30, 1)
    index.insert(0, [(39.6, 10.0, 0)])

    assert index.lookup(39, 10, 0) == 0
    assert index.lookup(39, 9, 0) == 0
    assert index.lookup(38, 10, 0) is None


def test_square_partly_outside_frame_is_clamped():
    index = TrajectoryIndex(10, 10, 1)
    index.insert(2, [(10.4, -0.6, 0)])

    assert index.lookup(9, 0, 0) == 2
    assert np.count_nonzero(index.grid == 2) == 1


def test_fractional_frame_rejected():
    index = TrajectoryIndex(10, 10, 3)
    with pytest.raises(InvalidInputError):
        index.insert(0, [(2.0, 2.0, 0), (2.0, 2.0, 1.7)])
    assert not index.is_populated

    # Integral floats are accepted
    index.insert(0, [(2.0, 2.0, 1.0)])
    assert index.lookup(2, 2, 1) == 0


def test_fractional_lookup_rejected():
    index = TrajectoryIndex(10, 10, 3)
    index.insert(0, [(2.0, 2.0, 1)])

    with pytest.raises(InvalidInputError):
        index.lookup(2.0, 2.0, 1.5)
    with pytest.raises(InvalidInputError):
        index.lookup(2.5, 2, 1)
    assert index.lookup(2.0, 2.0, 1) == 0
    assert index.lookup(np.int64(2), np.int32(2), np.int64(1)) == 0


def test_drawn_and_indexed_footprints_agree():
    trajectory = Trajectory([(2.5, 0.5), (7.5, 4.49), (0.5, 9.49)], start_frame=0)
    index = TrajectoryIndex(10, 10, 3, margin=0)
    index.insert_trajectory(0, trajectory)

    np.testing.assert_array_equal(trajectory.rounded(), [[3, 1], [8, 4], [1, 9]])
    for (x, y), t in zip(trajectory.rounded(), trajectory.frames):
        assert index.lookup(x, y, t) == 0
    assert np.count_nonzero(index.grid == 0) == 3


def test_negative_id_rejected():
    index = TrajectoryIndex(10, 10, 1)
    with pytest.raises(InvalidInputError):
        index.insert(-1, [(1.0, 1.0, 0)])


@pytest.mark.parametrize("dimensions", [(0, 10, 3), (10, 0, 3), (10, 10, 0), (-1, 10, 3)])
def test_non_positive_dimensions_rejected(dimensions):
    with pytest.raises(InvalidInputError):
        TrajectoryIndex(*dimensions)


def test_failed_resize_keeps_old_grid():
    index = TrajectoryIndex(10, 10, 3)
    index.insert(1, [(2.0, 2.0, 0)])
    with pytest.raises(InvalidInputError):
        index.resize(0, 10, 3)
    assert index.lookup(2, 2, 0) == 1


def test_negative_margin_rejected():
    with pytest.raises(InvalidInputError):
        TrajectoryIndex(10, 10, 1, margin=-1)


def test_empty_insert_keeps_index_empty():
    index = TrajectoryIndex(10, 10, 1)
    index.insert(3, [])
    assert not index.is_populated


def test_from_trajectories_uses_list_position_as_id(trajectories):
    index = TrajectoryIndex.from_trajectories(trajectories, 40, 30, 5)

    assert index.is_populated
    assert index.lookup(5, 10, 0) == 0
    assert index.lookup(9, 10, 4) == 0
    assert index.lookup(30, 21, 2) == 1
    assert index.lookup(30, 21, 3) == 1
    assert index.lookup(30, 21, 1) is None
    assert index.lookup(23, 8, 4) == 2


def test_insert_trajectory():
    index = TrajectoryIndex(10, 10, 5)
    index.insert_trajectory(9, Trajectory([(1.0, 1.0), (2.0, 1.0)], start_frame=3))
    assert index.lookup(1, 1, 3) == 9
    assert index.lookup(2, 1, 4) == 9
    assert index.lookup(1, 1, 2) is None


def test_round_half_away():
    assert round_half_away(2.5) == 3
    assert round_half_away(2.49) == 2
    assert round_half_away(-2.5) == -3
    assert round_half_away(0.0) == 0
    np.testing.assert_array_equal(round_half_away([0.5, -0.5, 1.49]), [1, -1, 1])
