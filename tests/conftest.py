"""
Shared fixtures for the trajectory inspector tests
"""

import os
import sys

import matplotlib
matplotlib.use('Agg')

import numpy as np
import pytest

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from trajectory_inspector.data.trajectories import Trajectory


@pytest.fixture
def frames():
    """Five black 40x30 BGR frames"""
    return [np.zeros((30, 40, 3), dtype=np.uint8) for _ in range(5)]


@pytest.fixture
def trajectories():
    """A horizontal walker, a short trajectory and a diagonal one"""
    return [
        Trajectory([(5.0 + i, 10.0) for i in range(5)], start_frame=0, label=1),
        Trajectory([(30.2, 20.7), (30.4, 20.9)], start_frame=2, label=2),
        Trajectory([(20.0 + i, 5.0 + i) for i in range(4)], start_frame=1, label=3),
    ]


@pytest.fixture
def partitions():
    return [[0, 2, 4], [1], []]
