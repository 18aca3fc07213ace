# Trajectory Inspector Package

# Core components
from .core.inspector import TrajectoryInspector
from .core.trajectory_index import TrajectoryIndex
from .core.filters import convolve, gaussian_kernel, derivative_kernel, fill_margins
from .core.motion import compute_motion_signals, compute_trajectory_signals
from .core.exceptions import FilterError, InvalidInputError, UnsupportedWindowSizeError, IndexOutOfBoundsError

# Utility functions
from .utils.visualization import Visualizer, SignalPlotter
from .utils.file_utils import read_frame_list, load_frames, save_selection_signals

# Data handling
from .data.trajectories import (
    Trajectory,
    read_trajectories_file,
    read_partitions_file,
    validate_pairing,
    write_trajectories_file,
    write_partitions_file
)

__version__ = "0.1.0"

__all__ = [
    # Core classes
    'TrajectoryInspector',
    'TrajectoryIndex',

    # Signal processing
    'convolve',
    'gaussian_kernel',
    'derivative_kernel',
    'fill_margins',
    'compute_motion_signals',
    'compute_trajectory_signals',

    # Errors
    'FilterError',
    'InvalidInputError',
    'UnsupportedWindowSizeError',
    'IndexOutOfBoundsError',

    # Utility functions
    'Visualizer',
    'SignalPlotter',
    'read_frame_list',
    'load_frames',
    'save_selection_signals',

    # Data functions
    'Trajectory',
    'read_trajectories_file',
    'read_partitions_file',
    'validate_pairing',
    'write_trajectories_file',
    'write_partitions_file',
]
