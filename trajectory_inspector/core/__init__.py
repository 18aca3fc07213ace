"""
Core analysis package

Contains the main inspection components:
- Convolution and FIR kernels for trajectory signals
- Derived motion signals (smoothed position, velocity, acceleration)
- Spatiotemporal trajectory index
- Interactive inspector session
"""

from .exceptions import FilterError, InvalidInputError, UnsupportedWindowSizeError, IndexOutOfBoundsError
from .filters import convolve, gaussian_kernel, derivative_kernel, fill_margins, supported_derivative_sizes
from .motion import compute_motion_signals, compute_trajectory_signals, can_compute_motion_signals, \
    sample_at_partition
from .trajectory_index import TrajectoryIndex
from .inspector import TrajectoryInspector

__all__ = [
    'FilterError',
    'InvalidInputError',
    'UnsupportedWindowSizeError',
    'IndexOutOfBoundsError',
    'convolve',
    'gaussian_kernel',
    'derivative_kernel',
    'fill_margins',
    'supported_derivative_sizes',
    'compute_motion_signals',
    'compute_trajectory_signals',
    'can_compute_motion_signals',
    'sample_at_partition',
    'TrajectoryIndex',
    'TrajectoryInspector',
]
