"""
Derived motion signals: smoothed position, velocity and acceleration
"""

import numpy as np
from .filters import convolve, gaussian_kernel, derivative_kernel, fill_margins
from .exceptions import InvalidInputError
from ..config.settings import *


def required_signal_length(smoothing_window=GAUSSIAN_WINDOW_SIZE, derivative_window=DERIVATIVE_WINDOW_SIZE):
    """Minimum number of samples the pipeline needs"""
    return max(smoothing_window, derivative_window)


def can_compute_motion_signals(length, smoothing_window=GAUSSIAN_WINDOW_SIZE,
                               derivative_window=DERIVATIVE_WINDOW_SIZE):
    """Check whether a series of the given length can be differentiated"""
    return length >= required_signal_length(smoothing_window, derivative_window)


def compute_motion_signals(series, smoothing_window=GAUSSIAN_WINDOW_SIZE, sigma=GAUSSIAN_SIGMA,
                           derivative_window=DERIVATIVE_WINDOW_SIZE):
    """
    Smooth a series and differentiate it twice.

    Every stage convolves the output of the previous one and fills its
    margins with the nearest computed sample.

    Parameters:
    -----------
    series : array-like
        Raw samples of one trajectory axis
    smoothing_window : int
        Gaussian window size
    sigma : float
        Gaussian standard deviation
    derivative_window : int
        Central-difference window size (2 to 5)

    Returns:
    --------
    dict
        'raw', 'smooth', 'velocity' and 'acceleration' arrays, all of the
        input length
    """
    raw = np.asarray(series, dtype=np.float64)
    if not can_compute_motion_signals(raw.size, smoothing_window, derivative_window):
        raise InvalidInputError(
            f"Series of length {raw.size} is too short, at least "
            f"{required_signal_length(smoothing_window, derivative_window)} samples are needed"
        )

    # Build both kernels up front so a bad configuration fails before any work
    gaussian = gaussian_kernel(smoothing_window, sigma)
    derivative = derivative_kernel(derivative_window)

    smooth = fill_margins(convolve(raw, gaussian), gaussian.size)
    velocity = fill_margins(convolve(smooth, derivative), derivative.size)
    acceleration = fill_margins(convolve(velocity, derivative), derivative.size)

    return {
        'raw': raw,
        'smooth': smooth,
        'velocity': velocity,
        'acceleration': acceleration
    }


def compute_trajectory_signals(trajectory, smoothing_window=GAUSSIAN_WINDOW_SIZE, sigma=GAUSSIAN_SIGMA,
                               derivative_window=DERIVATIVE_WINDOW_SIZE):
    """Compute motion signals for both axes of a trajectory"""
    return {
        'x': compute_motion_signals(trajectory.x, smoothing_window, sigma, derivative_window),
        'y': compute_motion_signals(trajectory.y, smoothing_window, sigma, derivative_window),
        't': trajectory.frames
    }


def sample_at_partition(series, partition):
    """Values of a series at the partition cut points"""
    series = np.asarray(series, dtype=np.float64)
    indices = np.asarray(partition, dtype=np.int64)
    if indices.size and (indices.min() < 0 or indices.max() >= series.size):
        raise InvalidInputError(
            f"Partition indices must lie in [0, {series.size})"
        )
    return series[indices]
