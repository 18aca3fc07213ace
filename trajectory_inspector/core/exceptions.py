"""
Error types raised by the filter library and the trajectory index
"""


class FilterError(ValueError):
    """Base class for signal filter failures"""


class InvalidInputError(FilterError):
    """Raised for aliased buffers, signals shorter than the kernel or bad kernel parameters"""


class UnsupportedWindowSizeError(FilterError):
    """Raised when no derivative coefficients exist for the requested window size"""

    def __init__(self, window_size, supported_sizes):
        self.window_size = window_size
        self.supported_sizes = tuple(supported_sizes)
        super().__init__(
            f"No derivative kernel for window size {window_size}, "
            f"supported sizes are {list(self.supported_sizes)}"
        )


class IndexOutOfBoundsError(IndexError):
    """Raised when an index read or write targets a voxel outside the grid"""

    def __init__(self, x, y, t, shape):
        self.position = (x, y, t)
        self.shape = shape
        super().__init__(
            f"Voxel (x={x}, y={y}, t={t}) is outside the grid of "
            f"width={shape[0]}, height={shape[1]}, video_length={shape[2]}"
        )
