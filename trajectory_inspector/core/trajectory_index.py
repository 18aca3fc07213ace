"""
Spatiotemporal index mapping (x, y, frame) to the trajectory occupying that voxel
"""

import numpy as np
from .exceptions import InvalidInputError, IndexOutOfBoundsError
from ..data.trajectories import round_half_away
from ..config.settings import *


def voxel_coordinate(value, name):
    """Convert an integral coordinate to int, rejecting fractional values"""
    try:
        coordinate = int(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidInputError(f"Voxel coordinate {name} must be an integer, got {value!r}") from None
    if coordinate != value:
        raise InvalidInputError(f"Voxel coordinate {name} must be an integer, got {value!r}")
    return coordinate


class TrajectoryIndex:
    """
    Dense voxel grid of trajectory ids.

    Every sample of an inserted trajectory stamps its id into a square of
    (2 * margin + 1) pixels around the rounded position at the sample's
    frame, so a click near a trajectory still hits it. Overlapping
    footprints resolve to whichever trajectory was inserted last.

    The grid is stored as (video_length, height, width) so that one frame
    is a contiguous image-shaped slice.
    """

    def __init__(self, width, height, video_length, margin=INDEX_DILATION_MARGIN):
        """
        Allocate an empty index.

        Parameters:
        -----------
        width : int
            Frame width in pixels
        height : int
            Frame height in pixels
        video_length : int
            Number of frames
        margin : int
            Dilation in pixels around each rounded point
        """
        if margin < 0:
            raise InvalidInputError(f"Dilation margin must be non-negative, got {margin}")
        self.margin = margin
        self.grid = None
        self._populated = False
        self._allocate(width, height, video_length)

    @classmethod
    def from_trajectories(cls, trajectories, width, height, video_length, margin=INDEX_DILATION_MARGIN):
        """Build an index and insert trajectories in ascending id order"""
        index = cls(width, height, video_length, margin)
        for trajectory_id, trajectory in enumerate(trajectories):
            index.insert_trajectory(trajectory_id, trajectory)
        return index

    def _allocate(self, width, height, video_length):
        """Create a grid filled with the no-trajectory sentinel"""
        if width <= 0 or height <= 0 or video_length <= 0:
            raise InvalidInputError(
                f"Index dimensions must be positive, got {width}x{height}x{video_length}"
            )
        # Release the previous grid before allocating the new one
        self.grid = None
        self.grid = np.full((video_length, height, width), NOT_TRAJECTORY_INDEX, dtype=np.int32)
        self._populated = False

    @property
    def width(self):
        return self.grid.shape[2]

    @property
    def height(self):
        return self.grid.shape[1]

    @property
    def video_length(self):
        return self.grid.shape[0]

    @property
    def shape(self):
        """(width, height, video_length)"""
        return self.width, self.height, self.video_length

    @property
    def is_populated(self):
        """True once at least one trajectory has been inserted since the last resize"""
        return self._populated

    def contains(self, x, y, t):
        """Check whether a voxel lies inside the grid"""
        return 0 <= x < self.width and 0 <= y < self.height and 0 <= t < self.video_length

    def footprint(self, x, y):
        """
        Inclusive pixel box (x1, y1, x2, y2) stamped for a point, clamped to the frame.

        The box is empty (x1 > x2 or y1 > y2) when the dilated square lies
        entirely outside the frame.
        """
        centre_x = int(round_half_away(x))
        centre_y = int(round_half_away(y))
        x1 = max(0, centre_x - self.margin)
        y1 = max(0, centre_y - self.margin)
        x2 = min(self.width - 1, centre_x + self.margin)
        y2 = min(self.height - 1, centre_y + self.margin)
        return x1, y1, x2, y2

    def insert(self, trajectory_id, points):
        """
        Stamp a trajectory's footprint into the grid.

        Parameters:
        -----------
        trajectory_id : int
            Non-negative id to store
        points : iterable
            (x, y, t) samples, positions may be fractional, frames are integral

        All samples are validated before any voxel is written. A sample is
        rejected when its frame is outside the video or its dilated square
        does not overlap the frame at all; otherwise the square is clamped.
        """
        if trajectory_id < 0 or trajectory_id > np.iinfo(np.int32).max:
            raise InvalidInputError(f"Trajectory id {trajectory_id} cannot be stored in the index")

        boxes = []
        for x, y, t in points:
            t = voxel_coordinate(t, 't')
            x1, y1, x2, y2 = box = self.footprint(x, y)
            if not 0 <= t < self.video_length or x1 > x2 or y1 > y2:
                raise IndexOutOfBoundsError(int(round_half_away(x)), int(round_half_away(y)), t, self.shape)
            boxes.append((box, t))

        for (x1, y1, x2, y2), t in boxes:
            self.grid[t, y1:y2 + 1, x1:x2 + 1] = trajectory_id

        if boxes:
            self._populated = True

    def insert_trajectory(self, trajectory_id, trajectory):
        """Insert every sample of a Trajectory"""
        self.insert(trajectory_id, trajectory.samples())

    def lookup(self, x, y, t):
        """Return the trajectory id at a voxel, or None if no trajectory covers it"""
        x = voxel_coordinate(x, 'x')
        y = voxel_coordinate(y, 'y')
        t = voxel_coordinate(t, 't')
        if not self.contains(x, y, t):
            raise IndexOutOfBoundsError(x, y, t, self.shape)
        trajectory_id = int(self.grid[t, y, x])
        if trajectory_id == NOT_TRAJECTORY_INDEX:
            return None
        return trajectory_id

    def resize(self, width, height, video_length):
        """Discard all contents and reallocate an empty grid of the new size"""
        self._allocate(width, height, video_length)

    def __repr__(self):
        state = "populated" if self._populated else "empty"
        return (f"TrajectoryIndex(width={self.width}, height={self.height}, "
                f"video_length={self.video_length}, margin={self.margin}, {state})")
