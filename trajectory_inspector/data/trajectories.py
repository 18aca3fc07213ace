"""
Trajectory and partition file reading utilities
"""

import os
import numpy as np


def round_half_away(values):
    """Round to the nearest integer, halves away from zero (scalars or arrays)"""
    values = np.asarray(values, dtype=np.float64)
    return (np.sign(values) * np.floor(np.abs(values) + 0.5)).astype(np.int64)


class Trajectory:
    """Point sequence of one tracked point; frames run consecutively from start_frame"""

    def __init__(self, points, start_frame, label=0):
        points = np.asarray(points, dtype=np.float64)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError(f"Trajectory points must have shape (N, 2), got {points.shape}")
        if points.shape[0] == 0:
            raise ValueError("Trajectory must contain at least one point")
        if start_frame < 0:
            raise ValueError(f"Start frame must be non-negative, got {start_frame}")

        self.points = points
        self.start_frame = int(start_frame)
        self.label = label

    @property
    def size(self):
        return self.points.shape[0]

    def __len__(self):
        return self.size

    @property
    def x(self):
        return self.points[:, 0]

    @property
    def y(self):
        return self.points[:, 1]

    @property
    def frames(self):
        return np.arange(self.start_frame, self.start_frame + self.size)

    @property
    def end_frame(self):
        """Last frame the trajectory is present in"""
        return self.start_frame + self.size - 1

    def rounded(self):
        """Integer pixel positions, halves rounded away from zero"""
        return round_half_away(self.points).astype(np.int32)

    def samples(self):
        """Iterate over (x, y, frame) triples"""
        for i, (x, y) in enumerate(self.points):
            yield x, y, self.start_frame + i

    def __repr__(self):
        return f"Trajectory(size={self.size}, start_frame={self.start_frame}, label={self.label})"


class _TokenReader:
    """Reads whitespace separated values from a text file"""

    def __init__(self, file_path):
        self.file_path = file_path
        with open(file_path, 'r') as f:
            self.tokens = f.read().split()
        self.position = 0

    def next(self, convert, what):
        if self.position >= len(self.tokens):
            raise ValueError(f"{self.file_path}: unexpected end of file while reading {what}")
        token = self.tokens[self.position]
        self.position += 1
        try:
            return convert(token)
        except ValueError:
            raise ValueError(f"{self.file_path}: invalid {what} '{token}'") from None

    def remaining(self):
        return len(self.tokens) - self.position


def read_dat_header(reader):
    """Read the (video_length, element_count) pair opening every .dat file"""
    video_length = reader.next(int, "video length")
    element_count = reader.next(int, "element count")
    if video_length <= 0:
        raise ValueError(f"{reader.file_path}: video length must be positive, got {video_length}")
    if element_count < 0:
        raise ValueError(f"{reader.file_path}: element count must be non-negative, got {element_count}")
    return video_length, element_count


def read_trajectories_file(file_path):
    """
    Read trajectories from a .dat file.

    Layout: video_length trajectory_count, then for every trajectory
    label point_count followed by point_count lines of "x y frame".

    Parameters:
    -----------
    file_path : str
        Path to the trajectories file

    Returns:
    --------
    tuple
        (video_length, list of Trajectory)
    """
    reader = _TokenReader(file_path)
    video_length, trajectory_count = read_dat_header(reader)

    trajectories = []
    for trajectory_id in range(trajectory_count):
        label = reader.next(int, f"label of trajectory {trajectory_id}")
        point_count = reader.next(int, f"size of trajectory {trajectory_id}")
        if point_count <= 0:
            raise ValueError(f"{file_path}: trajectory {trajectory_id} has no points")

        points = np.empty((point_count, 2), dtype=np.float64)
        frames = np.empty(point_count, dtype=np.int64)
        for i in range(point_count):
            points[i, 0] = reader.next(float, f"x of trajectory {trajectory_id}")
            points[i, 1] = reader.next(float, f"y of trajectory {trajectory_id}")
            frames[i] = reader.next(int, f"frame of trajectory {trajectory_id}")

        # Only the start frame is stored, so the rest must follow it one by one
        expected = np.arange(frames[0], frames[0] + point_count)
        if not np.array_equal(frames, expected):
            raise ValueError(f"{file_path}: frames of trajectory {trajectory_id} are not consecutive")
        if frames[0] < 0 or frames[-1] >= video_length:
            raise ValueError(
                f"{file_path}: trajectory {trajectory_id} spans frames {frames[0]}..{frames[-1]}, "
                f"outside a video of {video_length} frames"
            )

        trajectories.append(Trajectory(points, int(frames[0]), label))

    if reader.remaining():
        print(f"Warning: {reader.remaining()} trailing values ignored in {file_path}")

    return video_length, trajectories


def read_partitions_file(file_path):
    """
    Read trajectory partitions from a .dat file.

    Layout: video_length trajectory_count, then for every trajectory
    cut_count followed by cut_count indices.

    Returns:
    --------
    tuple
        (video_length, list of partitions, each a list of int)
    """
    reader = _TokenReader(file_path)
    video_length, trajectory_count = read_dat_header(reader)

    partitions = []
    for trajectory_id in range(trajectory_count):
        cut_count = reader.next(int, f"partition size of trajectory {trajectory_id}")
        if cut_count < 0:
            raise ValueError(f"{file_path}: negative partition size for trajectory {trajectory_id}")
        partitions.append([
            reader.next(int, f"cut point of trajectory {trajectory_id}") for _ in range(cut_count)
        ])

    if reader.remaining():
        print(f"Warning: {reader.remaining()} trailing values ignored in {file_path}")

    return video_length, partitions


def validate_partition(partition, trajectory):
    """Check that cut points strictly increase and lie inside the trajectory"""
    previous = None
    for cut_point in partition:
        if not 0 <= cut_point < trajectory.size:
            raise ValueError(
                f"Cut point {cut_point} is outside a trajectory of {trajectory.size} points"
            )
        if previous is not None and cut_point <= previous:
            raise ValueError(f"Partition cut points must strictly increase, got {list(partition)}")
        previous = cut_point


def validate_pairing(video_length, trajectories, partitions_video_length, partitions):
    """Check that trajectories and partitions describe the same video one to one"""
    if partitions_video_length != video_length:
        raise ValueError("Partitions were extracted from a video of another length")
    if len(partitions) != len(trajectories):
        raise ValueError("There is no 1-to-1 correspondence between trajectories and their partitions")
    for trajectory_id, (trajectory, partition) in enumerate(zip(trajectories, partitions)):
        try:
            validate_partition(partition, trajectory)
        except ValueError as e:
            raise ValueError(f"Trajectory {trajectory_id}: {e}") from None


def write_dat_header(f, video_length, element_count):
    f.write(f"{video_length}\n{element_count}\n")


def write_trajectories_file(file_path, video_length, trajectories):
    """Write trajectories in the .dat layout read by read_trajectories_file"""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(file_path, 'w') as f:
        write_dat_header(f, video_length, len(trajectories))
        for trajectory in trajectories:
            f.write(f"{trajectory.label} {trajectory.size}\n")
            for x, y, frame in trajectory.samples():
                f.write(f"{float(x)!r} {float(y)!r} {frame}\n")


def write_partitions_file(file_path, video_length, partitions):
    """Write partitions in the .dat layout read by read_partitions_file"""
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)

    with open(file_path, 'w') as f:
        write_dat_header(f, video_length, len(partitions))
        for partition in partitions:
            f.write(f"{len(partition)}\n")
            f.write(" ".join(str(cut_point) for cut_point in partition) + "\n")
