"""
File utilities for input validation, frame loading and saving results
"""

import os
import datetime
import numpy as np
import cv2
from ..config.settings import *


def ensure_output_directory():
    """Ensure the output directory exists"""
    os.makedirs(OUTPUT_DIR, exist_ok=True)


def check_extension(file_path, extension):
    """Raise ValueError unless the path ends with the given extension"""
    if os.path.splitext(file_path)[1] != extension:
        raise ValueError(f"{file_path} must be a {extension} file")


def read_frame_list(file_path):
    """
    Read a .bmf frame list.

    The file starts with "frame_count dummy" followed by one frame file
    name per entry, relative to the directory of the .bmf file.

    Parameters:
    -----------
    file_path : str
        Path to the .bmf file

    Returns:
    --------
    list
        Paths of the frame images in video order
    """
    with open(file_path, 'r') as f:
        tokens = f.read().split()

    if len(tokens) < 2:
        raise ValueError(f"{file_path}: missing frame list header")
    try:
        frame_count = int(tokens[0])
    except ValueError:
        raise ValueError(f"{file_path}: invalid frame count '{tokens[0]}'") from None
    if frame_count <= 0:
        raise ValueError(f"{file_path}: frame count must be positive, got {frame_count}")

    frame_names = tokens[2:2 + frame_count]
    if len(frame_names) < frame_count:
        raise ValueError(f"{file_path}: expected {frame_count} frames, found {len(frame_names)}")

    root_dir = os.path.dirname(file_path) or "."
    return [os.path.join(root_dir, frame_name) for frame_name in frame_names]


def load_frames(frame_paths):
    """Read frame images, all of which must have the size of the first one"""
    frames = []
    for i, frame_path in enumerate(frame_paths):
        frame = cv2.imread(frame_path)
        if frame is None:
            raise ValueError(f"Cannot read {frame_path}")
        if frames and frame.shape != frames[0].shape:
            raise ValueError(f"Size of {i + 1}-th frame differs from sizes of previous frames")
        frames.append(frame)
    return frames


def save_selection_signals(trajectory_id, trajectory, signals, partition, output_file=None):
    """
    Save the motion signals of a selected trajectory to a text file.

    Parameters:
    -----------
    trajectory_id : int
        Index of the trajectory in the loaded file
    trajectory : Trajectory
        The selected trajectory
    signals : dict
        Output of compute_trajectory_signals()
    partition : list
        Cut points of the trajectory
    output_file : str, optional
        Destination, defaults to SIGNALS_FILE_TEMPLATE

    Returns:
    --------
    str
        Path of the written file
    """
    ensure_output_directory()
    if output_file is None:
        output_file = SIGNALS_FILE_TEMPLATE.format(trajectory_id=trajectory_id)

    cut_points = set(partition)
    columns = np.column_stack([
        signals['t'],
        signals['x']['raw'], signals['x']['smooth'], signals['x']['velocity'], signals['x']['acceleration'],
        signals['y']['raw'], signals['y']['smooth'], signals['y']['velocity'], signals['y']['acceleration'],
    ])

    with open(output_file, 'w') as f:
        f.write(f"# Trajectory {trajectory_id} (label {trajectory.label}), {trajectory.size} points, "
                f"frames {trajectory.start_frame}..{trajectory.end_frame}\n")
        f.write(f"# Saved: {datetime.datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write(f"# Partition: {' '.join(str(c) for c in partition)}\n")
        f.write("# frame x x_smooth x_velocity x_acceleration y y_smooth y_velocity y_acceleration cut\n")
        for i, row in enumerate(columns):
            values = " ".join(f"{value:.6f}" for value in row[1:])
            f.write(f"{int(row[0])} {values} {1 if i in cut_points else 0}\n")

    print(f"Signals of trajectory {trajectory_id} saved to {output_file}")
    return output_file
