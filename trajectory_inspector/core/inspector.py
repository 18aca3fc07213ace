"""
Interactive trajectory inspector

This module contains the TrajectoryInspector class that shows trajectories
over their video frames and, for a clicked trajectory, its xy projection
and its position, velocity and acceleration against time with partition
boundaries marked.
"""

import cv2
import numpy as np
import matplotlib.pyplot as plt

from .trajectory_index import TrajectoryIndex
from .motion import compute_trajectory_signals, can_compute_motion_signals
from .exceptions import InvalidInputError, IndexOutOfBoundsError
from ..data.trajectories import read_trajectories_file, read_partitions_file, validate_pairing
from ..utils.file_utils import check_extension, read_frame_list, load_frames, save_selection_signals, \
    ensure_output_directory
from ..utils.visualization import Visualizer, SignalPlotter
from ..config.settings import *


class TrajectoryInspector:
    """
    Session state for inspecting trajectories against their frames.

    The spatiotemporal index is built once from all trajectories; every
    click then resolves a trajectory id in O(1) and derives its motion
    signals on demand.
    """

    def __init__(self, frames, trajectories, partitions, margin=INDEX_DILATION_MARGIN):
        """
        Initialize the inspector.

        Parameters:
        -----------
        frames : list
            BGR frame images of equal size, one per video frame
        trajectories : list
            Trajectory objects; the list position is the trajectory id
        partitions : list
            Cut points for every trajectory, in the same order
        margin : int
            Click tolerance in pixels around each trajectory point
        """
        if not frames:
            raise ValueError("At least one frame is required")
        if len(partitions) != len(trajectories):
            raise ValueError("There is no 1-to-1 correspondence between trajectories and their partitions")

        self.frames = frames
        self.trajectories = trajectories
        self.partitions = partitions
        self.frame_height, self.frame_width = frames[0].shape[:2]
        self.video_length = len(frames)

        self.index = TrajectoryIndex.from_trajectories(
            trajectories, self.frame_width, self.frame_height, self.video_length, margin
        )
        self.visualizer = Visualizer(self.frame_width, self.frame_height, margin)
        self.annotated_frames = self.visualizer.draw_trajectories(frames, trajectories)

        self.current_frame = 0
        self.num_selected = 0
        self.last_selection = None
        self.plotter = None

    @classmethod
    def from_files(cls, trajectories_path, partitions_path, frame_list_path):
        """Load frames, trajectories and partitions and check that they belong together"""
        check_extension(trajectories_path, TRAJECTORIES_EXTENSION)
        check_extension(partitions_path, PARTITIONS_EXTENSION)
        check_extension(frame_list_path, FRAME_LIST_EXTENSION)

        frames = load_frames(read_frame_list(frame_list_path))
        print(f"Loaded {len(frames)} frames of {frames[0].shape[1]}x{frames[0].shape[0]}")

        video_length, trajectories = read_trajectories_file(trajectories_path)
        if video_length != len(frames):
            raise ValueError("Trajectories are extracted from a video of another length")
        print(f"Loaded {len(trajectories)} trajectories")

        partitions_video_length, partitions = read_partitions_file(partitions_path)
        validate_pairing(video_length, trajectories, partitions_video_length, partitions)

        try:
            return cls(frames, trajectories, partitions)
        except IndexOutOfBoundsError as e:
            raise ValueError(f"{trajectories_path}: trajectory point outside the frames: {e}") from e

    def next_frame(self):
        """Go to the next frame, staying on the last one"""
        if self.current_frame < self.video_length - 1:
            self.current_frame += 1
        return self.current_frame

    def previous_frame(self):
        """Go to the previous frame, staying on the first one"""
        if self.current_frame > 0:
            self.current_frame -= 1
        return self.current_frame

    def refresh(self):
        """Forget drawn selections so that all colors are available again"""
        self.num_selected = 0
        self.last_selection = None
        self.visualizer.clear_xy_canvas()
        if self.plotter is not None:
            self.plotter.reset()

    def trajectory_at(self, x, y):
        """Trajectory id under a pixel of the current frame, or None"""
        try:
            return self.index.lookup(x, y, self.current_frame)
        except IndexOutOfBoundsError:
            return None

    def select(self, x, y):
        """
        Select the trajectory under a pixel of the current frame.

        Draws the trajectory and its partition points on the xy canvas and
        derives its motion signals when it is long enough.

        Returns:
        --------
        dict or None
            Selection data, or None if nothing was selected
        """
        trajectory_id = self.trajectory_at(x, y)
        if trajectory_id is None:
            return None

        if self.num_selected >= len(SELECTION_COLORS):
            print("Not enough colors. Press 'r' to refresh")
            return None

        trajectory = self.trajectories[trajectory_id]
        partition = self.partitions[trajectory_id]
        points = trajectory.rounded()
        partition_indices = np.asarray(partition, dtype=np.int64)

        selection = {
            'trajectory_id': trajectory_id,
            'trajectory': trajectory,
            'partition': list(partition),
            'color': SELECTION_COLORS[self.num_selected],
            'number': self.num_selected,
            'points': points,
            'partition_points': points[partition_indices] if partition_indices.size else points[:0],
            'signals': None
        }
        self.visualizer.draw_selection(selection)

        if len(trajectory) < MIN_DERIVED_SIGNAL_LENGTH or not can_compute_motion_signals(len(trajectory)):
            print(f"Trajectory {trajectory_id} is too short ({len(trajectory)} points) for speed and acceleration")
        else:
            try:
                selection['signals'] = compute_trajectory_signals(trajectory)
            except InvalidInputError as e:
                print(f"Cannot compute signals of trajectory {trajectory_id}: {e}")

        self.num_selected += 1
        self.last_selection = selection
        return selection

    def save_last_selection(self):
        """Save the signals, plots and xy projection of the last selection"""
        if self.last_selection is None or self.last_selection['signals'] is None:
            print("Nothing to save, select a trajectory with enough points first")
            return None

        selection = self.last_selection
        trajectory_id = selection['trajectory_id']
        saved = [save_selection_signals(trajectory_id, selection['trajectory'],
                                        selection['signals'], selection['partition'])]

        ensure_output_directory()
        cv2.imwrite(XY_PROJECTION_IMAGE, self.visualizer.xy_canvas)
        saved.append(XY_PROJECTION_IMAGE)
        if self.plotter is not None:
            plot_path = SIGNALS_PLOT_TEMPLATE.format(trajectory_id=trajectory_id)
            self.plotter.save(plot_path)
            saved.append(plot_path)
        return saved

    def handle_key(self, key):
        """
        Apply a key press.

        Returns:
        --------
        bool
            False when the session should end
        """
        if key & 0xFF == KEY_ESCAPE:
            return False

        char = chr(key & 0xFF)
        if char == KEY_NEXT_FRAME:
            self.next_frame()
        elif char == KEY_PREVIOUS_FRAME:
            self.previous_frame()
        elif char == KEY_REFRESH:
            self.refresh()
        elif char == KEY_SAVE:
            self.save_last_selection()
        return True

    def on_mouse(self, event, x, y, flags, param):
        """OpenCV mouse callback for the current frame window"""
        if event != cv2.EVENT_LBUTTONDOWN:
            return

        selection = self.select(x, y)
        if selection is None:
            return

        cv2.imshow(XY_PROJECTION_WINDOW, self.visualizer.xy_canvas)
        if selection['signals'] is not None:
            if self.plotter is None:
                self.plotter = SignalPlotter()
            else:
                self.plotter.reset()
            self.plotter.plot_selection(selection, selection['number'])
            self.plotter.figure.show()

    def show(self):
        """Display the current frame and the xy projection"""
        cv2.imshow(CURRENT_FRAME_WINDOW, self.annotated_frames[self.current_frame])
        cv2.imshow(XY_PROJECTION_WINDOW, self.visualizer.xy_canvas)

    def run(self):
        """Run the interactive loop until ESC is pressed"""
        plt.ion()

        self.show()
        cv2.setMouseCallback(CURRENT_FRAME_WINDOW, self.on_mouse)
        cv2.moveWindow(XY_PROJECTION_WINDOW, self.frame_width, 0)

        while True:
            key = cv2.waitKey(50)
            if key == -1:
                # Keep the matplotlib window responsive between key presses
                plt.pause(0.001)
                continue
            if not self.handle_key(key):
                print("User pressed ESC, exiting")
                break
            self.show()

        if self.plotter is not None:
            self.plotter.close()
        cv2.destroyAllWindows()
