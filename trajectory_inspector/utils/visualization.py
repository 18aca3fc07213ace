"""
Visualization utilities for trajectories, their projections and motion signals
"""

import cv2
import numpy as np
import matplotlib.pyplot as plt
from ..core.motion import sample_at_partition
from ..config.settings import *


def generate_color_scheme(size=COLOR_SCHEME_SIZE):
    """
    Generate the BGR color ramp used to paint trajectory footprints.

    Blue to cyan, cyan to green, green to yellow-green, then white, each
    block a quarter of the scheme (the dense trajectories ramp of T. Brox).
    """
    block = size // 4
    ramp = np.linspace(0, 255, block).astype(np.int32)
    colors = []
    colors += [(255, int(v), 0) for v in ramp]
    colors += [(255 - int(v), 255, 0) for v in ramp]
    colors += [(0, 255, int(v)) for v in ramp]
    colors += [(255, 255, 255)] * (size - len(colors))
    return colors


def bgr_to_rgb_float(color):
    """Convert an OpenCV BGR color to a matplotlib RGB tuple"""
    b, g, r = color[:3]
    return (r / 255.0, g / 255.0, b / 255.0)


class Visualizer:
    """Draws trajectory footprints on frames and selected trajectories on the xy canvas"""

    def __init__(self, frame_width, frame_height, margin=INDEX_DILATION_MARGIN):
        """Initialize the visualizer"""
        self.frame_width = frame_width
        self.frame_height = frame_height
        self.margin = margin
        self.color_scheme = generate_color_scheme()
        self.xy_canvas = self.blank_canvas()

    def blank_canvas(self):
        """Background image for the xy projection"""
        canvas = np.zeros((self.frame_height, self.frame_width, 3), dtype=np.uint8)
        canvas[:] = BACKGROUND_COLOR
        return canvas

    def clear_xy_canvas(self):
        self.xy_canvas = self.blank_canvas()

    def point_color(self, point_index):
        """Color of the i-th point of a trajectory, clamped to the end of the scheme"""
        return self.color_scheme[min(point_index * COLOR_SCHEME_STRIDE, len(self.color_scheme) - 1)]

    def draw_trajectories(self, frames, trajectories):
        """
        Paint every trajectory sample onto a copy of its frame.

        Each sample becomes a filled square of the index footprint size, so
        what is painted is what can be clicked.

        Parameters:
        -----------
        frames : list
            BGR frame images, not modified
        trajectories : list
            Trajectory objects

        Returns:
        --------
        list
            Copies of the frames with the trajectories drawn
        """
        annotated = [frame.copy() for frame in frames]
        for trajectory in trajectories:
            rounded = trajectory.rounded()
            for i, ((x, y), t) in enumerate(zip(rounded, trajectory.frames)):
                # Skip samples whose frame is not loaded
                if not 0 <= t < len(annotated):
                    continue
                p1 = (max(0, int(x) - self.margin), max(0, int(y) - self.margin))
                p2 = (min(self.frame_width - 1, int(x) + self.margin),
                      min(self.frame_height - 1, int(y) + self.margin))
                # Square entirely outside the frame
                if p1[0] > p2[0] or p1[1] > p2[1]:
                    continue
                cv2.rectangle(annotated[t], p1, p2, self.point_color(i), cv2.FILLED)
        return annotated

    def draw_curve(self, points, color):
        """Draw a polyline through integer points on the xy canvas"""
        for start, end in zip(points[:-1], points[1:]):
            cv2.line(self.xy_canvas, (int(start[0]), int(start[1])), (int(end[0]), int(end[1])), color)

    def draw_points(self, points, color):
        """Draw small filled dots on the xy canvas"""
        for x, y in points:
            cv2.circle(self.xy_canvas, (int(x), int(y)), PARTITION_POINT_RADIUS, color, -1)

    def draw_selection(self, selection):
        """Draw a selected trajectory and its partition points on the xy canvas"""
        self.draw_curve(selection['points'], selection['color'])
        self.draw_points(selection['partition_points'], PARTITION_COLOR)
        return self.xy_canvas


class SignalPlotter:
    """Plots x-t and y-t projections with their derived velocity and acceleration"""

    def __init__(self, title=SIGNALS_FIGURE_TITLE):
        """Create the figure with one row per axis: position, then velocity/acceleration"""
        self.figure, axes = plt.subplots(2, 2, figsize=PLOT_FIGURE_SIZE)
        if self.figure.canvas.manager is not None:
            self.figure.canvas.manager.set_window_title(title)
        self.axes = {
            'x': (axes[0][0], axes[0][1]),
            'y': (axes[1][0], axes[1][1]),
        }
        self.reset()

    def reset(self):
        """Clear all plots and restore axis labels"""
        for axis_name, (position_ax, derivative_ax) in self.axes.items():
            position_ax.clear()
            derivative_ax.clear()
            position_ax.set_xlabel('t')
            position_ax.set_ylabel(axis_name)
            derivative_ax.set_xlabel('t')
            derivative_ax.set_ylabel(f'd{axis_name}/dt')
            derivative_ax.axhline(0, color='black', linewidth=0.5)

    def plot_selection(self, selection, index):
        """
        Plot the signals of one selection.

        Parameters:
        -----------
        selection : dict
            Output of TrajectoryInspector.select() with signals
        index : int
            Running number of the selection, used in legend labels
        """
        signals = selection['signals']
        partition = selection['partition']
        color = bgr_to_rgb_float(selection['color'])
        t = signals['t']
        cut_frames = t[np.asarray(partition, dtype=np.int64)] if len(partition) else np.array([])

        for axis_name, (position_ax, derivative_ax) in self.axes.items():
            axis_signals = signals[axis_name]

            position_ax.plot(t, axis_signals['raw'], '-', color=color, label=f'trajectory {index}')
            position_ax.plot(t, axis_signals['smooth'], '--', color=color, alpha=0.7, label='smooth')

            derivative_ax.plot(t, axis_signals['velocity'], '-', color=color, label=f'speed {index}')
            derivative_ax.plot(t, axis_signals['acceleration'], ':', color=color, label=f'acceleration {index}')

            # Partition boundaries on both derived signals
            if len(partition):
                derivative_ax.plot(cut_frames, sample_at_partition(axis_signals['velocity'], partition),
                                   'o', color='red', markersize=4, label='partition')
                derivative_ax.plot(cut_frames, sample_at_partition(axis_signals['acceleration'], partition),
                                   's', color='red', markersize=4)

            position_ax.legend(fontsize=7)
            derivative_ax.legend(fontsize=7)

        self.figure.tight_layout()
        self.figure.canvas.draw_idle()

    def save(self, output_path):
        self.figure.savefig(output_path, bbox_inches='tight', dpi=150)
        print(f"Signal plots saved to {output_path}")

    def close(self):
        plt.close(self.figure)
