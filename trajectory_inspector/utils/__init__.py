"""
Utility modules for the trajectory inspector package

This package contains utility functions for:
- Input validation, frame loading and saving results
- Visualization of trajectories and motion signals
"""

from .visualization import Visualizer, SignalPlotter, generate_color_scheme
from .file_utils import read_frame_list, load_frames, save_selection_signals

__all__ = [
    'Visualizer',
    'SignalPlotter',
    'generate_color_scheme',
    'read_frame_list',
    'load_frames',
    'save_selection_signals',
]
