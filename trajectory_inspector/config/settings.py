"""
Configuration settings for Trajectory Inspector
"""

# Smoothing and derivative filter parameters
GAUSSIAN_WINDOW_SIZE = 3
GAUSSIAN_SIGMA = 3.0
DERIVATIVE_WINDOW_SIZE = 3

# Trajectories shorter than this are drawn but not differentiated
MIN_DERIVED_SIGNAL_LENGTH = 5

# Spatiotemporal index parameters
NOT_TRAJECTORY_INDEX = -1
INDEX_DILATION_MARGIN = 1  # pixels around a rounded point (left, right, top and bottom)

# Input file extensions
TRAJECTORIES_EXTENSION = ".dat"
PARTITIONS_EXTENSION = ".dat"
FRAME_LIST_EXTENSION = ".bmf"

# Visualization parameters
COLOR_SCHEME_SIZE = 1024
COLOR_SCHEME_STRIDE = 10  # color step between consecutive points of a trajectory
BACKGROUND_COLOR = (0, 0, 0)
PARTITION_COLOR = (0, 0, 255)
PARTITION_POINT_RADIUS = 1
# One color per selected trajectory (BGR), press refresh once they run out
SELECTION_COLORS = [
    (255, 0, 0),
    (0, 255, 0),
    (255, 255, 0),
    (255, 0, 255),
    (0, 255, 255),
    (255, 255, 255),
    (0, 125, 0),
    (125, 125, 0),
    (125, 0, 125),
    (0, 125, 125),
    (125, 125, 125),
]
PLOT_FIGURE_SIZE = (10, 8)

# Window names
CURRENT_FRAME_WINDOW = "Current frame"
XY_PROJECTION_WINDOW = "xy projection"
SIGNALS_FIGURE_TITLE = "Motion signals"

# Key bindings
KEY_ESCAPE = 27
KEY_NEXT_FRAME = 'f'
KEY_PREVIOUS_FRAME = 'b'
KEY_REFRESH = 'r'
KEY_SAVE = 's'

# File paths
OUTPUT_DIR = "output"
SIGNALS_FILE_TEMPLATE = "output/trajectory_{trajectory_id}_signals.txt"
SIGNALS_PLOT_TEMPLATE = "output/trajectory_{trajectory_id}_signals.png"
XY_PROJECTION_IMAGE = "output/xy_projection.png"
