#!/usr/bin/env python3
"""
Main run script for Trajectory Inspector
"""

import sys

from trajectory_inspector import TrajectoryInspector
from trajectory_inspector.config.settings import *


def show_help(program):
    """Show help information"""
    print(f"""
🎯 Trajectory Inspector - Run Script

USAGE:
    python {program} <path_to_trajectories> <path_to_partition> <path_to_frames>

ARGUMENTS:
    path_to_trajectories  Trajectories {TRAJECTORIES_EXTENSION} file
    path_to_partition     Partition {PARTITIONS_EXTENSION} file, one partition per trajectory
    path_to_frames        Frame list {FRAME_LIST_EXTENSION} file

CONTROLS:
    left click   Select the trajectory under the cursor
    {KEY_NEXT_FRAME}            Next frame
    {KEY_PREVIOUS_FRAME}            Previous frame
    {KEY_REFRESH}            Refresh xy projection and plots
    {KEY_SAVE}            Save signals of the last selection to '{OUTPUT_DIR}/'
    ESC          Quit

REQUIREMENTS:
    - Python 3.8+
    - OpenCV (opencv-python)
    - NumPy
    - Matplotlib
    """)


def main(argv=None):
    """Main function"""
    argv = sys.argv if argv is None else argv

    if len(argv) > 1 and argv[1] in ['help', '-h', '--help']:
        show_help(argv[0])
        return 0
    if len(argv) != 1 + 3:
        print(f"Usage: {argv[0]} <path_to_trajectories> <path_to_partition> <path_to_frames>")
        return 1

    trajectories_path, partitions_path, frame_list_path = argv[1:]

    print("🎯 Trajectory Inspector")
    print("=" * 40)
    print(f"📈 Trajectories: {trajectories_path}")
    print(f"✂️  Partition: {partitions_path}")
    print(f"🖼️  Frames: {frame_list_path}")

    print("\n🔧 Loading input...")
    try:
        inspector = TrajectoryInspector.from_files(trajectories_path, partitions_path, frame_list_path)
    except FileNotFoundError as e:
        print(f"❌ Error: File not found: {e.filename}")
        return 1
    except ValueError as e:
        print(f"❌ Error: {e}")
        return 1

    print(f"✅ Index built: {inspector.index}")
    print("\n🎯 Click a trajectory to inspect it, press ESC to quit")
    inspector.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
