"""
Data handling package

Contains the trajectory type and functions for:
- Reading and writing trajectory and partition .dat files
- Validating partitions against their trajectories
"""

from .trajectories import (
    Trajectory,
    round_half_away,
    read_trajectories_file,
    read_partitions_file,
    validate_partition,
    validate_pairing,
    write_trajectories_file,
    write_partitions_file
)

__all__ = [
    'Trajectory',
    'round_half_away',
    'read_trajectories_file',
    'read_partitions_file',
    'validate_partition',
    'validate_pairing',
    'write_trajectories_file',
    'write_partitions_file',
]
