"""I/O utilities for trajectory output and playback."""

from threebody_sim.io.trajectory import TrajectoryData, TrajectoryError, TrajectoryWriter

__all__ = ["TrajectoryData", "TrajectoryError", "TrajectoryWriter"]
