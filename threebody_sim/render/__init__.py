"""Trajectory playback rendering."""

from threebody_sim.render.base import Renderer
from threebody_sim.render.trajectory_renderer import TrajectoryRenderer

__all__ = ["Renderer", "TrajectoryRenderer"]
