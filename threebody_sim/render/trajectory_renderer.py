"""Static trajectory renderer using matplotlib."""

from typing import Literal, Optional, Tuple
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from threebody_sim.io.trajectory import TrajectoryData
from threebody_sim.render.base import Renderer


class TrajectoryRenderer(Renderer):
    """Draws each body's trail and its position at one frame.

    ``"2d"`` projects onto the x-y plane, ``"3d"`` uses a matplotlib 3D axes.
    The view is centered on the bodies' centroid at frame 0.
    """

    def __init__(
        self,
        mode: Literal["2d", "3d"] = "3d",
        figsize: Tuple[int, int] = (10, 10),
        dpi: int = 100,
        show_trails: bool = True,
        trail_length: Optional[int] = None,
        view_scale: float = 1.25
    ):
        """Initialize renderer.

        Args:
            mode: Rendering mode ('2d' or '3d')
            figsize: Figure size (width, height)
            dpi: Dots per inch
            show_trails: Whether to draw the path up to the frame
            trail_length: Number of previous frames in a trail (None for all)
            view_scale: Half-width of the view as a multiple of the body extent
        """
        if mode not in ("2d", "3d"):
            raise ValueError(f"Unknown mode: {mode}")
        self.mode = mode
        self.figsize = figsize
        self.dpi = dpi
        self.show_trails = show_trails
        self.trail_length = trail_length
        self.view_scale = view_scale

        self.fig: Optional[Figure] = None
        self.ax = None

    def _initialize(self):
        if self.fig is None:
            self.fig = plt.figure(figsize=self.figsize, dpi=self.dpi)
            if self.mode == "3d":
                self.ax = self.fig.add_subplot(111, projection="3d")
            else:
                self.ax = self.fig.add_subplot(111)

    def _setup_axes(self, trajectory: TrajectoryData, frame: int):
        centroid, extent = trajectory.camera_target(0)
        half = extent * self.view_scale
        self.ax.set_xlim(centroid[0] - half, centroid[0] + half)
        self.ax.set_ylim(centroid[1] - half, centroid[1] + half)
        self.ax.set_xlabel('X (m)')
        self.ax.set_ylabel('Y (m)')
        if self.mode == "3d":
            self.ax.set_zlim(centroid[2] - half, centroid[2] + half)
            self.ax.set_zlabel('Z (m)')
        else:
            self.ax.set_aspect('equal')
            self.ax.grid(True, alpha=0.3)
        self.ax.set_title(f"t = {trajectory.times[frame]:.0f} s (frame {frame + 1}/{trajectory.num_frames})")

    def render(self, trajectory: TrajectoryData, frame: Optional[int] = None):
        """Render trails up to ``frame`` and a marker per body at ``frame``."""
        if frame is None:
            frame = trajectory.num_frames - 1
        if not 0 <= frame < trajectory.num_frames:
            raise IndexError(f"Frame {frame} out of range (0..{trajectory.num_frames - 1})")

        self._initialize()
        self.ax.clear()
        self._setup_axes(trajectory, frame)

        start = 0
        if self.trail_length is not None:
            start = max(0, frame + 1 - self.trail_length)

        colors = plt.get_cmap("tab10")(np.arange(trajectory.num_bodies) % 10)
        for body in range(trajectory.num_bodies):
            path = trajectory.body_positions(body)
            color = colors[body]
            label = f"Body {body}"
            if self.mode == "3d":
                if self.show_trails:
                    self.ax.plot(path[start:frame + 1, 0], path[start:frame + 1, 1], path[start:frame + 1, 2],
                                 '-', color=color, alpha=0.5, linewidth=1.0)
                self.ax.scatter([path[frame, 0]], [path[frame, 1]], [path[frame, 2]],
                                color=color, s=40, label=label)
            else:
                if self.show_trails:
                    self.ax.plot(path[start:frame + 1, 0], path[start:frame + 1, 1],
                                 '-', color=color, alpha=0.5, linewidth=1.0)
                self.ax.scatter([path[frame, 0]], [path[frame, 1]],
                                color=color, s=40, label=label)

        self.ax.legend(loc='upper right')

    def save(self, output_path: str):
        if self.fig is None:
            raise RuntimeError("Renderer not initialized. Call render() first.")
        self.fig.savefig(output_path)

    def show(self):
        """Display the figure (blocking)."""
        if self.fig is None:
            raise RuntimeError("Renderer not initialized. Call render() first.")
        plt.show()

    def clear(self):
        """Clear the renderer."""
        if self.ax is not None:
            self.ax.clear()

    def close(self):
        """Close the renderer."""
        if self.fig is not None:
            plt.close(self.fig)
            self.fig = None
            self.ax = None
