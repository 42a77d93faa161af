"""Equal-mass circular binary preset."""

from typing import List
import numpy as np
from threebody_sim.physics.body import Body
from threebody_sim.physics.force_calculator import G
from threebody_sim.presets.base import Preset


class BinaryStars(Preset):
    """Two equal stars on a circular orbit about their common center of mass.

    Each star orbits at radius d/2 with speed v = sqrt(G * m / (2 * d)), so the
    total momentum is zero and the orbit stays centered on the origin.
    """

    time_step = 86400.0  # 1 day

    def __init__(self, star_mass: float = 1e30, separation: float = 1e11):
        """Initialize binary preset.

        Args:
            star_mass: Mass of each star (kg)
            separation: Distance between the stars (m)
        """
        self.star_mass = star_mass
        self.separation = separation

    @property
    def name(self) -> str:
        return "binary_stars"

    @property
    def orbital_speed(self) -> float:
        return float(np.sqrt(G * self.star_mass / (2.0 * self.separation)))

    @property
    def orbital_period(self) -> float:
        """Period T = 2π * (d/2) / v."""
        return float(np.pi * self.separation / self.orbital_speed)

    def generate(self) -> List[Body]:
        half = self.separation / 2.0
        v = self.orbital_speed
        return [
            Body(self.star_mass, [-half, 0.0, 0.0], [0.0, -v, 0.0]),
            Body(self.star_mass, [half, 0.0, 0.0], [0.0, v, 0.0]),
        ]
