"""Sun-Earth-Moon hierarchical three-body preset."""

from typing import List
from threebody_sim.physics.body import Body
from threebody_sim.presets.base import Preset
from threebody_sim.presets.earth_moon import (
    EARTH_MASS,
    EARTH_MOON_DISTANCE,
    MOON_MASS,
    MOON_ORBITAL_SPEED,
)

SUN_MASS = 1.989e30  # kg
ASTRONOMICAL_UNIT = 1.496e11  # m
EARTH_ORBITAL_SPEED = 29780.0  # m/s


class SunEarthMoon(Preset):
    """Sun at the origin, Earth at 1 AU, Moon orbiting the Earth.

    All orbits are prograde in the x-y plane.
    """

    time_step = 3600.0  # 1 hour
    num_steps = 24 * 365  # one year

    @property
    def name(self) -> str:
        return "sun_earth_moon"

    def generate(self) -> List[Body]:
        return [
            Body(SUN_MASS, [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]),
            Body(EARTH_MASS, [ASTRONOMICAL_UNIT, 0.0, 0.0], [0.0, EARTH_ORBITAL_SPEED, 0.0]),
            Body(
                MOON_MASS,
                [ASTRONOMICAL_UNIT + EARTH_MOON_DISTANCE, 0.0, 0.0],
                [0.0, EARTH_ORBITAL_SPEED + MOON_ORBITAL_SPEED, 0.0],
            ),
        ]
