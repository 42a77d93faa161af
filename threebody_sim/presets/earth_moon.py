"""Earth-Moon preset."""

from typing import List
from threebody_sim.physics.body import Body
from threebody_sim.presets.base import Preset

EARTH_MASS = 5.972e24  # kg
MOON_MASS = 7.342e22  # kg
EARTH_MOON_DISTANCE = 3.844e8  # m
MOON_ORBITAL_SPEED = 1022.0  # m/s


class EarthMoon(Preset):
    """Earth at rest at the origin, Moon on its mean orbit along +y."""

    time_step = 3600.0  # 1 hour
    num_steps = 24 * 28  # about one sidereal month

    def __init__(
        self,
        earth_mass: float = EARTH_MASS,
        moon_mass: float = MOON_MASS,
        distance: float = EARTH_MOON_DISTANCE,
        moon_speed: float = MOON_ORBITAL_SPEED
    ):
        self.earth_mass = earth_mass
        self.moon_mass = moon_mass
        self.distance = distance
        self.moon_speed = moon_speed

    @property
    def name(self) -> str:
        return "earth_moon"

    def generate(self) -> List[Body]:
        return [
            Body(self.earth_mass, [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]),
            Body(self.moon_mass, [self.distance, 0.0, 0.0], [0.0, self.moon_speed, 0.0]),
        ]
