"""Preset scenarios for N-body simulations."""

from threebody_sim.presets.base import Preset
from threebody_sim.presets.earth_moon import EarthMoon
from threebody_sim.presets.binary_stars import BinaryStars
from threebody_sim.presets.sun_earth_moon import SunEarthMoon

PRESETS = {
    "earth_moon": EarthMoon,
    "binary_stars": BinaryStars,
    "sun_earth_moon": SunEarthMoon,
}


def get_preset(name: str) -> Preset:
    """Get preset by name."""
    preset_class = PRESETS.get(name.lower())
    if preset_class is None:
        raise ValueError(f"Unknown preset: {name}. Available: {list(PRESETS.keys())}")
    return preset_class()


__all__ = ["Preset", "EarthMoon", "BinaryStars", "SunEarthMoon", "PRESETS", "get_preset"]
