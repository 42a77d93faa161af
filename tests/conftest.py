"""Shared fixtures."""

import matplotlib
matplotlib.use("Agg")

import pytest
from threebody_sim.physics.body import Body


@pytest.fixture
def earth_moon_bodies():
    """Earth at rest at the origin, Moon at lunar distance moving along +y."""
    return [
        Body(5.972e24, [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]),
        Body(7.342e22, [3.844e8, 0.0, 0.0], [0.0, 1022.0, 0.0]),
    ]


@pytest.fixture
def three_bodies():
    return [
        Body(1e30, [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]),
        Body(2e29, [1e11, 2e10, 0.0], [0.0, 2.5e4, 1e3]),
        Body(5e28, [-7e10, 4e10, 3e10], [-1.2e4, -1.5e4, 0.0]),
    ]
