"""
Three-Body Simulator - N-body gravitational dynamics with RKF45 integration.

Features:
- Runge-Kutta-Fehlberg 4(5) integrator with embedded error estimate
- Direct-summation Newtonian gravity (SI units)
- Energy and momentum diagnostics
- INI/JSON/YAML initial conditions and preset scenarios
- CSV trajectory output and matplotlib playback
- CLI interfaces
"""

__version__ = "0.1.0"

from threebody_sim.physics.body import Body
from threebody_sim.physics.simulator import Simulator
from threebody_sim.physics.integrators.rkf45 import RKF45Integrator
from threebody_sim.utils.config import SimulationConfig, load_config

__all__ = [
    "Body",
    "Simulator",
    "RKF45Integrator",
    "SimulationConfig",
    "load_config",
]
