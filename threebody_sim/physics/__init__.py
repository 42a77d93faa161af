"""Physics engine for N-body simulations."""

from threebody_sim.physics.body import Body
from threebody_sim.physics.force_calculator import ForceCalculator, G
from threebody_sim.physics.diagnostics import Diagnostics
from threebody_sim.physics.simulator import Simulator

__all__ = ["Body", "ForceCalculator", "G", "Diagnostics", "Simulator"]
