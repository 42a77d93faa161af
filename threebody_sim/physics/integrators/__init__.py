"""Numerical integrators for N-body simulations."""

from threebody_sim.physics.integrators.base import DerivativeFunction, Integrator
from threebody_sim.physics.integrators.rkf45 import RKF45Integrator

__all__ = ["DerivativeFunction", "Integrator", "RKF45Integrator"]
