"""Direct-summation Newtonian gravity.

Every unordered pair is visited exactly once, in a fixed (i < j) order, so the
acceleration sums are reproducible bit-for-bit between runs. Coincident bodies
(zero separation) contribute nothing; there is no softening length.
"""

from typing import List
import numpy as np
from threebody_sim.physics.body import Body

G = 6.67430e-11  # Gravitational constant (m^3 kg^-1 s^-2)


def gravitational_force(mass1: float, mass2: float, distance: float) -> float:
    """Magnitude of the Newtonian attraction between two masses.

    Returns 0.0 for non-positive distances.
    """
    if distance > 0.0:
        return G * mass1 * mass2 / (distance * distance)
    return 0.0


class ForceCalculator:
    """Pairwise O(N^2) gravitational acceleration model.

    Instances are callable with a mutable list of bodies and overwrite each
    body's acceleration with the net acceleration due to all others, which
    makes them usable directly as an integrator derivative function.
    """

    def __init__(self, G: float = G):
        self.G = G

    def pair_force(self, body_i: Body, body_j: Body) -> np.ndarray:
        """Force vector on ``body_i`` due to ``body_j`` (zero if coincident)."""
        r_vec = body_i.vector_to(body_j)
        r = float(np.sqrt(np.dot(r_vec, r_vec)))
        if not r > 0.0:
            return np.zeros(3, dtype=np.float64)
        return (self.G * body_i.mass * body_j.mass / (r * r * r)) * r_vec

    def compute_accelerations(self, bodies: List[Body]):
        """Overwrite accelerations of ``bodies`` in place.

        Positions and velocities are left untouched.
        """
        for body in bodies:
            body.reset_acceleration()

        n = len(bodies)
        for i in range(n):
            body_i = bodies[i]
            for j in range(i + 1, n):
                body_j = bodies[j]
                force = self.pair_force(body_i, body_j)
                # Newton's third law: equal and opposite
                body_i.add_acceleration(force / body_i.mass)
                body_j.add_acceleration(-force / body_j.mass)

    def __call__(self, bodies: List[Body]):
        self.compute_accelerations(bodies)


def compute_accelerations(bodies: List[Body], G: float = G):
    """Functional form of :meth:`ForceCalculator.compute_accelerations`."""
    ForceCalculator(G=G).compute_accelerations(bodies)
