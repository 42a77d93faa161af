"""Diagnostics for N-body simulations."""

from typing import List, Optional, Tuple
import numpy as np
from threebody_sim.physics.body import Body
from threebody_sim.physics.force_calculator import ForceCalculator, G


class Diagnostics:
    """Compute energy and momentum diagnostics consistent with the force law."""

    def __init__(self, G: float = G, force_calculator: Optional[ForceCalculator] = None):
        """Initialize diagnostics.

        Args:
            G: Gravitational constant (must match force calculation)
            force_calculator: Force model checked by validate_force_pair
        """
        self.G = G
        self.force_calculator = force_calculator or ForceCalculator(G=G)

    def kinetic_energy(self, bodies: List[Body]) -> float:
        """Kinetic energy: K = 0.5 * Σ m_i * |v_i|^2"""
        ke = 0.0
        for body in bodies:
            v_sq = float(np.dot(body.velocity, body.velocity))
            ke += 0.5 * body.mass * v_sq
        return ke

    def potential_energy(self, bodies: List[Body]) -> float:
        """Potential energy: U = -G * Σ_{i<j} m_i * m_j / r_ij

        Pairs at zero separation are skipped, matching the force law.
        """
        pe = 0.0
        n = len(bodies)
        for i in range(n):
            for j in range(i + 1, n):
                r = bodies[i].distance_to(bodies[j])
                if r > 0.0:
                    pe -= self.G * bodies[i].mass * bodies[j].mass / r
        return pe

    def compute_energies(self, bodies: List[Body]) -> Tuple[float, float, float]:
        """Compute kinetic, potential, and total energy.

        Returns:
            Tuple of (kinetic_energy, potential_energy, total_energy)
        """
        K = self.kinetic_energy(bodies)
        U = self.potential_energy(bodies)
        return K, U, K + U

    def compute_virial_ratio(self, bodies: List[Body]) -> float:
        """Compute virial ratio Q = 2K / |U|.

        Returns:
            Virial ratio Q (inf when there is no potential energy)
        """
        K, U, _ = self.compute_energies(bodies)
        if U == 0.0:
            return float('inf')
        return 2.0 * K / abs(U)

    def total_momentum(self, bodies: List[Body]) -> np.ndarray:
        momentum = np.zeros(3)
        for body in bodies:
            momentum += body.mass * body.velocity
        return momentum

    def angular_momentum(self, bodies: List[Body]) -> np.ndarray:
        """Total angular momentum about the origin, L = Σ m_i * (r_i x v_i)."""
        L = np.zeros(3)
        for body in bodies:
            L += body.mass * np.cross(body.position, body.velocity)
        return L

    @staticmethod
    def relative_energy_drift(initial_energy: float, energy: float) -> float:
        """|E - E0| / |E0| (absolute drift if E0 is zero)."""
        change = abs(energy - initial_energy)
        if initial_energy == 0.0:
            return change
        return change / abs(initial_energy)

    def validate_force_pair(self, bodies: List[Body], index_i: int, index_j: int) -> Tuple[float, float, float]:
        """Check the force model for one pair against Newton's law.

        Args:
            bodies: Ensemble
            index_i: Index of the first body
            index_j: Index of the second body

        Returns:
            Tuple of (computed_force, expected_force, relative_error); all
            zeros for out-of-range indices or coincident bodies
        """
        n = len(bodies)
        if not (0 <= index_i < n and 0 <= index_j < n) or index_i == index_j:
            return 0.0, 0.0, 0.0

        body_i = bodies[index_i]
        body_j = bodies[index_j]
        r = body_i.distance_to(body_j)
        if not r > 0.0:
            return 0.0, 0.0, 0.0
        expected = self.G * body_i.mass * body_j.mass / (r * r)
        if expected == 0.0:
            return 0.0, 0.0, 0.0

        computed = float(np.linalg.norm(self.force_calculator.pair_force(body_i, body_j)))
        relative_error = abs(computed - expected) / expected
        return computed, expected, relative_error
