"""Point-mass body representation."""

import numpy as np


class Body:
    """A point mass with position, velocity and a transient acceleration.

    All vectors are float64 arrays of shape (3,). The acceleration is scratch
    space rewritten by every derivative evaluation; it is not part of the
    integrated state.
    """

    def __init__(self, mass: float, position, velocity):
        """Initialize body.

        Args:
            mass: Mass in kg
            position: Position [x, y, z] in m
            velocity: Velocity [vx, vy, vz] in m/s
        """
        self.mass = float(mass)
        self.position = np.array(position, dtype=np.float64).reshape(3)
        self.velocity = np.array(velocity, dtype=np.float64).reshape(3)
        self.acceleration = np.zeros(3, dtype=np.float64)

    def distance_to(self, other: "Body") -> float:
        """Euclidean distance to another body."""
        return float(np.linalg.norm(other.position - self.position))

    def vector_to(self, other: "Body") -> np.ndarray:
        """Displacement vector pointing from this body to another."""
        return other.position - self.position

    def reset_acceleration(self):
        self.acceleration[:] = 0.0

    def add_acceleration(self, delta):
        """Accumulate an acceleration contribution (superposition)."""
        self.acceleration += delta

    def copy(self) -> "Body":
        body = Body(self.mass, self.position, self.velocity)
        body.acceleration[:] = self.acceleration
        return body

    def __repr__(self) -> str:
        return (
            f"Body(mass={self.mass!r}, position={self.position.tolist()!r}, "
            f"velocity={self.velocity.tolist()!r})"
        )

    def __str__(self) -> str:
        x, y, z = self.position
        vx, vy, vz = self.velocity
        return (
            f"Body {{ mass: {self.mass:.2e}, pos: [{x:.2e}, {y:.2e}, {z:.2e}], "
            f"vel: [{vx:.2e}, {vy:.2e}, {vz:.2e}] }}"
        )
