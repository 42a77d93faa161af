"""Runge-Kutta-Fehlberg 4(5) integrator (embedded error estimate)."""

from typing import List
import numpy as np
from threebody_sim.physics.body import Body
from threebody_sim.physics.integrators.base import DerivativeFunction, Integrator


def pack_state(bodies: List[Body]) -> np.ndarray:
    """Stack the ensemble into an (n, 6) matrix of [x, y, z, vx, vy, vz] rows."""
    state = np.empty((len(bodies), 6), dtype=np.float64)
    for i, body in enumerate(bodies):
        state[i, :3] = body.position
        state[i, 3:] = body.velocity
    return state


def unpack_state(bodies: List[Body], state: np.ndarray):
    """Write an (n, 6) state matrix back into the bodies' positions and velocities."""
    for i, body in enumerate(bodies):
        body.position[:] = state[i, :3]
        body.velocity[:] = state[i, 3:]


def pack_derivatives(bodies: List[Body]) -> np.ndarray:
    """Stack [vx, vy, vz, ax, ay, az] rows, the time derivative of the state."""
    rates = np.empty((len(bodies), 6), dtype=np.float64)
    for i, body in enumerate(bodies):
        rates[i, :3] = body.velocity
        rates[i, 3:] = body.acceleration
    return rates


class RKF45Integrator(Integrator):
    """Runge-Kutta-Fehlberg method - 6 stages, 5th-order update.

    Each step evaluates the derivative function six times and combines the
    stage derivatives with two weight sets: the 5th-order weights advance the
    ensemble, and the difference to the embedded 4th-order solution is
    returned as the local error estimate. The step size is never changed
    here; callers wanting adaptive control can use the returned estimate.

    For a system dr/dt = v, dv/dt = a(r):
    k_s = h * f(t + c_s*h, y + sum_{p<s} a_sp * k_p)
    y_new = y + sum_s b5_s * k_s
    err = max |sum_s (b5_s - b4_s) * k_s|
    """

    # Nodes
    c = np.array([0.0, 1.0 / 4.0, 3.0 / 8.0, 12.0 / 13.0, 1.0, 1.0 / 2.0])

    # Stage coupling (row s holds the weights of k_0..k_{s-1})
    a = np.array([
        [0.0, 0.0, 0.0, 0.0, 0.0],
        [1.0 / 4.0, 0.0, 0.0, 0.0, 0.0],
        [3.0 / 32.0, 9.0 / 32.0, 0.0, 0.0, 0.0],
        [1932.0 / 2197.0, -7200.0 / 2197.0, 7296.0 / 2197.0, 0.0, 0.0],
        [439.0 / 216.0, -8.0, 3680.0 / 513.0, -845.0 / 4104.0, 0.0],
        [-8.0 / 27.0, 2.0, -3544.0 / 2565.0, 1859.0 / 4104.0, -11.0 / 40.0],
    ])

    # 5th order weights
    b5 = np.array([16.0 / 135.0, 0.0, 6656.0 / 12825.0, 28561.0 / 56430.0, -9.0 / 50.0, 2.0 / 55.0])

    # 4th order weights (error estimation only)
    b4 = np.array([25.0 / 216.0, 0.0, 1408.0 / 2565.0, 2197.0 / 4104.0, -1.0 / 5.0, 0.0])

    STAGES = 6

    @property
    def name(self) -> str:
        return "rkf45"

    @property
    def order(self) -> int:
        return 5

    @property
    def embedded_order(self) -> int:
        return 4

    def step(self, bodies: List[Body], dt: float, derivative: DerivativeFunction) -> float:
        """RKF45 step of fixed size ``dt``.

        Positions and velocities are advanced in place. On return every
        body's acceleration holds the value from the last (6th) stage. If the
        derivative function raises, positions and velocities are restored to
        their values at the start of the step before the exception propagates.

        Args:
            bodies: Mutable list of bodies
            dt: Time step
            derivative: Callable recomputing accelerations in place

        Returns:
            Maximum absolute difference between the 5th- and 4th-order
            increments over all bodies and state components
        """
        n = len(bodies)
        initial_state = pack_state(bodies)

        # Stage derivatives, scoped to this call
        k = np.zeros((self.STAGES, n, 6), dtype=np.float64)

        try:
            # k0: evaluate at the initial state
            derivative(bodies)
            k[0] = dt * pack_derivatives(bodies)

            for stage in range(1, self.STAGES):
                increment = np.tensordot(self.a[stage, :stage], k[:stage], axes=1)
                unpack_state(bodies, initial_state + increment)
                derivative(bodies)
                k[stage] = dt * pack_derivatives(bodies)
        except Exception:
            unpack_state(bodies, initial_state)
            raise

        high = np.tensordot(self.b5, k, axes=1)
        low = np.tensordot(self.b4, k, axes=1)
        unpack_state(bodies, initial_state + high)

        error = float(np.max(np.abs(high - low))) if n > 0 else 0.0
        return self.record_error(error)
