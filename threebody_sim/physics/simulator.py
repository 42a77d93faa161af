"""Main simulator controller."""

import logging
from typing import Callable, List, Optional
import numpy as np
from threebody_sim.io.trajectory import TrajectoryWriter
from threebody_sim.physics.body import Body
from threebody_sim.physics.diagnostics import Diagnostics
from threebody_sim.physics.force_calculator import ForceCalculator, G
from threebody_sim.physics.integrators.base import DerivativeFunction, Integrator
from threebody_sim.physics.integrators.rkf45 import RKF45Integrator

logger = logging.getLogger(__name__)


class Simulator:
    """Main simulation controller.

    Owns the body ensemble, drives the integrator with the gravitational
    force model as derivative function, tracks elapsed time and streams one
    trajectory row per step to an optional output sink.
    """

    def __init__(
        self,
        bodies: List[Body],
        dt: float,
        integrator: Optional[Integrator] = None,
        force_calculator: Optional[DerivativeFunction] = None,
        output: Optional[TrajectoryWriter] = None
    ):
        """Initialize simulator.

        Args:
            bodies: Initial configuration of bodies (owned by the simulator)
            dt: Time step in seconds
            integrator: Integrator to use (default: RKF45)
            force_calculator: Derivative function (default: Newtonian gravity).
                Energies use its ``G`` attribute when it has one.
            output: Optional trajectory sink, header already written
        """
        self.bodies = list(bodies)
        self.dt = dt
        self.integrator = integrator or RKF45Integrator()
        self.force_calculator = force_calculator or ForceCalculator()
        self.diagnostics = Diagnostics(
            G=getattr(self.force_calculator, "G", G),
            force_calculator=self.force_calculator if isinstance(self.force_calculator, ForceCalculator) else None,
        )
        self.output = output

        self.time = 0.0
        self.step_count = 0
        self.output_errors = 0

        # Callbacks
        self.on_step_callback: Optional[Callable] = None

    @property
    def last_error(self) -> Optional[float]:
        """Error estimate of the most recent step (None before the first)."""
        return self.integrator.last_error

    @property
    def previous_error(self) -> Optional[float]:
        return self.integrator.previous_error

    @classmethod
    def with_output(cls, bodies: List[Body], dt: float, output_path: str, **kwargs) -> "Simulator":
        """Create a simulator that writes its trajectory to ``output_path``.

        Raises:
            OSError: If the output file cannot be created or the header written
        """
        bodies = list(bodies)
        writer = TrajectoryWriter(output_path)
        try:
            writer.write_header(len(bodies))
        except OSError:
            writer.close()
            raise
        return cls(bodies, dt, output=writer, **kwargs)

    def step(self):
        """Advance the simulation by one time step."""
        self.integrator.step(self.bodies, self.dt, self.force_calculator)
        self.time += self.dt
        self.step_count += 1

        if self.output is not None:
            self._write_row()

        if self.on_step_callback is not None:
            self.on_step_callback(self)

    def _write_row(self):
        # A failed write never stops the run; it is reported and counted.
        try:
            self.output.write_row(self.time, self.bodies)
        except (OSError, ValueError) as e:
            self.output_errors += 1
            logger.warning("Failed to write trajectory row at t=%.2f: %s", self.time, e)

    def run(self, n_steps: int):
        """Run simulation for specified number of steps.

        Args:
            n_steps: Number of steps to run
        """
        for _ in range(n_steps):
            self.step()

    def set_timestep(self, dt: float):
        """Set time step, effective from the next step.

        Args:
            dt: New time step
        """
        self.dt = dt

    def get_state(self):
        """Get a copy of the current simulation state.

        Returns:
            Tuple of (positions, velocities, masses, time, step_count); the
            arrays are read-only copies
        """
        positions = np.array([body.position for body in self.bodies]).reshape(-1, 3)
        velocities = np.array([body.velocity for body in self.bodies]).reshape(-1, 3)
        masses = np.array([body.mass for body in self.bodies])
        for array in (positions, velocities, masses):
            array.setflags(write=False)
        return positions, velocities, masses, self.time, self.step_count

    def kinetic_energy(self) -> float:
        return self.diagnostics.kinetic_energy(self.bodies)

    def potential_energy(self) -> float:
        return self.diagnostics.potential_energy(self.bodies)

    def total_energy(self) -> float:
        """Total mechanical energy (kinetic + potential)."""
        return self.kinetic_energy() + self.potential_energy()

    def print_positions(self):
        """Print current body positions and velocities to stdout."""
        print(f"Time: {self.time:.2f} s")
        for idx, body in enumerate(self.bodies):
            x, y, z = body.position
            vx, vy, vz = body.velocity
            print(
                f"Body {idx}: pos=[{x:.4e}, {y:.4e}, {z:.4e}], "
                f"vel=[{vx:.4e}, {vy:.4e}, {vz:.4e}]"
            )

    def close(self):
        """Close the trajectory sink, if any."""
        if self.output is not None:
            self.output.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
