"""Abstract base class for numerical integrators."""

from abc import ABC, abstractmethod
from typing import List, Optional, Protocol
from threebody_sim.physics.body import Body


class DerivativeFunction(Protocol):
    """Computes derivatives for a mutable ensemble.

    Implementations overwrite every body's ``acceleration`` from the current
    positions (and velocities); the velocities are already part of the state.
    """

    def __call__(self, bodies: List[Body]) -> None:
        ...


class Integrator(ABC):
    """Abstract interface for numerical integrators.

    Keeps the error estimates of the two most recent steps so callers can
    compare consecutive steps.
    """

    last_error: Optional[float] = None
    previous_error: Optional[float] = None

    def record_error(self, error: float) -> float:
        """Shift the error history by one step and return ``error``."""
        self.previous_error = self.last_error
        self.last_error = error
        return error
    
    @abstractmethod
    def step(self, bodies: List[Body], dt: float, derivative: DerivativeFunction) -> float:
        """Advance the ensemble in place by one step.
        
        Args:
            bodies: Mutable list of bodies, updated in place
            dt: Time step
            derivative: Callable that recomputes accelerations for the ensemble
            
        Returns:
            Local error estimate for the step (0.0 if the method has none)
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this integrator."""
        pass
    
    @property
    @abstractmethod
    def order(self) -> int:
        """Return the order of accuracy of the propagated solution."""
        pass
