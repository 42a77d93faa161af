"""Base class for preset scenarios."""

from abc import ABC, abstractmethod
from typing import List
from threebody_sim.physics.body import Body
from threebody_sim.utils.config import SimulationConfig


class Preset(ABC):
    """Abstract base class for preset scenarios."""

    # Recommended integration settings
    time_step: float = 3600.0
    num_steps: int = 1000
    
    @abstractmethod
    def generate(self) -> List[Body]:
        """Generate initial conditions.
        
        Returns:
            List of bodies, in ensemble order
        """
        pass
    
    @property
    @abstractmethod
    def name(self) -> str:
        """Return the name of this preset."""
        pass

    def config(self, output_file: str = "results.csv") -> SimulationConfig:
        """Initial conditions together with the recommended step settings."""
        return SimulationConfig(
            bodies=self.generate(),
            time_step=self.time_step,
            num_steps=self.num_steps,
            output_file=output_file,
        )
