"""Base renderer interface."""

from abc import ABC, abstractmethod
from typing import Optional
from threebody_sim.io.trajectory import TrajectoryData


class Renderer(ABC):
    """Abstract base class for renderers."""
    
    @abstractmethod
    def render(self, trajectory: TrajectoryData, frame: Optional[int] = None):
        """Render the trajectory up to a frame.
        
        Args:
            trajectory: Loaded trajectory data
            frame: Frame to highlight (default: last frame)
        """
        pass
    
    @abstractmethod
    def save(self, output_path: str):
        """Save the current figure to an image file."""
        pass
    
    @abstractmethod
    def clear(self):
        """Clear the renderer."""
        pass
    
    @abstractmethod
    def close(self):
        """Close the renderer."""
        pass
