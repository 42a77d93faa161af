"""Basic example of using the three-body simulator."""

from threebody_sim import Simulator
from threebody_sim.presets import EarthMoon

def main():
    """Run an Earth-Moon simulation and track energy conservation."""
    # Create the Earth-Moon preset
    preset = EarthMoon()
    
    # Create simulator with a one-hour step (RKF45 by default)
    sim = Simulator(preset.generate(), dt=3600.0)
    
    # Run simulation
    print("Running simulation...")
    initial_energy = sim.total_energy()
    print(f"Initial energy: {initial_energy:.6e} J")
    
    for step in range(24 * 28):
        sim.step()
        if step % 168 == 0:
            energy = sim.total_energy()
            print(f"Step {step}: Time={sim.time / 86400:.1f} d, Energy={energy:.6e} J, "
                  f"error estimate={sim.last_error:.3e}")
    
    final_energy = sim.total_energy()
    print(f"Final energy: {final_energy:.6e} J")
    print(f"Relative change: {abs(final_energy - initial_energy) / abs(initial_energy):.2e}")
    print("Simulation complete!")

if __name__ == "__main__":
    main()
