"""Example writing a trajectory and plotting it."""

from threebody_sim import Simulator
from threebody_sim.io import TrajectoryData
from threebody_sim.presets import SunEarthMoon
from threebody_sim.render import TrajectoryRenderer

def main():
    """Simulate one year of the Sun-Earth-Moon system and plot the orbits."""
    preset = SunEarthMoon()
    
    # Write one CSV row per step
    with Simulator.with_output(preset.generate(), preset.time_step, "sun_earth_moon.csv") as sim:
        print("Running simulation...")
        sim.run(preset.num_steps)
    
    trajectory = TrajectoryData.load_csv("sun_earth_moon.csv")
    print(f"Loaded {trajectory.num_bodies} bodies with {trajectory.num_frames} frames")
    
    renderer = TrajectoryRenderer(mode="2d")
    try:
        renderer.render(trajectory)
        renderer.save("sun_earth_moon.png")
        print("Figure saved to sun_earth_moon.png")
    finally:
        renderer.close()

if __name__ == "__main__":
    main()
