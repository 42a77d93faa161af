"""Trajectory viewer entry point."""

import argparse
import sys
from threebody_sim.io.trajectory import TrajectoryData, TrajectoryError
from threebody_sim.render.trajectory_renderer import TrajectoryRenderer

DEFAULT_TRAJECTORY = "data/results.csv"


def view_trajectory(args) -> int:
    """Load and plot a trajectory; returns the process exit status."""
    print(f"Loading trajectory from: {args.trajectory}")
    try:
        trajectory = TrajectoryData.load_csv(args.trajectory)
    except (OSError, TrajectoryError) as e:
        print(f"Failed to load trajectory: {e}", file=sys.stderr)
        return 1
    print(f"Loaded {trajectory.num_bodies} bodies with {trajectory.num_frames} frames")

    renderer = TrajectoryRenderer(mode=args.mode, trail_length=args.trail_length)
    try:
        renderer.render(trajectory, frame=args.frame)
    except IndexError as e:
        print(f"Error: {e}", file=sys.stderr)
        renderer.close()
        return 1

    if args.save:
        renderer.save(args.save)
        print(f"Figure saved to {args.save}")
    else:
        renderer.show()
    renderer.close()
    return 0


def main(argv=None):
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Three-Body Simulator - trajectory viewer")
    parser.add_argument('trajectory', nargs='?', default=DEFAULT_TRAJECTORY,
                        help=f"Trajectory CSV written by threebody-sim (default: {DEFAULT_TRAJECTORY})")
    parser.add_argument('--mode', type=str, default='3d', choices=['2d', '3d'],
                        help="Projection mode")
    parser.add_argument('--frame', type=int, default=None,
                        help="Frame to show (default: last)")
    parser.add_argument('--trail-length', type=int, default=None,
                        help="Number of frames in each trail (default: all)")
    parser.add_argument('--save', type=str, default=None,
                        help="Save the figure to this path instead of showing it")
    args = parser.parse_args(argv)
    sys.exit(view_trajectory(args))


if __name__ == "__main__":
    main()
