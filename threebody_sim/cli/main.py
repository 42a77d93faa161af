"""CLI main entry point."""

import argparse
import logging
import sys
import numpy as np
from threebody_sim.physics.simulator import Simulator
from threebody_sim.presets import PRESETS, get_preset
from threebody_sim.utils.config import ConfigError, load_config

DEFAULT_CONFIG = "data/earth_moon.ini"
DEFAULT_OUTPUT = "data/results.csv"


def load_simulation_config(args):
    """Build the simulation config from a preset or file plus CLI overrides."""
    if args.preset is not None:
        config = get_preset(args.preset).config()
    else:
        config = load_config(args.config)

    if args.dt is not None:
        config.time_step = args.dt
    if args.steps is not None:
        config.num_steps = args.steps
    return config


def print_report(sim: Simulator, initial_energy: float):
    K = sim.kinetic_energy()
    U = sim.potential_energy()
    E = K + U
    L = float(np.linalg.norm(sim.diagnostics.angular_momentum(sim.bodies)))
    dE = sim.diagnostics.relative_energy_drift(initial_energy, E) * 100
    print(f"{sim.step_count:<8} {sim.time:<14.1f} {K:<14.6e} {U:<14.6e} {E:<14.6e} {L:<14.6e} {dE:<10.6f}%")


def run_simulation(args) -> int:
    """Run a simulation; returns the process exit status."""
    try:
        config = load_simulation_config(args)
    except ConfigError as e:
        print(f"Error loading configuration: {e}", file=sys.stderr)
        return 1

    try:
        sim = Simulator.with_output(config.bodies, config.time_step, args.output)
    except OSError as e:
        print(f"Error creating output file {args.output}: {e}", file=sys.stderr)
        return 1

    source = f"preset {args.preset}" if args.preset else args.config
    print(f"Running simulation: {len(sim.bodies)} bodies from {source}")
    print(f"Integrator: {sim.integrator.name}, dt: {sim.dt} s, steps: {config.num_steps}, output: {args.output}")
    for idx, body in enumerate(sim.bodies):
        print(f"  [{idx}] {body}")

    initial_energy = sim.total_energy()

    print(f"{'Step':<8} {'Time (s)':<14} {'K':<14} {'U':<14} {'E':<14} {'|L|':<14} {'dE/E0':<10}")
    print("-" * 100)
    print_report(sim, initial_energy)

    with sim:
        for _ in range(config.num_steps):
            sim.step()
            if args.report_every > 0 and sim.step_count % args.report_every == 0:
                print_report(sim, initial_energy)

    final_energy = sim.total_energy()
    drift = sim.diagnostics.relative_energy_drift(initial_energy, final_energy)
    print()
    print(f"Initial energy: {initial_energy:.6e} J")
    print(f"Final energy: {final_energy:.6e} J")
    print(f"Relative energy change: {drift * 100:.4f}%")
    if sim.last_error is not None:
        print(f"Last step error estimate: {sim.last_error:.6e}")
    if sim.output_errors:
        print(f"Warning: {sim.output_errors} trajectory rows could not be written", file=sys.stderr)
    sim.print_positions()
    print("Simulation complete!")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Three-Body Simulator - RKF45 N-body gravitational simulation")
    parser.add_argument('config', nargs='?', default=DEFAULT_CONFIG,
                        help=f"Initial-condition file (.ini, .json, .yaml; default: {DEFAULT_CONFIG})")
    parser.add_argument('output', nargs='?', default=DEFAULT_OUTPUT,
                        help=f"Trajectory CSV output (default: {DEFAULT_OUTPUT})")
    parser.add_argument('--preset', type=str, default=None, choices=sorted(PRESETS.keys()),
                        help="Use a built-in scenario instead of a config file")
    parser.add_argument('--dt', type=float, default=None,
                        help="Time step in seconds (overrides the config)")
    parser.add_argument('--steps', type=int, default=None,
                        help="Number of steps (overrides the config)")
    parser.add_argument('--report-every', type=int, default=100,
                        help="Print an energy report every N steps (0 disables)")
    parser.add_argument('--log-level', type=str, default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help="Logging level")
    return parser


def main(argv=None):
    """CLI entry point."""
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )
    sys.exit(run_simulation(args))


if __name__ == "__main__":
    main()
