"""Tests for the simulation controller."""

import os
import numpy as np
import pytest
from threebody_sim.io.trajectory import TrajectoryData
from threebody_sim.physics.body import Body
from threebody_sim.physics.force_calculator import G
from threebody_sim.physics.integrators.base import Integrator
from threebody_sim.physics.simulator import Simulator


def two_stars():
    return [
        Body(1e30, [0.0, 0.0, 0.0], [0.0, 0.0, 0.0]),
        Body(1e30, [1e11, 0.0, 0.0], [0.0, 1000.0, 0.0]),
    ]


def test_simulator_creation():
    """Test a new simulator has not moved anything."""
    bodies = two_stars()
    sim = Simulator(bodies, 86400.0)
    
    assert sim.time == 0.0
    assert sim.step_count == 0
    assert sim.dt == 86400.0
    assert len(sim.bodies) == 2
    assert np.array_equal(sim.bodies[1].position, [1e11, 0.0, 0.0])
    assert sim.integrator.name == "rkf45"


def test_simulator_step():
    """Test one step advances time and moves the bodies."""
    sim = Simulator(two_stars(), 86400.0)
    sim.step()
    
    assert sim.time == 86400.0
    assert sim.step_count == 1
    assert sim.bodies[1].position[1] > 0
    assert sim.bodies[0].position[0] > 0  # pulled toward the other star
    assert sim.last_error is not None


def test_simulator_run():
    """Test time bookkeeping after run(n)."""
    sim = Simulator(two_stars(), 86400.0)
    sim.run(10)
    
    assert abs(sim.time - 864000.0) < 1e-6
    assert sim.step_count == 10


def test_run_zero_steps():
    sim = Simulator(two_stars(), 86400.0)
    sim.run(0)
    
    assert sim.time == 0.0
    assert np.array_equal(sim.bodies[1].position, [1e11, 0.0, 0.0])


def test_energy_conservation(earth_moon_bodies):
    """Test RKF45 conserves energy for the Earth-Moon system."""
    sim = Simulator(earth_moon_bodies, 3600.0)  # 1-hour time step
    initial_energy = sim.total_energy()
    
    # Run for 100 steps (~4 days)
    sim.run(100)
    
    final_energy = sim.total_energy()
    relative_error = abs(final_energy - initial_energy) / abs(initial_energy)
    assert relative_error < 0.05
    # RKF45 does far better than the required bound at this step size
    assert relative_error < 1e-6


def test_energy_components():
    """Test kinetic and potential energy against closed forms."""
    sim = Simulator(two_stars(), 86400.0)
    
    expected_ke = 0.5 * 1e30 * (1000.0 * 1000.0)
    assert abs(sim.kinetic_energy() - expected_ke) / expected_ke < 1e-10
    
    pe = sim.potential_energy()
    expected_pe = -(6.67430e-11 * 1e30 * 1e30) / 1e11
    assert pe < 0
    assert abs(pe - expected_pe) / abs(expected_pe) < 1e-10
    assert sim.total_energy() == sim.kinetic_energy() + sim.potential_energy()


def test_determinism(three_bodies):
    """Test identical inputs give bit-identical trajectories."""
    copies = [[body.copy() for body in three_bodies] for _ in range(2)]
    sims = [Simulator(bodies, 3600.0) for bodies in copies]
    for sim in sims:
        sim.run(50)
    
    for body_a, body_b in zip(sims[0].bodies, sims[1].bodies):
        assert np.array_equal(body_a.position, body_b.position)
        assert np.array_equal(body_a.velocity, body_b.velocity)
    assert sims[0].total_energy() == sims[1].total_energy()


def test_set_timestep():
    """Test a new dt applies from the next step."""
    sim = Simulator(two_stars(), 100.0)
    sim.step()
    sim.set_timestep(50.0)
    sim.step()
    
    assert sim.dt == 50.0
    assert sim.time == pytest.approx(150.0)


def test_get_state_is_read_only_copy():
    sim = Simulator(two_stars(), 100.0)
    positions, velocities, masses, time, step_count = sim.get_state()
    
    assert positions.shape == (2, 3)
    assert np.array_equal(masses, [1e30, 1e30])
    assert time == 0.0 and step_count == 0
    with pytest.raises(ValueError):
        positions[0, 0] = 1.0
    
    sim.step()
    assert positions[1, 1] == 0.0


def test_on_step_callback():
    sim = Simulator(two_stars(), 100.0)
    times = []
    sim.on_step_callback = lambda s: times.append(s.time)
    sim.run(3)
    
    assert times == pytest.approx([100.0, 200.0, 300.0])


def test_custom_integrator_and_dynamics():
    """Test the simulator accepts any integrator and derivative function."""

    class EulerIntegrator(Integrator):
        name = "euler"
        order = 1

        def step(self, bodies, dt, derivative):
            derivative(bodies)
            for body in bodies:
                body.position += dt * body.velocity
                body.velocity += dt * body.acceleration
            return self.record_error(0.0)

    class Spring:
        def __call__(self, bodies):
            for body in bodies:
                body.reset_acceleration()
                body.add_acceleration(-body.position)

    sim = Simulator([Body(1.0, [1.0, 0.0, 0.0], [0.0, 0.0, 0.0])], 0.1,
                    integrator=EulerIntegrator(), force_calculator=Spring())
    sim.step()
    
    assert sim.bodies[0].velocity[0] == pytest.approx(-0.1)
    assert sim.last_error == 0.0


def test_plain_function_dynamics():
    """Test a bare function works as the derivative function."""
    def spring(bodies):
        for body in bodies:
            body.reset_acceleration()
            body.add_acceleration(-body.position)
    
    sim = Simulator([Body(1.0, [1.0, 0.0, 0.0], [0.0, 0.0, 0.0])], 0.1, force_calculator=spring)
    sim.run(10)
    
    assert sim.bodies[0].position[0] == pytest.approx(np.cos(1.0), rel=1e-6)
    assert sim.bodies[0].velocity[0] == pytest.approx(-np.sin(1.0), rel=1e-6)
    assert sim.diagnostics.G == G
    assert sim.kinetic_energy() == pytest.approx(0.5 * np.sin(1.0) ** 2, rel=1e-5)


def test_error_history_follows_integrator():
    """Test the simulator reports the integrator's last two estimates."""
    sim = Simulator(two_stars(), 86400.0)
    assert sim.last_error is None
    
    sim.step()
    first = sim.last_error
    sim.step()
    
    assert sim.previous_error == first
    assert sim.last_error == sim.integrator.last_error
    assert sim.last_error is not None


def test_with_output_writes_header_and_rows(tmp_path, earth_moon_bodies):
    """Test one header row plus one row per step."""
    output_path = tmp_path / "results.csv"
    with Simulator.with_output(earth_moon_bodies, 3600.0, str(output_path)) as sim:
        sim.run(5)
    
    lines = output_path.read_text().splitlines()
    assert lines[0] == "time,body0_x,body0_y,body0_z,body1_x,body1_y,body1_z"
    assert len(lines) == 6
    assert lines[1].startswith("3600.00000000,")
    assert lines[5].split(",")[0] == "18000.00000000"
    assert all(len(line.split(",")) == 7 for line in lines[1:])


def test_with_output_unwritable_path(tmp_path):
    """Test opening the sink fails loudly."""
    missing = os.path.join(str(tmp_path), "missing", "results.csv")
    
    with pytest.raises(OSError):
        Simulator.with_output(two_stars(), 100.0, missing)


def test_write_failure_does_not_stop_run(tmp_path, caplog):
    """Test a broken sink is reported but the simulation continues."""
    sim = Simulator.with_output(two_stars(), 100.0, str(tmp_path / "out.csv"))
    sim.output.close()
    
    sim.run(2)
    
    assert sim.step_count == 2
    assert sim.time == pytest.approx(200.0)
    assert sim.output_errors == 2
    assert "Failed to write trajectory row" in caplog.text


def test_trajectory_round_trip(tmp_path, three_bodies):
    """Test the written trajectory re-parses to the generated positions."""
    output_path = str(tmp_path / "trajectory.csv")
    recorded = []
    
    with Simulator.with_output(three_bodies, 3600.0, output_path) as sim:
        sim.on_step_callback = lambda s: recorded.append([b.position.copy() for b in s.bodies])
        sim.run(20)
    
    trajectory = TrajectoryData.load_csv(output_path)
    assert trajectory.num_bodies == 3
    assert trajectory.num_frames == 20
    assert np.allclose(trajectory.times, 3600.0 * np.arange(1, 21))
    assert np.allclose(trajectory.positions, np.array(recorded), rtol=0, atol=1e-6)


def test_print_positions(capsys):
    sim = Simulator(two_stars(), 100.0)
    sim.print_positions()
    
    out = capsys.readouterr().out
    assert out.startswith("Time: 0.00 s")
    assert "Body 1: pos=[1.0000e+11, 0.0000e+00, 0.0000e+00]" in out
