"""Tests for the simulation step driver."""

import numpy as np
import pytest
from dataclasses import replace
from nbody_gravity.physics.body import Body, BodyArray
from nbody_gravity.physics.interactions import pairwise_interaction
from nbody_gravity.physics.simulator import Simulator, NumericalInstabilityError
from nbody_gravity.presets.star_disk import StarDiskPreset
from nbody_gravity.utils.config import SimulationConfig, AU


class RecordingRenderer:
    """Renderer stub that remembers what it was given."""

    def __init__(self):
        self.steps = []
        self.snapshots = []
        self.closed = False

    def render(self, snapshot, step):
        self.steps.append(step)
        self.snapshots.append(snapshot)

    def close(self):
        self.closed = True


def test_two_body_regression():
    """One step reproduces G*m1*m2/d^2 on both bodies."""
    config = SimulationConfig(softening=0.0, time_step=60.0, workers=1)
    m1, m2 = 2.0e30, 6.0e24
    bodies = BodyArray([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]], np.zeros((2, 3)), [m1, m2])
    with Simulator(bodies, config) as sim:
        sim.step()

    d = AU
    expected_force = config.G * m1 * m2 / d ** 2
    planet_force = m2 * np.linalg.norm(bodies.velocities[1]) / config.time_step
    star_force = m1 * np.linalg.norm(bodies.velocities[0]) / config.time_step
    assert np.isclose(planet_force, expected_force, rtol=1e-12)
    assert np.isclose(star_force, expected_force, rtol=1e-12)
    assert bodies.velocities[1, 0] < 0.0
    assert bodies.velocities[0, 0] > 0.0
    # Drift uses the updated velocity
    assert np.isclose(bodies.positions[1, 0], 1.0 + bodies.velocities[1, 0] * config.time_step / AU)


def test_step_clears_accumulators_and_advances(config):
    bodies = StarDiskPreset(config).generate()
    start = bodies.positions.copy()
    with Simulator(bodies, config) as sim:
        sim.run(3)
        assert sim.step_count == 3
        assert sim.time == 3 * config.time_step
        assert sim.last_tree_bodies == len(bodies) - 1
        assert sim.last_tree_nodes > 1
    assert np.all(bodies.accelerations == 0.0)
    assert not np.allclose(bodies.positions, start)
    assert np.all(np.isfinite(bodies.positions))


def test_central_pass_parallel_matches_sequential(config):
    """Threaded central pass reduces the star's partial sums correctly."""
    bodies = StarDiskPreset(replace(config, n_bodies=500)).generate()
    expected = bodies.copy()

    sun = expected[0]
    for i in range(1, len(expected)):
        other = expected[i]
        pairwise_interaction(sun, other, config)
        expected.accelerations[i] = other.acceleration

    with Simulator(bodies, replace(config, workers=4)) as sim:
        sim.central_pass()
    assert np.allclose(bodies.accelerations[1:], expected.accelerations[1:], rtol=1e-12)
    scale = np.linalg.norm(sun.acceleration)
    assert np.allclose(bodies.accelerations[0], sun.acceleration, rtol=1e-9, atol=1e-9 * scale)


def test_parallel_step_matches_single_thread(config):
    """Workers only split the loops; the physics is unchanged."""
    serial = StarDiskPreset(replace(config, n_bodies=300)).generate()
    threaded = serial.copy()

    with Simulator(serial, replace(config, workers=1)) as sim:
        sim.run(2)
    with Simulator(threaded, replace(config, workers=4)) as sim:
        sim.run(2)

    assert np.allclose(serial.positions, threaded.positions, rtol=1e-12, atol=1e-15)
    assert np.allclose(serial.velocities, threaded.velocities, rtol=1e-9, atol=1e-9)


def test_render_interval_and_initial_frame(config):
    """The initial state and every render_interval-th step reach the renderer."""
    cfg = replace(config, render_interval=2)
    bodies = StarDiskPreset(cfg).generate()
    renderer = RecordingRenderer()
    with Simulator(bodies, cfg, renderer=renderer) as sim:
        sim.run(5)
        assert sim.frames_rendered == 3
    assert renderer.steps == [0, 2, 4]
    assert renderer.closed
    positions, velocities, masses = renderer.snapshots[-1]
    assert not positions.flags.writeable
    assert positions.shape == (cfg.n_bodies, 3)


def test_render_callback(config):
    bodies = StarDiskPreset(config).generate()
    seen = []
    with Simulator(bodies, config) as sim:
        sim.on_render_callback = lambda snapshot, step: seen.append(step)
        sim.run(2)
    assert seen == [0, 1, 2]


def test_body_outside_root_still_feels_star(config):
    """Bodies outside the tree only get the exact central pull."""
    cfg = replace(config, root_half_length=2.0)
    positions = [[0.0, 0.0, 0.0], [1.0, 0.0, 0.0], [10.0, 0.0, 0.0]]
    bodies = BodyArray(positions, np.zeros((3, 3)), [2e30, 1e24, 1e24])
    with Simulator(bodies, cfg) as sim:
        sim.central_pass()
        tree = sim.build_tree()
        assert tree.inserted == [1]
        sim.tree_pass(tree)

    sun = Body(position=positions[0], mass=2e30)
    far = Body(position=positions[2], mass=1e24)
    pairwise_interaction(sun, far, cfg)
    assert np.allclose(bodies.accelerations[2], far.acceleration, rtol=1e-12)


def test_non_finite_state_is_fatal(config):
    bodies = StarDiskPreset(config).generate()
    bodies.velocities[3, 1] = np.nan
    with Simulator(bodies, config) as sim:
        with pytest.raises(NumericalInstabilityError):
            sim.step()


def test_profiling_reports_phases(config):
    bodies = StarDiskPreset(config).generate()
    with Simulator(bodies, config) as sim:
        sim.set_profiling(True)
        sim.step()
        timing = sim.get_timing()
    assert set(timing) == {"central_ms", "build_ms", "tree_ms", "integrator_ms"}
    assert all(v >= 0.0 for v in timing.values())


def test_debug_output(config, capsys):
    bodies = StarDiskPreset(config).generate()
    with Simulator(bodies, replace(config, debug=True)) as sim:
        sim.step()
    out = capsys.readouterr().out
    assert "[Star]" in out
    assert "[Tree]" in out
    assert "[Diag]" in out


def test_get_state(config):
    bodies = StarDiskPreset(config).generate()
    with Simulator(bodies, config) as sim:
        sim.step()
        pos, vel, mass, t, steps = sim.get_state()
    assert steps == 1
    assert t == config.time_step
    assert np.array_equal(pos, bodies.positions)
