"""Tests for the main loop driver."""
import logging

from main import run
from particle import ParticleField
from simulation import Simulation


class FakeVisualizer:
    """Stands in for the window; quits after a fixed number of frames."""
    def __init__(self, frames):
        self.frames = frames
        self.drawn = 0

    def draw(self, simulation):
        self.drawn += 1
        return self.drawn < self.frames


def _sim(sim_params):
    field = ParticleField(sim_params, 640, 480)
    return Simulation(field, sim_params, 640, 480)


def test_run_stops_at_max_steps(sim_params):
    sim = _sim(sim_params)
    visualizer = FakeVisualizer(frames=100)
    assert run(sim, visualizer, {"max_steps": 5, "log_throttle_steps": 2}) == 5
    assert visualizer.drawn == 5


def test_run_stops_when_window_closes(sim_params):
    sim = _sim(sim_params)
    assert run(sim, FakeVisualizer(frames=3), {"max_steps": 0}) == 3


def test_zero_log_throttle_disables_step_log(sim_params, caplog):
    sim = _sim(sim_params)
    with caplog.at_level(logging.INFO):
        steps = run(sim, FakeVisualizer(frames=4), {"max_steps": 0, "log_throttle_steps": 0})
    assert steps == 4
    assert "Simulation step" not in caplog.text


def test_step_log_is_throttled(sim_params, caplog):
    sim = _sim(sim_params)
    with caplog.at_level(logging.INFO):
        run(sim, FakeVisualizer(frames=6), {"max_steps": 0, "log_throttle_steps": 3})
    assert "Simulation step 3" in caplog.text
    assert "Simulation step 6" in caplog.text
    assert "Simulation step 4" not in caplog.text
