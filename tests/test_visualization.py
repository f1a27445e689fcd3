"""Tests for the Pygame boundary: event handling and the render adapter."""
import logging

import pygame
import pytest

from particle import ParticleField
from simulation import Simulation
from visualization import Visualizer, to_render_items


@pytest.fixture
def visualizer():
    vis = Visualizer({"window_width": 640, "window_height": 480, "count_step": 10, "repulse_step": 0.1})
    yield vis
    vis.close()


@pytest.fixture
def sim(sim_params):
    field = ParticleField(sim_params, 640, 480)
    return Simulation(field, sim_params, 640, 480)


def _key(key, mod=pygame.KMOD_NONE):
    return pygame.event.Event(pygame.KEYDOWN, key=key, mod=mod)


def test_render_items_follow_field_order():
    field = ParticleField.from_state([[1.0, 2.0], [3.0, 4.0]], [2.5, 6.0], color=(0, 255, 0))
    assert to_render_items(field) == [
        ((1.0, 2.0), 2.5, (0, 255, 0)),
        ((3.0, 4.0), 6.0, (0, 255, 0)),
    ]


def test_quit_and_escape_stop_the_loop(visualizer, sim):
    assert visualizer.handle_event(pygame.event.Event(pygame.QUIT), sim) is False
    assert visualizer.handle_event(_key(pygame.K_ESCAPE), sim) is False


def test_pointer_events(visualizer, sim):
    visualizer.handle_event(pygame.event.Event(pygame.MOUSEMOTION, pos=(120, 80), rel=(0, 0), buttons=(0, 0, 0)), sim)
    assert sim.pointer == (120.0, 80.0)
    visualizer.handle_event(pygame.event.Event(pygame.WINDOWLEAVE), sim)
    assert sim.pointer is None


def test_resize_rebuilds_ring(visualizer, sim):
    event = pygame.event.Event(pygame.VIDEORESIZE, w=500, h=300, size=(500, 300))
    assert visualizer.handle_event(event, sim) is True
    assert visualizer.size == (500, 300)
    assert sim.field.center == (250.0, 150.0)
    assert len(sim.field) == 12


def test_count_keys(visualizer, sim):
    visualizer.handle_event(_key(pygame.K_UP), sim)
    assert len(sim.field) == 22
    visualizer.handle_event(_key(pygame.K_DOWN, pygame.KMOD_LSHIFT), sim)
    assert len(sim.field) == 21
    for _ in range(5):
        visualizer.handle_event(_key(pygame.K_DOWN), sim)
    assert sim.config.particle_count == 1


def test_repulse_and_outline_keys(visualizer, sim):
    visualizer.handle_event(_key(pygame.K_RIGHT), sim)
    assert sim.config.repulse_force == pytest.approx(0.6)
    for _ in range(10):
        visualizer.handle_event(_key(pygame.K_LEFT), sim)
    assert sim.config.repulse_force == 0.0
    visualizer.handle_event(_key(pygame.K_l), sim)
    assert sim.config.show_outline is False


def test_draw_frame(visualizer, sim):
    sim.step()
    assert visualizer.draw(sim) is True


def test_missing_font_falls_back_to_default(monkeypatch, caplog):
    monkeypatch.setattr(pygame.font, "match_font", lambda *args, **kwargs: None)
    with caplog.at_level(logging.WARNING):
        vis = Visualizer({"window_width": 320, "window_height": 240})
    try:
        assert "Segoe UI font not found" in caplog.text
        assert isinstance(vis.font_main, pygame.font.Font)
        assert vis.font_main.get_linesize() > 0
    finally:
        vis.close()
