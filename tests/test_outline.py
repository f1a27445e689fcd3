"""Tests for the outline polyline."""
import numpy as np

from outline import OutlineRenderer
from particle import ParticleField


def _triangle():
    return ParticleField.from_state([[0.0, 0.0], [10.0, 0.0], [5.0, 8.0]], [1.0, 1.0, 1.0])


def test_outline_closes_back_to_first_point():
    field = _triangle()
    outline = OutlineRenderer.build(field, True)
    assert outline.shape == (4, 2)
    assert outline.tolist() == [[0.0, 0.0], [10.0, 0.0], [5.0, 8.0], [0.0, 0.0]]


def test_hidden_outline_is_absent():
    assert OutlineRenderer.build(_triangle(), False) is None


def test_single_particle_has_no_outline():
    field = ParticleField.from_state([[3.0, 4.0]], [2.0])
    assert OutlineRenderer.build(field, True) is None


def test_outline_is_detached_from_field():
    field = _triangle()
    outline = OutlineRenderer.build(field, True)
    field.positions[0] = (99.0, 99.0)
    assert outline[0].tolist() == [0.0, 0.0]
    np.testing.assert_array_equal(OutlineRenderer.build(field, True)[-1], [99.0, 99.0])
