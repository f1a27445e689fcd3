import os

# Pygame must not try to open a real window or audio device during tests.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pytest


@pytest.fixture
def sim_params():
    return {
        "seed": 7,
        "particle_count": 12,
        "repulse_force": 0.5,
        "show_outline": True,
        "particle_color": [0, 255, 0],
    }
