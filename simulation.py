# simulation.py
"""
Drives the particle ring one frame at a time.

This module defines the Simulation class, the single per-frame driver.
It owns the live control values (particle count, repulsion strength,
outline visibility) and the pointer state, advances the ParticleField by
one tick per frame, and rebuilds the field when the count or the viewport
changes.
"""
import logging
from typing import Dict, Any, Optional, Tuple

import numpy as np

from constants import DEFAULT_PARTICLE_COUNT, DEFAULT_REPULSE_FORCE, DEFAULT_SHOW_OUTLINE
from outline import OutlineRenderer
from particle import ParticleField
from utils import clamp_particle_count, clamp_repulse_force

# --- Data Contracts ---
#
# class Simulation:
#   - __init__(self, field: ParticleField, params: Dict[str, Any], width: int, height: int):
#     - Inputs:
#       - field: An initialized ParticleField.
#       - params: Dictionary of simulation parameters from config.json.
#         - "particle_count": int
#         - "repulse_force": float
#         - "show_outline": bool
#       - width, height: current viewport size in pixels.
#     - Side Effects: Rebuilds the field if its size differs from the
#       clamped configured count.
#
#   - step(self) -> Optional[np.ndarray]:
#     - Side Effects: Advances the field by one tick. Stores the outline
#       built from the updated positions in self.outline.
#     - Outputs: The outline polyline, or None if it is hidden.
#
#   - Setters are the only way control values change. Each clamps its
#     input first, so the field never sees an out-of-range value.


class SimulationConfig:
    """
    The live control values read once per tick.
    """
    def __init__(self, particle_count: int, repulse_force: float, show_outline: bool):
        self.particle_count = particle_count
        self.repulse_force = repulse_force
        self.show_outline = show_outline

    def as_dict(self) -> Dict[str, Any]:
        return {
            "particle_count": self.particle_count,
            "repulse_force": self.repulse_force,
            "show_outline": self.show_outline,
        }


class Simulation:
    """
    Manages the per-frame loop: pointer and control state in, one tick,
    outline out.
    """
    def __init__(self, field: ParticleField, params: Dict[str, Any], width: int, height: int):
        """
        Initializes the simulation driver.

        Args:
            field (ParticleField): The particle field to drive.
            params (Dict[str, Any]): Simulation parameters from config.
            width (int): The width of the viewport.
            height (int): The height of the viewport.
        """
        self.field = field
        self.width = width
        self.height = height
        self.config = SimulationConfig(
            particle_count=clamp_particle_count(params.get('particle_count', DEFAULT_PARTICLE_COUNT)),
            repulse_force=clamp_repulse_force(params.get('repulse_force', DEFAULT_REPULSE_FORCE)),
            show_outline=bool(params.get('show_outline', DEFAULT_SHOW_OUTLINE)),
        )
        self.pointer: Optional[Tuple[float, float]] = None
        self.outline: Optional[np.ndarray] = None
        self.step_count = 0

        if len(self.field) != self.config.particle_count:
            logging.warning(
                f"Field holds {len(self.field)} particles but the configured count is "
                f"{self.config.particle_count}. Rebuilding."
            )
            self._rebuild()

        logging.info(
            f"Simulation initialized: {self.config.particle_count} particles, "
            f"repulse force {self.config.repulse_force:.2f}, "
            f"outline {'on' if self.config.show_outline else 'off'}."
        )

    def _rebuild(self):
        self.field.rebuild(self.config.particle_count, self.width, self.height)
        self.outline = None

    def step(self) -> Optional[np.ndarray]:
        """
        Executes one frame: tick the field, then rebuild the outline.
        """
        self.field.tick(self.pointer, self.config.repulse_force)
        self.outline = OutlineRenderer.build(self.field, self.config.show_outline)
        self.step_count += 1
        return self.outline

    def set_particle_count(self, value) -> int:
        """
        Clamps the requested count and rebuilds the field with it.

        Returns:
            int: The count actually applied.
        """
        count = clamp_particle_count(value)
        if count != value:
            logging.debug(f"Particle count {value!r} clamped to {count}.")
        self.config.particle_count = count
        self._rebuild()
        logging.info(f"Particle count set to {count}.")
        return count

    def set_repulse_force(self, value) -> float:
        """
        Clamps and stores the repulsion multiplier read by the next tick.

        Returns:
            float: The value actually applied.
        """
        force = clamp_repulse_force(value)
        self.config.repulse_force = force
        logging.info(f"Repulse force set to {force:.2f}.")
        return force

    def set_show_outline(self, show: bool) -> None:
        self.config.show_outline = bool(show)
        logging.info(f"Outline {'enabled' if self.config.show_outline else 'disabled'}.")

    def toggle_outline(self) -> bool:
        self.set_show_outline(not self.config.show_outline)
        return self.config.show_outline

    def set_pointer(self, x: float, y: float) -> None:
        self.pointer = (float(x), float(y))

    def clear_pointer(self) -> None:
        self.pointer = None

    def resize(self, width: int, height: int) -> None:
        """
        Re-lays out the ring for a new viewport at the current count.
        """
        logging.info(f"Viewport resized to {width}x{height}.")
        self.width = width
        self.height = height
        self._rebuild()
