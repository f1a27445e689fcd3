# outline.py
"""
Builds the closed outline drawn through the particle centers.
"""
import numpy as np
from typing import Optional
from particle import ParticleField


class OutlineRenderer:
    """
    Derives the outline polyline from the field's current particle order.

    Keeps no state between frames; every call reads the positions fresh.
    """
    @staticmethod
    def build(field: ParticleField, show_outline: bool) -> Optional[np.ndarray]:
        """
        Returns the outline points, or None when nothing should be drawn.

        The result is an (N + 1, 2) array [p0, p1, ..., p(N-1), p0]. It is
        a copy, so later ticks do not change it.
        """
        if not show_outline or len(field) < 2:
            return None
        positions = field.positions
        return np.vstack((positions, positions[:1]))
