# particle.py
"""
Manages the state of all particles on the ring.

This module defines the ParticleField class, which owns the particle data
(positions, velocities, home anchors, radii, colors) in NumPy arrays, and
the Particle class, a lightweight view onto one row of that data. The
per-particle update rule is implemented by Numba-jitted kernels that work
on the arrays by index.
"""
import logging
import math
import numpy as np
from numba import jit
from typing import Dict, Any, Iterator, Optional, Tuple

from constants import (
    SPRING, FRICTION, TIME_STEP, REPULSION_RADIUS, COLLISION_SHARE,
    RING_RADIUS_RATIO, PARTICLE_RADIUS_MIN, PARTICLE_RADIUS_MAX,
    MIN_PARTICLES, MAX_PARTICLES, DEFAULT_SEED, DEFAULT_PARTICLE_COUNT,
    DEFAULT_PARTICLE_COLOR
)
from utils import clamp_particle_count

Pointer = Optional[Tuple[float, float]]

# --- Data Contracts ---
#
# class ParticleField:
#   - __init__(self, params: Dict[str, Any], width: int, height: int):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         - "seed": int
#         - "particle_count": int
#         - "particle_color": [r, g, b]
#       - width, height: viewport size in pixels.
#     - Side Effects: Populates the ring via rebuild().
#     - Invariants:
#       - positions, velocities, homes are float64 arrays of shape (N, 2).
#       - radii is a float64 array of shape (N,), every value in [2, 7).
#       - colors is a uint8 array of shape (N, 3).
#       - homes never change between rebuilds.
#
#   - rebuild(self, count: int, width: int, height: int) -> None:
#     - Side Effects: Replaces every array. Home i sits on the ring at
#       angle 2*pi*i/count, position == home, velocity == 0.
#
#   - tick(self, pointer: Optional[(x, y)], repulse_force: float) -> None:
#     - Side Effects: Updates every particle in stored order. Later
#       particles observe earlier particles' positions from this tick.


@jit(nopython=True)
def _pointer_impulse_numba(x, y, pointer_x, pointer_y, repulse_force):
    """
    Velocity change caused by the pointer for a particle at (x, y).

    Zero outside the repulsion radius, otherwise (R - d) * repulse_force
    directed away from the pointer.
    """
    dx = x - pointer_x
    dy = y - pointer_y
    dist = math.sqrt(dx * dx + dy * dy)
    if dist < REPULSION_RADIUS:
        angle = math.atan2(dy, dx)
        force = (REPULSION_RADIUS - dist) * repulse_force
        return math.cos(angle) * force, math.sin(angle) * force
    return 0.0, 0.0


@jit(nopython=True)
def _resolve_overlap_numba(positions, radii, i, j):
    """
    Pushes particles i and j apart if their circles overlap.

    Both are moved by half the overlap along the line joining their
    centers. Coincident centers are left alone. Returns True if a
    correction was applied.
    """
    dx = positions[i, 0] - positions[j, 0]
    dy = positions[i, 1] - positions[j, 1]
    dist = math.sqrt(dx * dx + dy * dy)
    min_dist = radii[i] + radii[j]
    if 0 < dist < min_dist:
        overlap = min_dist - dist
        angle = math.atan2(dy, dx)
        sep_x = math.cos(angle) * overlap * COLLISION_SHARE
        sep_y = math.sin(angle) * overlap * COLLISION_SHARE
        positions[i, 0] += sep_x
        positions[i, 1] += sep_y
        positions[j, 0] -= sep_x
        positions[j, 1] -= sep_y
        return True
    return False


@jit(nopython=True)
def _update_particle_numba(
    i, positions, velocities, homes, radii,
    has_pointer, pointer_x, pointer_y, repulse_force
):
    """
    Advances particle i by one tick.

    Order matters: pointer impulse, collision correction against every
    other particle, spring toward home, friction, then integration.
    """
    if has_pointer:
        impulse_x, impulse_y = _pointer_impulse_numba(
            positions[i, 0], positions[i, 1], pointer_x, pointer_y, repulse_force
        )
        velocities[i, 0] += impulse_x
        velocities[i, 1] += impulse_y

    # Each particle resolves its own overlaps, so a pair is corrected once
    # from each side per tick.
    for j in range(positions.shape[0]):
        if j == i:
            continue
        _resolve_overlap_numba(positions, radii, i, j)

    velocities[i, 0] += (homes[i, 0] - positions[i, 0]) * SPRING
    velocities[i, 1] += (homes[i, 1] - positions[i, 1]) * SPRING

    velocities[i, 0] *= FRICTION
    velocities[i, 1] *= FRICTION

    positions[i, 0] += velocities[i, 0] * TIME_STEP
    positions[i, 1] += velocities[i, 1] * TIME_STEP


@jit(nopython=True)
def _tick_numba(
    positions, velocities, homes, radii,
    has_pointer, pointer_x, pointer_y, repulse_force
):
    """Sequential update of every particle, in array order."""
    for i in range(positions.shape[0]):
        _update_particle_numba(
            i, positions, velocities, homes, radii,
            has_pointer, pointer_x, pointer_y, repulse_force
        )


def _unpack_pointer(pointer: Pointer) -> Tuple[bool, float, float]:
    # Numba needs stable argument types, so "no pointer" becomes a flag.
    if pointer is None:
        return False, 0.0, 0.0
    return True, float(pointer[0]), float(pointer[1])


class Particle:
    """
    A view onto one particle of a ParticleField.

    Holds no state of its own; reads and writes go straight to the
    field's arrays, so a Particle stays valid only until the next rebuild.
    """
    def __init__(self, field: "ParticleField", index: int):
        self.field = field
        self.index = index

    @property
    def position(self) -> Tuple[float, float]:
        x, y = self.field.positions[self.index]
        return float(x), float(y)

    @position.setter
    def position(self, value: Tuple[float, float]):
        self.field.positions[self.index] = value

    @property
    def velocity(self) -> Tuple[float, float]:
        vx, vy = self.field.velocities[self.index]
        return float(vx), float(vy)

    @velocity.setter
    def velocity(self, value: Tuple[float, float]):
        self.field.velocities[self.index] = value

    @property
    def home(self) -> Tuple[float, float]:
        hx, hy = self.field.homes[self.index]
        return float(hx), float(hy)

    @property
    def radius(self) -> float:
        return float(self.field.radii[self.index])

    @property
    def color(self) -> Tuple[int, int, int]:
        r, g, b = self.field.colors[self.index]
        return int(r), int(g), int(b)

    def distance_to_home(self) -> float:
        dx, dy = self.field.positions[self.index] - self.field.homes[self.index]
        return math.hypot(dx, dy)

    def update(self, pointer: Pointer, repulse_force: float) -> None:
        """
        Advances this particle by one tick against the rest of its field.

        Args:
            pointer (Optional[Tuple[float, float]]): Pointer position in
                canvas pixels, or None when the pointer is outside.
            repulse_force (float): Multiplier on the pointer impulse.
        """
        has_pointer, pointer_x, pointer_y = _unpack_pointer(pointer)
        f = self.field
        _update_particle_numba(
            self.index, f.positions, f.velocities, f.homes, f.radii,
            has_pointer, pointer_x, pointer_y, float(repulse_force)
        )

    def __repr__(self) -> str:
        x, y = self.position
        return f"Particle(index={self.index}, position=({x:.2f}, {y:.2f}), radius={self.radius:.2f})"


class ParticleField:
    """
    The ordered collection of particles laid out on a ring.
    """
    def __init__(self, params: Dict[str, Any], width: int, height: int):
        """
        Initializes the field and populates the ring.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
            width (int): The width of the viewport.
            height (int): The height of the viewport.
        """
        self._setup(params.get('seed', DEFAULT_SEED), params.get('particle_color', DEFAULT_PARTICLE_COLOR))
        self._allocate(0)

        self.rebuild(clamp_particle_count(params.get('particle_count', DEFAULT_PARTICLE_COUNT)), width, height)

    @classmethod
    def from_state(
        cls,
        positions,
        radii,
        homes=None,
        velocities=None,
        color: Tuple[int, int, int] = DEFAULT_PARTICLE_COLOR,
        seed: int = DEFAULT_SEED,
    ) -> "ParticleField":
        """
        Builds a field from explicit particle arrays instead of a ring layout.

        Homes default to the given positions and velocities to zero. A later
        rebuild() draws radii from a generator seeded with `seed`.
        """
        field = cls.__new__(cls)
        field._setup(seed, color)

        field.positions = np.array(positions, dtype=np.float64).reshape(-1, 2)
        count = field.positions.shape[0]
        field.homes = (
            field.positions.copy() if homes is None
            else np.array(homes, dtype=np.float64).reshape(count, 2)
        )
        field.velocities = (
            np.zeros((count, 2), dtype=np.float64) if velocities is None
            else np.array(velocities, dtype=np.float64).reshape(count, 2)
        )
        field.radii = np.array(radii, dtype=np.float64).reshape(count)
        if np.any(field.radii <= 0):
            raise ValueError("Particle radii must be positive.")
        field.colors = np.tile(np.array(field.color, dtype=np.uint8), (count, 1))
        return field

    def _setup(self, seed, color):
        self.seed = seed
        # All randomness goes through one generator seeded from config.
        self.rng = np.random.default_rng(self.seed)
        self.color = tuple(color)
        self.center = (0.0, 0.0)
        self.ring_radius = 0.0

    def _allocate(self, count: int):
        self.positions = np.zeros((count, 2), dtype=np.float64)
        self.velocities = np.zeros((count, 2), dtype=np.float64)
        self.homes = np.zeros((count, 2), dtype=np.float64)
        self.radii = np.zeros(count, dtype=np.float64)
        self.colors = np.zeros((count, 3), dtype=np.uint8)

    def rebuild(self, count: int, width: int, height: int) -> None:
        """
        Discards every particle and lays out `count` new ones on the ring.

        The ring is centered in the viewport with a radius of 30% of the
        smaller dimension. This is the only way the particle count changes.

        Raises:
            ValueError: If `count` is outside the allowed range or the
                viewport has no area.
        """
        if not MIN_PARTICLES <= count <= MAX_PARTICLES:
            msg = (
                f"Particle count {count} is outside the allowed range "
                f"[{MIN_PARTICLES}, {MAX_PARTICLES}]."
            )
            logging.error(msg)
            raise ValueError(msg)
        if width <= 0 or height <= 0:
            msg = f"Viewport must have a positive size, got {width}x{height}."
            logging.error(msg)
            raise ValueError(msg)

        self.center = (width / 2, height / 2)
        self.ring_radius = min(width, height) * RING_RADIUS_RATIO

        angles = np.arange(count, dtype=np.float64) / count * 2 * np.pi
        self._allocate(count)
        self.homes[:, 0] = self.center[0] + np.cos(angles) * self.ring_radius
        self.homes[:, 1] = self.center[1] + np.sin(angles) * self.ring_radius
        self.positions[:] = self.homes
        self.radii[:] = self.rng.uniform(PARTICLE_RADIUS_MIN, PARTICLE_RADIUS_MAX, size=count)
        self.colors[:] = self.color

        logging.info(
            f"ParticleField rebuilt with {count} particles "
            f"(viewport {width}x{height}, ring radius {self.ring_radius:.1f}px)."
        )

    def tick(self, pointer: Pointer, repulse_force: float) -> None:
        """
        Executes one time step for every particle, in stored order.
        """
        has_pointer, pointer_x, pointer_y = _unpack_pointer(pointer)
        _tick_numba(
            self.positions, self.velocities, self.homes, self.radii,
            has_pointer, pointer_x, pointer_y, float(repulse_force)
        )

    def average_speed(self) -> float:
        if len(self) == 0:
            return 0.0
        return float(np.mean(np.linalg.norm(self.velocities, axis=1)))

    def __len__(self) -> int:
        return self.positions.shape[0]

    def __getitem__(self, index: int) -> Particle:
        count = len(self)
        if index < 0:
            index += count
        if not 0 <= index < count:
            raise IndexError(f"Particle index {index} out of range for {count} particles.")
        return Particle(self, index)

    def __iter__(self) -> Iterator[Particle]:
        for i in range(len(self)):
            yield Particle(self, i)
