# simulation.py
"""
Owns the particle state and drives the per-frame simulation.

This module defines the ParticleSystem class. It stores every particle in
contiguous NumPy arrays (position, velocity, radius, mass, base color),
spawns particles singly or in bursts, advances the simulation by one frame
(forces -> integration -> proximity graph) and emits drawing primitives to
a Canvas.
"""
import logging
import numpy as np
from typing import Any, Dict, Iterator, List, Optional, Protocol, Sequence, Tuple

from constants import (
    CONNECTION_COLOR, DEFAULT_GRAVITY, DEFAULT_DAMPING, DEFAULT_ATTRACTION,
    DEFAULT_REPULSION, DEFAULT_MAX_SPEED, DEFAULT_INTERACTION_RADIUS,
    DEFAULT_CONNECTION_RADIUS, DEFAULT_INITIAL_PARTICLE_COUNT,
    DEFAULT_INITIAL_RADIUS_RANGE, DEFAULT_BURST_SIZE, DEFAULT_BURST_SPREAD,
    DEFAULT_BURST_RADIUS_RANGE
)
from particle import Particle, _integrate_numba
from forces import ForceField
from connections import ProximityGraph

# --- Data Contracts ---
#
# class ParticleSystem:
#   - __init__(self, params: Dict[str, Any], width: int, height: int,
#              rng: Optional[np.random.Generator] = None):
#     - Inputs:
#       - params: Dictionary of simulation parameters from config.json.
#         Every key is optional and falls back to constants.DEFAULT_*.
#         - "seed": int or None
#         - "gravity", "damping", "attraction_coeff", "repulsion_coeff",
#           "max_speed", "interaction_radius", "connection_radius": float
#         - "initial_particle_count", "burst_size": int
#         - "burst_spread": float
#         - "initial_radius_range", "burst_radius_range": [low, high]
#       - width, height: size of the simulation world.
#       - rng: Optional generator; overrides "seed" when given.
#     - Side Effects: Validates the parameters, raises ValueError if invalid.
#       Starts empty; call seed_initial() to add the starting particles.
#
#   - update(self, dt: float) -> None:
#     - Side Effects: Applies pairwise forces, integrates every particle and
#       rebuilds the proximity graph.
#     - Invariants: Particle count is unchanged. Positions stay within
#       [r, width - r] x [r, height - r].
#
#   - render(self, canvas: Canvas) -> None:
#     - Side Effects: Emits all connection lines, then one circle per particle.


class Canvas(Protocol):
    """The drawing surface the particle system renders onto."""

    def draw_circle(self, center: Tuple[float, float], radius: float, color: Tuple[int, int, int]) -> None:
        ...

    def draw_line(self, start: Tuple[float, float], end: Tuple[float, float], color: Tuple[int, int, int, int]) -> None:
        ...


def _radius_range(params: Dict[str, Any], key: str, default: Tuple[float, float]) -> Tuple[float, float]:
    low, high = params.get(key, default)
    return float(low), float(high)


class ParticleSystem:
    """
    A container for all particles and the orchestrator of each frame.
    """
    _INITIAL_CAPACITY = 128

    def __init__(self, params: Dict[str, Any], width: int, height: int,
                 rng: Optional[np.random.Generator] = None):
        """
        Initializes an empty particle system.

        Args:
            params (Dict[str, Any]): Simulation parameters from config.
            width (int): The width of the simulation area.
            height (int): The height of the simulation area.
            rng (Optional[np.random.Generator]): Random source for spawning.
        """
        self.width = float(width)
        self.height = float(height)

        self.gravity = float(params.get('gravity', DEFAULT_GRAVITY))
        self.damping = float(params.get('damping', DEFAULT_DAMPING))
        self.max_speed = float(params.get('max_speed', DEFAULT_MAX_SPEED))
        self.initial_particle_count = int(params.get('initial_particle_count', DEFAULT_INITIAL_PARTICLE_COUNT))
        self.initial_radius_range = _radius_range(params, 'initial_radius_range', DEFAULT_INITIAL_RADIUS_RANGE)
        self.burst_size = int(params.get('burst_size', DEFAULT_BURST_SIZE))
        self.burst_spread = float(params.get('burst_spread', DEFAULT_BURST_SPREAD))
        self.burst_radius_range = _radius_range(params, 'burst_radius_range', DEFAULT_BURST_RADIUS_RANGE)

        self._validate(params)

        # All randomness in the system comes from this one generator.
        self.seed = params.get('seed')
        self.rng = rng if rng is not None else np.random.default_rng(self.seed)

        self.force_field = ForceField(
            attraction=params.get('attraction_coeff', DEFAULT_ATTRACTION),
            repulsion=params.get('repulsion_coeff', DEFAULT_REPULSION),
            interaction_radius=params.get('interaction_radius', DEFAULT_INTERACTION_RADIUS)
        )
        self.proximity_graph = ProximityGraph(params.get('connection_radius', DEFAULT_CONNECTION_RADIUS))

        # Contiguous particle store. Only the first `count` rows are live.
        self.count = 0
        self._positions = np.zeros((self._INITIAL_CAPACITY, 2), dtype=np.float64)
        self._velocities = np.zeros((self._INITIAL_CAPACITY, 2), dtype=np.float64)
        self._radii = np.zeros(self._INITIAL_CAPACITY, dtype=np.float64)
        self._masses = np.zeros(self._INITIAL_CAPACITY, dtype=np.float64)
        self._base_colors = np.zeros((self._INITIAL_CAPACITY, 3), dtype=np.uint8)

        logging.info(f"ParticleSystem initialized for a {width}x{height} world.")
        logging.debug(
            f"Physics: gravity={self.gravity}, damping={self.damping}, "
            f"max_speed={self.max_speed}, seed={self.seed}"
        )

    def _validate(self, params: Dict[str, Any]) -> None:
        problems = []
        if not 0.0 <= self.damping <= 1.0:
            problems.append(f"damping must be in [0, 1], got {self.damping}")
        if self.max_speed <= 0:
            problems.append(f"max_speed must be positive, got {self.max_speed}")
        for key, default in (('interaction_radius', DEFAULT_INTERACTION_RADIUS),
                             ('connection_radius', DEFAULT_CONNECTION_RADIUS)):
            value = float(params.get(key, default))
            if value <= 0:
                problems.append(f"{key} must be positive, got {value}")
        for key, (low, high) in (('initial_radius_range', self.initial_radius_range),
                                 ('burst_radius_range', self.burst_radius_range)):
            if not 0 < low < high:
                problems.append(f"{key} must satisfy 0 < low < high, got [{low}, {high}]")
        if self.initial_particle_count < 0:
            problems.append(f"initial_particle_count must be >= 0, got {self.initial_particle_count}")
        if self.burst_size < 0:
            problems.append(f"burst_size must be >= 0, got {self.burst_size}")
        if self.burst_spread < 0:
            problems.append(f"burst_spread must be >= 0, got {self.burst_spread}")

        if problems:
            msg = "Configuration error: " + "; ".join(problems)
            logging.critical(msg)
            raise ValueError(msg)

    # --- Particle store ---

    @property
    def positions(self) -> np.ndarray:
        return self._positions[:self.count]

    @property
    def velocities(self) -> np.ndarray:
        return self._velocities[:self.count]

    @property
    def radii(self) -> np.ndarray:
        return self._radii[:self.count]

    @property
    def masses(self) -> np.ndarray:
        return self._masses[:self.count]

    @property
    def base_colors(self) -> np.ndarray:
        return self._base_colors[:self.count]

    def __len__(self) -> int:
        return self.count

    def __getitem__(self, index: int) -> Particle:
        if index < 0:
            index += self.count
        if not 0 <= index < self.count:
            raise IndexError(f"particle index {index} out of range for {self.count} particles")
        return Particle(self, index)

    def __iter__(self) -> Iterator[Particle]:
        for index in range(self.count):
            yield Particle(self, index)

    def _ensure_capacity(self, required: int) -> None:
        capacity = self._positions.shape[0]
        if required <= capacity:
            return
        while capacity < required:
            capacity *= 2

        def grow(array: np.ndarray) -> np.ndarray:
            grown = np.zeros((capacity,) + array.shape[1:], dtype=array.dtype)
            grown[:self.count] = array[:self.count]
            return grown

        self._positions = grow(self._positions)
        self._velocities = grow(self._velocities)
        self._radii = grow(self._radii)
        self._masses = grow(self._masses)
        self._base_colors = grow(self._base_colors)
        logging.debug(f"Particle storage grown to capacity {capacity}.")

    # --- Spawning ---

    def spawn(self, x: float, y: float, radius: float) -> Particle:
        """
        Adds one particle at rest at (x, y).

        The mass is radius squared, so the radius must be positive.

        Raises:
            ValueError: If radius <= 0.
        """
        if not radius > 0:
            msg = f"Cannot spawn particle with non-positive radius {radius}."
            logging.error(msg)
            raise ValueError(msg)

        self._ensure_capacity(self.count + 1)
        index = self.count
        self._positions[index] = (x, y)
        self._velocities[index] = (0.0, 0.0)
        self._radii[index] = radius
        self._masses[index] = radius * radius
        self._base_colors[index] = self.rng.integers(0, 255, size=3)
        self.count += 1
        return Particle(self, index)

    def spawn_burst(self, center: Sequence[float], count: Optional[int] = None) -> List[Particle]:
        """
        Spawns particles scattered around a point, e.g. the mouse cursor.

        Each particle is placed at a uniformly random angle and a uniformly
        random distance of up to `burst_spread` from the center, with a
        radius drawn from `burst_radius_range`.

        Args:
            center (Sequence[float]): The (x, y) point to spawn around.
            count (Optional[int]): Number of particles, defaults to burst_size.

        Returns:
            List[Particle]: The new particles.
        """
        if count is None:
            count = self.burst_size
        cx, cy = float(center[0]), float(center[1])
        low, high = self.burst_radius_range

        spawned = []
        for _ in range(count):
            angle = self.rng.uniform(0.0, 2.0 * np.pi)
            distance = self.rng.uniform(0.0, self.burst_spread)
            x = cx + np.cos(angle) * distance
            y = cy + np.sin(angle) * distance
            spawned.append(self.spawn(x, y, self.rng.uniform(low, high)))

        logging.info(f"Spawned burst of {count} particles at ({cx:.0f}, {cy:.0f}). Total: {self.count}.")
        return spawned

    def seed_initial(self, count: Optional[int] = None) -> List[Particle]:
        """
        Scatters the starting particles uniformly over the world.
        """
        if count is None:
            count = self.initial_particle_count
        low, high = self.initial_radius_range

        spawned = [
            self.spawn(
                self.rng.uniform(0.0, self.width),
                self.rng.uniform(0.0, self.height),
                self.rng.uniform(low, high)
            )
            for _ in range(count)
        ]
        logging.info(f"Seeded {count} initial particles.")
        return spawned

    # --- Per-frame update ---

    def update(self, dt: float) -> None:
        """
        Executes one frame of the simulation.

        dt is used as given; a long stall before a frame produces one large
        step.
        """
        # Fix the particle set for this frame
        count = self.count
        positions = self._positions[:count]
        velocities = self._velocities[:count]

        # 1. Pairwise forces from the positions at the start of the frame
        self.force_field.apply(positions, velocities, self._masses[:count], dt)

        # 2. Gravity, speed cap, movement and wall bounces
        _integrate_numba(
            positions, velocities, self._radii[:count], dt,
            self.gravity, self.max_speed, self.damping, self.width, self.height
        )

        # 3. Connections from the new positions
        self.update_connections()

    def warm_up(self) -> None:
        """
        Compiles the Numba kernels on scratch data.

        Call before frame timing starts so the first frame's dt does not
        include the compile. Particle state is left untouched.
        """
        positions = np.array([[1.0, 1.0], [2.0, 1.0]])
        velocities = np.zeros((2, 2), dtype=np.float64)
        radii = np.ones(2, dtype=np.float64)

        self.force_field.compute(positions)
        _integrate_numba(
            positions, velocities, radii, 0.0,
            self.gravity, self.max_speed, self.damping, self.width, self.height
        )
        logging.debug("Physics kernels compiled.")

    def update_connections(self) -> None:
        self.proximity_graph.rebuild(self.positions)

    def average_speed(self) -> float:
        if self.count == 0:
            return 0.0
        return float(np.mean(np.linalg.norm(self.velocities, axis=1)))

    # --- Rendering ---

    def render(self, canvas: Canvas) -> None:
        """
        Draws the connections first so they sit beneath the particles.
        """
        for start, end, alpha in self.proximity_graph.segments():
            canvas.draw_line(start, end, CONNECTION_COLOR + (int(alpha),))

        for particle in self:
            x, y = particle.position
            canvas.draw_circle((float(x), float(y)), particle.radius, particle.render_color())
