# particle.py
"""
Single-particle physics: gravity, speed limiting, wall bouncing and
force response.

Particle state does not live on Particle objects. It lives in the
contiguous NumPy arrays owned by the ParticleSystem (see simulation.py),
and a Particle is a lightweight handle holding an index into them. The
Numba kernel in this module integrates any number of rows at once, so the
bulk per-frame update and the single-particle `integrate` share one code
path.
"""
import numpy as np
from numba import jit
from typing import Tuple, TYPE_CHECKING

from color import speed_to_color

# Forward reference for type hinting to avoid circular import
if TYPE_CHECKING:
    from simulation import ParticleSystem

# --- Data Contracts ---
#
# _integrate_numba(positions, velocities, radii, dt, gravity, max_speed,
#                  damping, width, height) -> None:
#   - Inputs: positions/velocities float64 arrays of shape (N, 2), radii
#     float64 array of shape (N,), scalars for the step and world.
#   - Side Effects: Mutates positions and velocities in place.
#   - Invariants: After the call, every speed is at most max_speed before
#     the wall bounce, and every position lies in [r, width - r] x
#     [r, height - r].
#
# class Particle:
#   - __init__(self, system: ParticleSystem, index: int)
#   - integrate(self, dt: float) -> None
#   - apply_force(self, force, dt: float) -> None
#   - render_color(self) -> Tuple[int, int, int]


@jit(nopython=True)
def _integrate_numba(positions, velocities, radii, dt, gravity, max_speed, damping, width, height):
    """
    Numba-jitted explicit Euler step with speed limit and wall reflection.
    """
    for i in range(positions.shape[0]):
        radius = radii[i]
        vx = velocities[i, 0]
        vy = velocities[i, 1] + gravity * dt

        # Cap the magnitude, keep the direction
        speed = np.sqrt(vx * vx + vy * vy)
        if speed > max_speed:
            vx = vx / speed * max_speed
            vy = vy / speed * max_speed

        x = positions[i, 0] + vx * dt
        y = positions[i, 1] + vy * dt

        # The minimum bound wins if both are crossed in one step
        if x - radius < 0:
            x = radius
            vx = -vx * damping
        elif x + radius > width:
            x = width - radius
            vx = -vx * damping

        if y - radius < 0:
            y = radius
            vy = -vy * damping
        elif y + radius > height:
            y = height - radius
            vy = -vy * damping

        positions[i, 0] = x
        positions[i, 1] = y
        velocities[i, 0] = vx
        velocities[i, 1] = vy


class Particle:
    """
    A handle onto one row of the ParticleSystem's state arrays.

    Handles stay valid when the system grows its storage because every
    access goes back through the system by index.
    """
    __slots__ = ('_system', 'index')

    def __init__(self, system: "ParticleSystem", index: int):
        self._system = system
        self.index = index

    def __repr__(self) -> str:
        x, y = self.position
        return f"Particle(index={self.index}, position=({x:.2f}, {y:.2f}), radius={self.radius:.2f})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, Particle):
            return NotImplemented
        return self._system is other._system and self.index == other.index

    def __hash__(self) -> int:
        return hash((id(self._system), self.index))

    @property
    def position(self) -> np.ndarray:
        """A writable view of the particle's (x, y) position."""
        return self._system.positions[self.index]

    @property
    def velocity(self) -> np.ndarray:
        """A writable view of the particle's (vx, vy) velocity."""
        return self._system.velocities[self.index]

    @property
    def radius(self) -> float:
        return float(self._system.radii[self.index])

    @property
    def mass(self) -> float:
        return float(self._system.masses[self.index])

    @property
    def base_color(self) -> Tuple[int, int, int]:
        """The random color assigned at spawn. Not used for rendering."""
        r, g, b = self._system.base_colors[self.index]
        return (int(r), int(g), int(b))

    @property
    def speed(self) -> float:
        return float(np.linalg.norm(self.velocity))

    def integrate(self, dt: float) -> None:
        """
        Advances this particle by one time step.

        Applies gravity, caps the speed, moves the particle and bounces it
        off any wall it crossed.
        """
        system = self._system
        row = slice(self.index, self.index + 1)
        _integrate_numba(
            system.positions[row], system.velocities[row], system.radii[row],
            dt, system.gravity, system.max_speed, system.damping,
            system.width, system.height
        )

    def apply_force(self, force, dt: float) -> None:
        """Adds the impulse force * dt, scaled by the inverse mass."""
        velocity = self.velocity
        velocity += np.asarray(force, dtype=np.float64) * (dt / self.mass)

    def render_color(self) -> Tuple[int, int, int]:
        return speed_to_color(self.speed, self._system.max_speed)
