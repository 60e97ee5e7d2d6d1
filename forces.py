# forces.py
"""
Pairwise short-range attraction and repulsion between particles.

Each particle feels, from every other particle closer than the interaction
radius, a force along the line joining them with scalar strength

    ATTRACTION / d^2 - REPULSION / d

which pulls the pair together below d = ATTRACTION / REPULSION and pushes
it gently apart beyond that, out to the interaction radius. Every ordered
pair (i, j) is visited, and the force computed with i as "self" is applied
to i only, so each unordered pair contributes two independently computed
forces.

All pairs are checked every frame (O(n^2)). This is fine for a few hundred
particles; a spatial grid would be the first thing to add beyond that.
"""
import logging
import numpy as np
from numba import jit

# --- Data Contracts ---
#
# class ForceField:
#   - __init__(self, attraction: float, repulsion: float, interaction_radius: float)
#   - compute(self, positions: np.ndarray) -> np.ndarray:
#     - Inputs: positions, float64 array of shape (N, 2).
#     - Outputs: net force on each particle, float64 array of shape (N, 2).
#     - Invariants: Coincident particles (d == 0) and particles at or
#       beyond the interaction radius contribute nothing.
#   - apply(self, positions, velocities, masses, dt) -> None:
#     - Side Effects: velocities += force * dt / mass, in place.


@jit(nopython=True)
def _calculate_forces_numba(positions, attraction, repulsion, radius):
    """
    Numba-jitted all-pairs force sum.

    The force on i is accumulated from every j != i; nothing is applied to j
    here, j gets its own pass with the roles swapped.
    """
    particle_count = positions.shape[0]
    total_force = np.zeros_like(positions)

    for i in range(particle_count):
        for j in range(particle_count):
            if i == j:
                continue

            # Direction is FROM i TO j
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            distance = np.sqrt(dx * dx + dy * dy)

            if 0 < distance < radius:
                strength = attraction / (distance * distance) - repulsion / distance
                total_force[i, 0] += dx / distance * strength
                total_force[i, 1] += dy / distance * strength
    return total_force


class ForceField:
    """
    Computes and applies the pairwise interaction forces.
    """
    def __init__(self, attraction: float, repulsion: float, interaction_radius: float):
        self.attraction = float(attraction)
        self.repulsion = float(repulsion)
        self.interaction_radius = float(interaction_radius)

        logging.debug(
            f"ForceField initialized: attraction={self.attraction}, "
            f"repulsion={self.repulsion}, radius={self.interaction_radius}, "
            f"equilibrium at d={self.equilibrium_distance:.2f}"
        )

    @property
    def equilibrium_distance(self) -> float:
        """The distance at which attraction and repulsion cancel out."""
        if self.repulsion == 0:
            return float('inf')
        return self.attraction / self.repulsion

    def strength(self, distance: float) -> float:
        """
        Scalar force strength at a given distance.

        Positive values pull the particle toward the other one, negative
        values push it away. Returns 0 outside the open interval
        (0, interaction_radius).
        """
        if not 0 < distance < self.interaction_radius:
            return 0.0
        return self.attraction / (distance * distance) - self.repulsion / distance

    def compute(self, positions: np.ndarray) -> np.ndarray:
        """Returns the net force on every particle as an (N, 2) array."""
        return _calculate_forces_numba(
            np.ascontiguousarray(positions, dtype=np.float64),
            self.attraction, self.repulsion, self.interaction_radius
        )

    def apply(self, positions: np.ndarray, velocities: np.ndarray, masses: np.ndarray, dt: float) -> None:
        """
        Computes the forces from the current positions and applies them to
        the velocities in place.
        """
        if positions.shape[0] == 0:
            return
        total_force = self.compute(positions)
        # Heavier particles respond less to the same force
        velocities += total_force * (dt / masses[:, np.newaxis])
