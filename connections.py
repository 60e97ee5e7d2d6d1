# connections.py
"""
The proximity graph: faint lines between particles that are close together.

Rebuilt from scratch every frame from the post-integration positions.
Purely visual, it has no effect on the physics.
"""
import logging
import numpy as np
from typing import Iterator, Tuple

# --- Data Contracts ---
#
# class ProximityGraph:
#   - __init__(self, radius: float)
#   - rebuild(self, positions: np.ndarray) -> None:
#     - Inputs: positions, float array of shape (N, 2).
#     - Side Effects: Replaces the stored segments. Endpoints are copies,
#       so later integration does not move this frame's lines.
#     - Invariants: One segment per unordered pair (i < j) with d < radius,
#       alpha = 255 * (1 - d / radius).
#   - segments(self) -> Iterator[(start, end, alpha)]

Point = Tuple[float, float]


class ProximityGraph:
    """
    Per-frame set of line segments joining nearby particle pairs.
    """
    def __init__(self, radius: float):
        self.radius = float(radius)
        self.starts = np.empty((0, 2), dtype=np.float64)
        self.ends = np.empty((0, 2), dtype=np.float64)
        self.alphas = np.empty(0, dtype=np.float64)
        logging.debug(f"ProximityGraph initialized with connection radius {self.radius}.")

    def __len__(self) -> int:
        return self.alphas.shape[0]

    def alpha(self, distance: float) -> float:
        """Opacity for a pair at the given distance, 0 at or beyond the radius."""
        if distance >= self.radius:
            return 0.0
        return 255.0 * (1.0 - distance / self.radius)

    def rebuild(self, positions: np.ndarray) -> None:
        """
        Discards the previous frame's segments and recomputes them.
        """
        particle_count = positions.shape[0]
        # All unordered pairs i < j at once; fine at a few hundred particles
        i, j = np.triu_indices(particle_count, k=1)
        deltas = positions[j] - positions[i]
        distances = np.hypot(deltas[:, 0], deltas[:, 1])

        close = distances < self.radius
        self.starts = positions[i[close]]
        self.ends = positions[j[close]]
        self.alphas = 255.0 * (1.0 - distances[close] / self.radius)

    def segments(self) -> Iterator[Tuple[Point, Point, float]]:
        """Yields (start, end, alpha) for each segment."""
        for start, end, alpha in zip(self.starts, self.ends, self.alphas):
            yield (float(start[0]), float(start[1])), (float(end[0]), float(end[1])), float(alpha)
