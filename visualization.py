# visualization.py
"""
Handles the window, input and drawing of the particle simulation using Pygame.
"""
import logging
import pygame
from typing import Tuple, TYPE_CHECKING

from constants import BACKGROUND_COLOR, FPS, WINDOW_TITLE

# Forward reference for type hinting to avoid circular import
if TYPE_CHECKING:
    from simulation import ParticleSystem


# --- Data Contracts ---
#
# class Visualizer:
#   - __init__(self, width: int, height: int, burst_size: int):
#     - Inputs:
#       - width, height: size of the display window in pixels.
#       - burst_size: number of particles spawned per left click.
#     - Outputs: None
#     - Side Effects: Initializes Pygame and creates a display surface.
#
#   - tick(self) -> float:
#     - Outputs: seconds elapsed since the previous tick, capped at FPS.
#
#   - draw(self, particles: ParticleSystem) -> bool:
#     - Inputs:
#       - particles: The ParticleSystem to render and to spawn into.
#     - Outputs:
#       - bool: False if the user has quit, True otherwise.
#     - Side Effects: Handles Pygame events (a left click spawns a burst at
#       the cursor) and renders connections and particles to the screen.
#
#   - draw_circle / draw_line: the Canvas primitives used by
#     ParticleSystem.render.

class Visualizer:
    """
    Renders the particle system and turns mouse clicks into particle bursts.
    """
    def __init__(self, width: int, height: int, burst_size: int):
        """
        Initializes Pygame and the display window.
        """
        pygame.init()

        self.width = width
        self.height = height
        self.burst_size = burst_size
        self.screen = pygame.display.set_mode((width, height))
        pygame.display.set_caption(WINDOW_TITLE)
        self.clock = pygame.time.Clock()

        # Lines and circles go on separate per-pixel-alpha layers so the
        # translucent connections always end up beneath the particles.
        self.connection_surface = pygame.Surface((width, height), pygame.SRCALPHA)
        self.particle_surface = pygame.Surface((width, height), pygame.SRCALPHA)

        logging.info(f"Visualizer initialized with Pygame display ({width}x{height}).")

    def tick(self) -> float:
        """Waits for the next frame and returns the elapsed time in seconds."""
        return self.clock.tick(FPS) / 1000.0

    def handle_events(self, particles: "ParticleSystem") -> bool:
        """
        Processes pending Pygame events.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                logging.info("Quit event received. Shutting down visualizer.")
                return False

            if event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    logging.info("ESC key pressed. Shutting down visualizer.")
                    return False

            if event.type == pygame.MOUSEBUTTONDOWN:
                if event.button == 1: # Left mouse click
                    particles.spawn_burst(event.pos, self.burst_size)
        return True

    def draw_circle(self, center: Tuple[float, float], radius: float, color: Tuple[int, int, int]) -> None:
        pygame.draw.circle(self.particle_surface, color, (int(center[0]), int(center[1])), max(1, int(radius)))

    def draw_line(self, start: Tuple[float, float], end: Tuple[float, float], color: Tuple[int, int, int, int]) -> None:
        pygame.draw.line(self.connection_surface, color, start, end)

    def draw(self, particles: "ParticleSystem") -> bool:
        """
        Handles events, then draws all connections and particles.

        Returns:
            bool: False if the simulation should exit, True otherwise.
        """
        if not self.handle_events(particles):
            return False

        self.connection_surface.fill((0, 0, 0, 0))
        self.particle_surface.fill((0, 0, 0, 0))
        particles.render(self)

        self.screen.fill(BACKGROUND_COLOR)
        self.screen.blit(self.connection_surface, (0, 0))
        self.screen.blit(self.particle_surface, (0, 0))

        pygame.display.flip()
        return True

    def close(self):
        """Shuts down Pygame."""
        pygame.quit()
