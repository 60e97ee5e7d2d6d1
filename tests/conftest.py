import os

# Pygame must not try to open a real window in the test environment.
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pytest

from constants import WINDOW_WIDTH, WINDOW_HEIGHT
from simulation import ParticleSystem


@pytest.fixture
def system():
    """An empty system with default physics and a fixed random seed."""
    return ParticleSystem({}, WINDOW_WIDTH, WINDOW_HEIGHT, rng=np.random.default_rng(1234))


class RecordingCanvas:
    """Collects the primitives emitted by ParticleSystem.render."""

    def __init__(self):
        self.calls = []

    def draw_circle(self, center, radius, color):
        self.calls.append(("circle", center, radius, color))

    def draw_line(self, start, end, color):
        self.calls.append(("line", start, end, color))


@pytest.fixture
def canvas():
    return RecordingCanvas()
