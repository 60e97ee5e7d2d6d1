# color.py
"""
Maps particle speed to a display color.

Speed is turned into a hue on the color wheel (slow = red, fast = back
around to red through green, blue and magenta) and converted to RGB.
"""
import math
from typing import Tuple

# --- Data Contracts ---
#
# hsv_to_rgb(h: float, s: float, v: float) -> Tuple[int, int, int]:
#   - Inputs: hue in degrees, saturation and value in [0, 1].
#   - Outputs: RGB triple of ints in [0, 255].
#   - Invariants: Hues outside [0, 360) are not wrapped; they take the
#     colors of the last sector [300, 360).
#
# speed_to_color(speed: float, max_speed: float) -> Tuple[int, int, int]:
#   - Inputs: speed >= 0, max_speed > 0.
#   - Outputs: fully saturated, full-value RGB color for the speed.

RGB = Tuple[int, int, int]


def hsv_to_rgb(h: float, s: float, v: float) -> RGB:
    """
    Converts an HSV color to RGB using the 60-degree sector formula.

    Args:
        h (float): Hue in degrees.
        s (float): Saturation, 0 to 1.
        v (float): Value, 0 to 1.

    Returns:
        Tuple[int, int, int]: The RGB color, channels truncated to ints.
    """
    c = v * s
    x = c * (1 - abs(math.fmod(h / 60.0, 2) - 1))
    m = v - c

    if 0 <= h < 60:
        r, g, b = c, x, 0.0
    elif 60 <= h < 120:
        r, g, b = x, c, 0.0
    elif 120 <= h < 180:
        r, g, b = 0.0, c, x
    elif 180 <= h < 240:
        r, g, b = 0.0, x, c
    elif 240 <= h < 300:
        r, g, b = x, 0.0, c
    else:
        # Also catches negative hues and hues >= 360.
        r, g, b = c, 0.0, x

    return (int((r + m) * 255), int((g + m) * 255), int((b + m) * 255))


def speed_to_hue(speed: float, max_speed: float) -> float:
    """Scales a speed in [0, max_speed] onto a hue in [0, 360]."""
    return (speed / max_speed) * 360.0


def speed_to_color(speed: float, max_speed: float) -> RGB:
    return hsv_to_rgb(speed_to_hue(speed, max_speed), 1.0, 1.0)
