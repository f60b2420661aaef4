"""
Color utilities

Palette data and blending helpers shared by the pattern generator.
"""

from models.color import Color

# Warm evening walk used by AutoPilot
AUTOPILOT_PALETTE = (
    Color(255, 147, 41),    # candle
    Color(255, 80, 0),      # amber
    Color(200, 0, 40),      # deep red
    Color(140, 0, 140),     # purple
    Color(0, 40, 200),      # blue
    Color(0, 160, 140),     # teal
)


def lerp_color(start: Color, end: Color, t: float) -> Color:
    """
    Linear blend between two colours

    Args:
        start: Colour at t=0
        end: Colour at t=1
        t: Position, clamped to 0-1

    Example:
        lerp_color(Color.black(), Color.white(), 0.5)  # Color(128, 128, 128)
    """
    t = max(0.0, min(1.0, t))
    return Color.from_rgb(
        round(start.r + (end.r - start.r) * t),
        round(start.g + (end.g - start.g) * t),
        round(start.b + (end.b - start.b) * t),
    )
