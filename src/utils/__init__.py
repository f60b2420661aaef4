"""
Utility functions for the light fixture controller
"""

from .colors import AUTOPILOT_PALETTE, lerp_color
from .enum_helper import EnumHelper

__all__ = [
    'AUTOPILOT_PALETTE',
    'lerp_color',
    'EnumHelper',
]
