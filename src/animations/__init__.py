"""
Autonomous colour generation

- AutoPilot: owns the PatternScheduler read every frame in AutoPilot mode
- PatternScheduler: time-driven palette walk
"""

from .autopilot import AutoPilot, PatternScheduler

__all__ = [
    "AutoPilot",
    "PatternScheduler",
]
