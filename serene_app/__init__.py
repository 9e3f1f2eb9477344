"""
Serene Mind - Wellness Companion Core

Deterministic client-side core of a mental-wellness companion. Drives
guided breathing sessions and self-care activity timers, calculates
journal and self-care streaks, and estimates menstrual-cycle phases.
Persistence and presentation are left to the caller.
"""

__version__ = "0.1.0"
__author__ = "Serene Mind Team"
