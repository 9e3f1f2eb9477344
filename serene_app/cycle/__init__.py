"""
Menstrual cycle tracking module.

Estimates the current cycle phase from the last period start date.
"""

from .tracker import CyclePhase, CycleSettings, CycleStatus, estimate_cycle_status

__all__ = ["CyclePhase", "CycleSettings", "CycleStatus", "estimate_cycle_status"]
