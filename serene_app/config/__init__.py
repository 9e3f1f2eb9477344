"""
Configuration module.

Frozen defaults, YAML overrides and validation for breathing sessions,
activity timers, cycle tracking and logging.
"""
