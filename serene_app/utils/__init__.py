"""
Utility functions module.

Time Semantics:
- The core never reads wall-clock time directly; a Clock is injected
- Only SystemClock touches the real clock
- Calendar dates are compared in the session's local time zone
- Time-of-day is discarded before any day arithmetic
"""
