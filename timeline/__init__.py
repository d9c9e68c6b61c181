"""Core package exports for the schedule timeline."""

# Re-export commonly used modules for convenience.
from . import coords, dates, overlap, sample_data, store, window, zoom

__all__ = [
    "coords",
    "dates",
    "overlap",
    "sample_data",
    "store",
    "window",
    "zoom",
]
