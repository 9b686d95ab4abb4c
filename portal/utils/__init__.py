"""Utility modules."""

from .coercion import blank_to_none, to_float, to_int, to_text
from .filters import (
    JobFilterCriteria,
    available_locations,
    filter_jobs,
    has_active_filters,
    location_categories,
)

__all__ = [
    "blank_to_none",
    "to_int",
    "to_float",
    "to_text",
    "JobFilterCriteria",
    "filter_jobs",
    "available_locations",
    "location_categories",
    "has_active_filters",
]
