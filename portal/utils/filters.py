"""
Job listing search and filters.

All filters combine with AND; an empty selection disables that filter.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Protocol

JOB_TYPES = ["Full-time", "Part-time", "Contract", "Internship", "Remote"]
JOB_FUNCTIONS = [
    "Engineering",
    "Product",
    "Design",
    "Marketing",
    "Sales",
    "Finance",
    "Operations",
    "HR",
    "Consulting",
    "General",
]
DEFAULT_FUNCTION = "General"


class ListedJob(Protocol):
    title: str
    location: str
    job_type: str
    job_function: str | None
    description: str
    minimum_experience: int | None


@dataclass
class JobFilterCriteria:
    query: str = ""
    job_types: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    functions: list[str] = field(default_factory=list)
    max_experience: int | None = None  # None disables the experience filter


def city_of(location: str) -> str:
    """City part of a location such as "Mumbai, India"."""
    return location.split(",")[0].strip()


def _matches_query(job: ListedJob, query: str) -> bool:
    return (
        query in job.title.lower()
        or query in job.location.lower()
        or query in (job.description or "").lower()
    )


def _matches_location(job: ListedJob, selected: Sequence[str]) -> bool:
    location = job.location.lower()
    city = city_of(job.location)
    return any(loc.lower() in location or city == loc for loc in selected)


def filter_jobs(jobs: Iterable[ListedJob], criteria: JobFilterCriteria) -> list:
    """Apply search text and filters, preserving input order."""
    filtered = list(jobs)

    query = criteria.query.strip().lower()
    if query:
        filtered = [job for job in filtered if _matches_query(job, query)]

    if criteria.job_types:
        filtered = [job for job in filtered if job.job_type in criteria.job_types]

    if criteria.locations:
        filtered = [job for job in filtered if _matches_location(job, criteria.locations)]

    if criteria.functions:
        filtered = [
            job for job in filtered if (job.job_function or DEFAULT_FUNCTION) in criteria.functions
        ]

    if criteria.max_experience is not None:
        filtered = [
            job for job in filtered if (job.minimum_experience or 0) <= criteria.max_experience
        ]

    return filtered


def available_locations(jobs: Iterable[ListedJob]) -> list[str]:
    """Unique cities across jobs, in first-seen order."""
    return list(dict.fromkeys(city_of(job.location) for job in jobs))


def location_categories(locations: Iterable[str]) -> list[str]:
    """Collapse remote/hybrid locations into buckets; keep cities as they are."""
    categories = []
    for loc in locations:
        lowered = loc.lower()
        if "remote" in lowered:
            categories.append("Remote")
        elif "hybrid" in lowered:
            categories.append("Hybrid")
        else:
            categories.append(loc)
    return list(dict.fromkeys(categories))


def has_active_filters(criteria: JobFilterCriteria) -> bool:
    return bool(
        criteria.job_types
        or criteria.locations
        or criteria.functions
        or criteria.max_experience is not None
    )
