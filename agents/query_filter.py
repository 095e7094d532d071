"""
Query Filter — location rule, tag filter and display order for a job list.
"""

from agents.normalizer import parse_posted_at
from models.job import Job


INNSBRUCK_LOCATIONS = ["Innsbruck", "Innsbruck-Land", "Tirol"]

TAG_MODES = ("all", "any")


def matches_location_rules(job: Job) -> bool:
    """Remote jobs always pass; others must be in Innsbruck or Tirol."""
    if job.is_remote:
        return True
    return any(place in job.location for place in INNSBRUCK_LOCATIONS)


def matches_tags(job: Job, active_tags: list[str], tag_mode: str = "all") -> bool:
    """
    "all": the job carries every active tag. "any": it carries at least one.
    No active tags keeps every job.
    """
    if not active_tags:
        return True
    if tag_mode == "any":
        return any(tag in job.tags for tag in active_tags)
    return all(tag in job.tags for tag in active_tags)


def filter_jobs(jobs: list[Job], active_tags: list[str] = None, tag_mode: str = "all") -> list[Job]:
    """
    Produce the displayed list: location rule, tag filter, then sort by
    rank score (missing counts as 0) and posting date, both descending.
    """
    if tag_mode not in TAG_MODES:
        raise ValueError(f"tag_mode must be one of {TAG_MODES}, got {tag_mode!r}")

    active_tags = list(active_tags or [])
    visible = [
        job
        for job in jobs
        if matches_location_rules(job) and matches_tags(job, active_tags, tag_mode)
    ]
    return sorted(
        visible,
        key=lambda job: (job.rank_score or 0, parse_posted_at(job.posted_at)),
        reverse=True,
    )
