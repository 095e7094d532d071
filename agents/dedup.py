"""
Dedup Agent — deterministic deduplication of the merged provider results.
No LLM needed.
"""

from models.job import Job
from models.state import PipelineState


def dedup_jobs(jobs: list[Job]) -> list[Job]:
    """
    Deduplicate jobs by their dedup key (title|company|url, or title|url
    for scraped postings). The last occurrence of a key wins.
    """
    by_key: dict[str, Job] = {}
    for job in jobs:
        by_key[job.dedup_key()] = job
    return list(by_key.values())


def dedup_agent(state: PipelineState) -> dict:
    """Deduplicate the jobs collected by every fetch task."""
    collected_jobs = state.get("collected_jobs", [])

    if not collected_jobs:
        print("[Dedup] No jobs to deduplicate")
        return {"unique_jobs": []}

    unique_jobs = dedup_jobs(collected_jobs)

    print(f"[Dedup] Processing {len(collected_jobs)} total jobs...")
    print(f"[Dedup] Removed {len(collected_jobs) - len(unique_jobs)} duplicates")
    print(f"[Dedup] {len(unique_jobs)} unique jobs remaining")

    return {"unique_jobs": unique_jobs}
