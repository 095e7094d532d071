"""
HTTP API — serves the aggregated, ranked job collection.
"""

import threading
import time

from fastapi import FastAPI, Query
from fastapi.responses import JSONResponse

from config.settings import settings
from graph.workflow import get_jobs
from models.job import JOB_FILTERS, Job


class JobCache:
    """Keeps the last non-empty pipeline result for ttl_seconds.

    An empty result means every source failed, so it is served but not
    cached and the next request runs the pipeline again.
    """

    def __init__(self, ttl_seconds: int):
        self.ttl_seconds = ttl_seconds
        self._jobs: list[Job] = []
        self._fetched_at: float = None
        self._lock = threading.Lock()

    def get(self, refresh: bool = False) -> list[Job]:
        with self._lock:
            now = time.monotonic()
            stale = self._fetched_at is None or now - self._fetched_at >= self.ttl_seconds
            if refresh or stale:
                self._jobs = get_jobs()
                self._fetched_at = now if self._jobs else None
            return self._jobs

    def clear(self) -> None:
        with self._lock:
            self._jobs = []
            self._fetched_at = None


app = FastAPI(title="Jobfinder")
job_cache = JobCache(settings.cache_ttl_seconds)


@app.get("/api/jobs")
def list_jobs(refresh: bool = Query(False, description="Bypass the cached result")):
    """All aggregated jobs, ranked. An empty list when every source failed."""
    jobs = job_cache.get(refresh=refresh)
    return JSONResponse([job.to_api() for job in jobs])


@app.get("/api/filters")
def list_filters():
    return JOB_FILTERS
