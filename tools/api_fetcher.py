"""
API Fetcher Tool — fetches job data from JSON job-board APIs.
Each provider has an envelope parser that maps its records through the normalizer.
"""

import httpx
from config.settings import settings
from agents.normalizer import normalize_arbeitnow_job, normalize_remotive_job
from models.job import Job


def fetch_jobs_from_api(
    api_url: str,
    params: dict = None,
    timeout: int = None,
) -> dict:
    """
    Fetch jobs from a JSON API endpoint.

    Args:
        api_url: The API endpoint URL.
        params: Query parameters for the API call.
        timeout: Request timeout in seconds.

    Returns:
        dict with keys:
            - success (bool)
            - data (dict): Raw API response
            - error (str): Error message if failed
    """
    timeout = timeout or settings.request_timeout

    try:
        with httpx.Client(
            timeout=timeout,
            follow_redirects=True,
            headers={
                "User-Agent": "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) Chrome/120.0.0.0",
                "Accept": "application/json",
                "Accept-Encoding": "gzip, deflate",  # Exclude brotli to avoid decompressobj reuse bug
            },
        ) as client:
            resp = client.get(api_url, params=params or {})

            if not resp.is_success:
                return {
                    "success": False,
                    "data": {},
                    "error": f"API returned HTTP {resp.status_code}",
                }

            return {
                "success": True,
                "data": resp.json(),
                "error": "",
            }

    except (httpx.HTTPError, httpx.InvalidURL, ValueError) as e:
        # ValueError covers bodies that are not valid JSON
        return {
            "success": False,
            "data": {},
            "error": str(e) or e.__class__.__name__,
        }


def _records(api_response, key: str) -> list[dict]:
    """Return the well-formed records of an envelope; malformed ones are skipped."""
    if not isinstance(api_response, dict):
        return []
    raw_jobs = api_response.get(key) or []
    if not isinstance(raw_jobs, list):
        return []
    return [
        raw_job
        for raw_job in raw_jobs
        if isinstance(raw_job, dict) and raw_job.get("title") and (raw_job.get("url") or raw_job.get("job_url"))
    ]


def parse_remotive_jobs_api(api_response: dict) -> list[Job]:
    """
    Parse the Remotive remote-jobs API response ({"jobs": [...]}) into Jobs.
    """
    return [normalize_remotive_job(raw_job) for raw_job in _records(api_response, "jobs")]


def parse_arbeitnow_jobs_api(api_response: dict) -> list[Job]:
    """
    Parse the Arbeitnow job-board API response ({"data": [...]}) into Jobs.
    """
    return [normalize_arbeitnow_job(raw_job) for raw_job in _records(api_response, "data")]


API_PARSERS = {
    "remotive": parse_remotive_jobs_api,
    "arbeitnow": parse_arbeitnow_jobs_api,
}
