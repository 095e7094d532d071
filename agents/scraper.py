"""
Scraper Agent — fetches job data from one provider.
Supports two modes:
  1. API mode — fetches structured JSON from a job-board API
  2. HTML mode — fetches career page HTML and extracts postings via
     selectors, falling back to job-related links

A provider that fails yields zero jobs and an error message; it never
raises into the graph.
"""

from config.settings import settings
from tools.web_scraper import fetch_page
from tools.text_extractor import extract_postings
from tools.api_fetcher import fetch_jobs_from_api, API_PARSERS
from agents.normalizer import normalize_scraped_item
from models.job import Job
from models.source import SourceConfig
from models.state import FetchTask


def fetch_api_jobs(source: SourceConfig) -> tuple[list[Job], list[str]]:
    """Fetch every configured URL/page of a JSON API source.

    A non-success response on any page yields zero jobs for the whole source.
    """
    parse = API_PARSERS.get(source.parser or source.name.lower())
    if parse is None:
        return [], [f"No API parser configured for {source.name}"]

    jobs: list[Job] = []

    for api_url in source.urls:
        for page in range(1, source.pages + 1):
            params = {"page": page} if source.pages > 1 else None
            result = fetch_jobs_from_api(api_url, params=params)
            if not result["success"]:
                return [], [f"{source.name}: {result['error']}"]

            page_jobs = parse(result["data"])
            jobs.extend(page_jobs)
            if not page_jobs:
                break

    return jobs, []


def scrape_site(source: SourceConfig) -> tuple[list[Job], list[str]]:
    """Scrape every URL of a career-page source and normalize the postings."""
    limit = source.limit if source.limit is not None else settings.scrape_limit

    extracted: list[dict] = []
    errors: list[str] = []

    for url in source.urls:
        page = fetch_page(url)
        if not page["success"]:
            errors.append(f"{source.name}: {page['error']}")
            continue
        extracted.extend(extract_postings(page["html"], page["url"] or url, source.selectors))

    # Per-site dedup on title+url, keeping first-seen order
    unique: dict[str, dict] = {}
    for item in extracted:
        unique.setdefault(f"{item['title']}|{item['url']}", item)

    items = list(unique.values())[:limit]
    jobs = [normalize_scraped_item(item, source.name, index) for index, item in enumerate(items)]
    return jobs, errors


def fetch_source(source: SourceConfig) -> tuple[list[Job], list[str]]:
    """Fetch one provider; any failure means zero jobs for it."""
    try:
        if source.type == "api":
            return fetch_api_jobs(source)
        return scrape_site(source)
    except Exception as e:
        return [], [f"{source.name}: {e.__class__.__name__}: {e}"]


def scraper_agent(task: FetchTask) -> dict:
    """
    Fetch the provider carried by this task. Runs once per source, in parallel.
    """
    source = task["current_source"]
    mode = "API" if source.type == "api" else "HTML"
    print(f"[Scraper] {mode} mode for: {source.name}")

    jobs, errors = fetch_source(source)

    for error in errors:
        print(f"[Scraper] ⚠️  {error}")
    print(f"[Scraper] {source.name}: {len(jobs)} jobs")

    return {
        "collected_jobs": jobs,
        "errors": errors,
    }
