"""
Normalizer Agent — converts raw provider records into the canonical Job shape.
Deterministic: location canonicalization, keyword tagging and summary building.
No LLM needed.
"""

import re
from datetime import datetime, timezone

from models.job import Job


REMOTE_KEYWORDS = ["remote", "anywhere", "home office", "home-office", "homeoffice"]

# Keyword groups → tags added when any keyword occurs in the combined text
TAG_RULES = [
    (["junior", "entry", "trainee", "assistant"], ["quereinsteiger", "ohne-vorkenntnisse"]),
    (
        ["backoffice", "data", "qa", "accounting", "finance", "analytics", "engineering"],
        ["ohne-kundenkontakt"],
    ),
    (["beauty", "cosmetic", "wellness", "skincare"], ["beauty"]),
    (REMOTE_KEYWORDS, ["home-office"]),
]

SUMMARY_MAX_LENGTH = 200
ELLIPSIS = "…"

_TAG_RE = re.compile(r"<[^>]*>")
_WHITESPACE_RE = re.compile(r"\s+")


def is_remote_text(value: str) -> bool:
    lowered = (value or "").lower()
    return any(keyword in lowered for keyword in REMOTE_KEYWORDS)


def normalize_location(value: str) -> str:
    """Canonicalize remote-indicating locations to 'Remote'."""
    if is_remote_text(value):
        return "Remote"
    return value or ""


def derive_tags(
    title: str,
    company: str,
    category: str = "",
    provider_tags: list[str] = None,
    is_remote: bool = False,
) -> list[str]:
    """
    Derive category tags by substring matching against fixed keyword groups.

    Tags are purely additive; the result never contains duplicates.
    """
    combined = " ".join(
        [title or "", company or "", category or "", *(provider_tags or [])]
    ).lower()

    tags = set()
    if is_remote:
        tags.add("home-office")

    for keywords, group_tags in TAG_RULES:
        if any(keyword in combined for keyword in keywords):
            tags.update(group_tags)

    return sorted(tags)


def strip_html(value: str) -> str:
    """Remove markup tags and collapse whitespace."""
    without_tags = _TAG_RE.sub(" ", value or "")
    return _WHITESPACE_RE.sub(" ", without_tags).strip()


def build_summary(description: str, title: str, company: str) -> str:
    """Build a plain-text excerpt of at most 200 characters."""
    cleaned = strip_html(description)
    if not cleaned:
        return f"{title} bei {company}."
    if len(cleaned) > SUMMARY_MAX_LENGTH:
        return cleaned[: SUMMARY_MAX_LENGTH - 3] + ELLIPSIS
    return cleaned


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_date(value) -> str:
    """
    Return an ISO-8601 date string for a provider timestamp.

    Parsable ISO strings are kept as provided. Epoch numbers (seconds or
    milliseconds) are converted to UTC. Anything else falls back to now.
    """
    if isinstance(value, bool):
        return _now_iso()

    if isinstance(value, (int, float)):
        ts = float(value)
        # Some APIs return epoch in ms
        if ts > 1e12:
            ts /= 1000.0
        try:
            return datetime.fromtimestamp(ts, tz=timezone.utc).isoformat()
        except (OverflowError, OSError, ValueError):
            return _now_iso()

    if isinstance(value, str) and value.strip():
        candidate = value.strip()
        try:
            datetime.fromisoformat(candidate.replace("Z", "+00:00"))
            return candidate
        except ValueError:
            return _now_iso()

    return _now_iso()


def parse_posted_at(value: str) -> datetime:
    """Parse a normalized postedAt value into an aware datetime (UTC if naive)."""
    try:
        dt = datetime.fromisoformat((value or "").replace("Z", "+00:00"))
    except ValueError:
        return datetime.min.replace(tzinfo=timezone.utc)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt


def slugify(value: str) -> str:
    return _WHITESPACE_RE.sub("-", value.strip().lower())


def _as_str_list(value) -> list[str]:
    if not isinstance(value, list):
        return []
    return [str(item) for item in value if item is not None]


def normalize_remotive_job(raw: dict) -> Job:
    """Map one Remotive record into a Job."""
    title = str(raw.get("title") or "").strip()
    company = str(raw.get("company_name") or "").strip()
    location = normalize_location(str(raw.get("candidate_required_location") or ""))
    is_remote = location == "Remote"
    provider_tags = _as_str_list(raw.get("tags"))

    return Job(
        id=f"remotive-{raw.get('id')}",
        title=title,
        company=company,
        location=location,
        is_remote=is_remote,
        posted_at=normalize_date(raw.get("publication_date")),
        source="Remotive",
        tags=derive_tags(title, company, str(raw.get("category") or ""), provider_tags, is_remote),
        url=str(raw.get("url") or raw.get("job_url") or "").strip(),
        summary=build_summary(str(raw.get("description") or ""), title, company),
    )


def normalize_arbeitnow_job(raw: dict) -> Job:
    """Map one Arbeitnow record into a Job."""
    title = str(raw.get("title") or "").strip()
    company = str(raw.get("company_name") or "").strip()
    location = normalize_location(str(raw.get("location") or ""))
    is_remote = bool(raw.get("remote")) or location == "Remote"
    provider_tags = _as_str_list(raw.get("tags"))
    category = provider_tags[0] if provider_tags else "General"

    return Job(
        id=f"arbeitnow-{raw.get('slug')}",
        title=title,
        company=company,
        location="Remote" if is_remote else location,
        is_remote=is_remote,
        posted_at=normalize_date(raw.get("created_at")),
        source="Arbeitnow",
        tags=derive_tags(title, company, category, provider_tags, is_remote),
        url=str(raw.get("url") or "").strip(),
        summary=build_summary(str(raw.get("description") or ""), title, company),
    )


def normalize_scraped_item(item: dict, site_name: str, index: int) -> Job:
    """
    Map one item extracted from a career page into a Job.

    Scraped pages carry no posting date, so postedAt is the time of the run.
    """
    title = item["title"]
    url = item["url"]
    location = normalize_location(item.get("location") or "Tirol")
    is_remote = location == "Remote"

    return Job(
        id=f"{slugify(site_name)}-{index}-{url}",
        title=title,
        company=site_name,
        location=location,
        is_remote=is_remote,
        posted_at=_now_iso(),
        source=site_name,
        tags=derive_tags(title, site_name, "", [location], is_remote),
        url=url,
        summary=build_summary(f"Gefunden auf {site_name}.", title, site_name),
        scraped=True,
    )
