"""
Preference Agent — re-ranks and filters already-ranked jobs against a user's
keyword and remote-work profile.

Every job is scored per field for each matched include keyword. Any exclude
keyword match drops the job, and a non-empty include list requires at least
one match.
"""

import re

from models.job import AgentJob, Job
from models.preferences import AgentPreferences


FIELD_WEIGHTS = [
    ("title", 20),
    ("tags", 18),
    ("summary", 10),
    ("company", 8),
    ("location", 6),
]

EXCLUDE_PENALTY_TITLE_OR_TAGS = 40
EXCLUDE_PENALTY_OTHER = 25

REMOTE_MATCH_BOOST = 12
ONSITE_MATCH_BOOST = 8
REMOTE_MISMATCH_PENALTY = -8

_NON_WORD_RE = re.compile(r"[\W_]+")


def normalize_keywords(values: list[str]) -> list[str]:
    """Trim and lower-case keywords, dropping ones shorter than two characters."""
    keywords = [value.strip().lower() for value in values]
    return [keyword for keyword in keywords if len(keyword) > 1]


def parse_keywords(text: str) -> list[str]:
    """Split a comma- or newline-separated keyword string."""
    return normalize_keywords(re.split(r"[,\n]", text or ""))


def normalize_text(value: str) -> str:
    """Lower-case, replace anything but letters and digits with spaces, collapse whitespace."""
    return " ".join(_NON_WORD_RE.sub(" ", (value or "").lower()).split())


def compact(value: str) -> str:
    return re.sub(r"\s+", "", value)


def keyword_variants(keyword: str) -> list[str]:
    """The normalized keyword plus its whitespace-free form, so 'home office' matches 'homeoffice'."""
    normalized = normalize_text(keyword)
    variants = []
    for variant in (normalized, compact(normalized)):
        if variant and variant not in variants:
            variants.append(variant)
    return variants


def _contains(text: str, variants: list[str]) -> bool:
    text_compact = compact(text)
    return any(variant in text or variant in text_compact for variant in variants)


def remote_boost(job: Job, prefer_remote: str) -> int:
    if prefer_remote == "any":
        return 0
    if prefer_remote == "remote" and job.is_remote:
        return REMOTE_MATCH_BOOST
    if prefer_remote == "onsite" and not job.is_remote:
        return ONSITE_MATCH_BOOST
    return REMOTE_MISMATCH_PENALTY


def _score_job(job: Job, include_keywords: list[str], exclude_keywords: list[str], prefer_remote: str):
    field_text = {
        "title": normalize_text(job.title),
        "tags": normalize_text(" ".join(job.tags)),
        "summary": normalize_text(job.summary),
        "company": normalize_text(job.company),
        "location": normalize_text(job.location),
    }
    flattened = normalize_text(
        " ".join([job.title, job.company, job.location, job.summary, " ".join(job.tags)])
    )

    include_matches = [kw for kw in include_keywords if _contains(flattened, keyword_variants(kw))]
    exclude_matches = [kw for kw in exclude_keywords if _contains(flattened, keyword_variants(kw))]

    keyword_score = 0
    for keyword in include_matches:
        variants = keyword_variants(keyword)
        for field_name, weight in FIELD_WEIGHTS:
            if _contains(field_text[field_name], variants):
                keyword_score += weight

    # Excluded jobs are dropped before anyone sees their score, so this stays 0 for survivors
    exclude_penalty = 0
    for keyword in exclude_matches:
        variants = keyword_variants(keyword)
        in_title_or_tags = any(
            variant in field_text["title"] or variant in field_text["tags"] for variant in variants
        )
        exclude_penalty += EXCLUDE_PENALTY_TITLE_OR_TAGS if in_title_or_tags else EXCLUDE_PENALTY_OTHER

    boost = remote_boost(job, prefer_remote)
    score = (job.rank_score or 0) + keyword_score + boost - exclude_penalty
    return score, include_matches, exclude_matches, boost


def rank_jobs_for_agent(jobs: list[Job], preferences: AgentPreferences) -> list[AgentJob]:
    """
    Filter and re-rank jobs for a preference profile.

    Returns new AgentJob records sorted by agent score, highest first; jobs
    with equal scores keep their incoming order.
    """
    include_keywords = normalize_keywords(preferences.include_keywords)
    exclude_keywords = normalize_keywords(preferences.exclude_keywords)

    scored = []
    for job in jobs:
        score, include_matches, exclude_matches, boost = _score_job(
            job, include_keywords, exclude_keywords, preferences.prefer_remote
        )
        if exclude_matches:
            continue
        if include_keywords and not include_matches:
            continue
        scored.append((score, job, include_matches, boost))

    scored.sort(key=lambda entry: entry[0], reverse=True)

    return [
        AgentJob(
            **job.model_dump(),
            scraped=job.scraped,
            agent_score=score,
            agent_matches=include_matches,
            agent_remote_boost=boost,
        )
        for score, job, include_matches, boost in scored
    ]
