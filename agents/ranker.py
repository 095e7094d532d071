"""
Ranker Agent — assigns a relevance score to every job.

Heuristic scoring is always available. When an OpenAI key is configured the
first batch of jobs is scored by the LLM in a single call; any failure falls
back to the heuristic for the whole batch.
"""

import json
import re
from dataclasses import dataclass, field
from typing import Union

from langchain_openai import ChatOpenAI
from langchain_core.messages import SystemMessage, HumanMessage
from config.settings import Settings, settings as default_settings
from models.job import Job
from models.state import PipelineState


RANKER_SYSTEM_PROMPT = (
    "Du bist ein Job-Ranking-Assistent. Bewerte Jobs für Quereinsteiger in "
    "Innsbruck oder Remote. Gib nur JSON zurück."
)

RANKER_USER_PROMPT = """Bewerte jeden Job von 0-100 (höher ist besser). Gib eine JSON-Liste zurück wie [{{"id":"...","score":87}}].

Jobs:
{jobs_json}"""

# Points per tag on top of the flat per-tag bonus
TAG_BONUS = {
    "quereinsteiger": 10,
    "ohne-vorkenntnisse": 8,
    "ohne-kundenkontakt": 6,
    "beauty": 4,
}


@dataclass
class ParsedScores:
    scores: dict[str, float] = field(default_factory=dict)


@dataclass
class ParseFailure:
    reason: str


ScoreParseResult = Union[ParsedScores, ParseFailure]


def heuristic_score(job: Job) -> float:
    """Deterministic score from the job's own fields."""
    score = 15 if job.is_remote else 0
    score += 5 * len(job.tags)
    for tag, bonus in TAG_BONUS.items():
        if tag in job.tags:
            score += bonus
    return score


def apply_heuristic_ranking(jobs: list[Job]) -> list[Job]:
    return [job.model_copy(update={"rank_score": heuristic_score(job)}) for job in jobs]


def parse_scores(response_text: str) -> ScoreParseResult:
    """
    Parse the LLM response into an id → score mapping.
    Handles common LLM output quirks (markdown code blocks, extra text, etc.).
    """
    text = (response_text or "").strip()

    # Remove markdown code blocks if present
    if "```json" in text:
        text = text.split("```json")[-1].split("```")[0].strip()
    elif "```" in text:
        text = text.split("```")[1].split("```")[0].strip()

    match = re.search(r"\[.*\]", text, re.DOTALL)
    if match:
        text = match.group(0)

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return ParseFailure(f"invalid JSON: {e}")

    if not isinstance(data, list):
        return ParseFailure(f"expected a JSON array, got {type(data).__name__}")

    scores: dict[str, float] = {}
    for item in data:
        if not isinstance(item, dict):
            continue
        score = item.get("score")
        if item.get("id") is None or isinstance(score, bool) or not isinstance(score, (int, float)):
            continue
        scores[str(item["id"])] = float(score)

    return ParsedScores(scores)


def _oracle_input(jobs: list[Job]) -> list[dict]:
    return [
        {
            "id": job.id,
            "title": job.title,
            "company": job.company,
            "location": job.location,
            "summary": job.summary,
            "tags": list(job.tags),
        }
        for job in jobs
    ]


def _build_llm(settings: Settings) -> ChatOpenAI:
    kwargs = {
        "api_key": settings.openai_api_key,
        "model": settings.llm_model_name,
        "temperature": settings.llm_temperature,
        "timeout": settings.llm_timeout,
        "max_retries": 0,
    }
    if settings.llm_base_url:
        kwargs["base_url"] = settings.llm_base_url
    return ChatOpenAI(**kwargs)


def rank_jobs(jobs: list[Job], settings: Settings = None) -> list[Job]:
    """
    Assign rank_score to every job.

    Without an API key, or when the LLM call or its parsing fails, every job
    gets its heuristic score. Jobs the LLM did not score fall back individually.
    """
    settings = settings or default_settings

    if not settings.oracle_enabled or not jobs:
        return apply_heuristic_ranking(jobs)

    batch = jobs[: settings.oracle_batch_size]
    messages = [
        SystemMessage(content=RANKER_SYSTEM_PROMPT),
        HumanMessage(
            content=RANKER_USER_PROMPT.format(
                jobs_json=json.dumps(_oracle_input(batch), ensure_ascii=False)
            )
        ),
    ]

    print(f"[Ranker] Sending {len(batch)} jobs to {settings.llm_model_name} for scoring...")

    try:
        response = _build_llm(settings).invoke(messages)
        result = parse_scores(str(response.content))
    except Exception as e:
        print(f"[Ranker] LLM scoring failed: {e}. Using heuristic ranking.")
        return apply_heuristic_ranking(jobs)

    if isinstance(result, ParseFailure):
        print(f"[Ranker] Could not parse LLM scores ({result.reason}). Using heuristic ranking.")
        return apply_heuristic_ranking(jobs)

    print(f"[Ranker] LLM scored {len(result.scores)} jobs")
    return [
        job.model_copy(update={"rank_score": result.scores.get(job.id, heuristic_score(job))})
        for job in jobs
    ]


def ranker_agent(state: PipelineState) -> dict:
    """Rank the deduplicated jobs."""
    unique_jobs = state.get("unique_jobs", [])
    return {"ranked_jobs": rank_jobs(unique_jobs)}
