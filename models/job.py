"""
Job data model — represents a single normalized job posting.
"""

from typing import Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator


JobTag = Literal[
    "quereinsteiger",
    "home-office",
    "ohne-vorkenntnisse",
    "ohne-kundenkontakt",
    "beauty",
]

ALL_TAGS: tuple[str, ...] = (
    "quereinsteiger",
    "home-office",
    "ohne-vorkenntnisse",
    "ohne-kundenkontakt",
    "beauty",
)

JobSource = Literal[
    "Karriere.at",
    "StepStone",
    "LinkedIn",
    "ÖH Jobbörse",
    "AMS",
    "Company",
    "Remotive",
    "Arbeitnow",
    "Jobs TT",
    "Tirolerjobs",
    "Willkommen Tirol",
    "Uni Innsbruck",
    "MCI Career Center",
    "Industrie Tirol",
    "Startup Tirol",
    "Tirol GV",
    "Innsbruck GV",
    "IKB",
    "Tirol Kliniken",
    "MetaJob",
    "Indeed",
]

# Labels and descriptions shown next to the tag filters
JOB_FILTERS = [
    {
        "id": "quereinsteiger",
        "label": "Quereinsteiger",
        "description": "Ideal für einen Neustart ohne klassische Ausbildung.",
    },
    {
        "id": "home-office",
        "label": "Home-Office",
        "description": "Flexible Jobs mit Remote-Anteil.",
    },
    {
        "id": "ohne-vorkenntnisse",
        "label": "Ohne Vorkenntnisse",
        "description": "Einstiegsrollen mit kurzer Einarbeitung.",
    },
    {
        "id": "ohne-kundenkontakt",
        "label": "Ohne Kundenkontakt",
        "description": "Fokus auf Backoffice oder interne Aufgaben.",
    },
    {
        "id": "beauty",
        "label": "Beautyjobs",
        "description": "Kosmetik, Studio, Wellness oder Beauty-Tech.",
    },
]


class Job(BaseModel):
    """A job posting in the canonical shape shared by every source."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(description="Unique within a result set, prefixed with the source")
    title: str = Field(description="Job title")
    company: str = Field(description="Company name")
    location: str = Field(default="", description="Location text, 'Remote' for remote jobs")
    is_remote: bool = Field(default=False, alias="isRemote")
    posted_at: str = Field(alias="postedAt", description="ISO-8601 posting date")
    source: JobSource = Field(description="Provider the posting came from")
    tags: list[JobTag] = Field(default_factory=list)
    url: str = Field(description="Absolute link to the original posting")
    summary: str = Field(default="", description="Plain-text excerpt, at most 200 characters")
    rank_score: Optional[float] = Field(default=None, alias="rankScore")

    # Scraped postings dedupe on title+url only; never serialized
    scraped: bool = Field(default=False, exclude=True)

    @field_validator("tags")
    @classmethod
    def _unique_tags(cls, tags: list[str]) -> list[str]:
        present = set(tags)
        return [tag for tag in ALL_TAGS if tag in present]

    def dedup_key(self) -> str:
        """Generate a deduplication key based on core fields."""
        if self.scraped:
            return f"{self.title}|{self.url}"
        return f"{self.title}|{self.company}|{self.url}"

    def to_api(self) -> dict:
        """Serialize with the camelCase field names used on the wire."""
        return self.model_dump(by_alias=True, exclude_none=True)


class AgentJob(Job):
    """A job re-scored against a user's keyword/remote preferences."""

    agent_score: float = Field(default=0, alias="agentScore")
    agent_matches: list[str] = Field(default_factory=list, alias="agentMatches")
    agent_remote_boost: int = Field(default=0, alias="agentRemoteBoost")
