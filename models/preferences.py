"""
Agent preferences — the keyword/remote profile a user re-ranks results with.
"""

from typing import Literal
from pydantic import BaseModel, Field


RemotePreference = Literal["any", "remote", "onsite"]


class AgentPreferences(BaseModel):
    include_keywords: list[str] = Field(default_factory=list)
    exclude_keywords: list[str] = Field(default_factory=list)
    prefer_remote: RemotePreference = "any"
