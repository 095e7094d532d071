"""
Source configuration models — one entry per provider in config/sources.yaml.
"""

from typing import Literal, Optional
from pydantic import BaseModel, Field

from models.job import JobSource


class SelectorRules(BaseModel):
    """CSS selectors used for structured extraction from a career page."""

    item: str = Field(description="Selector matching one element per posting")
    title: Optional[str] = Field(default=None, description="Title selector inside the item")
    link: Optional[str] = Field(default=None, description="Link selector inside the item")
    location: Optional[str] = Field(default=None, description="Location selector inside the item")


class SourceConfig(BaseModel):
    """A job provider queried on every pipeline run."""

    name: JobSource
    type: Literal["api", "html"] = "html"
    urls: list[str] = Field(min_length=1)
    parser: Optional[Literal["remotive", "arbeitnow"]] = Field(
        default=None, description="Envelope parser for api sources"
    )
    pages: int = Field(default=1, ge=1, description="Pages requested from paginated APIs")
    limit: Optional[int] = Field(default=None, ge=0, description="Max postings kept for html sources")
    selectors: Optional[SelectorRules] = None
