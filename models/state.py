"""
LangGraph Pipeline State — shared state that flows through the graph.
"""

from typing import TypedDict, Annotated
from models.job import Job
from models.source import SourceConfig


def merge_lists(left: list, right: list) -> list:
    """Reducer that merges two lists (used for accumulating results across parallel fetches)."""
    return left + right


class PipelineState(TypedDict):
    """
    Shared state for the LangGraph workflow.
    Each agent reads from and writes to this state.
    """

    # Input: providers to query
    sources: list[SourceConfig]

    # Fetch output: normalized jobs from every provider, merged after all fetches settle
    collected_jobs: Annotated[list[Job], merge_lists]

    # Dedup output
    unique_jobs: list[Job]

    # Ranker output
    ranked_jobs: list[Job]

    # Accumulated (recovered) errors during processing
    errors: Annotated[list[str], merge_lists]


class FetchTask(TypedDict):
    """Payload sent to the fetch node, one per provider."""

    current_source: SourceConfig
