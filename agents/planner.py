"""
Planner Agent — validates the provider list and fans out one fetch per source.
This is a deterministic agent (no LLM needed).
"""

from langgraph.types import Send
from models.state import PipelineState


def planner_agent(state: PipelineState) -> dict:
    """
    Announce the fetch plan. The providers themselves are dispatched by
    dispatch_sources so that every fetch runs concurrently.
    """
    sources = state.get("sources", [])

    if not sources:
        return {
            "errors": ["No job sources provided. Check config/sources.yaml"],
        }

    print(f"[Planner] Fetching {len(sources)} sources in parallel:")
    for source in sources:
        print(f"  - {source.name} ({source.type}): {', '.join(source.urls)}")

    return {"errors": []}


def dispatch_sources(state: PipelineState):
    """
    Conditional edge: one Send per source to the fetch node, or straight to
    dedup when there is nothing to fetch.
    """
    sources = state.get("sources", [])
    if not sources:
        return "dedup"
    return [Send("fetch", {"current_source": source}) for source in sources]
