"""
LangGraph Workflow — defines the pipeline graph with state transitions.

Graph structure:
    planner → fetch (one task per source, in parallel) → dedup → ranker

The planner fans out a Send per source; LangGraph runs the fetch tasks
concurrently and only moves on to dedup once every task has settled.
"""

from langgraph.graph import StateGraph, END
from models.job import Job
from models.source import SourceConfig
from models.state import PipelineState
from agents.planner import planner_agent, dispatch_sources
from agents.scraper import scraper_agent
from agents.dedup import dedup_agent
from agents.ranker import ranker_agent
from config.settings import settings
from tools.file_handler import load_sources


def build_workflow() -> StateGraph:
    """
    Build and compile the LangGraph workflow.

    Returns:
        Compiled StateGraph ready to invoke.
    """
    workflow = StateGraph(PipelineState)

    workflow.add_node("planner", planner_agent)
    workflow.add_node("fetch", scraper_agent)
    workflow.add_node("dedup", dedup_agent)
    workflow.add_node("ranker", ranker_agent)

    workflow.set_entry_point("planner")

    # Planner → fetch × N (or dedup when there are no sources)
    workflow.add_conditional_edges("planner", dispatch_sources, ["fetch", "dedup"])

    # All fetch tasks → Dedup → Ranker → END
    workflow.add_edge("fetch", "dedup")
    workflow.add_edge("dedup", "ranker")
    workflow.add_edge("ranker", END)

    return workflow.compile()


# Pre-built graph instance
graph = build_workflow()


def run_pipeline(sources: list[SourceConfig] = None) -> tuple[list[Job], list[str]]:
    """
    Run one aggregation cycle and return the ranked jobs plus recovered errors.

    Never raises: an unexpected failure yields an empty job list.
    """
    try:
        if sources is None:
            sources = load_sources(settings.sources_path)

        initial_state = {
            "sources": sources,
            "collected_jobs": [],
            "unique_jobs": [],
            "ranked_jobs": [],
            "errors": [],
        }
        result = graph.invoke(initial_state)
        return result.get("ranked_jobs", []), result.get("errors", [])

    except Exception as e:
        print(f"[Workflow] ❌ Failed to load jobs: {e}")
        return [], [f"Pipeline failed: {e}"]


def get_jobs(sources: list[SourceConfig] = None) -> list[Job]:
    """The current aggregated, ranked job collection."""
    jobs, _ = run_pipeline(sources)
    return jobs
