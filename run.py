"""
Jobfinder — job aggregator for Innsbruck/Tirol and remote jobs.
CLI entry point for running the aggregation pipeline or serving the API.
"""

import argparse
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from config.settings import settings
from tools.file_handler import load_sources, save_to_json, generate_summary
from graph.workflow import run_pipeline
from agents.query_filter import filter_jobs, TAG_MODES
from agents.preference_filter import parse_keywords, rank_jobs_for_agent
from models.job import ALL_TAGS
from models.preferences import AgentPreferences


def parse_args(argv: list[str] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Jobfinder — aggregate, tag and rank jobs for Innsbruck/Tirol and remote",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python run.py
  python run.py --tags quereinsteiger home-office --tag-mode any
  python run.py --include "quereinsteiger, assistenz" --exclude "vertrieb, call center"
  python run.py --serve --port 8000
        """,
    )

    parser.add_argument(
        "--config",
        type=str,
        default=settings.sources_path,
        help="Path to sources YAML config (default: config/sources.yaml)",
    )
    parser.add_argument(
        "--output-dir",
        type=str,
        default=None,
        help=f"Output directory for results (default: {settings.output_dir})",
    )
    parser.add_argument(
        "--tags",
        nargs="*",
        default=[],
        choices=ALL_TAGS,
        help="Only show jobs with these tags",
    )
    parser.add_argument(
        "--tag-mode",
        choices=TAG_MODES,
        default=None,
        help=f"'all' requires every tag, 'any' at least one (default: {settings.tag_filter_mode})",
    )
    parser.add_argument(
        "--include",
        type=str,
        default="",
        help="Comma-separated keywords a job must match (enables the preference agent)",
    )
    parser.add_argument(
        "--exclude",
        type=str,
        default="",
        help="Comma-separated keywords that remove a job (enables the preference agent)",
    )
    parser.add_argument(
        "--prefer-remote",
        choices=["any", "remote", "onsite"],
        default="any",
        help="Boost remote or onsite jobs (enables the preference agent)",
    )
    parser.add_argument(
        "--serve",
        action="store_true",
        help="Serve GET /api/jobs instead of running once",
    )
    parser.add_argument("--host", type=str, default="127.0.0.1")
    parser.add_argument("--port", type=int, default=8000)

    return parser.parse_args(argv)


def main(argv: list[str] = None):
    """Main entry point for the jobfinder."""
    args = parse_args(argv)

    if args.output_dir:
        settings.output_dir = args.output_dir

    if args.serve:
        import uvicorn

        settings.sources_path = args.config
        uvicorn.run("api.server:app", host=args.host, port=args.port)
        return

    if not os.path.exists(args.config):
        print(f"❌ Config file not found: {args.config}")
        sys.exit(1)

    sources = load_sources(args.config)
    if not sources:
        print("❌ No job sources found in config file.")
        sys.exit(1)

    tag_mode = args.tag_mode or settings.tag_filter_mode

    print("=" * 60)
    print("  🔍 Jobfinder — Innsbruck/Tirol & Remote")
    print("=" * 60)
    print(f"  Sources: {len(sources)}")
    print(f"  Ranking: {'LLM (' + settings.llm_model_name + ')' if settings.oracle_enabled else 'heuristic'}")
    print(f"  Output:  {settings.output_dir}/")
    print("=" * 60)
    print()

    try:
        ranked_jobs, errors = run_pipeline(sources)
    except KeyboardInterrupt:
        print("\n\n⛔ Interrupted by user.")
        sys.exit(1)

    jobs = filter_jobs(ranked_jobs, args.tags, tag_mode)

    preferences = AgentPreferences(
        include_keywords=parse_keywords(args.include),
        exclude_keywords=parse_keywords(args.exclude),
        prefer_remote=args.prefer_remote,
    )
    agent_enabled = (
        preferences.include_keywords
        or preferences.exclude_keywords
        or preferences.prefer_remote != "any"
    )
    if agent_enabled:
        jobs = rank_jobs_for_agent(jobs, preferences)

    print(f"\n✅ Done! {len(ranked_jobs)} unique jobs, {len(jobs)} match the filters.")
    if errors:
        print(f"⚠️  {len(errors)} error(s):")
        for e in errors:
            print(f"   - {e}")

    print(f"\n{generate_summary(jobs)}")

    for job in jobs[:10]:
        score = getattr(job, "agent_score", None)
        if score is None:
            score = job.rank_score or 0
        print(f"   • [{score:g}] {job.title} — {job.company} ({job.location})")
    if len(jobs) > 10:
        print(f"   ... and {len(jobs) - 10} more")

    json_path = save_to_json(jobs, settings.output_dir)
    print(f"\n📄 JSON: {json_path}")


if __name__ == "__main__":
    main()
