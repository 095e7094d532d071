"""
File Handler Tool — loads the source config, saves results to JSON.
"""

import json
import os
from datetime import datetime

import yaml

from models.job import Job
from models.source import SourceConfig


def load_sources(yaml_path: str) -> list[SourceConfig]:
    """
    Load job source configurations from a YAML file.

    Args:
        yaml_path: Path to the sources.yaml file.

    Returns:
        List of validated SourceConfig entries.

    Raises:
        pydantic.ValidationError: If an entry names an unknown provider or lacks URLs.
    """
    with open(yaml_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return [SourceConfig.model_validate(entry) for entry in data.get("sources", [])]


def save_to_json(jobs: list[Job], output_dir: str, filename: str = None) -> str:
    """
    Save job listings to a JSON file using the camelCase API field names.

    Args:
        jobs: Jobs to save.
        output_dir: Directory to save the file in.
        filename: Optional filename (auto-generated with timestamp if not provided).

    Returns:
        Path to the saved file.
    """
    os.makedirs(output_dir, exist_ok=True)

    if not filename:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"jobs_{timestamp}.json"

    filepath = os.path.join(output_dir, filename)

    with open(filepath, "w", encoding="utf-8") as f:
        json.dump([job.to_api() for job in jobs], f, indent=2, ensure_ascii=False)

    return filepath


def generate_summary(jobs: list[Job]) -> str:
    """
    Generate a human-readable summary of the collected jobs.

    Args:
        jobs: Jobs to summarize.

    Returns:
        Formatted summary string.
    """
    if not jobs:
        return "No jobs found."

    sources: dict[str, int] = {}
    tags: dict[str, int] = {}
    for job in jobs:
        sources[job.source] = sources.get(job.source, 0) + 1
        for tag in job.tags:
            tags[tag] = tags.get(tag, 0) + 1

    remote_count = sum(1 for job in jobs if job.is_remote)

    lines = [
        f"{'=' * 50}",
        f"  JOB SUMMARY",
        f"{'=' * 50}",
        f"  Total jobs: {len(jobs)} ({remote_count} remote)",
        f"",
        f"  By Source:",
    ]
    for source, count in sorted(sources.items(), key=lambda x: -x[1]):
        lines.append(f"    - {source}: {count}")

    lines.append(f"")
    lines.append(f"  By Tag:")
    for tag, count in sorted(tags.items(), key=lambda x: -x[1]):
        lines.append(f"    - {tag}: {count}")

    lines.append(f"{'=' * 50}")

    return "\n".join(lines)
