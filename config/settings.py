"""
Configuration settings for the Jobfinder pipeline.
Loads values from .env file and provides typed access.
"""

import os
from dataclasses import dataclass, field
from dotenv import load_dotenv

# Determine project root
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
env_path = os.path.join(project_root, ".env")
load_dotenv(env_path)


@dataclass
class Settings:
    """Application settings loaded from environment variables."""

    # LLM ranking, heuristic only when no key is set
    openai_api_key: str = field(
        default_factory=lambda: os.getenv("OPENAI_API_KEY", "")
    )
    llm_base_url: str = field(
        default_factory=lambda: os.getenv("LLM_BASE_URL", "")
    )
    llm_model_name: str = field(
        default_factory=lambda: os.getenv("LLM_MODEL_NAME", "gpt-4o-mini")
    )
    llm_temperature: float = field(
        default_factory=lambda: float(os.getenv("LLM_TEMPERATURE", "0.2"))
    )
    llm_timeout: int = field(
        default_factory=lambda: int(os.getenv("LLM_TIMEOUT", "60"))
    )
    oracle_batch_size: int = field(
        default_factory=lambda: int(os.getenv("ORACLE_BATCH_SIZE", "50"))
    )

    # Fetching Configuration
    request_timeout: int = field(
        default_factory=lambda: int(os.getenv("REQUEST_TIMEOUT", "20"))
    )
    scrape_limit: int = field(
        default_factory=lambda: int(os.getenv("SCRAPE_LIMIT", "20"))
    )

    # Paths
    sources_path: str = field(
        default_factory=lambda: os.getenv(
            "SOURCES_PATH", os.path.join(project_root, "config", "sources.yaml")
        )
    )
    output_dir: str = field(
        default_factory=lambda: os.getenv("OUTPUT_DIR", "output")
    )

    # Serving
    cache_ttl_seconds: int = field(
        default_factory=lambda: int(os.getenv("CACHE_TTL_SECONDS", "3600"))
    )

    # "all" keeps jobs carrying every active tag, "any" keeps jobs carrying at least one
    tag_filter_mode: str = field(
        default_factory=lambda: os.getenv("TAG_FILTER_MODE", "all").lower()
    )

    @property
    def oracle_enabled(self) -> bool:
        return bool(self.openai_api_key.strip())


# Singleton instance
settings = Settings()
