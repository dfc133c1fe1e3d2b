"""
Configuration management for Salesbuddy.

Provides centralized configuration using Pydantic for validation and
environment variable support. Supports salesbuddy.yaml for per-project
keyword overrides (open-question hints, role keywords, competitor names).
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml
from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


# Project root directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Default data paths relative to project root
DB_PATH = PROJECT_ROOT / "data" / "db" / "salesbuddy.db"


# ---------------------------------------------------------------------------
#  Keyword lists
# ---------------------------------------------------------------------------

OPEN_QUESTION_HINTS = (
    "what",
    "how",
    "why",
    "tell me",
    "walk me",
    "help me understand",
    "can you share",
    "could you describe",
)

SELLER_ROLE_HINTS = (
    "sales rep",
    "account executive",
    "ae",
    "seller",
    "host",
    "presenter",
)

CUSTOMER_ROLE_HINTS = (
    "customer",
    "client",
    "prospect",
    "buyer",
    "cto",
    "cfo",
    "ceo",
    "vp",
    "director",
    "manager",
    "admin",
    "engineer",
    "analyst",
)

COMPETITOR_KEYWORDS = (
    "salesforce",
    "hubspot",
    "gong",
    "chorus",
    "outreach",
    "salesloft",
    "zoho",
    "pipedrive",
    "freshsales",
    "close",
    "copper",
    "zendesk sell",
    "microsoft dynamics",
    "oracle",
    "sap",
    "competitor",
    "alternative",
)


@dataclass(frozen=True)
class CoachingLexicon:
    """
    Immutable keyword lists consumed by the transcript heuristics.

    Attributes:
        open_question_hints: Phrases marking an exploratory seller question
        seller_role_hints: Label keywords identifying the seller side
        customer_role_hints: Label keywords identifying the buyer side
        competitor_keywords: Product names scanned for in fallback mode
    """

    open_question_hints: Tuple[str, ...] = OPEN_QUESTION_HINTS
    seller_role_hints: Tuple[str, ...] = SELLER_ROLE_HINTS
    customer_role_hints: Tuple[str, ...] = CUSTOMER_ROLE_HINTS
    competitor_keywords: Tuple[str, ...] = COMPETITOR_KEYWORDS


DEFAULT_LEXICON = CoachingLexicon()


def load_salesbuddy_yaml(search_dir: Optional[Path] = None) -> dict:
    """
    Load salesbuddy.yaml configuration file.

    Searches for salesbuddy.yaml starting from search_dir (or PROJECT_ROOT)
    and walking up to 3 parent directories.

    Args:
        search_dir: Directory to start searching from

    Returns:
        Dictionary with salesbuddy.yaml contents, or empty dict if not found
    """
    start = search_dir or PROJECT_ROOT
    for parent in [start] + list(start.parents)[:3]:
        candidate = parent / "salesbuddy.yaml"
        if candidate.exists():
            with open(candidate, "r", encoding="utf-8") as f:
                return yaml.safe_load(f) or {}
    return {}


def load_lexicon(yaml_config: Optional[Dict[str, Any]] = None) -> CoachingLexicon:
    """
    Build a CoachingLexicon from the ``coaching`` section of salesbuddy.yaml.

    Lists missing from the section keep their defaults. Entries are
    lower-cased and stripped; blank entries are dropped.

    Args:
        yaml_config: Parsed salesbuddy.yaml contents (loaded when omitted)

    Returns:
        CoachingLexicon with overrides applied
    """
    if yaml_config is None:
        yaml_config = load_salesbuddy_yaml()
    section = yaml_config.get("coaching") or {}

    overrides: Dict[str, Tuple[str, ...]] = {}
    for name in (
        "open_question_hints",
        "seller_role_hints",
        "customer_role_hints",
        "competitor_keywords",
    ):
        values = section.get(name)
        if values is None:
            continue
        if isinstance(values, str):
            values = [values]
        cleaned = tuple(str(v).strip().lower() for v in values if str(v).strip())
        overrides[name] = cleaned

    return CoachingLexicon(**overrides)


class Config(BaseSettings):
    """
    Application configuration with environment variable support.

    Configuration can be provided via:
    1. Environment variables (prefixed with SALESBUDDY_)
    2. .env file
    3. Default values

    The model credential is also read from ``OPENAI_API_KEY``.

    Example:
        export OPENAI_API_KEY="sk-..."
        export SALESBUDDY_STORE_BACKEND="memory"
    """

    model_config = SettingsConfigDict(
        env_prefix="SALESBUDDY_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        populate_by_name=True,
        extra="ignore",
    )

    # LLM settings for transcript analysis and coaching
    llm_api_key: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("SALESBUDDY_LLM_API_KEY", "OPENAI_API_KEY"),
        description="API key for the generative model; fallback analysis when unset"
    )
    llm_model: str = Field(
        default="gpt-4o-mini",
        description="Chat model used for analysis, rewriting and advice"
    )
    llm_base_url: str = Field(
        default="https://api.openai.com/v1",
        description="Base URL of an OpenAI-compatible chat completions API"
    )
    llm_max_tokens: int = Field(
        default=2500,
        description="Completion token budget for transcript analysis"
    )
    llm_timeout: Optional[float] = Field(
        default=None,
        description="Request timeout in seconds (None keeps the HTTP client default)"
    )

    # Storage
    store_backend: str = Field(
        default="sqlite",
        description="Analysis store backend (memory/sqlite)"
    )
    db_path: Path = Field(
        default=DB_PATH,
        description="Path to SQLite database file"
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        description="Root log level for the CLI"
    )

    @property
    def llm_enabled(self) -> bool:
        """True when a model credential is configured."""
        return bool(self.llm_api_key)

    def ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        if self.store_backend == "sqlite":
            self.db_path.parent.mkdir(parents=True, exist_ok=True)


def get_config() -> Config:
    """
    Get the application configuration instance.

    Merges settings from environment variables and the .env file.

    Returns:
        Config: Application configuration
    """
    config = Config()
    config.ensure_directories()
    return config
