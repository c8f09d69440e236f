"""Configuration management for reddit-researcher"""

import os
import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional
from dotenv import load_dotenv

# Load environment variables
load_dotenv()

RC_FILENAME = ".reddit-researcherrc"

TARGET_SUBREDDITS = (
    "shopify",
    "ShopifyeCommerce",
    "reviewmyshopify",
    "ecommerce",
    "Entrepreneur",
    "smallbusiness",
    "dropship",
    "marketing",
)

APP_SUBREDDITS = ("shopify", "ecommerce")


@dataclass(frozen=True)
class ResearcherConfig:
    """Tuning knobs shared by the client, the rate limiter and the commands.

    All durations are in seconds.
    """
    user_agent: str = "shopify-app-factory-research/1.0"
    base_url: str = "https://www.reddit.com"
    request_timeout: float = 15.0
    max_attempts: int = 3
    backoff_base: float = 0.6
    backoff_jitter: float = 0.4
    rate_limit_delay: float = 2.0
    rate_limit_jitter: float = 0.5
    comment_depth: int = 2
    target_subreddits: tuple = TARGET_SUBREDDITS
    app_subreddits: tuple = APP_SUBREDDITS


# Environment variable -> (field, converter)
ENV_OVERRIDES = {
    "REDDIT_RESEARCHER_USER_AGENT": ("user_agent", str),
    "REDDIT_RESEARCHER_BASE_URL": ("base_url", str),
    "REDDIT_RESEARCHER_TIMEOUT": ("request_timeout", float),
    "REDDIT_RESEARCHER_MAX_ATTEMPTS": ("max_attempts", int),
    "REDDIT_RESEARCHER_RATE_LIMIT": ("rate_limit_delay", float),
}


def get_config_path() -> Path:
    """Get the configuration file path"""
    # Check for local config first
    local_config = Path(RC_FILENAME)
    if local_config.exists():
        return local_config

    # Then check home directory
    return Path.home() / RC_FILENAME


def _coerce(config_data: Dict[str, Any]) -> Dict[str, Any]:
    """Keep known fields only, turning lists into tuples"""
    known = {f.name for f in fields(ResearcherConfig)}
    values = {}
    for key, value in config_data.items():
        if key not in known:
            continue
        if isinstance(value, list):
            value = tuple(value)
        values[key] = value
    return values


def load_config(path: Optional[Path] = None) -> ResearcherConfig:
    """Load configuration from defaults, rc file and environment"""
    config = ResearcherConfig()

    # Load from config file if it exists
    config_path = path or get_config_path()
    if config_path.exists():
        try:
            with open(config_path, "r") as f:
                file_config = json.load(f)
            if isinstance(file_config, dict):
                config = replace(config, **_coerce(file_config))
        except (OSError, ValueError):
            pass  # Use defaults if config is invalid

    # Override with environment variables
    overrides = {}
    for env_var, (field_name, convert) in ENV_OVERRIDES.items():
        raw = os.getenv(env_var)
        if not raw:
            continue
        try:
            overrides[field_name] = convert(raw)
        except ValueError:
            continue

    if overrides:
        config = replace(config, **overrides)

    return config
