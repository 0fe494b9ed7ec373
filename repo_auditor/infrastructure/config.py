"""Process configuration loaded from the environment and an optional .env file."""

import logging
import os
from dataclasses import dataclass
from typing import Optional

from dotenv import find_dotenv, load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_OPENAI_MODEL = "gpt-3.5-turbo"
REQUIRED_VARIABLES = ("GITHUB_USERNAME", "GITHUB_TOKEN", "OPENAI_API_KEY")


class ConfigurationError(Exception):
    """Raised when a required setting is missing."""
    pass


@dataclass(frozen=True)
class AppConfig:
    """Settings needed to run an audit."""

    github_username: str
    github_token: str
    openai_api_key: str
    openai_model: str = DEFAULT_OPENAI_MODEL


def load_config(env_path: Optional[str] = None) -> AppConfig:
    """
    Load configuration from environment variables.

    Values from a .env file are loaded first without overriding variables
    that are already set.

    Args:
        env_path: Path to the .env file. If None, the nearest .env at or above the
            working directory is used.

    Raises:
        ConfigurationError: If any required variable is missing or empty
    """
    load_dotenv(dotenv_path=env_path or find_dotenv(usecwd=True), override=False)

    missing = [name for name in REQUIRED_VARIABLES if not os.getenv(name)]
    if missing:
        raise ConfigurationError(f"Missing required environment variables: {', '.join(missing)}")

    config = AppConfig(
        github_username=os.environ["GITHUB_USERNAME"],
        github_token=os.environ["GITHUB_TOKEN"],
        openai_api_key=os.environ["OPENAI_API_KEY"],
        openai_model=os.getenv("OPENAI_MODEL") or DEFAULT_OPENAI_MODEL,
    )
    logger.info(f"Using OpenAI model: {config.openai_model}")
    return config
