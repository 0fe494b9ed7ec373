"""OpenAI chat-completions adapter implementing the classification provider."""

import json
import logging
from typing import Any, Optional

from openai import OpenAI

from repo_auditor.domain.providers import ClassificationProvider
from repo_auditor.domain.repository import ClassificationResult, Repository, fallback_result

logger = logging.getLogger(__name__)


SYSTEM_PROMPT = (
    "You are a GitHub repository analyzer. "
    "Analyze repositories and provide categorization and recommendations."
)

USER_PROMPT_TEMPLATE = """Analyze this GitHub repository:
Name: {name}
Description: {description}
README: {readme}

Please categorize this repository and suggest appropriate tags.
Also determine if this repository should be kept or can be deleted.

Return the analysis in this JSON format:
{{
  "category": "[category]",
  "tags": ["tag1", "tag2"],
  "shouldKeep": true/false,
  "reason": "[reason for keeping/deleting]"
}}"""


def build_messages(repo: Repository, readme: str) -> list:
    """Build the chat messages sent for a single repository."""
    return [
        {"role": "system", "content": SYSTEM_PROMPT},
        {
            "role": "user",
            "content": USER_PROMPT_TEMPLATE.format(
                name=repo.name,
                description=repo.description or "",
                readme=readme,
            ),
        },
    ]


def normalize_envelope(parsed: dict) -> ClassificationResult:
    """
    Coerce a parsed classification envelope into a ClassificationResult.

    Fields with the wrong type fall back to their defaults. Tag items are
    rendered as text and null items are dropped. shouldKeep is
    only False when the model answered exactly false.
    """
    category = parsed.get("category")
    tags = parsed.get("tags")
    reason = parsed.get("reason")

    return ClassificationResult(
        category=category if isinstance(category, str) else "Uncategorized",
        tags=[str(tag) for tag in tags if tag is not None] if isinstance(tags, list) else ["needs-review"],
        should_keep=parsed.get("shouldKeep") is not False,
        reason=reason if isinstance(reason, str) else "No reason provided",
    )


class OpenAIClassifier(ClassificationProvider):
    """Classifies repositories with an OpenAI chat model."""

    def __init__(self, model: str, api_key: Optional[str] = None, client: Optional[Any] = None):
        """
        Initialize the classifier.

        Args:
            model: Chat model identifier
            api_key: OpenAI API key, used when no client is given
            client: Pre-built OpenAI client (useful for tests)
        """
        self.model = model
        self.client = client if client is not None else OpenAI(api_key=api_key)

    def _complete(self, repo: Repository, readme: str) -> Optional[str]:
        response = self.client.chat.completions.create(
            model=self.model,
            messages=build_messages(repo, readme),
        )
        if not response.choices:
            return None
        return response.choices[0].message.content

    def analyze(self, repo: Repository, readme: str) -> ClassificationResult:
        """
        Classify a repository from its metadata and README.

        Never raises: backend failures, empty completions and unparseable
        payloads all yield the fallback result.
        """
        try:
            content = self._complete(repo, readme)
        except Exception as e:
            logger.error(f"Failed to analyze repository {repo.name}: {e}")
            return fallback_result()

        if not content:
            logger.error(f"Failed to analyze repository {repo.name}: no content in OpenAI response")
            return fallback_result()

        try:
            parsed = json.loads(content)
        except (json.JSONDecodeError, TypeError) as e:
            logger.error(f"Failed to analyze repository {repo.name}: unparseable response: {e}")
            return fallback_result()

        if not isinstance(parsed, dict):
            logger.error(f"Failed to analyze repository {repo.name}: response is not a JSON object")
            return fallback_result()

        return normalize_envelope(parsed)
