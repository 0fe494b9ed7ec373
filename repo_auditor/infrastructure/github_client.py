"""GitHub REST API client implementing the source provider interface."""

import base64
import binascii
import logging
from typing import List, Optional, Dict, Any

import requests

from repo_auditor.domain.providers import SourceProvider
from repo_auditor.domain.repository import Repository

logger = logging.getLogger(__name__)


class GitHubAPIError(Exception):
    """Raised when the GitHub API answers with a non-success status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"GitHub API error {status_code}: {message}")
        self.status_code = status_code


class AuthenticationError(GitHubAPIError):
    """Raised when GitHub rejects the access token."""
    pass


class GitHubRestClient(SourceProvider):
    """Client for the GitHub REST API scoped to a single user account."""

    API_ROOT = "https://api.github.com"
    WEB_ROOT = "https://github.com"
    TIMEOUT_SECONDS = 30

    def __init__(self, username: str, token: str, session: Optional[requests.Session] = None):
        """
        Initialize GitHub REST client.

        Args:
            username: Account whose repositories are audited
            token: GitHub personal access token
            session: Optional pre-built session (useful for tests)
        """
        self.username = username
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
        })

    def close(self):
        """Close the underlying HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def _request(self, method: str, path: str, **kwargs) -> requests.Response:
        """
        Send a request and map error statuses to exceptions.

        Args:
            method: HTTP method
            path: API path relative to the API root

        Returns:
            The successful response

        Raises:
            AuthenticationError: If the token is rejected
            GitHubAPIError: For any other non-2xx status
            requests.RequestException: If the request itself fails
        """
        response = self.session.request(
            method,
            f"{self.API_ROOT}{path}",
            timeout=self.TIMEOUT_SECONDS,
            **kwargs
        )

        if response.status_code == 401:
            raise AuthenticationError(401, "Authentication failed. Check your GitHub token.")
        if not 200 <= response.status_code < 300:
            raise GitHubAPIError(response.status_code, response.text)

        return response

    def _to_repository(self, node: Dict[str, Any]) -> Repository:
        name = node["name"]
        return Repository(
            name=name,
            url=node.get("html_url") or f"{self.WEB_ROOT}/{self.username}/{name}",
            description=node.get("description"),
            updated_at=node.get("updated_at"),
            created_at=node.get("created_at"),
            default_branch=node.get("default_branch"),
        )

    def get_repositories(self) -> List[Repository]:
        """
        Fetch the user's repositories, most recently updated first.

        Only the first page returned by the API is read.
        """
        response = self._request(
            "GET",
            f"/users/{self.username}/repos",
            params={"sort": "updated", "direction": "desc"},
        )
        repositories = [self._to_repository(node) for node in response.json()]
        logger.debug(f"Fetched {len(repositories)} repositories for {self.username}")
        return repositories

    def get_file_content(self, repo_name: str, path: str) -> Optional[str]:
        """
        Fetch and decode a file from a repository.

        Args:
            repo_name: Repository name
            path: File path inside the repository

        Returns:
            Decoded file text, or None if the path does not exist or is not a file
        """
        try:
            response = self._request("GET", f"/repos/{self.username}/{repo_name}/contents/{path}")
        except (GitHubAPIError, requests.RequestException) as e:
            if isinstance(e, GitHubAPIError) and e.status_code == 404:
                logger.info(f"No {path} found for {repo_name}")
                return None
            logger.error(f"Error fetching {path} for {repo_name}: {e}")
            raise

        data = response.json()
        if not isinstance(data, dict) or data.get("type") != "file" or not data.get("content"):
            return None

        try:
            return base64.b64decode(data["content"]).decode("utf-8", errors="replace")
        except (binascii.Error, ValueError) as e:
            logger.warning(f"Could not decode {path} for {repo_name}: {e}")
            return None

    def update_repo_description(self, repo_name: str, description: str) -> None:
        """Replace the description of one of the user's repositories."""
        try:
            self._request(
                "PATCH",
                f"/repos/{self.username}/{repo_name}",
                json={"description": description},
            )
        except (GitHubAPIError, requests.RequestException) as e:
            logger.error(f"Failed to update repository {repo_name}: {e}")
            raise
