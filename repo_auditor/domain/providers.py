"""Capability interfaces for the external collaborators of an audit run."""

from abc import ABC, abstractmethod
from typing import List, Optional

from repo_auditor.domain.repository import ClassificationResult, Repository


class SourceProvider(ABC):
    """Source-hosting provider holding the audited repositories."""

    @abstractmethod
    def get_repositories(self) -> List[Repository]:
        """Fetch all repositories for the configured account."""

    @abstractmethod
    def get_file_content(self, repo_name: str, path: str) -> Optional[str]:
        """
        Fetch the text of a file from a repository.
        
        Returns:
            File content, or None if the file does not exist
        """

    @abstractmethod
    def update_repo_description(self, repo_name: str, description: str) -> None:
        """Replace the description of a repository."""


class ClassificationProvider(ABC):
    """Provider that classifies a repository and recommends keep/delete."""

    @abstractmethod
    def analyze(self, repo: Repository, readme: str) -> ClassificationResult:
        """
        Classify a repository.
        
        Implementations must not raise: every failure path yields a
        normalized ClassificationResult.
        """


class ReportSink(ABC):
    """Durable storage for the generated report."""

    @abstractmethod
    def write(self, stem: str, content: str) -> str:
        """Persist report content under a name derived from stem and return its path."""
