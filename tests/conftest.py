"""Shared fakes and fixtures for the audit tests."""

from typing import Dict, List, Optional

import pytest

from repo_auditor.domain.providers import ClassificationProvider, SourceProvider
from repo_auditor.domain.repository import ClassificationResult, Repository


class FakeSourceProvider(SourceProvider):
    """In-memory source provider recording every call."""

    def __init__(self, repos: List[Repository], readmes: Optional[Dict[str, str]] = None, failing_readme: Optional[str] = None, error: Optional[Exception] = None):
        self.repos = repos
        self.readmes = readmes or {}
        self.failing_readme = failing_readme
        self.error = error
        self.calls = []
        self.updates = []

    def get_repositories(self):
        self.calls.append(("get_repositories",))
        return list(self.repos)

    def get_file_content(self, repo_name, path):
        self.calls.append(("get_file_content", repo_name, path))
        if repo_name == self.failing_readme:
            raise self.error
        return self.readmes.get(repo_name)

    def update_repo_description(self, repo_name, description):
        self.calls.append(("update_repo_description", repo_name, description))
        self.updates.append((repo_name, description))


class FakeClassifier(ClassificationProvider):
    """Classifier returning preset results keyed by repository name."""

    def __init__(self, results: Dict[str, ClassificationResult]):
        self.results = results
        self.calls = []

    def analyze(self, repo, readme):
        self.calls.append((repo.name, readme))
        return self.results.get(repo.name, ClassificationResult())


def make_repo(name: str, description: Optional[str] = None, updated_at: Optional[str] = "2023-01-01T00:00:00Z", created_at: Optional[str] = "2022-01-01T00:00:00Z") -> Repository:
    return Repository(
        name=name,
        url=f"https://github.com/testuser/{name}",
        description=description,
        updated_at=updated_at,
        created_at=created_at,
        default_branch="main",
    )


@pytest.fixture
def repo_factory():
    return make_repo
