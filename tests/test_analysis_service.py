"""Tests for the repository analysis orchestration."""

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from conftest import FakeClassifier, FakeSourceProvider, make_repo
from repo_auditor.application.analysis_service import AnalysisService, compose_description
from repo_auditor.domain.repository import ClassificationResult, DeletionCandidate
from repo_auditor.infrastructure.github_client import GitHubAPIError
from repo_auditor.infrastructure.openai_classifier import OpenAIClassifier


def keep(category="Dev", tags=None, reason="useful"):
    return ClassificationResult(category=category, tags=["js"] if tags is None else tags, should_keep=True, reason=reason)


def delete(reason):
    return ClassificationResult(category="Misc", tags=["old"], should_keep=False, reason=reason)


def test_empty_listing_makes_no_further_calls():
    source = FakeSourceProvider([])
    classifier = FakeClassifier({})

    result = AnalysisService(source, classifier).analyze_repositories()

    assert result == []
    assert source.calls == [("get_repositories",)]
    assert classifier.calls == []


def test_keep_and_delete_end_to_end():
    repo1 = make_repo("repo1", description="My project")
    repo2 = make_repo("repo2")
    source = FakeSourceProvider([repo1, repo2])
    classifier = FakeClassifier({"repo1": keep(), "repo2": delete("stale")})

    result = AnalysisService(source, classifier).analyze_repositories()

    assert source.updates == [("repo1", "My project | Category: Dev | Tags: js")]
    assert result == [DeletionCandidate(repo=repo2, reason="stale")]


def test_missing_description_and_multiple_tags():
    repo = make_repo("tool")
    source = FakeSourceProvider([repo])
    classifier = FakeClassifier({"tool": keep(category="CLI", tags=["python", "cli", "automation"])})

    AnalysisService(source, classifier).analyze_repositories()

    assert source.updates == [("tool", " | Category: CLI | Tags: python, cli, automation")]


def test_empty_tag_list_leaves_trailing_tags_label():
    repo = make_repo("bare", description="d")
    assert compose_description(repo, keep(tags=[])) == "d | Category: Dev | Tags: "


def test_deletion_candidates_preserve_listing_order():
    repos = [make_repo(f"repo{i}") for i in range(6)]
    results = {
        "repo0": delete("r0"),
        "repo1": keep(),
        "repo2": delete("r2"),
        "repo3": keep(),
        "repo4": keep(),
        "repo5": delete("r5"),
    }
    source = FakeSourceProvider(repos)

    result = AnalysisService(source, FakeClassifier(results)).analyze_repositories()

    assert [c.repo.name for c in result] == ["repo0", "repo2", "repo5"]
    assert [c.reason for c in result] == ["r0", "r2", "r5"]
    assert [name for name, _ in source.updates] == ["repo1", "repo3", "repo4"]


def test_each_repository_lands_in_exactly_one_outcome():
    repos = [make_repo("a"), make_repo("b"), make_repo("c")]
    source = FakeSourceProvider(repos)
    classifier = FakeClassifier({"a": keep(), "b": delete("x"), "c": keep()})

    result = AnalysisService(source, classifier).analyze_repositories()

    updated = {name for name, _ in source.updates}
    deleted = {c.repo.name for c in result}
    assert updated.isdisjoint(deleted)
    assert updated | deleted == {"a", "b", "c"}
    assert [name for name, _ in classifier.calls] == ["a", "b", "c"]


def test_readme_is_passed_verbatim_and_missing_readme_is_empty():
    long_readme = "# Title\n" + "x" * 50000
    source = FakeSourceProvider([make_repo("with"), make_repo("without")], readmes={"with": long_readme})
    classifier = FakeClassifier({})

    AnalysisService(source, classifier).analyze_repositories()

    assert classifier.calls == [("with", long_readme), ("without", "")]
    assert ("get_file_content", "with", "README.md") in source.calls


def test_source_error_aborts_run():
    repos = [make_repo("first"), make_repo("broken"), make_repo("last")]
    source = FakeSourceProvider(repos, failing_readme="broken", error=GitHubAPIError(500, "boom"))
    classifier = FakeClassifier({})

    with pytest.raises(GitHubAPIError):
        AnalysisService(source, classifier).analyze_repositories()

    assert [name for name, _ in classifier.calls] == ["first"]
    assert [name for name, _ in source.updates] == ["first"]
    assert ("get_file_content", "last", "README.md") not in source.calls


def test_update_failure_aborts_run():
    class FailingUpdates(FakeSourceProvider):
        def update_repo_description(self, repo_name, description):
            raise GitHubAPIError(403, "forbidden")

    source = FailingUpdates([make_repo("a"), make_repo("b")])
    classifier = FakeClassifier({})

    with pytest.raises(GitHubAPIError):
        AnalysisService(source, classifier).analyze_repositories()

    assert [name for name, _ in classifier.calls] == ["a"]


def test_mixed_type_tags_from_model_do_not_abort_run():
    """Tags with numbers and nulls from the model still produce a description."""
    content = '{"category": "Dev", "tags": ["py", 3, null], "shouldKeep": true, "reason": "ok"}'
    client = Mock()
    client.chat.completions.create.return_value = SimpleNamespace(
        choices=[SimpleNamespace(message=SimpleNamespace(content=content))]
    )
    source = FakeSourceProvider([make_repo("a", description="x"), make_repo("b")])

    result = AnalysisService(source, OpenAIClassifier(model="gpt-test", client=client)).analyze_repositories()

    assert result == []
    assert source.updates == [
        ("a", "x | Category: Dev | Tags: py, 3"),
        ("b", " | Category: Dev | Tags: py, 3"),
    ]
