"""Application service for auditing a user's repositories."""

import logging
from typing import List

from repo_auditor.domain.providers import ClassificationProvider, SourceProvider
from repo_auditor.domain.repository import ClassificationResult, DeletionCandidate, Repository

logger = logging.getLogger(__name__)


def compose_description(repo: Repository, result: ClassificationResult) -> str:
    """Build the annotated description written back for a kept repository."""
    return f"{repo.description or ''} | Category: {result.category} | Tags: {', '.join(result.tags)}"


class AnalysisService:
    """Service that classifies every repository and collects deletion candidates."""
    
    README_PATH = "README.md"
    
    def __init__(
        self,
        source_provider: SourceProvider,
        classification_provider: ClassificationProvider
    ):
        """
        Initialize analysis service.
        
        Args:
            source_provider: Provider holding the repositories
            classification_provider: Provider classifying each repository
        """
        self.source_provider = source_provider
        self.classification_provider = classification_provider
    
    def _fetch_readme(self, repo: Repository) -> str:
        return self.source_provider.get_file_content(repo.name, self.README_PATH) or ""
    
    def _classify(self, repo: Repository, readme: str) -> ClassificationResult:
        result = self.classification_provider.analyze(repo, readme)
        logger.info(f"  Category: {result.category}")
        logger.info(f"  Tags: {', '.join(result.tags)}")
        logger.info(f"  Recommendation: {'KEEP' if result.should_keep else 'DELETE'}")
        logger.info(f"  Reason: {result.reason}")
        return result
    
    def _apply(self, repo: Repository, result: ClassificationResult, candidates: List[DeletionCandidate]):
        if result.should_keep:
            self.source_provider.update_repo_description(repo.name, compose_description(repo, result))
        else:
            candidates.append(DeletionCandidate(repo=repo, reason=result.reason))
            logger.info("  Added to deletion candidates")
    
    def analyze_repositories(self) -> List[DeletionCandidate]:
        """
        Classify all repositories in listing order.
        
        Kept repositories get their description annotated with the category
        and tags; the others are returned as deletion candidates. Any error
        raised by a provider aborts the whole run.
        
        Returns:
            Deletion candidates in the order the repositories were listed
        """
        repos = self.source_provider.get_repositories()
        logger.info(f"Found {len(repos)} repositories")
        
        candidates: List[DeletionCandidate] = []
        for index, repo in enumerate(repos, start=1):
            logger.info(f"[{index}/{len(repos)}] Analyzing {repo.name}...")
            
            readme = self._fetch_readme(repo)
            result = self._classify(repo, readme)
            self._apply(repo, result, candidates)
        
        logger.info(f"Analysis completed. {len(candidates)} of {len(repos)} repositories recommended for deletion")
        return candidates
