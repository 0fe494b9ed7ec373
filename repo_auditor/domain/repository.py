"""Domain entities for repository auditing."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Repository:
    """Immutable repository snapshot as returned by the source provider."""
    
    name: str
    url: str
    description: Optional[str] = None
    updated_at: Optional[str] = None
    created_at: Optional[str] = None
    default_branch: Optional[str] = None


@dataclass(frozen=True)
class ClassificationResult:
    """Normalized classification envelope for a single repository."""
    
    category: str = "Uncategorized"
    tags: List[str] = field(default_factory=lambda: ["needs-review"])
    should_keep: bool = True
    reason: str = "No reason provided"


@dataclass(frozen=True)
class DeletionCandidate:
    """Repository recommended for removal, paired with the stated reason."""
    
    repo: Repository
    reason: str


def fallback_result() -> ClassificationResult:
    """Safe default used whenever a classification cannot be produced."""
    return ClassificationResult(
        category="Uncategorized",
        tags=["needs-review"],
        should_keep=True,
        reason="Analysis failed",
    )
