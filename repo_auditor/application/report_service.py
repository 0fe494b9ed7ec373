"""Deletion report encoding and persistence."""

import logging
from typing import List, Optional

from repo_auditor.domain.providers import ReportSink
from repo_auditor.domain.repository import DeletionCandidate

logger = logging.getLogger(__name__)

EMPTY_REPORT = "No repositories recommended for deletion."
REPORT_HEADER = "Repository Name,URL,Reason,Last Updated,Created At"


def _field(value: Optional[str]) -> str:
    # Embedded quotes and commas are written verbatim.
    return f'"{"null" if value is None else value}"'


def encode_deletion_report(candidates: List[DeletionCandidate]) -> str:
    """
    Encode deletion candidates as CSV text.
    
    Every field is wrapped in double quotes without escaping, and missing
    timestamps render as ``null``. An empty list yields a fixed sentence
    instead of a header.
    """
    if not candidates:
        return EMPTY_REPORT
    
    rows = [
        ",".join([
            _field(candidate.repo.name),
            _field(candidate.repo.url),
            _field(candidate.reason),
            _field(candidate.repo.updated_at),
            _field(candidate.repo.created_at),
        ])
        for candidate in candidates
    ]
    return "\n".join([REPORT_HEADER] + rows)


class ReportService:
    """Service that encodes deletion candidates and hands the text to a sink."""
    
    def __init__(self, sink: ReportSink):
        self.sink = sink
    
    def generate_deletion_report(self, candidates: List[DeletionCandidate], stem: str) -> str:
        """
        Encode and persist a deletion report.
        
        Args:
            candidates: Deletion candidates in listing order
            stem: Base name of the report file
            
        Returns:
            Location reported by the sink
        """
        content = encode_deletion_report(candidates)
        path = self.sink.write(stem, content)
        logger.info(f"Deletion report with {len(candidates)} candidates written to {path}")
        return path
