#!/usr/bin/env python3
"""Script to audit a user's GitHub repositories and report deletion candidates."""

import logging
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from repo_auditor.infrastructure.config import load_config
from repo_auditor.infrastructure.github_client import GitHubRestClient
from repo_auditor.infrastructure.openai_classifier import OpenAIClassifier
from repo_auditor.infrastructure.report_writer import ReportFileWriter
from repo_auditor.application.analysis_service import AnalysisService
from repo_auditor.application.report_service import ReportService

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

logger = logging.getLogger(__name__)

REPORT_STEM = "repos-to-delete"


def main():
    """Classify every repository and write the deletion report."""
    try:
        config = load_config()

        with GitHubRestClient(config.github_username, config.github_token) as github_client:
            classifier = OpenAIClassifier(model=config.openai_model, api_key=config.openai_api_key)
            analysis = AnalysisService(github_client, classifier)

            candidates = analysis.analyze_repositories()

        report_service = ReportService(ReportFileWriter())
        report_service.generate_deletion_report(candidates, REPORT_STEM)

        if candidates:
            logger.info("Review the generated CSV file and manually delete repositories if desired.")
            logger.info("Repositories can be deleted at: https://github.com/settings/repositories")
        else:
            logger.info("No repositories were recommended for deletion.")

        logger.info("Analysis complete!")
        return 0

    except Exception as e:
        logger.error(f"Audit failed: {e}", exc_info=True)
        return 1


if __name__ == "__main__":
    sys.exit(main())
