"""File-system sink for generated audit reports."""

import logging
import os
from datetime import datetime, timezone
from typing import Callable, Optional

from repo_auditor.domain.providers import ReportSink

logger = logging.getLogger(__name__)


def report_timestamp(moment: datetime) -> str:
    """
    Render a filename-safe UTC timestamp, e.g. ``2023-01-01T12-00-00-000Z``.

    ISO-8601 with millisecond precision, with ':' and '.' replaced by '-'.
    """
    moment = moment.astimezone(timezone.utc)
    iso = moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"
    return iso.replace(":", "-").replace(".", "-")


class ReportFileWriter(ReportSink):
    """Writes each report to a new timestamp-qualified CSV file."""

    EXTENSION = ".csv"

    def __init__(
        self,
        output_dir: Optional[str] = None,
        clock: Callable[[], datetime] = lambda: datetime.now(timezone.utc)
    ):
        """
        Initialize report writer.

        Args:
            output_dir: Target directory. If None, uses the current working directory.
            clock: Source of the timestamp embedded in file names
        """
        self.output_dir = output_dir
        self.clock = clock

    def build_path(self, stem: str) -> str:
        directory = self.output_dir if self.output_dir is not None else os.getcwd()
        return os.path.join(directory, f"{stem}-{report_timestamp(self.clock())}{self.EXTENSION}")

    def write(self, stem: str, content: str) -> str:
        """
        Write report content to ``{stem}-{timestamp}.csv``.

        Returns:
            Path of the written file
        """
        report_path = self.build_path(stem)
        try:
            with open(report_path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.error(f"Error writing report to {report_path}: {e}")
            raise

        logger.info(f"Report saved to: {report_path}")
        return report_path
