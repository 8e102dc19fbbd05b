"""ReportWriter Protocol — persists a finished Report."""

from pathlib import Path
from typing import Protocol

from memorybench.metrics.domain.report import Report


class ReportWriter(Protocol):
    def write(self, report: Report) -> Path:
        """Persist report and return where it was written."""
        ...
