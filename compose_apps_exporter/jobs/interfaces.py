"""Typed interfaces for job-layer metrics collection responsibilities."""

from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class MetricsCollectionResult:
    """Result contract for one metrics collection pass.

    Attributes:
        document: Rendered exposition document.
        app_count: Number of compose definition paths processed.
        line_count: Number of metric sample lines, summary gauge included.
    """

    document: str
    app_count: int
    line_count: int


class MetricsCollectorPort(Protocol):
    """Port definition for producing one scrape's metrics document."""

    def job_collect_metrics(self) -> MetricsCollectionResult:
        """Run one full derivation pass over every located compose application.

        Returns:
            MetricsCollectionResult: Rendered document and pass counters.

        Raises:
            MetricsDerivationError: Raised when any application fails derivation.
        """
