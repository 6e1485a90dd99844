"""
Base classes for upstream collaborators.

Report sources feed the reaction corpus; extractors turn transcript text
into medical entities. Both are substitutable so the pipeline can run
offline.
"""

from abc import ABC, abstractmethod

from ae_triage.models import AdverseEventReport, MedicalEntity


class BaseReportSource(ABC):
    """Base class for adverse event report sources."""

    source_key: str

    @abstractmethod
    def fetch(self, limit: int) -> list[AdverseEventReport]:
        """
        Fetch up to ``limit`` adverse event reports.

        Raises:
            UpstreamCorpusError: If the feed cannot be read
        """
        pass


class BaseExtractor(ABC):
    """Base class for medical entity extractors."""

    source_key: str

    @abstractmethod
    def extract(self, text: str) -> list[MedicalEntity]:
        """Extract medical entities from free text."""
        pass
