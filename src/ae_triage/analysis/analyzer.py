"""
Risk analyzer: the public entry point of the triage pipeline.

    entities → normalize → (corpus snapshot → fuzzy match) + risk score → result

The analyzer holds configuration only; every call builds its own snapshot,
so one instance can serve concurrent requests.
"""

import logging
from collections.abc import Sequence

from ae_triage.analysis.corpus import ReactionCorpus
from ae_triage.analysis.matching import FuzzyMatcher, get_similarity
from ae_triage.analysis.normalize import normalize_entities
from ae_triage.analysis.risk import RiskScorer
from ae_triage.config import Settings, settings
from ae_triage.errors import InputError, UpstreamExtractionError
from ae_triage.models import AnalysisResult, Match, MedicalEntity, RiskAssessment
from ae_triage.sources.base import BaseExtractor, BaseReportSource
from ae_triage.sources.files import StaticReportSource

logger = logging.getLogger(__name__)


def assemble_result(
    patient_name: str,
    entities: Sequence[MedicalEntity],
    matches: Sequence[Match],
    risk: RiskAssessment,
) -> AnalysisResult:
    """Combine pipeline outputs into the response payload."""
    return AnalysisResult(
        patient_name=patient_name,
        extracted_entities=list(entities),
        risk_score=risk.score,
        risk_level=risk.level,
        high_risk_conditions=list(risk.high_risk_conditions),
        fda_matches=list(matches),
    )


class RiskAnalyzer:
    """
    Analyze extracted entities for adverse event risk.

    Args:
        source: Adverse event report source (empty static source if None)
        matcher: Fuzzy matcher, Levenshtein at threshold 0.2 by default
        scorer: Risk scorer, default high-risk vocabulary if None
        fetch_limit: Reports fetched per analysis
    """

    def __init__(
        self,
        source: BaseReportSource | None = None,
        matcher: FuzzyMatcher | None = None,
        scorer: RiskScorer | None = None,
        fetch_limit: int = 5,
    ):
        self.source = source if source is not None else StaticReportSource()
        self.matcher = matcher or FuzzyMatcher()
        self.scorer = scorer or RiskScorer()
        self.fetch_limit = fetch_limit

    @classmethod
    def from_settings(
        cls,
        config: Settings | None = None,
        source: BaseReportSource | None = None,
    ) -> "RiskAnalyzer":
        """Build an analyzer from settings, defaulting to the openFDA source."""
        from ae_triage.sources.openfda import OpenFDAEventSource

        config = config or settings
        return cls(
            source=source or OpenFDAEventSource.from_settings(config),
            matcher=FuzzyMatcher(
                similarity=get_similarity(config.similarity),
                threshold=config.match_threshold,
            ),
            scorer=RiskScorer.from_terms(config.high_risk_conditions),
            fetch_limit=config.fetch_limit,
        )

    def analyze(
        self,
        patient_name: str,
        entities: Sequence[MedicalEntity] | None,
    ) -> AnalysisResult:
        """
        Run the pipeline over extracted entities.

        Args:
            patient_name: Passed through to the result
            entities: Entities from the extractor; may be empty

        Returns:
            AnalysisResult

        Raises:
            InputError: If entities is None
        """
        if entities is None:
            raise InputError("No entities provided")

        normalized = normalize_entities(entities)
        risk = self.scorer.assess(normalized)

        matches: list[Match] = []
        if normalized:
            reports = ReactionCorpus(self.source, self.fetch_limit).snapshot()
            matches = self.matcher.match(normalized, reports)

        logger.info(
            "Analyzed %d entities for %s: score=%d level=%s matches=%d",
            len(normalized),
            patient_name or "<anonymous>",
            risk.score,
            risk.level.value,
            len(matches),
        )
        return assemble_result(patient_name, normalized, matches, risk)

    def analyze_transcript(
        self,
        patient_name: str,
        transcript: str | None,
        extractor: BaseExtractor,
    ) -> AnalysisResult:
        """
        Extract entities from a transcript and analyze them.

        Raises:
            InputError: If the transcript is missing or blank
            UpstreamExtractionError: If the extractor fails
        """
        if not transcript or not transcript.strip():
            raise InputError("No transcription provided")

        try:
            entities = extractor.extract(transcript)
        except Exception as e:
            raise UpstreamExtractionError(
                f"Entity extraction failed ({extractor.source_key}): {e}"
            ) from e

        return self.analyze(patient_name, entities)
