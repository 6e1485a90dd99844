"""
Risk scoring from the high-risk condition vocabulary.

The score is a staircase over the number of high-risk hits, not a formula.
Reaction matches do not contribute.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from ae_triage.config import DEFAULT_HIGH_RISK_CONDITIONS
from ae_triage.models import MedicalEntity, RiskAssessment, RiskLevel

# hit count -> score; counts past the end use MAX_SCORE
SCORE_TABLE = (0, 30, 60, 70, 80)
MAX_SCORE = 100

# evaluated top-down, first band reached wins
LEVEL_BANDS = (
    (80, RiskLevel.HIGH),
    (60, RiskLevel.MODERATE),
    (30, RiskLevel.LOW),
)


def score_for_count(count: int) -> int:
    """Map the number of high-risk conditions to a score."""
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")
    if count < len(SCORE_TABLE):
        return SCORE_TABLE[count]
    return MAX_SCORE


def level_for_score(score: int) -> RiskLevel:
    """Map a score to its risk level."""
    for floor, level in LEVEL_BANDS:
        if score >= floor:
            return level
    return RiskLevel.MINIMAL


@dataclass
class RiskScorer:
    """Classify entities against a fixed vocabulary of urgent conditions."""
    vocabulary: frozenset[str] = field(
        default_factory=lambda: frozenset(DEFAULT_HIGH_RISK_CONDITIONS)
    )

    def __post_init__(self):
        self.vocabulary = frozenset(term.strip().lower() for term in self.vocabulary)

    @classmethod
    def from_terms(cls, terms: Iterable[str]) -> "RiskScorer":
        return cls(vocabulary=frozenset(terms))

    def high_risk_conditions(self, entities: Sequence[MedicalEntity]) -> list[str]:
        """Entity texts that exactly equal a vocabulary entry, in entity order."""
        return [e.text for e in entities if e.text in self.vocabulary]

    def assess(self, entities: Sequence[MedicalEntity]) -> RiskAssessment:
        """
        Score normalized entities.

        Args:
            entities: Output of normalize_entities

        Returns:
            RiskAssessment with matched conditions, score and level
        """
        conditions = self.high_risk_conditions(entities)
        score = score_for_count(len(conditions))
        return RiskAssessment(
            high_risk_conditions=conditions,
            score=score,
            level=level_for_score(score),
        )
