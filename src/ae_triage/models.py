"""
Data model for the triage pipeline.

Plain dataclasses; ``to_dict`` renders the camelCase payload that API
clients consume.
"""

from dataclasses import dataclass, field
from enum import Enum


class EntityCategory(str, Enum):
    """Coarse entity categories emitted by medical NER services."""

    MEDICAL_CONDITION = "MEDICAL_CONDITION"
    MEDICATION = "MEDICATION"
    TEST_TREATMENT_PROCEDURE = "TEST_TREATMENT_PROCEDURE"
    ANATOMY = "ANATOMY"
    PROTECTED_HEALTH_INFORMATION = "PROTECTED_HEALTH_INFORMATION"
    TIME_EXPRESSION = "TIME_EXPRESSION"


class RiskLevel(str, Enum):
    """Tiered risk classification."""

    MINIMAL = "Minimal"
    LOW = "Low"
    MODERATE = "Moderate"
    HIGH = "High"


@dataclass(frozen=True)
class MedicalEntity:
    """A span of clinical text tagged with a category."""
    text: str
    category: EntityCategory

    def __post_init__(self):
        if not isinstance(self.category, EntityCategory):
            object.__setattr__(self, "category", EntityCategory(self.category))

    def to_dict(self) -> dict:
        return {"text": self.text, "category": self.category.value}


@dataclass(frozen=True)
class AdverseEventReport:
    """One adverse event report: a drug and its observed reactions."""
    report_id: str
    drug: str
    serious: bool
    reactions: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            "reportId": self.report_id,
            "drug": self.drug,
            "serious": self.serious,
            "reactions": list(self.reactions),
        }


@dataclass(frozen=True)
class Match:
    """An entity that approximately matched a reaction in one report."""
    symptom: str
    category: EntityCategory
    drug: str
    report_id: str
    serious: bool
    reaction: str
    distance: float = 0.0

    def to_dict(self) -> dict:
        return {
            "symptom": self.symptom,
            "category": self.category.value,
            "drug": self.drug,
            "reportId": self.report_id,
            "serious": self.serious,
            "reaction": self.reaction,
        }


@dataclass(frozen=True)
class RiskAssessment:
    """Risk derived from the high-risk vocabulary."""
    high_risk_conditions: list[str] = field(default_factory=list)
    score: int = 0
    level: RiskLevel = RiskLevel.MINIMAL


@dataclass(frozen=True)
class AnalysisResult:
    """Payload returned to the caller for one analysis request."""
    patient_name: str
    extracted_entities: list[MedicalEntity]
    risk_score: int
    risk_level: RiskLevel
    high_risk_conditions: list[str]
    fda_matches: list[Match]

    def to_dict(self) -> dict:
        return {
            "patientName": self.patient_name,
            "extractedEntities": [e.to_dict() for e in self.extracted_entities],
            "riskScore": self.risk_score,
            "riskLevel": self.risk_level.value,
            "highRiskConditions": list(self.high_risk_conditions),
            "fdaMatches": [m.to_dict() for m in self.fda_matches],
        }
