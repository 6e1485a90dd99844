"""
Fuzzy matching of entities against adverse event reactions.

Similarity strategies map a pair of strings to [0, 1]; the matcher works in
normalized distance (``1 - similarity``) and accepts a reaction when that
distance is at or below the threshold.
"""

from collections.abc import Callable, Sequence
from dataclasses import dataclass

from rapidfuzz import fuzz
from rapidfuzz.distance import Levenshtein

from ae_triage.errors import ConfigurationError
from ae_triage.models import AdverseEventReport, Match, MedicalEntity

Similarity = Callable[[str, str], float]


def levenshtein_similarity(a: str, b: str) -> float:
    """Edit-distance similarity normalized by the longer string."""
    return Levenshtein.normalized_similarity(a, b)


def token_sort_similarity(a: str, b: str) -> float:
    """Token-order-insensitive similarity ("pain chest" ~ "chest pain")."""
    return fuzz.token_sort_ratio(a, b) / 100.0


def exact_similarity(a: str, b: str) -> float:
    return 1.0 if a == b else 0.0


SIMILARITY_STRATEGIES: dict[str, Similarity] = {
    "levenshtein": levenshtein_similarity,
    "token_sort": token_sort_similarity,
    "exact": exact_similarity,
}


def get_similarity(name: str) -> Similarity:
    """
    Look up a similarity strategy by name.

    Raises:
        ConfigurationError: If the name is unknown
    """
    try:
        return SIMILARITY_STRATEGIES[name]
    except KeyError:
        known = ", ".join(sorted(SIMILARITY_STRATEGIES))
        raise ConfigurationError(f"Unknown similarity strategy {name!r} (known: {known})") from None


@dataclass
class FuzzyMatcher:
    """Match entities to the closest reaction term of each report."""
    similarity: Similarity = levenshtein_similarity
    threshold: float = 0.2

    def __post_init__(self):
        if not 0.0 <= self.threshold <= 1.0:
            raise ConfigurationError(f"Match threshold must be in [0, 1], got {self.threshold}")

    def distance(self, a: str, b: str) -> float:
        # rounded so 1/5 edits compares equal to a 0.2 threshold
        return round(1.0 - self.similarity(a, b), 9)

    def best_reaction(self, text: str, report: AdverseEventReport) -> tuple[str, float] | None:
        """
        Find the closest qualifying reaction in a single report.

        Ties keep the reaction stored first.

        Returns:
            (reaction, distance), or None if nothing is within the threshold
        """
        best: tuple[str, float] | None = None
        for reaction in report.reactions:
            dist = self.distance(text, reaction)
            if dist > self.threshold:
                continue
            if best is None or dist < best[1]:
                best = (reaction, dist)
                if dist == 0.0:
                    break
        return best

    def match(
        self,
        entities: Sequence[MedicalEntity],
        reports: Sequence[AdverseEventReport],
    ) -> list[Match]:
        """
        Match every entity against every report.

        Entities are visited in order and reports in fetch order; each
        (entity, report) pair yields at most one Match.

        Args:
            entities: Normalized entities
            reports: Corpus snapshot

        Returns:
            List of Match, grouped by entity
        """
        matches = []
        for entity in entities:
            for report in reports:
                found = self.best_reaction(entity.text, report)
                if found is None:
                    continue
                reaction, dist = found
                matches.append(
                    Match(
                        symptom=entity.text,
                        category=entity.category,
                        drug=report.drug,
                        report_id=report.report_id,
                        serious=report.serious,
                        reaction=reaction,
                        distance=dist,
                    )
                )
        return matches
