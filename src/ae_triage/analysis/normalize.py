"""
Entity normalization.

Case-folds entity text and collapses duplicates before matching.
"""

from collections.abc import Iterable

from ae_triage.models import MedicalEntity


def normalize_entities(entities: Iterable[MedicalEntity]) -> list[MedicalEntity]:
    """
    Lower-case and deduplicate entities.

    Duplicates are keyed on case-folded text; the first occurrence wins,
    including its category. Order of first appearance is preserved.

    Args:
        entities: Raw entities from the extractor

    Returns:
        Deduplicated entities with lower-cased text
    """
    seen: dict[str, MedicalEntity] = {}
    for entity in entities:
        text = entity.text.strip().lower()
        if not text or text in seen:
            continue
        seen[text] = MedicalEntity(text=text, category=entity.category)
    return list(seen.values())
