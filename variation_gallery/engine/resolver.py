"""
Selection -> image resolution against a combination-key map.
"""
import logging
from typing import Dict, Iterable, List, Optional, Tuple

from variation_gallery.engine.similarity import Scorer, similarity_percent
from variation_gallery.schemas.assignment import AssignmentRecord

logger = logging.getLogger(__name__)

FUZZY_MATCH_THRESHOLD = 70.0
SLUG_HEAL_THRESHOLD = 95.0


def to_image_id(ref) -> Optional[int]:
    """Numeric id of an image reference, or None when it has none."""
    head = str(ref).partition("k")[0]
    try:
        image_id = int(head)
    except ValueError:
        return None
    return image_id if image_id > 0 else None


def resolve(
    candidates: List[str],
    combo_map: Dict[str, str],
    scorer: Scorer = similarity_percent,
    threshold: float = FUZZY_MATCH_THRESHOLD,
) -> Optional[int]:
    for candidate in candidates:
        if candidate in combo_map:
            return to_image_id(combo_map[candidate])

    best_score = threshold
    best_ref = None
    for candidate in candidates:
        for key, ref in combo_map.items():
            score = scorer(candidate, key)
            if score > best_score:
                best_score, best_ref = score, ref
    if best_ref is None:
        return None
    logger.debug("Fuzzy match for %s scored %.1f", candidates, best_score)
    return to_image_id(best_ref)


def heal_slugs(
    records: List[AssignmentRecord],
    valid_slugs: Iterable[str],
    scorer: Scorer = similarity_percent,
    threshold: float = SLUG_HEAL_THRESHOLD,
) -> Tuple[List[AssignmentRecord], bool]:
    """
    Rewrite stored slugs that no longer exist to the closest valid slug.

    Returns the (possibly) rewritten records and whether anything changed;
    persisting the change is up to the caller.
    """
    valid = list(valid_slugs)
    changed = False
    healed = []
    for record in records:
        slugs = list(record.slugs)
        for index, slug in enumerate(slugs):
            if slug in valid:
                continue
            best_score = threshold
            for option in valid:
                score = scorer(option, slug)
                if score > best_score:
                    best_score = score
                    slugs[index] = option.strip()
            if slugs[index] != slug:
                logger.debug("Healed stale slug %r -> %r", slug, slugs[index])
                changed = True
        healed.append(record.copy(update={"slugs": slugs}) if slugs != record.slugs else record)
    return healed, changed
