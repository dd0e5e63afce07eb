"""
Multi-language slug mapping.

Assignments are authored against the canonical-language product. When a
translated product is displayed, the stored slugs are rewritten to the
displayed language so they match the visitor's selection.
"""
from typing import Dict, List

from variation_gallery.engine.host import HostCatalog
from variation_gallery.engine.slugs import sanitize_slug
from variation_gallery.schemas.assignment import AssignmentRecord


def build_translation_map(host: HostCatalog, displayed_id: int, canonical_id: int) -> Dict[str, str]:
    """Canonical-language slug -> displayed-language slug."""
    mapping: Dict[str, str] = {}
    displayed = host.get_variation_attributes(displayed_id)

    for attribute in displayed:
        if not (attribute.is_taxonomy and attribute.is_variation):
            continue
        for term in attribute.values:
            if term.term_id is None:
                continue
            canonical = host.get_term(host.get_canonical_counterpart(term.term_id))
            if canonical is None:
                continue
            mapping[canonical.slug.lower()] = term.slug

    # free-text values carry no translation link; match them by position
    displayed_text = {a.name: a for a in displayed if not a.is_taxonomy}
    for attribute in host.get_variation_attributes(canonical_id):
        if attribute.is_taxonomy or not attribute.is_variation:
            continue
        counterpart = displayed_text.get(attribute.name)
        if counterpart is None or not counterpart.values:
            continue
        for index, term in enumerate(attribute.values):
            if index < len(counterpart.values):
                mapping[sanitize_slug(term.name)] = counterpart.values[index].name.strip()
    return mapping


def translate_records(records: List[AssignmentRecord], mapping: Dict[str, str]) -> List[AssignmentRecord]:
    translated = []
    for record in records:
        slugs = [mapping[slug].strip() if slug in mapping else slug for slug in record.slugs]
        translated.append(record.copy(update={"slugs": slugs}))
    return translated
