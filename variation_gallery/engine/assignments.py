"""
Assignment Store: the ordered assignment records of one product.

Persisted data is loose (strings, JSON text, empty sentinels, partial records);
``coerce_records`` turns any of it into a list of ``AssignmentRecord`` before
anything else looks at it.
"""
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from variation_gallery.engine.host import HostCatalog
from variation_gallery.engine.inference import infer_records
from variation_gallery.engine.slugs import GLOBAL_SLUG, combination_key, sanitize_slug
from variation_gallery.schemas.assignment import AssignmentRecord

logger = logging.getLogger(__name__)

ASSIGNMENTS_META_KEY = "woosvi_slug"
IMPORTED_META_KEY = "_svi_imported"

# Stored strings that mean "nothing assigned"
_EMPTY_MARKERS = {"", '""', "''", "[]"}


def coerce_records(raw: Any) -> List[AssignmentRecord]:
    if isinstance(raw, str):
        text = raw.strip()
        if text in _EMPTY_MARKERS:
            return []
        try:
            raw = json.loads(text)
        except ValueError:
            logger.warning("Discarding unreadable assignment data: %.60s", text)
            return []
    if not isinstance(raw, (list, tuple)):
        return []

    records = []
    for entry in raw:
        if isinstance(entry, AssignmentRecord):
            records.append(entry)
            continue
        if not isinstance(entry, dict):
            continue
        try:
            records.append(AssignmentRecord(**entry))
        except ValidationError as e:
            logger.warning("Dropping malformed assignment record %r: %s", entry, e.errors())
    return records


def is_global(record: AssignmentRecord) -> bool:
    return bool(record.slugs) and record.slugs[0] == GLOBAL_SLUG


def order_records(records: List[AssignmentRecord], global_last: bool) -> List[AssignmentRecord]:
    """Move the catch-all record behind every other record when requested."""
    if not global_last:
        return list(records)
    regular = [r for r in records if not is_global(r)]
    return regular + [r for r in records if is_global(r)]


@dataclass
class GalleryRef:
    ref: str
    video: Optional[str] = None


class AssignmentStore:
    def __init__(self, records: List[AssignmentRecord], global_last: bool = False):
        self.records = order_records(records, global_last)

    def __len__(self) -> int:
        return len(self.records)

    def combo_map(self) -> Dict[str, str]:
        """Combination key -> first image of the record that owns it."""
        mapping: Dict[str, str] = {}
        for record in self.records:
            if not record.imgs:
                continue
            slugs = [s for s in (sanitize_slug(slug) for slug in record.slugs) if s]
            if not slugs:
                continue
            mapping[combination_key(slugs)] = record.imgs[0]
        return mapping

    def gallery(self) -> List[GalleryRef]:
        """
        Flatten every record's images in display order.

        Each reference is tagged with ``k<record index>`` so one asset reused
        by several records still yields distinct entries.
        """
        refs = []
        for index, record in enumerate(self.records):
            videos = record.video or {}
            for img in record.imgs:
                refs.append(GalleryRef(ref=f"{img}k{index}", video=videos.get(img)))
        return refs


def read_records(host: HostCatalog, product_id: int) -> List[AssignmentRecord]:
    return coerce_records(host.get_meta(product_id, ASSIGNMENTS_META_KEY))


def save_records(host: HostCatalog, product_id: int, records: List[AssignmentRecord]) -> None:
    host.set_meta(
        product_id,
        ASSIGNMENTS_META_KEY,
        [r.dict(exclude_none=True) for r in records],
    )


def load_records(host: HostCatalog, product_id: int) -> List[AssignmentRecord]:
    """
    Stored records for a product, inferring them from legacy per-image data
    the first time none are stored.
    """
    records = read_records(host, product_id)
    if records:
        return records
    if host.get_meta(product_id, IMPORTED_META_KEY):
        return []

    # an empty result is stored too, so inference runs once per product
    inferred = infer_records(host, product_id)
    logger.info("Inferred %d assignment records for product %s", len(inferred), product_id)
    save_records(host, product_id, inferred)
    host.set_meta(product_id, IMPORTED_META_KEY, True)
    return read_records(host, product_id)


def reset_import(host: HostCatalog, product_id: int) -> None:
    """Forget stored records so the next load infers them again."""
    host.delete_meta(product_id, ASSIGNMENTS_META_KEY)
    host.delete_meta(product_id, IMPORTED_META_KEY)
