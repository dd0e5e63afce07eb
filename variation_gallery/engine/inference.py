"""
Rebuild assignment records from legacy per-image slug tags.

Images come from the legacy gallery-order field when it exists, otherwise from
the assets attached to the product (display order, default image excluded).
Images are grouped by their tag in first-seen order; untagged images are left
out of every record.
"""
import logging
from typing import Any, Dict, List

from variation_gallery.engine.host import IMAGE, HostCatalog
from variation_gallery.engine.slugs import DELIMITER, NO_SLUG
from variation_gallery.schemas.assignment import AssignmentRecord

logger = logging.getLogger(__name__)

LEGACY_GALLERY_META_KEY = "_product_image_gallery"
IMAGE_SLUG_META_KEY = "woosvi_slug"


def _image_slug_key(product_id: int) -> str:
    return f"{IMAGE_SLUG_META_KEY}_{product_id}"


def _legacy_image_ids(host: HostCatalog, product_id: int) -> List[str]:
    gallery = host.get_meta(product_id, LEGACY_GALLERY_META_KEY)
    if gallery is not None:
        if isinstance(gallery, (list, tuple)):
            ids = [str(i).strip() for i in gallery]
        else:
            ids = [i.strip() for i in str(gallery).split(",")]
    else:
        product = host.get_product(product_id)
        default_image = product.default_image_id if product else None
        ids = [
            str(image_id)
            for image_id in host.get_attached_image_ids(product_id)
            if image_id != default_image
        ]
    return [i for i in ids if i and i != "0"]


def _group_key(group: Any) -> str:
    if isinstance(group, (list, tuple)):
        return DELIMITER.join(str(v) for v in group).lower()
    return str(group).lower()


def _image_tags(host: HostCatalog, product_id: int, image_id: str) -> List[str]:
    try:
        entity_id = int(image_id)
    except ValueError:
        return [NO_SLUG]

    tags = host.get_meta(entity_id, _image_slug_key(product_id), kind=IMAGE)
    if isinstance(tags, (list, tuple)):
        tags = [_group_key(group) for group in tags if group]
    if not tags:
        tags = host.get_meta(entity_id, IMAGE_SLUG_META_KEY, kind=IMAGE)
    if not tags:
        return [NO_SLUG]

    if isinstance(tags, (list, tuple)):
        flat = []
        for tag in tags:
            if isinstance(tag, (list, tuple)):
                tag = tag[0] if tag else ""
            if tag:
                flat.append(str(tag))
        return flat or [NO_SLUG]
    return [str(tags)]


def infer_records(host: HostCatalog, product_id: int) -> List[AssignmentRecord]:
    image_ids = _legacy_image_ids(host, product_id)
    if not image_ids:
        return []

    groups: Dict[str, List[str]] = {}
    for image_id in image_ids:
        for tag in _image_tags(host, product_id, image_id):
            groups.setdefault(tag, []).append(image_id)
    groups.pop(NO_SLUG, None)

    logger.debug("Legacy tags for product %s: %s", product_id, list(groups))
    return [
        AssignmentRecord(slugs=key.split(DELIMITER), imgs=members)
        for key, members in groups.items()
        if key.replace(DELIMITER, "").strip()
    ]
