"""
Gallery preparation and selection lookups for a single product.

``prepare_dataset`` assembles everything a product page needs: the default
image, the ordered gallery (default + product gallery + assignment images),
and the assignment records the client uses to switch images. Data-quality
problems never raise here; they degrade to an empty store, the default image
or no match.
"""
import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Tuple

from variation_gallery.engine.assignments import (
    AssignmentStore,
    GalleryRef,
    load_records,
    read_records,
    save_records,
)
from variation_gallery.engine.cache import DatasetCache
from variation_gallery.engine.host import HostCatalog, ImageInfo
from variation_gallery.engine.resolver import (
    FUZZY_MATCH_THRESHOLD,
    SLUG_HEAL_THRESHOLD,
    heal_slugs,
    resolve,
    to_image_id,
)
from variation_gallery.engine.similarity import Scorer, similarity_percent
from variation_gallery.engine.slugs import DEFAULT_SLUG, normalize_selection, sanitize_slug
from variation_gallery.engine.translation import build_translation_map, translate_records
from variation_gallery.schemas.assignment import AssignmentRecord
from variation_gallery.schemas.gallery import GalleryDataset, GalleryImage

logger = logging.getLogger(__name__)

DISABLED_META_KEY = "_checkbox_svipro_enabled"
FILTER_PREFIX = "filter_"


@dataclass(frozen=True)
class GalleryOptions:
    global_last: bool = True
    fuzzy_threshold: float = FUZZY_MATCH_THRESHOLD
    heal_threshold: float = SLUG_HEAL_THRESHOLD
    multilang: bool = False
    disable_on_empty: bool = False
    main_size: str = "large"
    thumb_size: str = "thumbnail"
    full_size: str = "full"
    placeholder_url: str = ""
    loop_thumbnail_limit: int = 0
    scorer: Scorer = similarity_percent

    @classmethod
    def from_settings(cls, settings) -> "GalleryOptions":
        return cls(
            global_last=settings.GLOBAL_ASSIGNMENT_POSITION == "end",
            fuzzy_threshold=settings.FUZZY_MATCH_THRESHOLD,
            heal_threshold=settings.SLUG_HEAL_THRESHOLD,
            multilang=settings.MULTILANG_ENABLED,
            disable_on_empty=settings.DISABLE_ON_EMPTY_ASSIGNMENTS,
            main_size=settings.MAIN_IMAGE_SIZE,
            thumb_size=settings.THUMB_IMAGE_SIZE,
            full_size=settings.FULL_IMAGE_SIZE,
            placeholder_url=settings.PLACEHOLDER_IMAGE_URL,
            loop_thumbnail_limit=settings.LOOP_THUMBNAIL_LIMIT,
        )


def valid_slugs(host: HostCatalog, product_id: int) -> Dict[str, str]:
    """Slug -> label of every value a visitor can currently select."""
    slugs: Dict[str, str] = {}
    for attribute in host.get_variation_attributes(product_id):
        if not attribute.is_variation:
            continue
        for term in attribute.values:
            slug = term.slug.lower() if attribute.is_taxonomy else sanitize_slug(term.name)
            if slug and term.name.strip():
                slugs[slug] = term.name.strip()
    return slugs


def _image_info(host: HostCatalog, image_id: int, size: str, options: GalleryOptions) -> ImageInfo:
    return host.get_image_urls(image_id, size) or ImageInfo(url=options.placeholder_url)


def _image_entry(
    host: HostCatalog,
    ref: GalleryRef,
    default_image_id: Optional[int],
    options: GalleryOptions,
) -> Optional[GalleryImage]:
    head, _, tag = ref.ref.partition("k")
    try:
        image_id = int(head)
    except ValueError:
        return None
    if image_id <= 0:
        return None

    main = _image_info(host, image_id, options.main_size, options)
    thumb = _image_info(host, image_id, options.thumb_size, options)
    full = _image_info(host, image_id, options.full_size, options)
    return GalleryImage(
        id=image_id,
        idk=tag or None,
        video=ref.video,
        product_img=image_id == default_image_id,
        src=main.url,
        width=main.width,
        height=main.height,
        thumb_src=thumb.url,
        thumb_width=thumb.width,
        thumb_height=thumb.height,
        full_src=full.url,
        full_width=full.width,
        full_height=full.height,
    )


def _display_records(records: List[AssignmentRecord], default_image_id: Optional[int]) -> List[AssignmentRecord]:
    prepared = []
    for record in records:
        imgs = list(record.imgs)
        if record.slugs[0] == DEFAULT_SLUG and default_image_id:
            imgs.insert(0, str(default_image_id))
        prepared.append(record.copy(update={
            "slugs": [slug.lower() for slug in record.slugs],
            "imgs": imgs,
        }))
    return prepared


def prepare_dataset(
    host: HostCatalog,
    product_id: int,
    options: GalleryOptions,
    translate: bool = False,
) -> Optional[GalleryDataset]:
    canonical_id = host.get_canonical_product_id(product_id) if options.multilang else product_id
    product = host.get_product(canonical_id)
    if product is None:
        logger.debug("No product %s (canonical %s)", product_id, canonical_id)
        return None

    records = load_records(host, canonical_id)
    slugs: Dict[str, str] = {}
    if records:
        slugs = valid_slugs(host, canonical_id)
        if product.is_variable:
            records, changed = heal_slugs(records, slugs, options.scorer, options.heal_threshold)
            if changed:
                save_records(host, canonical_id, records)
        if options.multilang and product.is_variable and canonical_id != product_id:
            slugs = build_translation_map(host, product_id, canonical_id)
            if translate:
                records = translate_records(records, slugs)

    store = AssignmentStore(records, options.global_last)
    default_image_id = product.default_image_id

    refs = [GalleryRef(str(default_image_id))] if default_image_id else []
    refs += [GalleryRef(str(image_id)) for image_id in product.gallery_image_ids if image_id]
    if product.is_variable and len(store):
        refs += store.gallery()
    else:
        unique: Dict[str, GalleryRef] = {}
        for ref in refs:
            unique.setdefault(ref.ref, ref)
        refs = list(unique.values())

    images = []
    for ref in refs:
        entry = _image_entry(host, ref, default_image_id, options)
        if entry is None:
            logger.debug("Skipping image reference %r of product %s", ref.ref, canonical_id)
            continue
        images.append(entry)

    return GalleryDataset(
        product_id=canonical_id,
        default_image_id=default_image_id,
        images=images,
        assignments=_display_records(store.records, default_image_id),
        slugs=slugs,
    )


def cached_dataset(
    host: HostCatalog,
    product_id: int,
    options: GalleryOptions,
    cache: Optional[DatasetCache] = None,
    translate: bool = True,
) -> Optional[GalleryDataset]:
    if cache is None:
        return prepare_dataset(host, product_id, options, translate)
    return cache.get_or_compute(
        product_id, translate, lambda: prepare_dataset(host, product_id, options, translate)
    )


def resolve_dataset_selection(dataset: GalleryDataset, selection: Mapping, options: GalleryOptions) -> Optional[int]:
    candidates = normalize_selection(selection.values())
    if not candidates:
        return None
    combo_map = AssignmentStore(dataset.assignments).combo_map()
    return resolve(candidates, combo_map, options.scorer, options.fuzzy_threshold)


def resolve_for_selection(
    host: HostCatalog,
    product_id: int,
    selection: Mapping,
    options: GalleryOptions,
    cache: Optional[DatasetCache] = None,
) -> Optional[int]:
    """Image id for an attribute selection, or None when nothing matches."""
    dataset = cached_dataset(host, product_id, options, cache)
    if dataset is None:
        return None
    return resolve_dataset_selection(dataset, selection, options)


def should_run(host: HostCatalog, product_id: int, options: GalleryOptions) -> bool:
    if host.get_meta(product_id, DISABLED_META_KEY) == "yes":
        return False
    if options.disable_on_empty and not read_records(host, product_id):
        return False
    return True


def loop_thumbnails(dataset: GalleryDataset, limit: int = 0) -> List[int]:
    records = dataset.assignments[:limit] if limit else dataset.assignments
    thumbnails: List[int] = []
    for record in records:
        if not record.imgs:
            continue
        image_id = to_image_id(record.imgs[0])
        if image_id and image_id not in thumbnails:
            thumbnails.append(image_id)
    return thumbnails


def loop_galleries(dataset: GalleryDataset) -> List[AssignmentRecord]:
    return [r for r in dataset.assignments if r.loop_hidden is False]


def parse_filter_query(params: Mapping[str, str]) -> Optional[Tuple[str, List[str]]]:
    """First non-empty ``filter_<attribute>=a,b`` parameter as (attribute, slugs)."""
    for key, value in params.items():
        if key.startswith(FILTER_PREFIX) and value:
            values = [s for s in (sanitize_slug(v) for v in value.split(",")) if s]
            return key[len(FILTER_PREFIX):], values
    return None


def match_filtered_values(dataset: GalleryDataset, values: List[str]) -> Dict[str, int]:
    """First image of the first record carrying each filtered slug."""
    matches: Dict[str, int] = {}
    for value in values:
        for record in dataset.assignments:
            if not record.imgs:
                continue
            if value in [sanitize_slug(s) for s in record.slugs]:
                image_id = to_image_id(record.imgs[0])
                if image_id:
                    matches[value] = image_id
                break
        else:
            logger.debug("No assignment carries filtered value %s for product %s", value, dataset.product_id)
    return matches
