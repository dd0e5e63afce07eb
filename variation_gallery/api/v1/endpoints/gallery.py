from typing import List
from fastapi import APIRouter, Depends, HTTPException, Request
from variation_gallery.api import deps
from variation_gallery.api.deps import cache_response
from variation_gallery.core.config import settings
from variation_gallery.db.catalog import SqlCatalog
from variation_gallery.engine.cache import DatasetCache
from variation_gallery.engine.gallery import (
    GalleryOptions,
    cached_dataset,
    loop_galleries,
    loop_thumbnails,
    match_filtered_values,
    parse_filter_query,
    prepare_dataset,
    resolve_dataset_selection,
    should_run,
)
from variation_gallery.engine.slugs import sanitize_slug
from variation_gallery.schemas.assignment import AssignmentRecord
from variation_gallery.schemas.gallery import (
    CartImagesRequest,
    GalleryDataset,
    LoadRequest,
    LoopImages,
    LoopImagesRequest,
    ResolveResponse,
    SelectionRequest,
    SlugifyRequest,
    Thumbnails,
)

router = APIRouter()

# Standard error messages
PRODUCT_NOT_FOUND = "Product not found"

@router.get("/products/{product_id}", response_model=GalleryDataset)
@cache_response(expire=settings.CACHE_EXPIRE_SECONDS, key_prefix="gallery")
async def get_product_gallery(
    product_id: int,
    translate: bool = False,
    catalog: SqlCatalog = Depends(deps.get_catalog),
    options: GalleryOptions = Depends(deps.get_options)
):
    """
    Prepared gallery for a product page.
    """
    dataset = prepare_dataset(catalog, product_id, options, translate)
    if dataset is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return dataset

@router.post("/load", response_model=GalleryDataset)
async def load_product_gallery(
    payload: LoadRequest,
    catalog: SqlCatalog = Depends(deps.get_catalog),
    options: GalleryOptions = Depends(deps.get_options)
):
    """
    Freshly computed gallery; never served from a cache.
    """
    if payload.id <= 0:
        raise HTTPException(status_code=400, detail="Invalid product ID.")
    dataset = prepare_dataset(catalog, payload.id, options)
    if dataset is None:
        raise HTTPException(status_code=404, detail="Failed to load product data.")
    return dataset

@router.post("/products/{product_id}/resolve", response_model=ResolveResponse)
async def resolve_selection(
    product_id: int,
    payload: SelectionRequest,
    catalog: SqlCatalog = Depends(deps.get_catalog),
    options: GalleryOptions = Depends(deps.get_options),
    cache: DatasetCache = Depends(deps.get_dataset_cache)
):
    """
    Image for an attribute selection, falling back to the default image.
    """
    dataset = cached_dataset(catalog, product_id, options, cache)
    if dataset is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    image_id = resolve_dataset_selection(dataset, payload.selection, options)
    return ResolveResponse(
        product_id=product_id,
        image_id=image_id or dataset.default_image_id,
        matched=image_id is not None,
        default_image_id=dataset.default_image_id,
    )

@router.post("/cart-images", response_model=List[ResolveResponse])
async def resolve_cart_images(
    payload: CartImagesRequest,
    catalog: SqlCatalog = Depends(deps.get_catalog),
    options: GalleryOptions = Depends(deps.get_options),
    cache: DatasetCache = Depends(deps.get_dataset_cache)
):
    """
    Thumbnail image for each cart line.
    """
    results = []
    for line in payload.lines:
        dataset = cached_dataset(catalog, line.product_id, options, cache)
        if dataset is None:
            results.append(ResolveResponse(product_id=line.product_id))
            continue
        image_id = resolve_dataset_selection(dataset, line.selection, options)
        results.append(ResolveResponse(
            product_id=line.product_id,
            image_id=image_id or dataset.default_image_id,
            matched=image_id is not None,
            default_image_id=dataset.default_image_id,
        ))
    return results

@router.get("/products/{product_id}/thumbnails", response_model=Thumbnails)
async def get_loop_thumbnails(
    product_id: int,
    catalog: SqlCatalog = Depends(deps.get_catalog),
    options: GalleryOptions = Depends(deps.get_options),
    cache: DatasetCache = Depends(deps.get_dataset_cache)
):
    """
    First image of every assignment, for product listings.
    """
    dataset = cached_dataset(catalog, product_id, options, cache)
    if dataset is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return Thumbnails(
        product_id=product_id,
        image_ids=loop_thumbnails(dataset, options.loop_thumbnail_limit),
    )

@router.get("/products/{product_id}/loop-galleries", response_model=List[AssignmentRecord])
async def get_loop_galleries(
    product_id: int,
    catalog: SqlCatalog = Depends(deps.get_catalog),
    options: GalleryOptions = Depends(deps.get_options),
    cache: DatasetCache = Depends(deps.get_dataset_cache)
):
    """
    Assignments explicitly marked visible in product listings.
    """
    dataset = cached_dataset(catalog, product_id, options, cache)
    if dataset is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return loop_galleries(dataset)

@router.post("/loop-images", response_model=List[LoopImages])
async def get_filtered_loop_images(
    request: Request,
    payload: LoopImagesRequest,
    catalog: SqlCatalog = Depends(deps.get_catalog),
    options: GalleryOptions = Depends(deps.get_options),
    cache: DatasetCache = Depends(deps.get_dataset_cache)
):
    """
    Listing images matching the active ``filter_<attribute>`` query parameter.
    """
    active_filter = parse_filter_query(request.query_params)
    if not active_filter or not active_filter[1]:
        return []
    _, values = active_filter

    results = []
    for product_id in payload.product_ids:
        dataset = cached_dataset(catalog, product_id, options, cache)
        if dataset is None or not dataset.assignments:
            continue
        matches = match_filtered_values(dataset, values)
        if matches:
            results.append(LoopImages(product_id=product_id, images=matches))
    return results

@router.get("/products/{product_id}/enabled")
async def is_gallery_enabled(
    product_id: int,
    catalog: SqlCatalog = Depends(deps.get_catalog),
    options: GalleryOptions = Depends(deps.get_options)
):
    """
    Whether the variation gallery replaces the default product gallery.
    """
    if catalog.get_product(product_id) is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return {"product_id": product_id, "enabled": should_run(catalog, product_id, options)}

@router.post("/slugify")
async def slugify_text(payload: SlugifyRequest):
    """
    Canonical slug of arbitrary text.
    """
    return sanitize_slug(payload.data)
