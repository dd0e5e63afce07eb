from typing import List
from fastapi import APIRouter, Depends, HTTPException
from variation_gallery.api import deps
from variation_gallery.db.catalog import SqlCatalog
from variation_gallery.engine.assignments import (
    load_records,
    read_records,
    reset_import,
    save_records,
)
from variation_gallery.schemas.assignment import AssignmentList, AssignmentRecord

router = APIRouter()

PRODUCT_NOT_FOUND = "Product not found"

def _require_product(catalog: SqlCatalog, product_id: int) -> None:
    if catalog.get_product(product_id) is None:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)

@router.get("/products/{product_id}", response_model=AssignmentList)
async def get_assignments(
    product_id: int,
    catalog: SqlCatalog = Depends(deps.get_catalog)
):
    """
    Stored assignment records of a product.
    """
    _require_product(catalog, product_id)
    return AssignmentList(product_id=product_id, assignments=read_records(catalog, product_id))

@router.put("/products/{product_id}", response_model=AssignmentList)
async def replace_assignments(
    product_id: int,
    assignments: List[AssignmentRecord],
    catalog: SqlCatalog = Depends(deps.get_catalog),
    current_user: dict = deps.require_superuser
):
    """
    Replace the assignment records of a product (admin only).
    """
    _require_product(catalog, product_id)
    save_records(catalog, product_id, assignments)
    deps.clear_gallery_cache(catalog, product_id)
    return AssignmentList(product_id=product_id, assignments=read_records(catalog, product_id))

@router.post("/products/{product_id}/reimport", response_model=AssignmentList)
async def reimport_assignments(
    product_id: int,
    catalog: SqlCatalog = Depends(deps.get_catalog),
    current_user: dict = deps.require_superuser
):
    """
    Discard stored records and rebuild them from legacy image tags (admin only).
    """
    _require_product(catalog, product_id)
    reset_import(catalog, product_id)
    records = load_records(catalog, product_id)
    deps.clear_gallery_cache(catalog, product_id)
    return AssignmentList(product_id=product_id, assignments=records)
