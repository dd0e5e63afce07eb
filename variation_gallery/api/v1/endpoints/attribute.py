from typing import List
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from variation_gallery.api import deps
from variation_gallery.db.catalog import SqlCatalog
from variation_gallery.db.session import get_db
from variation_gallery.engine.slugs import sanitize_slug
from variation_gallery.models.attribute import ProductAttribute
from variation_gallery.models.attribute_value import ProductAttributeValue
from variation_gallery.models.product import Product as ProductModel
from variation_gallery.schemas.attribute import Attribute, AttributeCreate

router = APIRouter()

@router.get("/products/{product_id}/attributes", response_model=List[Attribute])
async def get_attributes(
    product_id: int,
    db: Session = Depends(get_db)
):
    """
    Retrieve all attributes of a product.
    """
    return db.query(ProductAttribute)\
        .filter(ProductAttribute.product_id == product_id)\
        .order_by(ProductAttribute.sequence, ProductAttribute.id)\
        .all()

@router.post("/products/{product_id}/attributes", response_model=Attribute)
async def create_attribute(
    product_id: int,
    attribute: AttributeCreate,
    db: Session = Depends(get_db),
    current_user: dict = deps.require_superuser
):
    """
    Create a product attribute with its values (admin only).
    """
    product = db.query(ProductModel).filter(ProductModel.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")

    db_attribute = ProductAttribute(
        product_id=product_id,
        **attribute.dict(exclude={"values"})
    )
    db.add(db_attribute)
    db.flush()

    for position, value in enumerate(attribute.values):
        db.add(ProductAttributeValue(
            attribute_id=db_attribute.id,
            name=value.name,
            slug=value.slug or sanitize_slug(value.name),
            sequence=value.sequence or position,
            translation_of_id=value.translation_of_id,
        ))

    db.commit()
    db.refresh(db_attribute)
    deps.clear_gallery_cache(SqlCatalog(db), product_id)
    return db_attribute
