from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from variation_gallery.api import deps
from variation_gallery.db.catalog import SqlCatalog
from variation_gallery.db.session import get_db
from variation_gallery.engine.host import IMAGE
from variation_gallery.engine.inference import IMAGE_SLUG_META_KEY
from variation_gallery.models.image import ImageAsset as ImageAssetModel
from variation_gallery.models.product import Product as ProductModel
from variation_gallery.schemas.product import ImageAsset, ImageAssetCreate, Product, ProductCreate

router = APIRouter()

# Standard error messages
PRODUCT_NOT_FOUND = "Product not found"

@router.post("/products", response_model=Product)
async def create_product(
    product: ProductCreate,
    db: Session = Depends(get_db),
    current_user: dict = deps.require_superuser
):
    """
    Create a product (admin only).
    """
    if product.translation_of_id is not None:
        original = db.query(ProductModel).filter(ProductModel.id == product.translation_of_id).first()
        if not original:
            raise HTTPException(status_code=404, detail="Translated product not found")

    db_product = ProductModel(**product.dict())
    db.add(db_product)
    db.commit()
    db.refresh(db_product)
    return db_product

@router.get("/products/{product_id}", response_model=Product)
async def get_product(
    product_id: int,
    db: Session = Depends(get_db)
):
    """
    Get product by ID.
    """
    product = db.query(ProductModel).filter(ProductModel.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)
    return product

@router.post("/products/{product_id}/images", response_model=ImageAsset)
async def create_product_image(
    product_id: int,
    image: ImageAssetCreate,
    db: Session = Depends(get_db),
    current_user: dict = deps.require_superuser
):
    """
    Attach an image asset to a product (admin only).

    ``slug_tags`` is stored as the image's legacy slug tag for this product.
    """
    product = db.query(ProductModel).filter(ProductModel.id == product_id).first()
    if not product:
        raise HTTPException(status_code=404, detail=PRODUCT_NOT_FOUND)

    data = image.dict(exclude={"slug_tags"})
    db_image = ImageAssetModel(product_id=product_id, **data)
    db.add(db_image)
    db.commit()
    db.refresh(db_image)

    catalog = SqlCatalog(db)
    if image.slug_tags:
        catalog.set_meta(
            db_image.id, f"{IMAGE_SLUG_META_KEY}_{product_id}", image.slug_tags, kind=IMAGE
        )
    deps.clear_gallery_cache(catalog, product_id)
    return db_image
