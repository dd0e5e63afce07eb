from typing import Any, Dict, List, Optional
from pydantic import BaseModel

class ProductBase(BaseModel):
    name: str
    product_type: str = "simple"
    image_id: Optional[int] = None
    gallery_image_ids: List[int] = []
    language: Optional[str] = None
    translation_of_id: Optional[int] = None

class ProductCreate(ProductBase):
    pass

class Product(ProductBase):
    id: int
    
    class Config:
        from_attributes = True

class ImageAssetBase(BaseModel):
    url: str
    title: Optional[str] = None
    width: int = 0
    height: int = 0
    sizes: Dict[str, Dict[str, Any]] = {}
    menu_order: int = 0
    exclude_from_gallery: bool = False

class ImageAssetCreate(ImageAssetBase):
    # image-scoped slug tags read by the legacy import
    slug_tags: Optional[Any] = None

class ImageAsset(ImageAssetBase):
    id: int
    product_id: Optional[int] = None
    
    class Config:
        from_attributes = True
