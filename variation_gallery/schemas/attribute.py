from typing import List, Optional
from pydantic import BaseModel
from variation_gallery.schemas.attribute_value import AttributeValue, AttributeValueCreate

class AttributeBase(BaseModel):
    name: str
    is_taxonomy: bool = True
    is_variation: bool = True
    options: Optional[str] = None
    sequence: int = 0

class AttributeCreate(AttributeBase):
    values: List[AttributeValueCreate] = []

class Attribute(AttributeBase):
    id: int
    product_id: int
    values: List[AttributeValue] = []
    
    class Config:
        from_attributes = True
