from typing import Optional
from pydantic import BaseModel

class AttributeValueBase(BaseModel):
    name: str
    slug: Optional[str] = None
    sequence: int = 0
    translation_of_id: Optional[int] = None

class AttributeValueCreate(AttributeValueBase):
    pass

class AttributeValue(AttributeValueBase):
    id: int
    attribute_id: int
    
    class Config:
        from_attributes = True
