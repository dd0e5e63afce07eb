from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from variation_gallery.schemas.assignment import AssignmentRecord

class GalleryImage(BaseModel):
    id: int
    idk: Optional[str] = None
    video: Optional[str] = None
    product_img: bool = False
    src: str
    width: int = 0
    height: int = 0
    thumb_src: str
    thumb_width: int = 0
    thumb_height: int = 0
    full_src: str
    full_width: int = 0
    full_height: int = 0

class GalleryDataset(BaseModel):
    product_id: int
    default_image_id: Optional[int] = None
    images: List[GalleryImage] = []
    assignments: List[AssignmentRecord] = []
    slugs: Dict[str, str] = {}

class LoadRequest(BaseModel):
    id: int

class SelectionRequest(BaseModel):
    selection: Dict[str, Any] = {}

class ResolveResponse(BaseModel):
    product_id: int
    image_id: Optional[int] = None
    matched: bool = False
    default_image_id: Optional[int] = None

class CartLine(BaseModel):
    product_id: int
    selection: Dict[str, Any] = {}

class CartImagesRequest(BaseModel):
    lines: List[CartLine]

class LoopImagesRequest(BaseModel):
    product_ids: List[int] = Field(default_factory=list)

class LoopImages(BaseModel):
    product_id: int
    images: Dict[str, int] = {}

class Thumbnails(BaseModel):
    product_id: int
    image_ids: List[int] = []

class SlugifyRequest(BaseModel):
    data: str
