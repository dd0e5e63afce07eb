"""
Narrow read/write interface onto the commerce platform that owns products,
attributes, image assets and per-entity metadata.

The engine only talks to the platform through ``HostCatalog``; the SQL-backed
implementation lives in ``variation_gallery.db.catalog``.
"""
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol

PRODUCT = "product"
IMAGE = "image"

SIMPLE = "simple"
VARIABLE = "variable"


@dataclass
class ProductInfo:
    id: int
    type: str = SIMPLE
    default_image_id: Optional[int] = None
    gallery_image_ids: List[int] = field(default_factory=list)

    @property
    def is_variable(self) -> bool:
        return self.type == VARIABLE


@dataclass
class TermInfo:
    """A single attribute value. ``term_id`` is None for free-text values."""
    name: str
    slug: str
    term_id: Optional[int] = None


@dataclass
class AttributeInfo:
    name: str
    is_taxonomy: bool
    is_variation: bool
    values: List[TermInfo] = field(default_factory=list)


@dataclass
class ImageInfo:
    url: str
    width: int = 0
    height: int = 0


class HostCatalog(Protocol):
    def get_product(self, product_id: int) -> Optional[ProductInfo]:
        ...

    def get_variation_attributes(self, product_id: int) -> List[AttributeInfo]:
        ...

    def get_meta(self, entity_id: int, key: str, kind: str = PRODUCT) -> Any:
        """Return the stored value, or None when the key does not exist."""
        ...

    def set_meta(self, entity_id: int, key: str, value: Any, kind: str = PRODUCT) -> None:
        ...

    def delete_meta(self, entity_id: int, key: str, kind: str = PRODUCT) -> None:
        ...

    def get_attached_image_ids(self, product_id: int) -> List[int]:
        """Image assets attached to the product, ordered by display order."""
        ...

    def get_canonical_product_id(self, product_id: int) -> int:
        ...

    def get_canonical_counterpart(self, term_id: int) -> int:
        ...

    def get_term(self, term_id: int) -> Optional[TermInfo]:
        ...

    def get_image_urls(self, image_id: int, size: str) -> Optional[ImageInfo]:
        ...
