from typing import Any, List, Optional
from sqlalchemy.orm import Session
from variation_gallery.engine.host import (
    PRODUCT,
    AttributeInfo,
    ImageInfo,
    ProductInfo,
    TermInfo,
)
from variation_gallery.engine.slugs import sanitize_slug
from variation_gallery.models.attribute import ProductAttribute
from variation_gallery.models.attribute_value import ProductAttributeValue
from variation_gallery.models.image import ImageAsset
from variation_gallery.models.meta import Meta
from variation_gallery.models.product import Product

class SqlCatalog:
    """HostCatalog backed by the service's own SQL tables."""

    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> Optional[ProductInfo]:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if not product:
            return None
        return ProductInfo(
            id=product.id,
            type=product.product_type or "simple",
            default_image_id=product.image_id,
            gallery_image_ids=[int(i) for i in (product.gallery_image_ids or []) if str(i).isdigit()],
        )

    def get_variation_attributes(self, product_id: int) -> List[AttributeInfo]:
        attributes = self.db.query(ProductAttribute)\
            .filter(ProductAttribute.product_id == product_id)\
            .order_by(ProductAttribute.sequence, ProductAttribute.id)\
            .all()
        result = []
        for attribute in attributes:
            if attribute.is_taxonomy:
                values = [
                    TermInfo(name=v.name, slug=v.slug or sanitize_slug(v.name), term_id=v.id)
                    for v in attribute.values
                ]
            else:
                values = [
                    TermInfo(name=option.strip(), slug=sanitize_slug(option))
                    for option in (attribute.options or "").split("|")
                    if option.strip()
                ]
            result.append(AttributeInfo(
                name=attribute.name,
                is_taxonomy=bool(attribute.is_taxonomy),
                is_variation=bool(attribute.is_variation),
                values=values,
            ))
        return result

    def _meta_row(self, entity_id: int, key: str, kind: str) -> Optional[Meta]:
        return self.db.query(Meta).filter(
            Meta.entity_type == kind,
            Meta.entity_id == entity_id,
            Meta.key == key,
        ).first()

    def get_meta(self, entity_id: int, key: str, kind: str = PRODUCT) -> Any:
        row = self._meta_row(entity_id, key, kind)
        return row.value if row else None

    def set_meta(self, entity_id: int, key: str, value: Any, kind: str = PRODUCT) -> None:
        row = self._meta_row(entity_id, key, kind)
        if row is None:
            row = Meta(entity_type=kind, entity_id=entity_id, key=key)
            self.db.add(row)
        row.value = value
        self.db.commit()

    def delete_meta(self, entity_id: int, key: str, kind: str = PRODUCT) -> None:
        row = self._meta_row(entity_id, key, kind)
        if row is not None:
            self.db.delete(row)
            self.db.commit()

    def get_attached_image_ids(self, product_id: int) -> List[int]:
        rows = self.db.query(ImageAsset.id)\
            .filter(
                ImageAsset.product_id == product_id,
                ImageAsset.exclude_from_gallery.is_(False),
            )\
            .order_by(ImageAsset.menu_order, ImageAsset.id)\
            .all()
        return [row.id for row in rows]

    def get_canonical_product_id(self, product_id: int) -> int:
        product = self.db.query(Product).filter(Product.id == product_id).first()
        if product and product.translation_of_id:
            return product.translation_of_id
        return product_id

    def get_translation_ids(self, product_id: int) -> List[int]:
        rows = self.db.query(Product.id).filter(Product.translation_of_id == product_id).all()
        return [row.id for row in rows]

    def get_canonical_counterpart(self, term_id: int) -> int:
        term = self.db.query(ProductAttributeValue).filter(ProductAttributeValue.id == term_id).first()
        if term and term.translation_of_id:
            return term.translation_of_id
        return term_id

    def get_term(self, term_id: int) -> Optional[TermInfo]:
        term = self.db.query(ProductAttributeValue).filter(ProductAttributeValue.id == term_id).first()
        if not term:
            return None
        return TermInfo(name=term.name, slug=term.slug or sanitize_slug(term.name), term_id=term.id)

    def get_image_urls(self, image_id: int, size: str) -> Optional[ImageInfo]:
        image = self.db.query(ImageAsset).filter(ImageAsset.id == image_id).first()
        if not image:
            return None
        variant = (image.sizes or {}).get(size)
        if variant and variant.get("url"):
            return ImageInfo(
                url=variant["url"],
                width=int(variant.get("width") or 0),
                height=int(variant.get("height") or 0),
            )
        return ImageInfo(url=image.url, width=image.width or 0, height=image.height or 0)
