from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON
from variation_gallery.db.session import Base

class Product(Base):
    __tablename__ = "products"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True)
    product_type = Column(String, default="simple")
    image_id = Column(Integer, nullable=True)
    gallery_image_ids = Column(JSON, default=list)
    language = Column(String, nullable=True)
    # Canonical-language product this one translates, if any
    translation_of_id = Column(Integer, ForeignKey("products.id"), nullable=True)
    
    attributes = relationship("ProductAttribute", back_populates="product", cascade="all, delete-orphan")
    images = relationship("ImageAsset", back_populates="product", cascade="all, delete-orphan")
    translation_of = relationship("Product", remote_side=[id])
