from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from variation_gallery.db.session import Base

class ProductAttribute(Base):
    __tablename__ = "product_attributes"
    
    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), index=True)
    name = Column(String, index=True)
    is_taxonomy = Column(Boolean, default=True)
    is_variation = Column(Boolean, default=True)
    # Pipe-separated values of a free-text (non-taxonomy) attribute
    options = Column(String, nullable=True)
    sequence = Column(Integer, default=0)
    
    product = relationship("Product", back_populates="attributes")
    values = relationship(
        "ProductAttributeValue",
        back_populates="attribute",
        cascade="all, delete-orphan",
        order_by="ProductAttributeValue.sequence",
    )
