from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from variation_gallery.db.session import Base

class ProductAttributeValue(Base):
    __tablename__ = "product_attribute_values"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, index=True)
    slug = Column(String, index=True)
    attribute_id = Column(Integer, ForeignKey("product_attributes.id"))
    sequence = Column(Integer, default=0)
    translation_of_id = Column(Integer, ForeignKey("product_attribute_values.id"), nullable=True)
    
    attribute = relationship("ProductAttribute", back_populates="values")
