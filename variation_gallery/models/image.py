from sqlalchemy import Column, Integer, String, Boolean, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.types import JSON
from variation_gallery.db.session import Base

class ImageAsset(Base):
    __tablename__ = "image_assets"
    
    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id"), index=True, nullable=True)
    title = Column(String, nullable=True)
    url = Column(String)
    width = Column(Integer, default=0)
    height = Column(Integer, default=0)
    # {"thumbnail": {"url": ..., "width": ..., "height": ...}, ...}
    sizes = Column(JSON, default=dict)
    menu_order = Column(Integer, default=0)
    exclude_from_gallery = Column(Boolean, default=False)
    
    product = relationship("Product", back_populates="images")
