from sqlalchemy import Column, Integer, String, UniqueConstraint
from sqlalchemy.types import JSON
from variation_gallery.db.session import Base

class Meta(Base):
    __tablename__ = "meta"
    __table_args__ = (
        UniqueConstraint("entity_type", "entity_id", "key", name="uq_meta_entity_key"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    entity_type = Column(String, index=True)  # "product" or "image"
    entity_id = Column(Integer, index=True)
    key = Column(String, index=True)
    value = Column(JSON, nullable=True)
