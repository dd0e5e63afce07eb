import logging
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from variation_gallery.core.config import settings
from variation_gallery.api.v1.api import api_router
from variation_gallery.db.session import Base, engine
from variation_gallery.models import attribute, attribute_value, image, meta, product  # noqa: F401

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Variation-to-image resolution for configurable product galleries",
    version=settings.VERSION,
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.BACKEND_CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API router with prefix
app.include_router(api_router, prefix=settings.API_V1_STR)

# Create database tables
Base.metadata.create_all(bind=engine)

@app.get("/")
def root():
    return {"message": "Welcome to the Variation Gallery API"}
