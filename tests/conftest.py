"""Shared fixtures: an in-memory host catalog and engine options."""

import copy
import os

# Configure the service before any of its modules read settings
os.environ.setdefault("SQLALCHEMY_DATABASE_URI", "sqlite://")
os.environ.setdefault("CACHE_ENABLED", "false")
os.environ.setdefault("SECRET_KEY", "test-secret")

import pytest

from variation_gallery.engine.gallery import GalleryOptions
from variation_gallery.engine.host import (
    IMAGE,
    PRODUCT,
    VARIABLE,
    AttributeInfo,
    ImageInfo,
    ProductInfo,
    TermInfo,
)


class FakeHost:
    """Dictionary-backed HostCatalog."""

    def __init__(self):
        self.products = {}
        self.attributes = {}
        self.meta = {}
        self.attached = {}
        self.canonical = {}
        self.term_links = {}
        self.terms = {}
        self.images = set()
        self.meta_writes = []
        self.meta_reads = []

    # helpers used by the tests
    def add_product(self, product_id, type=VARIABLE, default_image_id=None, gallery=()):
        self.products[product_id] = ProductInfo(
            id=product_id,
            type=type,
            default_image_id=default_image_id,
            gallery_image_ids=list(gallery),
        )
        return self.products[product_id]

    def add_taxonomy(self, product_id, name, terms, is_variation=True):
        values = []
        for term_id, label, slug in terms:
            term = TermInfo(name=label, slug=slug, term_id=term_id)
            self.terms[term_id] = term
            values.append(term)
        self.attributes.setdefault(product_id, []).append(
            AttributeInfo(name=name, is_taxonomy=True, is_variation=is_variation, values=values)
        )

    def add_text_attribute(self, product_id, name, labels, is_variation=True):
        values = [TermInfo(name=label, slug=label.lower()) for label in labels]
        self.attributes.setdefault(product_id, []).append(
            AttributeInfo(name=name, is_taxonomy=False, is_variation=is_variation, values=values)
        )

    def tag_image(self, image_id, product_id, tags):
        self.meta[(IMAGE, image_id, f"woosvi_slug_{product_id}")] = tags

    # HostCatalog
    def get_product(self, product_id):
        return self.products.get(product_id)

    def get_variation_attributes(self, product_id):
        return self.attributes.get(product_id, [])

    def get_meta(self, entity_id, key, kind=PRODUCT):
        self.meta_reads.append((kind, entity_id, key))
        return copy.deepcopy(self.meta.get((kind, entity_id, key)))

    def set_meta(self, entity_id, key, value, kind=PRODUCT):
        self.meta_writes.append((kind, entity_id, key))
        self.meta[(kind, entity_id, key)] = copy.deepcopy(value)

    def delete_meta(self, entity_id, key, kind=PRODUCT):
        self.meta.pop((kind, entity_id, key), None)

    def get_attached_image_ids(self, product_id):
        return list(self.attached.get(product_id, []))

    def get_canonical_product_id(self, product_id):
        return self.canonical.get(product_id, product_id)

    def get_canonical_counterpart(self, term_id):
        return self.term_links.get(term_id, term_id)

    def get_term(self, term_id):
        return self.terms.get(term_id)

    def get_image_urls(self, image_id, size):
        if image_id not in self.images:
            return None
        return ImageInfo(url=f"/media/{image_id}-{size}.jpg", width=800, height=600)


@pytest.fixture
def host():
    return FakeHost()


@pytest.fixture
def options():
    return GalleryOptions(placeholder_url="/static/placeholder.png")
