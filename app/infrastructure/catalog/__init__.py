"""Question catalog loading."""

from app.infrastructure.catalog.catalog_loader import DEFAULT_CATALOG_PATH, load_catalog

__all__ = ["DEFAULT_CATALOG_PATH", "load_catalog"]
