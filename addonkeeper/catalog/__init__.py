# addonkeeper/catalog/__init__.py
from __future__ import annotations

from .client import DEFAULT_CATALOG_URL, fetchCatalog
from .models import Catalog, CatalogAddon, CatalogSource

__all__ = ["DEFAULT_CATALOG_URL", "fetchCatalog", "Catalog", "CatalogAddon", "CatalogSource"]
