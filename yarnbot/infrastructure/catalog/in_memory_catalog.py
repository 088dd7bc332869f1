"""In-memory product catalog, optionally loaded from a JSON file.

JSON shape: a list of objects with ``id``, ``name``, ``price``, ``stock``
and optional ``category`` / ``description`` (the admin export format).
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

from yarnbot.application.ports.catalog_port import ProductCatalogPort, ProductFilter
from yarnbot.domain.errors import CatalogError
from yarnbot.domain.models import Product

logger = logging.getLogger(__name__)


def _to_product(raw: Mapping[str, Any]) -> Product:
    try:
        return Product(
            id=str(raw.get("id") or raw["_id"]),
            name=str(raw["name"]),
            price=float(raw["price"]),
            stock=int(raw.get("stock", 0)),
            category=str(raw.get("category") or ""),
            description=str(raw.get("description") or ""),
        )
    except (KeyError, TypeError, ValueError) as ex:
        raise CatalogError(f"invalid product record: {ex}") from ex


class InMemoryProductCatalog(ProductCatalogPort):
    """Catalog over a fixed product list, in insertion order."""

    def __init__(self, products: Iterable[Product] = ()) -> None:
        self._products = tuple(products)

    @classmethod
    def from_json(cls, path: str | Path) -> InMemoryProductCatalog:
        p = Path(path)
        try:
            raw = json.loads(p.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as ex:
            raise CatalogError(f"cannot read catalog {p}: {ex}") from ex
        if not isinstance(raw, list):
            raise CatalogError(f"catalog {p} must contain a JSON list")
        products = [_to_product(item) for item in raw if isinstance(item, Mapping)]
        logger.info("Loaded %d products from %s", len(products), p)
        return cls(products)

    def find_products(self, product_filter: ProductFilter) -> list[Product]:
        query = (product_filter.query or "").lower()
        category = (product_filter.category or "").lower()
        found: list[Product] = []
        for product in self._products:
            if product_filter.in_stock and product.stock <= 0:
                continue
            if category and product.category.lower() != category:
                continue
            haystack = f"{product.name} {product.category} {product.description}".lower()
            if query and query not in haystack:
                continue
            found.append(product)
            if len(found) >= product_filter.limit:
                break
        return found
