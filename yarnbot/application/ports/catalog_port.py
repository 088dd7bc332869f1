"""Product catalog port used to enrich product and price answers with live data."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from yarnbot.domain.models import Product


@dataclass(frozen=True)
class ProductFilter:
    """
    Catalog query.

    - query:     case-insensitive substring matched against name, category and description
    - category:  exact category (case-insensitive), None for all
    - in_stock:  only products with stock > 0
    - limit:     maximum number of products returned
    """

    query: str | None = None
    category: str | None = None
    in_stock: bool = True
    limit: int = 3


class ProductCatalogPort(ABC):
    """Port for the product catalog collaborator."""

    @abstractmethod
    def find_products(self, product_filter: ProductFilter) -> list[Product]:
        """Return matching products, best first.

        Raises:
            CatalogError: If the catalog cannot be read
        """
        ...
