"""Application service: Show Catalog use case (query)."""

from __future__ import annotations

from construapp.application.dto import ProductDTO
from construapp.application.session import StorefrontSession


class ShowCatalogHandler:

    def __init__(self, session: StorefrontSession) -> None:
        self._session = session

    def handle(self, search: str = "") -> list[ProductDTO]:
        """List the local catalog mirror, optionally filtered by *search*."""
        return [
            ProductDTO.from_product(p)
            for p in self._session.products
            if p.matches(search)
        ]

    def detail(self, product_id: str) -> ProductDTO:
        """Technical sheet for a single product."""
        return ProductDTO.from_product(self._session.find_product(product_id))
