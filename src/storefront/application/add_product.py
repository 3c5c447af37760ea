"""Application service: Add Product use case.

Registers a product with its stock level so orders can be placed
against it from the CLI.
"""

from __future__ import annotations

from storefront.domain.model.identifiers import new_object_id
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money, to_decimal
from storefront.domain.repository.product_repository import ProductRepository


class AddProductHandler:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def handle(
        self,
        name: str,
        price: str,
        tax_rate_percent: str = "0",
        stock: int = 0,
    ) -> Product:
        product = Product(
            id=new_object_id(),
            name=name.strip(),
            base_price=Money.of(price),
            tax_rate_percent=to_decimal(tax_rate_percent),
            stock_amount=stock,
        )
        self._product_repo.save(product)
        return product
