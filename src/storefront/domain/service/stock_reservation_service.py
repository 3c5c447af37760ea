"""Domain service: Stock Reservation.

Takes catalog stock for the lines of a new order, and gives it back when
the order could not be stored.  Pricing never calls this; the order
assembler does, and only when stock reservation is switched on.

The two-phase approach (validate-then-mutate) ensures we never leave
stock partially decremented if one product fails validation.  Reserve and
release run one at a time within a process, so two orders cannot both
read the same stock level and each take it.
"""

from __future__ import annotations

import threading
from collections.abc import Sequence

from storefront.domain.exceptions import EntityNotFoundError, InsufficientStockError
from storefront.domain.model.order import OrderItem
from storefront.domain.model.product import Product
from storefront.domain.repository.product_repository import ProductRepository

_STOCK_LOCK = threading.Lock()


class StockReservationService:

    def __init__(self, product_repo: ProductRepository) -> None:
        self._product_repo = product_repo

    def reserve(self, items: Sequence[OrderItem]) -> None:
        """Remove the ordered quantities from stock.

        Phase 1 loads every product and checks the summed demand per
        product; phase 2 mutates and saves.  Nothing is saved if any line
        fails.
        """
        demand = self._demand(items)

        with _STOCK_LOCK:
            # Phase 1: load and validate
            products: list[tuple[Product, int]] = []
            for product_id, qty in demand.items():
                product = self._product_repo.get_by_id(product_id)
                if product is None:
                    raise EntityNotFoundError(f"Product not found: '{product_id}'")
                if qty > product.stock_amount:
                    raise InsufficientStockError(
                        f"Insufficient stock for {product.name} "
                        f"(need {qty}, have {product.stock_amount} available)"
                    )
                products.append((product, qty))

            # Phase 2: mutate and persist
            for product, qty in products:
                product.remove_stock(qty)
                self._product_repo.save(product)

    def release(self, items: Sequence[OrderItem]) -> None:
        """Put previously reserved quantities back into stock."""
        with _STOCK_LOCK:
            for product_id, qty in self._demand(items).items():
                product = self._product_repo.get_by_id(product_id)
                if product is None:
                    raise EntityNotFoundError(f"Product not found: '{product_id}'")
                product.add_stock(qty)
                self._product_repo.save(product)

    @staticmethod
    def _demand(items: Sequence[OrderItem]) -> dict[str, int]:
        demand: dict[str, int] = {}
        for item in items:
            demand[item.product_id] = demand.get(item.product_id, 0) + item.quantity.value
        return demand
