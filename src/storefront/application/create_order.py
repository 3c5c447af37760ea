"""Application service: Create Order use case (the order assembler).

Validation -> pricing -> order record -> optional stock reservation ->
one insert.  The order is either fully written or not written at all.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

from storefront.application.dto import OrderDTO, OrderItemSpec
from storefront.application.schemas import CreateOrderIn, parse_create_order
from storefront.domain.exceptions import EntityNotFoundError, PersistenceConflict
from storefront.domain.model.order import Order
from storefront.domain.repository.order_repository import OrderRepository
from storefront.domain.repository.product_repository import ProductRepository
from storefront.domain.service.order_number import (
    OrderNumberGenerator,
    generate_order_number,
)
from storefront.domain.service.pricing_engine import LineItemInput, price_order
from storefront.domain.service.stock_reservation_service import (
    StockReservationService,
)

logger = logging.getLogger(__name__)


class CreateOrderHandler:

    def __init__(
        self,
        order_repo: OrderRepository,
        product_repo: ProductRepository | None = None,
        reserve_stock: bool = False,
        default_payment_method: str = "invoice",
        number_generator: OrderNumberGenerator = generate_order_number,
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        if reserve_stock and product_repo is None:
            raise ValueError("reserve_stock requires a product repository")
        self._order_repo = order_repo
        self._product_repo = product_repo
        self._reserve_stock = reserve_stock
        self._default_payment_method = default_payment_method
        self._number_generator = number_generator
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def handle(self, raw: Mapping[str, Any] | CreateOrderIn) -> OrderDTO:
        """Create a new order from a request body.

        Steps:
        1. Validate the whole body (all violations reported together).
        2. Price the lines (per-line rounding, then totals).
        3. Build the order: fresh order number, ``registered``, timestamp.
        4. Reserve stock when enabled.
        5. Insert; release reserved stock if the insert fails.
        """
        data = parse_create_order(raw)

        priced = price_order(
            [
                LineItemInput(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=item.unit_price,
                    tax_rate=item.tax_rate,
                )
                for item in data.items
            ],
            discount_amount=data.discount_amount,
        )

        now = self._clock()
        order = Order.register(
            order_number=self._number_generator(now),
            customer_id=data.customer_id,
            items=priced.items,
            subtotal=priced.subtotal,
            tax_amount=priced.tax_amount,
            discount_amount=priced.discount_amount,
            total_amount=priced.total_amount,
            payment_method=data.payment_method or self._default_payment_method,
            registered_at=now,
        )

        stock = self._stock_service()
        if stock is not None:
            stock.reserve(order.items)

        try:
            self._order_repo.add(order)
        except PersistenceConflict:
            logger.warning("Order %s rejected by the store", order.order_number)
            self._release(stock, order)
            raise
        except Exception:
            logger.exception("Failed to store order %s", order.order_number)
            self._release(stock, order)
            raise

        logger.info(
            "Order %s created for customer %s (total %s)",
            order.order_number,
            order.customer_id,
            order.total_amount,
        )
        return OrderDTO.from_order(order)

    def handle_catalog(
        self,
        customer_id: str,
        item_specs: list[OrderItemSpec],
        discount_amount: str | None = None,
        payment_method: str | None = None,
    ) -> OrderDTO:
        """Create an order from catalog products.

        Each line snapshots the product's current price, and its
        percentage tax rate is converted to the order's fraction.
        """
        if self._product_repo is None:
            raise ValueError("Catalog orders require a product repository")

        items = []
        for spec in item_specs:
            product = self._product_repo.get_by_id(spec.product_id)
            if product is None:
                raise EntityNotFoundError(f"Product not found: '{spec.product_id}'")
            items.append(
                {
                    "productId": product.id,
                    "productName": product.name,
                    "quantity": spec.quantity,
                    "unitPrice": product.base_price.amount,  # <-- price snapshot
                    "taxRate": product.order_tax_rate.value,
                }
            )

        body: dict[str, Any] = {"customerId": customer_id, "items": items}
        if discount_amount is not None:
            body["discountAmount"] = discount_amount
        if payment_method is not None:
            body["paymentMethod"] = payment_method
        return self.handle(body)

    # --- Internal helpers -----------------------------------------------------

    def _stock_service(self) -> StockReservationService | None:
        if not self._reserve_stock:
            return None
        return StockReservationService(self._product_repo)  # type: ignore[arg-type]

    @staticmethod
    def _release(stock: StockReservationService | None, order: Order) -> None:
        if stock is None:
            return
        try:
            stock.release(order.items)
        except Exception:
            logger.exception(
                "Could not release stock for unsaved order %s", order.order_number
            )
