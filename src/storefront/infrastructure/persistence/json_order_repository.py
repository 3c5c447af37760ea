"""JSON-file-backed implementation of OrderRepository.

The file holds one collection of order documents.  Inserts rewrite the
whole file through a temporary file and ``os.replace`` so a reader never
sees a half-written collection.
"""

from __future__ import annotations

import json
import os
import threading
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from storefront.domain.exceptions import PersistenceConflict
from storefront.domain.model.identifiers import new_object_id
from storefront.domain.model.order import Order, OrderItem, OrderStatus
from storefront.domain.model.value_objects import Money, Quantity, TaxRate
from storefront.domain.repository.order_repository import OrderRepository

_WRITE_LOCK = threading.Lock()


class JsonOrderRepository(OrderRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- OrderRepository interface --------------------------------------------

    def add(self, order: Order) -> None:
        with _WRITE_LOCK:
            orders = self._load_raw()
            if any(raw["orderNumber"] == order.order_number for raw in orders):
                raise PersistenceConflict(
                    f"Order number {order.order_number} already exists"
                )
            doc = self._to_raw(order)
            doc["_id"] = new_object_id()
            orders.append(doc)
            self._persist_raw(orders)
        order.id = doc["_id"]

    def get_by_order_number(self, order_number: str) -> Order | None:
        for raw in self._load_raw():
            if raw["orderNumber"] == order_number:
                return self._to_domain(raw)
        return None

    def list_by_customer(self, customer_id: str) -> list[Order]:
        return [
            self._to_domain(raw)
            for raw in self._load_raw()
            if raw["customerId"] == customer_id
        ]

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(order: Order) -> dict:
        return {
            "_id": order.id,
            "orderNumber": order.order_number,
            "customerId": order.customer_id,
            "items": [
                {
                    "productId": item.product_id,
                    "productName": item.product_name,
                    "quantity": item.quantity.value,
                    "unitPrice": str(item.unit_price.amount),
                    "taxRate": str(item.tax_rate.value),
                    "subtotal": str(item.subtotal.amount),
                }
                for item in order.items
            ],
            "subtotal": str(order.subtotal.amount),
            "taxAmount": str(order.tax_amount.amount),
            "discountAmount": str(order.discount_amount.amount),
            "totalAmount": str(order.total_amount.amount),
            "currency": order.total_amount.currency,
            "status": order.status.value,
            "paymentMethod": order.payment_method,
            "registeredAt": order.registered_at.isoformat(),
        }

    @staticmethod
    def _to_domain(raw: dict) -> Order:
        currency = raw.get("currency", "USD")
        items = [
            OrderItem(
                product_id=i["productId"],
                product_name=i["productName"],
                quantity=Quantity(i["quantity"]),
                unit_price=Money(Decimal(i["unitPrice"]), currency),
                tax_rate=TaxRate(Decimal(i["taxRate"])),
            )
            for i in raw["items"]
        ]
        return Order(
            id=raw["_id"],
            order_number=raw["orderNumber"],
            customer_id=raw["customerId"],
            items=items,
            subtotal=Money(Decimal(raw["subtotal"]), currency),
            tax_amount=Money(Decimal(raw["taxAmount"]), currency),
            discount_amount=Money(Decimal(raw["discountAmount"]), currency),
            total_amount=Money(Decimal(raw["totalAmount"]), currency),
            status=OrderStatus(raw["status"]),
            payment_method=raw["paymentMethod"],
            registered_at=datetime.fromisoformat(raw["registeredAt"]),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, orders: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(orders, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
