"""JSON-file-backed implementation of ProductRepository.

Writes go through a temporary file and ``os.replace``, like the order
collection.
"""

from __future__ import annotations

import json
import os
import threading
from decimal import Decimal
from pathlib import Path

from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from storefront.domain.repository.product_repository import ProductRepository

_WRITE_LOCK = threading.Lock()


class JsonProductRepository(ProductRepository):

    def __init__(self, file_path: Path) -> None:
        self._file_path = file_path
        self._ensure_file()

    # --- ProductRepository interface ------------------------------------------

    def get_by_id(self, product_id: str) -> Product | None:
        for raw in self._load_raw():
            if raw["_id"] == product_id:
                return self._to_domain(raw)
        return None

    def list_all(self) -> list[Product]:
        return [self._to_domain(raw) for raw in self._load_raw()]

    def save(self, product: Product) -> None:
        with _WRITE_LOCK:
            records = self._load_raw()
            replaced = False
            for i, raw in enumerate(records):
                if raw["_id"] == product.id:
                    records[i] = self._to_raw(product)
                    replaced = True
                    break
            if not replaced:
                records.append(self._to_raw(product))
            self._persist_raw(records)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _to_raw(product: Product) -> dict:
        return {
            "_id": product.id,
            "name": product.name,
            "basePrice": str(product.base_price.amount),
            "currency": product.base_price.currency,
            "taxRate": str(product.tax_rate_percent),
            "stockAmount": product.stock_amount,
        }

    @staticmethod
    def _to_domain(raw: dict) -> Product:
        return Product(
            id=raw["_id"],
            name=raw["name"],
            base_price=Money(Decimal(raw["basePrice"]), raw.get("currency", "USD")),
            tax_rate_percent=Decimal(raw.get("taxRate", "0")),
            stock_amount=raw.get("stockAmount", 0),
        )

    # --- File helpers ---------------------------------------------------------

    def _load_raw(self) -> list[dict]:
        return json.loads(self._file_path.read_text(encoding="utf-8"))

    def _persist_raw(self, records: list[dict]) -> None:
        tmp_path = self._file_path.with_suffix(self._file_path.suffix + ".tmp")
        tmp_path.write_text(json.dumps(records, indent=2) + "\n", encoding="utf-8")
        os.replace(tmp_path, self._file_path)

    def _ensure_file(self) -> None:
        if not self._file_path.exists():
            self._file_path.parent.mkdir(parents=True, exist_ok=True)
            self._file_path.write_text("[]", encoding="utf-8")
