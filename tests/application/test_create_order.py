"""Integration tests for the CreateOrder use case.

Uses in-memory fake repositories, no file I/O.
"""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from storefront.application.create_order import CreateOrderHandler
from storefront.application.dto import OrderItemSpec
from storefront.domain.exceptions import (
    EntityNotFoundError,
    InsufficientStockError,
    PersistenceConflict,
    ValidationError,
)
from storefront.domain.model.product import Product
from storefront.domain.model.value_objects import Money
from tests.fakes import FakeOrderRepository, FakeProductRepository

CUSTOMER = "64b7f0c2a1b2c3d4e5f60799"
WIDGET = "64b7f0c2a1b2c3d4e5f60718"
GADGET = "64b7f0c2a1b2c3d4e5f60719"
NOW = datetime(2024, 3, 1, 9, 30, tzinfo=timezone.utc)


def _body(**overrides) -> dict:
    body = {
        "customerId": CUSTOMER,
        "items": [
            {
                "productId": WIDGET,
                "productName": "Widget",
                "quantity": 2,
                "unitPrice": 10,
                "taxRate": 0.1,
            }
        ],
        "discountAmount": 1,
    }
    body.update(overrides)
    return body


def _products() -> list[Product]:
    return [
        Product(id=WIDGET, name="Widget", base_price=Money.of("15.00"), tax_rate_percent=Decimal("25"), stock_amount=10),
        Product(id=GADGET, name="Gadget", base_price=Money.of("0.33"), tax_rate_percent=Decimal("0"), stock_amount=1),
    ]


def _setup(
    reserve_stock: bool = False,
    order_repo: FakeOrderRepository | None = None,
    numbers: list[str] | None = None,
) -> tuple[CreateOrderHandler, FakeOrderRepository, FakeProductRepository]:
    """Build handler with fake repos and a fixed clock."""
    if order_repo is None:
        order_repo = FakeOrderRepository()
    product_repo = FakeProductRepository(_products())
    kwargs = {}
    if numbers is not None:
        pending = iter(numbers)
        kwargs["number_generator"] = lambda now: next(pending)
    handler = CreateOrderHandler(
        order_repo,
        product_repo,
        reserve_stock=reserve_stock,
        clock=lambda: NOW,
        **kwargs,
    )
    return handler, order_repo, product_repo


class TestCreateOrderHappyPath:

    def test_reference_totals(self):
        handler, _, _ = _setup()
        dto = handler.handle(_body())
        assert dto.subtotal == Decimal("20.00")
        assert dto.tax_amount == Decimal("2.00")
        assert dto.discount_amount == Decimal("1.00")
        assert dto.total_amount == Decimal("21.00")
        assert dto.items[0].subtotal == Decimal("20.00")

    def test_record_fields(self):
        handler, _, _ = _setup()
        dto = handler.handle(_body())
        assert dto.status == "registered"
        assert dto.payment_method == "invoice"
        assert dto.registered_at == NOW
        assert dto.customer_id == CUSTOMER
        assert dto.order_number.startswith("ORD-")

    def test_persists_order_with_id(self):
        handler, order_repo, _ = _setup()
        dto = handler.handle(_body())
        saved = order_repo.get_by_order_number(dto.order_number)
        assert saved is not None
        assert saved.id == dto.id
        assert len(order_repo) == 1

    def test_discount_optional(self):
        handler, _, _ = _setup()
        body = _body()
        del body["discountAmount"]
        dto = handler.handle(body)
        assert dto.discount_amount == Decimal("0.00")
        assert dto.total_amount == Decimal("22.00")

    def test_payment_method_honoured(self):
        handler, _, _ = _setup()
        assert handler.handle(_body(paymentMethod="card")).payment_method == "card"

    def test_snake_case_body_accepted(self):
        handler, _, _ = _setup()
        body = {
            "customer_id": CUSTOMER,
            "items": [
                {"product_id": WIDGET, "product_name": "Widget", "quantity": 3, "unit_price": 0.33, "tax_rate": 0}
            ],
        }
        assert handler.handle(body).subtotal == Decimal("0.99")

    def test_identical_requests_get_distinct_numbers(self):
        handler, order_repo, _ = _setup()
        first = handler.handle(_body())
        second = handler.handle(_body())
        assert first.order_number != second.order_number
        assert len(order_repo) == 2


class TestClientSuppliedStatus:

    @pytest.mark.parametrize("status", ["paid", "delivered", "bogus"])
    def test_status_is_always_registered(self, status):
        handler, _, _ = _setup()
        assert handler.handle(_body(status=status)).status == "registered"


class TestCreateOrderValidation:

    def test_empty_items_rejected_and_nothing_stored(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(_body(items=[]))
        assert exc_info.value.violations[0]["field"] == "items"
        assert len(order_repo) == 0

    @pytest.mark.parametrize("qty", [0, -2, 1.5, "2"])
    def test_bad_quantity_rejected(self, qty):
        handler, order_repo, _ = _setup()
        body = _body()
        body["items"][0]["quantity"] = qty
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(body)
        assert exc_info.value.violations[0]["field"] == "items.0.quantity"
        assert len(order_repo) == 0

    def test_tax_rate_above_one_rejected(self):
        handler, _, _ = _setup()
        body = _body()
        body["items"][0]["taxRate"] = 1.5
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(body)
        assert exc_info.value.violations[0]["field"] == "items.0.taxRate"

    def test_invalid_customer_id_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(_body(customerId="not-an-id"))
        assert exc_info.value.violations[0]["field"] == "customerId"

    def test_all_violations_listed(self):
        handler, _, _ = _setup()
        body = {
            "customerId": "x",
            "items": [{"productId": WIDGET, "productName": "", "quantity": 0, "unitPrice": -1, "taxRate": 2}],
            "discountAmount": -5,
        }
        with pytest.raises(ValidationError) as exc_info:
            handler.handle(body)
        fields = {v["field"] for v in exc_info.value.violations}
        assert fields == {
            "customerId",
            "items.0.productName",
            "items.0.quantity",
            "items.0.unitPrice",
            "items.0.taxRate",
            "discountAmount",
        }

    def test_discount_exceeding_total_rejected(self):
        handler, order_repo, _ = _setup()
        with pytest.raises(ValidationError, match="exceeds order total"):
            handler.handle(_body(discountAmount=100))
        assert len(order_repo) == 0


class TestCreateOrderPersistenceFailures:

    def test_duplicate_order_number_surfaces_conflict(self):
        handler, order_repo, _ = _setup(numbers=["ORD-SAME-00000", "ORD-SAME-00000"])
        handler.handle(_body())
        with pytest.raises(PersistenceConflict):
            handler.handle(_body())
        assert len(order_repo) == 1

    def test_unexpected_store_error_propagates(self):
        handler, _, _ = _setup(order_repo=FakeOrderRepository(fail_with=OSError("disk full")))
        with pytest.raises(OSError, match="disk full"):
            handler.handle(_body())


class TestStockReservation:

    def test_disabled_by_default(self):
        handler, _, product_repo = _setup()
        handler.handle(_body())
        assert product_repo.get_by_id(WIDGET).stock_amount == 10

    def test_stock_decremented_when_enabled(self):
        handler, _, product_repo = _setup(reserve_stock=True)
        handler.handle(_body())
        assert product_repo.get_by_id(WIDGET).stock_amount == 8

    def test_insufficient_stock_rejects_order(self):
        handler, order_repo, _ = _setup(reserve_stock=True)
        body = _body()
        body["items"][0]["quantity"] = 11
        with pytest.raises(InsufficientStockError):
            handler.handle(body)
        assert len(order_repo) == 0

    def test_stock_released_when_store_fails(self):
        handler, _, product_repo = _setup(
            reserve_stock=True,
            order_repo=FakeOrderRepository(fail_with=PersistenceConflict("duplicate")),
        )
        with pytest.raises(PersistenceConflict):
            handler.handle(_body())
        assert product_repo.get_by_id(WIDGET).stock_amount == 10

    def test_requires_product_repository(self):
        with pytest.raises(ValueError):
            CreateOrderHandler(FakeOrderRepository(), reserve_stock=True)


class TestCreateOrderFromCatalog:

    def test_price_snapshot_and_tax_conversion(self):
        handler, order_repo, product_repo = _setup()
        dto = handler.handle_catalog(CUSTOMER, [OrderItemSpec(WIDGET, 2)])

        assert dto.items[0].unit_price == Decimal("15.00")
        assert dto.items[0].tax_rate == Decimal("0.25")
        assert dto.subtotal == Decimal("30.00")
        assert dto.tax_amount == Decimal("7.50")
        assert dto.total_amount == Decimal("37.50")

        # A later price change does not touch the stored order
        widget = product_repo.get_by_id(WIDGET)
        widget.base_price = Money.of("99.99")
        product_repo.save(widget)
        saved = order_repo.get_by_order_number(dto.order_number)
        assert saved.total_amount == Money.of("37.50")

    def test_discount_and_payment_method(self):
        handler, _, _ = _setup()
        dto = handler.handle_catalog(
            CUSTOMER, [OrderItemSpec(GADGET, 3)], discount_amount="0.09", payment_method="card"
        )
        assert dto.subtotal == Decimal("0.99")
        assert dto.total_amount == Decimal("0.90")
        assert dto.payment_method == "card"

    def test_unknown_product_rejected(self):
        handler, _, _ = _setup()
        with pytest.raises(EntityNotFoundError, match="Product not found"):
            handler.handle_catalog(CUSTOMER, [OrderItemSpec("c" * 24, 1)])
