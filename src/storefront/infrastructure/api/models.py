from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from storefront.application.dto import OrderDTO


class _OutModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderItemOut(_OutModel):
    product_id: str
    product_name: str
    quantity: int
    unit_price: float
    tax_rate: float
    subtotal: float


class OrderOut(_OutModel):
    id: str
    order_number: str
    customer_id: str
    items: list[OrderItemOut]
    subtotal: float
    tax_amount: float
    discount_amount: float
    total_amount: float
    status: str
    payment_method: str
    registered_at: datetime

    @staticmethod
    def from_dto(dto: OrderDTO) -> OrderOut:
        return OrderOut(
            id=dto.id,
            order_number=dto.order_number,
            customer_id=dto.customer_id,
            items=[
                OrderItemOut(
                    product_id=item.product_id,
                    product_name=item.product_name,
                    quantity=item.quantity,
                    unit_price=float(item.unit_price),
                    tax_rate=float(item.tax_rate),
                    subtotal=float(item.subtotal),
                )
                for item in dto.items
            ],
            subtotal=float(dto.subtotal),
            tax_amount=float(dto.tax_amount),
            discount_amount=float(dto.discount_amount),
            total_amount=float(dto.total_amount),
            status=dto.status,
            payment_method=dto.payment_method,
            registered_at=dto.registered_at,
        )


class OrderEnvelope(BaseModel):
    success: bool = True
    message: str
    data: OrderOut
