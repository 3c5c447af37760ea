from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from storefront.application.create_order import CreateOrderHandler
from storefront.application.show_order import ShowOrderHandler
from storefront.infrastructure import bootstrap
from storefront.infrastructure.api.models import OrderEnvelope, OrderOut

router = APIRouter(prefix="/api/orders", tags=["orders"])


def get_create_handler(request: Request) -> CreateOrderHandler:
    return bootstrap.create_order_handler(request.app.state.settings)


def get_show_handler(request: Request) -> ShowOrderHandler:
    return bootstrap.show_order_handler(request.app.state.settings)


@router.post("", status_code=201, response_model=OrderEnvelope)
def create_order(
    payload: dict[str, Any] = Body(...),
    handler: CreateOrderHandler = Depends(get_create_handler),
) -> OrderEnvelope:
    dto = handler.handle(payload)
    return OrderEnvelope(message="Order created successfully", data=OrderOut.from_dto(dto))


@router.get("/{order_number}", response_model=OrderEnvelope)
def get_order(
    order_number: str,
    handler: ShowOrderHandler = Depends(get_show_handler),
) -> OrderEnvelope:
    dto = handler.handle(order_number)
    return OrderEnvelope(message="Order retrieved successfully", data=OrderOut.from_dto(dto))
