"""Input contract for order creation.

Requests arrive in camelCase (``customerId``, ``unitPrice``); snake_case
names are accepted too.  Every problem is reported at once as a domain
ValidationError with one violation per field.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from storefront.domain.exceptions import ValidationError
from storefront.domain.model.identifiers import OBJECT_ID_PATTERN
from storefront.domain.model.value_objects import MAX_AMOUNT, MAX_QUANTITY


class _InputModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class OrderItemIn(_InputModel):
    product_id: str = Field(..., pattern=OBJECT_ID_PATTERN)
    product_name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=1, le=MAX_QUANTITY, strict=True)
    unit_price: Decimal = Field(..., ge=0, le=MAX_AMOUNT)
    tax_rate: Decimal = Field(..., ge=0, le=1)

    @field_validator("unit_price", "tax_rate", mode="before")
    @classmethod
    def _exact_decimal(cls, value: Any) -> Any:
        if isinstance(value, float):
            return Decimal(str(value))
        return value


class CreateOrderIn(_InputModel):
    """Order creation request.

    No ``status`` field: new orders always start as ``registered`` and a
    supplied status is ignored like any other unknown key.
    """

    customer_id: str = Field(..., pattern=OBJECT_ID_PATTERN)
    items: list[OrderItemIn] = Field(..., min_length=1)
    discount_amount: Decimal = Field(default=Decimal("0"), ge=0, le=MAX_AMOUNT)
    payment_method: str | None = None

    @field_validator("discount_amount", mode="before")
    @classmethod
    def _exact_discount(cls, value: Any) -> Any:
        if value is None:
            return Decimal("0")
        if isinstance(value, float):
            return Decimal(str(value))
        return value


def parse_create_order(raw: Mapping[str, Any] | CreateOrderIn) -> CreateOrderIn:
    if isinstance(raw, CreateOrderIn):
        return raw
    try:
        return CreateOrderIn.model_validate(raw)
    except PydanticValidationError as exc:
        violations = [
            {
                "field": ".".join(str(part) for part in err["loc"]) or "body",
                "message": err["msg"],
            }
            for err in exc.errors()
        ]
        raise ValidationError("Validation failed", violations) from exc
