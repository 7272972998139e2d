"""Document schemas for the remote collections.

Each class describes the documents of one collection. Prices and totals
are stored as floats; the domain converts them to Money on the way in.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field

from construapp.domain.model.order import Order, OrderLine, OrderStatus
from construapp.domain.model.product import Product
from construapp.domain.model.value_objects import Money, Quantity


class ProductDocument(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: str = ""
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    unit: str = ""
    category: str = ""
    image: str = ""
    description: str = ""
    specs: dict[str, Any] = Field(default_factory=dict)

    def to_domain(self, product_id: str) -> Product:
        return Product(
            id=product_id,
            name=self.name,
            price=None if self.price is None else Money.of(self.price),
            unit=self.unit,
            category=self.category,
            image=self.image,
            description=self.description,
            specs=tuple((str(k), str(v)) for k, v in self.specs.items()),
        )

    @staticmethod
    def from_domain(product: Product) -> ProductDocument:
        return ProductDocument(
            name=product.name,
            price=None if product.price is None else product.price.to_float(),
            unit=product.unit,
            category=product.category,
            image=product.image,
            description=product.description,
            specs=dict(product.specs),
        )


class OrderItemDocument(BaseModel):
    id: str
    name: str
    qty: int = Field(ge=1)
    price: float = Field(ge=0, allow_inf_nan=False)
    unit: str = ""


class OrderDocument(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    customer_id: Optional[str] = Field(default=None, alias="customerId")
    status: str = OrderStatus.PENDING.value
    total: float = Field(ge=0, allow_inf_nan=False)
    address: str
    phone: str
    items: list[OrderItemDocument]
    idempotency_key: str = Field(alias="idempotencyKey")
    timestamp: Optional[datetime] = None

    def to_domain(self, order_id: str) -> Order:
        return Order(
            id=order_id,
            customer_id=self.customer_id,
            address=self.address,
            phone=self.phone,
            items=[
                OrderLine(
                    product_id=item.id,
                    name=item.name,
                    quantity=Quantity(item.qty),
                    unit_price=Money.of(item.price),
                    unit=item.unit,
                )
                for item in self.items
            ],
            idempotency_key=self.idempotency_key,
            status=OrderStatus(self.status),
            created_at=self.timestamp,
        )

    @staticmethod
    def from_domain(order: Order) -> OrderDocument:
        return OrderDocument(
            customer_id=order.customer_id,
            status=order.status.value,
            total=order.total.to_float(),
            address=order.address,
            phone=order.phone,
            items=[
                OrderItemDocument(
                    id=item.product_id,
                    name=item.name,
                    qty=item.quantity.value,
                    price=item.unit_price.to_float(),
                    unit=item.unit,
                )
                for item in order.items
            ],
            idempotency_key=order.idempotency_key,
        )

    def to_write(self) -> dict[str, Any]:
        """Fields sent on insert; the store fills in ``timestamp``."""
        return self.model_dump(by_alias=True, exclude={"timestamp"})
