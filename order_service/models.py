from decimal import Decimal

from pydantic import BaseModel, Field, StrictBool, StrictStr


class OrderLineItemRequest(BaseModel):
    sku_code: str = Field(min_length=1)
    price: Decimal = Field(ge=0)
    quantity: int = Field(ge=0)


class OrderRequest(BaseModel):
    order_line_items: list[OrderLineItemRequest] = Field(min_length=1)


class OrderResponse(BaseModel):
    order_id: str
    status: str
    message: str


class OrderLineItemView(BaseModel):
    sku_code: str
    price: Decimal
    quantity: int


class OrderView(BaseModel):
    order_id: str
    order_line_items: list[OrderLineItemView]


class ConfigRequest(BaseModel):
    inventory_timeout_s: float | None = None


class StockStatus(BaseModel):
    """One entry of the inventory service's availability response."""

    sku_code: StrictStr
    in_stock: StrictBool
