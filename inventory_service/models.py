from pydantic import BaseModel


class InventoryResponse(BaseModel):
    sku_code: str
    in_stock: bool


class ConfigRequest(BaseModel):
    delay_ms: int | None = None
    fail_mode: str | None = None
    fail_code: int | None = None
