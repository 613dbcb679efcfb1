from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class LineItem:
    sku_code: str
    quantity: int
    price: Decimal


@dataclass(frozen=True)
class Order:
    order_id: str
    line_items: tuple[LineItem, ...]

    @property
    def sku_codes(self) -> list[str]:
        # Distinct codes in first-seen order.
        return list(dict.fromkeys(item.sku_code for item in self.line_items))
