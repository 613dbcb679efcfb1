from datetime import datetime, timezone
from decimal import Decimal
from typing import Protocol

from common import db as common_db

from order_service.domain import LineItem, Order


class OrderRepository(Protocol):
    def save(self, order: Order) -> None:
        ...

    def get(self, order_id: str) -> Order | None:
        ...


class SqliteOrderRepository:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def save(self, order: Order) -> None:
        created_at = datetime.now(timezone.utc).isoformat()
        conn = common_db.connect(self.db_path)
        try:
            # Order row and line items commit together.
            with conn:
                conn.execute(
                    "INSERT INTO orders (order_id, created_at) VALUES (?, ?)",
                    (order.order_id, created_at),
                )
                conn.executemany(
                    "INSERT INTO order_line_items (order_id, position, sku_code, price, quantity) "
                    "VALUES (?, ?, ?, ?, ?)",
                    [
                        (order.order_id, position, item.sku_code, str(item.price), item.quantity)
                        for position, item in enumerate(order.line_items)
                    ],
                )
        finally:
            conn.close()

    def get(self, order_id: str) -> Order | None:
        conn = common_db.connect(self.db_path)
        try:
            found = conn.execute(
                "SELECT order_id FROM orders WHERE order_id = ?",
                (order_id,),
            ).fetchone()
            if not found:
                return None
            rows = conn.execute(
                "SELECT sku_code, price, quantity FROM order_line_items "
                "WHERE order_id = ? ORDER BY position",
                (order_id,),
            ).fetchall()
        finally:
            conn.close()
        items = tuple(
            LineItem(sku_code=sku_code, quantity=int(quantity), price=Decimal(price))
            for sku_code, price, quantity in rows
        )
        return Order(order_id=order_id, line_items=items)
