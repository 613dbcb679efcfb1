import logging
import sqlite3
from typing import Iterable, Protocol

from common import db as common_db

logger = logging.getLogger(__name__)


class StockStoreUnavailableError(Exception):
    """The stock store could not be read."""


class StockStore(Protocol):
    def find_quantities(self, sku_codes: Iterable[str]) -> dict[str, int]:
        ...


class SqliteStockStore:
    def __init__(self, db_path: str):
        self.db_path = db_path

    def find_quantities(self, sku_codes: Iterable[str]) -> dict[str, int]:
        codes = list(sku_codes)
        if not codes:
            return {}
        placeholders = ", ".join("?" for _ in codes)
        try:
            conn = common_db.connect(self.db_path)
            try:
                rows = conn.execute(
                    f"SELECT sku_code, quantity FROM inventory WHERE sku_code IN ({placeholders})",
                    codes,
                ).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as exc:
            logger.error("Stock lookup failed for %s: %s", codes, exc)
            raise StockStoreUnavailableError(str(exc)) from exc
        return {sku_code: int(quantity) for sku_code, quantity in rows}
