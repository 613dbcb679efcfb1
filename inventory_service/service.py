import logging
from typing import Iterable

from inventory_service.models import InventoryResponse
from inventory_service.store import StockStore

logger = logging.getLogger(__name__)


class InventoryService:
    def __init__(self, store: StockStore):
        self.store = store

    def is_in_stock(self, sku_codes: Iterable[str]) -> list[InventoryResponse]:
        """
        Report availability for each distinct SKU code.

        Codes missing from the store are reported as out of stock. Store
        failures propagate as StockStoreUnavailableError.
        """
        codes = list(dict.fromkeys(sku_codes))
        quantities = self.store.find_quantities(codes)
        missing = [code for code in codes if code not in quantities]
        if missing:
            logger.info("Unknown SKU codes treated as out of stock: %s", missing)
        return [
            InventoryResponse(sku_code=code, in_stock=quantities.get(code, 0) > 0)
            for code in codes
        ]
