import logging
from typing import Protocol

import requests
from pydantic import TypeAdapter, ValidationError

from order_service.errors import UpstreamUnavailableError
from order_service.models import StockStatus

logger = logging.getLogger(__name__)

_STOCK_RESPONSE = TypeAdapter(list[StockStatus])


class InventoryClient(Protocol):
    def check_stock(self, sku_codes: list[str]) -> dict[str, bool]:
        ...


class HttpInventoryClient:
    """Blocking client for the inventory service's ``/api/inventory`` endpoint."""

    def __init__(self, base_url: str, timeout_s: float = 3.0, session: requests.Session | None = None):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.session = session or requests.Session()

    def check_stock(self, sku_codes: list[str]) -> dict[str, bool]:
        """
        Ask the inventory service which SKU codes are in stock.

        Returns a mapping of sku_code -> in_stock for every code the service
        answered for. Any transport failure, non-200 status or malformed body
        raises UpstreamUnavailableError.
        """
        try:
            resp = self.session.get(
                f"{self.base_url}/api/inventory",
                params={"sku_code": sku_codes},
                timeout=self.timeout_s,
            )
        except requests.Timeout as exc:
            logger.warning("Inventory lookup timed out after %ss", self.timeout_s)
            raise UpstreamUnavailableError("Inventory timeout", timed_out=True) from exc
        except requests.RequestException as exc:
            logger.warning("Inventory lookup failed: %s", exc)
            raise UpstreamUnavailableError("Inventory error") from exc

        if resp.status_code != 200:
            logger.warning("Inventory lookup returned %s: %s", resp.status_code, resp.text)
            raise UpstreamUnavailableError(f"Inventory returned {resp.status_code}")

        try:
            entries = _STOCK_RESPONSE.validate_python(resp.json())
        except (ValidationError, ValueError) as exc:
            logger.warning("Malformed inventory response: %s", exc)
            raise UpstreamUnavailableError("Malformed inventory response") from exc
        return {entry.sku_code: entry.in_stock for entry in entries}
