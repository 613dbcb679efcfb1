"""Failures raised while placing an order.

The routes module translates these into HTTP responses.
"""


class OrderPlacementError(Exception):
    """Base class for placement failures. Nothing is persisted when raised."""


class OutOfStockError(OrderPlacementError):
    def __init__(self, sku_codes: list[str]):
        self.sku_codes = list(sku_codes)
        super().__init__(f"Products not in stock: {', '.join(self.sku_codes)}")


class UpstreamUnavailableError(OrderPlacementError):
    """The inventory service could not be reached or answered with an error."""

    def __init__(self, message: str, timed_out: bool = False):
        self.timed_out = timed_out
        super().__init__(message)


class PublishError(Exception):
    """An event could not be handed to the message broker."""
