import logging

from common.ids import new_order_id

from order_service.domain import LineItem, Order
from order_service.errors import OutOfStockError, PublishError
from order_service.events import OrderPlacedEvent
from order_service.inventory_client import InventoryClient
from order_service.models import OrderLineItemRequest, OrderRequest
from order_service.publisher import Publisher
from order_service.repository import OrderRepository
from order_service.tracing import SpanHook, log_span

logger = logging.getLogger(__name__)


class OrderService:
    def __init__(
        self,
        repository: OrderRepository,
        inventory_client: InventoryClient,
        publisher: Publisher,
        topic: str = "notificationTopic",
        span: SpanHook = log_span,
    ):
        self.repository = repository
        self.inventory_client = inventory_client
        self.publisher = publisher
        self.topic = topic
        self.span = span

    def place_order(self, order_request: OrderRequest) -> str:
        """
        Place an order if every requested product is in stock.

        The order is persisted and an OrderPlacedEvent published only on
        success. Raises OutOfStockError when any product is unavailable, or
        UpstreamUnavailableError when the inventory service cannot answer.
        """
        line_items = tuple(self._map_line_item(item) for item in order_request.order_line_items)
        order = Order(order_id=new_order_id(), line_items=line_items)
        sku_codes = order.sku_codes

        with self.span("InventoryServiceLookup", call="inventory-service"):
            stock = self.inventory_client.check_stock(sku_codes)

        # Codes the inventory service did not answer for count as unavailable.
        unavailable = [code for code in sku_codes if not stock.get(code, False)]
        if unavailable:
            logger.info("Rejected order: not in stock %s", unavailable)
            raise OutOfStockError(unavailable)

        self.repository.save(order)
        self._publish_placed(order)
        logger.info("Placed order %s with %d line items", order.order_id, len(line_items))
        return order.order_id

    def get_order(self, order_id: str) -> Order | None:
        return self.repository.get(order_id)

    def _publish_placed(self, order: Order) -> None:
        event = OrderPlacedEvent(order_id=order.order_id)
        try:
            self.publisher.publish(self.topic, event.to_dict())
        except PublishError:
            # Order is already committed.
            logger.exception("Order %s persisted but OrderPlacedEvent not published", order.order_id)

    @staticmethod
    def _map_line_item(item: OrderLineItemRequest) -> LineItem:
        return LineItem(sku_code=item.sku_code, quantity=item.quantity, price=item.price)