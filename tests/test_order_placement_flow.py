"""Order placement against a running inventory service backed by real stock."""
import pytest
from fastapi.testclient import TestClient

from conftest import FakePublisher, count_orders, set_stock, stock_snapshot
from order_service.app import create_app
from order_service.errors import OutOfStockError, UpstreamUnavailableError
from order_service.inventory_client import HttpInventoryClient
from order_service.models import OrderRequest
from order_service.service import OrderService

ORDER = {
    "order_line_items": [
        {"sku_code": "A", "price": "999.99", "quantity": 1},
        {"sku_code": "B", "price": "10", "quantity": 2},
    ]
}


@pytest.fixture
def placement(inventory_server, http_session, order_repository, publisher):
    base_url, _ = inventory_server
    client = HttpInventoryClient(base_url, timeout_s=3.0, session=http_session)
    return OrderService(order_repository, client, publisher)


def test_rejects_when_one_product_has_no_stock(placement, stock_db, order_db, publisher):
    set_stock(stock_db, A=5, B=0)
    before = stock_snapshot(stock_db)

    with pytest.raises(OutOfStockError) as exc_info:
        placement.place_order(OrderRequest(**ORDER))

    assert exc_info.value.sku_codes == ["B"]
    assert count_orders(order_db) == 0
    assert publisher.published == []
    assert stock_snapshot(stock_db) == before


def test_places_order_when_all_products_in_stock(placement, stock_db, order_repository, order_db, publisher):
    set_stock(stock_db, A=5, B=3)

    order_id = placement.place_order(OrderRequest(**ORDER))

    order = order_repository.get(order_id)
    assert [(item.sku_code, item.quantity) for item in order.line_items] == [("A", 1), ("B", 2)]
    assert count_orders(order_db) == 1
    assert publisher.published == [("notificationTopic", {"order_id": order_id})]


def test_unknown_product_is_rejected(placement, stock_db, order_db):
    set_stock(stock_db, A=5)

    with pytest.raises(OutOfStockError) as exc_info:
        placement.place_order(OrderRequest(order_line_items=[
            {"sku_code": "A", "price": "1", "quantity": 1},
            {"sku_code": "X", "price": "1", "quantity": 1},
        ]))

    assert exc_info.value.sku_codes == ["X"]
    assert count_orders(order_db) == 0


def test_slow_inventory_times_out(inventory_server, http_session, stock_db, order_repository, order_db):
    set_stock(stock_db, A=5, B=3)
    base_url, inventory_app = inventory_server
    inventory_app.state.delay_ms = 1500
    publisher = FakePublisher()
    service = OrderService(
        order_repository,
        HttpInventoryClient(base_url, timeout_s=0.3, session=http_session),
        publisher,
    )

    resp = TestClient(create_app(service)).post("/api/order", json=ORDER)

    assert resp.status_code == 504
    assert count_orders(order_db) == 0
    assert publisher.published == []


def test_inventory_error_maps_to_upstream_unavailable(inventory_server, placement, stock_db, order_db):
    set_stock(stock_db, A=5, B=3)
    _, inventory_app = inventory_server
    inventory_app.state.fail_mode = "error"

    with pytest.raises(UpstreamUnavailableError) as exc_info:
        placement.place_order(OrderRequest(**ORDER))

    assert not exc_info.value.timed_out
    assert count_orders(order_db) == 0
