import socket
import threading
import time
from contextlib import contextmanager

import pytest
import requests
import uvicorn

from common import db as common_db
from inventory_service.app import create_app as create_inventory_app
from inventory_service.service import InventoryService
from inventory_service.store import SqliteStockStore
from order_service.errors import UpstreamUnavailableError
from order_service.repository import SqliteOrderRepository


class FakeInventoryClient:
    def __init__(self, stock: dict[str, bool] | None = None, error: Exception | None = None):
        self.stock = stock or {}
        self.error = error
        self.timeout_s = 3.0
        self.calls: list[list[str]] = []

    def check_stock(self, sku_codes):
        self.calls.append(list(sku_codes))
        if self.error is not None:
            raise self.error
        return {code: self.stock[code] for code in sku_codes if code in self.stock}


class FakePublisher:
    def __init__(self, error: Exception | None = None):
        self.error = error
        self.published: list[tuple[str, dict]] = []
        self.closed = False

    def publish(self, topic, payload):
        if self.error is not None:
            raise self.error
        self.published.append((topic, payload))

    def close(self):
        self.closed = True


class RecordingSpan:
    def __init__(self):
        self.spans: list[tuple[str, dict]] = []

    @contextmanager
    def __call__(self, name, **tags):
        self.spans.append((name, tags))
        yield


@pytest.fixture
def stock_db(tmp_path):
    path = str(tmp_path / "inventory.db")
    common_db.init_db(path, "inventory")
    return path


@pytest.fixture
def stock_store(stock_db):
    return SqliteStockStore(stock_db)


@pytest.fixture
def order_db(tmp_path):
    path = str(tmp_path / "orders.db")
    common_db.init_db(path, "orders")
    return path


@pytest.fixture
def order_repository(order_db):
    return SqliteOrderRepository(order_db)


@pytest.fixture
def publisher():
    return FakePublisher()


def count_orders(db_path: str) -> int:
    conn = common_db.connect(db_path)
    try:
        return conn.execute("SELECT COUNT(*) FROM orders").fetchone()[0]
    finally:
        conn.close()


def timeout_error() -> UpstreamUnavailableError:
    return UpstreamUnavailableError("Inventory timeout", timed_out=True)


def set_stock(db_path: str, **quantities: int) -> None:
    conn = common_db.connect(db_path)
    try:
        conn.executemany(
            "INSERT INTO inventory (sku_code, quantity) VALUES (?, ?) "
            "ON CONFLICT(sku_code) DO UPDATE SET quantity = excluded.quantity",
            list(quantities.items()),
        )
        conn.commit()
    finally:
        conn.close()


def stock_snapshot(db_path: str) -> dict[str, int]:
    conn = common_db.connect(db_path)
    try:
        return dict(conn.execute("SELECT sku_code, quantity FROM inventory").fetchall())
    finally:
        conn.close()


@pytest.fixture
def inventory_server(stock_store):
    """Inventory app served by uvicorn on a free local port; yields (base_url, app)."""
    app = create_inventory_app(InventoryService(stock_store))
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    server = uvicorn.Server(uvicorn.Config(app, host="127.0.0.1", port=port, log_level="warning"))
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()
    deadline = time.time() + 10
    while not server.started:
        if time.time() > deadline:
            raise RuntimeError("inventory server did not start")
        time.sleep(0.05)
    try:
        yield f"http://127.0.0.1:{port}", app
    finally:
        server.should_exit = True
        thread.join(timeout=10)


@pytest.fixture
def http_session():
    session = requests.Session()
    # Ignore proxy settings for loopback calls.
    session.trust_env = False
    yield session
    session.close()
