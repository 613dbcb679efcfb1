import logging

from fastapi import FastAPI

from common import db as common_db
from common.log import configure_logging

from order_service import config
from order_service.inventory_client import HttpInventoryClient
from order_service.publisher import build_publisher
from order_service.repository import SqliteOrderRepository
from order_service.routes import router
from order_service.service import OrderService

logger = logging.getLogger(__name__)


def create_app(order_service: OrderService | None = None) -> FastAPI:
    app = FastAPI(title="OrderService")
    app.state.order_service = order_service

    @app.on_event("startup")
    def startup() -> None:
        configure_logging(config.LOG_LEVEL)
        if app.state.order_service is None:
            common_db.init_db(config.ORDER_DB_PATH, "orders")
            app.state.order_service = OrderService(
                repository=SqliteOrderRepository(config.ORDER_DB_PATH),
                inventory_client=HttpInventoryClient(config.INVENTORY_URL, config.INVENTORY_TIMEOUT_S),
                publisher=build_publisher(config.EVENT_BACKEND),
                topic=config.NOTIFICATION_TOPIC,
            )
            logger.info(
                "Order service ready: inventory=%s backend=%s topic=%s",
                config.INVENTORY_URL, config.EVENT_BACKEND, config.NOTIFICATION_TOPIC,
            )

    @app.on_event("shutdown")
    def shutdown() -> None:
        # Flush buffered events before exit.
        if app.state.order_service is not None:
            app.state.order_service.publisher.close()

    app.include_router(router)
    return app


app = create_app()
