import logging

from fastapi import FastAPI

from common import db as common_db
from common.log import configure_logging

from inventory_service import config
from inventory_service.routes import router
from inventory_service.service import InventoryService
from inventory_service.store import SqliteStockStore

logger = logging.getLogger(__name__)


def create_app(inventory_service: InventoryService | None = None) -> FastAPI:
    app = FastAPI(title="InventoryService")
    app.state.delay_ms = 0
    app.state.fail_mode = "none"
    app.state.fail_code = 503
    app.state.inventory_service = inventory_service

    @app.on_event("startup")
    def startup() -> None:
        configure_logging(config.LOG_LEVEL)
        if app.state.inventory_service is None:
            common_db.init_db(config.INVENTORY_DB_PATH, "inventory")
            app.state.inventory_service = InventoryService(SqliteStockStore(config.INVENTORY_DB_PATH))
            logger.info("Inventory store ready at %s", config.INVENTORY_DB_PATH)

    app.include_router(router)
    return app


app = create_app()
