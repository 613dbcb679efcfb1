import time

from fastapi import APIRouter, HTTPException, Query, Request

from inventory_service.models import ConfigRequest, InventoryResponse
from inventory_service.store import StockStoreUnavailableError

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.post("/config")
def set_config(config: ConfigRequest, request: Request) -> dict:
    if config.delay_ms is not None:
        request.app.state.delay_ms = config.delay_ms
    if config.fail_mode is not None:
        request.app.state.fail_mode = config.fail_mode
    if config.fail_code is not None:
        request.app.state.fail_code = config.fail_code
    return {
        "delay_ms": request.app.state.delay_ms,
        "fail_mode": request.app.state.fail_mode,
        "fail_code": request.app.state.fail_code,
    }


@router.get("/api/inventory", response_model=list[InventoryResponse])
def is_in_stock(request: Request, sku_code: list[str] = Query(...)) -> list[InventoryResponse]:
    # Injection points used by the timeout scenarios.
    if request.app.state.delay_ms > 0:
        time.sleep(request.app.state.delay_ms / 1000)

    if request.app.state.fail_mode == "error":
        raise HTTPException(status_code=request.app.state.fail_code, detail="Injected failure")

    try:
        return request.app.state.inventory_service.is_in_stock(sku_code)
    except StockStoreUnavailableError as exc:
        raise HTTPException(status_code=503, detail="Inventory store unavailable") from exc
