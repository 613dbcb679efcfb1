from fastapi import APIRouter, HTTPException, Request

from order_service.errors import OutOfStockError, UpstreamUnavailableError
from order_service.models import (
    ConfigRequest,
    OrderLineItemView,
    OrderRequest,
    OrderResponse,
    OrderView,
)

router = APIRouter()


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}


@router.post("/config")
def set_config(config: ConfigRequest, request: Request) -> dict:
    client = request.app.state.order_service.inventory_client
    if config.inventory_timeout_s is not None:
        client.timeout_s = config.inventory_timeout_s
    return {"inventory_timeout_s": client.timeout_s}


@router.post("/api/order", response_model=OrderResponse, status_code=201)
def place_order(order_request: OrderRequest, request: Request) -> OrderResponse:
    try:
        order_id = request.app.state.order_service.place_order(order_request)
    except OutOfStockError as exc:
        raise HTTPException(
            status_code=409,
            detail={
                "message": "Product is not in stock, please try again later",
                "sku_codes": exc.sku_codes,
            },
        ) from exc
    except UpstreamUnavailableError as exc:
        status_code = 504 if exc.timed_out else 502
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc

    return OrderResponse(order_id=order_id, status="placed", message="Order placed successfully")


@router.get("/api/order/{order_id}", response_model=OrderView)
def get_order(order_id: str, request: Request) -> OrderView:
    order = request.app.state.order_service.get_order(order_id)
    if order is None:
        raise HTTPException(status_code=404, detail="Order not found")
    return OrderView(
        order_id=order.order_id,
        order_line_items=[
            OrderLineItemView(sku_code=item.sku_code, price=item.price, quantity=item.quantity)
            for item in order.line_items
        ],
    )
