# app/main.py
import logging
from typing import Any, Dict, Optional

import uvicorn
from fastapi import Body, FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import Settings, get_settings
from .errors import StorageError, StoreError
from .logging import configure_logging
from .stores import CartStore, ProductStore

logger = logging.getLogger(__name__)


def _fail(exc: StoreError, status_code: int) -> HTTPException:
    # storage failures are always the server's fault, whatever the route
    if isinstance(exc, StorageError):
        status_code = 500
    return HTTPException(status_code=status_code, detail=exc.message)


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    app = FastAPI(title=settings.APP_NAME)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    products = ProductStore(settings.PRODUCTS_PATH)
    carts = CartStore(settings.CARTS_PATH, products=products if settings.VERIFY_CART_PRODUCTS else None)
    app.state.products = products
    app.state.carts = carts

    @app.exception_handler(StarletteHTTPException)
    async def error_envelope(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"error": exc.detail})

    @app.exception_handler(RequestValidationError)
    async def bad_request(request: Request, exc: RequestValidationError):
        first = exc.errors()[0] if exc.errors() else {}
        loc = [str(part) for part in first.get("loc", ())]
        if loc[:1] == ["body"]:
            message = "request body must be a JSON object"
        else:
            message = f"invalid request {'.'.join(loc)}: {first.get('msg', 'malformed')}"
        return JSONResponse(status_code=400, content={"error": message})

    # ---------------------------
    # Product endpoints
    # ---------------------------
    @app.get("/products")
    async def list_products():
        try:
            return await products.list()
        except StoreError as e:
            raise _fail(e, 500)

    @app.get("/products/{pid}")
    async def get_product(pid: str):
        try:
            return await products.get_by_id(pid)
        except StoreError as e:
            raise _fail(e, 404)

    @app.post("/products", status_code=201)
    async def create_product(payload: Dict[str, Any] = Body(...)):
        try:
            return await products.create(payload)
        except StoreError as e:
            raise _fail(e, 400)

    @app.put("/products/{pid}")
    async def update_product(pid: str, payload: Dict[str, Any] = Body(...)):
        try:
            return await products.update(pid, payload)
        except StoreError as e:
            raise _fail(e, 400)

    @app.delete("/products/{pid}")
    async def delete_product(pid: str):
        try:
            removed = await products.delete(pid)
        except StoreError as e:
            raise _fail(e, 404)
        return {"message": "product deleted", "product": removed}

    # ---------------------------
    # Cart endpoints
    # ---------------------------
    @app.post("/carts", status_code=201)
    async def create_cart():
        try:
            return await carts.create()
        except StoreError as e:
            raise _fail(e, 500)

    @app.get("/carts/{cid}")
    async def get_cart_products(cid: str):
        try:
            cart = await carts.get_by_id(cid)
        except StoreError as e:
            raise _fail(e, 404)
        return cart["products"]

    @app.post("/carts/{cid}/product/{pid}")
    async def add_product_to_cart(cid: str, pid: str):
        try:
            return await carts.add_product(cid, pid)
        except StoreError as e:
            raise _fail(e, 400)

    @app.get("/health")
    async def health():
        return {"status": "ok", "app": settings.APP_NAME}

    return app


def run():
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info("serving %s and %s on %s:%s", settings.PRODUCTS_PATH, settings.CARTS_PATH, settings.HOST, settings.PORT)
    uvicorn.run("app.main:create_app", factory=True, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
