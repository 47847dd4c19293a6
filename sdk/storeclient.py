# sdk/storeclient.py
from typing import Any, Dict, Optional

import httpx
import requests


class StoreAPIError(Exception):
    def __init__(self, status_code: int, message: str):
        super().__init__(f"HTTP {status_code}: {message}")
        self.status_code = status_code
        self.message = message


def _unwrap(r) -> Any:
    """
    Decode a response from either requests or httpx. Error responses carry
    ``{"error": message}``; anything else is reported with the raw text.
    """
    if r.status_code >= 400:
        try:
            body = r.json()
            message = body.get("error") if isinstance(body, dict) else None
        except ValueError:
            message = None
        raise StoreAPIError(r.status_code, message or r.text)
    return r.json()


class StoreClient:
    def __init__(self, base_url: str = "http://localhost:8085", timeout: int = 10, session=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout

    # Products
    def list_products(self):
        r = self.session.get(f"{self.base_url}/products", timeout=self.timeout)
        return _unwrap(r)

    def get_product(self, product_id: int):
        r = self.session.get(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return _unwrap(r)

    def create_product(self, title: str, description: str, code: str, price, stock, category: str,
                       status: Optional[bool] = None, thumbnails: Optional[list] = None):
        payload: Dict[str, Any] = {
            "title": title, "description": description, "code": code,
            "price": price, "stock": stock, "category": category,
        }
        if status is not None:
            payload["status"] = status
        if thumbnails is not None:
            payload["thumbnails"] = thumbnails
        r = self.session.post(f"{self.base_url}/products", json=payload, timeout=self.timeout)
        return _unwrap(r)

    def update_product(self, product_id: int, **fields):
        r = self.session.put(f"{self.base_url}/products/{product_id}", json=fields, timeout=self.timeout)
        return _unwrap(r)

    def delete_product(self, product_id: int):
        r = self.session.delete(f"{self.base_url}/products/{product_id}", timeout=self.timeout)
        return _unwrap(r)

    # Carts
    def create_cart(self):
        r = self.session.post(f"{self.base_url}/carts", timeout=self.timeout)
        return _unwrap(r)

    def get_cart_products(self, cart_id: int):
        r = self.session.get(f"{self.base_url}/carts/{cart_id}", timeout=self.timeout)
        return _unwrap(r)

    def add_to_cart(self, cart_id: int, product_id: int):
        r = self.session.post(f"{self.base_url}/carts/{cart_id}/product/{product_id}", timeout=self.timeout)
        return _unwrap(r)

    async def add_to_cart_async(self, cart_id: int, product_id: int, client: Optional[httpx.AsyncClient] = None):
        if client is not None:
            r = await client.post(f"{self.base_url}/carts/{cart_id}/product/{product_id}")
            return _unwrap(r)
        async with httpx.AsyncClient(timeout=self.timeout) as ac:
            r = await ac.post(f"{self.base_url}/carts/{cart_id}/product/{product_id}")
            return _unwrap(r)
