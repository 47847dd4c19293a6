# tests/test_sdk.py
import asyncio

import httpx
import pytest

from sdk.storeclient import StoreAPIError, StoreClient


@pytest.fixture
def sdk(client):
    return StoreClient(base_url="http://testserver", session=client)


def test_sdk_products(sdk):
    p = sdk.create_product("Mouse", "usb mouse", "M-1", "15.5", 4, "electronics", thumbnails=["m.png"])
    assert p["price"] == 15.5
    assert sdk.get_product(p["id"])["thumbnails"] == ["m.png"]
    assert sdk.update_product(p["id"], stock=9)["stock"] == 9
    assert sdk.delete_product(p["id"])["product"]["code"] == "M-1"
    assert sdk.list_products() == []


def test_sdk_errors_carry_status(sdk):
    with pytest.raises(StoreAPIError) as exc:
        sdk.get_product(404)
    assert exc.value.status_code == 404
    assert "not found" in exc.value.message


def test_sdk_carts(sdk):
    cart = sdk.create_cart()
    sdk.add_to_cart(cart["id"], 2)
    assert sdk.get_cart_products(cart["id"]) == [{"product": 2, "quantity": 1}]


def test_sdk_async_add(sdk, client):
    cid = sdk.create_cart()["id"]

    async def scenario():
        transport = httpx.ASGITransport(app=client.app)
        async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as ac:
            return await sdk.add_to_cart_async(cid, 5, client=ac)

    assert asyncio.run(scenario())["products"] == [{"product": 5, "quantity": 1}]
