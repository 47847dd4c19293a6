import logging
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from .core import _make_product_dict, check_required, validate_product
from .database import CollectionStore, parse_id
from .errors import ConflictError, NotFoundError
from .models import Cart, CartItem

logger = logging.getLogger(__name__)

# Domain rules for the two collections. Each public method is one request's worth of work.


class ProductStore(CollectionStore):
    entity_name = "product"

    async def list(self) -> List[Dict[str, Any]]:
        return await self.read_all()

    async def get_by_id(self, product_id: Any) -> Dict[str, Any]:
        products = await self.read_all()
        index = self.find_index(products, product_id)
        if index is None:
            raise NotFoundError(self.entity_name, product_id)
        return products[index]

    async def create(self, data: Mapping[str, Any]) -> Dict[str, Any]:
        check_required(data)
        async with self.mutation():
            products = await self.read_all()
            if any(p.get("code") == data["code"] for p in products):
                raise ConflictError("code", data["code"])
            product = _make_product_dict(self.next_id(products), data)
            products.append(product)
            await self.replace_all(products)
        logger.info("created product %s (code=%s)", product["id"], product["code"])
        return product

    async def update(self, product_id: Any, patch: Mapping[str, Any]) -> Dict[str, Any]:
        async with self.mutation():
            products = await self.read_all()
            index = self.find_index(products, product_id)
            if index is None:
                raise NotFoundError(self.entity_name, product_id)
            current = products[index]

            changes = {k: v for k, v in patch.items() if k != "id"}
            if "code" in changes:
                clash = any(
                    p.get("code") == changes["code"] and i != index
                    for i, p in enumerate(products)
                )
                if clash:
                    raise ConflictError("code", changes["code"])

            updated = validate_product({**current, **changes, "id": current["id"]})
            products[index] = updated
            await self.replace_all(products)
        logger.info("updated product %s (%s)", updated["id"], ", ".join(sorted(changes)) or "no fields")
        return updated

    async def delete(self, product_id: Any) -> Dict[str, Any]:
        async with self.mutation():
            products = await self.read_all()
            index = self.find_index(products, product_id)
            if index is None:
                raise NotFoundError(self.entity_name, product_id)
            removed = products.pop(index)
            await self.replace_all(products)
        logger.info("deleted product %s", removed.get("id"))
        return removed


class CartStore(CollectionStore):
    """
    Carts hold (product, quantity) line items.

    With ``products`` given, add_product() refuses product ids that the product
    store does not know about; without it any positive id is accepted.
    """

    entity_name = "cart"

    def __init__(self, path: Path, products: Optional[ProductStore] = None):
        super().__init__(path)
        self._products = products

    async def create(self) -> Dict[str, Any]:
        async with self.mutation():
            carts = await self.read_all()
            cart = Cart(id=self.next_id(carts)).model_dump()
            carts.append(cart)
            await self.replace_all(carts)
        logger.info("created cart %s", cart["id"])
        return cart

    async def get_by_id(self, cart_id: Any) -> Dict[str, Any]:
        carts = await self.read_all()
        index = self.find_index(carts, cart_id)
        if index is None:
            raise NotFoundError(self.entity_name, cart_id)
        return self._parse_stored(Cart, carts[index]).model_dump()

    async def add_product(self, cart_id: Any, product_id: Any) -> Dict[str, Any]:
        pid = parse_id(product_id, field="product")
        async with self.mutation():
            carts = await self.read_all()
            index = self.find_index(carts, cart_id)
            if index is None:
                raise NotFoundError(self.entity_name, cart_id)
            if self._products is not None:
                await self._products.get_by_id(pid)

            cart = self._parse_stored(Cart, carts[index])
            for item in cart.products:
                if item.product == pid:
                    item.quantity += 1
                    break
            else:
                cart.products.append(CartItem(product=pid, quantity=1))

            carts[index] = cart.model_dump()
            await self.replace_all(carts)
        logger.info("added product %s to cart %s", pid, cart.id)
        return carts[index]
