from typing import Any, Dict, Mapping

import pydantic

from .errors import ValidationError
from .models import Product

REQUIRED_PRODUCT_FIELDS = ("title", "description", "code", "price", "stock", "category")


def check_required(data: Mapping[str, Any]) -> None:
    # falsy counts as missing: "", 0 and [] are all rejected
    for field in REQUIRED_PRODUCT_FIELDS:
        if not data.get(field):
            raise ValidationError(field)


def validate_product(raw: Mapping[str, Any]) -> Dict[str, Any]:
    """Coerce a product dict to its canonical stored form."""
    try:
        product = Product.model_validate(dict(raw))
    except pydantic.ValidationError as e:
        first = e.errors()[0]
        field = str(first["loc"][0]) if first["loc"] else "product"
        raise ValidationError(field, f"invalid value for field '{field}': {first['msg']}") from e
    return product.model_dump()


def _make_product_dict(product_id: int, data: Mapping[str, Any]) -> Dict[str, Any]:
    raw = {
        "id": product_id,
        "title": data["title"],
        "description": data["description"],
        "code": data["code"],
        "price": data["price"],
        "stock": data["stock"],
        "category": data["category"],
        "thumbnails": data.get("thumbnails"),
    }
    if "status" in data:
        raw["status"] = data["status"]
    return validate_product(raw)
