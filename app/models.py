# app/models.py
import math
from typing import Any, List, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

Number = Union[int, float]


class Product(BaseModel):
    # fields merged in through update() are kept as-is
    model_config = ConfigDict(extra="allow")

    id: int = Field(..., ge=1)
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    code: str = Field(..., min_length=1)
    price: Number
    status: bool = True
    stock: Number
    category: str = Field(..., min_length=1)
    thumbnails: List[str] = Field(default_factory=list)

    @field_validator("price", "stock", mode="before")
    @classmethod
    def _numeric_string(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                v = float(v.strip())
            except ValueError:
                raise ValueError("must be a number")
        if isinstance(v, float):
            if not math.isfinite(v):
                raise ValueError("must be a finite number")
            if v.is_integer():
                return int(v)
        return v

    @field_validator("status", mode="before")
    @classmethod
    def _null_status(cls, v: Any) -> Any:
        # an explicit null switches the product off, on create and update alike
        return False if v is None else v

    @field_validator("thumbnails", mode="before")
    @classmethod
    def _thumbnails_list(cls, v: Any) -> Any:
        return v if isinstance(v, list) else []


class CartItem(BaseModel):
    product: int = Field(..., ge=1)
    quantity: int = Field(1, ge=1)


class Cart(BaseModel):
    id: int = Field(..., ge=1)
    products: List[CartItem] = Field(default_factory=list)
