"""Product models for the storefront catalog"""

from datetime import datetime
from enum import Enum
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..core.exceptions import ValidationError


class ProductCategory(str, Enum):
    PHONE = "Điện thoại"
    LAPTOP = "Laptop"
    ACCESSORY = "Phụ kiện"
    TABLET = "Tablet"
    WATCH = "Đồng hồ"


class Product(BaseModel):
    """Product in the catalog"""
    model_config = ConfigDict(frozen=True, from_attributes=True)

    id: int
    name: str = Field(min_length=1)
    price: float = Field(ge=0)
    original_price: Optional[float] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    category: ProductCategory
    rating: Optional[float] = Field(default=None, ge=1, le=5)
    reviews: Optional[int] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def in_stock(self) -> bool:
        # Absent and zero stock both mean nothing to sell
        return (self.stock or 0) > 0


class ProductFields(BaseModel):
    """
    Admin form input.

    Values may arrive as raw form strings. Blank strings are treated as
    absent. Used as-is for partial updates; see ProductCreate for inserts.
    """
    model_config = ConfigDict(str_strip_whitespace=True, extra="ignore")

    name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    original_price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    image_url: Optional[str] = None
    description: Optional[str] = None
    category: Optional[ProductCategory] = None
    rating: Optional[float] = Field(default=None, ge=1, le=5, allow_inf_nan=False)
    reviews: Optional[int] = Field(default=None, ge=0)
    stock: Optional[int] = Field(default=None, ge=0)

    @field_validator("*", mode="before")
    @classmethod
    def blank_as_absent(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("price", "original_price", "rating", "reviews", "stock", mode="before")
    @classmethod
    def not_boolean(cls, value: Any) -> Any:
        if isinstance(value, bool):
            raise ValueError("Input should be a number, not a boolean")
        return value

    @field_validator("name", "price", "category")
    @classmethod
    def required(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Field required")
        return value


class ProductCreate(ProductFields):
    """Admin form input for a new product: name, price and category required"""
    model_config = ConfigDict(validate_default=True)


def parse_product_fields(data: Mapping[str, Any], partial: bool = False) -> dict[str, Any]:
    """
    Validate admin input and convert it to a row for the products table.

    Args:
        data: Raw field values (strings or numbers)
        partial: Only validate and return the fields present in data

    Returns:
        Column values ready to be written. On create every column is
        present and absent optional fields are explicit None.

    Raises:
        ValidationError: If a required field is missing or a value is malformed
    """
    model = ProductFields if partial else ProductCreate
    try:
        fields = model.model_validate(dict(data))
    except PydanticValidationError as e:
        raise ValidationError([
            {
                "field": ".".join(str(part) for part in err["loc"]) or "__root__",
                "message": err["msg"],
            }
            for err in e.errors()
        ]) from e

    return fields.model_dump(mode="json", exclude_unset=partial)


class ProductListing(BaseModel):
    """Product as shown in the storefront grid"""
    product: Product
    can_add_to_cart: bool
    price_display: str
    original_price_display: Optional[str] = None


class ProductSearchResponse(BaseModel):
    """Response from catalog browsing"""
    products: list[ProductListing]
    total: int
    query: Optional[str] = None


class AdminProductListResponse(BaseModel):
    """Response from admin product search"""
    products: list[Product]
    total: int
    query: Optional[str] = None


class ProductResponse(BaseModel):
    """Admin write response"""
    product: Optional[Product] = None
    message: Optional[str] = None
