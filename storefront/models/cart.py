"""Cart models for the storefront"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .product import ProductCategory


class CartState(str, Enum):
    EMPTY = "empty"
    NON_EMPTY = "non_empty"


class CartLine(BaseModel):
    """
    Product plus quantity in a cart.

    Holds the product's displayed fields as they were when the product was
    first added. Later catalog changes do not reach the line unless the
    cart is refreshed.
    """
    model_config = ConfigDict(frozen=True)

    product_id: int
    name: str
    price: float
    original_price: Optional[float] = None
    image_url: Optional[str] = None
    category: ProductCategory
    quantity: int = Field(gt=0)

    @property
    def line_total(self) -> float:
        return self.price * self.quantity


class Cart(BaseModel):
    """Shopping cart, lines in insertion order"""
    model_config = ConfigDict(frozen=True)

    lines: tuple[CartLine, ...] = ()

    @property
    def state(self) -> CartState:
        return CartState.NON_EMPTY if self.lines else CartState.EMPTY

    @property
    def is_empty(self) -> bool:
        return not self.lines

    def get_line(self, product_id: int) -> Optional[CartLine]:
        """Get the line for a product, if any"""
        return next((line for line in self.lines if line.product_id == product_id), None)


class AddToCartRequest(BaseModel):
    """Request to add a product to the cart"""
    product_id: int


class UpdateCartItemRequest(BaseModel):
    """Request to set a line quantity"""
    quantity: int


class CartLineView(BaseModel):
    """Cart line with its computed total"""
    product_id: int
    name: str
    price: float
    original_price: Optional[float] = None
    image_url: Optional[str] = None
    category: ProductCategory
    quantity: int
    line_total: float
    line_total_display: str


class CartView(BaseModel):
    """Cart with derived totals"""
    state: CartState
    lines: list[CartLineView]
    total_items: int
    total_value: float
    total_display: str


class CartResponse(BaseModel):
    """Cart API response"""
    session_id: str
    cart: CartView
    added: Optional[bool] = None
    message: Optional[str] = None
