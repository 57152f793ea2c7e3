"""Cart API routes"""

from fastapi import APIRouter, HTTPException, Depends

from ..core.exceptions import InvalidQuantityError, NotFoundError
from ..core.formatting import format_price
from ..database.catalog import CatalogStore
from ..database.carts import CartDatabase, CartSession
from ..dependencies import get_catalog, get_cart_db
from ..models.cart import (
    AddToCartRequest,
    UpdateCartItemRequest,
    CartLineView,
    CartView,
    CartResponse,
)
from ..services import ledger

router = APIRouter(prefix="/api/cart", tags=["Cart"])


def _cart_response(session: CartSession, **kwargs) -> CartResponse:
    cart = session.cart
    value = ledger.total_value(cart)
    return CartResponse(
        session_id=session.session_id,
        cart=CartView(
            state=cart.state,
            lines=[
                CartLineView(
                    **line.model_dump(),
                    line_total=line.line_total,
                    line_total_display=format_price(line.line_total),
                )
                for line in cart.lines
            ],
            total_items=ledger.total_items(cart),
            total_value=value,
            total_display=format_price(value),
        ),
        **kwargs,
    )


def _get_session(cart_db: CartDatabase, session_id: str) -> CartSession:
    session = cart_db.get_session(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Cart not found")
    return session


@router.post("", response_model=CartResponse)
async def create_cart(cart_db: CartDatabase = Depends(get_cart_db)):
    """Start a shopper session with an empty cart"""
    session = cart_db.create_session()
    return _cart_response(session, message="Cart created")


@router.get("/{session_id}", response_model=CartResponse)
async def get_cart(
    session_id: str,
    cart_db: CartDatabase = Depends(get_cart_db),
):
    """Get the cart of a session"""
    return _cart_response(_get_session(cart_db, session_id))


@router.post("/{session_id}/items", response_model=CartResponse)
async def add_to_cart(
    session_id: str,
    request: AddToCartRequest,
    catalog: CatalogStore = Depends(get_catalog),
    cart_db: CartDatabase = Depends(get_cart_db),
):
    """
    Add one unit of a product to the cart.

    Out-of-stock products leave the cart unchanged and report added=false.
    """
    session = _get_session(cart_db, session_id)

    try:
        product = catalog.get(request.product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    if not ledger.can_add_to_cart(product):
        return _cart_response(session, added=False, message=f"{product.name} is out of stock")

    session = cart_db.apply(session_id, lambda cart: ledger.add_item(cart, product))
    return _cart_response(session, added=True, message=f"Added {product.name} to cart")


@router.put("/{session_id}/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    session_id: str,
    product_id: int,
    request: UpdateCartItemRequest,
    cart_db: CartDatabase = Depends(get_cart_db),
):
    """Set the quantity of a cart line, zero removes it"""
    session = _get_session(cart_db, session_id)
    if session.cart.get_line(product_id) is None:
        raise HTTPException(status_code=404, detail="Item not in cart")

    try:
        session = cart_db.apply(
            session_id,
            lambda cart: ledger.set_quantity(cart, product_id, request.quantity),
        )
    except InvalidQuantityError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return _cart_response(session, message="Cart updated")


@router.delete("/{session_id}/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(
    session_id: str,
    product_id: int,
    cart_db: CartDatabase = Depends(get_cart_db),
):
    """Remove a product from the cart"""
    _get_session(cart_db, session_id)
    session = cart_db.apply(session_id, lambda cart: ledger.remove_item(cart, product_id))
    return _cart_response(session, message="Item removed")


@router.post("/{session_id}/refresh", response_model=CartResponse)
async def refresh_cart(
    session_id: str,
    catalog: CatalogStore = Depends(get_catalog),
    cart_db: CartDatabase = Depends(get_cart_db),
):
    """Re-capture prices and details from the current catalog"""
    _get_session(cart_db, session_id)
    session = cart_db.apply(session_id, lambda cart: ledger.refresh_lines(cart, catalog.snapshot))
    return _cart_response(session, message="Cart refreshed")


@router.delete("/{session_id}", response_model=CartResponse)
async def clear_cart(
    session_id: str,
    cart_db: CartDatabase = Depends(get_cart_db),
):
    """Clear all items from cart"""
    _get_session(cart_db, session_id)
    session = cart_db.apply(session_id, ledger.clear)
    return _cart_response(session, message="Cart cleared")
