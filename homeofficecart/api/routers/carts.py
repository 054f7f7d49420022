# homeofficecart/api/routers/carts.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from homeofficecart.data.database import get_db
from homeofficecart.domain.errors import (
    CustomerConflictError,
    InvalidQuantityError,
    NotFoundError,
    StorageError,
)
from homeofficecart.domain.schemas import AddItemIn, CartItemAddedOut, CartOut, MessageOut
from homeofficecart.services.cart_service import CartService
from homeofficecart.services.customer_resolver import get_customer_resolver

router = APIRouter(prefix="/cart", tags=["cart"])


def get_service(db: Session):
    return CartService(
        db=db,
        customer_resolver=get_customer_resolver(db),
    )


@router.post("/{customer_id}/add", response_model=CartItemAddedOut)
def add_item(customer_id: int, payload: AddItemIn, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        cart_id = svc.add_item(
            customer_id=customer_id,
            product_id=payload.product_id,
            quantity=payload.quantity,
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidQuantityError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except CustomerConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to add item to cart")
    return {"message": "Item added to cart", "cart_id": cart_id}


@router.delete("/{customer_id}/remove/{product_id}", response_model=MessageOut)
def remove_item(customer_id: int, product_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        svc.remove_item(customer_id, product_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to remove item from cart")
    return {"message": "Item removed from cart"}


@router.get("/{customer_id}", response_model=CartOut)
def view_cart(customer_id: int, db: Session = Depends(get_db)):
    svc = get_service(db)
    try:
        return svc.view_cart(customer_id)
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to fetch cart")
