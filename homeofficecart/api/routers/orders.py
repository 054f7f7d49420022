# homeofficecart/api/routers/orders.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from homeofficecart.data.database import get_db
from homeofficecart.domain.errors import InvalidStateError, StorageError
from homeofficecart.domain.schemas import OrderPlacedOut
from homeofficecart.api.routers.carts import get_service

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("/{customer_id}/checkout", response_model=OrderPlacedOut)
def checkout(customer_id: int, db: Session = Depends(get_db)):
    """
    Places the customer's cart as an order.
    """
    svc = get_service(db)
    try:
        order_id = svc.checkout(customer_id)
    except InvalidStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to checkout")
    return {"message": "Order placed successfully", "order_id": order_id}
