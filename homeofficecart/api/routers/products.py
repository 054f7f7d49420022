# homeofficecart/api/routers/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from homeofficecart.data.database import get_db
from homeofficecart.domain.errors import StorageError
from homeofficecart.domain.schemas import ProductOut
from homeofficecart.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=List[ProductOut])
def list_products(db: Session = Depends(get_db)):
    try:
        return ProductService(db).list_products()
    except StorageError:
        raise HTTPException(status_code=500, detail="Failed to fetch products")
