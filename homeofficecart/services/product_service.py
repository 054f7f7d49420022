# homeofficecart/services/product_service.py
from typing import List

from sqlalchemy.orm import Session

from homeofficecart.data.models.product import ProductModel
from homeofficecart.repos.product_repo import ProductRepo
from homeofficecart.services.unit_of_work import unit_of_work


class ProductService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = ProductRepo(db)

    def list_products(self) -> List[ProductModel]:
        with unit_of_work(self.db, "list products"):
            return self.repo.list_products()
