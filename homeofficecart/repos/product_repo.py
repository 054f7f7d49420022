# homeofficecart/repos/product_repo.py
from typing import Iterable, List

from sqlalchemy import select, func
from sqlalchemy.orm import Session

from homeofficecart.data.models.product import ProductModel


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def list_products(self) -> List[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.product_id)).scalars())

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def count_products(self) -> int:
        return self.db.execute(select(func.count()).select_from(ProductModel)).scalar_one()

    def add_products(self, products: Iterable[ProductModel]):
        self.db.add_all(products)
        self.db.flush()
