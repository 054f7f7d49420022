# homeofficecart/repos/customer_repo.py
from sqlalchemy.orm import Session

from homeofficecart.data.database import upsert_insert
from homeofficecart.data.models.customer import CustomerModel


class CustomerRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_customer(self, customer_id: int) -> CustomerModel | None:
        return self.db.get(CustomerModel, customer_id)

    def create_customer_if_absent(self, customer_id: int, **fields) -> CustomerModel | None:
        """
        Insert the customer unless a row with that id (or email) already exists.
        Returns whatever is stored under the id afterwards.
        """
        insert = upsert_insert(self.db)

        if insert is None:
            #no native upsert, lookup-then-create
            customer = self.get_customer(customer_id)
            if customer:
                return customer
            customer = CustomerModel(customer_id=customer_id, **fields)
            self.db.add(customer)
            self.db.flush()
            return customer

        stmt = insert(CustomerModel).values(customer_id=customer_id, **fields).on_conflict_do_nothing()
        self.db.execute(stmt)
        return self.get_customer(customer_id)
