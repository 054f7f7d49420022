import os

#keep the module-level engine off any real database
os.environ.setdefault("DATABASE_URL", "sqlite://")

from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from homeofficecart.data.database import Base, get_db, init_db
from homeofficecart.data.models import ProductModel
from homeofficecart.main import create_app
from homeofficecart.services.cart_service import CartService
from homeofficecart.services.customer_resolver import AutoProvisionCustomerResolver


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    @event.listens_for(engine, "connect")
    def _enable_foreign_keys(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    init_db(bind=engine, attempts=1)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def products(db):
    """Three products: lamp 19.99, organizer 5.00, mouse pad 5.00."""
    lamp = ProductModel(name="Desk Lamp", description="LED lamp", price=Decimal("19.99"), stock_quantity=40)
    organizer = ProductModel(name="Cable Organizer", description=None, price=Decimal("5.00"), stock_quantity=30)
    pad = ProductModel(name="Mouse Pad", description="XL pad", price=Decimal("5.00"), stock_quantity=12)
    db.add_all([lamp, organizer, pad])
    db.commit()
    return {"lamp": lamp.product_id, "organizer": organizer.product_id, "pad": pad.product_id}


@pytest.fixture
def cart_service(db):
    return CartService(db, AutoProvisionCustomerResolver(db))


@pytest.fixture
def test_client(session_factory):
    app = create_app(init_storage=False)

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    return TestClient(app)
