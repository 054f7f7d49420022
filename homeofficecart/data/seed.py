# homeofficecart/data/seed.py
from decimal import Decimal

from homeofficecart.data.database import SessionLocal, init_db
from homeofficecart.data.models.product import ProductModel
from homeofficecart.repos.product_repo import ProductRepo
from homeofficecart.utils.logging import get_logger

logger = get_logger(__name__)

#laptops + home office furniture
CATALOGUE = [
    {"name": "ThinkPad T14", "description": "14-inch business laptop, 16 GB RAM", "price": Decimal("1299.00"), "stock_quantity": 15},
    {"name": "MacBook Air 13", "description": "13-inch laptop, M-series chip", "price": Decimal("1099.99"), "stock_quantity": 10},
    {"name": "Dell XPS 15", "description": "15-inch laptop for creative work", "price": Decimal("1899.50"), "stock_quantity": 5},
    {"name": "Ergonomic Office Chair", "description": "Mesh back, adjustable lumbar support", "price": Decimal("249.99"), "stock_quantity": 25},
    {"name": "Standing Desk", "description": "Electric height-adjustable desk, 140x70 cm", "price": Decimal("399.00"), "stock_quantity": 8},
    {"name": "Desk Lamp", "description": "LED lamp with dimmer", "price": Decimal("19.99"), "stock_quantity": 40},
    {"name": "Cable Organizer", "description": "Under-desk cable tray", "price": Decimal("5.00"), "stock_quantity": 30},
]


def seed(session_factory=SessionLocal) -> int:
    """Inserts the demo catalogue when there are no products yet. Returns how many were added."""
    db = session_factory()
    try:
        repo = ProductRepo(db)
        #not forcing: only seed if empty
        if repo.count_products():
            logger.info("Products already present, skipping seed")
            return 0
        repo.add_products(ProductModel(**p) for p in CATALOGUE)
        db.commit()
        logger.info(f"Seeded {len(CATALOGUE)} products")
        return len(CATALOGUE)
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


if __name__ == "__main__":
    init_db()
    seed()
