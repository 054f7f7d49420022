# homeofficecart/services/unit_of_work.py
from contextlib import contextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from homeofficecart.domain.errors import StorageError
from homeofficecart.utils.logging import get_logger

logger = get_logger(__name__)


@contextmanager
def unit_of_work(db: Session, action: str):
    """
    One transaction per use case: commit when the block finishes,
    roll back on any error. Storage errors are re-raised as StorageError.
    """
    try:
        yield
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception(f"Storage failure during {action}")
        raise StorageError(f"Storage failure during {action}") from e
    except Exception:
        db.rollback()
        raise
