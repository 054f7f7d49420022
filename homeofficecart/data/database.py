# homeofficecart/data/database.py
from sqlalchemy import create_engine, text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from homeofficecart.utils.settings import DATABASE_URL, SQL_ECHO, DB_CONNECT_ATTEMPTS
from homeofficecart.utils.retry import db_retry
from homeofficecart.utils.logging import get_logger

logger = get_logger(__name__)

engine = create_engine(DATABASE_URL, echo=SQL_ECHO, pool_pre_ping=True)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db():
    """FastAPI dependency: one session per request."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def check_connection(bind=None) -> bool:
    """
    Probe the database once and log the outcome.
    A failed probe is not fatal; init_db decides whether startup can continue.
    """
    bind = bind or engine
    try:
        with bind.connect() as conn:
            conn.execute(text("SELECT 1"))
        logger.info(f"Connected to database {bind.url.render_as_string(hide_password=True)}")
        return True
    except SQLAlchemyError as e:
        logger.error(f"Unable to connect to the database: {e}")
        return False


def init_db(bind=None, attempts: int = DB_CONNECT_ATTEMPTS):
    """
    Schema synchronisation at startup: creates every table declared on Base
    that does not exist yet. Raises after the last failed attempt.
    """
    bind = bind or engine

    #models have to be imported before create_all so they land in Base.metadata
    import homeofficecart.data.models  # noqa: F401

    @db_retry(attempts)
    def _sync():
        Base.metadata.create_all(bind=bind)

    logger.info(f"Models registered in Base.metadata: {list(Base.metadata.tables.keys())}")
    try:
        _sync()
    except SQLAlchemyError as e:
        logger.error(f"Failed to create tables: {e}")
        raise
    logger.info("Database tables synced")


def dispose_db(bind=None):
    (bind or engine).dispose()
    logger.info("Database connection pool disposed")


#dialects with INSERT ... ON CONFLICT
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


def upsert_insert(db: Session):
    """insert() construct supporting ON CONFLICT for the session's dialect, or None."""
    return _UPSERT_INSERTS.get(db.get_bind().dialect.name)
