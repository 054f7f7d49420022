# homeofficecart/main.py
from contextlib import asynccontextmanager

from fastapi import FastAPI
import uvicorn

from homeofficecart.api import api_router
from homeofficecart.data.database import check_connection, init_db, dispose_db
from homeofficecart.data.seed import seed
from homeofficecart.utils.settings import HOST, PORT, SEED_PRODUCTS
from homeofficecart.utils.logging import get_logger

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    #schema has to be in place before the server accepts requests
    logger.info("Initializing database")
    check_connection()
    init_db()
    if SEED_PRODUCTS:
        seed()
    yield
    dispose_db()


def create_app(init_storage: bool = True) -> FastAPI:
    app = FastAPI(
        title="HomeOfficeCart API",
        version="1.0.0",
        lifespan=lifespan if init_storage else None,
    )

    app.include_router(api_router)

    return app


app = create_app()

if __name__ == "__main__":
    logger.info(f"Server listening on port {PORT}")
    uvicorn.run(app, host=HOST, port=PORT)
