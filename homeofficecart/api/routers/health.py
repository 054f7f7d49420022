# homeofficecart/api/routers/health.py
from fastapi import APIRouter

from homeofficecart.domain.schemas import HealthOut

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthOut)
def health():
    return {"status": "OK", "message": "HomeOfficeCart API is running."}
