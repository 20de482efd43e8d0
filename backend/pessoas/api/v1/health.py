from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlmodel import Session
from datetime import datetime, timezone

from pessoas.core.db import get_session

router = APIRouter()

@router.get("/")
def health_check():
    """basic liveness check"""
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "service": "pessoas"
    }

@router.get("/ready")
def readiness_check(session: Session = Depends(get_session)):
    """readiness check - borrows a pooled connection and pings the store"""
    try:
        session.execute(text("SELECT 1"))
        database = {"status": "healthy", "message": "connected"}
        healthy = True
    except Exception as e:
        database = {"status": "unhealthy", "message": str(e)}
        healthy = False

    return JSONResponse(
        status_code=200 if healthy else 503,
        content={
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "checks": {"database": database}
        }
    )
