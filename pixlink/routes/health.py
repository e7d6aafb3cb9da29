"""
Pixlink Health Check Routes
"""
from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.orm import Session
import sys
import psutil
from typing import Dict, Any

from ..database import get_db
from ..models import Image, User
from ..responses import utc_timestamp

router = APIRouter(prefix="/api/health", tags=["health"])


def check_database(db: Session) -> Dict[str, Any]:
    """Check database connectivity and row counts"""
    try:
        db.execute(text("SELECT 1"))
        return {
            "status": "healthy",
            "row_counts": {
                "users": db.query(User).count(),
                "images": db.query(Image).count(),
            },
        }
    except Exception as e:
        return {
            "status": "unhealthy",
            "error": str(e),
        }


def check_system() -> Dict[str, Any]:
    """Check system resources"""
    memory = psutil.virtual_memory()
    return {
        "status": "healthy" if memory.percent < 90 else "warning",
        "memory_percent": memory.percent,
        "memory_available_gb": round(memory.available / (1024**3), 2),
        "python_version": sys.version.split()[0],
    }


@router.get("")
def health_check():
    """Liveness check with the current server time."""
    return {
        "status": "ok",
        "timestamp": utc_timestamp(),
    }


@router.get("/ready")
def health_ready(db: Session = Depends(get_db)):
    """
    Readiness probe - is the service ready to accept traffic?
    Checks database connectivity and memory headroom.
    """
    database = check_database(db)
    system = check_system()

    ready = database["status"] == "healthy"

    return {
        "ok": ready,
        "status": "ready" if ready else "not_ready",
        "checks": {
            "database": database,
            "system": system,
        },
        "timestamp": utc_timestamp(),
    }
