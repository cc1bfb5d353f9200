"""Health Probes — liveness and readiness for the exchange service.

Invariants:
    - GET /health/ answers 200 whenever the process is up
    - GET /health/ready answers 503 until the database is reachable AND the
      exchange schema exists; each failing check is named in the body
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import vault.infrastructure.database as database

SERVICE = "vault-exchange-api"
VERSION = "1.0.0"

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    return {"status": "healthy", "service": SERVICE, "version": VERSION}


@router.get("/ready")
async def readiness_check():
    manager = database.db_manager
    checks = {"database": False, "schema": False}
    if manager:
        checks["database"] = await manager.health_check()
        checks["schema"] = checks["database"] and await manager.schema_ready()

    body = {name: "healthy" if ok else "unavailable" for name, ok in checks.items()}
    if not all(checks.values()):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": body},
        )
    return {"status": "ready", "checks": body}
