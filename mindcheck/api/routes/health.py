from datetime import datetime, timezone

from fastapi import APIRouter

router = APIRouter()


@router.get("/healthz")
async def healthcheck() -> dict[str, str]:
    """Lightweight liveness check for load balancers and orchestrators."""
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}
