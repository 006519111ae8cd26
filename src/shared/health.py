from time import perf_counter

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from src.dependencies import TenancyContainer, get_tenancy

router = APIRouter(tags=["Health"])


@router.get("/_health/cache")
async def health_cache(tenancy: TenancyContainer = Depends(get_tenancy)):
    cache = tenancy.cache
    remote = cache.remote
    if remote is None:
        remote_status = "disabled"
    else:
        remote_status = "ok" if await remote.ping() else "degraded"
    return {
        "service": "cache",
        "status": "ok" if remote_status != "degraded" else "degraded",
        "memory_entries": len(cache.memory),
        "remote": {"backend": cache.remote_name, "status": remote_status},
    }


@router.get("/_health/db")
async def health_db(tenancy: TenancyContainer = Depends(get_tenancy)):
    database = tenancy.database
    if database is None:
        return {"service": "database", "status": "disabled"}
    t0 = perf_counter()
    if await database.ping():
        dt_ms = int((perf_counter() - t0) * 1000)
        return {"service": "database", "status": "ok", "checks": {"db_select_1_ms": dt_ms}}
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"service": "database", "status": "unavailable"},
    )
