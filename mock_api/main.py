# mock_api/main.py
import asyncio
from datetime import datetime, timezone
from typing import Optional

from fastapi import APIRouter, FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response

from .core import FaultIn, SeedIn, ok_envelope, error_envelope, search_products
from .database import COLLECTIONS, ENDPOINTS, FAULTS, REQUEST_LOG, get_collection, load_samples

app = FastAPI(title="storefront catalog API (in-memory mock)")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def record_request(request: Request, call_next):
    if request.url.path.startswith("/api/"):
        REQUEST_LOG.append({
            "path": request.url.path,
            "query": request.url.query,
            "headers": dict(request.headers),
        })
    return await call_next(request)


api = APIRouter(prefix="/api")


async def _apply_fault(endpoint: str) -> Optional[Response]:
    fault = FAULTS.get(endpoint)
    if not fault:
        return None
    if fault.get("delay"):
        await asyncio.sleep(fault["delay"])

    status_code = fault.get("status_code")
    if fault.get("body") is not None:
        return Response(content=fault["body"], status_code=status_code or 200, media_type="text/plain")
    if fault.get("envelope") is not None:
        return JSONResponse(fault["envelope"], status_code=status_code or 200)
    if status_code is not None:
        return JSONResponse(error_envelope("injected failure"), status_code=status_code)
    # delay only
    return None


# ---------------------------
# Catalog endpoints
# ---------------------------
@api.get("/products")
async def list_products():
    fault = await _apply_fault("products")
    if fault is not None:
        return fault
    return ok_envelope(get_collection("products"))


@api.get("/stories")
async def list_stories():
    fault = await _apply_fault("stories")
    if fault is not None:
        return fault
    return ok_envelope(get_collection("stories"))


@api.get("/sellers")
async def list_sellers():
    fault = await _apply_fault("sellers")
    if fault is not None:
        return fault
    return ok_envelope(get_collection("sellers"))


@api.get("/search")
async def search(q: str = ""):
    fault = await _apply_fault("search")
    if fault is not None:
        return fault
    return ok_envelope(search_products(q))


@api.get("/health")
async def health():
    fault = await _apply_fault("health")
    if fault is not None:
        return fault
    return {
        "success": True,
        "message": "API is healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


app.include_router(api)


# ---------------------------
# Utility: reset / seed / faults (for tests and demos)
# ---------------------------
@app.post("/reset")
async def reset_all():
    load_samples()
    return {"status": "reset"}


@app.post("/debug/seed")
async def seed(payload: SeedIn):
    if payload.collection not in COLLECTIONS:
        raise HTTPException(status_code=404, detail=f"unknown collection: {payload.collection}")
    get_collection(payload.collection)[:] = payload.records
    return {"collection": payload.collection, "count": len(payload.records)}


@app.post("/debug/fault")
async def set_fault(payload: FaultIn):
    if payload.endpoint not in ENDPOINTS:
        raise HTTPException(status_code=404, detail=f"unknown endpoint: {payload.endpoint}")
    FAULTS[payload.endpoint] = payload.model_dump(exclude={"endpoint"})
    return {"endpoint": payload.endpoint, "fault": FAULTS[payload.endpoint]}


@app.delete("/debug/fault")
async def clear_faults():
    FAULTS.clear()
    return {"status": "cleared"}


@app.get("/debug/requests")
async def recorded_requests():
    return REQUEST_LOG
