from pydantic import BaseModel, Field
from typing import Optional, Dict, Any, List

from .database import PRODUCTS


class SeedIn(BaseModel):
    collection: str
    records: List[Any]


class FaultIn(BaseModel):
    endpoint: str
    status_code: Optional[int] = None
    body: Optional[str] = None
    envelope: Optional[Dict[str, Any]] = None
    delay: float = Field(0.0, ge=0)


def ok_envelope(data: List[Any]) -> Dict[str, Any]:
    return {"success": True, "data": data}


def error_envelope(error: str) -> Dict[str, Any]:
    return {"success": False, "error": error}


def _matches(record: Any, term: str) -> bool:
    if not isinstance(record, dict):
        return False
    for key in ("name", "description", "category"):
        value = record.get(key)
        if isinstance(value, str) and term in value.lower():
            return True
    return False


def search_products(q: str) -> List[Any]:
    term = q.strip().lower()
    if not term:
        return list(PRODUCTS)
    return [p for p in PRODUCTS if _matches(p, term)]
