# storefront/decoding.py
"""
Envelope and record decoding shared by the threaded and async clients.

Every response is wrapped in an envelope:

    {"success": bool, "data": [...], "message": "...", "error": "..."}

List payloads are decoded tolerantly: a malformed record is dropped and
reported as a `Diagnostic`, the rest of the batch still comes through.
"""
import logging
from dataclasses import dataclass
from typing import Any, Iterable, List, Optional, Type
from urllib.parse import quote

from pydantic import BaseModel, ValidationError

from storefront.errors import DecodeError, RemoteError
from storefront.models import Envelope

logger = logging.getLogger(__name__)

DEFAULT_REMOTE_ERROR = "API request failed"
DEFAULT_HEALTH_ERROR = "API health check failed"


@dataclass(frozen=True)
class Diagnostic:
    index: int
    reason: str


class Batch(list):
    """Records that decoded successfully, in response order, plus what was skipped."""

    def __init__(self, records: Iterable[Any] = (), diagnostics: Iterable[Diagnostic] = ()):
        super().__init__(records)
        self.diagnostics: List[Diagnostic] = list(diagnostics)

    @property
    def skipped(self) -> int:
        return len(self.diagnostics)


def _first_error(exc: ValidationError) -> str:
    err = exc.errors()[0]
    loc = ".".join(str(part) for part in err.get("loc", ())) or "record"
    return f"{loc}: {err.get('msg')}"


def decode_envelope(payload: Any) -> Envelope:
    if not isinstance(payload, dict):
        raise DecodeError(f"Expected a JSON object, got {type(payload).__name__}")
    try:
        return Envelope.model_validate(payload)
    except ValidationError as e:
        raise DecodeError(f"Malformed envelope ({_first_error(e)})") from e


def decode_batch(items: Iterable[Any], model: Type[BaseModel], kind: str) -> Batch:
    records = []
    diagnostics = []
    seen_ids = set()

    for idx, raw in enumerate(items):
        if not isinstance(raw, dict):
            reason = f"expected an object, got {type(raw).__name__}"
        else:
            try:
                record = model.model_validate(raw)
            except ValidationError as e:
                reason = _first_error(e)
            else:
                if record.id in seen_ids:
                    reason = f"duplicate id {record.id!r}"
                else:
                    seen_ids.add(record.id)
                    records.append(record)
                    continue

        logger.warning("Error parsing %s #%d: %s", kind, idx, reason)
        diagnostics.append(Diagnostic(index=idx, reason=reason))

    return Batch(records, diagnostics)


def _check_success(envelope: Envelope, default_error: str):
    if envelope.success:
        return
    reason = envelope.error if envelope.error is not None else default_error
    raise RemoteError(str(reason))


def unwrap_list(payload: Any, model: Type[BaseModel], kind: str) -> Batch:
    """Turns a decoded response body into a `Batch` or raises `CatalogError`."""
    envelope = decode_envelope(payload)
    _check_success(envelope, DEFAULT_REMOTE_ERROR)
    if not isinstance(envelope.data, list):
        raise DecodeError(f"Envelope has no '{kind}' data array")
    return decode_batch(envelope.data, model, kind)


def unwrap_message(payload: Any, default_error: str = DEFAULT_HEALTH_ERROR) -> str:
    envelope = decode_envelope(payload)
    _check_success(envelope, default_error)
    if not isinstance(envelope.message, str):
        raise DecodeError("Envelope has no 'message' string")
    return envelope.message


def build_search_url(base_url: str, query: Optional[str]) -> str:
    # quote() with no safe chars: space -> %20, '+' -> %2B, '/' -> %2F
    encoded = quote(query or "", safe="")
    return f"{base_url.rstrip('/')}/search?q={encoded}"
