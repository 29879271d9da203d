# storefront/client.py
import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

import requests

from storefront.decoding import (
    Batch,
    DEFAULT_HEALTH_ERROR,
    build_search_url,
    unwrap_list,
    unwrap_message,
)
from storefront.errors import CatalogError, ClientClosedError, DecodeError, TransportError
from storefront.models import Product, Seller, Story

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://peterka.netlify.app/api"
DEFAULT_TIMEOUT = 10
DEFAULT_MAX_WORKERS = 4

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """What a completion callback receives: a value or an error, never both."""

    value: Optional[T] = None
    error: Optional[CatalogError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        if self.error is not None:
            raise self.error
        return self.value


Callback = Callable[[Result], None]


class CatalogClient:
    """
    Threaded client for the storefront catalog API.

    Every operation is submitted to the client's own worker pool and returns a
    `concurrent.futures.Future`. An optional callback is invoked once, on the
    worker thread, with a `Result`. Close the client to stop the pool.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._session_factory = session_factory
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="catalog")
        self._closed = False
        self._close_lock = threading.Lock()

    # -----------------------
    # Catalog operations
    # -----------------------
    def list_products(self, callback: Optional[Callback] = None) -> "Future[Batch]":
        return self._submit("products", callback, self._fetch_list, f"{self.base_url}/products", Product, "product")

    def search_products(self, query: str, callback: Optional[Callback] = None) -> "Future[Batch]":
        url = build_search_url(self.base_url, query)
        return self._submit("search", callback, self._fetch_list, url, Product, "product")

    def list_stories(self, callback: Optional[Callback] = None) -> "Future[Batch]":
        return self._submit("stories", callback, self._fetch_list, f"{self.base_url}/stories", Story, "story")

    def list_sellers(self, callback: Optional[Callback] = None) -> "Future[Batch]":
        return self._submit("sellers", callback, self._fetch_list, f"{self.base_url}/sellers", Seller, "seller")

    def check_health(self, callback: Optional[Callback] = None) -> "Future[str]":
        return self._submit("health", callback, self._fetch_health, f"{self.base_url}/health")

    # -----------------------
    # Lifecycle
    # -----------------------
    @property
    def closed(self) -> bool:
        return self._closed

    def close(self, wait: bool = True):
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        self._executor.shutdown(wait=wait)
        logger.debug("Catalog client for %s closed", self.base_url)

    def __enter__(self):
        return self

    def __exit__(self, *exc):
        self.close()

    # -----------------------
    # Internals
    # -----------------------
    def _submit(self, name: str, callback: Optional[Callback], fn, *args) -> Future:
        if self._closed:
            raise ClientClosedError(f"Cannot run '{name}': client is closed")
        try:
            return self._executor.submit(self._run, name, callback, fn, *args)
        except RuntimeError as e:
            # close() raced with this call
            raise ClientClosedError(f"Cannot run '{name}': client is closed") from e

    def _run(self, name: str, callback: Optional[Callback], fn, *args):
        try:
            value = fn(*args)
        except CatalogError as e:
            logger.error("Error in %s: %s", name, e)
            self._deliver(name, callback, Result(error=e))
            raise
        self._deliver(name, callback, Result(value=value))
        return value

    @staticmethod
    def _deliver(name: str, callback: Optional[Callback], result: Result):
        if callback is None:
            return
        try:
            callback(result)
        except Exception:
            logger.exception("Callback for %s raised", name)

    def _get_json(self, url: str) -> Any:
        try:
            with self._session_factory() as session:
                r = session.get(url, headers=JSON_HEADERS, timeout=(self.timeout, self.timeout))
        except requests.exceptions.Timeout as e:
            raise TransportError(f"Timeout while requesting {url}") from e
        except requests.exceptions.RequestException as e:
            raise TransportError(f"Request to {url} failed: {e}") from e

        logger.debug("HTTP Response Code: %d for URL: %s", r.status_code, url)
        if not 200 <= r.status_code < 300:
            raise TransportError.from_status(r.status_code)

        try:
            return r.json()
        except ValueError as e:
            raise DecodeError(f"Response from {url} is not valid JSON") from e

    def _fetch_list(self, url: str, model, kind: str) -> Batch:
        batch = unwrap_list(self._get_json(url), model, kind)
        if batch.diagnostics:
            logger.info("Skipped %d malformed %s record(s) from %s", batch.skipped, kind, url)
        return batch

    def _fetch_health(self, url: str) -> str:
        return unwrap_message(self._get_json(url), DEFAULT_HEALTH_ERROR)
