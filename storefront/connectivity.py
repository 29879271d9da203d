# storefront/connectivity.py
"""
Sequential smoke test of a catalog API: health, products, stories, sellers
and finally a search. Stops at the first step that fails.
"""
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from storefront.client import CatalogClient
from storefront.errors import CatalogError

logger = logging.getLogger(__name__)

STEPS = ("health", "products", "stories", "sellers", "search")


@dataclass
class StepOutcome:
    name: str
    ok: bool
    count: Optional[int] = None
    detail: str = ""


@dataclass
class ConnectivityReport:
    steps: List[StepOutcome] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return len(self.steps) == len(STEPS) and all(s.ok for s in self.steps)

    @property
    def failed_step(self) -> Optional[StepOutcome]:
        return next((s for s in self.steps if not s.ok), None)


def _log_products(products, verb="Product"):
    for p in products:
        logger.info("%s: %s, Price: %.2f, Discount: %d%%", verb, p.name, p.price, p.discount)


def run_connectivity_check(client: CatalogClient, search_query: str = "iPhone") -> ConnectivityReport:
    report = ConnectivityReport()
    logger.info("Testing API connection to %s", client.base_url)

    calls = [
        ("health", client.check_health),
        ("products", client.list_products),
        ("stories", client.list_stories),
        ("sellers", client.list_sellers),
        ("search", lambda: client.search_products(search_query)),
    ]

    for name, call in calls:
        try:
            value = call().result()
        except CatalogError as e:
            logger.error("Step '%s' failed: %s", name, e)
            report.steps.append(StepOutcome(name=name, ok=False, detail=str(e)))
            break

        if name == "health":
            logger.info("API Health Check: %s", value)
            report.steps.append(StepOutcome(name=name, ok=True, detail=value))
            continue

        if name == "products":
            _log_products(value)
        elif name == "stories":
            for s in value:
                logger.info("Story: %s, Link: %s", s.title, s.link)
        elif name == "sellers":
            for s in value:
                logger.info("Seller: %s, Telegram: %s", s.name, s.telegram_url)
        else:
            _log_products(value, verb="Found")

        detail = f"{len(value)} items"
        if value.diagnostics:
            detail += f", {value.skipped} skipped"
        logger.info("%s loaded: %s", name.capitalize(), detail)
        report.steps.append(StepOutcome(name=name, ok=True, count=len(value), detail=detail))

    return report
