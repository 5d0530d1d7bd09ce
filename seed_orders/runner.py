"""Full seeding run: products -> fixtures -> batch -> progression -> report."""
from __future__ import annotations

import logging
import time
from typing import Callable, Optional, Sequence

from .config import DriverConfig
from .driver import run_batch
from .errors import FixtureError
from .fixtures import DEFAULT_ADDRESSES, DEFAULT_PLANS, Address, PlanShape, generate_fixtures, \
    plans_for_products, select_products
from .progression import run_progression
from .report import Report, build_report

logger = logging.getLogger(__name__)


def seed(client, config: DriverConfig, pool: Sequence[Address] = DEFAULT_ADDRESSES,
         shapes: Sequence[PlanShape] = DEFAULT_PLANS, progress: bool = True,
         sleep: Callable[[float], None] = time.sleep) -> Report:
    """Create one order per plan shape and advance a banded subset of them.

    Raises ``FixtureError`` when no sellable product can be fetched.
    """
    listing = client.list_products()
    if not listing.ok:
        raise FixtureError(f"could not fetch products: {listing.error}")
    products = select_products(listing.value)
    logger.info("Found %d available products", len(products))

    fixtures = generate_fixtures(pool, plans_for_products(products, shapes))
    logger.info("Creating %d orders...", len(fixtures))
    results = run_batch(fixtures, client, config, sleep=sleep)

    progressions = run_progression(results, client, config, sleep=sleep) if progress else []
    return build_report(results, progressions)


def fetch_orders(client) -> Optional[list]:
    """Remote order list for the closing summary, or None if it is unavailable."""
    outcome = client.list_orders()
    if not outcome.ok:
        logger.warning("Could not fetch final order summary: %s", outcome.error)
        return None
    return outcome.value
