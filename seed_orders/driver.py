"""Sequential, paced submission of a fixture batch.

Orders are created one at a time in fixture order. The backend rate-limits
per user, so requests are never issued concurrently and a fixed pause sits
between consecutive submissions. A failed unit is recorded and the batch
moves on; nothing is retried.
"""
from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Union

from .client import ErrorInfo
from .config import DriverConfig
from .fixtures import Fixture, PlanConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Success:
    fixture: Fixture
    entity: dict
    first_step: Optional[dict] = None
    ok = True

    @property
    def config(self) -> PlanConfig:
        return self.fixture.config


@dataclass(frozen=True)
class Failure:
    fixture: Fixture
    error: ErrorInfo
    ok = False

    @property
    def config(self) -> PlanConfig:
        return self.fixture.config

    @property
    def reason(self) -> str:
        return str(self.error)


SubmissionResult = Union[Success, Failure]


def entity_id(entity: dict) -> Optional[str]:
    """The ID the payment endpoint accepts: the public orderId, else the record id."""
    return entity.get("orderId") or entity.get("_id") or entity.get("id")


def submit_one(fixture: Fixture, client, payment_method: str) -> SubmissionResult:
    outcome = client.create_order(fixture, payment_method)
    if not outcome.ok:
        return Failure(fixture=fixture, error=outcome.error)
    data = outcome.value
    return Success(fixture=fixture, entity=data["order"], first_step=data.get("firstPayment"))


def run_batch(fixtures: Sequence[Fixture], client, config: DriverConfig = DriverConfig(),
              sleep: Callable[[float], None] = time.sleep) -> List[SubmissionResult]:
    """Submit every fixture in order and return one result per fixture."""
    results: List[SubmissionResult] = []
    total = len(fixtures)

    for position, fixture in enumerate(fixtures):
        if position:
            sleep(config.submit_delay)

        plan = fixture.config
        logger.info("[%d/%d] Creating: %s (%d x %d days @ %s/day)", position + 1, total,
                    plan.description or f"fixture {fixture.index}", plan.quantity,
                    plan.total_days, plan.daily_amount)

        result = submit_one(fixture, client, config.payment_method)
        if result.ok:
            logger.info("   created order %s, status %s", entity_id(result.entity),
                        result.entity.get("status"))
        else:
            logger.warning("   failed [%s]: %s", result.error.category.value, result.reason)
        results.append(result)

    return results
