"""Advance created orders through their installment schedule.

Creating an order pays installment 1, so reaching ``fraction`` of
``total_steps`` takes ``floor(total_steps * fraction) - 1`` more payments.
The backend accepts one payment per order per calendar day; hitting that
limit ends progression for the order and is not treated as a fault.
"""
from __future__ import annotations

import logging
import math
import time
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple, TypeVar

from .client import ErrorCategory, ErrorInfo
from .config import MIN_STEP_DELAY, Band, DriverConfig
from .driver import SubmissionResult, Success, entity_id
from .errors import ConfigError

logger = logging.getLogger(__name__)

T = TypeVar("T")

HALTED_STEP_LIMIT = "step_limit"
HALTED_FAULT = "fault"


@dataclass(frozen=True)
class ProgressionPlan:
    target_fraction: float
    total_steps: int

    @property
    def additional_steps(self) -> int:
        return additional_steps(self.total_steps, self.target_fraction)


@dataclass(frozen=True)
class ProgressionOutcome:
    entity_id: Optional[str]
    planned: int
    steps_completed: int
    halted_by: Optional[str] = None
    error: Optional[ErrorInfo] = None
    remote_progress: Optional[Tuple[int, int]] = None

    @property
    def is_fault(self) -> bool:
        return self.halted_by == HALTED_FAULT


def additional_steps(total_steps: int, target_fraction: float) -> int:
    """Payments still needed after creation; never negative."""
    return max(0, math.floor(total_steps * target_fraction) - 1)


def assign_bands(items: Sequence[T], bands: Sequence[Band]) -> List[Tuple[T, Band]]:
    """Split ``items`` by position: band k takes the next ``floor(n * share)`` items.

    Items left over after the last band are not returned.
    """
    n = len(items)
    assigned = []
    start = 0
    for band in bands:
        count = math.floor(n * band.share + 1e-9)
        for item in items[start:start + count]:
            assigned.append((item, band))
        start += count
    return assigned


def advance(entity: dict, target_fraction: float, total_steps: int, client,
            delay: float = 1.2, sleep: Callable[[float], None] = time.sleep,
            payment_method: str = "WALLET") -> ProgressionOutcome:
    if delay < MIN_STEP_DELAY:
        raise ConfigError(f"step delay must be at least {MIN_STEP_DELAY}s, got {delay}")

    order_id = entity_id(entity)
    planned = additional_steps(total_steps, target_fraction)
    completed = 0
    progress = None

    for _ in range(planned):
        sleep(delay)
        outcome = client.pay_installment(order_id, payment_method)
        if not outcome.ok:
            error = outcome.error
            if error.category is ErrorCategory.STEP_LIMIT:
                logger.info("   %s: daily payment limit reached after %d/%d payments",
                            order_id, completed, planned)
                return ProgressionOutcome(order_id, planned, completed, HALTED_STEP_LIMIT,
                                          error, progress)
            logger.warning("   %s: payment failed after %d/%d payments: %s",
                           order_id, completed, planned, error)
            return ProgressionOutcome(order_id, planned, completed, HALTED_FAULT, error, progress)

        completed += 1
        remote = outcome.value.get("order") or {}
        if "paidInstallments" in remote:
            progress = (remote["paidInstallments"], remote.get("totalDays", total_steps))
            logger.info("   %s: payment %d/%d, progress %d/%d", order_id, completed + 1,
                        planned + 1, progress[0], progress[1])
        else:
            logger.info("   %s: payment %d/%d", order_id, completed + 1, planned + 1)

    return ProgressionOutcome(order_id, planned, completed, remote_progress=progress)


def total_steps_for(success: Success) -> int:
    """Remote ``totalDays`` when it reads as a number, else the plan's ``total_days``."""
    remote = success.entity.get("totalDays")
    if remote is None or isinstance(remote, bool):
        return success.config.total_days
    try:
        return int(float(remote))
    except (TypeError, ValueError, OverflowError):
        logger.warning("%s: unreadable totalDays %r, using plan value %d",
                       entity_id(success.entity), remote, success.config.total_days)
        return success.config.total_days


def run_progression(results: Sequence[SubmissionResult], client,
                    config: DriverConfig = DriverConfig(),
                    sleep: Callable[[float], None] = time.sleep) -> List[ProgressionOutcome]:
    """Band the successful results by creation order and advance each banded order."""
    successes = [r for r in results if isinstance(r, Success)]
    outcomes = []
    for success, band in assign_bands(successes, config.bands):
        total_steps = total_steps_for(success)
        logger.info("Advancing %s to %d%% of %d installments", entity_id(success.entity),
                    round(band.fraction * 100), total_steps)
        outcomes.append(advance(success.entity, band.fraction, total_steps, client,
                                delay=config.step_delay, sleep=sleep,
                                payment_method=config.payment_method))
    return outcomes
