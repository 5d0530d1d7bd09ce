"""Summaries of a seeding run, computed only from its results."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from .driver import SubmissionResult, entity_id
from .progression import HALTED_FAULT, HALTED_STEP_LIMIT, ProgressionOutcome

ORDER_STATUSES = ("PENDING", "ACTIVE", "COMPLETED", "CANCELLED")


@dataclass(frozen=True)
class Report:
    success_count: int = 0
    failure_count: int = 0
    total_value: float = 0
    average_duration: float = 0
    created: Tuple[Tuple[str, int, float], ...] = ()
    failures: Tuple[Tuple[str, str], ...] = ()
    progressions: Tuple[ProgressionOutcome, ...] = field(default=())

    @property
    def attempted(self) -> int:
        return self.success_count + self.failure_count


def _number(value) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0.0


def build_report(results: Sequence[SubmissionResult],
                 progressions: Iterable[ProgressionOutcome] = ()) -> Report:
    successes = [r for r in results if r.ok]
    failures = [r for r in results if not r.ok]

    total_value = sum(_number(r.entity.get("totalProductPrice")) for r in successes)
    durations = [_number(r.entity.get("totalDays") or r.config.total_days) for r in successes]
    average = sum(durations) / len(durations) if durations else 0

    return Report(
        success_count=len(successes),
        failure_count=len(failures),
        total_value=total_value,
        average_duration=average,
        created=tuple(
            (entity_id(r.entity), int(d), _number(r.entity.get("totalProductPrice")))
            for r, d in zip(successes, durations)
        ),
        failures=tuple(
            (r.config.description or f"fixture {r.fixture.index}", r.reason) for r in failures
        ),
        progressions=tuple(progressions),
    )


def status_breakdown(orders: Iterable[dict]) -> Dict[str, int]:
    """Count orders per status; the four known statuses are always present."""
    counts = Counter(o.get("status", "UNKNOWN") for o in orders)
    breakdown = {status: counts.pop(status, 0) for status in ORDER_STATUSES}
    breakdown.update(sorted(counts.items()))
    return breakdown


def order_progress_lines(orders: Sequence[dict], limit: int = 15) -> List[str]:
    """One ``orderId - status - paid/total (pct%)`` line for each of the first ``limit`` orders."""
    lines = []
    for order in orders[:limit]:
        paid = int(_number(order.get("paidInstallments")))
        total = int(_number(order.get("totalDays")))
        percent = round(paid / total * 100) if total > 0 else 0
        order_id = order.get("orderId") or order.get("_id") or "?"
        lines.append(f"{order_id} - {order.get('status', 'UNKNOWN')} - {paid}/{total} ({percent}%)")
    return lines


def format_report(report: Report) -> str:
    lines: List[str] = [
        "Summary:",
        f"  Total Attempted: {report.attempted}",
        f"  Successful: {report.success_count}",
        f"  Failed: {report.failure_count}",
    ]

    if report.success_count:
        lines.append(f"  Total Order Value: {report.total_value:,.2f}")
        lines.append(f"  Average Duration: {round(report.average_duration)} days")
        lines.append("")
        lines.append("  Created Order IDs:")
        for i, (order_id, days, value) in enumerate(report.created, 1):
            lines.append(f"  {i:3d}. {order_id} - {days} days - {value:,.2f}")

    if report.failures:
        lines.append("")
        lines.append("  Failed Orders:")
        for i, (description, reason) in enumerate(report.failures, 1):
            lines.append(f"  {i:3d}. {description}: {reason}")

    if report.progressions:
        lines.append("")
        lines.append("  Progression:")
        for p in report.progressions:
            status = {None: "done", HALTED_STEP_LIMIT: "stopped at daily limit",
                      HALTED_FAULT: f"failed: {p.error}"}.get(p.halted_by, p.halted_by)
            lines.append(f"    {p.entity_id}: {p.steps_completed}/{p.planned} additional payments ({status})")

    return "\n".join(lines)
