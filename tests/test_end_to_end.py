import datetime

from tests.fakes import FlaskSession
from sandbox_backend.app import create_app
from seed_orders.client import ErrorCategory, RemoteClient
from seed_orders.config import DriverConfig
from seed_orders.driver import run_batch
from seed_orders.fixtures import DEFAULT_ADDRESSES, PlanConfig, PlanShape, generate_fixtures
from seed_orders.progression import HALTED_STEP_LIMIT
from seed_orders.report import build_report, order_progress_lines, status_breakdown
from seed_orders.runner import fetch_orders, seed

CONFIG = DriverConfig(base_url="http://sandbox.test", token="test-token",
                      submit_delay=0.5, step_delay=0.5)


def sandbox_client(one_payment_per_day):
    app = create_app(one_payment_per_day=one_payment_per_day, today=lambda: datetime.date(2026, 1, 10))
    session = FlaskSession(app)
    return RemoteClient.from_config(CONFIG, session=session), session


def test_three_fixtures_two_addresses_with_a_rejected_middle_unit(sleep):
    client, session = sandbox_client(True)
    pool = DEFAULT_ADDRESSES[:2]
    fixtures = generate_fixtures(pool, [
        PlanConfig(quantity=1, total_days=10, daily_amount=100, product_id="prod_steel_bottle", description="ok 1"),
        PlanConfig(quantity=1, total_days=3, daily_amount=100, product_id="prod_steel_bottle", description="too short"),
        PlanConfig(quantity=1, total_days=10, daily_amount=100, product_id="prod_earbuds", description="ok 2"),
    ])
    assert fixtures[0].address is pool[0]
    assert fixtures[1].address is pool[1]
    assert fixtures[2].address is pool[0]

    results = run_batch(fixtures, client, CONFIG, sleep=sleep)

    assert [r.ok for r in results] == [True, False, True]
    assert results[1].error.category is ErrorCategory.VALIDATION
    assert len(session.calls) == 3
    assert sleep.calls == [0.5, 0.5]
    assert all(s >= 0.5 for s in sleep.calls)

    report = build_report(results)
    assert report.success_count == 2
    assert report.failure_count == 1
    assert report.failures[0][0] == "too short"
    assert report.total_value == 499 + 1999


def test_full_seed_run_reaches_every_band(sleep):
    client, _ = sandbox_client(False)
    shapes = [PlanShape(0, 1, 10, f"plan {i}") for i in range(4)]
    report = seed(client, CONFIG, shapes=shapes, sleep=sleep)

    assert report.success_count == 4
    assert [p.steps_completed for p in report.progressions] == [4, 7, 9]
    assert not any(p.halted_by for p in report.progressions)

    orders = fetch_orders(client)
    breakdown = status_breakdown(orders)
    assert breakdown["ACTIVE"] == 3
    assert breakdown["COMPLETED"] == 1
    assert [line.split(" - ", 1)[1] for line in order_progress_lines(orders)] == [
        "ACTIVE - 5/10 (50%)", "ACTIVE - 8/10 (80%)", "COMPLETED - 10/10 (100%)", "ACTIVE - 1/10 (10%)",
    ]


def test_daily_limit_halts_progression_without_faults(sleep):
    client, session = sandbox_client(True)
    shapes = [PlanShape(0, 1, 10, f"plan {i}") for i in range(3)]
    report = seed(client, CONFIG, shapes=shapes, sleep=sleep)

    assert report.success_count == 3
    assert [p.halted_by for p in report.progressions] == [HALTED_STEP_LIMIT] * 3
    assert [p.steps_completed for p in report.progressions] == [0, 0, 0]
    assert not any(p.is_fault for p in report.progressions)
    payments = [c for c in session.calls if c[1] == "/api/installments/payments/process"]
    assert len(payments) == 3
