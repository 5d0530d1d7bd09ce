"""
Bulk-create installment orders against the configured backend, then pay
down a banded subset of them so the account holds PENDING, ACTIVE and
COMPLETED orders.

Settings come from the environment:
  SEED_BASE_URL        backend root (default http://localhost:5000)
  SEED_USER_TOKEN      bearer token of the test user (required)
  SEED_PAYMENT_METHOD  WALLET (default) or RAZORPAY
  SEED_SUBMIT_DELAY    seconds between order creations (default 1.5)
  SEED_STEP_DELAY      seconds between installment payments (default 1.2)

Usage: python -m scripts.bulk_create_orders [--no-progress]
"""
import logging
import sys

from common.tokens import TokenError, user_id_from_token
from seed_orders.client import RemoteClient
from seed_orders.config import DriverConfig
from seed_orders.errors import SeedError
from seed_orders.report import format_report, order_progress_lines, status_breakdown
from seed_orders.runner import fetch_orders, seed

logging.basicConfig(level=logging.INFO, format="%(message)s")


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    progress = "--no-progress" not in argv

    try:
        config = DriverConfig.from_env()
    except SeedError as e:
        print(f"Invalid configuration: {e}")
        return 1
    if not config.token:
        print("SEED_USER_TOKEN is not set")
        return 1

    print("=" * 70)
    print("   BULK ORDER CREATION VIA API")
    print("=" * 70)
    print(f"Base URL: {config.base_url}")
    try:
        print(f"User ID: {user_id_from_token(config.token)}\n")
    except TokenError as e:
        print(f"User ID: unknown ({e})\n")

    with RemoteClient.from_config(config) as client:
        try:
            report = seed(client, config, progress=progress)
        except SeedError as e:
            print(f"Fatal error: {e}")
            return 1

        print("-" * 70)
        print(format_report(report))

        orders = fetch_orders(client)
        if orders is not None:
            print(f"\nTotal Orders: {len(orders)}")
            for status, count in status_breakdown(orders).items():
                print(f"   {status}: {count}")
            print("\nOrder Progress:")
            for line in order_progress_lines(orders):
                print(f"   {line}")
            if len(orders) > 15:
                print(f"   ... and {len(orders) - 15} more")

    print("\n" + "=" * 70)
    print("BULK ORDER CREATION COMPLETE")
    return 0


if __name__ == "__main__":
    sys.exit(main())
