"""Static fixture catalog: delivery addresses, plan shapes and their pairing.

Everything here is pure. ``generate_fixtures`` pairs the i-th plan with
``pool[i % len(pool)]`` so a batch is reproducible run after run.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence

from .errors import FixtureError

MIN_DAILY_AMOUNT = 50


@dataclass(frozen=True)
class Address:
    name: str
    phone_number: str
    address_line1: str
    address_line2: str
    city: str
    state: str
    pincode: str

    def to_payload(self) -> dict:
        return {
            "name": self.name,
            "phoneNumber": self.phone_number,
            "addressLine1": self.address_line1,
            "addressLine2": self.address_line2,
            "city": self.city,
            "state": self.state,
            "pincode": self.pincode,
        }


@dataclass(frozen=True)
class PlanShape:
    """A plan before it is priced against a product."""

    product_index: int
    quantity: int
    total_days: int
    description: str


@dataclass(frozen=True)
class PlanConfig:
    quantity: int
    total_days: int
    daily_amount: int
    product_id: Optional[str] = None
    description: str = ""


@dataclass(frozen=True)
class Fixture:
    index: int
    config: PlanConfig
    address: Address

    def to_payload(self, payment_method: str) -> dict:
        """Body for the order-creation endpoint."""
        return {
            "productId": self.config.product_id,
            "quantity": self.config.quantity,
            "totalDays": self.config.total_days,
            "dailyAmount": self.config.daily_amount,
            "paymentMethod": payment_method,
            "deliveryAddress": self.address.to_payload(),
        }


DEFAULT_ADDRESSES = (
    Address("Rajesh Kumar", "9876543210", "123 MG Road, Andheri", "Near Phoenix Mall",
            "Mumbai", "Maharashtra", "400001"),
    Address("Priya Sharma", "8765432109", "456 Brigade Road", "Opposite Garuda Mall",
            "Bangalore", "Karnataka", "560001"),
    Address("Amit Singh", "7654321098", "789 Connaught Place", "Near India Gate",
            "Delhi", "Delhi", "110001"),
    Address("Sneha Reddy", "6543210987", "321 Park Street", "Near Victoria Memorial",
            "Kolkata", "West Bengal", "700016"),
    Address("Vikram Patel", "5432109876", "555 Anna Salai", "Near Spencer Plaza",
            "Chennai", "Tamil Nadu", "600002"),
    Address("Anita Desai", "4321098765", "888 FC Road", "Near Deccan Gymkhana",
            "Pune", "Maharashtra", "411004"),
    Address("Rohit Joshi", "3210987654", "777 CG Road", "Near IIM Ahmedabad",
            "Ahmedabad", "Gujarat", "380009"),
    Address("Kavita Nair", "2109876543", "999 Marine Drive", "Near Ernakulam Junction",
            "Kochi", "Kerala", "682011"),
)

# Quick (5-10 days), medium (15-25), long (30-60), then a few extra mixes.
DEFAULT_PLANS = (
    PlanShape(0, 1, 5, "5-day quick plan (minimum duration)"),
    PlanShape(0, 2, 8, "8-day plan with 2 units"),
    PlanShape(1, 1, 10, "10-day standard quick plan"),
    PlanShape(0, 1, 15, "15-day medium plan"),
    PlanShape(1, 3, 18, "18-day plan with 3 units"),
    PlanShape(0, 1, 20, "20-day standard plan"),
    PlanShape(1, 2, 25, "25-day plan with 2 units"),
    PlanShape(0, 1, 30, "30-day flexible plan"),
    PlanShape(1, 1, 40, "40-day extended plan"),
    PlanShape(0, 4, 35, "35-day plan with 4 units (bulk)"),
    PlanShape(1, 1, 50, "50-day long-term plan"),
    PlanShape(0, 1, 60, "60-day maximum flexibility plan"),
    PlanShape(2, 5, 20, "20-day plan with 5 units (bulk order)"),
    PlanShape(1, 2, 12, "12-day plan with 2 units"),
    PlanShape(0, 1, 45, "45-day extended flexible plan"),
)


def generate_fixtures(pool: Sequence[Address], configs: Sequence[PlanConfig]) -> List[Fixture]:
    """Pair every config with an address from ``pool`` by ``index % len(pool)``.

    Raises ``FixtureError`` when the pool is empty; that is the one condition
    that aborts a run before any request is made.
    """
    if not pool:
        raise FixtureError("address pool is empty")
    size = len(pool)
    return [Fixture(index=i, config=config, address=pool[i % size])
            for i, config in enumerate(configs)]


def daily_amount_for(price: float, quantity: int, total_days: int,
                     minimum: int = MIN_DAILY_AMOUNT) -> int:
    """Smallest whole daily amount that covers ``price * quantity`` in ``total_days``."""
    if total_days <= 0:
        raise FixtureError(f"total_days must be positive, got {total_days}")
    return max(minimum, math.ceil(price * quantity / total_days))


def _final_price(product: dict) -> float:
    return float((product.get("pricing") or {}).get("finalPrice") or 0)


def select_products(payload) -> List[dict]:
    """Extract sellable products from a product-list response, cheapest first.

    Accepts the raw list or the ``{"data": [...]}`` / ``{"products": [...]}``
    envelopes the product endpoint has used.
    """
    if isinstance(payload, dict):
        products = payload.get("data") or payload.get("products") or []
    else:
        products = payload or []

    selected = [
        p for p in products
        if p.get("status") in ("active", "published")
        and (p.get("availability") or {}).get("isAvailable")
        and _final_price(p) > 0
    ]
    selected.sort(key=_final_price)
    return selected


def plans_for_products(products: Sequence[dict],
                       shapes: Iterable[PlanShape] = DEFAULT_PLANS) -> List[PlanConfig]:
    """Price each plan shape against ``products[shape.product_index % len(products)]``."""
    if not products:
        raise FixtureError("no products available to build plans")
    plans = []
    for shape in shapes:
        product = products[shape.product_index % len(products)]
        plans.append(PlanConfig(
            quantity=shape.quantity,
            total_days=shape.total_days,
            daily_amount=daily_amount_for(_final_price(product), shape.quantity, shape.total_days),
            product_id=product.get("_id") or product.get("productId"),
            description=shape.description,
        ))
    return plans
