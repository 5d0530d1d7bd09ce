"""Local stand-in for the installment-order API.

Implements just enough of the remote contract to run the seeding scripts
against localhost: product listing, order creation, order listing and daily
installment payments, with the one-payment-per-order-per-day rule.

Usage:

  SANDBOX_ONE_PAYMENT_PER_DAY=0 python -m sandbox_backend.app

then point ``SEED_BASE_URL`` at http://localhost:5000.
"""
from __future__ import annotations

import datetime
import logging
import math
import os
import sys

from flask import Flask, jsonify, request

from common.ids import generate_id, generate_reference_id

logging.basicConfig(level=logging.INFO)

MIN_TOTAL_DAYS = 5
MIN_DAILY_AMOUNT = 50
PAYMENT_METHODS = ("RAZORPAY", "WALLET")
ADDRESS_FIELDS = ("name", "phoneNumber", "addressLine1", "city", "state", "pincode")

DAILY_LIMIT_MESSAGE = "You have already made a payment for this order today. Please try again tomorrow."

SEED_PRODUCTS = [
    {"_id": "prod_steel_bottle", "name": "Steel Water Bottle", "status": "active",
     "availability": {"isAvailable": True}, "pricing": {"finalPrice": 499}},
    {"_id": "prod_earbuds", "name": "Wireless Earbuds", "status": "published",
     "availability": {"isAvailable": True}, "pricing": {"finalPrice": 1999}},
    {"_id": "prod_backpack", "name": "Laptop Backpack", "status": "active",
     "availability": {"isAvailable": True}, "pricing": {"finalPrice": 2499}},
    {"_id": "prod_draft_lamp", "name": "Desk Lamp", "status": "draft",
     "availability": {"isAvailable": True}, "pricing": {"finalPrice": 899}},
]


def _error(status, message, code=None):
    body = {"success": False, "message": message}
    if code:
        body["error"] = {"code": code, "message": message}
    return jsonify(body), status


def _ok(data, status=200):
    return jsonify({"success": True, "data": data}), status


def _validate_order(payload, products):
    errors = []
    if payload.get("productId") not in products:
        errors.append("Product not found")
    quantity = payload.get("quantity", 1)
    if not isinstance(quantity, int) or isinstance(quantity, bool) or quantity < 1:
        errors.append("Quantity must be a positive integer")
    total_days = payload.get("totalDays")
    if not isinstance(total_days, int) or isinstance(total_days, bool) or total_days < MIN_TOTAL_DAYS:
        errors.append(f"Total days must be a number and at least {MIN_TOTAL_DAYS}")
    daily_amount = payload.get("dailyAmount")
    if daily_amount is not None and (not isinstance(daily_amount, (int, float)) or daily_amount < MIN_DAILY_AMOUNT):
        errors.append(f"Daily amount must be a number and at least {MIN_DAILY_AMOUNT}")
    if payload.get("paymentMethod") not in PAYMENT_METHODS:
        errors.append(f"Payment method must be one of {', '.join(PAYMENT_METHODS)}")
    address = payload.get("deliveryAddress")
    if not isinstance(address, dict) or any(not address.get(f) for f in ADDRESS_FIELDS):
        errors.append("Delivery address is incomplete")
    return errors


def _record_payment(order, method, today):
    order["paidInstallments"] += 1
    order["totalPaidAmount"] += order["dailyPaymentAmount"]
    order["lastPaymentDate"] = today.isoformat()
    order["remainingInstallments"] = order["totalDays"] - order["paidInstallments"]
    order["status"] = "COMPLETED" if order["remainingInstallments"] <= 0 else "ACTIVE"
    return {
        "paymentId": generate_reference_id("PAY"),
        "orderId": order["orderId"],
        "installmentNumber": order["paidInstallments"],
        "amount": order["dailyPaymentAmount"],
        "paymentMethod": method,
        "status": "COMPLETED",
    }


def create_app(one_payment_per_day=None, today=None):
    """Build an app with fresh in-memory stores.

    ``today`` is a zero-argument callable returning the current date.
    """
    app = Flask(__name__)
    if one_payment_per_day is None:
        one_payment_per_day = os.getenv("SANDBOX_ONE_PAYMENT_PER_DAY", "1").lower() in ("1", "true", "yes")
    clock = today or datetime.date.today

    products = {p["_id"]: p for p in SEED_PRODUCTS}
    orders_db = {}

    @app.before_request
    def require_token():
        if request.path == "/health":
            return None
        header = request.headers.get("Authorization", "")
        if not header.startswith("Bearer ") or not header[len("Bearer "):].strip():
            return _error(401, "Authentication token is required", "TOKEN_MISSING")
        return None

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({"status": "healthy", "service": "sandbox_backend", "orders": len(orders_db)})

    @app.route("/api/products", methods=["GET"])
    def list_products():
        return jsonify({"success": True, "data": list(products.values())})

    @app.route("/api/installments/orders", methods=["POST"])
    def create_order():
        payload = request.get_json(silent=True) or {}
        errors = _validate_order(payload, products)
        if errors:
            return _error(400, "; ".join(errors), "VALIDATION_ERROR")

        product = products[payload["productId"]]
        quantity = payload.get("quantity", 1)
        total_price = product["pricing"]["finalPrice"] * quantity
        order = {
            "_id": generate_id("order"),
            "orderId": generate_reference_id("ORD"),
            "productId": product["_id"],
            "productName": product["name"],
            "quantity": quantity,
            "totalDays": payload["totalDays"],
            "dailyPaymentAmount": payload.get("dailyAmount") or math.ceil(total_price / payload["totalDays"]),
            "totalProductPrice": total_price,
            "paymentMethod": payload["paymentMethod"],
            "deliveryAddress": payload["deliveryAddress"],
            "status": "PENDING",
            "paidInstallments": 0,
            "totalPaidAmount": 0,
            "remainingInstallments": payload["totalDays"],
            "lastPaymentDate": None,
            "createdAt": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        }

        first_payment = None
        if payload["paymentMethod"] == "WALLET":
            first_payment = _record_payment(order, "WALLET", clock())

        orders_db[order["orderId"]] = order
        app.logger.info("Created order %s (%s)", order["orderId"], order["status"])
        return _ok({"order": order, "firstPayment": first_payment}, 201)

    @app.route("/api/installments/orders", methods=["GET"])
    def list_orders():
        return _ok({"orders": list(orders_db.values())})

    @app.route("/api/installments/payments/process", methods=["POST"])
    def process_payment():
        payload = request.get_json(silent=True) or {}
        if payload.get("paymentMethod") not in PAYMENT_METHODS:
            return _error(400, f"Payment method must be one of {', '.join(PAYMENT_METHODS)}", "VALIDATION_ERROR")

        order_id = payload.get("orderId")
        order = orders_db.get(order_id) or next(
            (o for o in orders_db.values() if o["_id"] == order_id), None)
        if order is None:
            return _error(404, "Order not found", "ORDER_NOT_FOUND")

        today = clock()
        if one_payment_per_day and order["lastPaymentDate"] == today.isoformat():
            return _error(400, DAILY_LIMIT_MESSAGE, "PAYMENT_ALREADY_MADE_TODAY")
        if order["status"] == "COMPLETED":
            return _error(400, "Order is already completed", "ORDER_ALREADY_COMPLETED")

        payment = _record_payment(order, payload["paymentMethod"], today)
        app.logger.info("Payment %d/%d for %s", order["paidInstallments"], order["totalDays"], order["orderId"])
        return _ok({"payment": payment, "order": order})

    return app


def main():
    port = int(sys.argv[1]) if len(sys.argv) > 1 else int(os.getenv("SANDBOX_PORT", "5000"))
    create_app().run(host="0.0.0.0", port=port, debug=True, use_reloader=False)


if __name__ == "__main__":
    main()
