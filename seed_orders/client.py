"""Thin authenticated client for the installment API.

Every call makes exactly one request and never raises for network problems
or error responses: the result is an ``Outcome`` carrying either the decoded
payload or an ``ErrorInfo``. Retrying is the caller's business.
"""
from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional

import requests

logger = logging.getLogger(__name__)

ORDERS_PATH = "/api/installments/orders"
PAYMENTS_PATH = "/api/installments/payments/process"
PRODUCTS_PATH = "/api/products"


class ErrorCategory(str, Enum):
    TRANSPORT = "transport"
    VALIDATION = "validation"
    STEP_LIMIT = "step_limit"
    UNEXPECTED = "unexpected"


@dataclass(frozen=True)
class ErrorInfo:
    message: str
    status_code: Optional[int] = None
    category: ErrorCategory = ErrorCategory.UNEXPECTED
    code: Optional[str] = None

    def __str__(self):
        if self.status_code is None:
            return self.message
        return f"{self.message} (HTTP {self.status_code})"


@dataclass(frozen=True)
class Outcome:
    value: Any = None
    error: Optional[ErrorInfo] = None

    @property
    def ok(self) -> bool:
        return self.error is None


StepLimitMatcher = Callable[[ErrorInfo], bool]


def message_contains(*needles: str) -> StepLimitMatcher:
    """Match errors whose message contains any of ``needles`` (case-insensitive)."""
    lowered = [n.lower() for n in needles]

    def match(error: ErrorInfo) -> bool:
        message = error.message.lower()
        return any(n in message for n in lowered)

    return match


def code_in(*codes: str) -> StepLimitMatcher:
    """Match errors whose structured code is one of ``codes``."""
    wanted = set(codes)

    def match(error: ErrorInfo) -> bool:
        return error.code in wanted

    return match


def any_of(*matchers: StepLimitMatcher) -> StepLimitMatcher:
    def match(error: ErrorInfo) -> bool:
        return any(m(error) for m in matchers)

    return match


DEFAULT_STEP_LIMIT_MATCHER = any_of(
    code_in("PAYMENT_ALREADY_MADE_TODAY", "DAILY_LIMIT_REACHED"),
    message_contains("already made a payment"),
)


def _decode(response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None


def _error_message(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    if body.get("message"):
        return str(body["message"])
    error = body.get("error")
    if isinstance(error, str) and error:
        return error
    if isinstance(error, dict) and error.get("message"):
        return str(error["message"])
    return None


def _error_code(body: Any) -> Optional[str]:
    if not isinstance(body, dict):
        return None
    error = body.get("error")
    if isinstance(error, dict) and error.get("code"):
        return str(error["code"])
    if body.get("code"):
        return str(body["code"])
    return None


class RemoteClient:
    def __init__(self, base_url: str, token: str, timeout: float = 30.0,
                 step_limit_matcher: StepLimitMatcher = DEFAULT_STEP_LIMIT_MATCHER,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.step_limit_matcher = step_limit_matcher
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Bearer {token}",
            "Content-Type": "application/json",
        })

    @classmethod
    def from_config(cls, config, **kwargs) -> "RemoteClient":
        return cls(config.base_url, config.token, timeout=config.timeout, **kwargs)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    def classify(self, status_code: Optional[int], body: Any, reason: str = "") -> ErrorInfo:
        """Turn an error response into an ``ErrorInfo`` with its category set."""
        message = _error_message(body) or reason or f"HTTP {status_code}"
        error = ErrorInfo(message=message, status_code=status_code, code=_error_code(body))
        if self.step_limit_matcher(error):
            category = ErrorCategory.STEP_LIMIT
        elif status_code is not None and 400 <= status_code < 500:
            category = ErrorCategory.VALIDATION
        else:
            category = ErrorCategory.UNEXPECTED
        return dataclasses.replace(error, category=category)

    def request(self, method: str, path: str, payload: Optional[dict] = None) -> Outcome:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, json=payload, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            logger.warning("%s %s failed: %s", method, path, exc)
            return Outcome(error=ErrorInfo(message=str(exc), category=ErrorCategory.TRANSPORT))

        body = _decode(response)
        failed = isinstance(body, dict) and body.get("success") is False
        if not 200 <= response.status_code < 300 or failed:
            error = self.classify(response.status_code, body, getattr(response, "reason", "") or "")
            logger.debug("%s %s rejected: %s [%s]", method, path, error, error.category.value)
            return Outcome(error=error)
        return Outcome(value=body)

    def _data(self, outcome: Outcome, required: str) -> Outcome:
        if not outcome.ok:
            return outcome
        data = outcome.value.get("data") if isinstance(outcome.value, dict) else None
        if not isinstance(data, dict) or required not in data:
            return Outcome(error=ErrorInfo(
                message=f"response has no data.{required}",
                category=ErrorCategory.UNEXPECTED,
            ))
        return Outcome(value=data)

    def create_order(self, fixture, payment_method: str) -> Outcome:
        """POST one order. The value is ``data`` (``order`` and maybe ``firstPayment``)."""
        outcome = self.request("POST", ORDERS_PATH, fixture.to_payload(payment_method))
        return self._data(outcome, "order")

    def pay_installment(self, order_id: str, payment_method: str) -> Outcome:
        """POST one installment payment. The value is ``data`` (``payment`` and ``order``)."""
        outcome = self.request("POST", PAYMENTS_PATH, {
            "orderId": order_id,
            "paymentMethod": payment_method,
        })
        return self._data(outcome, "order")

    def list_products(self) -> Outcome:
        return self.request("GET", PRODUCTS_PATH)

    def list_orders(self) -> Outcome:
        """GET the caller's orders. The value is the list under ``data.orders``."""
        outcome = self.request("GET", ORDERS_PATH)
        if not outcome.ok:
            return outcome
        data = outcome.value.get("data") if isinstance(outcome.value, dict) else None
        orders = (data or {}).get("orders") if isinstance(data, dict) else None
        return Outcome(value=list(orders or []))
