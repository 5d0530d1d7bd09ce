import requests

from tests.fakes import FakeResponse, FakeSession
from seed_orders.client import (DEFAULT_STEP_LIMIT_MATCHER, ErrorCategory, ErrorInfo, RemoteClient,
                                code_in, message_contains)
from seed_orders.config import DriverConfig
from seed_orders.fixtures import DEFAULT_ADDRESSES, PlanConfig, generate_fixtures

FIXTURE = generate_fixtures(DEFAULT_ADDRESSES, [
    PlanConfig(quantity=1, total_days=10, daily_amount=100, product_id="p1", description="ten days")])[0]


def make_client(*responses, **kwargs):
    session = FakeSession(*responses)
    return RemoteClient("http://backend.test/", "tok", session=session, **kwargs), session


def test_sets_auth_headers_and_timeout():
    client, session = make_client(FakeResponse(201, {"success": True, "data": {"order": {"orderId": "O1"}}}))
    outcome = client.create_order(FIXTURE, "WALLET")
    assert outcome.ok
    assert session.headers["Authorization"] == "Bearer tok"
    call = session.calls[0]
    assert call["method"] == "POST"
    assert call["url"] == "http://backend.test/api/installments/orders"
    assert call["timeout"] == 30.0
    assert call["json"]["paymentMethod"] == "WALLET"


def test_create_order_returns_data():
    body = {"success": True, "data": {"order": {"orderId": "O1"}, "firstPayment": {"amount": 100}}}
    client, _ = make_client(FakeResponse(201, body))
    outcome = client.create_order(FIXTURE, "WALLET")
    assert outcome.value["order"]["orderId"] == "O1"
    assert outcome.value["firstPayment"]["amount"] == 100


def test_transport_error_is_returned_not_raised():
    client, session = make_client(requests.exceptions.ConnectTimeout("timed out"))
    outcome = client.create_order(FIXTURE, "WALLET")
    assert not outcome.ok
    assert outcome.error.category is ErrorCategory.TRANSPORT
    assert outcome.error.status_code is None
    assert "timed out" in outcome.error.message
    assert len(session.calls) == 1


def test_4xx_is_validation_failure():
    client, _ = make_client(FakeResponse(400, {"success": False, "message": "Total days must be at least 5"}))
    outcome = client.create_order(FIXTURE, "WALLET")
    assert outcome.error.category is ErrorCategory.VALIDATION
    assert outcome.error.status_code == 400
    assert outcome.error.message == "Total days must be at least 5"
    assert str(outcome.error) == "Total days must be at least 5 (HTTP 400)"


def test_5xx_without_body_is_unexpected():
    client, _ = make_client(FakeResponse(502, None, reason="Bad Gateway"))
    outcome = client.create_order(FIXTURE, "WALLET")
    assert outcome.error.category is ErrorCategory.UNEXPECTED
    assert outcome.error.message == "Bad Gateway"


def test_success_false_on_2xx_is_a_failure():
    client, _ = make_client(FakeResponse(200, {"success": False, "error": "Insufficient wallet balance"}))
    outcome = client.create_order(FIXTURE, "WALLET")
    assert not outcome.ok
    assert outcome.error.message == "Insufficient wallet balance"


def test_2xx_without_order_is_a_failure():
    client, _ = make_client(FakeResponse(200, {"success": True, "data": {}}))
    outcome = client.create_order(FIXTURE, "WALLET")
    assert outcome.error.category is ErrorCategory.UNEXPECTED


def test_daily_limit_message_is_step_limit_even_on_500():
    body = {"success": False, "error": {"code": "INTERNAL_ERROR", "message":
            "You have already made a payment for this order today. Please try again tomorrow."}}
    client, session = make_client(FakeResponse(500, body))
    outcome = client.pay_installment("O1", "WALLET")
    assert outcome.error.category is ErrorCategory.STEP_LIMIT
    assert outcome.error.code == "INTERNAL_ERROR"
    assert session.calls[0]["json"] == {"orderId": "O1", "paymentMethod": "WALLET"}


def test_structured_code_is_step_limit():
    body = {"success": False, "message": "limit", "error": {"code": "PAYMENT_ALREADY_MADE_TODAY"}}
    client, _ = make_client(FakeResponse(400, body))
    assert client.pay_installment("O1", "WALLET").error.category is ErrorCategory.STEP_LIMIT


def test_matcher_is_replaceable():
    body = {"success": False, "message": "You have already made a payment for this order today."}
    client, _ = make_client(FakeResponse(400, body), step_limit_matcher=code_in("ONLY_THIS"))
    assert client.pay_installment("O1", "WALLET").error.category is ErrorCategory.VALIDATION


def test_message_contains_is_case_insensitive():
    match = message_contains("Limit Already Reached")
    assert match(ErrorInfo("daily limit already reached for this period"))
    assert not match(ErrorInfo("order not found"))


def test_default_matcher():
    assert DEFAULT_STEP_LIMIT_MATCHER(ErrorInfo("x", code="DAILY_LIMIT_REACHED"))
    assert not DEFAULT_STEP_LIMIT_MATCHER(ErrorInfo("Order not found", code="ORDER_NOT_FOUND"))


def test_list_orders_unwraps_data():
    client, _ = make_client(FakeResponse(200, {"success": True, "data": {"orders": [{"status": "ACTIVE"}]}}))
    assert client.list_orders().value == [{"status": "ACTIVE"}]


def test_from_config_and_context_manager():
    session = FakeSession()
    config = DriverConfig(base_url="http://x", token="t", timeout=5)
    with RemoteClient.from_config(config, session=session) as client:
        assert client.timeout == 5
        assert client.base_url == "http://x"
    assert session.closed
