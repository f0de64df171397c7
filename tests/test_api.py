"""HTTP contract tests for the voice-processing endpoint."""

import pytest
from fastapi.testclient import TestClient

from src.api.app import create_app
from src.schemas.action_schema import BookAppointment, CreateOrder, OrderItemRequest, TextReply


@pytest.fixture
def client_for(make_engine):
    clients = []

    def _make(*script):
        client = TestClient(create_app(engine=make_engine(*script)), raise_server_exceptions=False)
        client.__enter__()
        clients.append(client)
        return client

    yield _make
    for client in clients:
        client.__exit__(None, None, None)


class TestProcessVoice:
    def test_text_reply(self, client_for):
        client = client_for(TextReply(text="We open at nine."))
        resp = client.post("/process-voice", json={"text": "Hours?", "sessionId": "s1"})
        assert resp.status_code == 200
        assert resp.json() == {"textResponse": "We open at nine.", "action": {"type": "none"}}

    def test_original_path_alias(self, client_for):
        client = client_for(TextReply(text="Hello."))
        resp = client.post("/api/process-voice", json={"text": "Hi", "sessionId": "s1"})
        assert resp.status_code == 200

    def test_order_confirmation_body(self, client_for):
        client = client_for(
            CreateOrder(
                customer_name="Sam Lee",
                items=[OrderItemRequest(product_name="Premium Widget", quantity=5)],
            )
        )
        resp = client.post("/process-voice", json={"text": "5 widgets", "sessionId": "s1"})
        body = resp.json()

        assert resp.status_code == 200
        assert body["textResponse"] == "Order placed! Total is $149.95."
        assert body["action"]["type"] == "confirm_order"
        order = body["action"]["data"]
        assert order["status"] == "pending"
        assert order["customerName"] == "Sam Lee"
        assert order["totalAmount"] == pytest.approx(149.95)
        assert order["items"][0]["quantity"] == 5

    def test_appointment_confirmation_body(self, client_for):
        client = client_for(
            BookAppointment(
                customer_name="Jane Doe", date="2030-03-18T10:00:00", contact_info="0412"
            )
        )
        resp = client.post("/process-voice", json={"text": "Book it", "sessionId": "s1"})
        data = resp.json()["action"]["data"]
        assert resp.json()["action"]["type"] == "confirm_appointment"
        assert data["date"] == "2030-03-18T10:00:00"
        assert data["contactInfo"] == "0412"

    def test_unparseable_date_is_spoken(self, client_for):
        client = client_for(
            BookAppointment(customer_name="Jane Doe", date="whenever", contact_info="0412")
        )
        resp = client.post("/process-voice", json={"text": "Book whenever", "sessionId": "s1"})
        assert resp.status_code == 200
        assert resp.json()["textResponse"].startswith("I couldn't understand that date")


class TestErrors:
    def test_missing_session_id_is_400(self, client_for):
        client = client_for()
        resp = client.post("/process-voice", json={"text": "Hi"})
        assert resp.status_code == 400
        assert "sessionId" in resp.json()["message"]

    def test_empty_text_is_400(self, client_for):
        client = client_for()
        resp = client.post("/process-voice", json={"text": "", "sessionId": "s1"})
        assert resp.status_code == 400
        assert set(resp.json()) == {"message"}

    def test_non_json_body_is_400(self, client_for):
        client = client_for()
        resp = client.post(
            "/process-voice", content=b"not json", headers={"Content-Type": "application/json"}
        )
        assert resp.status_code == 400

    def test_unexpected_fault_is_opaque_500(self, client_for):
        client = client_for(RuntimeError("database exploded"))
        resp = client.post("/process-voice", json={"text": "Hi", "sessionId": "s1"})
        assert resp.status_code == 500
        assert resp.json() == {"message": "Internal server error"}


class TestHealth:
    def test_health(self, client_for):
        assert client_for().get("/health").json() == {"ok": True}
