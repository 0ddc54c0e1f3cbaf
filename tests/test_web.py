"""Tests for the JSON HTTP surface."""

from __future__ import annotations

import pytest

from billsage.services.chat import GREETING
from billsage.web import create_app

from .conftest import TODAY


@pytest.fixture
def app(ctx, user):
    app = create_app(context=ctx)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    with app.test_client() as client:
        yield client


@pytest.fixture
def auth_headers(client):
    response = client.post("/auth/login", json={"username": "tester", "password": "s3cret-pass"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.get_json()['token']}"}


def test_login_rejects_bad_password(client):
    response = client.post("/auth/login", json={"username": "tester", "password": "wrong"})

    assert response.status_code == 401
    assert response.get_json() == {"error": "Unauthorized"}


@pytest.mark.parametrize(
    "method, path",
    [
        ("get", "/calendar/2025/10"),
        ("get", "/goals"),
        ("get", "/assistant/history"),
        ("post", "/bills/1/toggle-paid"),
    ],
)
def test_endpoints_require_bearer_token(client, method, path):
    response = getattr(client, method)(path)

    assert response.status_code == 401


def test_forged_token_is_unauthorized(client):
    response = client.get("/goals", headers={"Authorization": "Bearer not-a-token"})

    assert response.status_code == 401


def test_calendar_month(client, auth_headers, bill_factory):
    bill_factory(amount="42.50")

    response = client.get("/calendar/2025/10", headers=auth_headers)

    assert response.status_code == 200
    body = response.get_json()
    assert body["leading_blanks"] == 3
    assert body["title"] == "October 2025"
    assert len(body["days"]) == 31
    day = body["days"][TODAY.day - 1]
    assert day["date"] == TODAY.isoformat()
    assert day["item_count"] == 1
    assert day["total_amount"] == 42.5


def test_invalid_month_is_bad_request(client, auth_headers):
    response = client.get("/calendar/2025/13", headers=auth_headers)

    assert response.status_code == 400


def test_bill_lifecycle(client, auth_headers):
    path = f"/days/{TODAY.isoformat()}/bills"

    created = client.post(
        path, json={"description": "Rent", "amount": "1200", "type": "bill"}, headers=auth_headers
    )
    assert created.status_code == 201
    bill = created.get_json()["bills"][0]
    assert bill["status"] == "unpaid"
    assert created.get_json()["total_bills"] == 1200.0

    toggled = client.post(f"/bills/{bill['id']}/toggle-paid", headers=auth_headers)
    assert toggled.get_json()["bills"][0]["status"] == "paid"

    arranged = client.post(
        f"/bills/{bill['id']}/payment-arrangement", json={"pa_date": "2025-10-30"}, headers=auth_headers
    )
    assert arranged.get_json()["bills"][0]["status"] == "payment_arrangement"
    assert arranged.get_json()["bills"][0]["pa_date"] == "2025-10-30"

    status = client.post(f"/bills/{bill['id']}/status", json={"status": "unpaid"}, headers=auth_headers)
    assert status.get_json()["bills"][0]["status"] == "unpaid"

    deleted = client.delete(f"/bills/{bill['id']}", headers=auth_headers)
    assert deleted.status_code == 200
    assert deleted.get_json()["bills"] == []

    listed = client.get(path, headers=auth_headers)
    assert listed.get_json() == {
        "date": TODAY.isoformat(),
        "bills": [],
        "total_bills": 0.0,
        "total_income": 0.0,
    }


def test_bill_precondition_failures(client, auth_headers, bill_factory):
    bill = bill_factory()

    blank = client.post(f"/days/{TODAY.isoformat()}/bills", json={"description": ""}, headers=auth_headers)
    assert blank.status_code == 400

    no_pa_date = client.post(
        f"/bills/{bill.id}/status", json={"status": "payment_arrangement"}, headers=auth_headers
    )
    assert no_pa_date.status_code == 400

    bad_date = client.get("/days/not-a-date/bills", headers=auth_headers)
    assert bad_date.status_code == 400


def test_unknown_bill_is_not_found(client, auth_headers):
    response = client.post("/bills/9999/toggle-paid", headers=auth_headers)

    assert response.status_code == 404


def test_goal_routes(client, auth_headers):
    for text, priority in [("Low", 1), ("High", 3), ("Medium", 2)]:
        response = client.post("/goals", json={"goal": text, "priority": priority}, headers=auth_headers)
        assert response.status_code == 201

    board = client.get("/goals", headers=auth_headers).get_json()
    assert [g["priority"] for g in board["active"]] == [3, 2, 1]

    high_id = board["active"][0]["id"]
    board = client.post(f"/goals/{high_id}/toggle", headers=auth_headers).get_json()
    assert [g["id"] for g in board["completed"]] == [high_id]

    board = client.delete(f"/goals/{high_id}", headers=auth_headers).get_json()
    assert board["completed"] == []
    assert len(board["active"]) == 2


@pytest.mark.parametrize("priority", [9, 2.9, True])
def test_goal_priority_out_of_range(client, auth_headers, priority):
    response = client.post("/goals", json={"goal": "Save", "priority": priority}, headers=auth_headers)

    assert response.status_code == 400
    assert client.get("/goals", headers=auth_headers).get_json()["active"] == []


def test_assistant_history_greets(client, auth_headers):
    body = client.get("/assistant/history", headers=auth_headers).get_json()

    assert [(m["role"], m["message"]) for m in body["messages"]] == [("assistant", GREETING)]


def test_assistant_reply(client, auth_headers, fake_client):
    response = client.post("/assistant", json={"message": "Hi"}, headers=auth_headers)

    assert response.status_code == 200
    assert response.get_json() == {"reply": fake_client.reply}


def test_assistant_blank_message(client, auth_headers):
    response = client.post("/assistant", json={"message": "  "}, headers=auth_headers)

    assert response.status_code == 400
    assert response.get_json() == {"error": "Message is required"}


def test_assistant_not_configured_returns_500(client, auth_headers, ctx):
    from billsage.services.assistant import OpenAICompatibleClient

    ctx.assistant.client = OpenAICompatibleClient(api_key=None, model="gemini-1.5-flash")

    response = client.post("/assistant", json={"message": "Hi"}, headers=auth_headers)

    assert response.status_code == 500
    assert "GEMINI_API_KEY" in response.get_json()["error"]
