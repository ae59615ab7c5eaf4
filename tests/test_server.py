"""
HTTP and WebSocket tests for the FastAPI app.
"""

import pytest
from fastapi.testclient import TestClient

from askcart.db.sqlite import Database
from askcart.server.app import create_app
from tests.fakes import CATALOG, FakeLLM, run, seed_catalog


def seed(db_url: str) -> None:
    async def _seed():
        db = Database(db_url, echo=False)
        await db.init()
        try:
            await seed_catalog(db, CATALOG)
        finally:
            await db.close()

    run(_seed())


@pytest.fixture
def llm():
    return FakeLLM(reply="For under $1000 the Budget Laptop is a great fit.")


@pytest.fixture
def client(settings, db_url, llm):
    seed(db_url)
    with TestClient(create_app(settings, llm=llm)) as client:
        yield client


def test_health(client):
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


class TestWebSocketChat:
    def test_chat_flow(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "message", "content": "Hi", "sessionId": "s1"})
            assert ws.receive_json() == {"type": "error", "content": "No active conversation"}

            ws.send_json({"type": "join", "sessionId": "s1"})
            assert ws.receive_json() == {"type": "history", "messages": []}

            ws.send_json({"type": "message", "content": "I need a laptop under $1000", "sessionId": "s1"})
            frame = ws.receive_json()

        assert frame["type"] == "message"
        assert frame["message"]["role"] == "assistant"
        assert frame["message"]["metadata"]["intent"] == "search"
        assert len(frame["message"]["metadata"]["productRecommendations"]) == 1

    def test_invalid_frame_keeps_socket_open(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_text("not json")
            assert ws.receive_json()["type"] == "error"

            ws.send_json({"type": "join", "sessionId": "s2"})
            assert ws.receive_json()["type"] == "history"

    def test_reconnect_sees_history(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "join", "sessionId": "s3"})
            ws.receive_json()
            ws.send_json({"type": "message", "content": "Hello"})
            ws.receive_json()

        with client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "join", "sessionId": "s3"})
            frame = ws.receive_json()

        assert [m["role"] for m in frame["messages"]] == ["user", "assistant"]
        assert frame["messages"][0]["content"] == "Hello"

    def test_reasoning_failure_reports_error(self, client, llm):
        llm.error = RuntimeError("quota exceeded")
        with client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "join", "sessionId": "s4"})
            ws.receive_json()
            ws.send_json({"type": "message", "content": "Hello"})
            assert ws.receive_json() == {
                "type": "error",
                "content": "Failed to generate AI response",
            }


class TestProductRoutes:
    def test_list_and_get(self, client):
        products = client.get("/api/products").json()
        assert {p["name"] for p in products} == {c["name"] for c in CATALOG}

        response = client.get(f"/api/products/{products[0]['id']}")
        assert response.status_code == 200
        assert response.json()["id"] == products[0]["id"]

    def test_get_unknown(self, client):
        assert client.get("/api/products/missing").status_code == 404

    def test_search(self, client):
        response = client.get("/api/products/search", params={"q": "laptop"})
        assert response.status_code == 200
        assert {p["name"] for p in response.json()} == {"MacBook Pro", "Budget Laptop"}

    @pytest.mark.parametrize("params", [{}, {"q": "  "}])
    def test_search_requires_query(self, client, params):
        response = client.get("/api/products/search", params=params)
        assert response.status_code == 400
        assert response.json()["detail"] == "Query parameter required"

    def test_compare(self, client, llm):
        llm.reply = "The MacBook Pro is faster; the iPhone 15 Pro fits a pocket."
        ids = [p["id"] for p in client.get("/api/products").json()[:2]]

        response = client.post("/api/products/compare", json={"productIds": ids})

        assert response.status_code == 200
        body = response.json()
        assert body["comparison"] == llm.reply
        assert [p["id"] for p in body["products"]] == ids

    def test_compare_needs_two_ids(self, client):
        ids = [client.get("/api/products").json()[0]["id"]]
        response = client.post("/api/products/compare", json={"productIds": ids})
        assert response.status_code == 400

    def test_compare_unknown_products(self, client):
        ids = [client.get("/api/products").json()[0]["id"], "missing"]
        response = client.post("/api/products/compare", json={"productIds": ids})
        assert response.status_code == 404

    def test_compare_reasoning_unavailable(self, client, llm):
        llm.error = RuntimeError("down")
        ids = [p["id"] for p in client.get("/api/products").json()[:2]]
        response = client.post("/api/products/compare", json={"productIds": ids})
        assert response.status_code == 503
