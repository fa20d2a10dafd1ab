"""Tests for the HTTP API."""

import pytest
from fastapi.testclient import TestClient

from api.main import app


@pytest.fixture
def client():
    """A client on a freshly reset game with no automated side."""
    with TestClient(app) as client:
        client.post("/ai-role", json={"role": None})
        client.post("/reset")
        yield client


class TestBoardEndpoints:
    """Tests for the static board endpoints."""

    def test_health(self, client: TestClient) -> None:
        assert client.get("/health").json() == {"status": "ok"}

    def test_board(self, client: TestClient) -> None:
        data = client.get("/board").json()
        assert len(data["nodes"]) == 23
        assert {"node": 1, "x": 200, "y": 30} in data["nodes"]
        assert [11, 10] in data["edges"]
        assert [10, 11] not in data["edges"]


class TestGameEndpoints:
    """Tests for playing through the API."""

    def test_initial_game(self, client: TestClient) -> None:
        data = client.get("/game").json()
        assert data["turn"] == "goat"
        assert data["goats_placed"] == 0
        assert data["goats_to_place"] == 15
        assert data["result"] == "ongoing"
        assert data["status"] == "Place goat (1/15)"
        assert data["last_move"] is None
        assert sorted(p["node"] for p in data["pieces"]) == [2, 3, 5]

    def test_targets(self, client: TestClient) -> None:
        assert client.get("/targets/5").json() == {"node": 5, "targets": [4, 6, 8, 9]}
        assert client.get("/targets/1").json()["targets"] == []

    def test_place(self, client: TestClient) -> None:
        response = client.post("/place", json={"node": 1})
        assert response.status_code == 200

        data = response.json()
        assert data["goats_placed"] == 1
        assert data["turn"] == "tiger"
        goats = [p for p in data["pieces"] if p["role"] == "goat"]
        assert goats == [{"id": 4, "role": "goat", "node": 1, "x": 200, "y": 30}]

    def test_place_on_occupied_node(self, client: TestClient) -> None:
        response = client.post("/place", json={"node": 2})
        assert response.status_code == 409
        assert response.json()["detail"] == "Illegal move"
        assert client.get("/game").json()["goats_placed"] == 0

    def test_node_out_of_range(self, client: TestClient) -> None:
        assert client.post("/place", json={"node": 0}).status_code == 422
        assert client.post("/click", json={"node": 24}).status_code == 422

    def test_move(self, client: TestClient) -> None:
        client.post("/place", json={"node": 1})
        response = client.post("/move", json={"from_node": 5, "to_node": 9})
        assert response.status_code == 200

        data = response.json()
        # One goat on the board: tigers win as soon as they move
        assert data["result"] == "tiger_wins"
        assert data["status"] == "Tigers win!"
        assert data["last_move"]["from_node"] == 5
        assert data["last_move"]["to_node"] == 9
        assert data["last_move"]["kind"] == "move"
        assert data["last_move"]["role"] == "tiger"

        response = client.post("/place", json={"node": 7})
        assert response.status_code == 409
        assert response.json()["detail"] == "Game is already over"

    def test_illegal_move(self, client: TestClient) -> None:
        client.post("/place", json={"node": 1})
        response = client.post("/move", json={"from_node": 5, "to_node": 20})
        assert response.status_code == 409
        assert client.get("/game").json()["turn"] == "tiger"

    def test_click_flow(self, client: TestClient) -> None:
        data = client.post("/click", json={"node": 1}).json()
        assert data["turn"] == "tiger"

        data = client.post("/click", json={"node": 5}).json()
        assert data["selected_node"] == 5
        assert data["valid_targets"] == [4, 6, 8, 9]

        data = client.post("/click", json={"node": 20}).json()
        assert data["selected_node"] is None
        assert data["valid_targets"] == []
        assert data["turn"] == "tiger"

    def test_reset(self, client: TestClient) -> None:
        client.post("/place", json={"node": 1})
        data = client.post("/reset").json()
        assert data["goats_placed"] == 0
        assert data["turn"] == "goat"


class TestAutomatedSide:
    """Tests for the automated-side endpoints."""

    def test_ai_role(self, client: TestClient) -> None:
        data = client.post("/ai-role", json={"role": "goat"}).json()
        assert data["ai_role"] == "goat"

        response = client.post("/place", json={"node": 1})
        assert response.status_code == 409
        assert response.json()["detail"] == "The goat side is played automatically"

        assert client.post("/ai-role", json={"role": "nobody"}).status_code == 422

    def test_ai_move_advances_game(self, client: TestClient) -> None:
        client.post("/ai-role", json={"role": "goat"})
        response = client.post("/ai-move")
        assert response.status_code == 200

        data = response.json()
        # First legal placement is the lowest empty node
        assert data["goats_placed"] == 1
        assert data["turn"] == "tiger"
        assert [p["node"] for p in data["pieces"] if p["role"] == "goat"] == [1]

        # Now the human tigers can answer
        assert client.post("/move", json={"from_node": 5, "to_node": 9}).status_code == 200

    def test_ai_move_needs_automated_turn(self, client: TestClient) -> None:
        response = client.post("/ai-move")
        assert response.status_code == 409
        assert response.json()["detail"] == "It is not the automated side's turn"

        client.post("/ai-role", json={"role": "tiger"})
        assert client.post("/ai-move").status_code == 409
        assert client.get("/game").json()["goats_placed"] == 0

    def test_ai_move_after_game_over(self, client: TestClient) -> None:
        client.post("/place", json={"node": 1})
        client.post("/move", json={"from_node": 5, "to_node": 9})
        client.post("/ai-role", json={"role": "goat"})

        response = client.post("/ai-move")
        assert response.status_code == 409
        assert response.json()["detail"] == "Game is already over"
