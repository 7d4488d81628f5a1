from __future__ import annotations

from fastapi.testclient import TestClient

from schach.protocol.http.app import create_app


def _game(client: TestClient, fen: str | None = None) -> str:
    payload = {"fen": fen} if fen else None
    return client.post("/api/games", json=payload).json()["game_id"]


def test_moves_for_start_pawn() -> None:
    client = TestClient(create_app())
    game_id = _game(client)
    r = client.get(f"/api/games/{game_id}/moves/e2")
    assert r.status_code == 200
    body = r.json()
    assert body["square"] == "e2"
    assert body["piece"] == "P"
    assert {m["uci"] for m in body["moves"]} == {"e2e3", "e2e4"}
    assert {m["kind"] for m in body["moves"]} == {"move"}


def test_moves_for_empty_or_opponent_square_are_empty() -> None:
    client = TestClient(create_app())
    game_id = _game(client)
    r = client.get(f"/api/games/{game_id}/moves/e4")
    assert r.json()["piece"] is None
    assert r.json()["moves"] == []
    r = client.get(f"/api/games/{game_id}/moves/e7")
    assert r.json()["piece"] == "p"
    assert r.json()["moves"] == []


def test_castle_payload() -> None:
    client = TestClient(create_app())
    game_id = _game(client, "r3k2r/8/8/8/8/8/8/R3K2R w KQkq")
    moves = client.get(f"/api/games/{game_id}/moves/e1").json()["moves"]
    castle = next(m for m in moves if m["uci"] == "e1g1")
    assert castle["kind"] == "castle"
    assert castle["rook_origin"] == "h1"
    assert castle["rook_target"] == "f1"

    take = client.get(f"/api/games/{game_id}/moves/a1").json()["moves"]
    assert {"uci": "a1a8", "kind": "take", "captured": "rook"}.items() <= next(
        m for m in take if m["uci"] == "a1a8"
    ).items()


def test_invalid_square_is_bad_request() -> None:
    client = TestClient(create_app())
    game_id = _game(client)
    r = client.get(f"/api/games/{game_id}/moves/z9")
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "bad_request"


def test_moves_unknown_game_404() -> None:
    client = TestClient(create_app())
    assert client.get("/api/games/nope/moves/e2").status_code == 404
