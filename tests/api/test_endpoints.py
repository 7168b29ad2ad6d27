"""Tests for API endpoints."""

import pytest


@pytest.mark.asyncio
async def test_health_check(client):
    """Test health check endpoint."""
    response = await client.get("/api/health")
    assert response.status_code == 200
    assert response.json() == {"status": "healthy"}


@pytest.mark.asyncio
async def test_summary_of_fixed_sequence(client):
    """Summarize B,B,B,P,P,T supplied as run-length text."""
    response = await client.post("/api/analysis/summary", json={"outcomes": "3B2PT"})
    assert response.status_code == 200
    data = response.json()

    assert data["hands"] == 6
    assert data["counts"] == {"B": 3, "P": 2, "T": 1}
    probs = data["probabilities"]
    assert probs["B"] > probs["P"] > probs["T"]
    assert abs(sum(probs.values()) - 1.0) < 1e-9
    assert data["prediction"]["side"] == "B"
    assert data["prediction"]["tie_probability"] == probs["T"]
    assert data["house_edge"]["T"] > data["house_edge"]["B"]


@pytest.mark.asyncio
async def test_summary_of_empty_sequence(client):
    """An empty sequence returns the prior."""
    response = await client.post("/api/analysis/summary", json={"outcomes": ""})
    data = response.json()

    assert data["probabilities"] == {"B": 0.4586, "P": 0.4462, "T": 0.0952}
    assert data["confidence"] == 0
    assert data["alternation_rate"] == 0


@pytest.mark.asyncio
async def test_summary_rejects_bad_text(client):
    response = await client.post("/api/analysis/summary", json={"outcomes": "BXP"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_history_flow(client, session_id):
    """Record, undo and summarize outcomes in a session."""
    headers = {"X-Session-ID": session_id}

    for letter in ["B", "P", "B", "P"]:
        response = await client.post("/api/history/outcome", json={"outcome": letter}, headers=headers)
        assert response.status_code == 200

    data = (await client.get("/api/history", headers=headers)).json()
    assert data["outcomes"] == ["B", "P", "B", "P"]
    assert data["hands"] == 4

    summary = (await client.get("/api/history/summary", headers=headers)).json()
    assert summary["alternation_rate"] == 1.0

    data = (await client.post("/api/history/undo", headers=headers)).json()
    assert data["outcomes"] == ["B", "P", "B"]


@pytest.mark.asyncio
async def test_history_import_export(client, session_id):
    headers = {"X-Session-ID": session_id}

    response = await client.post("/api/history/import", json={"text": "3B2PT"}, headers=headers)
    assert response.json()["hands"] == 6

    response = await client.get("/api/history/export", headers=headers)
    assert response.json() == {"text": "3B2PT"}

    response = await client.post(
        "/api/history/import", json={"text": "PP", "replace": True}, headers=headers
    )
    assert response.json()["encoded"] == "2P"

    response = await client.post("/api/history/import", json={"text": "B?"}, headers=headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_history_clear(client, session_id):
    headers = {"X-Session-ID": session_id}
    await client.post("/api/history/import", json={"text": "BPT"}, headers=headers)

    response = await client.delete("/api/history", headers=headers)
    assert response.json()["outcomes"] == []


@pytest.mark.asyncio
async def test_history_roads(client, session_id):
    headers = {"X-Session-ID": session_id}
    await client.post("/api/history/import", json={"text": "BBPTP"}, headers=headers)

    data = (await client.get("/api/history/roads", headers=headers)).json()

    assert len(data["bead_plate"]) == 6
    assert len(data["bead_plate"][0]) == 30
    assert [row[0] for row in data["bead_plate"]][:5] == ["B", "B", "P", "T", "P"]
    assert data["streak_columns"][0][:2] == ["B", "P"]
    assert data["streak_columns"][1][:2] == ["B", "P"]


@pytest.mark.asyncio
async def test_unknown_session(client):
    response = await client.get("/api/history", headers={"X-Session-ID": "nope"})
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_invalid_outcome_letter(client, session_id):
    response = await client.post(
        "/api/history/outcome", json={"outcome": "X"}, headers={"X-Session-ID": session_id}
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_simulate_shoe(client):
    payload = {"hands": 50, "bet_unit": 10, "bankroll": 1000, "system": "flat", "seed": 1}
    response = await client.post("/api/simulation/shoe", json=payload)
    assert response.status_code == 200
    data = response.json()

    assert data["hands_played"] == 50
    assert len(data["outcomes"]) == 50
    assert data["bust"] is False
    assert data["peak_bankroll"] >= 1000

    again = await client.post("/api/simulation/shoe", json=payload)
    assert again.json() == data


@pytest.mark.asyncio
async def test_simulate_shoe_with_bias(client):
    payload = {"hands": 20, "bias": {"B": 1.0, "P": 0.0, "T": 0.0}, "seed": 3}
    data = (await client.post("/api/simulation/shoe", json=payload)).json()

    assert data["outcomes"] == ["B"] * 20
    # Always on Banker, always winning at 0.95
    assert data["final_bankroll"] == pytest.approx(1000 + 20 * 9.5)


@pytest.mark.asyncio
async def test_simulate_batch(client):
    payload = {"runs": 40, "hands": 60, "bet_unit": 10, "bankroll": 200, "system": "martingale", "seed": 8}
    response = await client.post("/api/simulation/batch", json=payload)
    assert response.status_code == 200
    data = response.json()

    assert data["runs"] == 40
    assert data["bust_rate"] == data["busts"] / data["runs"]
    assert data["worst_final"] <= data["average_final"] <= data["best_final"]


@pytest.mark.asyncio
async def test_simulate_batch_zero_runs(client):
    response = await client.post("/api/simulation/batch", json={"runs": 0})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_simulate_rejects_negative_bankroll(client):
    response = await client.post("/api/simulation/shoe", json={"bankroll": -5})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_simulate_rejects_bad_bias(client):
    response = await client.post("/api/simulation/shoe", json={"bias": {"B": 0.9, "P": 0.9}})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_summary_rejects_oversized_run(client):
    response = await client.post("/api/analysis/summary", json={"outcomes": "2000000000B"})
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_import_rejects_oversized_run(client, session_id):
    headers = {"X-Session-ID": session_id}
    response = await client.post(
        "/api/history/import", json={"text": "5000000B"}, headers=headers
    )
    assert response.status_code == 400

    history = (await client.get("/api/history", headers=headers)).json()
    assert history["hands"] == 0
