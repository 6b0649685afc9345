"""Integration tests for the hotel reviews router."""

import pytest


async def test_reviews_empty(client):
    resp = await client.get("/api/hotels/1/reviews")
    assert resp.status_code == 200
    assert resp.json() == []


async def test_post_and_list_reviews(client):
    first = await client.post(
        "/api/hotels/1/reviews",
        json={"content": "Great stay", "rating": 5, "userId": "u1", "userName": "Pema"},
    )
    assert first.status_code == 201
    second = await client.post(
        "/api/hotels/1/reviews", json={"content": "Cold nights", "rating": 4}
    )
    assert second.status_code == 201

    reviews = (await client.get("/api/hotels/1/reviews")).json()
    assert [r["content"] for r in reviews] == ["Cold nights", "Great stay"]
    assert reviews[1]["userName"] == "Pema"
    assert "createdAt" in reviews[0]


async def test_review_invalid_rating(client):
    resp = await client.post("/api/hotels/1/reviews", json={"content": "?", "rating": 0})
    assert resp.status_code == 400
    assert resp.json()["success"] is False
    assert resp.json()["message"].startswith("body.rating:")


async def test_review_file_per_hotel(client, mock_env):
    await client.post("/api/hotels/42/reviews", json={"content": "ok", "rating": 3})
    assert (mock_env / "data" / "reviews" / "hotel_42_reviews.txt").exists()


async def test_review_bad_hotel_key(client):
    resp = await client.get("/api/hotels/bad.key/reviews")
    assert resp.status_code == 400


@pytest.fixture
async def strict_client(monkeypatch, client):
    # Rebuild the app state with referential checks switched on
    from basecamp.main import app, lifespan

    monkeypatch.setenv("ENFORCE_HOTEL_REFERENCE", "true")
    async with lifespan(app):
        yield client


async def test_unknown_hotel_rejected_when_enforced(strict_client):
    resp = await strict_client.post(
        "/api/hotels/12345/reviews", json={"content": "ghost", "rating": 2}
    )
    assert resp.status_code == 404
