def test_health_and_db_test(client):
    r = client.get("/api/health")
    assert r.status_code == 200
    assert r.get_json()["status"] == "ok"
    r = client.get("/api/db-test")
    assert r.status_code == 200
    data = r.get_json()
    assert data["status"] == "connected" and data["tables"] >= 10


def test_player_lifecycle(client):
    r = client.post("/api/players", json={
        "username": "ivy", "password": "secret", "email": "ivy@example.com", "coins": 50,
    })
    assert r.status_code == 201
    player_id = r.get_json()["playerId"]

    r = client.get(f"/api/players/{player_id}")
    assert r.status_code == 200
    data = r.get_json()
    assert data["username"] == "ivy" and data["coins"] == 50
    assert "password" not in data

    assert client.patch(f"/api/players/{player_id}/coins", json={"coins": 75}).status_code == 200
    assert client.patch(f"/api/players/{player_id}/lootboxes", json={"lootboxCount": 3}).status_code == 200
    assert client.get(f"/api/players/{player_id}").get_json()["lootboxCount"] == 3
    assert client.delete(f"/api/players/{player_id}").status_code == 200
    assert client.get(f"/api/players/{player_id}").status_code == 404


def test_duplicate_username_is_a_conflict(client, world):
    r = client.post("/api/players", json={"username": "alice", "password": "x", "email": "new@example.com"})
    assert r.status_code == 409
    body = r.get_json()
    assert body["kind"] == "constraint_violation" and body["constraint"] == "unique"


def test_bad_bodies(client, world):
    assert client.post("/api/players", json={"username": "x"}).status_code == 400
    assert client.post("/api/trades", data="not json", content_type="text/plain").status_code == 400
    r = client.post("/api/trades", json={"listingId": "1", "buyerId": world.bob})
    assert r.status_code == 400
    assert r.get_json()["kind"] == "bad_request"
    assert client.patch("/api/players/1/coins", json={"coins": -1}).status_code == 400


def test_trade_flow(client, world):
    r = client.post("/api/trades", json={"listingId": world.listing, "buyerId": world.bob})
    assert r.status_code == 201
    body = r.get_json()
    assert body["message"] == "Trade executed successfully"
    trade_id = body["tradeId"]

    assert client.get(f"/api/trades/{trade_id}").get_json()["buyerId"] == world.bob
    assert client.get(f"/api/listings/{world.listing}/trade").get_json()["tradeId"] == trade_id
    assert client.get(f"/api/listings/{world.listing}").get_json()["status"] == "sold"
    assert client.get(f"/api/stoves/{world.stove}").get_json()["currentOwnerId"] == world.bob
    owner = client.get(f"/api/stoves/{world.stove}/current-owner").get_json()
    assert (owner["playerId"], owner["acquiredHow"]) == (world.bob, "trade")
    assert client.get("/api/trades/count").get_json()["count"] == 1
    assert client.get(f"/api/players/{world.bob}/trades/count").get_json()["count"] == 1
    assert len(client.get("/api/trades/recent?limit=5").get_json()) == 1

    r = client.post("/api/trades", json={"listingId": world.listing, "buyerId": world.carol})
    assert r.status_code == 409
    assert r.get_json()["kind"] == "invalid_state"


def test_trade_errors(client, world):
    r = client.post("/api/trades", json={"listingId": world.listing, "buyerId": world.alice})
    assert r.status_code == 400
    assert r.get_json()["kind"] == "invalid_operation"

    r = client.post("/api/trades", json={"listingId": 999, "buyerId": world.bob})
    assert r.status_code == 404

    r = client.post("/api/trades", json={"listingId": world.listing, "buyerId": 999})
    assert r.status_code == 409
    assert r.get_json()["constraint"] == "foreign_key"
    assert client.get(f"/api/listings/{world.listing}").get_json()["status"] == "active"


def test_listing_routes(client, world):
    r = client.post("/api/listings", json={"sellerId": world.alice, "stoveId": world.stove, "price": 10})
    assert r.status_code == 409
    assert r.get_json()["constraint"] == "unique"

    r = client.post("/api/listings", json={"sellerId": world.bob, "stoveId": world.stove, "price": 10})
    assert r.status_code == 400

    assert client.patch(f"/api/listings/{world.listing}/price", json={"price": 300}).status_code == 200
    assert client.get(f"/api/stoves/{world.stove}/listing").get_json()["price"] == 300
    assert client.get(f"/api/players/{world.alice}/active-listings/count").get_json()["count"] == 1
    assert client.patch(f"/api/listings/{world.listing}/cancel").status_code == 200
    assert client.patch(f"/api/listings/{world.listing}/cancel").status_code == 409
    assert client.get("/api/listings/active").get_json() == []
    assert client.get(f"/api/stoves/{world.stove}/listing").status_code == 404

    r = client.post("/api/listings", json={"sellerId": world.alice, "stoveId": world.stove, "price": 10})
    assert r.status_code == 201


def test_stove_routes(client, world):
    r = client.post("/api/stoves", json={"typeId": world.dragon, "currentOwnerId": world.carol})
    assert r.status_code == 201
    stove_id = r.get_json()["stoveId"]
    assert client.get(f"/api/players/{world.carol}/stoves/count").get_json()["count"] == 1

    r = client.patch(f"/api/stoves/{stove_id}/owner", json={"newOwnerId": world.bob, "acquiredHow": "mini-game"})
    assert r.status_code == 200
    history = client.get(f"/api/stoves/{stove_id}/ownership-history").get_json()
    assert [h["playerId"] for h in history] == [world.carol, world.bob]
    assert client.get(f"/api/stoves/{stove_id}").get_json()["currentOwnerId"] == world.bob

    r = client.patch(f"/api/stoves/{stove_id}/owner", json={"newOwnerId": world.bob, "acquiredHow": "gift"})
    assert r.status_code == 400
    assert client.post("/api/stoves", json={"typeId": 999, "currentOwnerId": world.bob}).status_code == 404


def test_ownership_routes(client, world):
    r = client.post("/api/ownerships", json={"stoveId": world.stove, "playerId": world.carol, "acquiredHow": "mini-game"})
    assert r.status_code == 201
    ownership_id = r.get_json()["ownershipId"]
    assert client.get(f"/api/stoves/{world.stove}").get_json()["currentOwnerId"] == world.carol
    assert client.get(f"/api/stoves/{world.stove}/ownership-changes/count").get_json()["count"] == 2

    # the newest row backs the owner pointer
    assert client.delete(f"/api/ownerships/{ownership_id}").status_code == 409
    first = client.get(f"/api/players/{world.alice}/ownerships").get_json()[0]["ownershipId"]
    assert client.delete(f"/api/ownerships/{first}").status_code == 200
    assert client.get(f"/api/ownerships/{first}").status_code == 404


def test_stove_type_routes(client, world):
    r = client.post("/api/stove-types", json={
        "name": "Crystal Stove", "imageUrl": "/images/stoves/crystal.png", "rarity": "epic", "lootboxWeight": 15,
    })
    assert r.status_code == 201
    assert client.get("/api/stove-types/weight/total").get_json()["totalWeight"] == 120
    assert [t["name"] for t in client.get("/api/stove-types/rarity/epic").get_json()] == ["Crystal Stove"]
    assert client.get("/api/stove-types/rarity/mythic").status_code == 400
    r = client.post("/api/stove-types", json={
        "name": "Odd Stove", "imageUrl": "/x.png", "rarity": "mythic", "lootboxWeight": 1,
    })
    assert r.status_code == 400
    assert client.patch(f"/api/stove-types/{world.dragon}/weight", json={"lootboxWeight": 0}).status_code == 400
    assert client.patch("/api/stove-types/999/image", json={"imageUrl": "/y.png"}).status_code == 404


def test_price_history_routes(client, world):
    for price in (100, 200, 600):
        r = client.post("/api/price-history", json={"typeId": world.rusty, "salePrice": price})
        assert r.status_code == 201
    stats = client.get(f"/api/stove-types/{world.rusty}/price-stats").get_json()
    assert (stats["count"], stats["min"], stats["max"], stats["median"]) == (3, 100, 600, 200)
    assert stats["average"] == 300
    assert len(client.get(f"/api/stove-types/{world.rusty}/recent-prices?limit=2").get_json()) == 2
    assert client.get(f"/api/stove-types/{world.dragon}/price-stats").status_code == 404


def test_lootbox_routes(client, world):
    r = client.post("/api/lootboxes", json={"lootboxTypeId": world.box_type, "playerId": world.alice})
    assert r.status_code == 201
    body = r.get_json()
    assert body["message"] == "Lootbox opened successfully"
    drop = client.get(f"/api/lootboxes/{body['lootboxId']}/drops").get_json()
    assert drop["stoveId"] == body["stoveId"]
    assert len(client.get(f"/api/players/{world.alice}/lootboxes").get_json()) == 1
    assert len(client.get("/api/lootbox-types/available").get_json()) == 1

    r = client.post("/api/lootboxes", json={"lootboxTypeId": world.box_type, "playerId": world.carol})
    assert r.status_code == 409
    assert client.delete(f"/api/lootboxes/{body['lootboxId']}").status_code == 200
