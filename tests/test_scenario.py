"""End-to-end walk through the owner/guest flow."""


async def test_owner_and_guests_flow(client, owner, guest, other_guest):
    created = await client.post("/api/v1/wishlists", json={"name": "Birthday"}, headers=owner)
    assert created.status_code == 201
    wishlist = created.json()
    token = wishlist["shareToken"]
    assert len(token) == 64

    item = await client.post(
        f"/api/v1/wishlists/{wishlist['id']}/items",
        json={"name": "Headphones", "price": "$99.99"},
        headers=owner,
    )
    assert item.status_code == 201
    item_id = item.json()["id"]

    shared = await client.get(f"/api/v1/wishlists/shared/{token}")
    assert shared.status_code == 200
    assert shared.json()["items"][0]["claim"] is None

    claimed = await client.post(f"/api/v1/items/{item_id}/claim", headers=guest)
    assert claimed.status_code == 201

    blocked = await client.post(f"/api/v1/items/{item_id}/claim", headers=other_guest)
    assert blocked.status_code == 400
    assert blocked.json()["error"]["code"] == "ALREADY_CLAIMED"

    self_claim = await client.post(f"/api/v1/items/{item_id}/claim", headers=owner)
    assert self_claim.status_code == 400
    assert self_claim.json()["error"]["code"] == "SELF_CLAIM_FORBIDDEN"

    listed = (await client.get("/api/v1/wishlists", headers=owner)).json()
    assert listed[0]["itemCount"] == 1
    assert listed[0]["claimedCount"] == 1

    released = await client.delete(f"/api/v1/items/{item_id}/claim", headers=guest)
    assert released.status_code == 204

    reclaimed = await client.post(f"/api/v1/items/{item_id}/claim", headers=other_guest)
    assert reclaimed.status_code == 201
    assert reclaimed.json()["claimerUserId"] == "guest-2"

    deleted = await client.delete(f"/api/v1/wishlists/{wishlist['id']}", headers=owner)
    assert deleted.status_code == 204

    gone = await client.get(f"/api/v1/wishlists/shared/{token}")
    assert gone.status_code == 404

    orphan_claim = await client.delete(f"/api/v1/items/{item_id}/claim", headers=other_guest)
    assert orphan_claim.status_code == 404
