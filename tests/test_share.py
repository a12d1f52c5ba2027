"""Share links: unauthenticated, read-only access by exact token."""

from giftreservoir.core.security import SecurityUtils


async def test_shared_wishlist_needs_no_auth(client, owner, guest, wishlist, item):
    await client.post(f"/api/v1/items/{item['id']}/claim", headers=guest)

    response = await client.get(f"/api/v1/wishlists/shared/{wishlist['shareToken']}")

    assert response.status_code == 200
    body = response.json()
    assert body["id"] == wishlist["id"]
    assert body["name"] == "Birthday"
    assert body["itemCount"] == 1
    assert body["claimedCount"] == 1

    [entry] = body["items"]
    assert entry["claim"]["claimerUserId"] == "guest-1"
    assert entry["claim"]["claimer"]["firstName"] == "Gus"


async def test_shared_response_is_not_cached(client, wishlist):
    response = await client.get(f"/api/v1/wishlists/shared/{wishlist['shareToken']}")
    assert response.headers["Cache-Control"] == "no-store"


async def test_unknown_token_is_404(client, wishlist):
    response = await client.get(f"/api/v1/wishlists/shared/{SecurityUtils.generate_share_token()}")
    assert response.status_code == 404


async def test_token_must_match_exactly(client, wishlist):
    token = wishlist["shareToken"]

    prefix = await client.get(f"/api/v1/wishlists/shared/{token[:-1]}")
    upper = await client.get(f"/api/v1/wishlists/shared/{token.upper()}")

    assert prefix.status_code == 404
    if token.upper() != token:
        assert upper.status_code == 404


async def test_token_dies_with_wishlist(client, owner, wishlist):
    await client.delete(f"/api/v1/wishlists/{wishlist['id']}", headers=owner)

    response = await client.get(f"/api/v1/wishlists/shared/{wishlist['shareToken']}")
    assert response.status_code == 404


async def test_token_survives_updates(client, owner, wishlist):
    await client.patch(
        f"/api/v1/wishlists/{wishlist['id']}", json={"name": "Thirtieth"}, headers=owner
    )

    response = await client.get(f"/api/v1/wishlists/shared/{wishlist['shareToken']}")
    assert response.status_code == 200
    assert response.json()["name"] == "Thirtieth"
